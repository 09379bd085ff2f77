"""Verification API routes.

Endpoints for checking AI-generated STEM answers before they reach a learner.
"""

import logging

from fastapi import APIRouter, Depends

from stem_verifier.api.dependencies import get_verification_service
from stem_verifier.api.models import (
    BatchVerifyRequest,
    BatchVerifyResponse,
    ErrorResponse,
    VerifyRequest,
    VerifyResponse,
)
from stem_verifier.application.verification_service import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verification", tags=["verification"])


@router.post(
    "/verify",
    response_model=VerifyResponse,
    status_code=200,
    summary="Verify one math, chemistry or code answer",
    description="""
    Check a single answer against ground truth.

    - **MATH**: sent to Wolfram Alpha when an app id is configured; otherwise a
      single binary arithmetic expression (`12 * 4`) is evaluated exactly.
    - **CHEMISTRY**: equations are checked for atom balance; other chemistry
      questions are reported as unsupported.
    - **CODE**: run in Judge0 when an API key is configured; otherwise linted for
      a few common syntax mistakes.

    A failed verification is still a 200 response: check `verified`,
    `confidence` and `error_message`.
    """,
    responses={500: {"model": ErrorResponse, "description": "Unexpected server error"}},
)
async def verify(
    request: VerifyRequest,
    service: VerificationService = Depends(get_verification_service),
) -> VerifyResponse:
    """Verify a single answer and return the engine's verdict."""
    logger.info(f"Verify request (domain={request.domain.value}, content_length={len(request.content)})")

    result = await service.verify(request.content, request.domain, test_cases=request.test_cases)
    return VerifyResponse.from_domain(result)


@router.post(
    "/batch",
    response_model=BatchVerifyResponse,
    status_code=200,
    summary="Verify several answers concurrently",
    description="""
    Verify up to 100 answers at once. Items are processed concurrently with a
    configurable bound (`BATCH_MAX_CONCURRENCY`); `results[i]` always belongs
    to `items[i]`.
    """,
    responses={500: {"model": ErrorResponse, "description": "Unexpected server error"}},
)
async def verify_batch(
    request: BatchVerifyRequest,
    service: VerificationService = Depends(get_verification_service),
) -> BatchVerifyResponse:
    """Verify every item and return verdicts in request order."""
    logger.info(f"Batch verify request (items={len(request.items)})")

    results = await service.verify_batch([item.to_domain() for item in request.items])
    return BatchVerifyResponse(results=[VerifyResponse.from_domain(result) for result in results])
