"""API request/response models.

Separate from domain models to allow different validation rules.
"""

from pydantic import BaseModel, Field

from stem_verifier.domain.models import (
    Correction,
    Domain,
    TestCase,
    VerificationMethod,
    VerificationPayload,
    VerificationRequest,
    VerificationResult,
)


class VerifyRequest(BaseModel):
    """Request model for verifying one AI-generated answer.

    The domain selects the verifier:
    - **MATH**: arithmetic or symbolic math (Wolfram Alpha when configured)
    - **CHEMISTRY**: chemical equation balancing
    - **CODE**: sandbox execution (Judge0 when configured) or syntax linting
    """

    content: str = Field(
        max_length=100000,
        description=(
            "Answer to verify: a math expression or request, a chemical equation, "
            "or code (optionally in a fenced markdown block naming its language)"
        ),
        examples=["12 * 4", "Balance 2H2 + O2 -> 2H2O", "```python\nprint(1 + 1)\n```"],
    )
    domain: Domain = Field(description="Verification domain: MATH, CHEMISTRY or CODE")
    test_cases: list[TestCase] | None = Field(
        default=None,
        description="Optional stdin/expected-output pairs for CODE; only the first is run",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"content": "12 * 4", "domain": "MATH"},
                {"content": "2H2 + O2 -> 2H2O", "domain": "CHEMISTRY"},
                {
                    "content": "```python\nprint(input()[::-1])\n```",
                    "domain": "CODE",
                    "test_cases": [{"input": "abc", "expected_output": "cba"}],
                },
            ]
        }
    }

    def to_domain(self) -> VerificationRequest:
        return VerificationRequest(
            content=self.content, domain=self.domain, test_cases=self.test_cases
        )


class VerifyResponse(BaseModel):
    """Response model carrying the engine's verdict.

    ``verified`` is true only when correctness was positively confirmed;
    absence of disproof is reported as ``verified: false``.
    """

    verified: bool = Field(description="Whether the answer was positively confirmed")
    method: VerificationMethod = Field(description="Verifier that produced the verdict")
    input: str = Field(description="Echo of the submitted content")
    result: VerificationPayload | None = Field(
        default=None,
        description=(
            "Domain-specific payload tagged by 'kind': math_pods, arithmetic, balance, "
            "sandbox or syntax_check"
        ),
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description=(
            "1.0 for exact local computation or an accepted sandbox run, 0.9-0.95 for other "
            "oracle-backed or parsed results, at most 0.6 for heuristics, 0 for failures"
        ),
    )
    error_message: str | None = Field(default=None, description="Why verification failed")
    corrections: list[Correction] | None = Field(default=None, description="Suggested fixes")
    execution_time_ms: int = Field(ge=0, description="Engine processing time in milliseconds")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "verified": True,
                    "method": "CHEMISTRY",
                    "input": "2H2 + O2 -> 2H2O",
                    "result": {
                        "kind": "balance",
                        "balanced": True,
                        "reactant_atoms": {"H": 4, "O": 2},
                        "product_atoms": {"H": 4, "O": 2},
                    },
                    "confidence": 0.9,
                    "error_message": None,
                    "corrections": None,
                    "execution_time_ms": 1,
                }
            ]
        }
    }

    @classmethod
    def from_domain(cls, result: VerificationResult) -> "VerifyResponse":
        """Convert domain VerificationResult to API response."""
        return cls(
            verified=result.verified,
            method=result.method,
            input=result.input,
            result=result.result,
            confidence=result.confidence,
            error_message=result.error_message,
            corrections=result.corrections,
            execution_time_ms=result.execution_time_ms,
        )


class BatchVerifyRequest(BaseModel):
    """Request model for verifying several answers at once."""

    items: list[VerifyRequest] = Field(
        min_length=1, max_length=100, description="Items to verify (1-100)"
    )


class BatchVerifyResponse(BaseModel):
    """Batch verdicts, index-aligned with the request items."""

    results: list[VerifyResponse] = Field(description="One verdict per request item, same order")


class ErrorResponse(BaseModel):
    """Error response model for unexpected failures of the HTTP layer itself."""

    error: str = Field(description="Human-readable error message")
    details: dict | None = Field(default=None, description="Additional structured details")
