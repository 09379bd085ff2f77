"""Verification service: the engine's single public entry point.

This is the application layer that routes each request to its domain verifier,
stamps timing, and turns every failure into a result.
"""

import asyncio
import logging
import time
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from stem_verifier.domain.models import (
    Domain,
    TestCase,
    VerificationMethod,
    VerificationRequest,
    VerificationResult,
)
from stem_verifier.domain.verifiers.chemistry_verifier import ChemistryVerifier
from stem_verifier.domain.verifiers.code_verifier import CodeVerifier
from stem_verifier.domain.verifiers.math_verifier import MathVerifier
from stem_verifier.infrastructure.judge0.client import Judge0Client
from stem_verifier.infrastructure.wolfram.client import WolframAlphaClient

if TYPE_CHECKING:
    from stem_verifier.domain.protocols import MathOracle, SandboxOracle
    from stem_verifier.shared.config import Settings

logger = logging.getLogger(__name__)

BatchItem = VerificationRequest | Mapping[str, Any]


class VerificationService:
    """Routes verification requests by domain and never raises.

    The service holds only its verifiers and a concurrency bound, both fixed
    at construction, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        math_verifier: MathVerifier | None = None,
        chemistry_verifier: ChemistryVerifier | None = None,
        code_verifier: CodeVerifier | None = None,
        max_concurrency: int = 8,
    ):
        """Initialize verification service.

        Args:
            math_verifier: Math verifier (default: local arithmetic only)
            chemistry_verifier: Chemistry verifier
            code_verifier: Code verifier (default: local linter only)
            max_concurrency: Maximum batch items verified at the same time
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.math_verifier = math_verifier or MathVerifier()
        self.chemistry_verifier = chemistry_verifier or ChemistryVerifier()
        self.code_verifier = code_verifier or CodeVerifier()
        self.max_concurrency = max_concurrency

        logger.info(
            f"VerificationService initialized (math_oracle={self.math_verifier.uses_oracle}, "
            f"sandbox={self.code_verifier.uses_sandbox}, max_concurrency={max_concurrency})"
        )

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        math_oracle: "MathOracle | None" = None,
        sandbox: "SandboxOracle | None" = None,
    ) -> "VerificationService":
        """Build a service whose oracles are chosen by credential presence.

        Explicitly passed oracles take precedence over the ones the settings
        would create, which lets tests inject fakes.
        """
        if math_oracle is None and settings.math_oracle_configured:
            math_oracle = WolframAlphaClient(
                app_id=settings.wolfram_app_id,
                base_url=settings.wolfram_base_url,
                timeout=settings.oracle_timeout,
            )
        if sandbox is None and settings.sandbox_configured:
            sandbox = Judge0Client(
                api_key=settings.judge0_api_key,
                base_url=settings.judge0_base_url,
                timeout=settings.oracle_timeout,
                poll_interval=settings.sandbox_poll_interval,
                max_polls=settings.sandbox_max_polls,
            )

        return cls(
            math_verifier=MathVerifier(oracle=math_oracle),
            chemistry_verifier=ChemistryVerifier(),
            code_verifier=CodeVerifier(sandbox=sandbox),
            max_concurrency=settings.batch_max_concurrency,
        )

    async def verify(
        self,
        content: str,
        domain: Domain | str,
        *,
        test_cases: list[TestCase] | None = None,
    ) -> VerificationResult:
        """Verify one piece of content.

        Args:
            content: Text, markdown or code to verify
            domain: MATH, CHEMISTRY or CODE (strings are accepted case-insensitively)
            test_cases: Optional test cases, used by CODE only

        Returns:
            VerificationResult with ``execution_time_ms`` set; failures of any
            kind come back as ``verified=False`` results, never as exceptions
        """
        start = time.perf_counter()
        content = _echo(content)
        resolved = _resolve_domain(domain)

        try:
            result = await self._dispatch(content, resolved, domain, test_cases)
        except Exception as e:
            logger.error(f"Verification raised unexpectedly (domain={domain!r}): {e}", exc_info=True)
            result = VerificationResult.failure(
                VerificationMethod(resolved.value) if resolved else VerificationMethod.NONE,
                content,
                str(e) or e.__class__.__name__,
            )

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"Verification finished (method={result.method.value}, verified={result.verified}, "
            f"confidence={result.confidence}, time_ms={elapsed_ms})"
        )
        return result.model_copy(update={"execution_time_ms": elapsed_ms})

    async def verify_batch(self, items: Sequence[BatchItem]) -> list[VerificationResult]:
        """Verify many items concurrently.

        Items run as independent tasks, at most ``max_concurrency`` at a time.
        The returned list is index-aligned with ``items`` whatever order the
        tasks finish in.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)
        logger.info(f"Starting batch verification (items={len(items)})")

        async def run(item: BatchItem) -> VerificationResult:
            async with semaphore:
                if isinstance(item, VerificationRequest):
                    return await self.verify(item.content, item.domain, test_cases=item.test_cases)
                if isinstance(item, Mapping):
                    return await self.verify(
                        item.get("content", ""),
                        item.get("domain"),
                        test_cases=item.get("test_cases"),
                    )
                return await self.verify(item, None)

        return list(await asyncio.gather(*(run(item) for item in items)))

    async def _dispatch(
        self,
        content: str,
        domain: Domain | None,
        requested: object,
        test_cases: list[TestCase] | None,
    ) -> VerificationResult:
        match domain:
            case Domain.MATH:
                return await self.math_verifier.verify(content)
            case Domain.CHEMISTRY:
                return await self.chemistry_verifier.verify(content)
            case Domain.CODE:
                return await self.code_verifier.verify(content, test_cases=_test_cases(test_cases))
            case None:
                return VerificationResult.failure(
                    VerificationMethod.NONE, content, f"Unknown verification type: {requested!r}"
                )


def _resolve_domain(domain: object) -> Domain | None:
    if isinstance(domain, Domain):
        return domain
    if isinstance(domain, str):
        try:
            return Domain(domain.strip().upper())
        except ValueError:
            return None
    return None


def _echo(content: object) -> str:
    """Content as a str that is safe to serialize (lone surrogates replaced)."""
    text = content if isinstance(content, str) else ("" if content is None else repr(content))
    return text.encode("utf-8", errors="replace").decode("utf-8")


def _test_cases(test_cases: Sequence[TestCase | Mapping[str, Any]] | None) -> list[TestCase] | None:
    if not test_cases:
        return None
    return [case if isinstance(case, TestCase) else TestCase.model_validate(case) for case in test_cases]
