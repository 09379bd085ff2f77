"""Code verification: sandbox execution when configured, shallow linting otherwise."""

import logging
from typing import TYPE_CHECKING

from stem_verifier.domain.checks.syntax_linter import SyntaxLinter
from stem_verifier.domain.exceptions import TransportError, UnsupportedOperationError
from stem_verifier.domain.models import (
    CodeQuery,
    Language,
    SyntaxCheckPayload,
    TestCase,
    VerificationMethod,
    VerificationResult,
)
from stem_verifier.domain.parsing.code_extractor import CodeBlockExtractor

if TYPE_CHECKING:
    from stem_verifier.domain.protocols import SandboxOracle

logger = logging.getLogger(__name__)

SANDBOX_STATUS_ACCEPTED = 3

ACCEPTED_CONFIDENCE = 1.0
REJECTED_CONFIDENCE = 0.5
LINT_CONFIDENCE = 0.6


class CodeVerifier:
    """Verifies code with the sandbox when one is configured, else with the linter."""

    def __init__(
        self,
        sandbox: "SandboxOracle | None" = None,
        extractor: CodeBlockExtractor | None = None,
        linter: SyntaxLinter | None = None,
    ):
        """Initialize code verifier.

        Args:
            sandbox: Execution sandbox, or None for the local syntax linter
            extractor: Fenced-code extractor (default CodeBlockExtractor)
            linter: Fallback linter (default SyntaxLinter)
        """
        self.sandbox = sandbox
        self.extractor = extractor or CodeBlockExtractor()
        self.linter = linter or SyntaxLinter()
        self._strategy = self._verify_in_sandbox if sandbox is not None else self._verify_with_linter

        logger.info(f"CodeVerifier initialized (sandbox={'yes' if sandbox is not None else 'no'})")

    @property
    def uses_sandbox(self) -> bool:
        return self.sandbox is not None

    async def verify(
        self, content: str, test_cases: list[TestCase] | None = None
    ) -> VerificationResult:
        query = self.extractor.extract(content, test_cases)

        if query.language is None:
            supported = ", ".join(language.value for language in Language)
            error = UnsupportedOperationError(
                f"Language {query.unsupported_language!r} is not supported (supported: {supported})"
            )
            logger.info(f"Rejecting code verification: {error}")
            return VerificationResult.failure(VerificationMethod.CODE, content, str(error))

        if not query.code.strip():
            return VerificationResult.failure(
                VerificationMethod.CODE, content, "No code found to verify"
            )

        logger.info(
            f"Verifying {query.language.value} code "
            f"(method={'sandbox' if self.uses_sandbox else 'linter'}, "
            f"test_cases={len(query.test_cases)})"
        )
        return await self._strategy(content, query)

    async def _verify_in_sandbox(self, content: str, query: CodeQuery) -> VerificationResult:
        test_case = query.test_cases[0] if query.test_cases else None

        try:
            status_id, payload = await self.sandbox.run(query.code, query.language, test_case)
        except (TransportError, UnsupportedOperationError) as e:
            logger.warning(f"Sandbox failed: {e}")
            return VerificationResult.failure(VerificationMethod.CODE, content, str(e))

        passed = status_id == SANDBOX_STATUS_ACCEPTED
        error_message = payload.stderr or payload.compile_output
        if not passed and not error_message:
            error_message = f"Submission was not accepted: {payload.status or 'unknown status'}"

        return VerificationResult(
            verified=passed,
            method=VerificationMethod.CODE,
            input=content,
            result=payload,
            confidence=ACCEPTED_CONFIDENCE if passed else REJECTED_CONFIDENCE,
            error_message=error_message,
        )

    async def _verify_with_linter(self, content: str, query: CodeQuery) -> VerificationResult:
        issues = self.linter.lint(query.code, query.language)

        return VerificationResult(
            verified=not issues,
            method=VerificationMethod.CODE,
            input=content,
            result=SyntaxCheckPayload(language=query.language, issues=issues),
            confidence=LINT_CONFIDENCE,
            error_message="; ".join(issues) if issues else None,
        )
