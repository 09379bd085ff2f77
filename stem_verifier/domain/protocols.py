"""Protocol definitions for dependency inversion.

The verifiers depend on these abstractions; infrastructure clients implement
them, and tests substitute fakes without touching configuration.
"""

from typing import Protocol

from stem_verifier.domain.models import (
    Language,
    SandboxPayload,
    TestCase,
)


class MathOracle(Protocol):
    """Protocol for the external symbolic-math engine."""

    async def query(self, expression: str) -> dict[str, str] | None:
        """Send an expression to the oracle.

        Args:
            expression: Bare mathematical expression (not yet URL-encoded)

        Returns:
            Mapping of pod title to plaintext when the oracle reports success,
            None when it answered but could not interpret the expression

        Raises:
            TransportError: If the oracle is unreachable or answers non-2xx
        """
        ...


class SandboxOracle(Protocol):
    """Protocol for the external code execution sandbox."""

    async def run(
        self, code: str, language: Language, test_case: TestCase | None = None
    ) -> tuple[int, SandboxPayload]:
        """Execute code and wait for the verdict.

        Args:
            code: Source code to execute
            language: Language to run it as
            test_case: Optional stdin / expected stdout

        Returns:
            Tuple of (status id, normalized verdict payload)

        Raises:
            TransportError: If the sandbox is unreachable or answers non-2xx
            UnsupportedOperationError: If the sandbox has no id for the language
        """
        ...
