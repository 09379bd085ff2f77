"""Math verification: symbolic-math oracle when configured, exact arithmetic otherwise."""

import logging
from typing import TYPE_CHECKING

from stem_verifier.domain.checks.arithmetic import ArithmeticFallback
from stem_verifier.domain.exceptions import TransportError
from stem_verifier.domain.models import (
    MathPodsPayload,
    MathQuery,
    VerificationMethod,
    VerificationResult,
)
from stem_verifier.domain.parsing.math_parser import MathExpressionParser
from stem_verifier.shared.result import Err, Ok

if TYPE_CHECKING:
    from stem_verifier.domain.protocols import MathOracle

logger = logging.getLogger(__name__)

ORACLE_CONFIDENCE = 0.95
ARITHMETIC_CONFIDENCE = 1.0


class MathVerifier:
    """Verifies math content with exactly one method per call.

    The method is fixed at construction: with an oracle every query goes to
    the oracle and an oracle failure is reported as such, never retried
    locally; without one only single binary arithmetic can be verified.
    """

    def __init__(
        self,
        oracle: "MathOracle | None" = None,
        parser: MathExpressionParser | None = None,
        fallback: ArithmeticFallback | None = None,
    ):
        """Initialize math verifier.

        Args:
            oracle: Symbolic-math oracle, or None for the local arithmetic fallback
            parser: Request classifier (default MathExpressionParser)
            fallback: Local evaluator (default ArithmeticFallback)
        """
        self.oracle = oracle
        self.parser = parser or MathExpressionParser()
        self.fallback = fallback or ArithmeticFallback()
        self._strategy = self._verify_with_oracle if oracle is not None else self._verify_locally

        logger.info(f"MathVerifier initialized (oracle={'yes' if oracle is not None else 'no'})")

    @property
    def uses_oracle(self) -> bool:
        return self.oracle is not None

    async def verify(self, content: str) -> VerificationResult:
        query = self.parser.parse(content)
        logger.info(
            f"Verifying math (operation={query.operation.value}, "
            f"method={'oracle' if self.uses_oracle else 'arithmetic'})"
        )
        return await self._strategy(content, query)

    async def _verify_with_oracle(self, content: str, query: MathQuery) -> VerificationResult:
        if not query.expression:
            return VerificationResult.failure(
                VerificationMethod.MATH, content, "No mathematical expression to verify"
            )

        try:
            pods = await self.oracle.query(query.expression)
        except TransportError as e:
            logger.warning(f"Math oracle failed: {e}")
            return VerificationResult.failure(VerificationMethod.MATH, content, str(e))

        if pods is None:
            return VerificationResult.failure(
                VerificationMethod.MATH, content, "Wolfram Alpha could not process the query"
            )

        return VerificationResult(
            verified=True,
            method=VerificationMethod.MATH,
            input=content,
            result=MathPodsPayload(pods=pods),
            confidence=ORACLE_CONFIDENCE,
        )

    async def _verify_locally(self, content: str, query: MathQuery) -> VerificationResult:
        match self.fallback.evaluate(query.expression):
            case Ok(payload):
                logger.info(f"Arithmetic fallback verified {payload.expression} = {payload.value}")
                return VerificationResult(
                    verified=True,
                    method=VerificationMethod.MATH,
                    input=content,
                    result=payload,
                    confidence=ARITHMETIC_CONFIDENCE,
                )
            case Err(error):
                return VerificationResult.failure(
                    VerificationMethod.MATH,
                    content,
                    f"Could not verify basic math ({error}) - "
                    "requires Wolfram API for complex expressions",
                )
