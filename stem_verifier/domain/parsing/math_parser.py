"""Classification of natural-language math requests."""

import logging
import re

from stem_verifier.domain.models import MathOperation, MathQuery

logger = logging.getLogger(__name__)


class MathExpressionParser:
    """Splits a math request into an operation and the bare expression.

    Keywords are searched anywhere in the lower-cased content and the first
    rule that matches wins, in this order: simplify, solve, integrate,
    differentiate, verify. Anything else is a plain evaluation.
    """

    _OPERATION_KEYWORDS: tuple[tuple[MathOperation, tuple[str, ...]], ...] = (
        (MathOperation.SIMPLIFY, ("simplify",)),
        (MathOperation.SOLVE, ("solve", "find x")),
        (MathOperation.INTEGRATE, ("integral", "integrate")),
        (MathOperation.DIFFERENTIATE, ("derivative", "differentiate")),
        (MathOperation.VERIFY, ("verify", "check")),
    )

    _LEADING_VERB = re.compile(
        r"^(simplify|solve|integrate|differentiate|evaluate|verify|calculate|compute)\s*",
        re.IGNORECASE,
    )
    _LEADING_ARTICLE = re.compile(r"^(the|this)\s+", re.IGNORECASE)

    def parse(self, content: str) -> MathQuery:
        """Classify content and extract its expression.

        Args:
            content: Free-form math request, e.g. "Simplify the x^2 + 2x + 1"

        Returns:
            MathQuery with the detected operation and the stripped expression
        """
        lowered = content.lower()
        operation = MathOperation.EVALUATE

        for candidate, keywords in self._OPERATION_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                operation = candidate
                break

        expression = self._LEADING_VERB.sub("", content.strip(), count=1)
        expression = self._LEADING_ARTICLE.sub("", expression, count=1).strip()

        logger.debug(f"Parsed math query: operation={operation.value}, expression={expression!r}")
        return MathQuery(expression=expression, operation=operation)
