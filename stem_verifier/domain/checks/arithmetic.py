"""Local evaluation of single binary arithmetic expressions."""

import logging
import math
import operator
import re
from collections.abc import Callable

from stem_verifier.domain.exceptions import ParseError
from stem_verifier.domain.models import ArithmeticPayload
from stem_verifier.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def _divide(a: float, b: float) -> float:
    return a / b if b != 0 else math.nan


class ArithmeticFallback:
    """Evaluates the first ``<number> <op> <number>`` found in the content.

    Only ``+ - * / ^`` between two unsigned decimal literals are understood.
    Anything longer is left to the symbolic-math oracle.
    """

    # A match may not start inside a number
    _BINARY = re.compile(r"(?<![\d.])(\d+(?:\.\d+)?)\s*([+\-*/^])\s*(\d+(?:\.\d+)?)")

    _OPERATORS: dict[str, Callable[[float, float], float]] = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": _divide,
        "^": operator.pow,
    }

    def evaluate(self, content: str) -> Result[ArithmeticPayload, ParseError]:
        """Compute the binary expression embedded in content.

        Returns:
            Ok(ArithmeticPayload) with a finite value
            Err(ParseError) if no expression matched or the value is not finite
        """
        match = self._BINARY.search(content)
        if match is None:
            return Err(ParseError("No simple binary arithmetic expression found", fragment=content))

        left, symbol, right = match.groups()
        expression = f"{left} {symbol} {right}"

        try:
            value = self._OPERATORS[symbol](float(left), float(right))
        except OverflowError:
            value = math.inf

        if not math.isfinite(value):
            logger.debug(f"Arithmetic fallback produced a non-finite value for {expression!r}")
            return Err(ParseError(f"{expression} has no finite value", fragment=expression))

        return Ok(ArithmeticPayload(expression=expression, value=value))
