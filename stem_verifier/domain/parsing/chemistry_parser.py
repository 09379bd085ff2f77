"""Chemistry request classification and coefficient-aware atom counting."""

import logging
import re
from collections import Counter

from stem_verifier.domain.exceptions import ParseError
from stem_verifier.domain.models import ChemistryOperation, ChemistryQuery

logger = logging.getLogger(__name__)

# Reversible arrows come before "=" so "<=>" is one token; "-+>" may not start mid-run
ARROW = re.compile(r"<=+>|<-+>|⇌|⇄|(?<!-)-+>|→|=+>?")


class ChemistryQueryParser:
    """Classifies a chemistry request and isolates the equation text.

    Keyword rules are checked in order: balance, structure/draw,
    reaction/react, mechanism. Content without any keyword but with a
    reaction arrow is a bare equation and is checked for balance; everything
    else is a properties question.
    """

    _OPERATION_KEYWORDS: tuple[tuple[ChemistryOperation, tuple[str, ...]], ...] = (
        (ChemistryOperation.BALANCE, ("balance",)),
        (ChemistryOperation.STRUCTURE, ("structure", "draw")),
        (ChemistryOperation.REACTION, ("react",)),
        (ChemistryOperation.VALIDATE_MECHANISM, ("mechanism",)),
    )

    _LEADING_INSTRUCTION = re.compile(
        r"^(?:please\s+)?(?:balance|check|verify)(?:\s+(?:the|this))?"
        r"(?:\s+(?:chemical\s+)?(?:equation|reaction))?\s*[:\-]?\s*",
        re.IGNORECASE,
    )

    def parse(self, content: str) -> ChemistryQuery:
        lowered = content.lower()
        operation = ChemistryOperation.PROPERTIES

        for candidate, keywords in self._OPERATION_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                operation = candidate
                break
        else:
            if ARROW.search(content):
                operation = ChemistryOperation.BALANCE

        equation = self._extract_equation(content)
        logger.debug(f"Parsed chemistry query: operation={operation.value}, equation={equation!r}")
        return ChemistryQuery(equation=equation, operation=operation)

    def _extract_equation(self, content: str) -> str:
        """Drop instruction text in front of the equation and trailing punctuation."""
        text = content.strip()
        arrow = ARROW.search(text)
        if arrow is not None:
            prefix = text[: arrow.start()]
            cut = max(prefix.rfind(":"), prefix.rfind("?"))
            if cut >= 0:
                text = text[cut + 1 :]
        text = self._LEADING_INSTRUCTION.sub("", text.strip(), count=1)
        return text.strip().rstrip(".?!").strip()


class AtomCounter:
    """Counts atoms on one side of an equation, coefficients applied.

    ``"2H2 + O2"`` becomes ``{"H": 4, "O": 2}``. Parenthesised or bracketed
    groups take a trailing multiplier (``Ca(OH)2``), hydrate dots multiply
    their own part (``CuSO4·5H2O``) and state markers such as ``(aq)`` are
    ignored.
    """

    _TOKEN = re.compile(
        r"(?P<element>[A-Z][a-z]?)(?P<count>\d*)"
        r"|(?P<open>[(\[])"
        r"|(?P<close>[)\]])(?P<multiplier>\d*)"
    )
    _STATE = re.compile(r"\((?:aq|s|l|g)\)", re.IGNORECASE)
    _COEFFICIENT = re.compile(r"^(\d*)\s*")
    _CLOSERS = {"(": ")", "[": "]"}

    def count(self, side: str) -> dict[str, int]:
        """Count every element on one side of an equation.

        Args:
            side: Compounds joined by ``+``, e.g. ``"2H2 + O2"``

        Returns:
            Element symbol -> total atom count, sorted by symbol

        Raises:
            ParseError: If a compound is empty or malformed
        """
        totals: Counter[str] = Counter()

        for term in side.split("+"):
            compound = self._STATE.sub("", term).strip()
            if not compound:
                raise ParseError(f"Empty compound in {side.strip()!r}", fragment=side)
            for part in compound.split("·"):
                totals.update(self._count_compound(part.strip(), fragment=compound))

        return dict(sorted(totals.items()))

    def _count_compound(self, compound: str, fragment: str) -> Counter[str]:
        match = self._COEFFICIENT.match(compound)
        coefficient = int(match.group(1)) if match and match.group(1) else 1
        if coefficient == 0:
            raise ParseError(f"Coefficient must be positive in {fragment!r}", fragment=fragment)

        formula = re.sub(r"\s+", "", compound[match.end() if match else 0 :])
        if not formula:
            raise ParseError(f"Missing formula in {fragment!r}", fragment=fragment)

        atoms = self._count_formula(formula, fragment)
        return Counter({element: n * coefficient for element, n in atoms.items()})

    def _count_formula(self, formula: str, fragment: str) -> Counter[str]:
        stack: list[tuple[Counter[str], str]] = [(Counter(), "")]
        position = 0

        while position < len(formula):
            token = self._TOKEN.match(formula, position)
            if token is None:
                raise ParseError(
                    f"Unexpected character {formula[position]!r} in {fragment!r}",
                    fragment=fragment,
                )

            if token.group("element"):
                n = int(token.group("count") or 1)
                if n == 0:
                    raise ParseError(f"Zero subscript in {fragment!r}", fragment=fragment)
                stack[-1][0][token.group("element")] += n
            elif token.group("open"):
                stack.append((Counter(), token.group("open")))
            else:
                group, opener = stack.pop() if len(stack) > 1 else (None, "")
                if group is None or self._CLOSERS[opener] != token.group("close"):
                    raise ParseError(f"Unmatched {token.group('close')!r} in {fragment!r}", fragment=fragment)
                multiplier = int(token.group("multiplier") or 1)
                if multiplier == 0 or not group:
                    raise ParseError(f"Empty or zero group in {fragment!r}", fragment=fragment)
                for element, n in group.items():
                    stack[-1][0][element] += n * multiplier

            position = token.end()

        if len(stack) != 1:
            raise ParseError(f"Unclosed {stack[-1][1]!r} in {fragment!r}", fragment=fragment)

        return stack[0][0]
