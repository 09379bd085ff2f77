"""Chemical equation balance checking by atom-count comparison."""

import logging
from dataclasses import dataclass, field

from stem_verifier.domain.exceptions import ParseError
from stem_verifier.domain.parsing.chemistry_parser import ARROW, AtomCounter
from stem_verifier.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceReport:
    """Outcome of comparing both sides of an equation."""

    balanced: bool
    reactant_atoms: dict[str, int]
    product_atoms: dict[str, int]
    differences: list[str] = field(default_factory=list)

    def explanation(self) -> str:
        """Human-readable summary of the per-element mismatch."""
        if self.balanced:
            return "Every element has the same atom count on both sides"
        return "; ".join(self.differences)


class EquationBalanceChecker:
    """Decides whether a reaction equation conserves every element."""

    def __init__(self, atom_counter: AtomCounter | None = None):
        self.atom_counter = atom_counter or AtomCounter()

    def check(self, equation: str) -> Result[BalanceReport, ParseError]:
        """Split the equation on its arrow and compare atom counts.

        Args:
            equation: e.g. ``"2H2 + O2 -> 2H2O"`` (``->``, ``→``, ``=`` or a
                reversible arrow such as ``<=>``)

        Returns:
            Ok(BalanceReport) whenever both sides parse, balanced or not
            Err(ParseError) for a missing/extra arrow or a malformed formula
        """
        return self._split(equation).and_then(self._count_sides).map(self._report)

    def _split(self, equation: str) -> Result[tuple[str, str], ParseError]:
        sides = [side.strip() for side in ARROW.split(equation)]
        if len(sides) != 2:
            return Err(
                ParseError(
                    "Invalid equation format. Expected: reactants -> products",
                    fragment=equation,
                )
            )
        return Ok((sides[0], sides[1]))

    def _count_sides(
        self, sides: tuple[str, str]
    ) -> Result[tuple[dict[str, int], dict[str, int]], ParseError]:
        reactants, products = sides
        try:
            return Ok((self.atom_counter.count(reactants), self.atom_counter.count(products)))
        except ParseError as e:
            logger.debug(f"Could not parse equation sides {sides!r}: {e}")
            return Err(e)

    def _report(self, counts: tuple[dict[str, int], dict[str, int]]) -> BalanceReport:
        reactant_atoms, product_atoms = counts
        balanced = self.compare(reactant_atoms, product_atoms)
        return BalanceReport(
            balanced=balanced,
            reactant_atoms=reactant_atoms,
            product_atoms=product_atoms,
            differences=[] if balanced else self._differences(reactant_atoms, product_atoms),
        )

    @staticmethod
    def compare(reactant_atoms: dict[str, int], product_atoms: dict[str, int]) -> bool:
        """Balanced iff both sides hold exactly the same elements with equal counts."""
        if set(reactant_atoms) != set(product_atoms):
            return False
        return all(reactant_atoms[element] == product_atoms[element] for element in reactant_atoms)

    @staticmethod
    def _differences(reactant_atoms: dict[str, int], product_atoms: dict[str, int]) -> list[str]:
        return [
            f"{element}: {reactant_atoms.get(element, 0)} in reactants vs "
            f"{product_atoms.get(element, 0)} in products"
            for element in sorted(set(reactant_atoms) | set(product_atoms))
            if reactant_atoms.get(element, 0) != product_atoms.get(element, 0)
        ]
