"""Unit tests for ChemistryQueryParser and AtomCounter."""

import time

import pytest

from stem_verifier.domain.exceptions import ParseError
from stem_verifier.domain.models import ChemistryOperation
from stem_verifier.domain.parsing.chemistry_parser import AtomCounter, ChemistryQueryParser


class TestChemistryQueryParser:
    """Tests for chemistry request classification."""

    @pytest.fixture
    def parser(self) -> ChemistryQueryParser:
        return ChemistryQueryParser()

    @pytest.mark.parametrize(
        "content,operation",
        [
            ("Balance H2 + O2 -> H2O", ChemistryOperation.BALANCE),
            ("Draw the structure of benzene", ChemistryOperation.STRUCTURE),
            ("What happens when sodium reacts with water?", ChemistryOperation.REACTION),
            ("Explain the SN2 mechanism", ChemistryOperation.VALIDATE_MECHANISM),
            ("What is the boiling point of ethanol?", ChemistryOperation.PROPERTIES),
        ],
    )
    def test_keywords(self, parser, content, operation) -> None:
        assert parser.parse(content).operation == operation

    def test_bare_equation_is_balance(self, parser, balanced_equation) -> None:
        query = parser.parse(balanced_equation)
        assert query.operation == ChemistryOperation.BALANCE
        assert query.equation == balanced_equation

    def test_instruction_before_colon_is_removed(self, parser) -> None:
        query = parser.parse("Please balance this equation: CH4 + 2O2 -> CO2 + 2H2O.")
        assert query.equation == "CH4 + 2O2 -> CO2 + 2H2O"

    def test_leading_instruction_is_removed(self, parser) -> None:
        query = parser.parse("Balance the equation 2Na + Cl2 → 2NaCl")
        assert query.operation == ChemistryOperation.BALANCE
        assert query.equation == "2Na + Cl2 → 2NaCl"

    @pytest.mark.parametrize("equation", ["N2 + 3H2 <=> 2NH3", "N2 + 3H2 ⇌ 2NH3", "N2 + 3H2 <-> 2NH3"])
    def test_reversible_arrow_is_balance(self, parser, equation) -> None:
        query = parser.parse(equation)
        assert query.operation == ChemistryOperation.BALANCE
        assert query.equation == equation

    def test_long_dash_run_is_linear(self, parser) -> None:
        content = "H2 " + "-" * 100_000
        start = time.perf_counter()
        query = parser.parse(content)
        assert time.perf_counter() - start < 1.0
        assert query.operation == ChemistryOperation.PROPERTIES

    def test_question_mark_before_arrow_is_a_cut_point(self, parser) -> None:
        query = parser.parse("Is this balanced? 2H2 + O2 = 2H2O")
        assert query.equation == "2H2 + O2 = 2H2O"


class TestAtomCounter:
    """Tests for coefficient-aware atom counting."""

    @pytest.fixture
    def counter(self) -> AtomCounter:
        return AtomCounter()

    @pytest.mark.parametrize(
        "side,expected",
        [
            ("2H2 + O2", {"H": 4, "O": 2}),
            ("2H2O", {"H": 4, "O": 2}),
            ("NaCl", {"Cl": 1, "Na": 1}),
            ("Ca(OH)2", {"Ca": 1, "H": 2, "O": 2}),
            ("3Ca(OH)2", {"Ca": 3, "H": 6, "O": 6}),
            ("K4[Fe(CN)6]", {"C": 6, "Fe": 1, "K": 4, "N": 6}),
            ("CuSO4·5H2O", {"Cu": 1, "H": 10, "O": 9, "S": 1}),
            ("NaCl(aq) + H2O(l)", {"Cl": 1, "H": 2, "Na": 1, "O": 1}),
            ("C6H12O6", {"C": 6, "H": 12, "O": 6}),
            ("Fe2(SO4)3", {"Fe": 2, "O": 12, "S": 3}),
        ],
    )
    def test_count(self, counter, side, expected) -> None:
        assert counter.count(side) == expected

    def test_result_is_sorted_by_symbol(self, counter) -> None:
        assert list(counter.count("O2 + H2 + C")) == ["C", "H", "O"]

    @pytest.mark.parametrize(
        "side",
        [
            "H2 + ",
            "0H2",
            "H0",
            "Ca(OH",
            "CaOH)2",
            "Ca(OH]2",
            "Ca()2",
            "Ca(OH)0",
            "h2o",
            "H2$O",
            "2",
        ],
    )
    def test_malformed_raises_parse_error(self, counter, side) -> None:
        with pytest.raises(ParseError):
            counter.count(side)

    def test_parse_error_keeps_fragment(self, counter) -> None:
        with pytest.raises(ParseError) as exc_info:
            counter.count("H2 + Xx!")
        assert exc_info.value.fragment == "Xx!"
