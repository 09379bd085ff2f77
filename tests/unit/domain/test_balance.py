"""Unit tests for EquationBalanceChecker."""

import time

import pytest

from stem_verifier.domain.checks.balance import EquationBalanceChecker
from stem_verifier.domain.exceptions import ParseError


@pytest.fixture
def checker() -> EquationBalanceChecker:
    return EquationBalanceChecker()


class TestEquationBalanceChecker:
    """Tests for atom-count comparison across the arrow."""

    def test_balanced(self, checker, balanced_equation) -> None:
        report = checker.check(balanced_equation).unwrap()

        assert report.balanced is True
        assert report.reactant_atoms == {"H": 4, "O": 2}
        assert report.product_atoms == {"H": 4, "O": 2}
        assert report.differences == []

    def test_unbalanced_reports_differences(self, checker, unbalanced_equation) -> None:
        report = checker.check(unbalanced_equation).unwrap()

        assert report.balanced is False
        assert report.reactant_atoms == {"H": 2, "O": 2}
        assert report.product_atoms == {"H": 2, "O": 1}
        assert report.differences == ["O: 2 in reactants vs 1 in products"]
        assert report.explanation() == "O: 2 in reactants vs 1 in products"

    @pytest.mark.parametrize(
        "equation",
        [
            "CH4 + 2O2 → CO2 + 2H2O",
            "2Na + Cl2 = 2NaCl",
            "Ca(OH)2 + 2HCl --> CaCl2 + 2H2O",
            "Fe2O3 + 3CO => 2Fe + 3CO2",
            "N2 + 3H2 <=> 2NH3",
            "N2 + 3H2 ⇌ 2NH3",
            "N2 + 3H2 <-> 2NH3",
            "N2 + 3H2 ⇄ 2NH3",
        ],
    )
    def test_arrow_variants(self, checker, equation) -> None:
        assert checker.check(equation).unwrap().balanced is True

    def test_element_missing_on_one_side(self, checker) -> None:
        report = checker.check("NaCl -> Na").unwrap()
        assert report.balanced is False
        assert "Cl: 1 in reactants vs 0 in products" in report.differences

    @pytest.mark.parametrize("equation", ["H2 + O2", "A -> B -> C", ""])
    def test_wrong_arrow_count(self, checker, equation) -> None:
        result = checker.check(equation)
        assert result.is_err()
        assert "Expected: reactants -> products" in str(result.error)

    def test_malformed_formula_is_err(self, checker) -> None:
        result = checker.check("H2 + O2( -> H2O")
        assert result.is_err()
        assert isinstance(result.error, ParseError)

    def test_compare_requires_same_elements(self) -> None:
        assert EquationBalanceChecker.compare({"H": 2}, {"H": 2}) is True
        assert EquationBalanceChecker.compare({"H": 2}, {"H": 2, "O": 0}) is False
        assert EquationBalanceChecker.compare({"H": 2}, {"H": 3}) is False

    def test_reversible_arrow_is_one_separator(self, checker) -> None:
        report = checker.check("H2 + I2 <=> HI").unwrap()
        assert report.balanced is False
        assert report.differences == [
            "H: 2 in reactants vs 1 in products",
            "I: 2 in reactants vs 1 in products",
        ]

    def test_missing_arrow_skips_atom_counting(self, mocker) -> None:
        counter = mocker.Mock()
        result = EquationBalanceChecker(atom_counter=counter).check("H2 + O2")
        assert result.is_err()
        counter.count.assert_not_called()

    def test_long_dash_run_is_linear(self, checker) -> None:
        start = time.perf_counter()
        result = checker.check("H2 " + "-" * 100_000)
        assert time.perf_counter() - start < 1.0
        assert result.is_err()
