"""Unit tests for ChemistryVerifier."""

import pytest

from stem_verifier.domain.models import BalancePayload, VerificationMethod
from stem_verifier.domain.verifiers.chemistry_verifier import ChemistryVerifier


@pytest.fixture
def verifier() -> ChemistryVerifier:
    return ChemistryVerifier()


class TestChemistryVerifier:
    """Tests for chemistry verification."""

    @pytest.mark.asyncio
    async def test_balanced_equation(self, verifier, balanced_equation) -> None:
        result = await verifier.verify(balanced_equation)

        assert result.verified is True
        assert result.method == VerificationMethod.CHEMISTRY
        assert result.confidence == 0.9
        assert result.result == BalancePayload(
            balanced=True, reactant_atoms={"H": 4, "O": 2}, product_atoms={"H": 4, "O": 2}
        )
        assert result.error_message is None
        assert result.corrections is None

    @pytest.mark.asyncio
    async def test_unbalanced_equation(self, verifier, unbalanced_equation) -> None:
        result = await verifier.verify(f"Balance {unbalanced_equation}")

        assert result.verified is False
        assert result.confidence == 0.9
        assert result.result.balanced is False
        assert result.error_message.startswith("Equation is not balanced")
        assert "O: 2 in reactants vs 1 in products" in result.error_message

        assert len(result.corrections) == 1
        correction = result.corrections[0]
        assert correction.original == unbalanced_equation
        assert "Reactant atoms: {'H': 2, 'O': 2}" in correction.explanation
        assert "Product atoms: {'H': 2, 'O': 1}" in correction.explanation

    @pytest.mark.asyncio
    async def test_missing_arrow(self, verifier) -> None:
        result = await verifier.verify("Balance H2 + O2")

        assert result.verified is False
        assert result.confidence == 0.0
        assert result.result is None
        assert result.error_message == (
            "Could not parse equation: Invalid equation format. Expected: reactants -> products"
        )

    @pytest.mark.asyncio
    async def test_malformed_formula(self, verifier) -> None:
        result = await verifier.verify("Balance Ca(OH -> CaO + H2O")

        assert result.verified is False
        assert result.error_message.startswith("Could not parse equation:")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content,label",
        [
            ("Draw the structure of caffeine", "Structure"),
            ("How does sodium react with chlorine?", "Reaction"),
            ("Explain the E1 mechanism", "Mechanism"),
            ("What is the molar mass of water?", "Property"),
        ],
    )
    async def test_unsupported_operations(self, verifier, content, label) -> None:
        result = await verifier.verify(content)

        assert result.verified is False
        assert result.method == VerificationMethod.CHEMISTRY
        assert result.confidence == 0.0
        assert result.error_message == f"{label} verification requires RDKit integration"
