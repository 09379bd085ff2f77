"""Chemistry verification. Only equation balancing is answered locally."""

import logging

from stem_verifier.domain.checks.balance import EquationBalanceChecker
from stem_verifier.domain.models import (
    BalancePayload,
    ChemistryOperation,
    Correction,
    VerificationMethod,
    VerificationResult,
)
from stem_verifier.domain.parsing.chemistry_parser import ChemistryQueryParser
from stem_verifier.shared.result import Err, Ok

logger = logging.getLogger(__name__)

BALANCE_CONFIDENCE = 0.9
REQUIRED_INTEGRATION = "RDKit"

_OPERATION_LABELS = {
    ChemistryOperation.STRUCTURE: "Structure",
    ChemistryOperation.REACTION: "Reaction",
    ChemistryOperation.VALIDATE_MECHANISM: "Mechanism",
    ChemistryOperation.PROPERTIES: "Property",
}


class ChemistryVerifier:
    """Routes balance requests to the atom-count checker and refuses the rest."""

    def __init__(
        self,
        parser: ChemistryQueryParser | None = None,
        checker: EquationBalanceChecker | None = None,
    ):
        self.parser = parser or ChemistryQueryParser()
        self.checker = checker or EquationBalanceChecker()

    async def verify(self, content: str) -> VerificationResult:
        query = self.parser.parse(content)
        logger.info(f"Verifying chemistry (operation={query.operation.value})")

        if query.operation is not ChemistryOperation.BALANCE:
            return VerificationResult.failure(
                VerificationMethod.CHEMISTRY,
                content,
                f"{_OPERATION_LABELS[query.operation]} verification requires "
                f"{REQUIRED_INTEGRATION} integration",
            )

        match self.checker.check(query.equation):
            case Err(error):
                return VerificationResult.failure(
                    VerificationMethod.CHEMISTRY, content, f"Could not parse equation: {error}"
                )
            case Ok(report):
                payload = BalancePayload(
                    balanced=report.balanced,
                    reactant_atoms=report.reactant_atoms,
                    product_atoms=report.product_atoms,
                )

        if report.balanced:
            return VerificationResult(
                verified=True,
                method=VerificationMethod.CHEMISTRY,
                input=content,
                result=payload,
                confidence=BALANCE_CONFIDENCE,
            )

        logger.info(f"Equation is not balanced: {report.explanation()}")
        return VerificationResult(
            verified=False,
            method=VerificationMethod.CHEMISTRY,
            input=content,
            result=payload,
            confidence=BALANCE_CONFIDENCE,
            error_message=f"Equation is not balanced: {report.explanation()}",
            corrections=[
                Correction(
                    original=query.equation,
                    corrected="Equation is not balanced",
                    explanation=(
                        f"{report.explanation()}. Reactant atoms: {report.reactant_atoms}, "
                        f"Product atoms: {report.product_atoms}"
                    ),
                )
            ],
        )
