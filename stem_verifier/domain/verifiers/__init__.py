"""Per-domain verifiers."""

from stem_verifier.domain.verifiers.chemistry_verifier import ChemistryVerifier
from stem_verifier.domain.verifiers.code_verifier import CodeVerifier
from stem_verifier.domain.verifiers.math_verifier import MathVerifier

__all__ = ["ChemistryVerifier", "CodeVerifier", "MathVerifier"]
