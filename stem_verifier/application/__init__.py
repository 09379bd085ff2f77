"""Application layer: the verification service callers talk to."""

from stem_verifier.application.verification_service import VerificationService

__all__ = ["VerificationService"]
