"""Dependency injection for FastAPI.

Provides the cached settings and the verification service built from them.
"""

from functools import lru_cache

from stem_verifier.application.verification_service import VerificationService
from stem_verifier.shared.config import Settings


@lru_cache
def get_settings() -> Settings:
    """Get application settings (singleton).

    Cached so the environment and .env file are read once per process.

    Returns:
        Application settings
    """
    return Settings()


@lru_cache
def get_verification_service() -> VerificationService:
    """Get verification service (singleton).

    Cached because the service is stateless between calls and its oracle
    clients only hold configuration.

    Returns:
        Verification service configured from the settings
    """
    return VerificationService.from_settings(get_settings())
