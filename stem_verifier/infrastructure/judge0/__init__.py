"""Judge0 integration implementing the SandboxOracle protocol."""

from stem_verifier.infrastructure.judge0.client import LANGUAGE_IDS, Judge0Client

__all__ = ["LANGUAGE_IDS", "Judge0Client"]
