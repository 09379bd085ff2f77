"""Wolfram Alpha integration implementing the MathOracle protocol."""

from stem_verifier.infrastructure.wolfram.client import WolframAlphaClient

__all__ = ["WolframAlphaClient"]
