"""Deterministic verification of AI-generated math, chemistry and code answers."""

__version__ = "0.1.0"
