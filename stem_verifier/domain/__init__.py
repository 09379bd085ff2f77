"""
Domain layer module.

This module contains the core verification logic. It is independent of
infrastructure concerns and depends only on protocols (interfaces).

Key components:
- models.py: Domain models (Pydantic-based data structures)
- protocols.py: Protocol definitions for the external oracles
- parsing/: Turning free-form content into typed queries
- checks/: Local deterministic checks (arithmetic, atom balance, linting)
- verifiers/: Per-domain verifiers choosing oracle or local check
"""
