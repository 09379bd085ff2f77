"""
Shared utilities module.

This module contains common utilities used across all layers of the engine,
including Result types for functional error handling, settings and logging
configuration.
"""

from stem_verifier.shared.result import Err, Ok, Result

__all__ = ["Ok", "Err", "Result"]
