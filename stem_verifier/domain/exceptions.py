"""Domain-level exceptions for the verification engine.

Every one of these ends up as a failed ``VerificationResult``; none escapes
the dispatcher.
"""


class VerificationError(Exception):
    """Base exception for all verification errors."""
    pass


class ParseError(VerificationError):
    """Raised when an equation, formula or expression cannot be parsed."""

    def __init__(self, message: str, fragment: str = ""):
        super().__init__(message)
        self.fragment = fragment


class UnsupportedOperationError(VerificationError):
    """Raised for operations the engine deliberately does not answer."""

    def __init__(self, message: str, requires: str | None = None):
        super().__init__(message)
        self.requires = requires


class TransportError(VerificationError):
    """Raised when an oracle is unreachable or answers with a non-success response."""

    def __init__(self, message: str, oracle: str, status_code: int | None = None):
        super().__init__(message)
        self.oracle = oracle
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return super().__str__()
        return f"{super().__str__()} (status_code={self.status_code})"
