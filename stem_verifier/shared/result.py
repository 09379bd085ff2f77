"""Result type for functional error handling.

Parsers and checkers return ``Ok``/``Err`` instead of raising, so a malformed
equation or expression is an ordinary value the verifiers can ``match`` on::

    match checker.check(equation):
        case Ok(report): ...
        case Err(error): ...
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Success carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self.value))

    def and_then(self, func: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        """Feed the value into the next fallible step."""
        return func(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failure carrying the exception in ``error``; nothing is raised until ``unwrap``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[T], U]) -> "Err[E]":
        return self

    def and_then(self, func: Callable[[T], "Result[U, E]"]) -> "Err[E]":
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
