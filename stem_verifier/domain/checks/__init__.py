"""Local deterministic checks used when no oracle is configured (and for chemistry always)."""

from stem_verifier.domain.checks.arithmetic import ArithmeticFallback
from stem_verifier.domain.checks.balance import BalanceReport, EquationBalanceChecker
from stem_verifier.domain.checks.syntax_linter import SyntaxLinter

__all__ = ["ArithmeticFallback", "BalanceReport", "EquationBalanceChecker", "SyntaxLinter"]
