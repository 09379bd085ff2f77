"""Unit tests for MathExpressionParser."""

import pytest

from stem_verifier.domain.models import MathOperation
from stem_verifier.domain.parsing.math_parser import MathExpressionParser


@pytest.fixture
def parser() -> MathExpressionParser:
    return MathExpressionParser()


class TestOperationDetection:
    """Tests for keyword-based operation classification."""

    @pytest.mark.parametrize(
        "content,operation",
        [
            ("Simplify x^2 + 2x + 1", MathOperation.SIMPLIFY),
            ("Solve 2x + 3 = 7", MathOperation.SOLVE),
            ("Find x such that x^2 = 4", MathOperation.SOLVE),
            ("What is the integral of sin(x)?", MathOperation.INTEGRATE),
            ("Integrate x^2 dx", MathOperation.INTEGRATE),
            ("Take the derivative of x^3", MathOperation.DIFFERENTIATE),
            ("Verify that 2 + 2 = 4", MathOperation.VERIFY),
            ("Check 3 * 3 = 9", MathOperation.VERIFY),
            ("12 * 4", MathOperation.EVALUATE),
        ],
    )
    def test_keywords(self, parser, content, operation) -> None:
        assert parser.parse(content).operation == operation

    def test_detection_is_case_insensitive(self, parser) -> None:
        assert parser.parse("SIMPLIFY (a+b)^2").operation == MathOperation.SIMPLIFY

    def test_earlier_rule_wins(self, parser) -> None:
        """Content naming two operations gets the higher-priority one."""
        assert parser.parse("Simplify then solve x + x = 4").operation == MathOperation.SIMPLIFY


class TestExpressionExtraction:
    """Tests for stripping the leading instruction."""

    def test_strips_leading_verb(self, parser) -> None:
        assert parser.parse("Simplify x^2 + 2x + 1").expression == "x^2 + 2x + 1"

    def test_strips_verb_and_article(self, parser) -> None:
        assert parser.parse("Evaluate the 2^10").expression == "2^10"

    def test_keeps_plain_expression(self, parser) -> None:
        assert parser.parse("  12 * 4  ").expression == "12 * 4"

    def test_verb_only_leaves_empty_expression(self, parser) -> None:
        assert parser.parse("compute").expression == ""
