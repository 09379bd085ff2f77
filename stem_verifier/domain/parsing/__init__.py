"""Parsers turning free-form content into typed queries."""

from stem_verifier.domain.parsing.chemistry_parser import AtomCounter, ChemistryQueryParser
from stem_verifier.domain.parsing.code_extractor import CodeBlockExtractor
from stem_verifier.domain.parsing.math_parser import MathExpressionParser

__all__ = ["AtomCounter", "ChemistryQueryParser", "CodeBlockExtractor", "MathExpressionParser"]
