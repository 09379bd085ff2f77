"""Shallow per-language syntax smells, used when no sandbox is configured.

Finding nothing here is weak evidence: these checks only catch a handful of
typos that a learner or a model commonly produces.
"""

import logging
import re
import string

from stem_verifier.domain.models import Language

logger = logging.getLogger(__name__)

_PYTHON_BLOCK = re.compile(
    r"^\s*(?:async\s+)?(if|elif|else|for|while|def|class|try|except|finally|with)\b"
)
_MIXED_INDENT = re.compile(r"^(\t+ | +\t)")
_SPACED_COMPARISON = ("= =", "! =")

_BRACKET_PAIRS = {")": "(", "]": "[", "}": "{"}
_BRACE_LANGUAGES = frozenset({Language.JAVASCRIPT, Language.CPP, Language.JAVA})

# JavaScript tokens after which "/" opens a regex literal
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORDS = frozenset(
    {"return", "typeof", "instanceof", "case", "in", "of", "delete", "void", "throw", "new", "yield", "await"}
)


class SyntaxLinter:
    """Collects human-readable issues, each naming the 1-based line it refers to."""

    def lint(self, code: str, language: Language) -> list[str]:
        issues: list[str] = []

        if language is Language.PYTHON:
            issues.extend(self._lint_python(code))
        if language is Language.JAVASCRIPT:
            issues.extend(self._lint_javascript(code))
        if language in _BRACE_LANGUAGES:
            issues.extend(self._check_brackets(code, language))

        logger.debug(f"Linted {language.value} code: {len(issues)} issue(s)")
        return issues

    def _lint_python(self, code: str) -> list[str]:
        issues = []
        for number, line in enumerate(code.splitlines(), start=1):
            statement = _strip_python_comment(line).rstrip()
            if _PYTHON_BLOCK.match(statement) and not statement.endswith(":"):
                issues.append(
                    f"Line {number}: Missing colon at end of statement: {statement.strip()}"
                )
            if _MIXED_INDENT.match(line):
                issues.append(f"Line {number}: Mixed tabs and spaces in indentation")
        return issues

    def _lint_javascript(self, code: str) -> list[str]:
        return [
            f"Line {number}: Spaces in comparison operator: {line.strip()}"
            for number, line in enumerate(code.splitlines(), start=1)
            if any(smell in line for smell in _SPACED_COMPARISON)
        ]

    def _check_brackets(self, code: str, language: Language) -> list[str]:
        """Report the first unmatched or unclosed bracket outside literals and comments.

        JavaScript regex literals and C++14 digit separators (``1'000``) are
        skipped like strings.
        """
        stack: list[tuple[str, int]] = []
        line = 1
        quote: str | None = None
        in_line_comment = in_block_comment = False
        last = -1  # last significant character outside literals and comments
        i = 0

        while i < len(code):
            char = code[i]
            pair = code[i : i + 2]

            if char == "\n":
                line += 1
                in_line_comment = False
            elif in_line_comment:
                pass
            elif in_block_comment:
                if pair == "*/":
                    in_block_comment = False
                    i += 1
            elif quote is not None:
                if char == "\\":
                    i += 1
                elif char == quote:
                    quote = None
                    last = i
            elif pair == "//":
                in_line_comment = True
            elif pair == "/*":
                in_block_comment = True
                i += 1
            elif char == "/" and language is Language.JAVASCRIPT and _starts_regex(code, last):
                i = last = _regex_end(code, i)
            elif char == "'" and language is Language.CPP and _is_digit_separator(code, i):
                last = i
            elif char in "\"'`":
                quote = char
            elif char in "([{":
                stack.append((char, line))
                last = i
            elif char in _BRACKET_PAIRS:
                if not stack or stack[-1][0] != _BRACKET_PAIRS[char]:
                    return [f"Line {line}: Unexpected {char!r}"]
                stack.pop()
                last = i
            elif not char.isspace():
                last = i
            i += 1

        if stack:
            opener, opened_at = stack[-1]
            return [f"Line {opened_at}: Unclosed {opener!r}"]
        return []


def _starts_regex(code: str, last: int) -> bool:
    """Whether a '/' after ``code[last]`` opens a regex literal rather than dividing."""
    if last < 0:
        return True
    previous = code[last]
    if previous in _REGEX_PRECEDERS:
        return True
    if not (previous.isalnum() or previous in "_$"):
        return False
    start = last
    while start > 0 and (code[start - 1].isalnum() or code[start - 1] in "_$"):
        start -= 1
    return code[start : last + 1] in _REGEX_KEYWORDS


def _regex_end(code: str, start: int) -> int:
    """Index of the '/' closing the regex literal opened at ``start``.

    Stops before the end of the line when the literal is not closed there.
    """
    in_class = False
    i = start + 1
    while i < len(code) and code[i] != "\n":
        char = code[i]
        if char == "\\" and i + 1 < len(code) and code[i + 1] != "\n":
            i += 2
            continue
        if char == "[":
            in_class = True
        elif char == "]":
            in_class = False
        elif char == "/" and not in_class:
            return i
        i += 1
    return i - 1


def _is_digit_separator(code: str, index: int) -> bool:
    """Whether the apostrophe at ``index`` sits inside a numeric literal."""
    if index == 0 or index + 1 >= len(code):
        return False
    if code[index - 1] not in string.hexdigits or code[index + 1] not in string.hexdigits:
        return False
    start = index - 1
    while start > 0 and (code[start - 1].isalnum() or code[start - 1] == "."):
        start -= 1
    if start > 0 and code[start - 1] == "'":
        return True  # an earlier separator of the same literal
    return code[start].isdigit()


def _strip_python_comment(line: str) -> str:
    """Cut a trailing ``#`` comment, leaving ``#`` inside string literals alone."""
    quote: str | None = None
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote is not None:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "#":
            return line[:index]
    return line
