"""Language detection and code extraction from markdown content."""

import logging
import re

from stem_verifier.domain.models import CodeQuery, Language, TestCase

logger = logging.getLogger(__name__)


class CodeBlockExtractor:
    """Pulls the first fenced code block out of markdown content.

    The fence's info string selects the language; content without a fence is
    taken as Python source in its entirety.
    """

    # One-word info string; anything after it on the opening line is code
    _FENCE = re.compile(r"```([\w+#.-]*)[ \t]*\n?([\s\S]*?)```")

    _LANGUAGE_MARKERS: dict[str, Language] = {
        "python": Language.PYTHON,
        "py": Language.PYTHON,
        "python3": Language.PYTHON,
        "javascript": Language.JAVASCRIPT,
        "js": Language.JAVASCRIPT,
        "cpp": Language.CPP,
        "c++": Language.CPP,
        "java": Language.JAVA,
    }

    def extract(self, content: str, test_cases: list[TestCase] | None = None) -> CodeQuery:
        """Detect the language and extract the code body.

        Args:
            content: Markdown or raw source code
            test_cases: Optional test cases carried along unchanged

        Returns:
            CodeQuery; ``language`` is None and ``unsupported_language`` holds
            the marker when the fence names a language the engine cannot run
        """
        opening = content.find("```")
        fence = self._FENCE.match(content, opening) if opening >= 0 else None
        if fence is None:
            return CodeQuery(code=content, language=Language.PYTHON, test_cases=test_cases or [])

        marker = fence.group(1).strip().lower()
        code = fence.group(2).strip()

        language = self._LANGUAGE_MARKERS.get(marker) if marker else Language.PYTHON

        logger.debug(f"Extracted code block: marker={marker!r}, language={language}, lines={len(code.splitlines())}")
        return CodeQuery(
            code=code,
            language=language,
            unsupported_language=None if language is not None else marker,
            test_cases=test_cases or [],
        )
