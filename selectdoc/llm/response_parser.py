"""Parser for cleaning chat model responses before insertion.

This module strips reasoning spans and markdown code fences from model
output and isolates the docstring block. It is a best-effort substring
heuristic, not a parser of docstring structure: nothing inside the block
is validated.
"""

import re
from typing import Dict, Pattern

from ..models.source_snippet import JAVA, PYTHON, normalize_language

THINK_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL)

# Whole-string fence: ```<tag>\n ... ``` or ``` ... ```
# A language tag (c++, objective-c, c#, ...) only counts when it sits alone
# on the opening line; either line ending is accepted.
FENCE_PATTERN = re.compile(
    r"```(?:[ \t]*[\w+#.-]+[ \t]*\r?\n|[ \t]*(?:\r?\n)?)([\s\S]*?)```"
)

DOCSTRING_PATTERNS: Dict[str, Pattern[str]] = {
    PYTHON: re.compile(r'("""[\s\S]*?""")'),
    JAVA: re.compile(r"(/\*\*[\s\S]*?\*/)"),
}


class ResponseParser:
    """Parse and clean chat model responses.

    Some local models (deepseek-r1 and friends) emit their chain of thought
    inside ``<think>`` tags, and most of them wrap answers in markdown fences
    despite being told not to. The parser is designed to:
    - Remove every reasoning span, wherever it appears
    - Strip one outer markdown fence that spans the whole response
    - Leave fences appearing mid-text alone
    - Pull the first docstring block out of surrounding commentary
    """

    @staticmethod
    def remove_think_tags(response: str) -> str:
        """Delete every ``<think>...</think>`` span, including multi-line ones.

        Parameters
        ----------
        response : str
            Raw response from the chat model

        Returns
        -------
        str
            Response without reasoning spans, trimmed
        """
        return THINK_PATTERN.sub("", response).strip()

    @staticmethod
    def strip_markdown_fences(response: str) -> str:
        """Remove the markdown fence wrapping the entire response, if any.

        The fence must open at the very start and close at the very end of
        the trimmed response. Partial fences and fences embedded in prose are
        left untouched, and only one level is removed.

        Parameters
        ----------
        response : str
            Response text, typically with reasoning spans already removed

        Returns
        -------
        str
            Interior of the fence when the whole response is fenced,
            otherwise the response itself; trimmed either way

        Examples
        --------
        >>> ResponseParser.strip_markdown_fences('```py\\nX\\n```')
        'X'
        >>> ResponseParser.strip_markdown_fences('wrap ```code```')
        'wrap ```code```'
        """
        text = response.strip()
        match = FENCE_PATTERN.fullmatch(text)
        if match:
            return match.group(1).strip()
        return text

    @classmethod
    def sanitize(cls, response: str) -> str:
        """Remove reasoning spans, then a whole-response fence.

        Parameters
        ----------
        response : str
            Raw response from the chat model

        Returns
        -------
        str
            Cleaned, trimmed text
        """
        return cls.strip_markdown_fences(cls.remove_think_tags(response))

    @staticmethod
    def extract_docstring(text: str, language: str) -> str:
        """Isolate the first docstring block for the given language.

        Python looks for the shortest ``\"\"\"...\"\"\"`` block, Java for the
        shortest ``/** ... */`` block, both scanning left to right. Languages
        without a pattern get the text back unchanged, as do responses with
        no matching block.

        Parameters
        ----------
        text : str
            Sanitized response text
        language : str
            Host language identifier ('python', 'java', anything else)

        Returns
        -------
        str
            The matched block with its delimiters, or ``text`` unchanged
        """
        pattern = DOCSTRING_PATTERNS.get(normalize_language(language))
        if pattern is None:
            return text

        match = pattern.search(text)
        if match:
            return match.group(1)
        return text

    @classmethod
    def clean(cls, response: str, language: str) -> str:
        """Run sanitization and extraction in order."""
        return cls.extract_docstring(cls.sanitize(response), language)


def sanitize(response: str) -> str:
    """Module-level shortcut for ResponseParser.sanitize."""
    return ResponseParser.sanitize(response)


def extract_docstring(text: str, language: str) -> str:
    """Module-level shortcut for ResponseParser.extract_docstring."""
    return ResponseParser.extract_docstring(text, language)
