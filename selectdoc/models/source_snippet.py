"""SourceSnippet data model for representing a highlighted code selection."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

PYTHON = "python"
JAVA = "java"
OTHER = "other"

RECOGNIZED_LANGUAGES = (PYTHON, JAVA)

# File extension -> host language identifier (mirrors editor language ids)
EXTENSION_LANGUAGES = {
    ".py": "python",
    ".pyi": "python",
    ".java": "java",
    ".js": "javascript",
    ".cjs": "javascript",
    ".mjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".kt": "kotlin",
    ".php": "php",
    ".sh": "shellscript",
}


def normalize_language(language: Optional[str]) -> str:
    """Map a host language identifier onto a recognized language tag.

    Args:
        language: Raw language identifier reported by the host (e.g. 'python',
            'Java', 'typescript'). May be None.

    Returns:
        'python' or 'java' when recognized, otherwise 'other'.
    """
    if not language:
        return OTHER
    tag = language.strip().lower()
    return tag if tag in RECOGNIZED_LANGUAGES else OTHER


def language_for_path(path: str | Path) -> str:
    """Return the host language identifier for a file, based on its extension."""
    return EXTENSION_LANGUAGES.get(Path(path).suffix.lower(), "plaintext")


@dataclass(frozen=True)
class SourceSnippet:
    """A piece of highlighted source code captured from the host editor.

    Attributes:
        text: The selected text, verbatim.
        language: Host language identifier of the document ('python', 'java', ...).
        start_line: 0-based line where the selection starts.
        end_line: 0-based line where the selection ends (inclusive).
        filepath: Document path, if the selection came from a file.
    """

    text: str
    language: str
    start_line: int = 0
    end_line: int = 0
    filepath: Optional[str] = None

    @property
    def language_tag(self) -> str:
        """Recognized language tag used for prompt and extraction selection."""
        return normalize_language(self.language)

    @property
    def is_empty(self) -> bool:
        """Whether nothing is selected."""
        return not self.text

    def to_dict(self) -> dict:
        """Serialize SourceSnippet to a JSON-compatible dictionary."""
        return asdict(self)

    def __repr__(self) -> str:
        location = self.filepath or "<buffer>"
        return (
            f"SourceSnippet({self.language} @ {location}:"
            f"{self.start_line + 1}-{self.end_line + 1}, {len(self.text)} chars)"
        )
