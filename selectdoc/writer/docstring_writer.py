"""Writer for inserting generated docstrings into source files.

This module performs the single document edit of a generation run: the
docstring text is placed at column 0 of a given line, and the file is
replaced atomically so a failed write never leaves a half-edited file.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class DocstringWriter:
    """Inserts text above a line of a source file with atomic replacement.

    Ensures:
    - Path traversal protection (files must be within allowed base directory)
    - Enough free disk space before writing
    - Read-back validation of the new content before it replaces the original
    - The original line ending style is kept for the inserted text
    """

    def __init__(self, base_path: str | None = None):
        """Initialize the docstring writer.

        Parameters
        ----------
        base_path : str, optional
            Base directory path for validation. Files must be within this directory.
            Defaults to current working directory if not specified.
        """
        self.base_path = (
            Path(base_path).resolve() if base_path else Path.cwd().resolve()
        )

    def _validate_path(self, filepath: str) -> Path:
        """Resolve ``filepath`` and make sure it may be edited.

        The file has to exist and live under ``base_path``; symlinks and
        ``..`` segments are resolved before the check.

        Raises
        ------
        FileNotFoundError
            If there is no such file
        ValueError
            If the resolved file sits outside ``base_path``
        """
        target = Path(filepath).resolve()
        if not target.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        if not target.is_relative_to(self.base_path):
            raise ValueError(
                f"Refusing to edit '{filepath}': it resolves to {target}, "
                f"outside allowed directory '{self.base_path}'"
            )
        return target

    def _check_disk_space(self, file_path: Path, required_bytes: int) -> None:
        """Raise OSError unless the directory can hold the new file plus 10%."""
        needed = int(required_bytes * 1.1)
        free = shutil.disk_usage(file_path.parent).free
        if free < needed:
            raise OSError(
                f"Insufficient disk space in {file_path.parent}: "
                f"need {needed} bytes, {free} free"
            )

    def _validate_write(self, file_path: Path, expected_content: str) -> None:
        """Re-read the temp file and compare it with what was meant to be written."""
        try:
            written = file_path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise OSError(f"Could not re-read temp file '{file_path}': {e}") from e

        if written != expected_content:
            raise OSError(
                f"Temp file '{file_path}' holds {len(written)} characters, "
                f"expected {len(expected_content)}"
            )

    @staticmethod
    def insert_into_content(content: str, line: int, text: str) -> str:
        """Insert ``text`` at column 0 of ``line`` (0-based) within ``content``.

        A line past the end of the content appends the text, adding a
        separating line break when the content does not end with one.
        """
        if line < 0:
            raise ValueError(f"Line number must not be negative, got {line}")

        newline = "\r\n" if "\r\n" in content else "\n"
        if newline != "\n":
            text = text.replace("\r\n", "\n").replace("\n", newline)

        offset = 0
        for _ in range(line):
            line_break = content.find("\n", offset)
            if line_break == -1:
                # Past the last line
                if not content or content.endswith("\n"):
                    return content + text
                return content + newline + text
            offset = line_break + 1

        return content[:offset] + text + content[offset:]

    def insert_above(self, filepath: str, line: int, text: str) -> bool:
        """Insert text at the start of a line as one atomic file replacement.

        1. Build the new content in memory
        2. Write it to a temporary file in the same directory
        3. Read the temp file back and compare
        4. Atomically rename the temp file over the target

        Concurrency Limitation
        ----------------------
        The file is read at the beginning and replaced at the end. Changes
        made by another process in between are overwritten.

        Parameters
        ----------
        filepath : str
            Path to the source file
        line : int
            0-based line whose start receives the text
        text : str
            Text to insert, normally the docstring plus a trailing line break

        Returns
        -------
        bool
            True once the file has been replaced

        Raises
        ------
        ValueError
            If the filepath is outside the allowed base directory or the
            line is negative
        FileNotFoundError
            If the file does not exist
        OSError
            If disk space is insufficient or write validation fails
        """
        file_path = self._validate_path(filepath)

        with file_path.open(encoding="utf-8", newline="") as f:
            content = f.read()

        new_content = self.insert_into_content(content, line, text)

        self._check_disk_space(file_path, len(new_content.encode("utf-8")))

        temp_path = None

        try:
            # Same directory, so the rename stays atomic
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
            temp_path = Path(temp_path_str)

            with os.fdopen(temp_fd, "w", encoding="utf-8", newline="") as f:
                f.write(new_content)

            self._validate_write(temp_path, new_content)

            shutil.copymode(file_path, temp_path)
            temp_path.replace(file_path)
            logger.debug("Inserted %d characters into %s at line %d", len(text), file_path, line)

            return True

        finally:
            if temp_path and temp_path.exists():
                temp_path.unlink()
