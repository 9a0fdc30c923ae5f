"""Editor hosts backed by files and text streams.

FileEditorHost treats a line range of a file on disk as the highlighted
selection and applies the docstring with DocstringWriter. StreamEditorHost
reads the selection from a stream and writes the result to another one,
leaving every file untouched.
"""

import sys
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from ..models.source_snippet import SourceSnippet, language_for_path
from ..writer.docstring_writer import DocstringWriter
from .host import EditorHost

INFO = "info"
ERROR = "error"


class _NotifyingHost(EditorHost):
    """Shared notification handling: print to a stream and keep a record."""

    def __init__(self, notify_stream: Optional[TextIO] = None):
        self.notify_stream = notify_stream
        self.messages: List[Tuple[str, str]] = []

    def _stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output
        return self.notify_stream or sys.stderr

    def show_information_message(self, message: str) -> None:
        self.messages.append((INFO, message))
        print(message, file=self._stream())

    def show_error_message(self, message: str) -> None:
        self.messages.append((ERROR, message))
        print(f"Error: {message}", file=self._stream())


class FileEditorHost(_NotifyingHost):
    """Editor host that selects a range of lines in a file.

    Parameters
    ----------
    filepath : str
        File acting as the open document.
    start_line : int
        First selected line, 1-based as shown by editors.
    end_line : int, optional
        Last selected line, 1-based and inclusive. Defaults to ``start_line``.
    language : str, optional
        Host language identifier. Derived from the file extension when omitted.
    writer : DocstringWriter, optional
        Writer used for the insertion. Defaults to one rooted at the file's
        directory.
    notify_stream : TextIO, optional
        Where notices are printed. Defaults to stderr.
    dry_run : bool, optional
        Print the text that would be inserted to ``output_stream`` instead
        of editing the file.
    output_stream : TextIO, optional
        Receives the text in dry-run mode. Defaults to stdout.

    Raises
    ------
    ValueError
        If the line numbers are not positive or the range is reversed.
    """

    def __init__(
        self,
        filepath: str,
        start_line: int,
        end_line: Optional[int] = None,
        language: Optional[str] = None,
        writer: Optional[DocstringWriter] = None,
        notify_stream: Optional[TextIO] = None,
        dry_run: bool = False,
        output_stream: Optional[TextIO] = None,
    ):
        super().__init__(notify_stream)
        end_line = start_line if end_line is None else end_line
        if start_line < 1:
            raise ValueError(f"Start line must be 1 or greater, got {start_line}")
        if end_line < start_line:
            raise ValueError(
                f"End line {end_line} is before start line {start_line}"
            )

        self.filepath = Path(filepath)
        self.start_line = start_line - 1
        self.end_line = end_line - 1
        self.language = language or language_for_path(self.filepath)
        self.writer = writer or DocstringWriter(
            base_path=str(self.filepath.resolve().parent)
        )
        self.dry_run = dry_run
        self.output_stream = output_stream

    def get_selection(self) -> Optional[SourceSnippet]:
        if not self.filepath.is_file():
            return None

        with self.filepath.open(encoding="utf-8") as f:
            lines = f.read().split("\n")

        selected = lines[self.start_line : self.end_line + 1]
        return SourceSnippet(
            text="\n".join(selected),
            language=self.language,
            start_line=self.start_line,
            end_line=self.end_line,
            filepath=str(self.filepath),
        )

    def insert_text(self, line: int, text: str) -> None:
        if self.dry_run:
            stream = self.output_stream or sys.stdout
            stream.write(text)
            stream.flush()
            return
        self.writer.insert_above(str(self.filepath), line, text)


class StreamEditorHost(_NotifyingHost):
    """Editor host that reads the selection from a stream and prints results.

    Parameters
    ----------
    language : str
        Host language identifier of the snippet.
    input_stream : TextIO, optional
        Source of the selected code. Defaults to stdin.
    output_stream : TextIO, optional
        Receives the inserted text. Defaults to stdout.
    notify_stream : TextIO, optional
        Where notices are printed. Defaults to stderr.
    """

    def __init__(
        self,
        language: str,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        notify_stream: Optional[TextIO] = None,
    ):
        super().__init__(notify_stream)
        self.language = language
        self.input_stream = input_stream
        self.output_stream = output_stream

    def get_selection(self) -> Optional[SourceSnippet]:
        stream = self.input_stream or sys.stdin
        text = stream.read()
        line_count = text.count("\n")
        return SourceSnippet(
            text=text,
            language=self.language,
            start_line=0,
            end_line=max(line_count - 1, 0) if text.endswith("\n") else line_count,
        )

    def insert_text(self, line: int, text: str) -> None:
        stream = self.output_stream or sys.stdout
        stream.write(text)
        stream.flush()
