"""
Tests for DocstringGenerator covering every path of a generation run.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from selectdoc.editor.file_host import ERROR, INFO, FileEditorHost
from selectdoc.editor.host import EditorHost
from selectdoc.generator import (
    EMPTY_RESPONSE_MESSAGE,
    EMPTY_SELECTION_MESSAGE,
    NO_EDITOR_MESSAGE,
    DocstringGenerator,
    GenerationStatus,
    generate_docstring_text,
)
from selectdoc.llm.chat_client import ChatClient
from selectdoc.llm.prompt_builder import PromptBuilder, select_prompt
from selectdoc.models.source_snippet import SourceSnippet

PYTHON_REPLY = (
    "<think>reasoning here</think>```python\n"
    '"""Adds two numbers.\n\nArgs:\n    a: first\n    b: second\n\n'
    'Returns:\n    sum\n"""\n```'
)
PYTHON_DOCSTRING = (
    '"""Adds two numbers.\n\nArgs:\n    a: first\n    b: second\n\n'
    'Returns:\n    sum\n"""'
)


def make_host(snippet):
    """Create a mock host returning the given selection."""
    host = Mock(spec=EditorHost)
    host.get_selection.return_value = snippet
    return host


def make_client(reply=None, error=None):
    """Create a mock chat client with a canned reply or error."""
    client = Mock(spec=ChatClient)
    if error is not None:
        client.chat.side_effect = error
    else:
        client.chat.return_value = reply
    return client


class TestPreconditions:
    """Test runs that stop before calling the model."""

    def test_no_active_editor(self):
        """Test that a missing editor shows a notice and skips the model."""
        host = make_host(None)
        client = make_client("unused")

        result = DocstringGenerator(client).generate(host)

        assert result.status is GenerationStatus.NO_EDITOR
        host.show_information_message.assert_called_once_with(NO_EDITOR_MESSAGE)
        client.chat.assert_not_called()
        host.insert_text.assert_not_called()

    def test_empty_selection(self):
        """Test that an empty selection shows a notice and skips the model."""
        host = make_host(SourceSnippet(text="", language="python"))
        client = make_client("unused")

        result = DocstringGenerator(client).generate(host)

        assert result.status is GenerationStatus.EMPTY_SELECTION
        assert not result.succeeded
        host.show_information_message.assert_called_once_with(EMPTY_SELECTION_MESSAGE)
        client.chat.assert_not_called()
        host.insert_text.assert_not_called()


class TestSuccessfulRuns:
    """Test runs that insert a docstring."""

    def test_python_end_to_end(self):
        """Test reasoning and fence removal followed by insertion."""
        snippet = SourceSnippet(
            text="def add(a, b):\n    return a + b", language="python", start_line=7
        )
        host = make_host(snippet)
        client = make_client(PYTHON_REPLY)

        result = DocstringGenerator(client).generate(host)

        assert result.succeeded
        assert result.docstring == PYTHON_DOCSTRING
        host.insert_text.assert_called_once_with(7, PYTHON_DOCSTRING + "\n")
        host.show_error_message.assert_not_called()

    def test_prompt_matches_language(self):
        """Test that the model receives the language-specific prompt."""
        snippet = SourceSnippet(text="public int f() {}", language="java")
        client = make_client("/** Does f. */")

        DocstringGenerator(client).generate(make_host(snippet))

        client.chat.assert_called_once_with(select_prompt("java", "public int f() {}"))

    def test_other_language_is_unchanged(self):
        """Test that a plain reply for an unknown language is inserted as-is."""
        snippet = SourceSnippet(text="fn add() {}", language="other")
        host = make_host(snippet)

        result = DocstringGenerator(make_client("Returns the sum.")).generate(host)

        assert result.docstring == "Returns the sum."
        host.insert_text.assert_called_once_with(0, "Returns the sum.\n")

    def test_java_block_extracted_from_prose(self):
        """Test that commentary around a JavaDoc block is dropped."""
        snippet = SourceSnippet(text="boolean isOdd(int n)", language="java", start_line=3)
        host = make_host(snippet)
        reply = "Here is the comment:\n/**\n * Checks oddness.\n */\nEnjoy."

        result = DocstringGenerator(make_client(reply)).generate(host)

        assert result.docstring == "/**\n * Checks oddness.\n */"
        host.insert_text.assert_called_once_with(3, "/**\n * Checks oddness.\n */\n")

    def test_injected_prompt_builder(self):
        """Test that a custom prompt builder is used."""
        builder = Mock(spec=PromptBuilder)
        builder.build_prompt.return_value = "custom prompt"
        client = make_client("doc")
        snippet = SourceSnippet(text="x = 1", language="python")

        DocstringGenerator(client, builder).generate(make_host(snippet))

        builder.build_prompt.assert_called_once_with("x = 1", "python")
        client.chat.assert_called_once_with("custom prompt")


class TestFailures:
    """Test runs that end without editing the document."""

    def test_model_error(self, caplog):
        """Test that a failing model call is logged and reported."""
        host = make_host(SourceSnippet(text="def f(): pass", language="python"))
        error = ConnectionError("connection refused")

        result = DocstringGenerator(make_client(error=error)).generate(host)

        assert result.status is GenerationStatus.MODEL_ERROR
        assert result.error is error
        host.show_error_message.assert_called_once_with(
            "Error generating docstring: connection refused"
        )
        host.insert_text.assert_not_called()
        assert "Chat model request failed" in caplog.text

    @pytest.mark.parametrize("reply", ["", "   \n\t", None])
    def test_empty_reply(self, reply):
        """Test that an empty reply is reported as could-not-generate."""
        host = make_host(SourceSnippet(text="def f(): pass", language="python"))

        result = DocstringGenerator(make_client(reply)).generate(host)

        assert result.status is GenerationStatus.EMPTY_RESPONSE
        host.show_information_message.assert_called_once_with(EMPTY_RESPONSE_MESSAGE)
        host.insert_text.assert_not_called()

    def test_reply_empty_after_cleaning(self):
        """Test that a reply holding only reasoning is not inserted."""
        host = make_host(SourceSnippet(text="def f(): pass", language="python"))

        result = DocstringGenerator(
            make_client("<think>I have nothing to add.</think>")
        ).generate(host)

        assert result.status is GenerationStatus.EMPTY_RESPONSE
        host.insert_text.assert_not_called()

    def test_insert_error(self):
        """Test that a failed edit is reported, not raised."""
        host = make_host(SourceSnippet(text="def f(): pass", language="python"))
        host.insert_text.side_effect = OSError("disk full")

        result = DocstringGenerator(make_client('"""Doc."""')).generate(host)

        assert result.status is GenerationStatus.INSERT_ERROR
        assert result.docstring == '"""Doc."""'
        host.show_error_message.assert_called_once_with(
            "Error inserting docstring: disk full"
        )

    @pytest.mark.parametrize(
        "error",
        [
            UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
            PermissionError("Permission denied"),
        ],
    )
    def test_selection_read_error(self, error):
        """Test that an unreadable selection is reported, not raised."""
        host = Mock(spec=EditorHost)
        host.get_selection.side_effect = error
        client = make_client("unused")

        result = DocstringGenerator(client).generate(host)

        assert result.status is GenerationStatus.SELECTION_ERROR
        assert result.error is error
        message = host.show_error_message.call_args.args[0]
        assert message.startswith("Error reading selection:")
        client.chat.assert_not_called()
        host.insert_text.assert_not_called()


class TestGenerateDocstringText:
    """Test the host-free helper."""

    def test_returns_cleaned_text(self):
        """Test that the helper returns the cleaned docstring."""
        snippet = SourceSnippet(text="def add(a, b): ...", language="python")

        text = generate_docstring_text(snippet, make_client(PYTHON_REPLY), PromptBuilder())

        assert text == PYTHON_DOCSTRING

    def test_errors_propagate(self):
        """Test that model errors are not swallowed."""
        snippet = SourceSnippet(text="x", language="python")

        with pytest.raises(TimeoutError):
            generate_docstring_text(
                snippet, make_client(error=TimeoutError("slow")), PromptBuilder()
            )


class TestWithFileHost:
    """Test the generator against a real file."""

    def test_inserts_above_selection(self, tmp_path):
        """Test that the file gains the docstring above the selected lines."""
        source = tmp_path / "calc.py"
        source.write_text("import os\n\ndef add(a, b):\n    return a + b\n")
        host = FileEditorHost(str(source), start_line=3, end_line=4)

        result = DocstringGenerator(make_client(PYTHON_REPLY)).generate(host)

        assert result.succeeded
        assert source.read_text() == (
            "import os\n\n" + PYTHON_DOCSTRING + "\ndef add(a, b):\n    return a + b\n"
        )

    def test_model_error_leaves_file_untouched(self, tmp_path):
        """Test that no partial edit happens on failure."""
        source = tmp_path / "calc.py"
        source.write_text("def add(a, b):\n    return a + b\n")
        host = FileEditorHost(str(source), start_line=1, notify_stream=sys.stderr)

        result = DocstringGenerator(
            make_client(error=RuntimeError("model not found"))
        ).generate(host)

        assert result.status is GenerationStatus.MODEL_ERROR
        assert source.read_text() == "def add(a, b):\n    return a + b\n"
        assert host.messages == [(ERROR, "Error generating docstring: model not found")]

    def test_missing_file_notice(self, tmp_path):
        """Test that a missing file takes the no-editor path."""
        host = FileEditorHost(str(tmp_path / "nope.py"), start_line=1)
        client = make_client("unused")

        result = DocstringGenerator(client).generate(host)

        assert result.status is GenerationStatus.NO_EDITOR
        assert host.messages == [(INFO, NO_EDITOR_MESSAGE)]
        client.chat.assert_not_called()

    def test_undecodable_file_notice(self, tmp_path):
        """Test that a file that is not UTF-8 ends the run with an error notice."""
        source = tmp_path / "legacy.py"
        source.write_bytes(b"def caf\xe9():\n    pass\n")
        host = FileEditorHost(str(source), start_line=1)
        client = make_client("unused")

        result = DocstringGenerator(client).generate(host)

        assert result.status is GenerationStatus.SELECTION_ERROR
        assert host.messages[0][0] == ERROR
        assert host.messages[0][1].startswith("Error reading selection:")
        assert source.read_bytes() == b"def caf\xe9():\n    pass\n"
        client.chat.assert_not_called()
