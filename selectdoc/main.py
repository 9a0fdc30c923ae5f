"""Command-line interface for selectdoc.

This module provides the main entry point for generating docstrings from the
command line. It uses argparse to handle subcommands and configuration:
- generate: insert a docstring above a line range of a file
- suggest: print the docstring without touching the file
- prompt: print the prompt that would be sent to the model
"""

import argparse
import logging
import sys
from typing import Optional

from . import __version__
from .config import ChatConfig
from .editor.file_host import FileEditorHost, StreamEditorHost
from .editor.host import EditorHost
from .generator import DocstringGenerator
from .llm.chat_client import ChatClient
from .llm.prompt_builder import PromptBuilder
from .models.source_snippet import language_for_path


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_config(args: argparse.Namespace) -> ChatConfig:
    """Resolve chat settings from the environment and command-line flags.

    Args:
        args: Parsed command-line arguments.

    Returns:
        ChatConfig with flag values taking precedence over the environment.

    Raises:
        ValueError: If an environment variable or flag holds an invalid value.
    """
    return ChatConfig.from_env().with_overrides(
        model=args.model,
        base_url=args.host,
        max_tokens=args.max_tokens,
        timeout=args.timeout,
    )


def build_host(args: argparse.Namespace, dry_run: bool = False) -> EditorHost:
    """Create the editor host for a file range, or for stdin when no file is given.

    Args:
        args: Parsed command-line arguments.
        dry_run: Print the result instead of editing the file.

    Returns:
        FileEditorHost or StreamEditorHost.

    Raises:
        ValueError: If the line range is invalid.
    """
    if args.file is None:
        return StreamEditorHost(language=args.language or "plaintext")

    return FileEditorHost(
        args.file,
        start_line=args.start_line,
        end_line=args.end_line,
        language=args.language,
        dry_run=dry_run,
    )


def cmd_generate(
    args: argparse.Namespace,
    generator: DocstringGenerator,
    host: EditorHost,
) -> int:
    """Handle the generate and suggest subcommands.

    Args:
        args: Parsed command-line arguments.
        generator: DocstringGenerator instance (dependency injection).
        host: Editor host supplying the selection and receiving the edit.

    Returns:
        Exit code (0 when a docstring was inserted or printed, 1 otherwise).
    """
    try:
        if args.verbose:
            print(f"Model: {generator.client.model}", file=sys.stderr)

        result = generator.generate(host)

        if result.succeeded and args.verbose and args.command == "generate":
            print(
                f"Inserted docstring above line {args.start_line} of {args.file}",
                file=sys.stderr,
            )
        return 0 if result.succeeded else 1

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        return 1


def cmd_prompt(
    args: argparse.Namespace, prompt_builder: PromptBuilder, host: EditorHost
) -> int:
    """Handle the prompt subcommand.

    Args:
        args: Parsed command-line arguments.
        prompt_builder: PromptBuilder instance (dependency injection).
        host: Editor host supplying the selection.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        snippet = host.get_selection()
        if snippet is None:
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1

        print(prompt_builder.build_prompt(snippet.text, snippet.language))
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _add_selection_arguments(parser: argparse.ArgumentParser, file_required: bool) -> None:
    if file_required:
        parser.add_argument("file", help="Source file containing the selection")
    else:
        parser.add_argument(
            "file",
            nargs="?",
            default=None,
            help="Source file containing the selection (default: read stdin)",
        )
    parser.add_argument(
        "--start-line",
        type=int,
        default=1,
        help="First selected line, 1-based (default: 1)",
    )
    parser.add_argument(
        "--end-line",
        type=int,
        default=None,
        help="Last selected line, 1-based and inclusive (default: start line)",
    )
    parser.add_argument(
        "--language",
        default=None,
        help=(
            "Language identifier such as python or java "
            "(default: derived from the file extension)"
        ),
    )


def _add_model_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--model",
        default=None,
        help="Model identifier (default: $SELECTDOC_MODEL or deepseek-r1:latest)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Ollama server address (default: $OLLAMA_HOST or http://localhost:11434)",
    )
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        help="Maximum tokens to generate (default: $SELECTDOC_MAX_TOKENS or 4096)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose output"
    )


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the command-line interface.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = argparse.ArgumentParser(
        prog="selectdoc",
        description="Generate docstrings for highlighted code with a local chat model",
    )
    parser.add_argument(
        "--version", action="version", version=f"selectdoc {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command (edit the file)
    generate_parser = subparsers.add_parser(
        "generate", help="Insert a generated docstring above the selected lines"
    )
    _add_selection_arguments(generate_parser, file_required=True)
    _add_model_arguments(generate_parser)

    # Suggest command (print only)
    suggest_parser = subparsers.add_parser(
        "suggest", help="Print a generated docstring without editing the file"
    )
    _add_selection_arguments(suggest_parser, file_required=False)
    _add_model_arguments(suggest_parser)

    # Prompt command (no model call)
    prompt_parser = subparsers.add_parser(
        "prompt", help="Print the prompt that would be sent to the model"
    )
    _add_selection_arguments(prompt_parser, file_required=False)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.file is not None and args.language is None:
        args.language = language_for_path(args.file)

    prompt_builder = PromptBuilder()

    try:
        host = build_host(args, dry_run=args.command == "suggest")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "prompt":
        return cmd_prompt(args, prompt_builder, host)

    configure_logging(args.verbose)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    generator = DocstringGenerator(ChatClient(config), prompt_builder)
    return cmd_generate(args, generator, host)


if __name__ == "__main__":
    sys.exit(main())
