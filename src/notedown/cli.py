"""
Command line interface for the notedown markdown engine.

This lets documents be inspected and rendered without a host application:
    python -m notedown render notes.md --cursor 12
    python -m notedown ast notes.md --json
"""

import argparse
from datetime import datetime, timezone
import glob
import json
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Dict, List

from notedown.editor_exceptions import EditorError, TitleMapError
from notedown.editor_settings import EditorSettings
from notedown.markdown_ast_builder import parse_markdown
from notedown.markdown_ast_printer import MarkdownASTPrinter
from notedown.markdown_ast_serializer import serialize_ast
from notedown.markdown_html_renderer import render_ast_with_cursor
from notedown.markdown_text_renderer import ast_to_text
from notedown.markdown_tokenizer import tokenize


DEFAULT_LOG_DIR = "~/.notedown/logs"


def setup_logging(log_dir: str) -> None:
    """
    Configure logging with timestamped files and rotation.

    Args:
        log_dir: Directory to write log files to
    """
    log_dir = os.path.expanduser(log_dir)
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=49,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Another process may have removed it already


def read_input(path: str) -> str:
    """
    Read a markdown document.

    Args:
        path: Path to the document, or "-" for stdin

    Returns:
        The document text
    """
    if path == "-":
        return sys.stdin.read()

    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def load_entry_titles(path: str) -> Dict[str, str]:
    """
    Load a map of entry IDs to titles from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Titles keyed by entry ID

    Raises:
        TitleMapError: If the file does not contain an object mapping strings to strings
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)

        except json.JSONDecodeError as e:
            raise TitleMapError(f"Invalid JSON in title map {path}: {e}", {"path": path}) from e

    if not isinstance(data, dict):
        raise TitleMapError(f"Title map {path} must be a JSON object", {"path": path})

    for entry_id, title in data.items():
        if not isinstance(title, str):
            raise TitleMapError(
                f"Title for entry '{entry_id}' must be a string",
                {"path": path, "entry_id": entry_id}
            )

    return data


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="notedown",
        description="Inspect and render notedown markdown documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render to HTML with the cursor at offset 12
  python -m notedown render notes.md --cursor 12

  # Render wiki links using entry titles
  python -m notedown render notes.md --titles titles.json

  # Show the normalized markdown
  python -m notedown text notes.md

  # Dump the AST as JSON
  python -m notedown ast notes.md --json
        """
    )

    parser.add_argument(
        '--settings',
        help='JSON file with editor settings'
    )

    parser.add_argument(
        '--log-dir',
        default=DEFAULT_LOG_DIR,
        help=f'Directory for log files (default: {DEFAULT_LOG_DIR})'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    render_parser = subparsers.add_parser('render', help='Render a document to HTML')
    render_parser.add_argument('file', help='Markdown file, or - for stdin')
    render_parser.add_argument(
        '--cursor',
        type=int,
        default=-1,
        help='Cursor offset to show in the output (default: no cursor)'
    )
    render_parser.add_argument('--titles', help='JSON file mapping entry IDs to titles')
    render_parser.add_argument('--wiki-slug', help='Render wiki links as public wiki links for this wiki')

    text_parser = subparsers.add_parser('text', help='Print the normalized markdown text')
    text_parser.add_argument('file', help='Markdown file, or - for stdin')

    tokens_parser = subparsers.add_parser('tokens', help='Print the token stream')
    tokens_parser.add_argument('file', help='Markdown file, or - for stdin')

    ast_parser = subparsers.add_parser('ast', help='Print the syntax tree')
    ast_parser.add_argument('file', help='Markdown file, or - for stdin')
    ast_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the tree as JSON instead of an indented outline'
    )

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> None:
    """
    Run the selected subcommand, writing its output to stdout.

    Args:
        args: Parsed command-line arguments
    """
    text = read_input(args.file)

    if args.command == 'tokens':
        for token in tokenize(text):
            print(f"{token.type.value} [{token.start}-{token.end}] {token.raw!r}")

        return

    ast = parse_markdown(text)

    if args.command == 'text':
        sys.stdout.write(ast_to_text(ast))
        return

    if args.command == 'ast':
        if args.json:
            print(json.dumps(serialize_ast(ast), indent=2))

        else:
            MarkdownASTPrinter(sys.stdout).visit(ast)

        return

    settings = EditorSettings.load(args.settings) if args.settings else EditorSettings.create_default()
    titles = load_entry_titles(args.titles) if args.titles else None
    print(render_ast_with_cursor(ast, args.cursor, titles, args.wiki_slug, settings))


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(args.log_dir)
    logger = logging.getLogger("notedown")

    try:
        run_command(args)

    except EditorError as e:
        logger.error("command '%s' failed: %s (%s)", args.command, e, e.error_details)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except OSError as e:
        logger.error("command '%s' failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
