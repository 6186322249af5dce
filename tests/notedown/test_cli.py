"""
Tests for the notedown command line interface
"""
import json
import os

import pytest

from notedown.cli import cleanup_old_logs, load_entry_titles, main, parse_arguments, setup_logging
from notedown.editor_exceptions import TitleMapError
from notedown.editor_settings import CURSOR_HTML


@pytest.fixture
def run_cli(tmp_path):
    """Fixture that runs the CLI with logs written under a temporary directory."""
    def _run(*args):
        return main(["--log-dir", str(tmp_path / "logs"), *args])

    return _run


@pytest.fixture
def markdown_file(tmp_path):
    """Factory fixture that writes a markdown file and returns its path."""
    def _write(content, name="doc.md"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


def test_parse_arguments():
    """Test parsing the render subcommand's arguments."""
    args = parse_arguments(["render", "doc.md", "--cursor", "3", "--wiki-slug", "team"])
    assert args.command == "render"
    assert args.file == "doc.md"
    assert args.cursor == 3
    assert args.wiki_slug == "team"
    assert args.titles is None
    assert args.settings is None


def test_subcommand_is_required():
    """Test that a subcommand must be given."""
    with pytest.raises(SystemExit):
        parse_arguments([])


def test_text_command(run_cli, markdown_file, capsys):
    """Test printing normalized markdown."""
    assert run_cli("text", markdown_file("#Title\n* item")) == 0
    assert capsys.readouterr().out == "# Title\n- item"


def test_tokens_command(run_cli, markdown_file, capsys):
    """Test printing the token stream."""
    assert run_cli("tokens", markdown_file("# Foo\nbar")) == 0
    assert capsys.readouterr().out.splitlines() == [
        "heading [0-6] '# Foo\\n'",
        "text [6-9] 'bar'",
    ]


def test_ast_command(run_cli, markdown_file, capsys):
    """Test printing the AST as an outline."""
    assert run_cli("ast", markdown_file("text")) == 0
    assert capsys.readouterr().out.splitlines() == [
        "document [0-4]",
        "  paragraph [0-4]",
        "    text: 'text' [0-4]",
    ]


def test_ast_json_command(run_cli, markdown_file, capsys):
    """Test printing the AST as JSON."""
    assert run_cli("ast", markdown_file("## Hi"), "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["type"] == "document"
    assert data["children"][0]["type"] == "heading"
    assert data["children"][0]["level"] == 2


def test_render_command(run_cli, markdown_file, capsys):
    """Test rendering with a cursor."""
    assert run_cli("render", markdown_file("# Foo\n"), "--cursor", "6") == 0
    assert capsys.readouterr().out == f"<h1>Foo</h1><p>{CURSOR_HTML}</p>\n"


def test_render_without_cursor(run_cli, markdown_file, capsys):
    """Test that no cursor is rendered by default."""
    assert run_cli("render", markdown_file("**bold**")) == 0
    assert capsys.readouterr().out == "<p><strong>bold</strong></p>\n"


def test_render_with_titles_and_settings(run_cli, markdown_file, tmp_path, capsys):
    """Test rendering wiki links with a title map and custom settings."""
    titles = tmp_path / "titles.json"
    titles.write_text(json.dumps({"e1": "Entry One"}), encoding="utf-8")
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"entryRoute": "/notes"}), encoding="utf-8")

    result = run_cli("--settings", str(settings), "render", markdown_file("[[e1]]"), "--titles", str(titles))
    assert result == 0
    assert capsys.readouterr().out == '<p><a href="/notes/e1" class="wiki-link">Entry One</a></p>\n'


def test_render_with_bad_titles(run_cli, markdown_file, tmp_path, capsys):
    """Test that a malformed title map is reported as an error."""
    titles = tmp_path / "titles.json"
    titles.write_text("[1, 2]", encoding="utf-8")

    assert run_cli("render", markdown_file("[[e1]]"), "--titles", str(titles)) == 1
    assert "Error:" in capsys.readouterr().err


def test_bad_settings_file(run_cli, markdown_file, tmp_path, capsys):
    """Test that an invalid settings file is reported as an error."""
    settings = tmp_path / "settings.json"
    settings.write_text("{oops", encoding="utf-8")

    assert run_cli("--settings", str(settings), "render", markdown_file("x")) == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_missing_input_file(run_cli, tmp_path, capsys):
    """Test that a missing input file is reported as an error."""
    assert run_cli("text", str(tmp_path / "missing.md")) == 1
    assert "Error:" in capsys.readouterr().err


def test_load_entry_titles(tmp_path):
    """Test loading and validating a title map."""
    path = tmp_path / "titles.json"
    path.write_text(json.dumps({"a": "A", "b": "B"}), encoding="utf-8")
    assert load_entry_titles(str(path)) == {"a": "A", "b": "B"}

    path.write_text(json.dumps({"a": 1}), encoding="utf-8")
    with pytest.raises(TitleMapError) as exc_info:
        load_entry_titles(str(path))

    assert exc_info.value.error_details["entry_id"] == "a"


def test_setup_logging_creates_log_file(tmp_path):
    """Test that logging setup creates the log directory and a log file."""
    log_dir = tmp_path / "nested" / "logs"
    setup_logging(str(log_dir))
    assert any(name.endswith(".log") for name in os.listdir(log_dir))


def test_cleanup_old_logs(tmp_path):
    """Test that the oldest log files are removed."""
    for i in range(5):
        path = tmp_path / f"{i}.log"
        path.write_text("x", encoding="utf-8")
        os.utime(path, (1000 + i, 1000 + i))

    cleanup_old_logs(str(tmp_path), max_logs=3)
    assert len(os.listdir(tmp_path)) == 3
