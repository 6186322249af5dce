"""Shared fixtures for notedown tests."""

import pytest

from notedown.editor_settings import CURSOR_HTML, EditorSettings
from notedown.markdown_ast_builder import MarkdownASTBuilder
from notedown.markdown_tokenizer import MarkdownTokenizer


@pytest.fixture
def tokenizer():
    """Fixture providing a markdown tokenizer instance."""
    return MarkdownTokenizer()


@pytest.fixture
def ast_builder():
    """Fixture providing a markdown AST builder instance."""
    return MarkdownASTBuilder()


@pytest.fixture
def settings():
    """Fixture providing default editor settings."""
    return EditorSettings.create_default()


@pytest.fixture
def cursor_html():
    """Fixture providing the HTML used for the cursor marker."""
    return CURSOR_HTML
