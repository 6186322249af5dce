"""
Tests for rendering the markdown AST back to text
"""
import pytest

from notedown.markdown_ast_builder import create_empty_document, parse_markdown
from notedown.markdown_ast_node import (
    MarkdownASTDocumentNode, MarkdownASTParagraphNode, MarkdownASTTextNode, MarkdownASTWikiLinkNode
)
from notedown.markdown_text_renderer import MarkdownTextRenderer, ast_to_text


NORMALIZED_DOCUMENTS = [
    "",
    "plain text",
    "# Foo\n",
    "## Heading with **bold**\nand a paragraph",
    "- one\n- two\n  - nested\n1. ordered",
    "- ",
    "- first\n- ",
    "```python\nprint('hi')\n```\nafter",
    "> quoted *text*\n---\n",
    "one\n\n\ntwo",
    "[[entry-1]] and [[entry-2|Custom]] and [link](http://example.com)",
    "~~gone~~ `code` **bold**\n",
    "\n\n",
]


@pytest.mark.parametrize("text", NORMALIZED_DOCUMENTS)
def test_round_trip(text):
    """Test that normalized text is reproduced exactly."""
    assert ast_to_text(parse_markdown(text)) == text


@pytest.mark.parametrize("text,expected", [
    ("#Title", "# Title"),
    ("* item", "- item"),
    ("+ item", "- item"),
    ("1. a\n2. b\n3. c", "1. a\n1. b\n1. c"),
    ("   - three spaces", "  - three spaces"),
    ("_x_ and __y__", "*x* and **y**"),
    ("***\n___", "---\n---"),
    ("[[ entry-1 ]]", "[[entry-1]]"),
    ("[[entry-1|entry-1]]", "[[entry-1]]"),
    (">   spaced quote", "> spaced quote"),
])
def test_normalization(text, expected):
    """Test texts that normalize to a canonical form."""
    assert ast_to_text(parse_markdown(text)) == expected


@pytest.mark.parametrize("text", [
    "#Title\n* a\n2. b\n___",
    "_x_ __y__ [[ id | Name ]]",
    "1. a\n   2. b\n      3. c",
    "#\n##\n- \n  * ",
])
def test_normalization_is_idempotent(text):
    """Test that normalizing an already normalized text changes nothing."""
    once = ast_to_text(parse_markdown(text))
    assert ast_to_text(parse_markdown(once)) == once


def test_empty_document():
    """Test rendering the empty document."""
    assert ast_to_text(create_empty_document()) == ""


def test_wiki_link_without_display_name():
    """Test that a wiki link with no display text is written with its ID only."""
    node = MarkdownASTWikiLinkNode(0, 9, "abc", [MarkdownASTTextNode(2, 2, "")])
    doc = MarkdownASTDocumentNode(0, 9, [MarkdownASTParagraphNode(0, 9, [node])])
    assert MarkdownTextRenderer().visit(doc) == "[[abc]]"


def test_render_subtree():
    """Test rendering a single node rather than a whole document."""
    doc = parse_markdown("- item **bold**")
    item = doc.children[0].children[0]
    assert ast_to_text(item) == "- item **bold**"
    assert ast_to_text(item.children[1]) == "**bold**"
