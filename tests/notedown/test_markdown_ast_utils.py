"""
Tests for locating nodes and list context in the markdown AST
"""
import logging

from notedown import markdown_ast_utils
from notedown.markdown_ast_builder import parse_markdown
from notedown.markdown_ast_node import MarkdownASTNodeType, MarkdownASTParagraphNode, MarkdownASTTextNode
from notedown.markdown_ast_utils import (
    MAX_ANCESTOR_DEPTH, find_ancestor_of_type, find_node_at_position, find_parent_node,
    get_list_context, get_list_item_content_start
)


def test_find_deepest_node():
    """Test finding the deepest node containing a position."""
    doc = parse_markdown("text **bold**")
    node = find_node_at_position(doc, 8)
    assert node.__class__.__name__ == "MarkdownASTTextNode"
    assert node.text == "bold"


def test_later_sibling_wins_at_boundary():
    """Test that a position at the start of a line resolves to that line."""
    doc = parse_markdown("- a\nb")
    node = find_node_at_position(doc, 4)
    assert node.__class__.__name__ == "MarkdownASTTextNode"
    assert node.text == "b"


def test_position_at_end_of_line():
    """Test that a position at the end of a line's text resolves to that line."""
    doc = parse_markdown("- a\nb")
    node = find_node_at_position(doc, 3)
    assert node.text == "a"


def test_position_outside_document():
    """Test that a position outside the document finds nothing."""
    doc = parse_markdown("abc")
    assert find_node_at_position(doc, 10) is None
    assert find_node_at_position(doc, -1) is None


def test_find_node_in_empty_document():
    """Test that position 0 of an empty document is the document itself."""
    doc = parse_markdown("")
    assert find_node_at_position(doc, 0) is doc


def test_find_node_survives_cycle(caplog):
    """Test that descending through a cyclic tree terminates."""
    child = MarkdownASTParagraphNode(0, 5)
    root = MarkdownASTParagraphNode(0, 5, [child])
    child.children = [root]

    with caplog.at_level(logging.ERROR):
        node = find_node_at_position(root, 2)

    assert node is child
    assert "cycle detected" in caplog.text


def test_find_parent_node():
    """Test finding parents by searching from the root."""
    doc = parse_markdown("- a **b**")
    item_list = doc.children[0]
    item = item_list.children[0]
    bold = item.children[1]

    assert find_parent_node(doc, bold) is item
    assert find_parent_node(doc, item) is item_list
    assert find_parent_node(doc, item_list) is doc
    assert find_parent_node(doc, doc) is None


def test_find_parent_of_node_not_in_tree():
    """Test looking for the parent of a node that isn't in the tree."""
    doc = parse_markdown("abc")
    assert find_parent_node(doc, MarkdownASTTextNode(0, 1, "a")) is None


def test_find_ancestor_of_type():
    """Test finding the nearest ancestor of a type."""
    doc = parse_markdown("- a **b**")
    text = find_node_at_position(doc, 6)
    assert text.text == "b"

    item = find_ancestor_of_type(doc, text, MarkdownASTNodeType.LIST_ITEM)
    assert item is doc.children[0].children[0]

    bold = doc.children[0].children[0].children[1]
    assert find_ancestor_of_type(doc, text, MarkdownASTNodeType.BOLD) is bold
    assert find_ancestor_of_type(doc, text, MarkdownASTNodeType.HEADING) is None


def test_find_ancestor_includes_node_itself():
    """Test that a node of the wanted type is its own nearest ancestor."""
    doc = parse_markdown("# Title")
    heading = doc.children[0]
    assert find_ancestor_of_type(doc, heading, MarkdownASTNodeType.HEADING) is heading


def test_find_ancestor_stops_on_cycle(monkeypatch, caplog):
    """Test that the ancestor walk stops if a node turns out to be its own parent."""
    doc = parse_markdown("plain")
    text = doc.children[0].children[0]
    monkeypatch.setattr(markdown_ast_utils, "find_parent_node", lambda root, target: target)

    with caplog.at_level(logging.ERROR):
        result = find_ancestor_of_type(doc, text, MarkdownASTNodeType.LIST_ITEM)

    assert result is None
    assert "cycle detected" in caplog.text


def test_find_ancestor_walk_is_bounded(monkeypatch, caplog):
    """Test that an endless chain of parents is cut off."""
    calls = []
    parents = []

    def endless_parent(root, target):
        calls.append(target)
        parents.append(MarkdownASTParagraphNode(0, 0))
        return parents[-1]

    doc = parse_markdown("plain")
    monkeypatch.setattr(markdown_ast_utils, "find_parent_node", endless_parent)

    with caplog.at_level(logging.ERROR):
        result = find_ancestor_of_type(doc, doc, MarkdownASTNodeType.LIST_ITEM)

    assert result is None
    assert len(calls) == MAX_ANCESTOR_DEPTH
    assert "exceeded" in caplog.text


def test_list_context_in_item():
    """Test the list context for a position within a list item."""
    doc = parse_markdown("- one\n- two")
    context = get_list_context(doc, 4)
    assert context.in_list
    assert context.list_item is doc.children[0].children[0]
    assert context.list is doc.children[0]
    assert not context.is_empty_item
    assert context.text_before_cursor == "on"
    assert context.text_after_cursor == "e"


def test_list_context_for_empty_item():
    """Test the list context for an empty list item."""
    doc = parse_markdown("- one\n- ")
    context = get_list_context(doc, 8)
    assert context.in_list
    assert context.list_item is doc.children[0].children[1]
    assert context.is_empty_item
    assert context.text_before_cursor == ""
    assert context.text_after_cursor == ""


def test_list_context_in_marker():
    """Test that a position in a list marker is still within the item."""
    doc = parse_markdown("- one")
    context = get_list_context(doc, 0)
    assert context.in_list
    assert context.text_before_cursor == ""
    assert context.text_after_cursor == "one"


def test_list_context_outside_list():
    """Test the list context for positions outside any list."""
    doc = parse_markdown("- one\ntext")
    assert not get_list_context(doc, 8).in_list
    assert not get_list_context(parse_markdown(""), 0).in_list
    assert not get_list_context(doc, 100).in_list


def test_list_item_content_start():
    """Test finding where a list item's content starts."""
    doc = parse_markdown("text\n  1. item")
    item = doc.children[1].children[0]
    assert get_list_item_content_start(item) == 10
