"""
Helpers for locating nodes and list context within a markdown AST.

AST nodes do not store parent references, so all parent lookups are tree searches from
the root.
"""

from dataclasses import dataclass
import logging
from typing import List

from notedown.markdown_ast_node import (
    MarkdownASTNode, MarkdownASTNodeType, MarkdownASTListNode, MarkdownASTListItemNode
)
from notedown.markdown_text_renderer import ast_to_text


# Upper bound on the number of ancestors visited when walking up from a node
MAX_ANCESTOR_DEPTH = 100


logger = logging.getLogger(__name__)


@dataclass
class ListContext:
    """
    Describes the list item, if any, that contains a cursor position.

    Attributes:
        in_list: True if the position is inside a list item
        list_item: The list item containing the position
        list: The list containing the list item
        is_empty_item: True if the item's content is empty or only whitespace
        text_before_cursor: Item content before the position
        text_after_cursor: Item content after the position
    """
    in_list: bool
    list_item: MarkdownASTListItemNode | None = None
    list: MarkdownASTListNode | None = None
    is_empty_item: bool = False
    text_before_cursor: str = ""
    text_after_cursor: str = ""


def find_node_at_position(root: MarkdownASTNode, pos: int) -> MarkdownASTNode | None:
    """
    Find the deepest node whose source range contains a position.

    Ranges include both their start and end.  Where two siblings both contain the
    position (one ends exactly where the next begins) the later sibling wins, so a
    position at the start of a line resolves to that line rather than the one before.

    Args:
        root: The node to search from
        pos: Absolute position in the document

    Returns:
        The deepest containing node, or None if the position lies outside root
    """
    if not root.contains(pos):
        return None

    node = root
    visited = {id(root)}
    while True:
        next_node = None
        for child in reversed(node.children):
            if child.contains(pos):
                next_node = child
                break

        if next_node is None:
            return node

        if id(next_node) in visited:
            logger.error("cycle detected descending to position %d at %r", pos, next_node)
            return node

        visited.add(id(next_node))
        node = next_node


def find_parent_node(root: MarkdownASTNode, target: MarkdownASTNode) -> MarkdownASTNode | None:
    """
    Find the parent of a node by searching down from the root.

    Args:
        root: The root of the tree to search
        target: The node whose parent is wanted

    Returns:
        The parent node, or None if target is root or is not in the tree
    """
    stack: List[MarkdownASTNode] = [root]
    visited = {id(root)}
    while stack:
        node = stack.pop()
        for child in node.children:
            if child is target:
                return node

            if id(child) not in visited:
                visited.add(id(child))
                stack.append(child)

    return None


def find_ancestor_of_type(
    root: MarkdownASTNode,
    node: MarkdownASTNode,
    node_type: MarkdownASTNodeType
) -> MarkdownASTNode | None:
    """
    Find the nearest node of a given type among a node and its ancestors.

    The walk is bounded and tracks visited nodes, terminating if a cycle is found.

    Args:
        root: The root of the tree
        node: The node to start from
        node_type: The type of node wanted

    Returns:
        The matching node, or None if there isn't one
    """
    visited: set[int] = set()
    current: MarkdownASTNode | None = node

    for _ in range(MAX_ANCESTOR_DEPTH):
        if current is None:
            return None

        if id(current) in visited:
            logger.error("cycle detected walking ancestors of %r", node)
            return None

        visited.add(id(current))
        if current.node_type == node_type:
            return current

        current = find_parent_node(root, current)

    logger.error("ancestor walk from %r exceeded %d levels", node, MAX_ANCESTOR_DEPTH)
    return None


def get_list_item_content_start(list_item: MarkdownASTListItemNode) -> int:
    """
    Get the position at which a list item's content starts, just after its marker.

    Args:
        list_item: The list item

    Returns:
        The absolute position of the first content character
    """
    if list_item.children:
        return list_item.children[0].start

    return list_item.end


def get_list_context(root: MarkdownASTNode, pos: int) -> ListContext:
    """
    Work out whether a position lies within a list item.

    Args:
        root: The document node
        pos: Absolute cursor position

    Returns:
        The list context for the position
    """
    node = find_node_at_position(root, pos)
    if node is None:
        return ListContext(in_list=False)

    list_item = find_ancestor_of_type(root, node, MarkdownASTNodeType.LIST_ITEM)
    if not isinstance(list_item, MarkdownASTListItemNode):
        return ListContext(in_list=False)

    parent = find_parent_node(root, list_item)
    item_list = parent if isinstance(parent, MarkdownASTListNode) else None

    content = "".join(ast_to_text(child) for child in list_item.children)
    offset = max(0, min(pos - get_list_item_content_start(list_item), len(content)))

    return ListContext(
        in_list=True,
        list_item=list_item,
        list=item_list,
        is_empty_item=not content.strip(),
        text_before_cursor=content[:offset],
        text_after_cursor=content[offset:]
    )
