"""
Visitor class for serializing markdown AST structures to plain dictionaries.

Serialized trees use camelCase keys so they can be stored alongside documents as JSON
and read back by other clients.
"""

from typing import Any, Callable, Dict, List

from notedown.editor_exceptions import ASTDeserializationError
from notedown.markdown_ast_node import (
    MarkdownASTNode, MarkdownASTNodeType, MarkdownASTVisitor, MarkdownASTDocumentNode,
    MarkdownASTParagraphNode, MarkdownASTHeadingNode, MarkdownASTListNode, MarkdownASTListItemNode,
    MarkdownASTCodeBlockNode, MarkdownASTBlockquoteNode, MarkdownASTHorizontalRuleNode,
    MarkdownASTTextNode, MarkdownASTBoldNode, MarkdownASTEmphasisNode, MarkdownASTStrikethroughNode,
    MarkdownASTInlineCodeNode, MarkdownASTLinkNode, MarkdownASTWikiLinkNode, MarkdownASTLineBreakNode
)
from notedown.markdown_tokenizer import MarkdownListType


class MarkdownASTSerializer(MarkdownASTVisitor):
    """Visitor that serializes the AST structure to dictionaries."""

    def _base(self, node: MarkdownASTNode) -> Dict[str, Any]:
        return {
            "type": node.node_type.value,
            "start": node.start,
            "end": node.end
        }

    def _container(self, node: MarkdownASTNode) -> Dict[str, Any]:
        result = self._base(node)
        result["children"] = super().generic_visit(node)
        return result

    def generic_visit(self, node: MarkdownASTNode) -> Dict[str, Any]:
        """Serialize a node that only has children."""
        return self._container(node)

    def visit_MarkdownASTHeadingNode(self, node: MarkdownASTHeadingNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a heading node."""
        result = self._container(node)
        result["level"] = node.level
        return result

    def visit_MarkdownASTListNode(self, node: MarkdownASTListNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a list node."""
        result = self._container(node)
        result["listType"] = node.list_type.value
        return result

    def visit_MarkdownASTListItemNode(self, node: MarkdownASTListItemNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a list item node."""
        result = self._container(node)
        result["listLevel"] = node.list_level
        result["listType"] = node.list_type.value
        return result

    def visit_MarkdownASTCodeBlockNode(self, node: MarkdownASTCodeBlockNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a code block node."""
        result = self._base(node)
        result["text"] = node.text
        result["language"] = node.language
        return result

    def visit_MarkdownASTTextNode(self, node: MarkdownASTTextNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a text node."""
        result = self._base(node)
        result["text"] = node.text
        return result

    def visit_MarkdownASTInlineCodeNode(self, node: MarkdownASTInlineCodeNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize an inline code node."""
        result = self._base(node)
        result["text"] = node.text
        return result

    def visit_MarkdownASTLinkNode(self, node: MarkdownASTLinkNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a link node."""
        result = self._container(node)
        result["href"] = node.href
        return result

    def visit_MarkdownASTWikiLinkNode(self, node: MarkdownASTWikiLinkNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a wiki link node."""
        result = self._container(node)
        result["entryId"] = node.entry_id
        return result

    def visit_MarkdownASTHorizontalRuleNode(self, node: MarkdownASTHorizontalRuleNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a horizontal rule node."""
        return self._base(node)

    def visit_MarkdownASTLineBreakNode(self, node: MarkdownASTLineBreakNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a line break node."""
        return self._base(node)


def serialize_ast(node: MarkdownASTNode) -> Dict[str, Any]:
    """
    Serialize an AST to a dictionary suitable for JSON encoding.

    Args:
        node: The root node to serialize

    Returns:
        Dictionary representation of the tree
    """
    return MarkdownASTSerializer().visit(node)


def _children(data: Dict[str, Any]) -> List[MarkdownASTNode]:
    children = data.get("children", [])
    if not isinstance(children, list):
        raise ASTDeserializationError("'children' must be a list", {"node": data.get("type")})

    return [deserialize_ast(child) for child in children]


def _list_type(value: Any) -> MarkdownListType:
    try:
        return MarkdownListType(value)

    except ValueError as e:
        raise ASTDeserializationError(f"Unknown list type: {value!r}", {"listType": value}) from e


_NODE_FACTORIES: Dict[MarkdownASTNodeType, Callable[[Dict[str, Any], int, int], MarkdownASTNode]] = {
    MarkdownASTNodeType.DOCUMENT: lambda d, s, e: MarkdownASTDocumentNode(s, e, _children(d)),
    MarkdownASTNodeType.PARAGRAPH: lambda d, s, e: MarkdownASTParagraphNode(s, e, _children(d)),
    MarkdownASTNodeType.HEADING: lambda d, s, e: MarkdownASTHeadingNode(s, e, int(d["level"]), _children(d)),
    MarkdownASTNodeType.LIST: lambda d, s, e: MarkdownASTListNode(s, e, _list_type(d["listType"]), _children(d)),
    MarkdownASTNodeType.LIST_ITEM: lambda d, s, e: MarkdownASTListItemNode(
        s, e, int(d.get("listLevel", 0)), _list_type(d.get("listType", "bullet")), _children(d)
    ),
    MarkdownASTNodeType.CODE_BLOCK: lambda d, s, e: MarkdownASTCodeBlockNode(
        s, e, str(d["text"]), str(d.get("language") or "")
    ),
    MarkdownASTNodeType.BLOCKQUOTE: lambda d, s, e: MarkdownASTBlockquoteNode(s, e, _children(d)),
    MarkdownASTNodeType.HR: lambda d, s, e: MarkdownASTHorizontalRuleNode(s, e),
    MarkdownASTNodeType.TEXT: lambda d, s, e: MarkdownASTTextNode(s, e, str(d["text"])),
    MarkdownASTNodeType.BOLD: lambda d, s, e: MarkdownASTBoldNode(s, e, _children(d)),
    MarkdownASTNodeType.ITALIC: lambda d, s, e: MarkdownASTEmphasisNode(s, e, _children(d)),
    MarkdownASTNodeType.STRIKETHROUGH: lambda d, s, e: MarkdownASTStrikethroughNode(s, e, _children(d)),
    MarkdownASTNodeType.CODE: lambda d, s, e: MarkdownASTInlineCodeNode(s, e, str(d["text"])),
    MarkdownASTNodeType.LINK: lambda d, s, e: MarkdownASTLinkNode(s, e, str(d.get("href") or ""), _children(d)),
    MarkdownASTNodeType.WIKI_LINK: lambda d, s, e: MarkdownASTWikiLinkNode(s, e, str(d["entryId"]), _children(d)),
    MarkdownASTNodeType.LINE_BREAK: lambda d, s, e: MarkdownASTLineBreakNode(s, e),
}


def deserialize_ast(data: Any) -> MarkdownASTNode:
    """
    Rebuild an AST from its dictionary representation.

    Args:
        data: Dictionary produced by serialize_ast, typically loaded from JSON

    Returns:
        The rebuilt node

    Raises:
        ASTDeserializationError: If the data does not describe a valid tree
    """
    if not isinstance(data, dict):
        raise ASTDeserializationError("AST node must be an object", {"value": repr(data)[:80]})

    node_type_name = data.get("type")
    try:
        node_type = MarkdownASTNodeType(node_type_name)

    except ValueError as e:
        raise ASTDeserializationError(f"Unknown AST node type: {node_type_name!r}", {"type": node_type_name}) from e

    try:
        start = int(data.get("start", 0))
        end = int(data.get("end", start))
        node = _NODE_FACTORIES[node_type](data, start, end)

    except KeyError as e:
        raise ASTDeserializationError(
            f"AST node of type '{node_type.value}' is missing field {e}",
            {"type": node_type.value, "field": str(e)}
        ) from e

    except (TypeError, ValueError) as e:
        raise ASTDeserializationError(
            f"AST node of type '{node_type.value}' has an invalid field: {e}",
            {"type": node_type.value}
        ) from e

    if node.start > node.end:
        raise ASTDeserializationError(
            f"AST node of type '{node_type.value}' ends before it starts",
            {"type": node_type.value, "start": node.start, "end": node.end}
        )

    return node
