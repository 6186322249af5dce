"""
Visitor class to print markdown AST structures for debugging
"""
from typing import Any, List, TextIO
import sys

from notedown.markdown_ast_node import (
    MarkdownASTVisitor, MarkdownASTNode, MarkdownASTTextNode, MarkdownASTHeadingNode,
    MarkdownASTListNode, MarkdownASTListItemNode, MarkdownASTInlineCodeNode, MarkdownASTCodeBlockNode,
    MarkdownASTLinkNode, MarkdownASTWikiLinkNode
)


class MarkdownASTPrinter(MarkdownASTVisitor):
    """Visitor that prints the AST structure for debugging."""
    def __init__(self, output: TextIO | None = None) -> None:
        """
        Initialize the AST printer with zero indentation.

        Args:
            output: Stream to print to, defaults to stdout
        """
        super().__init__()
        self.indent_level = 0
        self._output = output

    def _indent(self) -> str:
        """
        Get the current indentation string.

        Returns:
            A string of spaces for the current indentation level
        """
        return "  " * self.indent_level

    def _print(self, node: MarkdownASTNode, description: str) -> None:
        output = self._output or sys.stdout
        print(f"{self._indent()}{description} [{node.start}-{node.end}]", file=output)

    def _visit_children(self, node: MarkdownASTNode) -> List[Any]:
        self.indent_level += 1
        results = super().generic_visit(node)
        self.indent_level -= 1
        return results

    def generic_visit(self, node: MarkdownASTNode) -> List[Any]:
        """
        Default visit method that prints the node type.

        Args:
            node: The node to visit

        Returns:
            The results of visiting the children
        """
        self._print(node, node.node_type.value)
        return self._visit_children(node)

    def visit_MarkdownASTTextNode(self, node: MarkdownASTTextNode) -> str:  # pylint: disable=invalid-name
        """
        Visit a text node and print its content.

        Args:
            node: The text node to visit

        Returns:
            The text content
        """
        self._print(node, f"text: {node.text!r}")
        return node.text

    def visit_MarkdownASTHeadingNode(self, node: MarkdownASTHeadingNode) -> List[Any]:  # pylint: disable=invalid-name
        self._print(node, f"heading (level {node.level})")
        return self._visit_children(node)

    def visit_MarkdownASTListNode(self, node: MarkdownASTListNode) -> List[Any]:  # pylint: disable=invalid-name
        self._print(node, f"list ({node.list_type.value})")
        return self._visit_children(node)

    def visit_MarkdownASTListItemNode(self, node: MarkdownASTListItemNode) -> List[Any]:  # pylint: disable=invalid-name
        self._print(node, f"list-item (level {node.list_level}, {node.list_type.value})")
        return self._visit_children(node)

    def visit_MarkdownASTInlineCodeNode(self, node: MarkdownASTInlineCodeNode) -> str:  # pylint: disable=invalid-name
        self._print(node, f"code: {node.text!r}")
        return node.text

    def visit_MarkdownASTCodeBlockNode(self, node: MarkdownASTCodeBlockNode) -> str:  # pylint: disable=invalid-name
        """
        Visit a code block node and print its language and content.

        Args:
            node: The code block node to visit

        Returns:
            The code block content
        """
        self._print(node, f"code-block: language='{node.language}'")
        self.indent_level += 1
        output = self._output or sys.stdout
        print(f"{self._indent()}Content: '{node.text[:30]}...' ({len(node.text)} chars)", file=output)
        self.indent_level -= 1
        return node.text

    def visit_MarkdownASTLinkNode(self, node: MarkdownASTLinkNode) -> List[Any]:  # pylint: disable=invalid-name
        self._print(node, f"link: href='{node.href}'")
        return self._visit_children(node)

    def visit_MarkdownASTWikiLinkNode(self, node: MarkdownASTWikiLinkNode) -> List[Any]:  # pylint: disable=invalid-name
        self._print(node, f"wiki-link: entry_id='{node.entry_id}'")
        return self._visit_children(node)
