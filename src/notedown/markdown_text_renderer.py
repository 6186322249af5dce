"""
Markdown AST visitor to render the AST back to markdown text.
"""

from typing import List

from notedown.markdown_ast_node import (
    LINE_BLOCK_TYPES, MarkdownASTNode, MarkdownASTVisitor, MarkdownASTDocumentNode,
    MarkdownASTParagraphNode, MarkdownASTHeadingNode, MarkdownASTListNode, MarkdownASTListItemNode,
    MarkdownASTCodeBlockNode, MarkdownASTBlockquoteNode, MarkdownASTHorizontalRuleNode,
    MarkdownASTTextNode, MarkdownASTBoldNode, MarkdownASTEmphasisNode, MarkdownASTStrikethroughNode,
    MarkdownASTInlineCodeNode, MarkdownASTLinkNode, MarkdownASTWikiLinkNode, MarkdownASTLineBreakNode
)
from notedown.markdown_tokenizer import LIST_INDENT_SPACES, MarkdownListType


class MarkdownTextRenderer(MarkdownASTVisitor):
    """
    Visitor that renders the AST back to markdown source text.

    This is the inverse of tokenizing and building: rendering a tree built from normalized
    text gives back exactly that text.  Ordered list items are always written with the
    marker `1.`.
    """

    def _render_children(self, node: MarkdownASTNode) -> str:
        return "".join(self.visit(child) for child in node.children)

    def visit_MarkdownASTDocumentNode(self, node: MarkdownASTDocumentNode) -> str:  # pylint: disable=invalid-name
        """
        Render a document node.

        Line blocks (headings, lists, code blocks, blockquotes and rules) do not include
        their line terminator, so one is added before whatever follows them.  Paragraph
        text keeps its own newlines, so nothing is added after a paragraph.

        Args:
            node: The document node to render

        Returns:
            The markdown text of the document
        """
        parts: List[str] = []
        last_index = len(node.children) - 1
        for i, child in enumerate(node.children):
            parts.append(self.visit(child))
            if i < last_index and child.node_type in LINE_BLOCK_TYPES:
                parts.append("\n")

        return "".join(parts)

    def visit_MarkdownASTParagraphNode(self, node: MarkdownASTParagraphNode) -> str:  # pylint: disable=invalid-name
        return self._render_children(node)

    def visit_MarkdownASTHeadingNode(self, node: MarkdownASTHeadingNode) -> str:  # pylint: disable=invalid-name
        return "#" * node.level + " " + self._render_children(node)

    def visit_MarkdownASTListNode(self, node: MarkdownASTListNode) -> str:  # pylint: disable=invalid-name
        return "\n".join(self.visit(child) for child in node.children)

    def visit_MarkdownASTListItemNode(self, node: MarkdownASTListItemNode) -> str:  # pylint: disable=invalid-name
        indent = " " * (node.list_level * LIST_INDENT_SPACES)
        marker = "1. " if node.list_type == MarkdownListType.ORDERED else "- "
        return indent + marker + self._render_children(node)

    def visit_MarkdownASTCodeBlockNode(self, node: MarkdownASTCodeBlockNode) -> str:  # pylint: disable=invalid-name
        return f"```{node.language}\n{node.text}\n```"

    def visit_MarkdownASTBlockquoteNode(self, node: MarkdownASTBlockquoteNode) -> str:  # pylint: disable=invalid-name
        return "> " + self._render_children(node)

    def visit_MarkdownASTHorizontalRuleNode(self, node: MarkdownASTHorizontalRuleNode) -> str:  # pylint: disable=invalid-name
        return "---"

    def visit_MarkdownASTTextNode(self, node: MarkdownASTTextNode) -> str:  # pylint: disable=invalid-name
        return node.text

    def visit_MarkdownASTBoldNode(self, node: MarkdownASTBoldNode) -> str:  # pylint: disable=invalid-name
        return f"**{self._render_children(node)}**"

    def visit_MarkdownASTEmphasisNode(self, node: MarkdownASTEmphasisNode) -> str:  # pylint: disable=invalid-name
        return f"*{self._render_children(node)}*"

    def visit_MarkdownASTStrikethroughNode(self, node: MarkdownASTStrikethroughNode) -> str:  # pylint: disable=invalid-name
        return f"~~{self._render_children(node)}~~"

    def visit_MarkdownASTInlineCodeNode(self, node: MarkdownASTInlineCodeNode) -> str:  # pylint: disable=invalid-name
        return f"`{node.text}`"

    def visit_MarkdownASTLinkNode(self, node: MarkdownASTLinkNode) -> str:  # pylint: disable=invalid-name
        return f"[{self._render_children(node)}]({node.href})"

    def visit_MarkdownASTWikiLinkNode(self, node: MarkdownASTWikiLinkNode) -> str:  # pylint: disable=invalid-name
        """
        Render a wiki link node.

        The display name is only written out when it differs from the entry ID.

        Args:
            node: The wiki link node to render

        Returns:
            The wiki link markup
        """
        display_name = self._render_children(node)
        if not display_name or display_name == node.entry_id:
            return f"[[{node.entry_id}]]"

        return f"[[{node.entry_id}|{display_name}]]"

    def visit_MarkdownASTLineBreakNode(self, node: MarkdownASTLineBreakNode) -> str:  # pylint: disable=invalid-name
        return "\n"

    def generic_visit(self, node: MarkdownASTNode) -> str:
        return self._render_children(node)


def ast_to_text(node: MarkdownASTNode) -> str:
    """
    Convert an AST node back into markdown text.

    Args:
        node: The node to convert, usually a document

    Returns:
        The markdown text for the node
    """
    return MarkdownTextRenderer().visit(node)
