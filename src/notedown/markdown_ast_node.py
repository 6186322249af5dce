"""
Node types for the markdown editor's abstract syntax tree.

Every node carries the absolute start and end offsets of the source text it was built
from.  Nodes do not hold references to their parents: parents are found by searching
down from the root, which keeps trees free of reference cycles.  Once built, a tree is
never modified; editing operations always produce a new tree.
"""

from enum import Enum
from typing import Any, ClassVar, List, Sequence

from notedown.markdown_tokenizer import MarkdownListType


class MarkdownASTNodeType(Enum):
    """Discriminator for the different kinds of AST node."""
    DOCUMENT = "document"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    LIST_ITEM = "list-item"
    CODE_BLOCK = "code-block"
    BLOCKQUOTE = "blockquote"
    HR = "hr"
    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    LINK = "link"
    WIKI_LINK = "wiki-link"
    LINE_BREAK = "line-break"


# Block nodes that occupy exactly one source line each (or one line per item for lists)
LINE_BLOCK_TYPES = frozenset({
    MarkdownASTNodeType.HEADING,
    MarkdownASTNodeType.LIST,
    MarkdownASTNodeType.CODE_BLOCK,
    MarkdownASTNodeType.BLOCKQUOTE,
    MarkdownASTNodeType.HR
})


class MarkdownASTNode:
    """Base class for all markdown AST nodes."""

    node_type: ClassVar[MarkdownASTNodeType]

    def __init__(self, start: int, end: int, children: Sequence["MarkdownASTNode"] | None = None) -> None:
        """
        Initialize an AST node.

        Args:
            start: Absolute offset of the first source character covered by the node
            end: Absolute offset just past the last source character covered by the node
            children: Child nodes, in source order
        """
        self.start = start
        self.end = end
        self.children: List[MarkdownASTNode] = list(children) if children else []

    def contains(self, pos: int) -> bool:
        """
        Check if a position lies within this node, including both boundaries.

        Args:
            pos: The position to check

        Returns:
            True if start <= pos <= end
        """
        return self.start <= pos <= self.end

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.start}, {self.end})"


class MarkdownASTVisitor:
    """
    Base visitor class for markdown AST traversal.

    Dispatches to a method named after the node class, e.g. `visit_MarkdownASTTextNode`,
    falling back to `generic_visit` for node classes without a specific handler.
    """

    def visit(self, node: MarkdownASTNode) -> Any:
        """
        Visit a node and dispatch to the appropriate visit method.

        Args:
            node: The node to visit

        Returns:
            The result of visiting the node
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: MarkdownASTNode) -> List[Any]:
        """
        Default visit method for nodes without specific handlers.

        Args:
            node: The node to visit

        Returns:
            A list of results from visiting each child
        """
        results = []
        for child in node.children:
            results.append(self.visit(child))

        return results


class MarkdownASTDocumentNode(MarkdownASTNode):
    """Root node representing an entire document."""
    node_type = MarkdownASTNodeType.DOCUMENT


class MarkdownASTParagraphNode(MarkdownASTNode):
    """Node representing a run of inline content."""
    node_type = MarkdownASTNodeType.PARAGRAPH


class MarkdownASTHeadingNode(MarkdownASTNode):
    """Node representing a heading (<h1> through <h6>)."""
    node_type = MarkdownASTNodeType.HEADING

    def __init__(self, start: int, end: int, level: int, children: Sequence[MarkdownASTNode] | None = None) -> None:
        """
        Initialize a heading node.

        Args:
            start: Absolute start offset
            end: Absolute end offset
            level: The heading level (1-6)
            children: Inline content of the heading
        """
        super().__init__(start, end, children)

        # Level should be 1-6
        self.level = max(1, min(6, level))


class MarkdownASTListNode(MarkdownASTNode):
    """Node grouping a run of adjacent list items."""
    node_type = MarkdownASTNodeType.LIST

    def __init__(
        self,
        start: int,
        end: int,
        list_type: MarkdownListType,
        children: Sequence[MarkdownASTNode] | None = None
    ) -> None:
        """
        Initialize a list node.

        Args:
            start: Absolute start offset
            end: Absolute end offset
            list_type: Marker style of the first item in the list
            children: The list item nodes
        """
        super().__init__(start, end, children)
        self.list_type = list_type


class MarkdownASTListItemNode(MarkdownASTNode):
    """Node representing a single list item line."""
    node_type = MarkdownASTNodeType.LIST_ITEM

    def __init__(
        self,
        start: int,
        end: int,
        list_level: int,
        list_type: MarkdownListType,
        children: Sequence[MarkdownASTNode] | None = None
    ) -> None:
        """
        Initialize a list item node.

        Args:
            start: Absolute start offset (the start of the line, including indentation)
            end: Absolute end offset
            list_level: Indentation depth of the item, 0 for top-level items
            list_type: Marker style of the item
            children: Inline content of the item
        """
        super().__init__(start, end, children)
        self.list_level = max(0, list_level)
        self.list_type = list_type


class MarkdownASTCodeBlockNode(MarkdownASTNode):
    """Node representing a fenced code block."""
    node_type = MarkdownASTNodeType.CODE_BLOCK

    def __init__(self, start: int, end: int, text: str, language: str = "") -> None:
        """
        Initialize a code block node.

        Args:
            start: Absolute start offset of the opening fence
            end: Absolute end offset
            text: The code between the fences
            language: Language tag from the opening fence
        """
        super().__init__(start, end)
        self.text = text
        self.language = language


class MarkdownASTBlockquoteNode(MarkdownASTNode):
    """Node representing a single-line blockquote."""
    node_type = MarkdownASTNodeType.BLOCKQUOTE


class MarkdownASTHorizontalRuleNode(MarkdownASTNode):
    """Node representing a horizontal rule (<hr>)."""
    node_type = MarkdownASTNodeType.HR


class MarkdownASTTextNode(MarkdownASTNode):
    """Node representing plain text content."""
    node_type = MarkdownASTNodeType.TEXT

    def __init__(self, start: int, end: int, text: str) -> None:
        """
        Initialize a text node.

        Args:
            start: Absolute start offset
            end: Absolute end offset
            text: The text content, which may include newlines
        """
        super().__init__(start, end)
        self.text = text


class MarkdownASTBoldNode(MarkdownASTNode):
    """Node representing bold text (<strong>)."""
    node_type = MarkdownASTNodeType.BOLD


class MarkdownASTEmphasisNode(MarkdownASTNode):
    """Node representing italic text (<em>)."""
    node_type = MarkdownASTNodeType.ITALIC


class MarkdownASTStrikethroughNode(MarkdownASTNode):
    """Node representing struck-through text (<del>)."""
    node_type = MarkdownASTNodeType.STRIKETHROUGH


class MarkdownASTInlineCodeNode(MarkdownASTNode):
    """Node representing inline code (<code>)."""
    node_type = MarkdownASTNodeType.CODE

    def __init__(self, start: int, end: int, text: str) -> None:
        """
        Initialize an inline code node.

        Args:
            start: Absolute start offset of the opening backtick
            end: Absolute end offset
            text: The code content
        """
        super().__init__(start, end)
        self.text = text


class MarkdownASTLinkNode(MarkdownASTNode):
    """Node representing a link (<a>)."""
    node_type = MarkdownASTNodeType.LINK

    def __init__(self, start: int, end: int, href: str = "", children: Sequence[MarkdownASTNode] | None = None) -> None:
        """
        Initialize a link node.

        Args:
            start: Absolute start offset
            end: Absolute end offset
            href: The link target
            children: The link text
        """
        super().__init__(start, end, children)
        self.href = href


class MarkdownASTWikiLinkNode(MarkdownASTNode):
    """Node representing a link to another entry."""
    node_type = MarkdownASTNodeType.WIKI_LINK

    def __init__(self, start: int, end: int, entry_id: str, children: Sequence[MarkdownASTNode] | None = None) -> None:
        """
        Initialize a wiki link node.

        Args:
            start: Absolute start offset
            end: Absolute end offset
            entry_id: Identifier of the linked entry
            children: A single text node holding the display name
        """
        super().__init__(start, end, children)
        self.entry_id = entry_id


class MarkdownASTLineBreakNode(MarkdownASTNode):
    """Node representing an explicit line break."""
    node_type = MarkdownASTNodeType.LINE_BREAK
