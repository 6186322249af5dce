"""
Builder to construct an AST from markdown tokens.
"""

import logging
from typing import List

from notedown.markdown_ast_node import (
    MarkdownASTNode, MarkdownASTDocumentNode, MarkdownASTParagraphNode, MarkdownASTHeadingNode,
    MarkdownASTListNode, MarkdownASTListItemNode, MarkdownASTCodeBlockNode, MarkdownASTBlockquoteNode,
    MarkdownASTHorizontalRuleNode, MarkdownASTTextNode, MarkdownASTBoldNode, MarkdownASTEmphasisNode,
    MarkdownASTStrikethroughNode, MarkdownASTInlineCodeNode, MarkdownASTLinkNode, MarkdownASTWikiLinkNode
)
from notedown.markdown_tokenizer import (
    MarkdownListType, MarkdownToken, MarkdownTokenType, MarkdownTokenizer
)


class MarkdownASTBuilder:
    """
    Builder class for constructing an AST from markdown tokens.

    Tokens are grouped positionally: runs of list items become a list, runs of inline
    tokens become a paragraph, and every other block token becomes a block node of its
    own.  The content of headings, blockquotes and list items is tokenized again as
    inline markdown, with offsets rebased so every node refers to absolute positions in
    the document.
    """

    def __init__(self) -> None:
        """Initialize the AST builder."""
        self._tokenizer = MarkdownTokenizer()
        self._logger = logging.getLogger("MarkdownASTBuilder")

    def build_ast(self, tokens: List[MarkdownToken]) -> MarkdownASTDocumentNode:
        """
        Build a document AST from a token stream.

        Args:
            tokens: Tokens produced by the tokenizer for the whole document

        Returns:
            The document node
        """
        blocks: List[MarkdownASTNode] = []
        i = 0
        num_tokens = len(tokens)

        while i < num_tokens:
            token = tokens[i]

            if token.type == MarkdownTokenType.LIST_ITEM:
                items: List[MarkdownASTNode] = []
                first_item = token
                while i < num_tokens and tokens[i].type == MarkdownTokenType.LIST_ITEM:
                    items.append(self._build_list_item(tokens[i]))
                    i += 1

                blocks.append(MarkdownASTListNode(
                    items[0].start,
                    items[-1].end,
                    first_item.list_type or MarkdownListType.BULLET,
                    items
                ))
                continue

            if token.is_inline():
                inline_tokens: List[MarkdownToken] = []
                while i < num_tokens and tokens[i].is_inline():
                    inline_tokens.append(tokens[i])
                    i += 1

                children = self._build_inline_nodes(inline_tokens, 0)
                blocks.append(MarkdownASTParagraphNode(children[0].start, children[-1].end, children))
                continue

            blocks.append(self._build_block(token))
            i += 1

        if not tokens:
            return MarkdownASTDocumentNode(0, 0)

        # A trailing newline after a line block starts a new, empty line.  Give it a
        # paragraph of its own so the text is reproduced exactly and the cursor has
        # somewhere to live.
        last_token = tokens[-1]
        if not last_token.is_inline() and last_token.raw.endswith("\n"):
            end = last_token.end
            blocks.append(MarkdownASTParagraphNode(end, end, [MarkdownASTTextNode(end, end, "")]))

        return MarkdownASTDocumentNode(0, last_token.end, blocks)

    def parse(self, text: str) -> MarkdownASTDocumentNode:
        """
        Tokenize markdown text and build its AST.

        Args:
            text: The markdown text

        Returns:
            The document node
        """
        return self.build_ast(self._tokenizer.tokenize(text))

    def _build_block(self, token: MarkdownToken) -> MarkdownASTNode:
        """
        Build a standalone block node from a block token.

        Args:
            token: A heading, code block, blockquote or horizontal rule token

        Returns:
            The block node
        """
        if token.type == MarkdownTokenType.HEADING:
            children = self._build_content(token.content, token.content_offset())
            return MarkdownASTHeadingNode(token.start, token.end, token.level or 1, children)

        if token.type == MarkdownTokenType.BLOCKQUOTE:
            children = self._build_content(token.content, token.content_offset())
            return MarkdownASTBlockquoteNode(token.start, token.end, children)

        if token.type == MarkdownTokenType.CODE_BLOCK:
            return MarkdownASTCodeBlockNode(token.start, token.end, token.content, token.language or "")

        if token.type == MarkdownTokenType.HR:
            return MarkdownASTHorizontalRuleNode(token.start, token.end)

        # Not expected: list items and inline tokens are grouped by the caller
        self._logger.warning("unexpected block token type %s at %d", token.type.value, token.start)
        return MarkdownASTParagraphNode(
            token.start, token.end, [MarkdownASTTextNode(token.start, token.end, token.raw)]
        )

    def _build_list_item(self, token: MarkdownToken) -> MarkdownASTListItemNode:
        children = self._build_content(token.content, token.content_offset())
        return MarkdownASTListItemNode(
            token.start,
            token.end,
            token.level or 0,
            token.list_type or MarkdownListType.BULLET,
            children
        )

    def _build_content(self, content: str, offset: int) -> List[MarkdownASTNode]:
        """
        Build the inline children for the content of a heading, blockquote or list item.

        Args:
            content: The content text
            offset: Absolute offset of the first content character

        Returns:
            The inline child nodes
        """
        if not content:
            return [MarkdownASTTextNode(offset, offset, "")]

        tokens = self._tokenizer.tokenize(content, inline_only=True)
        if not tokens:
            self._logger.warning("inline tokenization produced no tokens for %r", content)
            return [MarkdownASTTextNode(offset, offset + len(content), content)]

        return self._build_inline_nodes(tokens, offset)

    def _build_inline_nodes(self, tokens: List[MarkdownToken], offset: int) -> List[MarkdownASTNode]:
        return [self._build_inline_node(token, offset) for token in tokens]

    def _build_inline_node(self, token: MarkdownToken, offset: int) -> MarkdownASTNode:
        """
        Build the node for an inline token.

        Args:
            token: The inline token
            offset: Amount to add to the token's offsets to make them absolute

        Returns:
            The inline node
        """
        start = token.start + offset
        end = token.end + offset

        if token.type == MarkdownTokenType.BOLD:
            return MarkdownASTBoldNode(start, end, [MarkdownASTTextNode(start + 2, end - 2, token.content)])

        if token.type == MarkdownTokenType.ITALIC:
            return MarkdownASTEmphasisNode(start, end, [MarkdownASTTextNode(start + 1, end - 1, token.content)])

        if token.type == MarkdownTokenType.STRIKETHROUGH:
            return MarkdownASTStrikethroughNode(start, end, [MarkdownASTTextNode(start + 2, end - 2, token.content)])

        if token.type == MarkdownTokenType.CODE:
            return MarkdownASTInlineCodeNode(start, end, token.content)

        if token.type == MarkdownTokenType.LINK:
            text_end = start + 1 + len(token.content)
            return MarkdownASTLinkNode(
                start, end, token.href or "", [MarkdownASTTextNode(start + 1, text_end, token.content)]
            )

        if token.type == MarkdownTokenType.WIKI_LINK:
            return MarkdownASTWikiLinkNode(
                start, end, token.entry_id or "", [MarkdownASTTextNode(start + 2, end - 2, token.content)]
            )

        return MarkdownASTTextNode(start, end, token.content)


def create_empty_document() -> MarkdownASTDocumentNode:
    """Create the canonical empty document."""
    return MarkdownASTDocumentNode(0, 0)


def build_ast(tokens: List[MarkdownToken]) -> MarkdownASTDocumentNode:
    """
    Build a document AST from a token stream.

    Args:
        tokens: Tokens for the whole document

    Returns:
        The document node
    """
    return MarkdownASTBuilder().build_ast(tokens)


def parse_markdown(text: str) -> MarkdownASTDocumentNode:
    """
    Tokenize markdown text and build its AST.

    Args:
        text: The markdown text

    Returns:
        The document node
    """
    return MarkdownASTBuilder().parse(text)
