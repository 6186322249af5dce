"""
Tokenizer for the note editor's markdown dialect.

The tokenizer produces a flat list of block and inline tokens.  Every character of the
input is covered by exactly one token's raw text, so joining the raw values of all the
tokens gives back the original input.
"""

from dataclasses import dataclass
from enum import Enum
import re
from typing import List


# Number of spaces that make up one level of list indentation
LIST_INDENT_SPACES = 2


class MarkdownTokenType(Enum):
    """Type of markdown token."""
    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    LINK = "link"
    WIKI_LINK = "wiki-link"
    HEADING = "heading"
    LIST_ITEM = "list-item"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code-block"
    HR = "hr"


class MarkdownListType(Enum):
    """Marker style of a list item."""
    BULLET = "bullet"
    ORDERED = "ordered"


INLINE_TOKEN_TYPES = frozenset({
    MarkdownTokenType.TEXT,
    MarkdownTokenType.BOLD,
    MarkdownTokenType.ITALIC,
    MarkdownTokenType.STRIKETHROUGH,
    MarkdownTokenType.CODE,
    MarkdownTokenType.LINK,
    MarkdownTokenType.WIKI_LINK
})


@dataclass
class MarkdownToken:
    """
    Represents a token in the markdown source.

    Attributes:
        type: The type of the token
        raw: The exact source text covered by the token
        content: The token payload with markdown syntax stripped
        start: Starting offset of the token in the tokenized text
        end: Offset just past the end of the token in the tokenized text
        level: Heading level (1-6) or list nesting depth
        href: Link target for links
        entry_id: Target entry for wiki links
        language: Language tag for fenced code blocks
        list_type: Marker style for list items
    """
    type: MarkdownTokenType
    raw: str
    content: str
    start: int
    end: int
    level: int | None = None
    href: str | None = None
    entry_id: str | None = None
    language: str | None = None
    list_type: MarkdownListType | None = None

    def is_inline(self) -> bool:
        """Return True if this token belongs inside a paragraph."""
        return self.type in INLINE_TOKEN_TYPES

    def content_offset(self) -> int:
        """
        Get the offset at which the token's content begins in the tokenized text.

        Only meaningful for headings, blockquotes and list items, where the content runs
        to the end of the line.

        Returns:
            The offset of the first content character
        """
        line_end = self.end - 1 if self.raw.endswith("\n") else self.end
        return line_end - len(self.content)


class MarkdownTokenizer:
    """
    Tokenizer that converts markdown text into a flat sequence of tokens.

    Block constructs (headings, fenced code, rules, blockquotes and list items) are only
    recognised at the start of a line.  Inline constructs are recognised anywhere, but only
    when both their opening and closing delimiters are present.
    """

    def __init__(self) -> None:
        """Initialize the tokenizer with the patterns for each markdown construct."""
        self._input = ""
        self._input_len = 0
        self._position = 0
        self._inline_only = False
        self._tokens: List[MarkdownToken] = []

        # Block-level patterns, only ever tried at the start of a line
        self._heading_pattern = re.compile(r'(#{1,6})[ \t]*(.*)(?:\n|\Z)')
        self._code_block_pattern = re.compile(r'```(\w*)\n([\s\S]*?)\n```(?:\n|\Z)')
        self._horizontal_rule_pattern = re.compile(r'(?:---+|___+|\*\*\*+)(?:\n|\Z)')
        self._blockquote_pattern = re.compile(r'>[ \t]+(.+?)(?:\n|\Z)')
        self._list_item_pattern = re.compile(r'( *)([-*+]|\d+\.)[ \t]+(.*?)(?:\n|\Z)')

        # Inline patterns
        self._wiki_link_pattern = re.compile(r'\[\[([^\]|]+)(?:\|([^\]]+))?\]\]')
        self._bold_star_pattern = re.compile(r'\*\*(.+?)\*\*')
        self._bold_underscore_pattern = re.compile(r'__(.+?)__')
        self._italic_star_pattern = re.compile(r'\*(.+?)\*')
        self._italic_underscore_pattern = re.compile(r'_(.+?)_')
        self._strikethrough_pattern = re.compile(r'~~(.+?)~~')
        self._inline_code_pattern = re.compile(r'`(.+?)`')
        self._link_pattern = re.compile(r'\[(.+?)\]\((.+?)\)')

    def tokenize(self, text: str, inline_only: bool = False) -> List[MarkdownToken]:
        """
        Tokenize markdown text.

        Args:
            text: The markdown text to tokenize
            inline_only: If True, block constructs are not recognised.  This is used for
                the content of headings, blockquotes and list items.

        Returns:
            The tokens covering the whole of the input text
        """
        self._input = text
        self._input_len = len(text)
        self._position = 0
        self._inline_only = inline_only
        self._tokens = []

        while self._position < self._input_len:
            token = self._match_token(self._position)
            if token is None:
                token = self._consume_text()

            self._tokens.append(token)
            self._position = token.end

        return self._tokens

    def _is_at_line_start(self, pos: int) -> bool:
        return pos == 0 or self._input[pos - 1] == '\n'

    def _peek(self, pos: int) -> str:
        if pos < self._input_len:
            return self._input[pos]

        return ''

    def _match_token(self, pos: int) -> MarkdownToken | None:
        """
        Try all the block and inline matchers at a position.

        Args:
            pos: Offset into the input to match at

        Returns:
            The matched token, or None if nothing matches
        """
        if not self._inline_only and self._is_at_line_start(pos):
            token = self._match_block(pos)
            if token is not None:
                return token

        return self._match_inline(pos)

    def _match_block(self, pos: int) -> MarkdownToken | None:
        ch = self._input[pos]
        if ch == '#':
            return self._match_heading(pos)

        if ch == '`':
            token = self._match_code_block(pos)
            if token is not None:
                return token

        if ch in '-_*':
            token = self._match_horizontal_rule(pos)
            if token is not None:
                return token

        if ch == '>':
            return self._match_blockquote(pos)

        if ch in ' -*+0123456789':
            return self._match_list_item(pos)

        return None

    def _match_heading(self, pos: int) -> MarkdownToken | None:
        match = self._heading_pattern.match(self._input, pos)
        if not match:
            return None

        raw = match.group(0)
        content = match.group(2)

        # A heading marker with nothing after it is just text
        if not content.strip():
            return MarkdownToken(
                type=MarkdownTokenType.TEXT,
                raw=raw,
                content=raw,
                start=pos,
                end=match.end()
            )

        return MarkdownToken(
            type=MarkdownTokenType.HEADING,
            raw=raw,
            content=content,
            start=pos,
            end=match.end(),
            level=len(match.group(1))
        )

    def _match_code_block(self, pos: int) -> MarkdownToken | None:
        match = self._code_block_pattern.match(self._input, pos)
        if not match:
            return None

        return MarkdownToken(
            type=MarkdownTokenType.CODE_BLOCK,
            raw=match.group(0),
            content=match.group(2),
            start=pos,
            end=match.end(),
            language=match.group(1)
        )

    def _match_horizontal_rule(self, pos: int) -> MarkdownToken | None:
        match = self._horizontal_rule_pattern.match(self._input, pos)
        if not match:
            return None

        return MarkdownToken(
            type=MarkdownTokenType.HR,
            raw=match.group(0),
            content="",
            start=pos,
            end=match.end()
        )

    def _match_blockquote(self, pos: int) -> MarkdownToken | None:
        match = self._blockquote_pattern.match(self._input, pos)
        if not match:
            return None

        return MarkdownToken(
            type=MarkdownTokenType.BLOCKQUOTE,
            raw=match.group(0),
            content=match.group(1),
            start=pos,
            end=match.end()
        )

    def _match_list_item(self, pos: int) -> MarkdownToken | None:
        match = self._list_item_pattern.match(self._input, pos)
        if not match:
            return None

        indent = match.group(1)
        marker = match.group(2)
        list_type = MarkdownListType.ORDERED if marker[0].isdigit() else MarkdownListType.BULLET

        return MarkdownToken(
            type=MarkdownTokenType.LIST_ITEM,
            raw=match.group(0),
            content=match.group(3),
            start=pos,
            end=match.end(),
            level=len(indent) // LIST_INDENT_SPACES,
            list_type=list_type
        )

    def _match_inline(self, pos: int) -> MarkdownToken | None:
        """
        Try the inline matchers at a position.

        Args:
            pos: Offset into the input to match at

        Returns:
            The matched token, or None if no complete inline construct starts here
        """
        ch = self._input[pos]
        next_ch = self._peek(pos + 1)

        if ch == '[':
            if next_ch == '[':
                token = self._match_wiki_link(pos)
                if token is not None:
                    return token

            return self._match_link(pos)

        if ch == '*':
            if next_ch == '*':
                return self._match_delimited(pos, self._bold_star_pattern, MarkdownTokenType.BOLD)

            return self._match_delimited(pos, self._italic_star_pattern, MarkdownTokenType.ITALIC)

        if ch == '_':
            if next_ch == '_':
                return self._match_delimited(pos, self._bold_underscore_pattern, MarkdownTokenType.BOLD)

            return self._match_delimited(pos, self._italic_underscore_pattern, MarkdownTokenType.ITALIC)

        if ch == '~' and next_ch == '~':
            return self._match_delimited(pos, self._strikethrough_pattern, MarkdownTokenType.STRIKETHROUGH)

        if ch == '`' and next_ch != '`':
            return self._match_delimited(pos, self._inline_code_pattern, MarkdownTokenType.CODE)

        return None

    def _match_delimited(self, pos: int, pattern: re.Pattern[str], token_type: MarkdownTokenType) -> MarkdownToken | None:
        match = pattern.match(self._input, pos)
        if not match:
            return None

        return MarkdownToken(
            type=token_type,
            raw=match.group(0),
            content=match.group(1),
            start=pos,
            end=match.end()
        )

    def _match_wiki_link(self, pos: int) -> MarkdownToken | None:
        match = self._wiki_link_pattern.match(self._input, pos)
        if not match:
            return None

        entry_id = match.group(1).strip()
        if not entry_id:
            return None

        display_name = (match.group(2) or "").strip() or entry_id

        return MarkdownToken(
            type=MarkdownTokenType.WIKI_LINK,
            raw=match.group(0),
            content=display_name,
            start=pos,
            end=match.end(),
            entry_id=entry_id
        )

    def _match_link(self, pos: int) -> MarkdownToken | None:
        match = self._link_pattern.match(self._input, pos)
        if not match:
            return None

        return MarkdownToken(
            type=MarkdownTokenType.LINK,
            raw=match.group(0),
            content=match.group(1),
            start=pos,
            end=match.end(),
            href=match.group(2)
        )

    def _consume_text(self) -> MarkdownToken:
        """
        Consume plain text up to the next inline construct or the end of the line.

        At least one character is always consumed, so the tokenizer always makes progress.
        A newline is kept as the last character of the text token.

        Returns:
            The text token
        """
        start = self._position
        pos = start

        while pos < self._input_len:
            ch = self._input[pos]
            pos += 1
            if ch == '\n':
                break

            if pos < self._input_len and self._match_inline(pos) is not None:
                break

        raw = self._input[start:pos]
        return MarkdownToken(
            type=MarkdownTokenType.TEXT,
            raw=raw,
            content=raw,
            start=start,
            end=pos
        )


def tokenize(text: str) -> List[MarkdownToken]:
    """
    Tokenize markdown text into block and inline tokens.

    Args:
        text: The markdown text

    Returns:
        List of tokens covering the whole text
    """
    return MarkdownTokenizer().tokenize(text)


def tokenize_inline(text: str) -> List[MarkdownToken]:
    """
    Tokenize text that can only contain inline constructs.

    Args:
        text: The text to tokenize, typically the content of a heading or list item

    Returns:
        List of inline tokens covering the whole text
    """
    return MarkdownTokenizer().tokenize(text, inline_only=True)
