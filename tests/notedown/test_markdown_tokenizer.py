"""
Tests for the markdown tokenizer
"""
import pytest

from notedown.markdown_tokenizer import (
    MarkdownListType, MarkdownTokenType, tokenize, tokenize_inline
)


def token_types(text):
    """Get the types of the tokens for some text."""
    return [token.type for token in tokenize(text)]


def test_empty_input(tokenizer):
    """Test tokenizing an empty string."""
    assert tokenizer.tokenize("") == []


@pytest.mark.parametrize("text", [
    "# Title\nSome **bold** and *italic* text\n- item one\n  - nested\n1. ordered\n",
    "> quote with `code`\n---\n```python\nprint('x')\n```\nafter",
    "[[entry-1|Entry]] and [a link](http://example.com) ~~gone~~\n\n\n",
    "**unclosed and *also unclosed\n#\n- \n",
])
def test_raw_text_covers_input(text):
    """Test that the raw text of the tokens joins back to the input."""
    tokens = tokenize(text)
    assert "".join(token.raw for token in tokens) == text

    pos = 0
    for token in tokens:
        assert token.start == pos
        assert token.end == token.start + len(token.raw)
        pos = token.end


def test_heading():
    """Test tokenizing a heading."""
    tokens = tokenize("## Title\n")
    assert len(tokens) == 1
    assert tokens[0].type == MarkdownTokenType.HEADING
    assert tokens[0].level == 2
    assert tokens[0].content == "Title"
    assert tokens[0].raw == "## Title\n"
    assert tokens[0].content_offset() == 3


def test_heading_without_space():
    """Test that a heading doesn't need a space after its marker."""
    tokens = tokenize("#Title")
    assert tokens[0].type == MarkdownTokenType.HEADING
    assert tokens[0].content == "Title"
    assert tokens[0].content_offset() == 1


def test_heading_marker_alone_is_text():
    """Test that a heading marker with no content is plain text."""
    tokens = tokenize("#\n")
    assert len(tokens) == 1
    assert tokens[0].type == MarkdownTokenType.TEXT
    assert tokens[0].raw == "#\n"


def test_heading_only_at_line_start():
    """Test that '#' in the middle of a line is plain text."""
    assert token_types("a # b") == [MarkdownTokenType.TEXT]


def test_bullet_list_items():
    """Test tokenizing bullet list items at several depths."""
    tokens = tokenize("- one\n  - two\n    * three")
    assert [token.type for token in tokens] == [MarkdownTokenType.LIST_ITEM] * 3
    assert [token.level for token in tokens] == [0, 1, 2]
    assert [token.content for token in tokens] == ["one", "two", "three"]
    assert all(token.list_type == MarkdownListType.BULLET for token in tokens)


def test_ordered_list_item():
    """Test tokenizing an ordered list item."""
    tokens = tokenize("12. twelve")
    assert tokens[0].type == MarkdownTokenType.LIST_ITEM
    assert tokens[0].list_type == MarkdownListType.ORDERED
    assert tokens[0].content == "twelve"
    assert tokens[0].content_offset() == 4


def test_empty_list_item():
    """Test that a marker followed by a space is an empty list item."""
    tokens = tokenize("- ")
    assert tokens[0].type == MarkdownTokenType.LIST_ITEM
    assert tokens[0].content == ""
    assert tokens[0].content_offset() == 2


def test_marker_without_space_is_text():
    """Test that a list marker needs whitespace after it."""
    assert token_types("-item") == [MarkdownTokenType.TEXT]
    assert token_types("3.14") == [MarkdownTokenType.TEXT]


def test_horizontal_rules():
    """Test the different horizontal rule forms."""
    for rule in ("---", "___", "*****"):
        tokens = tokenize(rule + "\n")
        assert tokens[0].type == MarkdownTokenType.HR
        assert tokens[0].raw == rule + "\n"


def test_blockquote():
    """Test tokenizing a blockquote."""
    tokens = tokenize("> quoted text\nafter")
    assert tokens[0].type == MarkdownTokenType.BLOCKQUOTE
    assert tokens[0].content == "quoted text"
    assert tokens[1].type == MarkdownTokenType.TEXT
    assert tokens[1].content == "after"


def test_code_block():
    """Test tokenizing a fenced code block."""
    tokens = tokenize("```python\ndef f():\n    return 1\n```\n")
    assert len(tokens) == 1
    assert tokens[0].type == MarkdownTokenType.CODE_BLOCK
    assert tokens[0].language == "python"
    assert tokens[0].content == "def f():\n    return 1"


def test_unterminated_code_block_is_text():
    """Test that a code fence without a closing fence is not a code block."""
    assert MarkdownTokenType.CODE_BLOCK not in token_types("```\ncode")


def test_inline_formatting():
    """Test tokenizing inline formatting within a line."""
    tokens = tokenize("plain **bold** and *it* ~~del~~ `code`")
    assert [token.type for token in tokens] == [
        MarkdownTokenType.TEXT,
        MarkdownTokenType.BOLD,
        MarkdownTokenType.TEXT,
        MarkdownTokenType.ITALIC,
        MarkdownTokenType.TEXT,
        MarkdownTokenType.STRIKETHROUGH,
        MarkdownTokenType.TEXT,
        MarkdownTokenType.CODE
    ]
    assert tokens[1].content == "bold"
    assert tokens[3].content == "it"
    assert tokens[5].content == "del"
    assert tokens[7].content == "code"


def test_underscore_formatting():
    """Test bold and italic written with underscores."""
    tokens = tokenize("__b__ _i_")
    assert tokens[0].type == MarkdownTokenType.BOLD
    assert tokens[0].content == "b"
    assert tokens[2].type == MarkdownTokenType.ITALIC
    assert tokens[2].content == "i"


def test_unclosed_bold_is_text():
    """Test that an opening delimiter with no closing delimiter is plain text."""
    tokens = tokenize("**unclosed")
    assert len(tokens) == 1
    assert tokens[0].type == MarkdownTokenType.TEXT
    assert tokens[0].content == "**unclosed"


def test_delimiters_do_not_cross_lines():
    """Test that inline delimiters are not matched across a newline."""
    assert MarkdownTokenType.BOLD not in token_types("**one\ntwo**")


def test_link():
    """Test tokenizing a link."""
    tokens = tokenize("[text](https://example.com)")
    assert tokens[0].type == MarkdownTokenType.LINK
    assert tokens[0].content == "text"
    assert tokens[0].href == "https://example.com"


def test_wiki_link():
    """Test tokenizing wiki links with and without display names."""
    tokens = tokenize("[[entry-1]] [[entry-2|Second Entry]]")
    assert tokens[0].type == MarkdownTokenType.WIKI_LINK
    assert tokens[0].entry_id == "entry-1"
    assert tokens[0].content == "entry-1"
    assert tokens[2].type == MarkdownTokenType.WIKI_LINK
    assert tokens[2].entry_id == "entry-2"
    assert tokens[2].content == "Second Entry"


def test_wiki_link_trims_whitespace():
    """Test that whitespace around a wiki link ID and display name is ignored."""
    tokens = tokenize("[[ entry-1 | Name ]]")
    assert tokens[0].entry_id == "entry-1"
    assert tokens[0].content == "Name"


def test_blank_wiki_link_is_not_a_link():
    """Test that a wiki link with only whitespace for its ID is not recognised."""
    assert MarkdownTokenType.WIKI_LINK not in token_types("[[   ]]")


def test_text_breaks_after_newline():
    """Test that text tokens end at a newline, keeping it."""
    tokens = tokenize("one\ntwo")
    assert [token.raw for token in tokens] == ["one\n", "two"]


def test_blank_lines_are_text():
    """Test that each blank line is its own newline text token."""
    tokens = tokenize("a\n\n\nb")
    assert [token.raw for token in tokens] == ["a\n", "\n", "\n", "b"]


def test_inline_only_ignores_blocks():
    """Test that inline-only tokenizing does not recognise block syntax."""
    tokens = tokenize_inline("# not a heading **but bold**")
    assert [token.type for token in tokens] == [MarkdownTokenType.TEXT, MarkdownTokenType.BOLD]
    assert tokens[0].content == "# not a heading "


def test_is_inline():
    """Test the inline classification of tokens."""
    tokens = tokenize("# h\ntext")
    assert not tokens[0].is_inline()
    assert tokens[1].is_inline()
