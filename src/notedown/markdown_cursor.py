"""
Cursor editing operations for the markdown editor.

Every operation is a pure function of a document AST and a cursor position.  Edits are
made on the document's markdown text, which is then tokenized and built into a new AST;
the tree passed in is never modified.  Cursor motion needs no re-parse and just returns
a new position.
"""

import difflib
import logging
import re
from typing import NamedTuple, Tuple

from notedown.markdown_ast_builder import create_empty_document, parse_markdown
from notedown.markdown_ast_node import MarkdownASTDocumentNode, MarkdownASTNodeType
from notedown.markdown_ast_utils import (
    find_ancestor_of_type, find_node_at_position, get_list_context, get_list_item_content_start
)
from notedown.markdown_text_renderer import ast_to_text
from notedown.markdown_tokenizer import LIST_INDENT_SPACES, MarkdownListType


# Matches the indentation and marker at the start of a list item line
LIST_MARKER_LINE_PATTERN = re.compile(r'( *)(?:[-*+]|\d+\.)[ \t]+')


logger = logging.getLogger(__name__)


class EditResult(NamedTuple):
    """The outcome of an editing operation."""
    ast: MarkdownASTDocumentNode
    cursor_pos: int


def _clamp(pos: int, text: str) -> int:
    return max(0, min(pos, len(text)))


def remap_cursor(old_text: str, new_text: str, pos: int) -> int:
    """
    Map a cursor position in one text to the equivalent position in an edited text.

    The two texts are aligned with a sequence matcher and the cursor keeps its place
    relative to the unchanged characters around it.

    Args:
        old_text: The text the position refers to
        new_text: The edited text
        pos: Position in old_text

    Returns:
        The corresponding position in new_text
    """
    matcher = difflib.SequenceMatcher(None, old_text, new_text, autojunk=False)
    opcodes = matcher.get_opcodes()

    for tag, i1, i2, j1, _j2 in opcodes:
        if tag == 'equal' and i1 <= pos <= i2:
            return j1 + pos - i1

    # The cursor sat inside a changed region, so put it at the end of the replacement
    for _tag, i1, i2, _j1, j2 in opcodes:
        if i1 <= pos <= i2:
            return j2

    return len(new_text)


def reparse_text(text: str, cursor_pos: int) -> EditResult:
    """
    Build the AST for edited text.

    Some edits produce text that does not reconstruct exactly (`#Title` is written back
    as `# Title`, for example).  When that happens the normalized text is parsed instead
    and the cursor is moved to the matching place in it.

    Args:
        text: The edited markdown text
        cursor_pos: Cursor position within text

    Returns:
        The new AST and cursor position
    """
    if not text:
        return EditResult(create_empty_document(), 0)

    ast = parse_markdown(text)
    normalized = ast_to_text(ast)
    if normalized == text:
        return EditResult(ast, _clamp(cursor_pos, text))

    logger.debug("normalized edited text from %r to %r", text, normalized)
    new_pos = remap_cursor(text, normalized, cursor_pos)
    if not normalized:
        return EditResult(create_empty_document(), 0)

    return EditResult(parse_markdown(normalized), _clamp(new_pos, normalized))


def _normalize(ast: MarkdownASTDocumentNode, pos: int) -> Tuple[str, MarkdownASTDocumentNode, int]:
    """
    Get the text of an AST along with a tree whose offsets match that text.

    Args:
        ast: The document AST
        pos: The cursor position

    Returns:
        Tuple of (text, AST built from text, cursor position clamped to the text)
    """
    text = ast_to_text(ast)
    return text, parse_markdown(text), _clamp(pos, text)


def insert_text_at_cursor(ast: MarkdownASTDocumentNode, pos: int, text: str) -> EditResult:
    """
    Insert text at the cursor.

    Args:
        ast: The document AST
        pos: Cursor position
        text: The text to insert

    Returns:
        The new AST with the cursor just after the inserted text
    """
    current_text, _, pos = _normalize(ast, pos)
    new_text = current_text[:pos] + text + current_text[pos:]
    return reparse_text(new_text, pos + len(text))


def delete_at_cursor(ast: MarkdownASTDocumentNode, pos: int, forward: bool) -> EditResult:
    """
    Delete one character before (backspace) or after (delete) the cursor.

    Backspace immediately after a list marker removes the whole marker, leaving any
    indentation in place.  If the list item is empty its whole line goes, along with the
    newline that precedes it, so the cursor lands at the end of the previous line.

    Args:
        ast: The document AST
        pos: Cursor position
        forward: True to delete the character after the cursor

    Returns:
        The new AST and cursor position
    """
    text, ast, pos = _normalize(ast, pos)
    if not text:
        return EditResult(create_empty_document(), 0)

    if not forward:
        context = get_list_context(ast, pos)
        if context.in_list and context.list_item is not None:
            content_start = get_list_item_content_start(context.list_item)
            if pos == content_start:
                line_start = context.list_item.start
                if context.is_empty_item and line_start > 0:
                    new_text = text[:line_start - 1] + text[content_start:]
                    return reparse_text(new_text, line_start - 1)

                marker_match = LIST_MARKER_LINE_PATTERN.match(text, line_start)
                marker_start = line_start + len(marker_match.group(1)) if marker_match else line_start
                new_text = text[:marker_start] + text[content_start:]
                return reparse_text(new_text, marker_start)

        if pos == 0:
            return EditResult(ast, 0)

        return reparse_text(text[:pos - 1] + text[pos:], pos - 1)

    if pos >= len(text):
        return EditResult(ast, pos)

    return reparse_text(text[:pos] + text[pos + 1:], pos)


def handle_enter_key(ast: MarkdownASTDocumentNode, pos: int) -> EditResult:
    """
    Handle the Enter key.

    In a list item, Enter continues the list with a new item of the same kind and depth.
    In an empty list item it ends the list instead, leaving a blank line after it.  In a
    heading it closes the heading and starts a new paragraph.  Anywhere else it inserts a
    single newline.

    Args:
        ast: The document AST
        pos: Cursor position

    Returns:
        The new AST, with the cursor ready to type in the new line
    """
    text, ast, pos = _normalize(ast, pos)

    context = get_list_context(ast, pos)
    if context.in_list and context.list_item is not None:
        list_item = context.list_item
        if context.is_empty_item:
            before = text[:list_item.start].rstrip("\n")
            after = text[list_item.end:]
            if not before:
                return reparse_text(after, 0)

            if not after:
                return reparse_text(before + "\n\n", len(before) + 2)

            return reparse_text(before + "\n\n" + after, len(before) + 1)

        pos = max(pos, get_list_item_content_start(list_item))
        indent = " " * (list_item.list_level * LIST_INDENT_SPACES)
        marker = "1. " if list_item.list_type == MarkdownListType.ORDERED else "- "
        insertion = "\n" + indent + marker
        return reparse_text(text[:pos] + insertion + text[pos:], pos + len(insertion))

    node = find_node_at_position(ast, pos)
    if node is not None and find_ancestor_of_type(ast, node, MarkdownASTNodeType.HEADING) is not None:
        return reparse_text(text[:pos] + "\n\n" + text[pos:], pos + 2)

    return reparse_text(text[:pos] + "\n" + text[pos:], pos + 1)


def handle_tab_key(ast: MarkdownASTDocumentNode, pos: int, shift: bool) -> EditResult:
    """
    Indent (Tab) or outdent (Shift+Tab) the list item containing the cursor.

    An item can be indented at most one level deeper than the list line immediately
    above it.  Outside a list nothing changes.

    Args:
        ast: The document AST
        pos: Cursor position
        shift: True for Shift+Tab

    Returns:
        The new AST, with the cursor moved by the change in indentation
    """
    text, ast, pos = _normalize(ast, pos)

    context = get_list_context(ast, pos)
    if not context.in_list or context.list_item is None:
        return EditResult(ast, pos)

    line_start = context.list_item.start
    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)

    line = text[line_start:line_end]
    current_indent = len(line) - len(line.lstrip(" "))

    if shift:
        new_indent = max(0, current_indent - LIST_INDENT_SPACES)

    else:
        max_indent = 0
        if line_start > 0:
            prev_line_start = text.rfind("\n", 0, line_start - 1) + 1
            prev_match = LIST_MARKER_LINE_PATTERN.match(text[prev_line_start:line_start - 1])
            if prev_match:
                max_indent = len(prev_match.group(1)) + LIST_INDENT_SPACES

        new_indent = min(current_indent + LIST_INDENT_SPACES, max_indent)

    if new_indent == current_indent or (not shift and new_indent < current_indent):
        return EditResult(ast, pos)

    delta = new_indent - current_indent
    new_text = text[:line_start] + " " * new_indent + text[line_start + current_indent:]
    return reparse_text(new_text, max(line_start, pos + delta))


def move_cursor_up(ast: MarkdownASTDocumentNode, pos: int) -> int:
    """
    Move the cursor to the same column on the previous line.

    Args:
        ast: The document AST
        pos: Cursor position

    Returns:
        The new cursor position, 0 if the cursor is already on the first line
    """
    text = ast_to_text(ast)
    pos = _clamp(pos, text)

    line_start = text.rfind("\n", 0, pos) + 1
    if line_start == 0:
        return 0

    column = pos - line_start
    prev_line_start = text.rfind("\n", 0, line_start - 1) + 1
    prev_line_len = line_start - 1 - prev_line_start
    return prev_line_start + min(column, prev_line_len)


def move_cursor_down(ast: MarkdownASTDocumentNode, pos: int) -> int:
    """
    Move the cursor to the same column on the next line.

    Args:
        ast: The document AST
        pos: Cursor position

    Returns:
        The new cursor position, the end of the document if already on the last line
    """
    text = ast_to_text(ast)
    pos = _clamp(pos, text)

    line_end = text.find("\n", pos)
    if line_end == -1:
        return len(text)

    column = pos - (text.rfind("\n", 0, pos) + 1)
    next_line_start = line_end + 1
    next_line_end = text.find("\n", next_line_start)
    if next_line_end == -1:
        next_line_end = len(text)

    return next_line_start + min(column, next_line_end - next_line_start)


def move_cursor_left(ast: MarkdownASTDocumentNode, pos: int, ctrl: bool = False) -> int:
    """
    Move the cursor one character, or one word with ctrl, to the left.

    Args:
        ast: The document AST
        pos: Cursor position
        ctrl: True to move to the start of the previous word

    Returns:
        The new cursor position
    """
    text = ast_to_text(ast)
    pos = _clamp(pos, text)
    if pos == 0:
        return 0

    if not ctrl:
        return pos - 1

    while pos > 0 and text[pos - 1].isspace():
        pos -= 1

    while pos > 0 and not text[pos - 1].isspace():
        pos -= 1

    return pos


def move_cursor_right(ast: MarkdownASTDocumentNode, pos: int, ctrl: bool = False) -> int:
    """
    Move the cursor one character, or one word with ctrl, to the right.

    Args:
        ast: The document AST
        pos: Cursor position
        ctrl: True to move to the end of the next word

    Returns:
        The new cursor position
    """
    text = ast_to_text(ast)
    pos = _clamp(pos, text)
    text_len = len(text)
    if pos == text_len:
        return text_len

    if not ctrl:
        return pos + 1

    while pos < text_len and text[pos].isspace():
        pos += 1

    while pos < text_len and not text[pos].isspace():
        pos += 1

    return pos
