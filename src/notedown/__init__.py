"""A cursor-aware markdown editing engine for notes."""

from notedown.editor_exceptions import (
    ASTDeserializationError,
    EditorError,
    EditorSettingsError,
    TitleMapError
)
from notedown.editor_settings import EditorSettings
from notedown.markdown_ast_builder import MarkdownASTBuilder, build_ast, create_empty_document, parse_markdown
from notedown.markdown_ast_node import (
    MarkdownASTBlockquoteNode,
    MarkdownASTBoldNode,
    MarkdownASTCodeBlockNode,
    MarkdownASTDocumentNode,
    MarkdownASTEmphasisNode,
    MarkdownASTHeadingNode,
    MarkdownASTHorizontalRuleNode,
    MarkdownASTInlineCodeNode,
    MarkdownASTLineBreakNode,
    MarkdownASTLinkNode,
    MarkdownASTListItemNode,
    MarkdownASTListNode,
    MarkdownASTNode,
    MarkdownASTNodeType,
    MarkdownASTParagraphNode,
    MarkdownASTStrikethroughNode,
    MarkdownASTTextNode,
    MarkdownASTVisitor,
    MarkdownASTWikiLinkNode
)
from notedown.markdown_cursor import (
    EditResult,
    delete_at_cursor,
    handle_enter_key,
    handle_tab_key,
    insert_text_at_cursor,
    move_cursor_down,
    move_cursor_left,
    move_cursor_right,
    move_cursor_up
)
from notedown.markdown_editor import EditorState, MarkdownEditor
from notedown.markdown_html_renderer import MarkdownHTMLRenderer, render_ast_with_cursor
from notedown.markdown_text_renderer import ast_to_text
from notedown.markdown_tokenizer import MarkdownListType, MarkdownToken, MarkdownTokenizer, MarkdownTokenType, tokenize


__version__ = "0.1.0"


__all__ = [
    "ASTDeserializationError",
    "EditResult",
    "EditorError",
    "EditorSettings",
    "EditorSettingsError",
    "EditorState",
    "MarkdownASTBlockquoteNode",
    "MarkdownASTBoldNode",
    "MarkdownASTBuilder",
    "MarkdownASTCodeBlockNode",
    "MarkdownASTDocumentNode",
    "MarkdownASTEmphasisNode",
    "MarkdownASTHeadingNode",
    "MarkdownASTHorizontalRuleNode",
    "MarkdownASTInlineCodeNode",
    "MarkdownASTLineBreakNode",
    "MarkdownASTLinkNode",
    "MarkdownASTListItemNode",
    "MarkdownASTListNode",
    "MarkdownASTNode",
    "MarkdownASTNodeType",
    "MarkdownASTParagraphNode",
    "MarkdownASTStrikethroughNode",
    "MarkdownASTTextNode",
    "MarkdownASTVisitor",
    "MarkdownASTWikiLinkNode",
    "MarkdownEditor",
    "MarkdownHTMLRenderer",
    "MarkdownListType",
    "MarkdownToken",
    "MarkdownTokenType",
    "MarkdownTokenizer",
    "TitleMapError",
    "ast_to_text",
    "build_ast",
    "create_empty_document",
    "delete_at_cursor",
    "handle_enter_key",
    "handle_tab_key",
    "insert_text_at_cursor",
    "move_cursor_down",
    "move_cursor_left",
    "move_cursor_right",
    "move_cursor_up",
    "parse_markdown",
    "render_ast_with_cursor",
    "tokenize"
]
