"""
Markdown AST visitor to render the AST as HTML with an edit cursor.

The cursor is rendered as a marker element placed at the character position of the edit
cursor.  Headings, bold and italic text are shown as raw markdown while the cursor is
touching them, so the user can see and edit the markup characters.
"""

import html
from typing import List, Mapping

from notedown.editor_settings import EditorSettings
from notedown.markdown_ast_node import (
    MarkdownASTNode, MarkdownASTVisitor, MarkdownASTDocumentNode, MarkdownASTParagraphNode,
    MarkdownASTHeadingNode, MarkdownASTListNode, MarkdownASTListItemNode, MarkdownASTCodeBlockNode,
    MarkdownASTBlockquoteNode, MarkdownASTHorizontalRuleNode, MarkdownASTTextNode, MarkdownASTBoldNode,
    MarkdownASTEmphasisNode, MarkdownASTStrikethroughNode, MarkdownASTInlineCodeNode, MarkdownASTLinkNode,
    MarkdownASTWikiLinkNode, MarkdownASTLineBreakNode
)
from notedown.markdown_text_renderer import ast_to_text
from notedown.markdown_tokenizer import MarkdownListType


# Separates lines within rendered paragraph content.  Escaped text can't contain `<`,
# so the marker can't be confused with rendered text.
NEWLINE_MARKER = "<!-- NL -->"


class MarkdownHTMLRenderer(MarkdownASTVisitor):
    """Visitor that renders the AST to HTML, inserting the cursor marker exactly once."""

    def __init__(
        self,
        cursor_pos: int,
        entry_title_map: Mapping[str, str] | None = None,
        wiki_slug: str | None = None,
        settings: EditorSettings | None = None
    ) -> None:
        """
        Initialize the renderer.

        Args:
            cursor_pos: Cursor position, or a negative value to render without a cursor
            entry_title_map: Titles of linked entries, keyed by entry ID
            wiki_slug: If set, wiki links point at the public wiki pages for this slug
            settings: Rendering settings
        """
        self._cursor_pos = cursor_pos
        self._entry_title_map = entry_title_map
        self._wiki_slug = wiki_slug
        self._settings = settings or EditorSettings.create_default()
        self._cursor_html = self._settings.cursor_html
        self._cursor_inserted = False
        self._doc_end = 0
        self._block_terminated = False

    def render(self, root: MarkdownASTNode) -> str:
        """
        Render an AST to HTML.

        Args:
            root: The node to render, usually a document

        Returns:
            The HTML for the tree
        """
        self._cursor_inserted = False
        self._doc_end = root.end
        self._block_terminated = False

        result = self.visit(root)
        if not self._cursor_inserted and self._cursor_pos >= 0:
            self._cursor_inserted = True
            if not root.children:
                return f"{result}<p>{self._cursor_html}</p>"

            result += self._cursor_html

        return result

    def _cursor_pending(self) -> bool:
        return not self._cursor_inserted and self._cursor_pos >= 0

    def _cursor_at(self, pos: int) -> str:
        """
        Get the cursor marker if the cursor belongs at a position and is not yet placed.

        Args:
            pos: The position being rendered

        Returns:
            The cursor marker HTML, or an empty string
        """
        if not self._cursor_pending() or pos != self._cursor_pos:
            return ""

        self._cursor_inserted = True
        return self._cursor_html

    def _claim_cursor(self) -> str:
        if not self._cursor_pending():
            return ""

        self._cursor_inserted = True
        return self._cursor_html

    def _render_text(
        self,
        text: str,
        start: int,
        place_at_end: bool = True,
        newline: str = NEWLINE_MARKER
    ) -> str:
        """
        Escape text, inserting the cursor if it falls within the text.

        Args:
            text: The text to render
            start: Absolute position of the first character
            place_at_end: Whether the cursor may be placed after the last character
            newline: What to emit for each newline character

        Returns:
            The escaped text, with newlines replaced by `newline`
        """
        parts: List[str] = []
        for i, ch in enumerate(text):
            parts.append(self._cursor_at(start + i))
            parts.append(newline if ch == "\n" else html.escape(ch))

        if place_at_end:
            parts.append(self._cursor_at(start + len(text)))

        return "".join(parts)

    def _render_children(self, node: MarkdownASTNode) -> str:
        return "".join(self.visit(child) for child in node.children)

    def _line_end(self, node: MarkdownASTNode) -> int:
        """
        Get the position of the end of a line block's own line, before any newline.

        Args:
            node: A heading, blockquote, list item, code block or horizontal rule

        Returns:
            The position at the end of the block's text
        """
        if node.children:
            return node.children[-1].end

        if self._block_terminated:
            return node.end - 1

        return node.end

    def _claims_cursor(self, node: MarkdownASTNode) -> bool:
        return self._cursor_pending() and node.start <= self._cursor_pos <= self._line_end(node)

    def _cursor_in_marker(self, node: MarkdownASTNode) -> str:
        """
        Claim the cursor if it sits in the markup before a block's content.

        Args:
            node: A list item or blockquote

        Returns:
            The cursor marker HTML, or an empty string
        """
        if not node.children or not self._cursor_pending():
            return ""

        if node.start <= self._cursor_pos < node.children[0].start:
            return self._claim_cursor()

        return ""

    def visit_MarkdownASTDocumentNode(self, node: MarkdownASTDocumentNode) -> str:  # pylint: disable=invalid-name
        """
        Render a document node to HTML.

        Args:
            node: The document node to render

        Returns:
            The HTML string representation of the document
        """
        html_parts = []
        last_index = len(node.children) - 1
        for i, child in enumerate(node.children):
            self._block_terminated = i < last_index
            html_parts.append(self.visit(child))

        return "".join(html_parts)

    def visit_MarkdownASTParagraphNode(self, node: MarkdownASTParagraphNode) -> str:  # pylint: disable=invalid-name
        """
        Render a paragraph node to HTML.

        Each line of the paragraph becomes its own <p> element, and an empty line at the
        end of the paragraph is dropped unless the cursor is on it.  A paragraph holding
        nothing but newlines and whitespace is shown as a single <p>.

        Args:
            node: The paragraph node to render

        Returns:
            The HTML string representation of the paragraph
        """
        content = self._render_children(node)
        if not content:
            return ""

        if content.replace(self._cursor_html, "").replace(NEWLINE_MARKER, "").strip() == "":
            return f"<p>{content.replace(NEWLINE_MARKER, '')}</p>"

        lines = content.split(NEWLINE_MARKER)
        if lines[-1] == "":
            lines.pop()

        return "".join(f"<p>{line}</p>" for line in lines)

    def visit_MarkdownASTHeadingNode(self, node: MarkdownASTHeadingNode) -> str:  # pylint: disable=invalid-name
        """
        Render a heading node to HTML.

        While the cursor is on the heading's line, the heading is shown as its raw
        markdown in a paragraph so the `#` markers can be edited.

        Args:
            node: The heading node to render

        Returns:
            The HTML string representation of the heading
        """
        if self._claims_cursor(node):
            content_start = node.children[0].start if node.children else node.end
            marker = "#" * node.level
            raw = marker + " " * max(0, content_start - node.start - len(marker))
            raw += "".join(ast_to_text(child) for child in node.children)
            return f"<p>{self._render_text(raw, node.start)}</p>"

        inner_html = self._render_children(node)
        return f"<h{node.level}>{inner_html}</h{node.level}>"

    def visit_MarkdownASTListNode(self, node: MarkdownASTListNode) -> str:  # pylint: disable=invalid-name
        """
        Render a list node to HTML.

        List items are stored flat with an indentation level each.  Nesting is rebuilt
        here: an item deeper than its predecessor opens a nested list wrapped in its own
        <li>, and a shallower item closes the nested lists above it.

        Args:
            node: The list node to render

        Returns:
            The HTML string representation of the list
        """
        top_tag = self._list_tag(node.list_type)
        html_parts = [f"<{top_tag}>"]
        open_tags: List[str] = []

        items = [child for child in node.children if isinstance(child, MarkdownASTListItemNode)]
        level = items[0].list_level if items else 0

        for item in items:
            while item.list_level > level:
                nested_tag = self._list_tag(item.list_type)
                html_parts.append(f"<li><{nested_tag}>")
                open_tags.append(nested_tag)
                level += 1

            while item.list_level < level and open_tags:
                html_parts.append(f"</{open_tags.pop()}></li>")
                level -= 1

            level = item.list_level
            html_parts.append(self.visit(item))

        while open_tags:
            html_parts.append(f"</{open_tags.pop()}></li>")

        html_parts.append(f"</{top_tag}>")
        return "".join(html_parts)

    def _list_tag(self, list_type: MarkdownListType) -> str:
        return "ol" if list_type == MarkdownListType.ORDERED else "ul"

    def visit_MarkdownASTListItemNode(self, node: MarkdownASTListItemNode) -> str:  # pylint: disable=invalid-name
        inner_html = self._cursor_in_marker(node) + self._render_children(node)
        return f"<li>{inner_html}</li>"

    def visit_MarkdownASTCodeBlockNode(self, node: MarkdownASTCodeBlockNode) -> str:  # pylint: disable=invalid-name
        """
        Render a code block node to HTML.

        A cursor on either fence is shown at the nearest end of the code.

        Args:
            node: The code block node to render

        Returns:
            The HTML string representation of the code block
        """
        content_start = node.start + len(f"```{node.language}\n")
        content_end = content_start + len(node.text)
        claimed = self._claims_cursor(node)

        code_html = ""
        if claimed and self._cursor_pos < content_start:
            code_html += self._claim_cursor()

        code_html += self._render_text(node.text, content_start, newline="\n")

        if claimed and self._cursor_pos > content_end:
            code_html += self._claim_cursor()

        language = html.escape(node.language)
        return f'<pre><code class="language-{language}">{code_html}</code></pre>'

    def visit_MarkdownASTBlockquoteNode(self, node: MarkdownASTBlockquoteNode) -> str:  # pylint: disable=invalid-name
        inner_html = self._cursor_in_marker(node) + self._render_children(node)
        return f"<blockquote><p>{inner_html}</p></blockquote>"

    def visit_MarkdownASTHorizontalRuleNode(self, node: MarkdownASTHorizontalRuleNode) -> str:  # pylint: disable=invalid-name
        cursor_html = self._claim_cursor() if self._claims_cursor(node) else ""
        return f"{cursor_html}<hr>"

    def visit_MarkdownASTTextNode(self, node: MarkdownASTTextNode) -> str:  # pylint: disable=invalid-name
        """
        Render a text node to HTML.

        A cursor just after a trailing newline belongs to whatever follows the text, so
        it is only placed there when the text ends the document.

        Args:
            node: The text node to render

        Returns:
            The escaped text
        """
        place_at_end = not (node.text.endswith("\n") and node.end < self._doc_end)
        return self._render_text(node.text, node.start, place_at_end)

    def _shows_raw_markup(self, node: MarkdownASTNode) -> bool:
        """
        Check if bold or italic text should be shown as raw markdown.

        This is the case while the cursor is strictly inside the span, or sits just after
        its closing delimiter anywhere but at the end of the document.  A cursor just
        before the opening delimiter is outside the span.

        Args:
            node: A bold or italic node

        Returns:
            True if the raw markup should be shown
        """
        if self._cursor_pos < 0:
            return False

        if node.start < self._cursor_pos < node.end:
            return True

        return self._cursor_pos == node.end and node.end != self._doc_end

    def _render_formatted(self, node: MarkdownASTNode, tag: str) -> str:
        if self._shows_raw_markup(node):
            return self._render_text(ast_to_text(node), node.start)

        before = self._cursor_at(node.start)
        inner_html = self._render_children(node)
        return f"{before}<{tag}>{inner_html}</{tag}>{self._cursor_at(node.end)}"

    def visit_MarkdownASTBoldNode(self, node: MarkdownASTBoldNode) -> str:  # pylint: disable=invalid-name
        return self._render_formatted(node, "strong")

    def visit_MarkdownASTEmphasisNode(self, node: MarkdownASTEmphasisNode) -> str:  # pylint: disable=invalid-name
        return self._render_formatted(node, "em")

    def _wrap_cursor(self, node: MarkdownASTNode, element_html: str) -> str:
        """
        Place a cursor that falls on an element's delimiters before or after it.

        Args:
            node: The node being rendered
            element_html: The HTML for the element

        Returns:
            The element HTML with the cursor marker added if needed
        """
        if not self._cursor_pending() or not node.start < self._cursor_pos <= node.end:
            return element_html

        return element_html + self._claim_cursor()

    def visit_MarkdownASTStrikethroughNode(self, node: MarkdownASTStrikethroughNode) -> str:  # pylint: disable=invalid-name
        before = self._cursor_at(node.start)
        inner_html = self._render_children(node)
        return before + self._wrap_cursor(node, f"<del>{inner_html}</del>")

    def visit_MarkdownASTInlineCodeNode(self, node: MarkdownASTInlineCodeNode) -> str:  # pylint: disable=invalid-name
        before = self._cursor_at(node.start)
        code_html = self._render_text(node.text, node.start + 1, place_at_end=False)
        return before + self._wrap_cursor(node, f"<code>{code_html}</code>")

    def visit_MarkdownASTLinkNode(self, node: MarkdownASTLinkNode) -> str:  # pylint: disable=invalid-name
        before = self._cursor_at(node.start)
        inner_html = self._render_children(node)
        href = html.escape(node.href, quote=True)
        return before + self._wrap_cursor(node, f'<a href="{href}">{inner_html}</a>')

    def visit_MarkdownASTWikiLinkNode(self, node: MarkdownASTWikiLinkNode) -> str:  # pylint: disable=invalid-name
        """
        Render a wiki link node to HTML.

        Links to entries missing from the title map are shown as invalid links.  The
        entry's title is used as the link text unless the link gives its own display
        name.

        Args:
            node: The wiki link node to render

        Returns:
            The HTML string representation of the wiki link
        """
        before = self._cursor_at(node.start)

        title = None
        if self._entry_title_map is not None:
            title = self._entry_title_map.get(node.entry_id)

        if title is None:
            invalid_text = html.escape(self._settings.invalid_link_text)
            return before + self._wrap_cursor(node, f'<span class="wiki-link-invalid">{invalid_text}</span>')

        display_name = "".join(ast_to_text(child) for child in node.children)
        if not display_name or display_name == node.entry_id:
            display_name = title

        if self._wiki_slug:
            href = f"{self._settings.wiki_route}/{self._wiki_slug}/{node.entry_id}"

        else:
            href = f"{self._settings.entry_route}/{node.entry_id}"

        href = html.escape(href, quote=True).replace("\n", "&#10;")
        link_html = f'<a href="{href}" class="wiki-link">{html.escape(display_name)}</a>'
        return before + self._wrap_cursor(node, link_html)

    def visit_MarkdownASTLineBreakNode(self, node: MarkdownASTLineBreakNode) -> str:  # pylint: disable=invalid-name
        return self._cursor_at(node.start) + NEWLINE_MARKER

    def generic_visit(self, node: MarkdownASTNode) -> str:
        return self._render_children(node)


def render_ast_with_cursor(
    ast: MarkdownASTNode,
    cursor_pos: int,
    entry_title_map: Mapping[str, str] | None = None,
    wiki_slug: str | None = None,
    settings: EditorSettings | None = None
) -> str:
    """
    Render an AST to HTML with the edit cursor shown.

    Args:
        ast: The document AST
        cursor_pos: Cursor position, or a negative value to hide the cursor
        entry_title_map: Titles of linked entries, keyed by entry ID
        wiki_slug: If set, wiki links point at the public wiki pages for this slug
        settings: Rendering settings

    Returns:
        The rendered HTML
    """
    return MarkdownHTMLRenderer(cursor_pos, entry_title_map, wiki_slug, settings).render(ast)
