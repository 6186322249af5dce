"""
Markdown editor controller.

The controller owns a single immutable EditorState and moves between states in
response to key presses and IME composition events.  It knows nothing about any UI
toolkit: the host forwards key names (using DOM `KeyboardEvent.key` names such as
"Enter" or "ArrowUp") and renders the HTML it gets back.
"""

from dataclasses import dataclass, field, replace
import logging
from typing import Callable, Dict, List, Mapping

from notedown.editor_settings import EditorSettings
from notedown.markdown_ast_builder import create_empty_document, parse_markdown
from notedown.markdown_ast_node import MarkdownASTDocumentNode
from notedown.markdown_cursor import (
    EditResult, delete_at_cursor, handle_enter_key, handle_tab_key, insert_text_at_cursor,
    move_cursor_down, move_cursor_left, move_cursor_right, move_cursor_up
)
from notedown.markdown_html_renderer import render_ast_with_cursor
from notedown.markdown_text_renderer import ast_to_text
from notedown.markdown_wiki_links import LinkTrigger, extract_entry_ids_from_content, find_link_trigger


@dataclass(frozen=True)
class EditorState:
    """
    Complete state of an editor.

    Attributes:
        ast: The document being edited
        cursor_pos: Cursor position in the document's markdown text
        focused: Whether the editor has focus; the cursor is only shown when it does
        entry_titles: Titles of linked entries, keyed by entry ID
        composing: True while an IME composition is in progress
        link_trigger: The unfinished wiki link before the cursor, if any
    """
    ast: MarkdownASTDocumentNode = field(default_factory=create_empty_document)
    cursor_pos: int = 0
    focused: bool = False
    entry_titles: Mapping[str, str] = field(default_factory=dict)
    composing: bool = False
    link_trigger: LinkTrigger | None = None


class MarkdownEditor:
    """
    Controller for editing a markdown document.

    Every content change produces a new state and notifies the `on_change` callback with
    the new AST.  The other callbacks let the host react to keys the editor does not
    handle itself.
    """

    def __init__(
        self,
        ast: MarkdownASTDocumentNode | None = None,
        settings: EditorSettings | None = None,
        wiki_slug: str | None = None,
        on_change: Callable[[MarkdownASTDocumentNode], None] | None = None,
        on_navigate_up: Callable[[], None] | None = None,
        on_ctrl_enter: Callable[[], None] | None = None,
        on_escape: Callable[[], None] | None = None,
        on_link_trigger_show: Callable[[LinkTrigger], None] | None = None,
        on_link_trigger_hide: Callable[[], None] | None = None
    ) -> None:
        """
        Initialize the editor.

        Args:
            ast: Initial document, defaults to an empty document
            settings: Rendering settings
            wiki_slug: If set, wiki links render as links to the public wiki pages
            on_change: Called with the new AST after every content change
            on_navigate_up: Called when ArrowUp is pressed at the start of the document
            on_ctrl_enter: Called when Ctrl+Enter is pressed
            on_escape: Called when Escape is pressed and no link popover is showing
            on_link_trigger_show: Called when an unfinished wiki link is typed
            on_link_trigger_hide: Called when the unfinished wiki link goes away
        """
        self._state = EditorState(ast=ast if ast is not None else create_empty_document())
        self._settings = settings or EditorSettings.create_default()
        self._wiki_slug = wiki_slug

        self._on_change = on_change
        self._on_navigate_up = on_navigate_up
        self._on_ctrl_enter = on_ctrl_enter
        self._on_escape = on_escape
        self._on_link_trigger_show = on_link_trigger_show
        self._on_link_trigger_hide = on_link_trigger_hide

        self._logger = logging.getLogger("MarkdownEditor")

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "MarkdownEditor":
        """
        Create an editor for some markdown text.

        Args:
            text: The markdown text
            kwargs: Other arguments for the constructor

        Returns:
            The new editor
        """
        return cls(ast=parse_markdown(text), **kwargs)

    def state(self) -> EditorState:
        """Get the current editor state."""
        return self._state

    def ast(self) -> MarkdownASTDocumentNode:
        """Get the current document AST."""
        return self._state.ast

    def cursor_pos(self) -> int:
        """Get the current cursor position."""
        return self._state.cursor_pos

    def get_text(self) -> str:
        """Get the current document as markdown text."""
        return ast_to_text(self._state.ast)

    def link_trigger(self) -> LinkTrigger | None:
        """Get the unfinished wiki link before the cursor, if any."""
        return self._state.link_trigger

    def entry_titles(self) -> Mapping[str, str]:
        """Get the titles used to render wiki links."""
        return self._state.entry_titles

    def entry_ids(self) -> List[str]:
        """
        Get the IDs of all entries linked from the document.

        The host uses these to look up the titles to pass to `set_entry_titles`.

        Returns:
            Unique entry IDs in the order they first appear
        """
        return extract_entry_ids_from_content(self.get_text())

    def set_ast(self, ast: MarkdownASTDocumentNode) -> None:
        """
        Replace the document, for example after loading it.

        Args:
            ast: The new document AST
        """
        max_pos = len(ast_to_text(ast))
        self._state = replace(self._state, ast=ast, cursor_pos=min(self._state.cursor_pos, max_pos))

    def set_cursor_pos(self, pos: int) -> None:
        """
        Move the cursor, clamping it to the document.

        Args:
            pos: The new cursor position
        """
        max_pos = len(self.get_text())
        self._state = replace(self._state, cursor_pos=max(0, min(pos, max_pos)))

    def set_entry_titles(self, titles: Mapping[str, str]) -> None:
        """
        Set the titles used to render wiki links.

        Args:
            titles: Titles keyed by entry ID
        """
        self._state = replace(self._state, entry_titles=dict(titles))

    def set_focused(self, focused: bool) -> None:
        """
        Set whether the editor has focus.

        Args:
            focused: True if the editor has focus
        """
        self._state = replace(self._state, focused=focused)

    def render(self) -> str:
        """
        Render the document to HTML.

        Returns:
            The HTML, with the cursor shown only while the editor has focus
        """
        cursor_pos = self._state.cursor_pos if self._state.focused else -1
        return render_ast_with_cursor(
            self._state.ast,
            cursor_pos,
            self._state.entry_titles,
            self._wiki_slug,
            self._settings
        )

    def handle_key(
        self,
        key: str,
        ctrl: bool = False,
        shift: bool = False,
        meta: bool = False,
        alt: bool = False
    ) -> bool:
        """
        Handle a key press.

        Args:
            key: The key name, as in DOM KeyboardEvent.key
            ctrl: True if Ctrl is held
            shift: True if Shift is held
            meta: True if Meta is held
            alt: True if Alt is held

        Returns:
            True if the editor handled the key, in which case the host should suppress
            its default action
        """
        state = self._state

        if state.composing:
            return False

        # The link popover handles its own navigation and selection keys
        if state.link_trigger is not None and key in ("ArrowDown", "ArrowUp", "Enter"):
            return False

        if key == "Escape":
            if state.link_trigger is not None:
                self.close_link_trigger()

            elif self._on_escape is not None:
                self._on_escape()

            return True

        if key == "Enter" and ctrl:
            if self._on_ctrl_enter is not None:
                self._on_ctrl_enter()

            return True

        if key == "ArrowUp" and state.cursor_pos == 0:
            if self._on_navigate_up is not None:
                self._on_navigate_up()

            return True

        motion: Dict[str, Callable[[], int]] = {
            "ArrowLeft": lambda: move_cursor_left(state.ast, state.cursor_pos, ctrl),
            "ArrowRight": lambda: move_cursor_right(state.ast, state.cursor_pos, ctrl),
            "ArrowUp": lambda: move_cursor_up(state.ast, state.cursor_pos),
            "ArrowDown": lambda: move_cursor_down(state.ast, state.cursor_pos)
        }
        if key in motion:
            self._state = replace(state, cursor_pos=motion[key]())
            return True

        if len(key) == 1 and not ctrl and not meta and not alt:
            self._apply_edit(insert_text_at_cursor(state.ast, state.cursor_pos, key), check_link_trigger=True)
            return True

        if key == "Backspace":
            self._apply_edit(delete_at_cursor(state.ast, state.cursor_pos, False), check_link_trigger=True)
            return True

        if key == "Delete":
            self._apply_edit(delete_at_cursor(state.ast, state.cursor_pos, True), check_link_trigger=True)
            return True

        if key == "Enter":
            self._apply_edit(handle_enter_key(state.ast, state.cursor_pos))
            return True

        if key == "Tab":
            self._apply_edit(handle_tab_key(state.ast, state.cursor_pos, shift))
            return True

        self._logger.debug("ignoring key %r (ctrl=%s, shift=%s, meta=%s, alt=%s)", key, ctrl, shift, meta, alt)
        return False

    def composition_start(self) -> None:
        """Start an IME composition; keys are ignored until it ends."""
        self._state = replace(self._state, composing=True)

    def composition_end(self, data: str) -> None:
        """
        End an IME composition, inserting the composed text.

        Args:
            data: The composed text, which may be empty if the composition was cancelled
        """
        self._state = replace(self._state, composing=False)
        if data:
            self._apply_edit(insert_text_at_cursor(self._state.ast, self._state.cursor_pos, data))

    def insert_wiki_link(self, entry_id: str) -> None:
        """
        Complete the unfinished wiki link before the cursor.

        The opening `[[` and search term are replaced by a complete link to the entry.  A
        closing `]]` just after the cursor is absorbed into the new link.

        Args:
            entry_id: ID of the entry to link to
        """
        state = self._state
        link_start = state.link_trigger.start_pos if state.link_trigger is not None else state.cursor_pos
        link_start = min(link_start, state.cursor_pos)

        text = ast_to_text(state.ast)
        before_link = text[:link_start]
        after_cursor = text[state.cursor_pos:]
        if after_cursor.startswith("]]"):
            after_cursor = after_cursor[2:]

        wiki_link = f"[[{entry_id}]]"
        new_text = before_link + wiki_link + after_cursor
        new_ast = parse_markdown(new_text) if new_text else create_empty_document()

        self._state = replace(state, ast=new_ast, cursor_pos=link_start + len(wiki_link))
        self._set_link_trigger(None)
        self._notify_change()

    def close_link_trigger(self) -> None:
        """Dismiss the link popover without inserting a link."""
        self._set_link_trigger(None)

    def _apply_edit(self, result: EditResult, check_link_trigger: bool = False) -> None:
        """
        Move to the state produced by an editing operation.

        Args:
            result: The new AST and cursor position
            check_link_trigger: Whether to look for an unfinished wiki link afterwards
        """
        self._state = replace(self._state, ast=result.ast, cursor_pos=result.cursor_pos)
        self._notify_change()

        if check_link_trigger:
            self._set_link_trigger(find_link_trigger(self.get_text(), self._state.cursor_pos))

    def _set_link_trigger(self, trigger: LinkTrigger | None) -> None:
        previous = self._state.link_trigger
        self._state = replace(self._state, link_trigger=trigger)

        if trigger is not None:
            self._logger.debug("link trigger at %d with search term %r", trigger.start_pos, trigger.search_term)
            if self._on_link_trigger_show is not None:
                self._on_link_trigger_show(trigger)

            return

        if previous is not None and self._on_link_trigger_hide is not None:
            self._on_link_trigger_hide()

    def _notify_change(self) -> None:
        if self._on_change is not None:
            self._on_change(self._state.ast)
