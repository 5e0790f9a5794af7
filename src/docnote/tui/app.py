"""Textual App: note inspector with view and edit modes."""

from __future__ import annotations

import dataclasses
import logging
import webbrowser
from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Static, TextArea

from docnote.db import create_note, finish_editing, open_db, save_note
from docnote.links import open_external
from docnote.tui.help_screen import HelpScreen
from docnote.tui.note_view import NoteView

if TYPE_CHECKING:
    import sqlite3
    from collections.abc import Callable

    from textual.binding import BindingType

    from docnote.config import RenderConfig
    from docnote.db import Note

logger = logging.getLogger(__name__)

EDIT_HINT = "Use Markdown syntax to style text. No inline links yet."


class NoteApp(App[None]):
    """Inspector for a single documentation note."""

    TITLE = "docnote"

    CSS = """
    #note-header {
        height: 3;
        padding: 0 1;
    }
    #note-title {
        width: 1fr;
        content-align: left middle;
        text-style: bold;
    }
    #toggle-edit {
        min-width: 8;
    }
    #note-body {
        height: 1fr;
        border: round $primary;
    }
    #note-editor {
        height: 1fr;
        display: none;
    }
    #editor-hint {
        width: 100%;
        content-align: center middle;
        text-style: dim;
        display: none;
    }
    #link-row, #link-editor {
        height: 3;
        border-top: solid $primary;
    }
    #link-editor {
        display: none;
    }
    .link-label {
        width: auto;
        padding: 1 1 0 1;
        text-style: bold;
    }
    #link-button {
        width: 1fr;
        border: none;
        background: transparent;
        color: $accent;
        text-style: underline;
        content-align: left middle;
    }
    #url-input {
        width: 1fr;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("ctrl+e", "toggle_edit", "Edit/Done", show=True, priority=True),
        Binding("o", "open_link", "Open link", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
    ]

    def __init__(
        self,
        note_name: str,
        conn: sqlite3.Connection | None = None,
        config: RenderConfig | None = None,
        opener: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        super().__init__()
        self._conn = conn if conn is not None else open_db()
        self._owns_conn = conn is None
        self._config = config
        self._opener = opener
        self.note: Note = create_note(self._conn, note_name)
        self.editing = False

    def compose(self) -> ComposeResult:
        """Create the inspector layout: header row, body, link row."""
        yield Header()
        with Horizontal(id="note-header"):
            yield Static("Documentation Note", id="note-title")
            yield Button("Edit", id="toggle-edit")
        with VerticalScroll(id="note-body"):
            yield NoteView(self._config, id="note-view")
            yield TextArea(id="note-editor")
            yield Static(EDIT_HINT, id="editor-hint")
        with Horizontal(id="link-row"):
            yield Static("Link ↗", classes="link-label")
            yield Button(self.note.documentation_url or "-", id="link-button")
        with Horizontal(id="link-editor"):
            yield Static("Add Link", classes="link-label")
            yield Input(placeholder="https://…", id="url-input")
            yield Button("X", id="clear-url")
        yield Footer()

    def on_mount(self) -> None:
        """Show the note in view mode."""
        self.sub_title = self.note.name
        self._show_view()

    def _show_view(self) -> None:
        self.query_one(NoteView).show_note(self.note)
        self.query_one("#link-button", Button).label = self.note.documentation_url or "-"
        self.query_one("#note-view").display = True
        self.query_one("#note-editor").display = False
        self.query_one("#editor-hint").display = False
        self.query_one("#link-row").display = bool(self.note.documentation_url)
        self.query_one("#link-editor").display = False
        self.query_one("#toggle-edit", Button).label = "Edit"

    def _show_editor(self) -> None:
        editor = self.query_one("#note-editor", TextArea)
        editor.text = self.note.markdown
        self.query_one("#url-input", Input).value = self.note.documentation_url
        self.query_one("#note-view").display = False
        editor.display = True
        self.query_one("#editor-hint").display = True
        self.query_one("#link-row").display = False
        self.query_one("#link-editor").display = True
        self.query_one("#toggle-edit", Button).label = "Done"
        editor.focus()

    # === Actions ===

    def action_toggle_edit(self) -> None:
        """Switch between view and edit mode, saving the note when leaving edit mode."""
        if self.editing:
            edited = dataclasses.replace(
                self.note,
                markdown=self.query_one("#note-editor", TextArea).text,
                documentation_url=self.query_one("#url-input", Input).value.strip(),
            )
            self.note = save_note(self._conn, finish_editing(edited))
            logger.debug("Saved note %s", self.note.name)
            self.editing = False
            self._show_view()
        else:
            self.note = finish_editing(self.note)
            self.editing = True
            self._show_editor()

    def action_open_link(self) -> None:
        """Open the note's documentation link in the browser."""
        if self.editing or not self.note.documentation_url:
            return
        if not open_external(self.note.documentation_url, opener=self._opener):
            self.notify(f"Could not open {self.note.documentation_url}", severity="error")

    def action_show_help(self) -> None:
        """Show the help overlay."""
        self.push_screen(HelpScreen())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Dispatch header and link-row buttons."""
        if event.button.id == "toggle-edit":
            self.action_toggle_edit()
        elif event.button.id == "link-button":
            self.action_open_link()
        elif event.button.id == "clear-url":
            self.query_one("#url-input", Input).value = ""

    def on_unmount(self) -> None:
        """Clean up."""
        if self._owns_conn:
            self._conn.close()
