"""Note view widget: the rendered Markdown body of a note."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from docnote.render import render_markdown

if TYPE_CHECKING:
    from docnote.config import RenderConfig
    from docnote.db import Note


class NoteView(Static):
    """Read-only rendering of a note's Markdown, or a placeholder when empty."""

    DEFAULT_CSS = """
    NoteView {
        height: auto;
        padding: 0 1;
    }
    """

    def __init__(self, config: RenderConfig | None = None, *, id: str | None = None) -> None:  # noqa: A002
        super().__init__(render_markdown("", config), id=id)
        self._config = config

    def show_note(self, note: Note | None) -> None:
        """Re-render the view for ``note``."""
        self.update(render_markdown(note.markdown if note is not None else "", self._config))
