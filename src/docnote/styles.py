"""Style table shared by every renderer.

Built once per distinct RenderConfig and never mutated afterwards.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from rich.style import Style

from docnote.config import RenderConfig


@dataclass(frozen=True)
class StyleTable:
    """Rich styles for each kind of block and inline span."""

    h1: Style
    h2: Style
    h3: Style
    body: Style
    list_item: Style
    code_block: Style
    link: Style
    bold: Style
    italic: Style
    code: Style
    placeholder: Style

    def heading(self, level: int) -> Style:
        """Return the style for a heading level, clamped to 1..3."""
        return (self.h1, self.h2, self.h3)[min(max(level, 1), 3) - 1]


@functools.cache
def get_style_table(config: RenderConfig | None = None) -> StyleTable:
    """Return the style table for ``config`` (defaults when None)."""
    if config is None:
        config = RenderConfig()
    return StyleTable(
        # Terminals have one font size, so levels differ by decoration instead.
        h1=Style(color=config.heading_color, bold=True, underline=True),
        h2=Style(color=config.heading_color, bold=True),
        h3=Style(color=config.heading_color, bold=True, italic=True),
        body=Style(color=config.body_color),
        list_item=Style(color=config.body_color),
        code_block=Style(color=config.code_color, bgcolor="grey15"),
        link=Style(color=config.link_color, underline=True),
        bold=Style(bold=True),
        italic=Style(italic=True),
        code=Style(color=config.code_color),
        placeholder=Style(color="grey50", italic=True),
    )
