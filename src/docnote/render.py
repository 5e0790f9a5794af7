"""Rich renderer: turns classified blocks into console renderables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.text import Text

from docnote.markdown import (
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
    Span,
    SpanStyle,
    Spacer,
    classify,
    transform,
)
from docnote.styles import StyleTable, get_style_table

if TYPE_CHECKING:
    from rich.style import Style

    from docnote.config import RenderConfig
    from docnote.markdown import Block

PLACEHOLDER = "No documentation available."


def _span_style(span: Span, styles: StyleTable) -> Style | None:
    return {
        SpanStyle.BOLD: styles.bold,
        SpanStyle.ITALIC: styles.italic,
        SpanStyle.CODE: styles.code,
    }.get(span.style)


def render_spans(spans: list[Span], styles: StyleTable, *, base: Style | None = None) -> Text:
    """Build a Text from inline spans on top of a base style."""
    text = Text(style=base or "")
    for span in spans:
        text.append(span.text, style=_span_style(span, styles))
    return text


def render_block(block: Block, styles: StyleTable, *, bullet: str = "•") -> Text:
    """Render a single block."""
    match block:
        case Heading(level=level, text=heading):
            return Text(heading, style=styles.heading(level))
        case CodeBlock(lines=lines):
            return Text("\n".join(lines), style=styles.code_block, no_wrap=True, overflow="crop")
        case ListItem(text=item):
            line = Text(f"{bullet} ", style=styles.list_item)
            line.append_text(render_spans(transform(item), styles, base=styles.list_item))
            return line
        case Paragraph(text=paragraph):
            return render_spans(transform(paragraph), styles, base=styles.body)
        case Spacer():
            return Text("")
    msg = f"Unknown block: {block!r}"
    raise TypeError(msg)


def render_blocks(blocks: list[Block], styles: StyleTable, *, bullet: str = "•") -> Group:
    """Render a block sequence as one group, top to bottom."""
    return Group(*(render_block(block, styles, bullet=bullet) for block in blocks))


def render_markdown(text: str, config: RenderConfig | None = None) -> Group:
    """Classify and render a note, or a placeholder if it has no content."""
    styles = get_style_table(config)
    blocks = classify(text)
    if not blocks:
        return Group(Text(PLACEHOLDER, style=styles.placeholder, justify="center"))
    bullet = config.bullet if config is not None else "•"
    return render_blocks(blocks, styles, bullet=bullet)
