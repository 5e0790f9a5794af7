"""Markdown-subset classifier and inline span transformer.

Handles: headings (H1-H3), bullet lists, fenced code blocks, bold, italic, inline code.
Does NOT handle: tables, images, links, nested lists, nested inline styling.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import TypeAlias

_FENCE = re.compile(r"^\s*```")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_CODE = re.compile(r"`(.+?)`")

# Longest prefix first: "### x" must not be read as "# " followed by "## x".
_HEADING_PREFIXES: tuple[tuple[str, int], ...] = (("### ", 3), ("## ", 2), ("# ", 1))
_LIST_PREFIXES = ("- ", "* ")


# === Blocks ===


@dataclass(frozen=True)
class Heading:
    """A heading line; its text is rendered literally."""

    level: int
    text: str


@dataclass(frozen=True)
class ListItem:
    """A bullet list item, text still carrying inline markers."""

    text: str


@dataclass(frozen=True)
class Paragraph:
    """A plain text line, text still carrying inline markers."""

    text: str


@dataclass(frozen=True)
class CodeBlock:
    """Lines between a pair of fences, kept verbatim."""

    lines: list[str] = field(default_factory=list)
    language: str = ""


@dataclass(frozen=True)
class Spacer:
    """A blank line."""


Block: TypeAlias = Heading | ListItem | Paragraph | CodeBlock | Spacer


# === Inline spans ===


class SpanStyle(enum.Enum):
    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


@dataclass(frozen=True)
class Span:
    """One styled fragment of a line."""

    style: SpanStyle
    text: str


_INLINE_PASSES: tuple[tuple[re.Pattern[str], SpanStyle], ...] = (
    (_BOLD, SpanStyle.BOLD),
    (_ITALIC, SpanStyle.ITALIC),
    (_CODE, SpanStyle.CODE),
)


def classify(raw_text: str) -> list[Block]:
    """Split Markdown text into a sequence of blocks.

    Never raises: an unterminated fence flushes whatever it buffered, and
    empty or whitespace-only input yields an empty list.
    """
    if not raw_text or not raw_text.strip():
        return []

    lines = raw_text.replace("\r\n", "\n").split("\n")
    blocks: list[Block] = []
    in_code_block = False
    code_lines: list[str] = []
    language = ""

    for raw_line in lines:
        line = raw_line.rstrip()

        if _FENCE.match(line):
            if in_code_block:
                blocks.append(CodeBlock(lines=code_lines, language=language))
                code_lines = []
                in_code_block = False
            else:
                language = line.strip()[3:].strip()
                in_code_block = True
            continue

        if in_code_block:
            code_lines.append(raw_line)
            continue

        blocks.append(_classify_line(line))

    # Unclosed code block: flush remaining
    if in_code_block and code_lines:
        blocks.append(CodeBlock(lines=code_lines, language=language))

    return blocks


def _classify_line(line: str) -> Block:
    """Classify a single right-trimmed line outside a code block."""
    if not line.strip():
        return Spacer()
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix) :])
    if line.startswith(_LIST_PREFIXES):
        return ListItem(text=line[2:])
    return Paragraph(text=line)


def transform(text: str) -> list[Span]:
    """Resolve inline bold, italic, and code markers into spans.

    Passes run in order (bold, italic, code) and each one only scans text
    still plain after the previous passes, so markers inside a claimed span
    stay literal: ``**a *b* c**`` is a single bold span ``a *b* c``.
    """
    spans = [Span(SpanStyle.PLAIN, text)]
    for pattern, style in _INLINE_PASSES:
        spans = _apply_pass(spans, pattern, style)
    return [span for span in spans if span.text]


def _apply_pass(spans: list[Span], pattern: re.Pattern[str], style: SpanStyle) -> list[Span]:
    """Split every plain span on the pattern, wrapping each match in ``style``."""
    result: list[Span] = []
    for span in spans:
        if span.style is not SpanStyle.PLAIN:
            result.append(span)
            continue
        pos = 0
        for match in pattern.finditer(span.text):
            result.append(Span(SpanStyle.PLAIN, span.text[pos : match.start()]))
            result.append(Span(style, match.group(1)))
            pos = match.end()
        result.append(Span(SpanStyle.PLAIN, span.text[pos:]))
    return result


def reconstruct(blocks: list[Block]) -> str:
    """Turn a block sequence back into Markdown source."""
    lines: list[str] = []
    for block in blocks:
        match block:
            case Heading(level=level, text=text):
                lines.append(f"{'#' * level} {text}")
            case ListItem(text=text):
                lines.append(f"- {text}")
            case Paragraph(text=text):
                lines.append(text)
            case CodeBlock(lines=code, language=language):
                lines.append(f"```{language}")
                lines.extend(code)
                lines.append("```")
            case Spacer():
                lines.append("")
    return "\n".join(lines)
