"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.text import Text

from docnote.config import ConfigError, RenderConfig, get_config_path, load_config
from docnote.db import (
    NoteNotFoundError,
    create_note,
    delete_note,
    list_notes,
    open_db,
    require_note,
    reset_note,
    save_note,
)
from docnote.links import open_external, resolve_url
from docnote.render import render_markdown
from docnote.styles import get_style_table

COL_NAME_MAX = 28
COL_URL_MAX = 48


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def _first_line(markdown: str) -> str:
    for line in markdown.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _read_source(path: str) -> str:
    """Read Markdown from a file path, or stdin for '-'."""
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _load_config() -> RenderConfig:
    try:
        return load_config(get_config_path())
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _print_link(console: Console, url: str, config: RenderConfig) -> None:
    """Print the link row shown under a rendered note."""
    if not url:
        return
    resolved = resolve_url(url)
    line = Text("Link ↗ ", style="bold")
    line.append(url, style=get_style_table(config).link)
    if resolved is not None:
        line.stylize(f"link {resolved}", 7)
    console.print()
    console.print(line)


def _cmd_render(args: argparse.Namespace) -> None:
    """Render a Markdown file (or stdin) to the terminal."""
    config = _load_config()
    text = _read_source(args.file or "-")
    Console().print(render_markdown(text, config))


def _cmd_ls(args: argparse.Namespace) -> None:
    """List stored notes."""
    conn = open_db()
    try:
        notes = list_notes(conn, filter_text=args.filter or "")
        if not notes:
            print("No notes. Create one with `docnote set NAME`.")
            return
        if args.json:
            print(json.dumps([n.to_dict() for n in notes], indent=2))
            return
        print(f"{'Name':<30} {'Link':<50} {'Summary'}")
        print("─" * 104)
        for note in notes:
            name = _truncate(note.name, COL_NAME_MAX)
            url = _truncate(note.documentation_url, COL_URL_MAX)
            print(f"{name:<30} {url:<50} {_first_line(note.markdown)}")
    finally:
        conn.close()


def _cmd_show(args: argparse.Namespace) -> None:
    """Render a stored note with its link."""
    config = _load_config()
    conn = open_db()
    try:
        note = require_note(conn, args.name)
    finally:
        conn.close()
    console = Console()
    console.rule(Text(note.name, style="bold"))
    console.print(render_markdown(note.markdown, config))
    _print_link(console, note.documentation_url, config)


def _cmd_set(args: argparse.Namespace) -> None:
    """Create or update a note's Markdown and/or link."""
    conn = open_db()
    try:
        note = create_note(conn, args.name)
        if args.markdown is not None:
            note.markdown = args.markdown
        elif args.markdown_file is not None:
            note.markdown = _read_source(args.markdown_file)
        if args.url is not None:
            note.documentation_url = args.url.strip()
        note.markdown = note.markdown.strip()
        save_note(conn, note)
        print(f"Saved: {note.name}")
    finally:
        conn.close()


def _cmd_open(args: argparse.Namespace) -> None:
    """Open a note's documentation link in the browser."""
    conn = open_db()
    try:
        note = require_note(conn, args.name)
    finally:
        conn.close()
    if not note.documentation_url:
        print(f"Note '{note.name}' has no link.", file=sys.stderr)
        sys.exit(1)
    if not open_external(note.documentation_url):
        print(f"Could not open {note.documentation_url}", file=sys.stderr)
        sys.exit(1)


def _cmd_reset(args: argparse.Namespace) -> None:
    """Clear a note's Markdown and link."""
    conn = open_db()
    try:
        reset_note(conn, args.name)
        print(f"Reset: {args.name}")
    finally:
        conn.close()


def _cmd_rm(args: argparse.Namespace) -> None:
    """Delete a note."""
    conn = open_db()
    try:
        if not delete_note(conn, args.name):
            print(f"No note named '{args.name}'", file=sys.stderr)
            sys.exit(1)
        print(f"Deleted: {args.name}")
    finally:
        conn.close()


def _cmd_edit(args: argparse.Namespace) -> None:
    """Launch the Textual inspector for a note.

    Imports are deferred to avoid loading Textual for CLI-only commands.
    """
    from docnote.tui.app import NoteApp  # noqa: PLC0415

    config = _load_config()
    conn = open_db()
    try:
        NoteApp(args.name, conn=conn, config=config).run()
    finally:
        conn.close()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="docnote",
        description="Markdown documentation notes with links, rendered in the terminal",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Render a Markdown file")
    render_parser.add_argument("file", nargs="?", help="Markdown file (default: stdin)")

    # ls
    ls_parser = subparsers.add_parser("ls", help="List notes")
    ls_parser.add_argument("--json", action="store_true", help="Output as JSON")
    ls_parser.add_argument("--filter", help="Only notes whose name or body contains this text")

    # show
    show_parser = subparsers.add_parser("show", help="Render a note")
    show_parser.add_argument("name")

    # set
    set_parser = subparsers.add_parser("set", help="Create or update a note")
    set_parser.add_argument("name")
    body = set_parser.add_mutually_exclusive_group()
    body.add_argument("--markdown", help="Markdown body")
    body.add_argument("--markdown-file", help="Read the Markdown body from a file ('-' for stdin)")
    set_parser.add_argument("--url", help="Documentation link")

    # open
    open_parser = subparsers.add_parser("open", help="Open a note's link in the browser")
    open_parser.add_argument("name")

    # reset
    reset_parser = subparsers.add_parser("reset", help="Clear a note's body and link")
    reset_parser.add_argument("name")

    # rm
    rm_parser = subparsers.add_parser("rm", help="Delete a note")
    rm_parser.add_argument("name")

    # edit
    edit_parser = subparsers.add_parser("edit", help="Open the note inspector TUI")
    edit_parser.add_argument("name")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return

    dispatch = {
        "render": _cmd_render,
        "ls": _cmd_ls,
        "show": _cmd_show,
        "set": _cmd_set,
        "open": _cmd_open,
        "reset": _cmd_reset,
        "rm": _cmd_rm,
        "edit": _cmd_edit,
    }
    try:
        dispatch[args.command](args)
    except NoteNotFoundError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
