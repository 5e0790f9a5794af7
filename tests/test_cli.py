"""Integration tests for the CLI."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest

from docnote.cli import build_parser, main
from docnote.db import get_note, open_db
from tests.conftest import SAMPLE_MARKDOWN

if TYPE_CHECKING:
    from pathlib import Path


def _stored(name: str) -> tuple[str, str] | None:
    conn = open_db()
    try:
        note = get_note(conn, name)
    finally:
        conn.close()
    return (note.markdown, note.documentation_url) if note is not None else None


def test_parser_requires_name_for_show() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["show"])


def test_markdown_sources_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["set", "player", "--markdown", "x", "--markdown-file", "f"])


@pytest.mark.usefixtures("xdg_dirs")
def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    main([])
    assert "usage: docnote" in capsys.readouterr().out


@pytest.mark.usefixtures("xdg_dirs")
def test_set_creates_trimmed_note(capsys: pytest.CaptureFixture[str]) -> None:
    main(["set", "player", "--markdown", "\n  # Player\nbody \n", "--url", " example.com "])
    assert "Saved: player" in capsys.readouterr().out
    assert _stored("player") == ("# Player\nbody", "example.com")


@pytest.mark.usefixtures("xdg_dirs")
def test_set_without_body_keeps_default() -> None:
    main(["set", "player", "--url", "https://example.com/docs"])
    stored = _stored("player")
    assert stored is not None
    assert stored[0].startswith("# Heading 1")
    assert stored[1] == "https://example.com/docs"


@pytest.mark.usefixtures("xdg_dirs")
def test_set_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("- from stdin\n"))
    main(["set", "player", "--markdown-file", "-"])
    assert _stored("player") == ("- from stdin", "")


def test_set_missing_file_exits(xdg_dirs: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["set", "player", "--markdown-file", str(xdg_dirs / "missing.md")])
    assert exc.value.code == 1
    assert "Error" in capsys.readouterr().err


def test_render_file(xdg_dirs: Path, capsys: pytest.CaptureFixture[str]) -> None:
    md = xdg_dirs / "note.md"
    md.write_text(SAMPLE_MARKDOWN)
    main(["render", str(md)])
    out = capsys.readouterr().out
    assert "Player Controller" in out
    assert "• Add a Rigidbody" in out
    assert "**" not in out


@pytest.mark.usefixtures("xdg_dirs")
def test_render_empty_stdin_shows_placeholder(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    main(["render"])
    assert "No documentation available." in capsys.readouterr().out


def test_render_with_bad_config_exits(xdg_dirs: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = xdg_dirs / "config" / "docnote" / "config.toml"
    config.parent.mkdir(parents=True)
    config.write_text("[render\n")
    md = xdg_dirs / "note.md"
    md.write_text("# Title")
    with pytest.raises(SystemExit) as exc:
        main(["render", str(md)])
    assert exc.value.code == 1
    assert "Invalid TOML" in capsys.readouterr().err


@pytest.mark.usefixtures("xdg_dirs")
def test_show_renders_note_and_link(capsys: pytest.CaptureFixture[str]) -> None:
    main(["set", "player", "--markdown", "# Player\nUses **physics**", "--url", "example.com"])
    capsys.readouterr()
    main(["show", "player"])
    out = capsys.readouterr().out
    assert "Player" in out
    assert "Uses physics" in out
    assert "Link ↗ example.com" in out


@pytest.mark.usefixtures("xdg_dirs")
def test_show_missing_note_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["show", "ghost"])
    assert exc.value.code == 1
    assert "No note named 'ghost'" in capsys.readouterr().err


@pytest.mark.usefixtures("xdg_dirs")
def test_ls_empty(capsys: pytest.CaptureFixture[str]) -> None:
    main(["ls"])
    assert "No notes" in capsys.readouterr().out


@pytest.mark.usefixtures("xdg_dirs")
def test_ls_json(capsys: pytest.CaptureFixture[str]) -> None:
    main(["set", "camera", "--markdown", "Follows the player"])
    main(["set", "audio", "--markdown", "Mixer"])
    capsys.readouterr()
    main(["ls", "--json"])
    rows = json.loads(capsys.readouterr().out)
    assert [r["name"] for r in rows] == ["audio", "camera"]
    assert rows[1]["markdown"] == "Follows the player"


@pytest.mark.usefixtures("xdg_dirs")
def test_ls_table_shows_summary(capsys: pytest.CaptureFixture[str]) -> None:
    main(["set", "camera", "--markdown", "\n# Camera rig\nmore", "--url", "example.com"])
    capsys.readouterr()
    main(["ls"])
    out = capsys.readouterr().out
    assert "camera" in out
    assert "example.com" in out
    assert "# Camera rig" in out


@pytest.mark.usefixtures("xdg_dirs")
def test_reset_and_rm(capsys: pytest.CaptureFixture[str]) -> None:
    main(["set", "player", "--markdown", "# Body", "--url", "example.com"])
    main(["reset", "player"])
    assert _stored("player") == ("", "")
    main(["rm", "player"])
    assert "Deleted: player" in capsys.readouterr().out
    assert _stored("player") is None
    with pytest.raises(SystemExit):
        main(["rm", "player"])


@pytest.mark.usefixtures("xdg_dirs")
def test_open_uses_link(monkeypatch: pytest.MonkeyPatch) -> None:
    opened: list[str] = []

    def fake_open(raw: str) -> bool:
        opened.append(raw)
        return True

    monkeypatch.setattr("docnote.cli.open_external", fake_open)
    main(["set", "player", "--url", "example.com/docs"])
    main(["open", "player"])
    assert opened == ["example.com/docs"]


@pytest.mark.usefixtures("xdg_dirs")
def test_open_without_link_exits(capsys: pytest.CaptureFixture[str]) -> None:
    main(["set", "player"])
    with pytest.raises(SystemExit) as exc:
        main(["open", "player"])
    assert exc.value.code == 1
    assert "has no link" in capsys.readouterr().err
