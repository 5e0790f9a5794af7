"""SQLite schema, note queries, and connection management."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import sqlite3
from dataclasses import asdict, dataclass
from pathlib import Path

_SCHEMA = importlib.resources.files(__package__).joinpath("schema.sql").read_text()

DEFAULT_MARKDOWN = "# Heading 1\n## Heading 2\nSome **bold** text."


class NoteNotFoundError(Exception):
    """Raised when a note name does not exist in the database."""


# --- Data classes ---


@dataclass
class Note:
    """A documentation note: Markdown body plus a documentation link."""

    name: str
    markdown: str = DEFAULT_MARKDOWN
    documentation_url: str = ""
    updated_at: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Return a dict suitable for JSON serialization."""
        return asdict(self)


def _row_to_note(row: sqlite3.Row) -> Note:
    """Convert a sqlite3.Row to a Note dataclass."""
    return Note(
        name=row["name"],
        markdown=row["markdown"],
        documentation_url=row["documentation_url"],
        updated_at=row["updated_at"],
    )


def _escape_like(text: str) -> str:
    """Escape LIKE special characters so they match literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def finish_editing(note: Note) -> Note:
    """Return the note as stored when leaving edit mode (surrounding whitespace trimmed)."""
    return dataclasses.replace(note, markdown=note.markdown.strip())


# --- Schema migration system ---
# Each migration is (version, sql). Applied in order for DBs behind the latest version.
_MIGRATIONS: list[tuple[int, str]] = [
    # The body column used to be called markdown_note.
    (1, "ALTER TABLE notes RENAME COLUMN markdown_note TO markdown"),
]

_LATEST_VERSION = _MIGRATIONS[-1][0] if _MIGRATIONS else 0


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read schema_version from metadata, default 0 for legacy DBs."""
    row = conn.execute("SELECT value FROM metadata WHERE key = 'schema_version'").fetchone()
    return int(row["value"]) if row else 0


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Write schema_version to metadata."""
    conn.execute(
        "INSERT INTO metadata (key, value) VALUES ('schema_version', ?)"
        " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
        (str(version),),
    )


def _is_fresh_db(conn: sqlite3.Connection) -> bool:
    """Detect a DB whose notes table was just created from the current schema."""
    row = conn.execute("SELECT value FROM metadata WHERE key = 'schema_version'").fetchone()
    if row is not None:
        return False
    columns = {r["name"] for r in conn.execute("PRAGMA table_info(notes)")}
    return "markdown_note" not in columns


def _run_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending migrations or stamp fresh DBs at the latest version."""
    if _is_fresh_db(conn):
        _set_schema_version(conn, _LATEST_VERSION)
        conn.commit()
        return

    current_version = get_schema_version(conn)
    for version, sql in _MIGRATIONS:
        if version > current_version:
            conn.executescript(sql)
            current_version = version

    _set_schema_version(conn, current_version)
    conn.commit()


def get_db_path() -> Path:
    """Return the path to the SQLite database, following XDG conventions."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "docnote" / "notes.db"


def _configure(conn: sqlite3.Connection) -> sqlite3.Connection:
    conn.row_factory = sqlite3.Row
    conn.executescript(_SCHEMA)
    _run_migrations(conn)
    return conn


def init_db(path: Path) -> sqlite3.Connection:
    """Create or open the database and ensure the schema exists."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.execute("PRAGMA journal_mode=WAL")
    return _configure(conn)


def open_memory_db() -> sqlite3.Connection:
    """Create an in-memory database with the full schema applied (for tests)."""
    return _configure(sqlite3.connect(":memory:"))


def open_db() -> sqlite3.Connection:
    """Open the database at the default XDG path."""
    return init_db(get_db_path())


# --- Query functions ---


def get_note(conn: sqlite3.Connection, name: str) -> Note | None:
    """Return a single note by name, or None."""
    row = conn.execute("SELECT * FROM notes WHERE name = ?", (name,)).fetchone()
    return _row_to_note(row) if row is not None else None


def require_note(conn: sqlite3.Connection, name: str) -> Note:
    """Return a note by name.

    Raises:
        NoteNotFoundError: If no note has that name.
    """
    note = get_note(conn, name)
    if note is None:
        msg = f"No note named '{name}'"
        raise NoteNotFoundError(msg)
    return note


def get_note_count(conn: sqlite3.Connection) -> int:
    """Return the total number of notes."""
    count: int = conn.execute("SELECT count(*) FROM notes").fetchone()[0]
    return count


def list_notes(conn: sqlite3.Connection, *, filter_text: str = "") -> list[Note]:
    """Return notes ordered by name, optionally filtered by name or body."""
    query = "SELECT * FROM notes"
    params: list[str] = []
    if filter_text:
        query += " WHERE name LIKE ? ESCAPE '\\' OR markdown LIKE ? ESCAPE '\\'"
        like = f"%{_escape_like(filter_text)}%"
        params.extend([like, like])
    query += " ORDER BY name"
    return [_row_to_note(r) for r in conn.execute(query, params).fetchall()]


def save_note(conn: sqlite3.Connection, note: Note) -> Note:
    """Insert or update a note and return it as stored."""
    conn.execute(
        """INSERT INTO notes (name, markdown, documentation_url, updated_at)
           VALUES (:name, :markdown, :documentation_url, datetime('now'))
           ON CONFLICT(name) DO UPDATE SET
            markdown = excluded.markdown,
            documentation_url = excluded.documentation_url,
            updated_at = excluded.updated_at""",
        {"name": note.name, "markdown": note.markdown, "documentation_url": note.documentation_url},
    )
    conn.commit()
    return require_note(conn, note.name)


def create_note(conn: sqlite3.Connection, name: str) -> Note:
    """Return the named note, creating it with the default body if missing."""
    existing = get_note(conn, name)
    if existing is not None:
        return existing
    return save_note(conn, Note(name=name))


def reset_note(conn: sqlite3.Connection, name: str) -> Note:
    """Clear both the Markdown body and the link of an existing note."""
    note = require_note(conn, name)
    return save_note(conn, dataclasses.replace(note, markdown="", documentation_url=""))


def delete_note(conn: sqlite3.Connection, name: str) -> bool:
    """Delete a note. Returns False if it did not exist."""
    cursor = conn.execute("DELETE FROM notes WHERE name = ?", (name,))
    conn.commit()
    return cursor.rowcount > 0
