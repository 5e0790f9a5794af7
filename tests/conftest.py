"""Shared fixtures: temporary SQLite database, isolated XDG directories, sample notes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from docnote.db import open_memory_db

if TYPE_CHECKING:
    import sqlite3
    from collections.abc import Generator
    from pathlib import Path


SAMPLE_MARKDOWN = """\
# Player Controller
Handles **movement** and *jumping*.

## Setup
- Add a `Rigidbody`
- Set the *jump height*

```csharp
void Jump() {
    rb.AddForce(Vector3.up * jumpForce);
}
```
"""


@pytest.fixture
def tmp_db() -> Generator[sqlite3.Connection]:
    """Create an in-memory SQLite database with the full schema."""
    conn = open_memory_db()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def xdg_dirs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point XDG data and config homes at a temporary directory."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path
