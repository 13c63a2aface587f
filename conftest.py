"""Shared test fixtures for Unsent archive tests."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from unsent_archive.models import CATEGORY_PROSE, Entry
from unsent_archive.projection import _HIGHLIGHT_PATTERN_CACHE
from unsent_archive.repository import EntryCollection, load_entries
from unsent_archive.storage import MemoryStore
from unsent_archive.themes import DEFAULT_THEME, THEME_COLORS
from unsent_archive.widgets.listing import set_ascii_icons

# ── Module-level state isolation ─────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Restore THEME_COLORS, icon set and highlight cache after each test.

    UnsentArchive.__init__ and theme cycling mutate these module-level values.
    """
    yield
    THEME_COLORS.clear()
    THEME_COLORS.update(DEFAULT_THEME)
    set_ascii_icons(False)
    _HIGHLIGHT_PATTERN_CACHE.clear()


@pytest.fixture(autouse=True)
def _isolate_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config and storage paths into tmp_path so tests never touch real files."""
    config_file = tmp_path / "config" / "config.json"
    storage_file = tmp_path / "data-dir" / "storage.json"
    monkeypatch.setattr("unsent_archive.config.get_config_path", lambda: config_file)
    monkeypatch.setattr("unsent_archive.storage.get_storage_path", lambda: storage_file)
    return config_file, storage_file


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_entry():
    """Factory fixture for creating Entry instances with sensible defaults."""

    def _make(
        entry_id: str = "entry-1",
        title: str = "Test Entry",
        excerpt: str = "Test excerpt.",
        date: str = "2024-01-01",
        tags: tuple[str, ...] = (),
        category: str = CATEGORY_PROSE,
        pinned: bool = False,
        featured: bool = False,
        unsent: bool = False,
    ) -> Entry:
        return Entry(
            id=entry_id,
            title=title,
            excerpt=excerpt,
            date=datetime.fromisoformat(date),
            tags=tags,
            category=category,
            pinned=pinned,
            featured=featured,
            unsent=unsent,
        )

    return _make


@pytest.fixture
def make_record():
    """Factory fixture for raw JSON records as they appear in prose.json/poems.json."""

    def _make(entry_id: str = "entry-1", **overrides: Any) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": entry_id,
            "title": f"Title {entry_id}",
            "excerpt": f"Excerpt for {entry_id}.",
            "date": "2024-01-01",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def sample_records(make_record) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """A small archive: three prose records and two poems."""
    prose = [
        make_record("p1", title="Morning letter", date="2024-02-01", tags=["letters"]),
        make_record(
            "p2",
            title="The kitchen after",
            excerpt="Two cups on the rack.",
            date="2023-11-19",
            tags=["Grief"],
            unsent=True,
        ),
        make_record("p3", title="Bus notes", date="2024-05-14", featured=True),
    ]
    poems = [
        make_record("q1", title="Salt", excerpt="a white line\n\non everything", date="2024-01-07"),
        make_record(
            "q2",
            title="Old address",
            date="2023-06-21",
            pinned=True,
            unsent=True,
        ),
    ]
    return prose, poems


@pytest.fixture
def collection(sample_records) -> EntryCollection:
    prose, poems = sample_records
    return load_entries(prose, poems)


@pytest.fixture
def archive_dir(tmp_path: Path, sample_records) -> Path:
    """Directory containing prose.json and poems.json built from sample_records."""
    prose, poems = sample_records
    directory = tmp_path / "archive"
    directory.mkdir()
    (directory / "prose.json").write_text(json.dumps(prose), encoding="utf-8")
    (directory / "poems.json").write_text(json.dumps(poems), encoding="utf-8")
    return directory


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()

