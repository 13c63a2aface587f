"""Entry repository: record validation, category tagging, and load-time ordering."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from datetime import UTC, datetime
from typing import Any

from unsent_archive.errors import EntryNotFoundError, LoadError
from unsent_archive.models import (
    CATEGORY_ALL,
    CATEGORY_POEM,
    CATEGORY_PROSE,
    ENTRY_CATEGORIES,
    Entry,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Record validation
# ============================================================================
#
# Raw record contract (one element of prose.json / poems.json):
#
#   Field     Rule                                 Missing
#   ────────  ───────────────────────────────────  ───────────────
#   id        non-empty str, unique across sources LoadError
#   title     str                                  LoadError
#   excerpt   str                                  LoadError
#   date      ISO 8601 date or datetime str        LoadError
#   tags      list[str]                            ()
#   pinned    bool                                 False
#   featured  bool                                 False
#   unsent    bool                                 False
#
_REQUIRED_TEXT_FIELDS = ("id", "title", "excerpt")
_FLAG_FIELDS = ("pinned", "featured", "unsent")


def parse_entry_date(raw: str) -> datetime:
    """Parse an ISO 8601 date/datetime into a naive datetime for ordering.

    Timezone-aware values are converted to UTC before the tzinfo is dropped so
    that mixed inputs still compare.

    Raises:
        ValueError: If the string is not ISO 8601.
    """
    parsed = datetime.fromisoformat(raw.strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def _record_error(source: str, index: int, reason: str) -> LoadError:
    return LoadError(f"{source} record #{index}: {reason}")


def parse_entry_record(
    record: Any, category: str, *, source: str = "source", index: int = 0
) -> Entry:
    """Validate one raw record and build an Entry tagged with ``category``.

    Raises:
        LoadError: If the record is not an object or violates the field contract.
    """
    if category not in ENTRY_CATEGORIES:
        raise ValueError(f"Unknown entry category: {category!r}")
    if not isinstance(record, dict):
        raise _record_error(source, index, "not an object")

    for key in _REQUIRED_TEXT_FIELDS:
        if not isinstance(record.get(key), str):
            raise _record_error(source, index, f"missing or non-string {key!r}")
    if not record["id"]:
        raise _record_error(source, index, "empty 'id'")

    raw_date = record.get("date")
    if not isinstance(raw_date, str):
        raise _record_error(source, index, "missing or non-string 'date'")
    try:
        entry_date = parse_entry_date(raw_date)
    except ValueError:
        raise _record_error(source, index, f"unparsable date {raw_date!r}") from None

    raw_tags = record.get("tags", [])
    if not isinstance(raw_tags, list) or not all(isinstance(t, str) for t in raw_tags):
        raise _record_error(source, index, "'tags' must be a list of strings")

    flags: dict[str, bool] = {}
    for key in _FLAG_FIELDS:
        value = record.get(key, False)
        if not isinstance(value, bool):
            raise _record_error(source, index, f"{key!r} must be a boolean")
        flags[key] = value

    return Entry(
        id=record["id"],
        title=record["title"],
        excerpt=record["excerpt"],
        date=entry_date,
        tags=tuple(raw_tags),
        category=category,
        **flags,
    )


def _parse_source(records: Any, category: str, source: str) -> list[Entry]:
    if not isinstance(records, list):
        raise LoadError(f"{source} is not a list of records")
    return [
        parse_entry_record(record, category, source=source, index=i)
        for i, record in enumerate(records)
    ]


def sort_entries(entries: Sequence[Entry]) -> list[Entry]:
    """Order entries by pinned, featured, then date, all descending.

    ``sorted(reverse=True)`` keeps equal keys in input order, so ties
    retain their relative position from the concatenated sources.
    """
    return sorted(entries, key=lambda e: (e.pinned, e.featured, e.date), reverse=True)


# ============================================================================
# Collection
# ============================================================================


class EntryCollection:
    """Immutable, load-ordered master collection with O(1) id lookup."""

    __slots__ = ("_by_id", "_entries")

    def __init__(self, entries: Sequence[Entry]) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)
        self._by_id: dict[str, Entry] = {}
        for entry in self._entries:
            if entry.id in self._by_id:
                raise LoadError(f"Duplicate entry id {entry.id!r}")
            self._by_id[entry.id] = entry

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def find_by_id(self, entry_id: str) -> Entry:
        """Return the entry with ``entry_id``.

        Raises:
            EntryNotFoundError: If no entry has that id.
        """
        try:
            return self._by_id[entry_id]
        except KeyError:
            raise EntryNotFoundError(entry_id) from None

    def get(self, entry_id: str) -> Entry | None:
        return self._by_id.get(entry_id)

    def category_counts(self) -> dict[str, int]:
        """Count entries per category, plus the total under 'all'."""
        counts = {CATEGORY_ALL: len(self._entries), CATEGORY_PROSE: 0, CATEGORY_POEM: 0}
        for entry in self._entries:
            counts[entry.category] += 1
        return counts


def load_entries(prose_source: Any, poem_source: Any) -> EntryCollection:
    """Build the sorted master collection from the two raw sources.

    All-or-nothing: any malformed source, malformed record, or duplicate id
    raises before a collection is produced.

    Raises:
        LoadError: On any validation failure.
    """
    prose = _parse_source(prose_source, CATEGORY_PROSE, "prose")
    poems = _parse_source(poem_source, CATEGORY_POEM, "poems")
    collection = EntryCollection(sort_entries(prose + poems))
    logger.debug("Loaded %d prose and %d poem entries", len(prose), len(poems))
    return collection


__all__ = [
    "EntryCollection",
    "load_entries",
    "parse_entry_date",
    "parse_entry_record",
    "sort_entries",
]
