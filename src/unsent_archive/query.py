"""Filter engine: category and free-text predicates over the entry collection."""

from __future__ import annotations

from collections.abc import Iterable

from unsent_archive.models import (
    CATEGORY_ALL,
    FILTER_CATEGORIES,
    Entry,
    FilterState,
)


def normalize_query(query: str) -> str:
    """Trim and lower-case a raw query string."""
    return query.strip().lower()


def next_category(category: str) -> str:
    """Return the category after ``category`` in all → prose → poem → all."""
    try:
        index = FILTER_CATEGORIES.index(category)
    except ValueError:
        return CATEGORY_ALL
    return FILTER_CATEGORIES[(index + 1) % len(FILTER_CATEGORIES)]


# ============================================================================
# Predicates
# ============================================================================


def matches_category(entry: Entry, category: str) -> bool:
    if category == CATEGORY_ALL:
        return True
    return entry.category == category


def matches_query(entry: Entry, needle: str) -> bool:
    """Check an entry against an already-normalized query.

    Plain substring containment against the title, the excerpt, and each tag.
    An empty needle matches everything.
    """
    if not needle:
        return True
    if needle in entry.title.lower():
        return True
    if needle in entry.excerpt.lower():
        return True
    return any(needle in tag.lower() for tag in entry.tags)


# ============================================================================
# Derivations
# ============================================================================


def apply_filters(
    entries: Iterable[Entry],
    category: str = CATEGORY_ALL,
    query: str = "",
) -> list[Entry]:
    """Return the entries passing both predicates, in their original order.

    Pure: the same inputs always give the same list, and the input is never
    reordered or mutated.

    Raises:
        ValueError: If ``category`` is not one of FILTER_CATEGORIES.
    """
    if category not in FILTER_CATEGORIES:
        raise ValueError(f"Unknown category filter: {category!r}")
    needle = normalize_query(query)
    return [
        entry
        for entry in entries
        if matches_category(entry, category) and matches_query(entry, needle)
    ]


def apply_filter_state(entries: Iterable[Entry], state: FilterState) -> list[Entry]:
    """Apply a FilterState value to ``entries``."""
    return apply_filters(entries, state.category, state.query)


def unsent_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Entries flagged unsent, in collection order."""
    return [entry for entry in entries if entry.unsent]


__all__ = [
    "apply_filter_state",
    "apply_filters",
    "matches_category",
    "matches_query",
    "next_category",
    "normalize_query",
    "unsent_entries",
]
