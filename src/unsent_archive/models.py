"""Data models and constants for the Unsent archive browser."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# Application identity: single source of truth for platformdirs paths
CONFIG_APP_NAME = "unsent-archive"

# Entry categories (assigned from the source a record was loaded from)
CATEGORY_ALL = "all"
CATEGORY_PROSE = "prose"
CATEGORY_POEM = "poem"
ENTRY_CATEGORIES = (CATEGORY_PROSE, CATEGORY_POEM)
FILTER_CATEGORIES = (CATEGORY_ALL, CATEGORY_PROSE, CATEGORY_POEM)

# Primary presentation modes (exactly one is active)
MODE_BROWSING = "browsing"
MODE_DRAFT_AUTHORING = "draft_authoring"
MODE_UNSENT_LISTING = "unsent_listing"
PRIMARY_MODES = (MODE_BROWSING, MODE_DRAFT_AUTHORING, MODE_UNSENT_LISTING)

# Status badge kinds, in display order
BADGE_PINNED = "pinned"
BADGE_FEATURED = "featured"
BADGE_UNSENT = "unsent"
BADGE_ORDER = (BADGE_PINNED, BADGE_FEATURED, BADGE_UNSENT)

# Durable store keys
READING_MODE_KEY = "unsent-reading-mode"
DRAFTS_KEY = "unsent-drafts"


@dataclass(frozen=True, slots=True)
class Entry:
    """One archived piece of writing, immutable after load."""

    id: str
    title: str
    excerpt: str
    date: datetime
    tags: tuple[str, ...] = ()
    category: str = CATEGORY_PROSE
    pinned: bool = False
    featured: bool = False
    unsent: bool = False


@dataclass(frozen=True, slots=True)
class Draft:
    """A private note kept only on the local device."""

    id: str
    content: str
    date: datetime


@dataclass(frozen=True, slots=True)
class FilterState:
    """Category + free-text query; fully determines the filtered view."""

    category: str = CATEGORY_ALL
    query: str = ""

    def __post_init__(self) -> None:
        """Clamp unknown categories to 'all'."""
        if self.category not in FILTER_CATEGORIES:
            object.__setattr__(self, "category", CATEGORY_ALL)


@dataclass(frozen=True, slots=True)
class ModeState:
    """Primary mode, focus overlay, and the orthogonal reading-mode flag."""

    primary: str = MODE_BROWSING
    focused_id: str | None = None
    reading_mode: bool = False

    @property
    def is_focused(self) -> bool:
        return self.focused_id is not None


@dataclass(slots=True)
class SessionState:
    """State to restore on next run (filter and scroll position)."""

    category: str = CATEGORY_ALL
    query: str = ""
    scroll_index: int = 0

    def __post_init__(self) -> None:
        """Clamp category and scroll_index to valid values (defense-in-depth)."""
        if self.category not in FILTER_CATEGORIES:
            self.category = CATEGORY_ALL
        if self.scroll_index < 0:
            self.scroll_index = 0


@dataclass(slots=True)
class UserConfig:
    """User preferences and session state."""

    data_source: str = ""  # Empty = ./data in the working directory
    theme_name: str = "monokai"
    show_excerpt_preview: bool = True
    session: SessionState = field(default_factory=SessionState)
    version: int = 1


__all__ = [
    "BADGE_FEATURED",
    "BADGE_ORDER",
    "BADGE_PINNED",
    "BADGE_UNSENT",
    "CATEGORY_ALL",
    "CATEGORY_POEM",
    "CATEGORY_PROSE",
    "CONFIG_APP_NAME",
    "DRAFTS_KEY",
    "ENTRY_CATEGORIES",
    "FILTER_CATEGORIES",
    "MODE_BROWSING",
    "MODE_DRAFT_AUTHORING",
    "MODE_UNSENT_LISTING",
    "PRIMARY_MODES",
    "READING_MODE_KEY",
    "Draft",
    "Entry",
    "FilterState",
    "ModeState",
    "SessionState",
    "UserConfig",
]
