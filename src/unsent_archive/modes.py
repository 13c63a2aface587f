"""Mode controller: primary modes, focus overlay, and persisted reading mode.

Transitions are pure functions over ModeState. ModeController only holds the
current value, resolves entry ids, and persists the reading-mode flag.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from unsent_archive.errors import EntryNotFoundError
from unsent_archive.models import (
    MODE_BROWSING,
    MODE_DRAFT_AUTHORING,
    MODE_UNSENT_LISTING,
    READING_MODE_KEY,
    Entry,
    ModeState,
)
from unsent_archive.query import unsent_entries
from unsent_archive.repository import EntryCollection
from unsent_archive.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ModeChange:
    """Result of a transition, with side effects for the rendering surface."""

    state: ModeState
    focus_draft_input: bool = False
    unsent_entries: tuple[Entry, ...] | None = None


# ============================================================================
# Pure transitions
# ============================================================================


def toggle_draft_authoring(state: ModeState) -> ModeState:
    if state.primary == MODE_DRAFT_AUTHORING:
        return dataclasses.replace(state, primary=MODE_BROWSING)
    return dataclasses.replace(state, primary=MODE_DRAFT_AUTHORING)


def toggle_unsent_listing(state: ModeState) -> ModeState:
    if state.primary == MODE_UNSENT_LISTING:
        return dataclasses.replace(state, primary=MODE_BROWSING)
    return dataclasses.replace(state, primary=MODE_UNSENT_LISTING)


def open_focus(state: ModeState, entry_id: str) -> ModeState:
    """Layer the focus overlay; the primary mode is left as it was."""
    return dataclasses.replace(state, focused_id=entry_id)


def close_focus(state: ModeState) -> ModeState:
    return dataclasses.replace(state, focused_id=None)


def toggle_reading_mode(state: ModeState) -> ModeState:
    return dataclasses.replace(state, reading_mode=not state.reading_mode)


# ============================================================================
# Reading-mode persistence
# ============================================================================


def parse_reading_mode(value: str | None) -> bool:
    """Interpret the stored flag. Only the exact string 'true' enables it."""
    if value is None:
        return False
    if value not in ("true", "false"):
        logger.warning("Ignoring unrecognized reading-mode value %r", value)
        return False
    return value == "true"


def load_reading_mode(store: KeyValueStore) -> bool:
    return parse_reading_mode(store.get(READING_MODE_KEY))


def save_reading_mode(store: KeyValueStore, enabled: bool) -> None:
    store.set(READING_MODE_KEY, "true" if enabled else "false")


# ============================================================================
# Controller
# ============================================================================


class ModeController:
    """Holds the current ModeState and applies transitions to it."""

    def __init__(self, collection: EntryCollection, store: KeyValueStore) -> None:
        self._collection = collection
        self._store = store
        self._state = ModeState(reading_mode=load_reading_mode(store))

    @property
    def state(self) -> ModeState:
        return self._state

    def _set(self, state: ModeState) -> ModeState:
        if state != self._state:
            logger.debug("Mode %s -> %s", self._state, state)
        self._state = state
        return state

    def toggle_draft_authoring(self) -> ModeChange:
        state = self._set(toggle_draft_authoring(self._state))
        return ModeChange(state, focus_draft_input=state.primary == MODE_DRAFT_AUTHORING)

    def toggle_unsent_listing(self) -> ModeChange:
        state = self._set(toggle_unsent_listing(self._state))
        if state.primary != MODE_UNSENT_LISTING:
            return ModeChange(state)
        return ModeChange(state, unsent_entries=tuple(unsent_entries(self._collection)))

    def open_focus(self, entry_id: str) -> ModeChange:
        """Focus an entry; unknown ids leave the state untouched."""
        try:
            self._collection.find_by_id(entry_id)
        except EntryNotFoundError:
            logger.warning("Ignoring focus request for unknown entry id %r", entry_id)
            return ModeChange(self._state)
        return ModeChange(self._set(open_focus(self._state, entry_id)))

    def close_focus(self) -> ModeChange:
        return ModeChange(self._set(close_focus(self._state)))

    def focused_entry(self) -> Entry | None:
        if self._state.focused_id is None:
            return None
        return self._collection.get(self._state.focused_id)

    def toggle_reading_mode(self) -> ModeChange:
        """Flip reading mode and persist it before updating the state.

        Raises:
            StorageError: If the flag could not be saved; the state is unchanged.
        """
        new_state = toggle_reading_mode(self._state)
        save_reading_mode(self._store, new_state.reading_mode)
        return ModeChange(self._set(new_state))


__all__ = [
    "ModeChange",
    "ModeController",
    "close_focus",
    "load_reading_mode",
    "open_focus",
    "parse_reading_mode",
    "save_reading_mode",
    "toggle_draft_authoring",
    "toggle_reading_mode",
    "toggle_unsent_listing",
]
