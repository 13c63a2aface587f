"""Draft store adapter: in-memory drafts mirrored to the durable store."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from unsent_archive.errors import DraftNotFoundError, DraftValidationError
from unsent_archive.models import DRAFTS_KEY, Draft
from unsent_archive.storage import KeyValueStore

logger = logging.getLogger(__name__)


def _draft_to_dict(draft: Draft) -> dict[str, str]:
    return {"id": draft.id, "content": draft.content, "date": draft.date.isoformat()}


def _parse_draft(raw: Any) -> Draft | None:
    """Parse one stored draft, or return None when it is malformed."""
    if not isinstance(raw, dict):
        return None
    draft_id = raw.get("id")
    content = raw.get("content")
    raw_date = raw.get("date")
    if not isinstance(draft_id, str) or not draft_id:
        return None
    if not isinstance(content, str) or not content.strip():
        return None
    if not isinstance(raw_date, str):
        return None
    try:
        created = datetime.fromisoformat(raw_date)
    except ValueError:
        return None
    return Draft(id=draft_id, content=content, date=created)


def parse_drafts(value: str | None) -> list[Draft]:
    """Deserialize the stored drafts value.

    Absent, unparsable, or non-list values give an empty list; malformed or
    duplicate items are skipped.
    """
    if value is None:
        return []
    try:
        raw_list = json.loads(value)
    except json.JSONDecodeError as e:
        logger.warning("Stored drafts are not valid JSON, starting empty: %s", e)
        return []
    if not isinstance(raw_list, list):
        logger.warning(
            "Stored drafts are %s, not a list; starting empty", type(raw_list).__name__
        )
        return []

    drafts: list[Draft] = []
    seen: set[str] = set()
    for raw in raw_list:
        draft = _parse_draft(raw)
        if draft is None:
            logger.warning("Skipping malformed stored draft: %r", raw)
            continue
        if draft.id in seen:
            logger.warning("Skipping duplicate stored draft id %r", draft.id)
            continue
        seen.add(draft.id)
        drafts.append(draft)
    return drafts


def serialize_drafts(drafts: list[Draft]) -> str:
    return json.dumps([_draft_to_dict(d) for d in drafts], ensure_ascii=False)


class DraftStore:
    """Ordered drafts, persisted in full after every mutation.

    The in-memory list is only replaced once the store write has succeeded, so
    a failed write (StorageError) leaves both copies as they were.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._drafts: list[Draft] = parse_drafts(store.get(DRAFTS_KEY))
        logger.debug("Loaded %d drafts", len(self._drafts))

    def __len__(self) -> int:
        return len(self._drafts)

    def list(self) -> list[Draft]:
        """Drafts in creation order."""
        return list(self._drafts)

    def get(self, draft_id: str) -> Draft | None:
        for draft in self._drafts:
            if draft.id == draft_id:
                return draft
        return None

    def _next_id(self, created: datetime) -> str:
        """Millisecond timestamp id, bumped until unique in this store."""
        taken = {d.id for d in self._drafts}
        stamp = int(created.timestamp() * 1000)
        while str(stamp) in taken:
            stamp += 1
        return str(stamp)

    def _commit(self, drafts: list[Draft]) -> None:
        self._store.set(DRAFTS_KEY, serialize_drafts(drafts))
        self._drafts = drafts

    def create(self, content: str) -> Draft:
        """Save trimmed content as a new draft.

        Raises:
            DraftValidationError: If content is empty after trimming.
            StorageError: If the drafts could not be persisted.
        """
        text = content.strip()
        if not text:
            raise DraftValidationError("Please write something before saving.")
        created = self._clock()
        draft = Draft(id=self._next_id(created), content=text, date=created)
        self._commit([*self._drafts, draft])
        logger.debug("Created draft %s (%d chars)", draft.id, len(text))
        return draft

    def restore_content(self, draft_id: str) -> str:
        """Return a draft's content for the authoring buffer.

        Raises:
            DraftNotFoundError: If no draft has that id.
        """
        draft = self.get(draft_id)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        return draft.content

    def delete(self, draft_id: str) -> None:
        """Remove a draft by id.

        Raises:
            DraftNotFoundError: If no draft has that id.
            StorageError: If the drafts could not be persisted.
        """
        if self.get(draft_id) is None:
            raise DraftNotFoundError(draft_id)
        self._commit([d for d in self._drafts if d.id != draft_id])
        logger.debug("Deleted draft %s", draft_id)


__all__ = [
    "DraftStore",
    "parse_drafts",
    "serialize_drafts",
]
