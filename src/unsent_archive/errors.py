"""Exception hierarchy for archive loading, draft validation, and storage."""

from __future__ import annotations


class ArchiveError(Exception):
    """Base class for all errors raised by the archive core."""


class LoadError(ArchiveError):
    """The entry sources were unavailable or did not contain well-formed records."""


class ValidationError(ArchiveError):
    """User input was rejected before any state changed."""


class DraftValidationError(ValidationError):
    """Draft content was empty after trimming."""


class NotFoundError(ArchiveError, KeyError):
    """An entry or draft id did not resolve."""

    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind} not found: {item_id!r}")
        self.kind = kind
        self.item_id = item_id

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class EntryNotFoundError(NotFoundError):
    def __init__(self, entry_id: str) -> None:
        super().__init__("entry", entry_id)


class DraftNotFoundError(NotFoundError):
    def __init__(self, draft_id: str) -> None:
        super().__init__("draft", draft_id)


class StorageError(ArchiveError):
    """A durable write to the key-value store failed."""


__all__ = [
    "ArchiveError",
    "DraftNotFoundError",
    "DraftValidationError",
    "EntryNotFoundError",
    "LoadError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
