"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from unsent_archive.repository import EntryCollection
from unsent_archive.services import loader as _loader


@runtime_checkable
class ArchiveLoaderService(Protocol):
    """Interface for the one-time archive load."""

    async def load_archive(
        self,
        source: str,
        *,
        client: httpx.AsyncClient | None,
        timeout: float,
    ) -> EntryCollection:
        """Fetch both resources and return the sorted collection."""
        ...


class DefaultArchiveLoaderService:
    """Default adapter that delegates to the function-based loader."""

    async def load_archive(
        self,
        source: str,
        *,
        client: httpx.AsyncClient | None,
        timeout: float,
    ) -> EntryCollection:
        return await _loader.load_archive(source, client=client, timeout=timeout)


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the app layer."""

    loader: ArchiveLoaderService


def build_default_app_services() -> AppServices:
    """Build default app services backed by the function-based modules."""
    return AppServices(loader=DefaultArchiveLoaderService())


__all__ = [
    "AppServices",
    "ArchiveLoaderService",
    "DefaultArchiveLoaderService",
    "build_default_app_services",
]
