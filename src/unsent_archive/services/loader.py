"""Archive load transport: fetch prose.json and poems.json from a URL or directory."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from unsent_archive.errors import LoadError
from unsent_archive.repository import EntryCollection, load_entries

logger = logging.getLogger(__name__)

PROSE_RESOURCE = "prose.json"
POEMS_RESOURCE = "poems.json"
DEFAULT_DATA_DIR = "data"
DEFAULT_TIMEOUT_SECONDS = 10


def is_url_source(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _resource_url(base_url: str, resource: str) -> str:
    return f"{base_url.rstrip('/')}/{resource}"


def _read_json_file(path: Path) -> Any:
    """Read and decode one JSON file (runs in a worker thread)."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LoadError(f"Missing archive file: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(f"{path} is not valid JSON: {e}") from e


async def fetch_json_resource(
    source: str,
    resource: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """Fetch one resource from a base URL or directory and decode it.

    Raises:
        LoadError: On transport failure, non-2xx status, missing file, or bad JSON.
    """
    if not is_url_source(source):
        return await asyncio.to_thread(_read_json_file, Path(source) / resource)

    url = _resource_url(source, resource)
    try:
        if client is not None:
            response = await client.get(url, timeout=timeout)
        else:
            async with httpx.AsyncClient() as tmp_client:
                response = await tmp_client.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise LoadError(f"{url} returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise LoadError(f"Could not fetch {url}: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise LoadError(f"{url} is not valid JSON: {e}") from e


async def fetch_sources(
    source: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> tuple[Any, Any]:
    """Fetch the prose and poem payloads concurrently.

    Returns:
        Tuple of (prose_payload, poems_payload), decoded but not validated.
    """
    prose, poems = await asyncio.gather(
        fetch_json_resource(source, PROSE_RESOURCE, client=client, timeout=timeout),
        fetch_json_resource(source, POEMS_RESOURCE, client=client, timeout=timeout),
    )
    return prose, poems


async def load_archive(
    source: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> EntryCollection:
    """Fetch both resources and build the sorted entry collection.

    Raises:
        LoadError: If either fetch fails or any record is malformed.
    """
    logger.debug("Loading archive from %s", source)
    prose, poems = await fetch_sources(source, client=client, timeout=timeout)
    collection = load_entries(prose, poems)
    logger.debug("Archive loaded: %d entries", len(collection))
    return collection


__all__ = [
    "DEFAULT_DATA_DIR",
    "DEFAULT_TIMEOUT_SECONDS",
    "POEMS_RESOURCE",
    "PROSE_RESOURCE",
    "fetch_json_resource",
    "fetch_sources",
    "is_url_source",
    "load_archive",
]
