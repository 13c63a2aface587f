"""Internal service layer for app orchestration."""

from unsent_archive.services.loader import (
    fetch_json_resource,
    fetch_sources,
    load_archive,
)

__all__ = [
    "fetch_json_resource",
    "fetch_sources",
    "load_archive",
]
