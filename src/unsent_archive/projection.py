"""View projector: entries to escaped, render-ready models."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from textual.content import Content

from unsent_archive.models import (
    BADGE_FEATURED,
    BADGE_PINNED,
    BADGE_UNSENT,
    Entry,
)

# English month abbreviations; strftime("%b") would follow the process locale
_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# A line break followed by one or more whitespace-only lines
_PARAGRAPH_BREAK_RE = re.compile(r"\n(?:[ \t]*\n)+")

DRAFT_PREVIEW_MAX_LEN = 50


@dataclass(frozen=True, slots=True)
class RenderModel:
    """Render-ready view of an Entry. Every text field is markup-escaped."""

    entry_id: str
    title: str
    excerpt: str
    paragraphs: tuple[str, ...]
    date: str
    category: str
    status_badges: tuple[str, ...]
    tags: tuple[str, ...]
    unsent: bool


# ============================================================================
# Text Formatting Utilities
# ============================================================================


def escape_markup_text(text: str) -> str:
    """Escape text so Textual's markup parser reads every bracket literally.

    Any unescaped ``[`` may open a tag (``[$accent]``, ``[ bold]``, ``[B]``),
    so every one is escaped, not just the ones that look like styles.
    """
    return text.replace("[", "\\[") if text else ""


def markup_field(escaped: str, style: str = "") -> Content:
    """Parse one escaped field on its own, optionally styling all of it.

    Each field is parsed separately: a backslash at the end of one field can
    then never swallow the tag that follows it.
    """
    content = Content.from_markup(escaped)
    return content.stylize_before(style) if style else content


def truncate_text(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to max_len characters, adding suffix if truncated.

    Args:
        text: The text to truncate.
        max_len: Maximum length before truncation (not including suffix).
        suffix: String to append when truncated.

    Returns:
        Original text if within limit, otherwise truncated with suffix.
    """
    if len(text) <= max_len:
        return text
    return text[:max_len] + suffix


def draft_preview(content: str) -> str:
    """Short, escaped one-line preview of a saved draft."""
    return escape_markup_text(truncate_text(content, DRAFT_PREVIEW_MAX_LEN))


def format_entry_date(value: datetime) -> str:
    """Format a date like 'Jan 5, 2024'."""
    return f"{_MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines; single newlines stay inside a paragraph."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [para.strip("\n") for para in _PARAGRAPH_BREAK_RE.split(normalized) if para.strip()]


_HIGHLIGHT_PATTERN_CACHE: dict[tuple[str, ...], re.Pattern[str]] = {}


def _highlight_pattern(terms: list[str]) -> re.Pattern[str] | None:
    """Compiled alternation of the distinct terms, longest first; None if none qualify."""
    normalized = []
    seen: set[str] = set()
    for term in terms:
        cleaned = term.strip()
        if len(cleaned) < 2:
            continue
        key = cleaned.lower()
        if key in seen:
            continue
        seen.add(key)
        normalized.append(cleaned)
    if not normalized:
        return None
    normalized.sort(key=len, reverse=True)
    cache_key = tuple(normalized)
    pattern = _HIGHLIGHT_PATTERN_CACHE.get(cache_key)
    if pattern is None:
        pattern = re.compile("|".join(re.escape(term) for term in normalized), re.IGNORECASE)
        _HIGHLIGHT_PATTERN_CACHE[cache_key] = pattern
    return pattern


def highlight_text(text: str, terms: list[str], color: str) -> Content:
    """Raw text as Content, with case-insensitive matches of terms styled bold.

    Matching runs on the raw text and only adds style spans, so neither the
    text nor the terms are ever parsed as markup.
    """
    content = Content(text)
    pattern = _highlight_pattern(terms)
    if pattern is None or not content:
        return content
    return content.highlight_regex(pattern, style=f"bold {color}")


# ============================================================================
# Projection
# ============================================================================


def status_badges(entry: Entry) -> tuple[str, ...]:
    """Badge kinds for an entry, always in pinned, featured, unsent order."""
    badges: list[str] = []
    if entry.pinned:
        badges.append(BADGE_PINNED)
    if entry.featured:
        badges.append(BADGE_FEATURED)
    if entry.unsent:
        badges.append(BADGE_UNSENT)
    return tuple(badges)


def project_entry(entry: Entry) -> RenderModel:
    """Map an entry to its render model."""
    return RenderModel(
        entry_id=entry.id,
        title=escape_markup_text(entry.title),
        excerpt=escape_markup_text(entry.excerpt),
        paragraphs=tuple(escape_markup_text(p) for p in split_paragraphs(entry.excerpt)),
        date=format_entry_date(entry.date),
        category=entry.category,
        status_badges=status_badges(entry),
        tags=tuple(escape_markup_text(tag) for tag in entry.tags),
        unsent=entry.unsent,
    )


def project_entries(entries: Iterable[Entry]) -> list[RenderModel]:
    return [project_entry(entry) for entry in entries]


__all__ = [
    "DRAFT_PREVIEW_MAX_LEN",
    "RenderModel",
    "draft_preview",
    "escape_markup_text",
    "format_entry_date",
    "highlight_text",
    "markup_field",
    "project_entries",
    "project_entry",
    "split_paragraphs",
    "status_badges",
    "truncate_text",
]
