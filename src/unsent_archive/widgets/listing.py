"""List rendering helpers for entry, unsent, and draft options."""

from __future__ import annotations

from textual.content import Content

from unsent_archive.models import BADGE_FEATURED, BADGE_PINNED, BADGE_UNSENT, Draft
from unsent_archive.projection import (
    RenderModel,
    draft_preview,
    format_entry_date,
    highlight_text,
    markup_field,
    truncate_text,
)
from unsent_archive.themes import THEME_COLORS, badge_color, category_color

PREVIEW_EXCERPT_MAX_LEN = 120  # Max excerpt preview length in list rows

_ICON_SETS: dict[str, dict[str, str]] = {
    "unicode": {
        BADGE_PINNED: "▲",
        BADGE_FEATURED: "★",
        BADGE_UNSENT: "✉",
    },
    "ascii": {
        BADGE_PINNED: "^",
        BADGE_FEATURED: "*",
        BADGE_UNSENT: "@",
    },
}
_ACTIVE_ICON_SET = _ICON_SETS["unicode"]


def set_ascii_icons(enabled: bool) -> None:
    """Switch status badges between Unicode and ASCII modes."""
    global _ACTIVE_ICON_SET
    _ACTIVE_ICON_SET = _ICON_SETS["ascii"] if enabled else _ICON_SETS["unicode"]


def badge_icon(kind: str) -> str:
    return _ACTIVE_ICON_SET[kind]


def render_badges(badges: tuple[str, ...]) -> Content:
    """Colored icon + label for each badge, in the order given."""
    return Content(" ").join(
        Content.styled(f"{badge_icon(kind)} {kind}", badge_color(kind)) for kind in badges
    )


def render_meta_line(model: RenderModel, *, with_badges: bool = False) -> Content:
    """Category, date, optionally badges, then tags, on one line."""
    parts = [
        Content.styled(model.category, category_color(model.category)),
        Content.styled(model.date, "dim"),
    ]
    if with_badges and model.status_badges:
        parts.append(render_badges(model.status_badges))
    if model.tags:
        tag_color = THEME_COLORS["tag"]
        parts.append(
            Content(" ").join(
                Content.assemble("#", markup_field(tag)).stylize_before(tag_color)
                for tag in model.tags
            )
        )
    return Content("  ").join(parts)


def _render_excerpt_preview(excerpt: str, highlight_terms: list[str]) -> Content:
    """Excerpt preview, cut at a word boundary. Takes raw (unescaped) text."""
    flat = " ".join(excerpt.split())
    if not flat:
        return Content.styled("No excerpt", "dim italic")
    accent = THEME_COLORS["accent"]
    if len(flat) <= PREVIEW_EXCERPT_MAX_LEN:
        preview = highlight_text(flat, highlight_terms, accent)
    else:
        truncated = flat[:PREVIEW_EXCERPT_MAX_LEN].rsplit(" ", 1)[0]
        preview = highlight_text(truncated, highlight_terms, accent).append("...")
    return preview.stylize_before("dim italic")


def render_entry_option(
    model: RenderModel,
    *,
    raw_title: str,
    raw_excerpt: str,
    show_preview: bool = True,
    highlight_terms: list[str] | None = None,
) -> Content:
    """Render an entry as Content for OptionList display.

    ``model`` supplies the escaped fields; ``raw_title``/``raw_excerpt`` are
    needed because highlights are matched against the unescaped text.
    """
    terms = highlight_terms or []
    if terms:
        title = highlight_text(raw_title, terms, THEME_COLORS["accent"]).stylize_before("bold")
    else:
        title = markup_field(model.title, "bold")
    first_line = title
    if model.status_badges:
        first_line = Content(" ").join([render_badges(model.status_badges), title])
    lines = [first_line, render_meta_line(model)]
    if show_preview:
        lines.append(_render_excerpt_preview(raw_excerpt, terms))
    return Content("\n").join(lines)


def render_unsent_option(model: RenderModel, *, raw_excerpt: str) -> Content:
    """Render an entry for the 'left unsent' listing."""
    flat = " ".join(raw_excerpt.split())
    return Content.assemble(
        (badge_icon(BADGE_UNSENT), THEME_COLORS["unsent"]),
        " ",
        markup_field(model.title, "bold"),
        "  ",
        (model.date, "dim"),
        "\n",
        Content.styled(truncate_text(flat, PREVIEW_EXCERPT_MAX_LEN), "italic"),
    )


def render_draft_option(draft: Draft) -> Content:
    return Content.assemble(
        markup_field(draft_preview(draft.content)),
        "\n",
        (format_entry_date(draft.date), "dim"),
    )


__all__ = [
    "PREVIEW_EXCERPT_MAX_LEN",
    "render_badges",
    "render_draft_option",
    "render_entry_option",
    "render_meta_line",
    "render_unsent_option",
    "set_ascii_icons",
]
