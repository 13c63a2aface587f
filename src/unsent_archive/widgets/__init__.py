"""Widget classes and list renderers for the archive UI."""

from unsent_archive.widgets.chrome import CATEGORY_LABELS, CategoryBar, ContextFooter
from unsent_archive.widgets.listing import (
    PREVIEW_EXCERPT_MAX_LEN,
    render_badges,
    render_draft_option,
    render_entry_option,
    render_unsent_option,
    set_ascii_icons,
)

__all__ = [
    "CATEGORY_LABELS",
    "PREVIEW_EXCERPT_MAX_LEN",
    "CategoryBar",
    "ContextFooter",
    "render_badges",
    "render_draft_option",
    "render_entry_option",
    "render_unsent_option",
    "set_ascii_icons",
]
