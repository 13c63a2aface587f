"""Widget chrome: the category bar and the context-sensitive footer."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import Click
from textual.message import Message
from textual.widgets import Label, Static

from unsent_archive.models import CATEGORY_ALL, FILTER_CATEGORIES
from unsent_archive.projection import escape_markup_text
from unsent_archive.themes import THEME_COLORS

CATEGORY_LABELS = {
    "all": "All",
    "prose": "Prose",
    "poem": "Poems",
}


class ContextFooter(Static):
    """Context-sensitive footer showing relevant keybindings."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-panel-alt;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]], mode_badge: str = "") -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        muted = THEME_COLORS["muted"]
        parts = []
        if mode_badge:
            parts.append(mode_badge)
        for key, label in bindings:
            parts.append(f"[bold {accent}]{escape_markup_text(key)}[/] [{muted}]{label}[/]")
        self.update("  ".join(parts))


class CategoryBar(Horizontal):
    """Clickable category labels with per-category counts."""

    DEFAULT_CSS = """
    CategoryBar {
        height: auto;
        padding: 0 1;
        background: $th-panel;
        border-bottom: solid $th-panel-alt;
    }

    CategoryBar .category-tab {
        padding: 0 2;
        margin-right: 1;
        color: $th-muted;
    }

    CategoryBar .category-tab:hover {
        color: $th-text;
    }

    CategoryBar .category-tab.active {
        color: $th-accent-alt;
        text-style: bold;
    }
    """

    class CategorySelected(Message):
        """Posted when a category label is clicked."""

        def __init__(self, category: str) -> None:
            super().__init__()
            self.category = category

    def __init__(self, active: str = CATEGORY_ALL, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._active = active
        self._counts: dict[str, int] = {}

    @property
    def active(self) -> str:
        return self._active

    def _label_text(self, index: int, category: str) -> str:
        count = self._counts.get(category)
        suffix = f" ({count})" if count is not None else ""
        return f"{index + 1}: {CATEGORY_LABELS[category]}{suffix}"

    def compose(self) -> ComposeResult:
        for i, category in enumerate(FILTER_CATEGORIES):
            classes = "category-tab active" if category == self._active else "category-tab"
            yield Label(
                self._label_text(i, category), classes=classes, id=f"category-{category}"
            )

    def update_categories(self, active: str, counts: dict[str, int] | None = None) -> None:
        """Mark ``active`` and refresh counts in place."""
        self._active = active
        if counts is not None:
            self._counts = dict(counts)
        for i, category in enumerate(FILTER_CATEGORIES):
            label = self.query_one(f"#category-{category}", Label)
            label.update(self._label_text(i, category))
            label.set_class(category == active, "active")

    def on_click(self, event: Click) -> None:
        widget = event.widget
        if not isinstance(widget, Label):
            return
        widget_id = widget.id or ""
        if widget_id.startswith("category-"):
            category = widget_id.removeprefix("category-")
            if category in FILTER_CATEGORIES:
                self.post_message(self.CategorySelected(category))


__all__ = [
    "CATEGORY_LABELS",
    "CategoryBar",
    "ContextFooter",
]
