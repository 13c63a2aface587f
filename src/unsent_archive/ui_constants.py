"""Internal UI constants for the UnsentArchive app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-panel-alt;
    color: $th-text;
}

#main-container {
    height: 1fr;
    padding: 0 1;
}

#main-container.reading-mode {
    padding: 1 6;
}

#main-container.reading-mode CategoryBar,
#main-container.reading-mode #status-bar {
    display: none;
}

#browse-container,
#draft-container,
#unsent-container {
    height: 1fr;
    border: tall $th-highlight;
    background: $th-panel;
    display: none;
}

#browse-container.active,
#draft-container.active,
#unsent-container.active {
    display: block;
}

#browse-container:focus-within,
#draft-container:focus-within,
#unsent-container:focus-within {
    border: tall $th-accent;
}

#main-container.reading-mode #browse-container,
#main-container.reading-mode #draft-container,
#main-container.reading-mode #unsent-container {
    border: none;
}

#list-header,
.pane-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent;
    text-style: bold;
}

#entry-list,
#unsent-list {
    height: 1fr;
    scrollbar-gutter: stable;
}

#search-container {
    height: auto;
    padding: 0 1;
    background: $th-panel;
    display: none;
}

#search-container.visible {
    display: block;
}

#search-input {
    width: 100%;
    border: tall $th-accent;
    background: $th-background;
}

#search-input:focus {
    border: tall $th-accent-alt;
}

OptionList > .option-list--option-highlighted {
    background: $th-highlight;
}

OptionList:focus > .option-list--option-highlighted {
    background: $th-highlight-focus;
}

OptionList > .option-list--option-hover {
    background: $th-panel-alt;
}

#draft-text {
    height: 1fr;
    min-height: 6;
    background: $th-background;
    border: none;
}

#draft-text:focus {
    border-left: tall $th-accent;
}

#draft-buttons,
#draft-list-buttons {
    height: auto;
    align: right middle;
}

#draft-buttons Button,
#draft-list-buttons Button {
    margin-left: 1;
}

#draft-list {
    height: 10;
    scrollbar-gutter: stable;
}

#error-state {
    height: auto;
    margin: 2 4;
    padding: 1 2;
    border: tall $error;
    color: $th-text;
    display: none;
}

#error-state.visible {
    display: block;
}

#status-bar {
    padding: 0 1;
    color: $th-muted;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("slash", "toggle_search", "Search", show=False),
    Binding("escape", "cancel_search", "Cancel", show=False),
    # Category filter
    Binding("1", "set_category('all')", "All", show=False),
    Binding("2", "set_category('prose')", "Prose", show=False),
    Binding("3", "set_category('poem')", "Poems", show=False),
    Binding("c", "cycle_category", "Category", show=False),
    Binding("j", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
    # Modes; priority so they also work while typing in the search box or editor
    Binding("ctrl+n", "toggle_draft_authoring", "Drafts", show=False, priority=True),
    Binding("ctrl+u", "toggle_unsent_listing", "Unsent", show=False, priority=True),
    Binding("ctrl+r", "toggle_reading_mode", "Reading", show=False, priority=True),
    Binding("ctrl+s", "save_draft", "Save Draft", show=False, priority=True),
    # Theme cycling
    Binding("ctrl+t", "cycle_theme", "Theme", show=False),
    # Help overlay
    Binding("question_mark", "show_help", "Help (?)", show=False),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
]
