"""Unsent Archive TUI - browse prose and poems, keep private drafts.

Key bindings:
    /       - Toggle search (titles, excerpts, tags)
    1/2/3   - Show all / prose / poems
    c       - Cycle category
    enter   - Open the highlighted entry
    escape  - Close entry / leave search
    j/k     - Navigate down/up (vim-style)
    Ctrl+n  - Toggle draft authoring
    Ctrl+u  - Toggle the "left unsent" listing
    Ctrl+r  - Toggle reading mode
    Ctrl+s  - Save draft (draft authoring)
    Ctrl+t  - Cycle theme
    ?       - Help
    q       - Quit
"""

from __future__ import annotations

import logging

from textual import on
from textual.app import App, ComposeResult, ScreenStackError
from textual.containers import Horizontal, Vertical
from textual.content import Content
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import (
    Button,
    Header,
    Input,
    Label,
    OptionList,
    Static,
    TextArea,
)
from textual.widgets.option_list import Option

from unsent_archive.action_messages import (
    build_actionable_warning,
    build_clear_draft_confirmation_prompt,
    build_delete_draft_confirmation_prompt,
    build_draft_saved_notification,
    build_load_error_message,
    build_storage_error_message,
)
from unsent_archive.config import save_config
from unsent_archive.drafts import DraftStore
from unsent_archive.errors import (
    DraftNotFoundError,
    DraftValidationError,
    LoadError,
    StorageError,
)
from unsent_archive.modals import ConfirmModal, EntryFocusScreen, HelpScreen
from unsent_archive.models import (
    CATEGORY_ALL,
    FILTER_CATEGORIES,
    MODE_BROWSING,
    MODE_DRAFT_AUTHORING,
    MODE_UNSENT_LISTING,
    Entry,
    FilterState,
    SessionState,
    UserConfig,
)
from unsent_archive.modes import ModeChange, ModeController
from unsent_archive.projection import DRAFT_PREVIEW_MAX_LEN, project_entry, truncate_text
from unsent_archive.query import apply_filter_state, next_category, normalize_query
from unsent_archive.repository import EntryCollection
from unsent_archive.services.interfaces import AppServices, build_default_app_services
from unsent_archive.services.loader import DEFAULT_TIMEOUT_SECONDS
from unsent_archive.storage import JsonFileStore, KeyValueStore
from unsent_archive.themes import TEXTUAL_THEMES, THEME_COLORS, THEME_NAMES, apply_theme_colors
from unsent_archive.ui_constants import APP_BINDINGS, APP_CSS
from unsent_archive.widgets import (
    CATEGORY_LABELS,
    CategoryBar,
    ContextFooter,
    render_draft_option,
    render_entry_option,
    render_unsent_option,
    set_ascii_icons,
)

logger = logging.getLogger(__name__)

# Actions that need a loaded archive; disabled while loading and after a LoadError
_DATA_ACTIONS = frozenset(
    {
        "toggle_search",
        "cancel_search",
        "set_category",
        "cycle_category",
        "cursor_down",
        "cursor_up",
        "toggle_draft_authoring",
        "toggle_unsent_listing",
        "toggle_reading_mode",
        "save_draft",
    }
)
# Actions that only apply while browsing the entry list
_BROWSE_ACTIONS = frozenset({"toggle_search", "cancel_search", "set_category", "cycle_category"})
# Actions that would change the primary mode or the list underneath an open entry
_FOCUS_BLOCKED_ACTIONS = _BROWSE_ACTIONS | frozenset(
    {"toggle_draft_authoring", "toggle_unsent_listing", "save_draft", "cursor_down", "cursor_up"}
)

_CONTAINER_IDS = {
    MODE_BROWSING: "browse-container",
    MODE_DRAFT_AUTHORING: "draft-container",
    MODE_UNSENT_LISTING: "unsent-container",
}

_FOOTER_BINDINGS = {
    MODE_BROWSING: [
        ("/", "search"),
        ("1-3", "category"),
        ("enter", "open"),
        ("^n", "drafts"),
        ("^u", "unsent"),
        ("^r", "reading"),
        ("?", "help"),
    ],
    MODE_DRAFT_AUTHORING: [
        ("^s", "save"),
        ("^n", "back"),
        ("^u", "unsent"),
        ("^r", "reading"),
        ("?", "help"),
    ],
    MODE_UNSENT_LISTING: [
        ("enter", "open"),
        ("^u", "back"),
        ("^n", "drafts"),
        ("^r", "reading"),
        ("?", "help"),
    ],
}


def build_list_empty_message(*, query: str, category: str) -> str:
    """Build empty-state copy for the entry list."""
    if query:
        return (
            "[dim italic]Nothing matches your search.[/]\n"
            "[dim]Try: edit the query or press [bold]Esc[/bold] to clear it.[/]"
        )
    if category != CATEGORY_ALL:
        return (
            f"[dim italic]No {CATEGORY_LABELS[category].lower()} in the archive.[/]\n"
            "[dim]Try: press [bold]1[/bold] to show everything.[/]"
        )
    return "[dim italic]The archive is empty.[/]"


def build_status_bar_text(
    *,
    total: int,
    shown: int,
    category: str,
    query: str,
    draft_count: int,
    reading_mode: bool,
) -> Content:
    """Build the one-line status summary under the entry list.

    The query is user text, so it is carried as plain content rather than markup.
    """
    parts: list[Content] = [
        Content(f"{shown} of {total} entries"),
        Content(CATEGORY_LABELS[category]),
    ]
    if query:
        parts.append(Content.assemble("search: ", (query, THEME_COLORS["accent"])))
    parts.append(Content(f"{draft_count} draft{'s' if draft_count != 1 else ''}"))
    if reading_mode:
        parts.append(Content.styled("reading mode", THEME_COLORS["accent_alt"]))
    return Content.styled(" · ", THEME_COLORS["muted"]).join(parts)


class UnsentArchive(App):
    """A TUI application to browse an archive of unsent writing."""

    TITLE = "Unsent"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        data_source: str,
        config: UserConfig | None = None,
        *,
        store: KeyValueStore | None = None,
        restore_session: bool = True,
        ascii_icons: bool = False,
        services: AppServices | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self._config.theme_name = apply_theme_colors(self._config.theme_name)
        self.theme = self._config.theme_name
        self._data_source = data_source
        self._restore_session = restore_session
        self._services: AppServices = services or build_default_app_services()
        self._timeout = timeout
        self._store: KeyValueStore = store if store is not None else JsonFileStore()

        # Populated once the archive has loaded
        self._collection: EntryCollection | None = None
        self._mode_controller: ModeController | None = None
        self._load_error: str | None = None
        self._filter = FilterState()
        self._filtered: list[Entry] = []

        self._drafts = DraftStore(self._store)

        # Accessibility: ASCII badge icons for terminals/fonts without the glyphs
        set_ascii_icons(ascii_icons)

    # ========================================================================
    # Read-only state for callers and tests
    # ========================================================================

    @property
    def collection(self) -> EntryCollection | None:
        return self._collection

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    @property
    def filtered_entries(self) -> list[Entry]:
        return list(self._filtered)

    @property
    def mode_controller(self) -> ModeController | None:
        return self._mode_controller

    @property
    def drafts(self) -> DraftStore:
        return self._drafts

    @property
    def load_error(self) -> str | None:
        return self._load_error

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-container"):
            with Vertical(id="browse-container", classes="active"):
                yield CategoryBar(id="category-bar")
                with Vertical(id="search-container"):
                    yield Input(placeholder=" Search titles, excerpts and tags", id="search-input")
                yield Label(" Loading archive...", id="list-header")
                yield OptionList(id="entry-list")
                yield Label("", id="status-bar")
            with Vertical(id="draft-container"):
                yield Label(" Write something you won't send", classes="pane-header")
                yield TextArea(id="draft-text")
                with Horizontal(id="draft-buttons"):
                    yield Button("Clear", variant="default", id="draft-clear")
                    yield Button("Save (Ctrl+S)", variant="primary", id="draft-save")
                yield Label("", id="draft-list-header", classes="pane-header")
                yield OptionList(id="draft-list")
                with Horizontal(id="draft-list-buttons"):
                    yield Button("Restore", variant="default", id="draft-restore")
                    yield Button("Delete", variant="error", id="draft-delete")
            with Vertical(id="unsent-container"):
                yield Label(" Things left unsent", classes="pane-header")
                yield OptionList(id="unsent-list")
            yield Static("", id="error-state")
        yield ContextFooter()

    async def on_mount(self) -> None:
        """Load the archive (the only awaited step)."""
        self.sub_title = "loading..."
        self._refresh_draft_list()
        self._update_footer()
        try:
            collection = await self._services.loader.load_archive(
                self._data_source, client=None, timeout=self._timeout
            )
        except LoadError as e:
            logger.warning("Archive load failed: %s", e)
            self._show_load_error(str(e))
            return
        self._on_archive_loaded(collection)

    def _on_archive_loaded(self, collection: EntryCollection) -> None:
        self._collection = collection
        self._mode_controller = ModeController(collection, self._store)
        self.sub_title = f"{len(collection)} entries"

        session = self._config.session
        if self._restore_session:
            self._filter = FilterState(category=session.category, query=session.query)
            if self._filter.query:
                self._get_search_container().add_class("visible")
                search_input = self._get_search_input()
                with search_input.prevent(Input.Changed):
                    search_input.value = self._filter.query

        self._apply_filter(self._filter)
        option_list = self._get_entry_list()
        if self._restore_session and self._filtered:
            option_list.highlighted = min(session.scroll_index, len(self._filtered) - 1)
        self._apply_mode_view()
        option_list.focus()
        logger.debug(
            "App mounted: %d entries, filter=%s, reading_mode=%s",
            len(collection),
            self._filter,
            self._mode_controller.state.reading_mode,
        )

    def _show_load_error(self, reason: str) -> None:
        self._load_error = reason
        self.sub_title = "archive unavailable"
        for container_id in _CONTAINER_IDS.values():
            self._main_screen.query_one(f"#{container_id}").remove_class("active")
        error_panel = self._main_screen.query_one("#error-state", Static)
        error_panel.update(Content(build_load_error_message(self._data_source, reason)))
        error_panel.add_class("visible")
        self._update_footer()

    def on_unmount(self) -> None:
        """Save the session filter and scroll position."""
        self._save_session_state()

    def _save_session_state(self) -> None:
        """Save current session state to config.

        Handles the case where DOM widgets may already be destroyed during unmount.
        """
        if self._collection is None:
            return
        try:
            highlighted = self._get_entry_list().highlighted
        except (NoMatches, ScreenStackError):
            highlighted = None
        self._config.session = SessionState(
            category=self._filter.category,
            query=self._filter.query,
            scroll_index=highlighted if highlighted is not None else 0,
        )
        if not save_config(self._config):
            logger.warning("Failed to save session state to config file")

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable data actions until the archive loads, mode changes while an entry
        is open, and mode-specific actions outside their mode."""
        if action in _DATA_ACTIONS and self._mode_controller is None:
            return False
        if self._mode_controller is None:
            return True
        state = self._mode_controller.state
        if state.is_focused and action in _FOCUS_BLOCKED_ACTIONS:
            return False
        primary = state.primary
        if action in _BROWSE_ACTIONS and primary != MODE_BROWSING:
            return False
        if action == "save_draft" and primary != MODE_DRAFT_AUTHORING:
            return False
        return True

    # ========================================================================
    # Widget lookups
    # ========================================================================

    @property
    def _main_screen(self) -> Screen:
        """The base screen holding the mode containers, even under a modal."""
        stack = self.screen_stack
        if not stack:
            raise ScreenStackError("No screens on the stack")
        return stack[0]

    def _get_entry_list(self) -> OptionList:
        return self._main_screen.query_one("#entry-list", OptionList)

    def _get_search_input(self) -> Input:
        return self._main_screen.query_one("#search-input", Input)

    def _get_search_container(self) -> Vertical:
        return self._main_screen.query_one("#search-container", Vertical)

    def _get_draft_text(self) -> TextArea:
        return self._main_screen.query_one("#draft-text", TextArea)

    def _get_draft_list(self) -> OptionList:
        return self._main_screen.query_one("#draft-list", OptionList)

    def _get_unsent_list(self) -> OptionList:
        return self._main_screen.query_one("#unsent-list", OptionList)

    def _active_list(self) -> OptionList | None:
        if self._mode_controller is None:
            return None
        primary = self._mode_controller.state.primary
        if primary == MODE_DRAFT_AUTHORING:
            return self._get_draft_list()
        if primary == MODE_UNSENT_LISTING:
            return self._get_unsent_list()
        return self._get_entry_list()

    # ========================================================================
    # Filtering
    # ========================================================================

    def _apply_filter(self, state: FilterState) -> None:
        """Recompute the filtered view from scratch and redraw the list."""
        if self._collection is None:
            return
        self._filter = state
        self._filtered = apply_filter_state(self._collection, state)
        self._refresh_list_view()
        self._update_header()

    def _refresh_list_view(self) -> None:
        option_list = self._get_entry_list()
        option_list.clear_options()
        if not self._filtered:
            empty = build_list_empty_message(
                query=normalize_query(self._filter.query), category=self._filter.category
            )
            option_list.add_option(Option(empty, disabled=True))
            return
        option_list.add_options(
            [Option(self._render_option(entry), id=entry.id) for entry in self._filtered]
        )
        option_list.highlighted = 0

    def _render_option(self, entry: Entry) -> Content:
        needle = normalize_query(self._filter.query)
        reading_mode = self._mode_controller is not None and self._mode_controller.state.reading_mode
        return render_entry_option(
            project_entry(entry),
            raw_title=entry.title,
            raw_excerpt=entry.excerpt,
            show_preview=self._config.show_excerpt_preview and not reading_mode,
            highlight_terms=[needle] if needle else None,
        )

    def _update_header(self) -> None:
        if self._collection is None:
            return
        try:
            self._main_screen.query_one("#list-header", Label).update(
                f" Entries ({len(self._filtered)} of {len(self._collection)})"
            )
            self._main_screen.query_one("#category-bar", CategoryBar).update_categories(
                self._filter.category, self._collection.category_counts()
            )
        except NoMatches:
            return
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        if self._collection is None or self._mode_controller is None:
            return
        try:
            status = self._main_screen.query_one("#status-bar", Label)
        except NoMatches:
            return
        status.update(
            build_status_bar_text(
                total=len(self._collection),
                shown=len(self._filtered),
                category=self._filter.category,
                query=self._filter.query.strip(),
                draft_count=len(self._drafts),
                reading_mode=self._mode_controller.state.reading_mode,
            )
        )

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self._apply_filter(FilterState(self._filter.category, event.value))

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self._get_entry_list().focus()

    @on(CategoryBar.CategorySelected)
    def on_category_selected(self, event: CategoryBar.CategorySelected) -> None:
        if self._mode_controller is None or self._mode_controller.state.primary != MODE_BROWSING:
            return
        self.action_set_category(event.category)

    def action_set_category(self, category: str) -> None:
        if category not in FILTER_CATEGORIES:
            logger.warning("Ignoring unknown category %r", category)
            return
        self._apply_filter(FilterState(category, self._filter.query))

    def action_cycle_category(self) -> None:
        self.action_set_category(next_category(self._filter.category))

    def action_toggle_search(self) -> None:
        container = self._get_search_container()
        if "visible" in container.classes:
            container.remove_class("visible")
            self._get_entry_list().focus()
        else:
            container.add_class("visible")
            self._get_search_input().focus()

    def action_cancel_search(self) -> None:
        """Hide the search box and clear the query."""
        container = self._get_search_container()
        if "visible" not in container.classes:
            return
        container.remove_class("visible")
        search_input = self._get_search_input()
        with search_input.prevent(Input.Changed):
            search_input.value = ""
        self._apply_filter(FilterState(self._filter.category, ""))
        self._get_entry_list().focus()

    def action_cursor_down(self) -> None:
        option_list = self._active_list()
        if option_list is not None:
            option_list.action_cursor_down()

    def action_cursor_up(self) -> None:
        option_list = self._active_list()
        if option_list is not None:
            option_list.action_cursor_up()

    # ========================================================================
    # Modes
    # ========================================================================

    def _apply_mode_view(self, change: ModeChange | None = None) -> None:
        """Show the container for the primary mode and apply reading mode."""
        if self._mode_controller is None:
            return
        state = self._mode_controller.state
        screen = self._main_screen
        for primary, container_id in _CONTAINER_IDS.items():
            screen.query_one(f"#{container_id}").set_class(primary == state.primary, "active")
        screen.query_one("#main-container").set_class(state.reading_mode, "reading-mode")

        if change is not None and change.unsent_entries is not None:
            self._refresh_unsent_list(change.unsent_entries)
        if change is not None and change.focus_draft_input:
            self._get_draft_text().focus()
        elif state.primary == MODE_UNSENT_LISTING:
            self._get_unsent_list().focus()
        elif state.primary == MODE_BROWSING and change is not None:
            self._get_entry_list().focus()
        self._update_footer()

    def _refresh_unsent_list(self, entries: tuple[Entry, ...]) -> None:
        option_list = self._get_unsent_list()
        option_list.clear_options()
        if not entries:
            option_list.add_option(Option("[dim italic]No unsent entries.[/]", disabled=True))
            return
        option_list.add_options(
            [
                Option(render_unsent_option(project_entry(e), raw_excerpt=e.excerpt), id=e.id)
                for e in entries
            ]
        )
        option_list.highlighted = 0

    def action_toggle_draft_authoring(self) -> None:
        if self._mode_controller is None:
            return
        self._apply_mode_view(self._mode_controller.toggle_draft_authoring())

    def action_toggle_unsent_listing(self) -> None:
        if self._mode_controller is None:
            return
        self._apply_mode_view(self._mode_controller.toggle_unsent_listing())

    def action_toggle_reading_mode(self) -> None:
        if self._mode_controller is None:
            return
        try:
            change = self._mode_controller.toggle_reading_mode()
        except StorageError as e:
            self.notify(
                build_storage_error_message("reading mode", str(e)),
                title="Save Error",
                severity="error",
                markup=False,
            )
            return
        self._apply_mode_view()
        if isinstance(self.screen, EntryFocusScreen):
            self.screen.set_reading_mode(change.state.reading_mode)
        # Excerpt previews are hidden in reading mode
        highlighted = self._get_entry_list().highlighted
        self._refresh_list_view()
        if highlighted is not None and self._filtered:
            self._get_entry_list().highlighted = min(highlighted, len(self._filtered) - 1)
        self._update_status_bar()

    # ========================================================================
    # Focus overlay
    # ========================================================================

    @on(OptionList.OptionSelected, "#entry-list")
    @on(OptionList.OptionSelected, "#unsent-list")
    def on_entry_selected(self, event: OptionList.OptionSelected) -> None:
        """Enter (or click) on an entry opens it in the focus overlay."""
        if event.option.id is not None:
            self.open_entry(event.option.id)

    def open_entry(self, entry_id: str) -> None:
        if self._mode_controller is None:
            return
        change = self._mode_controller.open_focus(entry_id)
        if change.state.focused_id != entry_id:
            return
        entry = self._mode_controller.focused_entry()
        if entry is None:
            return
        self.push_screen(
            EntryFocusScreen(project_entry(entry), reading_mode=change.state.reading_mode),
            self._on_focus_closed,
        )
        self._update_footer()

    def _on_focus_closed(self, _result: None) -> None:
        if self._mode_controller is not None:
            self._mode_controller.close_focus()
        self._update_footer()

    # ========================================================================
    # Drafts
    # ========================================================================

    def _refresh_draft_list(self) -> None:
        option_list = self._get_draft_list()
        option_list.clear_options()
        drafts = self._drafts.list()
        count = len(drafts)
        self._main_screen.query_one("#draft-list-header", Label).update(
            f" Saved on this device ({count})" if count else " Saved on this device"
        )
        if not drafts:
            option_list.add_option(Option("[dim italic]No saved drafts yet.[/]", disabled=True))
            return
        # Newest first
        option_list.add_options(
            [Option(render_draft_option(d), id=d.id) for d in reversed(drafts)]
        )
        option_list.highlighted = 0

    def _highlighted_draft_id(self) -> str | None:
        option_list = self._get_draft_list()
        index = option_list.highlighted
        if index is None:
            return None
        return option_list.get_option_at_index(index).id

    def action_save_draft(self) -> None:
        text_area = self._get_draft_text()
        try:
            self._drafts.create(text_area.text)
        except DraftValidationError as e:
            self.notify(
                build_actionable_warning(
                    str(e), next_step="type in the box above, then press Ctrl+S"
                ),
                title="Drafts",
                severity="warning",
            )
            return
        except StorageError as e:
            self.notify(
                build_storage_error_message("the draft", str(e)),
                title="Save Error",
                severity="error",
                markup=False,
            )
            return
        text_area.clear()
        self._refresh_draft_list()
        self._update_status_bar()
        self.notify(build_draft_saved_notification(len(self._drafts)), title="Drafts")

    @on(Button.Pressed, "#draft-save")
    def on_draft_save_pressed(self) -> None:
        self.action_save_draft()

    @on(Button.Pressed, "#draft-clear")
    def on_draft_clear_pressed(self) -> None:
        text_area = self._get_draft_text()
        if not text_area.text:
            return

        def on_confirmed(confirmed: bool | None) -> None:
            if confirmed:
                text_area.clear()

        self.push_screen(
            ConfirmModal(build_clear_draft_confirmation_prompt(len(text_area.text))),
            on_confirmed,
        )

    @on(OptionList.OptionSelected, "#draft-list")
    def on_draft_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is not None:
            self.restore_draft(event.option.id)

    @on(Button.Pressed, "#draft-restore")
    def on_draft_restore_pressed(self) -> None:
        draft_id = self._highlighted_draft_id()
        if draft_id is not None:
            self.restore_draft(draft_id)

    def restore_draft(self, draft_id: str) -> None:
        """Copy a saved draft into the editor; the saved draft is untouched."""
        try:
            content = self._drafts.restore_content(draft_id)
        except DraftNotFoundError:
            logger.warning("Ignoring restore for unknown draft id %r", draft_id)
            return
        text_area = self._get_draft_text()
        text_area.load_text(content)
        text_area.focus()

    @on(Button.Pressed, "#draft-delete")
    def on_draft_delete_pressed(self) -> None:
        draft_id = self._highlighted_draft_id()
        draft = self._drafts.get(draft_id) if draft_id is not None else None
        if draft is None:
            return

        def on_confirmed(confirmed: bool | None) -> None:
            if confirmed:
                self.delete_draft(draft.id)

        self.push_screen(
            ConfirmModal(build_delete_draft_confirmation_prompt(
                    truncate_text(draft.content, DRAFT_PREVIEW_MAX_LEN)
                )),
            on_confirmed,
        )

    def delete_draft(self, draft_id: str) -> None:
        try:
            self._drafts.delete(draft_id)
        except DraftNotFoundError:
            logger.warning("Ignoring delete for unknown draft id %r", draft_id)
            return
        except StorageError as e:
            self.notify(
                build_storage_error_message("your drafts", str(e)),
                title="Save Error",
                severity="error",
                markup=False,
            )
            return
        self._refresh_draft_list()
        self._update_status_bar()

    # ========================================================================
    # Chrome
    # ========================================================================

    def _update_footer(self) -> None:
        try:
            footer = self._main_screen.query_one(ContextFooter)
        except (NoMatches, ScreenStackError):
            return
        if self._load_error is not None:
            footer.render_bindings([("q", "quit")])
            return
        if self._mode_controller is None:
            footer.render_bindings([("q", "quit")], mode_badge="[dim]loading[/]")
            return
        state = self._mode_controller.state
        if state.is_focused:
            footer.render_bindings([("esc", "close"), ("^r", "reading"), ("q", "close")])
            return
        badge = f"[bold {THEME_COLORS['accent_alt']}]{state.primary.replace('_', ' ')}[/]"
        footer.render_bindings(_FOOTER_BINDINGS[state.primary], mode_badge=badge)

    def action_cycle_theme(self) -> None:
        """Cycle through available color themes."""
        try:
            idx = THEME_NAMES.index(self._config.theme_name)
        except ValueError:
            idx = 0
        name = THEME_NAMES[(idx + 1) % len(THEME_NAMES)]
        self._config.theme_name = apply_theme_colors(name)
        self.theme = name
        if self._collection is not None:
            self._refresh_list_view()
            self._update_header()
        self._refresh_draft_list()
        self._update_footer()
        if not save_config(self._config):
            self.notify("Failed to save theme preference.", severity="warning")
        self.notify(f"Theme: {name}", title="Theme")

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())


__all__ = [
    "UnsentArchive",
    "build_list_empty_message",
    "build_status_bar_text",
]
