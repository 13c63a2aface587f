"""Pilot tests for the UnsentArchive app: load, filtering, modes, focus, drafts."""

from __future__ import annotations

import pytest
from textual.widgets import Input, Label, OptionList, Static, TextArea

from unsent_archive.app import UnsentArchive, build_list_empty_message, build_status_bar_text
from unsent_archive.config import load_config
from unsent_archive.errors import LoadError, StorageError
from unsent_archive.modals import ConfirmModal, EntryFocusScreen, HelpScreen
from unsent_archive.models import (
    MODE_BROWSING,
    MODE_DRAFT_AUTHORING,
    MODE_UNSENT_LISTING,
    READING_MODE_KEY,
    SessionState,
    UserConfig,
)
from unsent_archive.repository import load_entries
from unsent_archive.services.interfaces import AppServices
from unsent_archive.storage import MemoryStore
from unsent_archive.themes import THEME_COLORS, THEMES


class StaticLoader:
    """Loader that returns a fixed collection or raises a fixed error."""

    def __init__(self, collection=None, error: Exception | None = None) -> None:
        self.collection = collection
        self.error = error
        self.calls: list[str] = []

    async def load_archive(self, source, *, client, timeout):
        self.calls.append(source)
        if self.error is not None:
            raise self.error
        return self.collection


class FailingStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise StorageError("disk full")


@pytest.fixture
def make_app(collection, memory_store):
    def _make(
        *,
        loader: StaticLoader | None = None,
        config: UserConfig | None = None,
        store=None,
        restore_session: bool = False,
    ) -> UnsentArchive:
        return UnsentArchive(
            "/archive",
            config or UserConfig(),
            store=store if store is not None else memory_store,
            restore_session=restore_session,
            services=AppServices(loader=loader or StaticLoader(collection)),
        )

    return _make


def _ids(app: UnsentArchive) -> list[str]:
    return [e.id for e in app.filtered_entries]


# ============================================================================
# Load
# ============================================================================


@pytest.mark.asyncio
async def test_loads_archive_on_mount(make_app, collection):
    loader = StaticLoader(collection)
    app = make_app(loader=loader)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert loader.calls == ["/archive"]
        assert app.collection is collection
        assert _ids(app) == ["q2", "p3", "p1", "q1", "p2"]
        assert app.query_one("#entry-list", OptionList).option_count == 5
        assert app.mode_controller.state.primary == MODE_BROWSING


@pytest.mark.asyncio
async def test_load_error_shows_panel_and_disables_actions(make_app):
    loader = StaticLoader(error=LoadError("Missing archive file: /archive/prose.json"))
    app = make_app(loader=loader)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.load_error == "Missing archive file: /archive/prose.json"
        assert app.collection is None
        panel = app.query_one("#error-state", Static)
        assert panel.has_class("visible")
        assert not app.query_one("#browse-container").has_class("active")

        await pilot.press("2", "ctrl+n", "ctrl+u")
        await pilot.pause()
        assert app.mode_controller is None
        assert app.filtered_entries == []


# ============================================================================
# Filtering
# ============================================================================


@pytest.mark.asyncio
async def test_number_keys_set_category(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("2")
        assert app.filter_state.category == "prose"
        assert _ids(app) == ["p3", "p1", "p2"]
        await pilot.press("3")
        assert _ids(app) == ["q2", "q1"]
        await pilot.press("1")
        assert len(app.filtered_entries) == 5


@pytest.mark.asyncio
async def test_category_bar_click_and_counts(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        poem_label = app.query_one("#category-poem", Label)
        assert "(2)" in str(poem_label.render())
        await pilot.click("#category-poem")
        await pilot.pause()
        assert app.filter_state.category == "poem"
        assert poem_label.has_class("active")


@pytest.mark.asyncio
async def test_cycle_category(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("c")
        assert app.filter_state.category == "prose"
        await pilot.press("c", "c")
        assert app.filter_state.category == "all"


@pytest.mark.asyncio
async def test_search_filters_and_escape_clears(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("slash")
        search = app.query_one("#search-input", Input)
        assert search.has_focus
        await pilot.press("s", "a", "l", "t")
        await pilot.pause()
        assert app.filter_state.query == "salt"
        assert _ids(app) == ["q1"]

        await pilot.press("escape")
        await pilot.pause()
        assert app.filter_state.query == ""
        assert search.value == ""
        assert len(app.filtered_entries) == 5


@pytest.mark.asyncio
async def test_search_matches_tags_within_category(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("2", "slash")
        await pilot.press("g", "r", "i", "e", "f")
        await pilot.pause()
        assert _ids(app) == ["p2"]


@pytest.mark.asyncio
async def test_search_with_brackets_and_backslashes(make_record, memory_store):
    collection = load_entries(
        [
            make_record("w1", title="C:\\grief", date="2024-03-01"),
            make_record("w2", title="[b]lue", date="2024-02-01"),
            make_record("w3", title="[$accent]hi[/]", date="2024-01-01"),
        ],
        [],
    )
    app = UnsentArchive(
        "/archive",
        UserConfig(),
        store=memory_store,
        restore_session=False,
        services=AppServices(loader=StaticLoader(collection)),
    )
    async with app.run_test() as pilot:
        await pilot.pause()
        option_list = app.query_one("#entry-list", OptionList)
        titles = [
            option_list.get_option_at_index(i).prompt.plain.split("\n")[0]
            for i in range(option_list.option_count)
        ]
        assert titles == ["C:\\grief", "[b]lue", "[$accent]hi[/]"]

        await pilot.press("slash", "g", "r", "i", "e", "f")
        await pilot.pause()
        assert _ids(app) == ["w1"]
        assert option_list.get_option_at_index(0).prompt.plain.startswith("C:\\grief")

        app.query_one("#search-input", Input).value = "[b"
        await pilot.pause()
        assert _ids(app) == ["w2"]
        assert option_list.get_option_at_index(0).prompt.plain.startswith("[b]lue")

        app.open_entry("w3")
        await pilot.pause()
        assert isinstance(app.screen, EntryFocusScreen)
        assert app.screen.entry_id == "w3"


@pytest.mark.asyncio
async def test_empty_result_shows_message(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("slash", "z", "z", "z")
        await pilot.pause()
        assert app.filtered_entries == []
        option_list = app.query_one("#entry-list", OptionList)
        assert option_list.option_count == 1
        assert option_list.get_option_at_index(0).disabled


# ============================================================================
# Focus overlay
# ============================================================================


@pytest.mark.asyncio
async def test_enter_opens_focus_and_escape_closes(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, EntryFocusScreen)
        assert app.screen.entry_id == "q2"
        assert app.mode_controller.state.focused_id == "q2"

        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, EntryFocusScreen)
        assert app.mode_controller.state.focused_id is None
        assert app.mode_controller.state.primary == MODE_BROWSING


@pytest.mark.asyncio
async def test_focus_renders_paragraphs(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        app.open_entry("q1")
        await pilot.pause()
        paragraphs = app.screen.query(".focus-paragraph")
        assert len(paragraphs) == 2


@pytest.mark.asyncio
async def test_open_unknown_entry_is_ignored(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        app.open_entry("missing")
        await pilot.pause()
        assert not isinstance(app.screen, EntryFocusScreen)
        assert app.mode_controller.state.focused_id is None


@pytest.mark.asyncio
async def test_focus_from_unsent_listing_returns_to_listing(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+u")
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, EntryFocusScreen)
        await pilot.press("escape")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_UNSENT_LISTING
        assert app.mode_controller.state.focused_id is None


@pytest.mark.asyncio
async def test_mode_keys_ignored_while_entry_is_open(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, EntryFocusScreen)

        await pilot.press("ctrl+n", "ctrl+u", "ctrl+s")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_BROWSING
        assert app.mode_controller.state.focused_id == "q2"

        await pilot.press("escape")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_BROWSING
        assert app.query_one("#browse-container").has_class("active")
        assert not app.query_one("#draft-container").has_class("active")


# ============================================================================
# Modes
# ============================================================================


@pytest.mark.asyncio
async def test_draft_authoring_toggle(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+n")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_DRAFT_AUTHORING
        assert app.query_one("#draft-container").has_class("active")
        assert not app.query_one("#browse-container").has_class("active")
        assert app.query_one("#draft-text", TextArea).has_focus

        await pilot.press("ctrl+n")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_BROWSING
        assert app.query_one("#browse-container").has_class("active")


@pytest.mark.asyncio
async def test_unsent_listing_shows_only_unsent(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+u")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_UNSENT_LISTING
        unsent_list = app.query_one("#unsent-list", OptionList)
        ids = [unsent_list.get_option_at_index(i).id for i in range(unsent_list.option_count)]
        assert ids == ["q2", "p2"]

        # Switching straight to drafts leaves the listing
        await pilot.press("ctrl+n")
        await pilot.pause()
        assert app.mode_controller.state.primary == MODE_DRAFT_AUTHORING
        assert not app.query_one("#unsent-container").has_class("active")


@pytest.mark.asyncio
async def test_category_keys_ignored_outside_browsing(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+u")
        await pilot.pause()
        await pilot.press("2")
        assert app.filter_state.category == "all"


@pytest.mark.asyncio
async def test_reading_mode_persists(make_app, memory_store):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+r")
        await pilot.pause()
        assert app.mode_controller.state.reading_mode is True
        assert app.query_one("#main-container").has_class("reading-mode")
        assert memory_store.get(READING_MODE_KEY) == "true"

    second = make_app()
    async with second.run_test() as pilot:
        await pilot.pause()
        assert second.mode_controller.state.reading_mode is True
        assert second.query_one("#main-container").has_class("reading-mode")


@pytest.mark.asyncio
async def test_reading_mode_toggle_inside_focus(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
        await pilot.press("ctrl+r")
        await pilot.pause()
        assert isinstance(app.screen, EntryFocusScreen)
        assert app.screen.query_one("#focus-dialog").has_class("reading-mode")
        assert app.mode_controller.state.focused_id == "q2"


@pytest.mark.asyncio
async def test_reading_mode_write_failure_keeps_state(make_app):
    app = make_app(store=FailingStore())
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+r")
        await pilot.pause()
        assert app.mode_controller.state.reading_mode is False
        assert not app.query_one("#main-container").has_class("reading-mode")


# ============================================================================
# Drafts
# ============================================================================


@pytest.mark.asyncio
async def test_save_draft(make_app, memory_store):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+n")
        await pilot.pause()
        text_area = app.query_one("#draft-text", TextArea)
        text_area.load_text("  a letter to no one  ")
        await pilot.press("ctrl+s")
        await pilot.pause()
        assert [d.content for d in app.drafts.list()] == ["a letter to no one"]
        assert text_area.text == ""
        assert app.query_one("#draft-list", OptionList).option_count == 1


@pytest.mark.asyncio
async def test_save_empty_draft_is_rejected(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+n")
        await pilot.pause()
        app.query_one("#draft-text", TextArea).load_text("   ")
        await pilot.press("ctrl+s")
        await pilot.pause()
        assert len(app.drafts) == 0
        assert app.query_one("#draft-text", TextArea).text == "   "


@pytest.mark.asyncio
async def test_save_draft_ignored_while_browsing(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        app.query_one("#draft-text", TextArea).load_text("hidden")
        await pilot.press("ctrl+s")
        await pilot.pause()
        assert len(app.drafts) == 0


@pytest.mark.asyncio
async def test_save_draft_storage_failure_keeps_text(make_app):
    app = make_app(store=FailingStore())
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+n")
        await pilot.pause()
        text_area = app.query_one("#draft-text", TextArea)
        text_area.load_text("keep me")
        await pilot.press("ctrl+s")
        await pilot.pause()
        assert len(app.drafts) == 0
        assert text_area.text == "keep me"


@pytest.mark.asyncio
async def test_restore_and_delete_draft(make_app, memory_store):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        draft = app.drafts.create("older note")
        await pilot.press("ctrl+n")
        await pilot.pause()

        app.restore_draft(draft.id)
        await pilot.pause()
        assert app.query_one("#draft-text", TextArea).text == "older note"
        assert len(app.drafts) == 1

        app.delete_draft(draft.id)
        await pilot.pause()
        assert len(app.drafts) == 0
        assert app.query_one("#draft-list", OptionList).option_count == 1  # placeholder


@pytest.mark.asyncio
async def test_clear_draft_asks_for_confirmation(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+n")
        await pilot.pause()
        text_area = app.query_one("#draft-text", TextArea)
        text_area.load_text("half a thought")
        await pilot.click("#draft-clear")
        await pilot.pause()
        assert isinstance(app.screen, ConfirmModal)
        await pilot.press("y")
        await pilot.pause()
        assert text_area.text == ""


@pytest.mark.asyncio
async def test_drafts_loaded_from_store(make_app):
    make_app().drafts.create("from last time")
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        assert [d.content for d in app.drafts.list()] == ["from last time"]


# ============================================================================
# Session
# ============================================================================


@pytest.mark.asyncio
async def test_session_is_restored(make_app):
    config = UserConfig(session=SessionState(category="poem", query="salt", scroll_index=0))
    app = make_app(config=config, restore_session=True)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.filter_state.category == "poem"
        assert app.filter_state.query == "salt"
        assert _ids(app) == ["q1"]
        assert app.query_one("#search-container").has_class("visible")
        assert app.query_one("#search-input", Input).value == "salt"


@pytest.mark.asyncio
async def test_session_is_saved_on_exit(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("3")
        await pilot.pause()
    saved = load_config()
    assert saved.session.category == "poem"
    assert saved.session.query == ""


# ============================================================================
# Chrome
# ============================================================================


@pytest.mark.asyncio
async def test_help_overlay_opens_and_closes(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("question_mark")
        await pilot.pause()
        assert isinstance(app.screen, HelpScreen)
        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, HelpScreen)


@pytest.mark.asyncio
async def test_cycle_theme_applies_and_persists(make_app):
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("ctrl+t")
        await pilot.pause()
        assert app.theme == "catppuccin-mocha"
        assert THEME_COLORS["background"] == THEMES["catppuccin-mocha"]["background"]
        assert load_config().theme_name == "catppuccin-mocha"


@pytest.mark.asyncio
async def test_saved_theme_is_active_before_mount(make_app):
    app = make_app(config=UserConfig(theme_name="catppuccin-mocha"))
    assert app.theme == "catppuccin-mocha"
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.theme == "catppuccin-mocha"
        assert app.query_one("#entry-list", OptionList).option_count == 5


# ============================================================================
# Copy builders
# ============================================================================


def test_list_empty_message_for_query():
    assert "Nothing matches" in build_list_empty_message(query="x", category="all")


def test_list_empty_message_for_category():
    assert "No poems" in build_list_empty_message(query="", category="poem")


def test_status_bar_text():
    text = build_status_bar_text(
        total=5, shown=2, category="prose", query="[x]", draft_count=1, reading_mode=True
    )
    plain = text.plain
    assert plain == "2 of 5 entries · Prose · search: [x] · 1 draft · reading mode"
    assert "1 drafts" not in plain
