"""Focus overlay: one entry shown in full over the current mode."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from unsent_archive.projection import RenderModel, markup_field
from unsent_archive.widgets.listing import render_meta_line


class EntryFocusScreen(ModalScreen[None]):
    """Full text of a single entry, split into paragraphs."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("q", "close", "Close", show=False),
        Binding("enter", "close", "Close", show=False),
    ]

    CSS = """
    EntryFocusScreen {
        align: center middle;
    }

    #focus-dialog {
        width: 80%;
        height: 85%;
        min-width: 50;
        background: $th-background;
        border: tall $th-accent;
        padding: 1 3;
    }

    #focus-dialog.reading-mode {
        width: 100%;
        height: 100%;
        border: none;
        padding: 2 8;
    }

    #focus-title {
        text-style: bold;
        color: $th-accent-alt;
    }

    #focus-meta {
        color: $th-muted;
        margin-bottom: 1;
    }

    .focus-paragraph {
        color: $th-text;
        margin-bottom: 1;
    }

    #focus-footer {
        color: $th-muted;
        text-align: center;
    }
    """

    def __init__(self, model: RenderModel, *, reading_mode: bool = False) -> None:
        super().__init__()
        self._model = model
        self._reading_mode = reading_mode

    @property
    def entry_id(self) -> str:
        return self._model.entry_id

    def compose(self) -> ComposeResult:
        classes = "reading-mode" if self._reading_mode else ""
        with VerticalScroll(id="focus-dialog", classes=classes):
            yield Label(markup_field(self._model.title), id="focus-title")
            yield Label(render_meta_line(self._model, with_badges=True), id="focus-meta")
            if not self._model.paragraphs:
                yield Static("[dim italic]No text[/]", classes="focus-paragraph")
            for paragraph in self._model.paragraphs:
                yield Static(markup_field(paragraph), classes="focus-paragraph")
            yield Label("Close: Esc", id="focus-footer")

    def set_reading_mode(self, enabled: bool) -> None:
        self._reading_mode = enabled
        self.query_one("#focus-dialog").set_class(enabled, "reading-mode")

    def action_close(self) -> None:
        self.dismiss(None)


__all__ = ["EntryFocusScreen"]
