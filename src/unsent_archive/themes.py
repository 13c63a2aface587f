"""Theme system: color palettes, category and badge colors, Textual theme builders."""

from __future__ import annotations

from textual.theme import Theme as TextualTheme

from unsent_archive.models import CATEGORY_POEM, CATEGORY_PROSE

# Palette keys: surface colors first, then the colors that carry meaning in
# the archive (tags, the two categories, and one per status badge kind).
DEFAULT_THEME = {
    "background": "#272822",
    "panel": "#1e1e1e",
    "panel_alt": "#3e3d32",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "accent_alt": "#e6db74",
    "highlight": "#49483e",
    "highlight_focus": "#5a5950",
    "tag": "#a6e22e",
    "prose": "#66d9ef",
    "poem": "#ae81ff",
    "pinned": "#fd971f",
    "featured": "#e6db74",
    "unsent": "#f92672",
}

CATPPUCCIN_MOCHA_THEME: dict[str, str] = {
    "background": "#1e1e2e",
    "panel": "#181825",
    "panel_alt": "#313244",
    "text": "#cdd6f4",
    "muted": "#6c7086",
    "accent": "#89b4fa",
    "accent_alt": "#f9e2af",
    "highlight": "#313244",
    "highlight_focus": "#45475a",
    "tag": "#a6e3a1",
    "prose": "#89b4fa",
    "poem": "#cba6f7",
    "pinned": "#fab387",
    "featured": "#f9e2af",
    "unsent": "#f38ba8",
}

# Light palette for long reading sessions
PAPER_THEME: dict[str, str] = {
    "background": "#f4efe6",
    "panel": "#ebe4d6",
    "panel_alt": "#ddd3c1",
    "text": "#2e2a24",
    "muted": "#8a8072",
    "accent": "#3b6ea5",
    "accent_alt": "#9a6a1f",
    "highlight": "#e2d9c8",
    "highlight_focus": "#d3c7b1",
    "tag": "#4f7a3a",
    "prose": "#3b6ea5",
    "poem": "#7a4f9a",
    "pinned": "#b5561d",
    "featured": "#9a6a1f",
    "unsent": "#a8324a",
}

THEMES: dict[str, dict[str, str]] = {
    "monokai": DEFAULT_THEME,
    "catppuccin-mocha": CATPPUCCIN_MOCHA_THEME,
    "paper": PAPER_THEME,
}
THEME_NAMES: list[str] = list(THEMES.keys())

_LIGHT_THEMES = frozenset({"paper"})


def _build_textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    """Convert a palette to a Textual Theme exposing $th-* CSS variables."""
    variables = {
        "th-background": colors["background"],
        "th-panel": colors["panel"],
        "th-panel-alt": colors["panel_alt"],
        "th-highlight": colors["highlight"],
        "th-highlight-focus": colors["highlight_focus"],
        "th-accent": colors["accent"],
        "th-accent-alt": colors["accent_alt"],
        "th-muted": colors["muted"],
        "th-text": colors["text"],
    }
    return TextualTheme(
        name=name,
        primary=colors["accent"],
        secondary=colors["accent_alt"],
        accent=colors["tag"],
        foreground=colors["text"],
        background=colors["background"],
        surface=colors["panel"],
        panel=colors["panel_alt"],
        warning=colors["pinned"],
        error=colors["unsent"],
        success=colors["tag"],
        dark=name not in _LIGHT_THEMES,
        variables=variables,
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: _build_textual_theme(name, colors) for name, colors in THEMES.items()
}

THEME_COLORS = DEFAULT_THEME.copy()


def category_color(category: str) -> str:
    """Return the display color for an entry category in the active palette."""
    if category in (CATEGORY_PROSE, CATEGORY_POEM):
        return THEME_COLORS[category]
    return THEME_COLORS["muted"]


def badge_color(kind: str) -> str:
    """Return the display color for a status badge kind."""
    return THEME_COLORS[kind]


def apply_theme_colors(theme_name: str) -> str:
    """Copy the named palette into THEME_COLORS; unknown names fall back to monokai.

    Returns the name of the palette actually applied.
    """
    if theme_name not in THEMES:
        theme_name = "monokai"
    THEME_COLORS.clear()
    THEME_COLORS.update(THEMES[theme_name])
    return theme_name


__all__ = [
    "CATPPUCCIN_MOCHA_THEME",
    "DEFAULT_THEME",
    "PAPER_THEME",
    "TEXTUAL_THEMES",
    "THEMES",
    "THEME_COLORS",
    "THEME_NAMES",
    "apply_theme_colors",
    "badge_color",
    "category_color",
]
