#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.dimmer": "#6d717a",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "tab": "#97a0a9",
        "tab.active": "bg:#3b3b3b #ffb347 bold",
        "title": "#61afef bold",
        "block.active": "bg:#e06c75 #1b1d21 bold",  # list that receives arrows
        "block.inactive": "bg:#e5c07b #1b1d21 bold",
        "field.ok": "#9ad974",
        "field.error": "#e06c75",
        "field.focused": "underline",
        "field.idle": "#6d717a",
        "status.ok": "#9ad974 bold",
        "status.error": "#e06c75 bold",
        "dialog": "bg:#2b2f36 #d7dfe6",
        "dialog.title": "bg:#2b2f36 #ffb347 bold",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "text.dimmer": "#6f757d",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "tab": "#a7b0ba",
        "tab.active": "bg:#3d4047 #f0c674 bold",
        "title": "#8ac6f2 bold",
        "block.active": "bg:#ff6b6b #101214 bold",
        "block.inactive": "bg:#f0c674 #101214 bold",
        "field.ok": "#b8f171",
        "field.error": "#ff6b6b",
        "field.focused": "underline",
        "field.idle": "#6f757d",
        "status.ok": "#b8f171 bold",
        "status.error": "#ff6b6b bold",
        "dialog": "bg:#24272c #e8eaec",
        "dialog.title": "bg:#24272c #f0c674 bold",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
