"""Display-width helpers (wide glyphs count double)."""

from wcwidth import wcwidth


def display_width(text: str) -> int:
    text = (text or "").expandtabs(4)
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w is None:
            w = 0
        width += max(0, w)
    return width


def trim_display(text: str, width: int) -> str:
    """Cut text so its visible width does not exceed `width`."""
    text = (text or "").expandtabs(4)
    acc = []
    used = 0
    for ch in text:
        w = wcwidth(ch) or 0
        if w < 0:
            w = 0
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def pad_display(text: str, width: int) -> str:
    """Trim, then pad with spaces to exactly `width` visible columns."""
    if width <= 0:
        return ""
    trimmed = trim_display(text, width)
    if display_width(trimmed) < display_width(text) and width > 1:
        trimmed = trim_display(trimmed, width - 1) + "…"
    used = display_width(trimmed)
    if used < width:
        trimmed += " " * (width - used)
    return trimmed


def center_display(text: str, width: int) -> str:
    text = trim_display(text, width)
    gap = max(0, width - display_width(text))
    left = gap // 2
    return " " * left + text + " " * (gap - left)


__all__ = ["display_width", "trim_display", "pad_display", "center_display"]
