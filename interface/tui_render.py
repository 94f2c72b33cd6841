"""Rendering helpers for ProgressTrackerTUI to keep the class slim.

Every builder takes the interaction controller and returns FormattedText; none
of them mutate state.
"""

from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Item
from core.form import FormController
from core.navigation import Block, Modal, Tab

from .constants import (
    ADD_HELP_LINES,
    ADD_READY_LINES,
    FOOTER_HINTS,
    HOME_LINES,
    ITEM_COLUMNS,
    TAB_LABELS,
)
from .tui_text import center_display, display_width, pad_display, trim_display

Fragments = List[Tuple[str, str]]


def _box_top(title: str, width: int, style: str = "class:border") -> Fragments:
    label = trim_display(f" {title} ", max(0, width - 3)) if title else ""
    head = "┌─" + label
    line = head + "─" * max(0, width - 1 - display_width(head)) + "┐"
    return [(style, line + "\n")]


def _box_bottom(width: int, style: str = "class:border") -> Fragments:
    return [(style, "└" + "─" * max(0, width - 2) + "┘")]


def _box_row(text: str, width: int, text_style: str = "class:text", border: str = "class:border") -> Fragments:
    return [(border, "│"), (text_style, pad_display(text, max(0, width - 2))), (border, "│\n")]


def build_tab_bar(controller) -> FormattedText:
    active = controller.state.active_tab.value
    parts: Fragments = [("class:title", " fitdb "), ("class:border", "│")]
    for key, label, chord in TAB_LABELS:
        style = "class:tab.active" if key == active else "class:tab"
        parts.append((style, f" {label} "))
        parts.append(("class:text.dimmer", f"{chord} "))
        parts.append(("class:border", "│"))
    return FormattedText(parts)


def render_home(width: int) -> FormattedText:
    width = max(20, width)
    parts: Fragments = []
    parts.extend(_box_top("Home", width))
    for line in HOME_LINES:
        style = "class:title" if line == "fitdb" else "class:text"
        parts.extend(_box_row(center_display(line, width - 2), width, style))
    parts.extend(_box_bottom(width))
    return FormattedText(parts)


def _selection_style(controller, block: Block) -> str:
    return "class:block.active" if controller.state.active_block is block else "class:block.inactive"


def render_topic_list(controller, width: int) -> FormattedText:
    width = max(12, width)
    state = controller.state
    view = controller.view
    parts: Fragments = []
    parts.extend(_box_top("Topics", width))
    if not view.topics:
        parts.extend(_box_row("(no topics yet)", width, "class:text.dim"))
        parts.extend(_box_row("Alt+a to add one", width, "class:text.dimmer"))
    for idx, topic in enumerate(view.topics):
        count = controller.topic_counts.get(topic.name, 0)
        label = f"{topic.name} ({count})"
        style = _selection_style(controller, Block.TOPIC_LIST) if idx == state.selected_topic_index else "class:text"
        parts.extend(_box_row(label, width, style))
    parts.extend(_box_bottom(width))
    return FormattedText(parts)


def _item_cells(item: Item) -> List[str]:
    return [
        str(item.id),
        item.name,
        item.progress_bar(10),
        "yes" if item.is_recurring else "no",
        item.status_label(),
        str(item.percentage),
        str(item.times_finished),
        str(item.day_limit),
        item.created,
    ]


def _table_line(cells: List[str], width: int) -> str:
    chunks = [pad_display(cell, col_width) for cell, (_, col_width) in zip(cells, ITEM_COLUMNS)]
    return pad_display(" ".join(chunks), width)


def render_item_table(controller, width: int) -> FormattedText:
    width = max(20, width)
    state = controller.state
    topic = controller.selected_topic
    title = f"Detail: {topic.name}" if topic else "Detail"
    parts: Fragments = []
    parts.extend(_box_top(title, width))
    parts.extend(_box_row(_table_line([name for name, _ in ITEM_COLUMNS], width - 2), width, "class:header"))
    items = controller.view.items
    if not items:
        parts.extend(_box_row("(no items)" if topic else "", width, "class:text.dim"))
    for idx, item in enumerate(items):
        style = "class:text"
        if idx == state.selected_item_index:
            style = _selection_style(controller, Block.ITEM_LIST)
        parts.extend(_box_row(_table_line(_item_cells(item), width - 2), width, style))
    parts.extend(_box_bottom(width))
    return FormattedText(parts)


def _field_style(form: FormController, index: int) -> str:
    current = form.fields[index]
    style = "class:field.ok" if current.is_valid else "class:field.error"
    if index == form.focused_index:
        return f"{style} class:field.focused"
    return style


def render_add_form(controller, width: int) -> FormattedText:
    width = max(20, width)
    form = controller.form
    parts: Fragments = []
    for idx, current in enumerate(form.fields):
        focused = idx == form.focused_index
        border = "class:header" if focused else "class:field.idle"
        parts.extend(_box_top(current.label, width, border))
        cursor = "▏" if focused else ""
        parts.extend(_box_row(current.raw_text + cursor, width, _field_style(form, idx), border))
        parts.extend(_box_bottom(width, border))
        parts.append(("", "\n"))
    return FormattedText(parts)


def render_add_help(controller, width: int) -> FormattedText:
    width = max(20, width)
    ready = controller.form.all_valid
    lines = ADD_READY_LINES if ready else ADD_HELP_LINES
    style = "class:field.ok" if ready else "class:field.error"
    parts: Fragments = []
    parts.extend(_box_top("Instructions", width, style))
    for line in lines:
        parts.extend(_box_row(center_display(line, width - 2), width, style, style))
    parts.extend(_box_bottom(width, style))
    return FormattedText(parts)


def render_update_dialog(controller, width: int) -> FormattedText:
    width = max(30, min(width, 72))
    item: Optional[Item] = controller.state.working_item
    parts: Fragments = []
    parts.extend(_box_top("Update progress", width, "class:dialog.title"))
    if item is None:
        parts.extend(_box_bottom(width, "class:dialog"))
        return FormattedText(parts)
    rows = [
        ("", "class:dialog"),
        (f"{item.topic} / {item.name}", "class:dialog.title"),
        ("", "class:dialog"),
        (item.progress_bar(max(10, width - 14)) + f" {item.percentage:>3}%", "class:dialog"),
        (f"Completed {item.times_finished} time(s)" + ("  [recurring]" if item.is_recurring else ""), "class:dialog"),
        ("", "class:dialog"),
        (FOOTER_HINTS["update_progress"], "class:text.dim"),
    ]
    for text, style in rows:
        parts.extend(_box_row(center_display(text, width - 2), width, style, "class:dialog"))
    parts.extend(_box_bottom(width, "class:dialog"))
    return FormattedText(parts)


def render_confirm_dialog(controller, width: int) -> FormattedText:
    width = max(30, min(width, 72))
    target = controller.state.delete_target
    parts: Fragments = []
    parts.extend(_box_top("Confirm delete", width, "class:dialog.title"))
    if target is not None:
        if target.is_topic:
            what = f"Delete topic '{target.topic}' and all of its items?"
        else:
            what = f"Delete item '{target.label}' from '{target.topic}'?"
        for text, style in (
            ("", "class:dialog"),
            (what, "class:dialog.title"),
            ("This cannot be undone.", "class:dialog"),
            ("", "class:dialog"),
            (FOOTER_HINTS["confirm_delete"], "class:text.dim"),
        ):
            parts.extend(_box_row(center_display(text, width - 2), width, style, "class:dialog"))
    parts.extend(_box_bottom(width, "class:dialog"))
    return FormattedText(parts)


def footer_hint_key(controller) -> str:
    state = controller.state
    if state.active_modal is Modal.UPDATE_PROGRESS:
        return "update_progress"
    if state.active_modal is Modal.CONFIRM_DELETE:
        return "confirm_delete"
    if state.active_tab is Tab.ADD:
        return "add"
    if state.active_tab is Tab.TOPICS:
        return state.active_block.value
    return "home"


def build_footer_text(controller) -> FormattedText:
    message, level = controller.status_text()
    if message:
        style = "class:status.error" if level == "error" else "class:status.ok"
        return FormattedText([(style, f" {message}")])
    return FormattedText([("class:text.dimmer", f" {FOOTER_HINTS[footer_hint_key(controller)]}")])


__all__ = [
    "build_tab_bar",
    "render_home",
    "render_topic_list",
    "render_item_table",
    "render_add_form",
    "render_add_help",
    "render_update_dialog",
    "render_confirm_dialog",
    "footer_hint_key",
    "build_footer_text",
]
