"""Progress engine: percentage/completion-count updates for a single item.

Percentage and completion count are coupled state, so every operation returns a
new Item with both fields updated together. Nothing here touches storage; the
caller works on a copy and commits it explicitly.
"""

from dataclasses import replace
from enum import Enum

from .models import Item

MAX_PERCENTAGE = 100


class ProgressCommand(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    FINISH_ONCE = "finish_once"


def _clamp(value: int) -> int:
    return max(0, min(MAX_PERCENTAGE, value))


def _one_shot(item: Item, percentage: int) -> Item:
    # One-shot items are finished exactly when they sit at 100%.
    percentage = _clamp(percentage)
    return replace(item, percentage=percentage, times_finished=1 if percentage == MAX_PERCENTAGE else 0)


def increase(item: Item) -> Item:
    current = _clamp(item.percentage)
    if not item.is_recurring:
        if current + 1 < MAX_PERCENTAGE:
            return _one_shot(item, current + 1)
        return _one_shot(item, MAX_PERCENTAGE)
    if current + 1 <= MAX_PERCENTAGE:
        return replace(item, percentage=current + 1)
    # Completing a cycle starts the next one at 1%, never parking at 0%.
    return replace(item, percentage=1, times_finished=item.times_finished + 1)


def decrease(item: Item) -> Item:
    current = _clamp(item.percentage)
    if not item.is_recurring:
        return _one_shot(item, max(current - 1, 0))
    if item.times_finished <= 0:
        return replace(item, percentage=max(current - 1, 0), times_finished=0)
    if current > 0:
        return replace(item, percentage=current - 1)
    # Below an empty cycle: roll back into the previous one at full percentage.
    return replace(item, percentage=MAX_PERCENTAGE, times_finished=item.times_finished - 1)


def finish_once(item: Item) -> Item:
    if not item.is_recurring:
        return _one_shot(item, MAX_PERCENTAGE)
    return replace(item, percentage=0, times_finished=item.times_finished + 1)


_COMMANDS = {
    ProgressCommand.INCREASE: increase,
    ProgressCommand.DECREASE: decrease,
    ProgressCommand.FINISH_ONCE: finish_once,
}


def apply_command(item: Item, command: ProgressCommand) -> Item:
    return _COMMANDS[command](item)


__all__ = ["ProgressCommand", "increase", "decrease", "finish_once", "apply_command", "MAX_PERCENTAGE"]
