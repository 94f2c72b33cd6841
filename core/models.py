"""Topic/Item records shared by every layer."""

from dataclasses import dataclass

PROGRESS_DOT_DONE = "●"
PROGRESS_DOT_TODO = "○"


@dataclass(frozen=True)
class Topic:
    name: str
    created: str = ""


@dataclass(frozen=True)
class Item:
    """Trackable unit of work inside a topic.

    `percentage` stays within [0, 100]; `times_finished` counts completed cycles
    (0/1 for one-shot items, unbounded for recurring ones).
    """

    id: int
    name: str
    topic: str
    is_recurring: bool = False
    percentage: int = 0
    times_finished: int = 0
    day_limit: int = 0
    created: str = ""

    def progress_bar(self, width: int = 10) -> str:
        width = max(1, width)
        filled = max(0, min(width, (self.percentage * width) // 100))
        return PROGRESS_DOT_DONE * filled + PROGRESS_DOT_TODO * (width - filled)

    def status_label(self) -> str:
        if self.is_recurring:
            return "ACTIVE" if self.percentage or self.times_finished else "TODO"
        if self.times_finished >= 1:
            return "DONE"
        return "ACTIVE" if self.percentage > 0 else "TODO"


__all__ = ["Topic", "Item", "PROGRESS_DOT_DONE", "PROGRESS_DOT_TODO"]
