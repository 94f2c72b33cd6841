from typing import Protocol, List

from core import Item, Topic
from core.errors import StartupError, StorageError
from core.form import FormValues


class ProgressRepository(Protocol):
    """Persistence gateway used by the interaction controller.

    Every method raises StorageError on failure.
    """

    def list_topics(self) -> List[Topic]:
        ...

    def count_items(self, topic: str) -> int:
        ...

    def list_items(self, topic: str) -> List[Item]:
        ...

    def create_topic_and_item(self, values: FormValues) -> int:
        ...

    def update_item_progress(self, item_id: int, percentage: int, times_finished: int) -> None:
        ...

    def delete_item(self, item_id: int) -> None:
        ...

    def delete_topic(self, name: str) -> None:
        ...


__all__ = ["ProgressRepository", "StorageError", "StartupError"]
