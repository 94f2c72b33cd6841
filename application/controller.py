"""Interaction controller: runs state machine effects against the persistence gateway."""

import logging
import time
from dataclasses import replace
from typing import Callable, Dict, Optional, Tuple, TypeVar

from core import Item, StorageError, Topic
from core.form import FormController, SubmitResult
from core.navigation import (
    INITIAL_STATE,
    CommitProgress,
    DeleteItem,
    DeleteTopic,
    Effect,
    FormKey,
    InputEvent,
    InteractionState,
    Key,
    ListView,
    Modal,
    Quit,
    clamp_index,
    reconcile,
    transition,
)

from .ports import ProgressRepository

logger = logging.getLogger("fitdb.controller")

T = TypeVar("T")

STATUS_INFO = "info"
STATUS_ERROR = "error"


class InteractionController:
    """Owns the interaction state, the Add form and the current list snapshot.

    Reads that fail degrade to empty lists. Writes that fail are reported in the
    status line and the pending change is kept: the modal is re-opened with the
    same working copy / target, and the form keeps its typed values.
    """

    def __init__(self, repository: ProgressRepository, form: Optional[FormController] = None):
        self.repository = repository
        self.form = form or FormController()
        self.state: InteractionState = INITIAL_STATE
        self.view = ListView()
        self.topic_counts: Dict[str, int] = {}
        self.running = True
        self.status_message: str = ""
        self.status_level: str = STATUS_INFO
        self.status_message_expires: float = 0.0
        self.refresh_view()

    # ------------------------------------------------------------------ reads
    def _read(self, label: str, func: Callable[..., T], *args, default: T) -> T:
        try:
            return func(*args)
        except StorageError as exc:
            logger.warning("%s failed, treating as empty: %s", label, exc)
            return default

    def refresh_view(self) -> None:
        topics: Tuple[Topic, ...] = tuple(self._read("list_topics", self.repository.list_topics, default=[]))
        self.topic_counts = {
            t.name: self._read("count_items", self.repository.count_items, t.name, default=0) for t in topics
        }
        index = clamp_index(self.state.selected_topic_index, len(topics))
        items: Tuple[Item, ...] = ()
        if index is not None:
            items = tuple(self._read("list_items", self.repository.list_items, topics[index].name, default=[]))
        self.view = ListView(topics=topics, items=items)
        self.state = reconcile(self.state, self.view)

    @property
    def selected_topic(self) -> Optional[Topic]:
        return self.view.topic_at(self.state.selected_topic_index)

    @property
    def selected_item(self) -> Optional[Item]:
        return self.view.item_at(self.state.selected_item_index)

    # ----------------------------------------------------------------- status
    def set_status_message(self, message: str, ttl: float = 4.0, level: str = STATUS_INFO) -> None:
        self.status_message = message
        self.status_level = level
        self.status_message_expires = time.time() + ttl

    def status_text(self, now: Optional[float] = None) -> Tuple[str, str]:
        ts = now if now is not None else time.time()
        if not self.status_message or ts > self.status_message_expires:
            return "", STATUS_INFO
        return self.status_message, self.status_level

    def _report_failure(self, action: str, exc: StorageError) -> None:
        logger.error("%s failed: %s", action, exc)
        self.set_status_message(f"{action} failed: {exc}", ttl=6, level=STATUS_ERROR)

    # --------------------------------------------------------------- dispatch
    def dispatch(self, event: InputEvent) -> bool:
        """Feed one input event through the state machine; False means quit."""
        before = self.state
        result = transition(self.state, event, self.view)
        self.state = result.state
        for effect in result.effects:
            if isinstance(effect, Quit):
                self.running = False
                return False
            self._run_effect(effect, before)
        self.state = replace(self.state, focused_field_index=self.form.focused_index)
        self.refresh_view()
        return True

    def _run_effect(self, effect: Effect, before: InteractionState) -> None:
        if isinstance(effect, CommitProgress):
            self._commit_progress(effect.item)
        elif isinstance(effect, DeleteItem):
            self._delete(before, f"Delete item '{effect.item.name}'", self.repository.delete_item, effect.item.id)
        elif isinstance(effect, DeleteTopic):
            self._delete(before, f"Delete topic '{effect.name}'", self.repository.delete_topic, effect.name)
        elif isinstance(effect, FormKey):
            self._form_key(effect.event)
        else:  # pragma: no cover - Effect union is closed
            raise TypeError(f"Unhandled effect: {effect!r}")

    def _commit_progress(self, item: Item) -> None:
        try:
            self.repository.update_item_progress(item.id, item.percentage, item.times_finished)
        except StorageError as exc:
            self._report_failure(f"Update '{item.name}'", exc)
            self.state = replace(self.state, active_modal=Modal.UPDATE_PROGRESS, working_item=item)
            return
        logger.info("item %s progress -> %s%% x%s", item.id, item.percentage, item.times_finished)
        self.set_status_message(f"Saved '{item.name}': {item.percentage}% (x{item.times_finished})")

    def _delete(self, before: InteractionState, action: str, func: Callable[..., None], key) -> None:
        try:
            func(key)
        except StorageError as exc:
            self._report_failure(action, exc)
            self.state = replace(self.state, active_modal=Modal.CONFIRM_DELETE, delete_target=before.delete_target)
            return
        logger.info("%s done", action)
        self.set_status_message(f"{action}: done")

    def _form_key(self, event: InputEvent) -> None:
        form = self.form
        key = event.key
        if key is Key.CHAR:
            form.on_character_input(event.char)
        elif key is Key.BACKSPACE:
            form.on_backspace()
        elif key in (Key.ESC, Key.UP):
            form.focus_previous()
        elif key is Key.DOWN:
            form.focus_next()
        elif key is Key.ENTER:
            outcome = form.advance(self.repository.create_topic_and_item)
            if outcome.result is SubmitResult.SUBMITTED:
                logger.info("item created")
                self.set_status_message("Item added. Switch to Topics to see it.")
            elif outcome.result is SubmitResult.FAILED and outcome.error is not None:
                self._report_failure("Add item", outcome.error)


__all__ = ["InteractionController", "STATUS_INFO", "STATUS_ERROR"]
