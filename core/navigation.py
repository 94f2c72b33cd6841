"""Interaction state machine for the tracker TUI.

`transition(state, event, view)` is pure: it returns the next state plus a tuple
of effects (gateway calls, form input, quit) for the application layer to run.
Every (modal, tab, block) combination has an entry in `HANDLERS`.
"""

from dataclasses import dataclass, replace
from enum import Enum
from itertools import product
from typing import Callable, Dict, Optional, Tuple, Union

from .models import Item, Topic
from .progress import ProgressCommand, apply_command


class Tab(Enum):
    HOME = "home"
    TOPICS = "topics"
    ADD = "add"


class Block(Enum):
    TOPIC_LIST = "topic_list"
    ITEM_LIST = "item_list"


class Modal(Enum):
    NONE = "none"
    UPDATE_PROGRESS = "update_progress"
    CONFIRM_DELETE = "confirm_delete"


class Key(Enum):
    QUIT = "quit"
    TAB_HOME = "tab_home"
    TAB_TOPICS = "tab_topics"
    TAB_ADD = "tab_add"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    DELETE = "delete"
    BACKSPACE = "backspace"
    CHAR = "char"


TAB_KEYS: Dict[Key, Tab] = {
    Key.TAB_HOME: Tab.HOME,
    Key.TAB_TOPICS: Tab.TOPICS,
    Key.TAB_ADD: Tab.ADD,
}

PROGRESS_KEYS: Dict[Key, ProgressCommand] = {
    Key.LEFT: ProgressCommand.DECREASE,
    Key.RIGHT: ProgressCommand.INCREASE,
    Key.TAB: ProgressCommand.FINISH_ONCE,
}


@dataclass(frozen=True)
class InputEvent:
    key: Key
    char: str = ""


@dataclass(frozen=True)
class DeleteTarget:
    """What a pending delete confirmation refers to: a whole topic or one item."""

    topic: str
    item: Optional[Item] = None

    @property
    def is_topic(self) -> bool:
        return self.item is None

    @property
    def label(self) -> str:
        if self.item is None:
            return self.topic
        return self.item.name


@dataclass(frozen=True)
class InteractionState:
    active_tab: Tab = Tab.HOME
    active_block: Block = Block.TOPIC_LIST
    active_modal: Modal = Modal.NONE
    focused_field_index: int = 0
    selected_topic_index: Optional[int] = None
    selected_item_index: Optional[int] = None
    working_item: Optional[Item] = None
    delete_target: Optional[DeleteTarget] = None


@dataclass(frozen=True)
class ListView:
    """Snapshot of storage: every topic plus the items of the selected topic."""

    topics: Tuple[Topic, ...] = ()
    items: Tuple[Item, ...] = ()

    def topic_at(self, index: Optional[int]) -> Optional[Topic]:
        if index is None or not 0 <= index < len(self.topics):
            return None
        return self.topics[index]

    def item_at(self, index: Optional[int]) -> Optional[Item]:
        if index is None or not 0 <= index < len(self.items):
            return None
        return self.items[index]


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class CommitProgress:
    item: Item


@dataclass(frozen=True)
class DeleteItem:
    item: Item


@dataclass(frozen=True)
class DeleteTopic:
    name: str


@dataclass(frozen=True)
class FormKey:
    event: InputEvent


Effect = Union[Quit, CommitProgress, DeleteItem, DeleteTopic, FormKey]


@dataclass(frozen=True)
class Transition:
    state: InteractionState
    effects: Tuple[Effect, ...] = ()


Handler = Callable[[InteractionState, InputEvent, ListView], Transition]

INITIAL_STATE = InteractionState()


def _cycle(index: Optional[int], delta: int, total: int) -> int:
    if index is None:
        return 0 if delta > 0 else total - 1
    return (index + delta) % total


def _switch_tab(state: InteractionState, event: InputEvent) -> Optional[Transition]:
    tab = TAB_KEYS.get(event.key)
    if tab is None:
        return None
    return Transition(replace(state, active_tab=tab))


def _home(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    return _switch_tab(state, event) or Transition(state)


def _topic_list(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    switched = _switch_tab(state, event)
    if switched:
        return switched
    key = event.key
    total = len(view.topics)
    if key in (Key.UP, Key.DOWN):
        if not total:
            return Transition(state)
        delta = -1 if key is Key.UP else 1
        return Transition(
            replace(
                state,
                selected_topic_index=_cycle(state.selected_topic_index, delta, total),
                selected_item_index=None,
            )
        )
    topic = view.topic_at(state.selected_topic_index)
    if key is Key.RIGHT:
        if topic is None or not view.items:
            return Transition(state)
        return Transition(replace(state, active_block=Block.ITEM_LIST, selected_item_index=0))
    if key is Key.DELETE:
        if topic is None:
            return Transition(state)
        return Transition(
            replace(state, active_modal=Modal.CONFIRM_DELETE, delete_target=DeleteTarget(topic=topic.name))
        )
    return Transition(state)


def _item_list(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    switched = _switch_tab(state, event)
    if switched:
        return switched
    key = event.key
    total = len(view.items)
    if key in (Key.UP, Key.DOWN):
        if not total:
            return Transition(state)
        delta = -1 if key is Key.UP else 1
        return Transition(replace(state, selected_item_index=_cycle(state.selected_item_index, delta, total)))
    if key is Key.LEFT:
        return Transition(replace(state, active_block=Block.TOPIC_LIST, selected_item_index=None))
    item = view.item_at(state.selected_item_index)
    if item is None:
        return Transition(state)
    if key is Key.ENTER:
        return Transition(replace(state, active_modal=Modal.UPDATE_PROGRESS, working_item=item))
    if key is Key.DELETE:
        return Transition(
            replace(
                state,
                active_modal=Modal.CONFIRM_DELETE,
                delete_target=DeleteTarget(topic=item.topic, item=item),
            )
        )
    return Transition(state)


def _add_form(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    switched = _switch_tab(state, event)
    if switched:
        return switched
    if event.key is Key.DELETE:
        return Transition(state)
    return Transition(state, (FormKey(event),))


def _update_progress(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    closed = replace(state, active_modal=Modal.NONE, working_item=None)
    working = state.working_item
    if working is None:
        return Transition(closed)
    command = PROGRESS_KEYS.get(event.key)
    if command is not None:
        return Transition(replace(state, working_item=apply_command(working, command)))
    if event.key is Key.ENTER:
        return Transition(closed, (CommitProgress(working),))
    if event.key is Key.ESC:
        return Transition(closed)
    return Transition(state)


def _confirm_delete(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    closed = replace(state, active_modal=Modal.NONE, delete_target=None)
    target = state.delete_target
    if target is None:
        return Transition(closed)
    if event.key is Key.ENTER:
        effect = DeleteTopic(target.topic) if target.item is None else DeleteItem(target.item)
        return Transition(closed, (effect,))
    if event.key is Key.ESC:
        return Transition(closed)
    return Transition(state)


def _build_handlers() -> Dict[Tuple[Modal, Tab, Block], Handler]:
    table: Dict[Tuple[Modal, Tab, Block], Handler] = {}
    for tab, block in product(Tab, Block):
        table[(Modal.UPDATE_PROGRESS, tab, block)] = _update_progress
        table[(Modal.CONFIRM_DELETE, tab, block)] = _confirm_delete
    for block in Block:
        table[(Modal.NONE, Tab.HOME, block)] = _home
        table[(Modal.NONE, Tab.ADD, block)] = _add_form
    table[(Modal.NONE, Tab.TOPICS, Block.TOPIC_LIST)] = _topic_list
    table[(Modal.NONE, Tab.TOPICS, Block.ITEM_LIST)] = _item_list
    return table


HANDLERS: Dict[Tuple[Modal, Tab, Block], Handler] = _build_handlers()


def transition(state: InteractionState, event: InputEvent, view: ListView) -> Transition:
    if event.key is Key.QUIT:
        return Transition(state, (Quit(),))
    handler = HANDLERS[(state.active_modal, state.active_tab, state.active_block)]
    return handler(state, event, view)


def clamp_index(index: Optional[int], total: int) -> Optional[int]:
    if total <= 0:
        return None
    if index is None:
        return 0
    return max(0, min(index, total - 1))


def reconcile(state: InteractionState, view: ListView) -> InteractionState:
    """Keep selection indices inside the current lists (None for an empty list)."""
    topic_index = clamp_index(state.selected_topic_index, len(view.topics))
    block = state.active_block
    item_index = state.selected_item_index
    if topic_index is None or not view.items:
        item_index = None
        block = Block.TOPIC_LIST
    elif item_index is not None or block is Block.ITEM_LIST:
        item_index = clamp_index(item_index, len(view.items))
    if (topic_index, item_index, block) == (
        state.selected_topic_index,
        state.selected_item_index,
        state.active_block,
    ):
        return state
    return replace(state, selected_topic_index=topic_index, selected_item_index=item_index, active_block=block)


__all__ = [
    "Tab",
    "Block",
    "Modal",
    "Key",
    "InputEvent",
    "DeleteTarget",
    "InteractionState",
    "ListView",
    "Quit",
    "CommitProgress",
    "DeleteItem",
    "DeleteTopic",
    "FormKey",
    "Effect",
    "Transition",
    "HANDLERS",
    "INITIAL_STATE",
    "transition",
    "reconcile",
    "clamp_index",
]
