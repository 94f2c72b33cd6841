"""Key chord table: every terminal key press becomes one InputEvent."""

from typing import Callable, Sequence, Tuple

from prompt_toolkit.filters import Filter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

from core.navigation import InputEvent, Key

Chord = Tuple[str, ...]

KEY_CHORDS: Sequence[Tuple[Key, Tuple[Chord, ...]]] = (
    (Key.QUIT, (("c-c",), ("c-q",))),
    (Key.TAB_HOME, (("escape", "h"), ("f1",))),
    (Key.TAB_TOPICS, (("escape", "e"), ("f2",))),
    (Key.TAB_ADD, (("escape", "a"), ("f3",))),
    (Key.DELETE, (("escape", "d"), ("delete",))),
    (Key.UP, (("up",),)),
    (Key.DOWN, (("down",),)),
    (Key.LEFT, (("left",),)),
    (Key.RIGHT, (("right",),)),
    (Key.ENTER, (("enter",),)),
    (Key.ESC, (("escape",),)),
    (Key.TAB, (("tab",),)),
    (Key.BACKSPACE, (("backspace",),)),
)


def build_key_bindings(dispatch: Callable[[InputEvent], None], text_input_active: Filter) -> KeyBindings:
    """Bind every chord in KEY_CHORDS to `dispatch`.

    Printable characters are only captured while `text_input_active` holds (the
    Add form); anywhere else they are ignored.
    """
    kb = KeyBindings()

    def _emit(key: Key):
        def handler(event) -> None:
            dispatch(InputEvent(key))

        return handler

    for key, chords in KEY_CHORDS:
        handler = _emit(key)
        for chord in chords:
            kb.add(*chord)(handler)

    @kb.add(Keys.Any, filter=text_input_active)
    def _(event):
        data = event.data or ""
        if len(data) == 1 and data.isprintable():
            dispatch(InputEvent(Key.CHAR, data))

    return kb


__all__ = ["KEY_CHORDS", "build_key_bindings"]
