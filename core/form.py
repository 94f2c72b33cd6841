"""Add-form controller: field focus, per-field validation and gated submission."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .errors import StorageError
from .validation import FieldKind, parse_confirmation, validate

FIELD_LAYOUT: Tuple[Tuple[str, FieldKind], ...] = (
    ("Topic Name", FieldKind.FREE_TEXT),
    ("Item Name", FieldKind.FREE_TEXT),
    ("Is Recurring? (Yes OR No)", FieldKind.CONFIRMATION),
    ("% Completed [0, 100]", FieldKind.PERCENTAGE),
    ("# Completed [0, ...]", FieldKind.UNSIGNED_INTEGER),
    ("Day Limit [0, ...]", FieldKind.UNSIGNED_INTEGER),
)

RECURRING_FIELD = 2
PERCENTAGE_FIELD = 3
FINISHED_FIELD = 4


@dataclass
class FormField:
    label: str
    kind: FieldKind
    raw_text: str = ""
    is_valid: bool = False

    def set_text(self, text: str) -> None:
        self.raw_text = text
        self.is_valid = validate(self.kind, text)

    def clear(self) -> None:
        self.set_text("")

    @property
    def value(self) -> str:
        return self.raw_text.strip()


@dataclass(frozen=True)
class FormValues:
    topic: str
    name: str
    is_recurring: bool
    percentage: int
    times_finished: int
    day_limit: int


class SubmitResult(Enum):
    IGNORED = "ignored"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmitOutcome:
    result: SubmitResult
    error: Optional[StorageError] = None

    @property
    def ok(self) -> bool:
        return self.result is SubmitResult.SUBMITTED


IGNORED = SubmitOutcome(SubmitResult.IGNORED)

CreateFn = Callable[[FormValues], object]


def _default_fields() -> List[FormField]:
    return [FormField(label, kind) for label, kind in FIELD_LAYOUT]


@dataclass
class FormController:
    """Ordered set of fields for creating a topic/item pair.

    The aggregate `all_valid` flag is recomputed from the fields on every
    access, so submission always sees the current validity of each field.
    """

    fields: List[FormField] = field(default_factory=_default_fields)
    focused_index: int = 0

    @property
    def focused(self) -> FormField:
        return self.fields[self.focused_index]

    @property
    def on_last_field(self) -> bool:
        return self.focused_index == len(self.fields) - 1

    @property
    def all_valid(self) -> bool:
        return all(f.is_valid for f in self.fields)

    def focus_next(self) -> None:
        self.focused_index = min(self.focused_index + 1, len(self.fields) - 1)

    def focus_previous(self) -> None:
        self.focused_index = max(self.focused_index - 1, 0)

    def on_character_input(self, ch: str) -> None:
        if not ch or not ch.isprintable():
            return
        current = self.focused
        current.set_text(current.raw_text + ch)
        self._check_one_shot_count()

    def on_backspace(self) -> None:
        current = self.focused
        if current.raw_text:
            current.set_text(current.raw_text[:-1])
            self._check_one_shot_count()

    def _check_one_shot_count(self) -> None:
        """A one-shot item is finished once exactly when it sits at 100%."""
        recurring = self.fields[RECURRING_FIELD]
        percentage = self.fields[PERCENTAGE_FIELD]
        finished = self.fields[FINISHED_FIELD]
        finished.is_valid = validate(finished.kind, finished.raw_text)
        if not (finished.is_valid and recurring.is_valid and percentage.is_valid):
            return
        if parse_confirmation(recurring.raw_text):
            return
        expected = 1 if int(percentage.value) == 100 else 0
        finished.is_valid = int(finished.value) == expected

    def values(self) -> FormValues:
        if not self.all_valid:
            raise ValueError("form has invalid fields")
        topic, name, recurring, percentage, finished, day_limit = (f.value for f in self.fields)
        return FormValues(
            topic=topic,
            name=name,
            is_recurring=parse_confirmation(recurring),
            percentage=int(percentage),
            times_finished=int(finished),
            day_limit=int(day_limit),
        )

    def reset(self) -> None:
        for f in self.fields:
            f.clear()
        self.focused_index = 0
        self._check_one_shot_count()

    def try_submit(self, create: CreateFn) -> SubmitOutcome:
        """Hand the values to `create` when the last field is focused and all fields are valid.

        Anything else is a silent no-op. A StorageError from `create` leaves
        the typed values in place so the user can retry.
        """
        if not self.on_last_field or not self.all_valid:
            return IGNORED
        try:
            create(self.values())
        except StorageError as exc:
            return SubmitOutcome(SubmitResult.FAILED, exc)
        self.reset()
        return SubmitOutcome(SubmitResult.SUBMITTED)

    def advance(self, create: CreateFn) -> SubmitOutcome:
        """Enter key: move to the next field, or submit from the last one."""
        if not self.on_last_field:
            self.focus_next()
            return IGNORED
        return self.try_submit(create)


__all__ = [
    "FIELD_LAYOUT",
    "FormField",
    "FormValues",
    "FormController",
    "SubmitResult",
    "SubmitOutcome",
]
