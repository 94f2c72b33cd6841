"""Add form: focus movement, per-keystroke validation and gated submission."""

from types import SimpleNamespace

import pytest

from core import FormController, FormValues, StorageError, SubmitResult
from core.form import FIELD_LAYOUT


def _type(form: FormController, text: str) -> None:
    for ch in text:
        form.on_character_input(ch)


def _fill(form: FormController, values=("Cardio", "Run 5k", "no", "40", "0", "7")) -> None:
    form.focused_index = 0
    for idx, text in enumerate(values):
        form.focused_index = idx
        _type(form, text)


class _Recorder:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, values: FormValues):
        self.calls.append(values)
        if self.error is not None:
            raise self.error
        return 1


def test_fields_follow_declared_order():
    form = FormController()
    assert [(f.label, f.kind) for f in form.fields] == list(FIELD_LAYOUT)
    assert form.focused_index == 0
    assert not form.all_valid


def test_focus_is_clamped_at_both_ends():
    form = FormController()
    form.focus_previous()
    assert form.focused_index == 0
    for _ in range(20):
        form.focus_next()
    assert form.focused_index == len(form.fields) - 1
    assert form.on_last_field


def test_typing_revalidates_on_every_keystroke():
    form = FormController()
    form.focused_index = 3
    _type(form, "10")
    assert form.focused.is_valid
    _type(form, "1")
    assert form.focused.raw_text == "101"
    assert not form.focused.is_valid
    form.on_backspace()
    assert form.focused.raw_text == "10"
    assert form.focused.is_valid


def test_non_printable_characters_are_ignored():
    form = FormController()
    form.on_character_input("\x1b")
    form.on_character_input("")
    assert form.focused.raw_text == ""


def test_backspace_on_empty_field_is_noop():
    form = FormController()
    form.on_backspace()
    assert form.focused.raw_text == ""
    assert not form.focused.is_valid


def test_enter_moves_focus_before_last_field():
    form = FormController()
    create = _Recorder()
    outcome = form.advance(create)
    assert outcome.result is SubmitResult.IGNORED
    assert form.focused_index == 1
    assert create.calls == []


def test_submit_never_calls_create_with_invalid_field():
    form = FormController()
    _fill(form, ("Cardio", "Run", "maybe", "40", "0", "7"))
    assert form.on_last_field
    create = _Recorder()
    outcome = form.advance(create)
    assert outcome.result is SubmitResult.IGNORED
    assert create.calls == []
    assert form.fields[2].raw_text == "maybe"


def test_submit_only_from_last_field():
    form = FormController()
    _fill(form)
    form.focused_index = 2
    create = _Recorder()
    assert form.try_submit(create).result is SubmitResult.IGNORED
    assert create.calls == []


def test_valid_submission_creates_and_resets():
    form = FormController()
    _fill(form)
    create = _Recorder()
    outcome = form.advance(create)
    assert outcome.ok
    assert create.calls == [
        FormValues(topic="Cardio", name="Run 5k", is_recurring=False, percentage=40, times_finished=0, day_limit=7)
    ]
    assert all(f.raw_text == "" and not f.is_valid for f in form.fields)
    assert form.focused_index == 0


def test_storage_failure_keeps_typed_values():
    form = FormController()
    _fill(form, ("Cardio", "Swim", "YES", "100", "2", "0"))
    create = _Recorder(error=StorageError("disk full"))
    outcome = form.advance(create)
    assert outcome.result is SubmitResult.FAILED
    assert isinstance(outcome.error, StorageError)
    assert [f.raw_text for f in form.fields] == ["Cardio", "Swim", "YES", "100", "2", "0"]
    assert form.on_last_field


def test_values_are_trimmed_and_parsed():
    form = FormController()
    _fill(form, ("  Strength ", " Squats", " y ", " 5", "3 ", "14"))
    values = form.values()
    assert values == FormValues(
        topic="Strength", name="Squats", is_recurring=True, percentage=5, times_finished=3, day_limit=14
    )


def test_create_return_value_is_ignored():
    form = FormController()
    _fill(form)
    outcome = form.try_submit(lambda values: SimpleNamespace(id=99))
    assert outcome.result is SubmitResult.SUBMITTED


@pytest.mark.parametrize(
    "recurring, percentage, finished, ok",
    [
        ("no", "100", "0", False),
        ("no", "40", "3", False),
        ("no", "40", "1", False),
        ("no", "100", "1", True),
        ("no", "0", "0", True),
        ("yes", "100", "0", True),
        ("yes", "40", "3", True),
    ],
)
def test_one_shot_count_must_match_percentage(recurring, percentage, finished, ok):
    form = FormController()
    _fill(form, ("Cardio", "Run", recurring, percentage, finished, "0"))
    assert form.fields[4].is_valid is ok
    create = _Recorder()
    form.advance(create)
    assert len(create.calls) == (1 if ok else 0)


def test_one_shot_count_follows_later_percentage_edits():
    form = FormController()
    _fill(form, ("Cardio", "Run", "no", "100", "1", "0"))
    assert form.all_valid
    form.focused_index = 3
    form.on_backspace()
    assert form.fields[3].raw_text == "10"
    assert not form.fields[4].is_valid
    _type(form, "0")
    assert form.fields[4].is_valid
    form.focused_index = 2
    for _ in range(2):
        form.on_backspace()
    _type(form, "yes")
    form.focused_index = 3
    form.on_backspace()
    assert form.fields[4].is_valid
