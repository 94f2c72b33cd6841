"""Progress engine: invariants over every reachable input plus fixed scenarios."""

import itertools

import pytest

from core import Item, ProgressCommand, apply_command, decrease, finish_once, increase


def _item(percentage=0, times_finished=0, recurring=False) -> Item:
    return Item(id=1, name="Run", topic="Cardio", is_recurring=recurring, percentage=percentage, times_finished=times_finished)


ALL_CASES = list(itertools.product(range(0, 101), range(0, 4), (False, True), list(ProgressCommand)))


def test_percentage_stays_in_range():
    for p, t, recurring, command in ALL_CASES:
        out = apply_command(_item(p, t, recurring), command)
        assert 0 <= out.percentage <= 100, (p, t, recurring, command)
        assert out.times_finished >= 0


def test_one_shot_finished_iff_full():
    for p, t, _, command in ALL_CASES:
        out = apply_command(_item(p, t, False), command)
        assert (out.percentage == 100) == (out.times_finished == 1), (p, t, command)
        if out.percentage < 100:
            assert out.times_finished == 0


def test_operations_return_new_item():
    item = _item(10)
    out = increase(item)
    assert item.percentage == 10
    assert out is not item
    assert (out.id, out.name, out.topic) == (item.id, item.name, item.topic)


class TestScenarios:
    def test_one_shot_increase_reaches_done(self):
        out = increase(_item(99, 0))
        assert (out.percentage, out.times_finished) == (100, 1)

    def test_recurring_increase_wraps_to_next_cycle(self):
        out = increase(_item(100, 2, recurring=True))
        assert (out.percentage, out.times_finished) == (1, 3)

    def test_one_shot_decrease_saturates(self):
        out = decrease(_item(0, 0))
        assert (out.percentage, out.times_finished) == (0, 0)

    def test_recurring_decrease_rolls_back_a_cycle(self):
        out = decrease(_item(0, 1, recurring=True))
        assert (out.percentage, out.times_finished) == (100, 0)


class TestOneShot:
    def test_increase_at_full_stays_full(self):
        out = increase(_item(100, 1))
        assert (out.percentage, out.times_finished) == (100, 1)

    def test_decrease_from_full_clears_finished(self):
        out = decrease(_item(100, 1))
        assert (out.percentage, out.times_finished) == (99, 0)

    def test_finish_once_jumps_to_full(self):
        out = finish_once(_item(12, 0))
        assert (out.percentage, out.times_finished) == (100, 1)

    def test_inconsistent_count_is_rederived(self):
        out = increase(_item(40, 3))
        assert (out.percentage, out.times_finished) == (41, 0)


class TestRecurring:
    def test_increase_below_full(self):
        out = increase(_item(99, 0, recurring=True))
        assert (out.percentage, out.times_finished) == (100, 0)

    def test_decrease_without_history_saturates(self):
        out = decrease(_item(0, 0, recurring=True))
        assert (out.percentage, out.times_finished) == (0, 0)

    def test_decrease_inside_cycle(self):
        out = decrease(_item(30, 2, recurring=True))
        assert (out.percentage, out.times_finished) == (29, 2)

    @pytest.mark.parametrize("p", [0, 37, 100])
    def test_finish_once_counts_and_resets(self, p):
        out = finish_once(_item(p, 4, recurring=True))
        assert (out.percentage, out.times_finished) == (0, 5)

    def test_out_of_range_input_is_clamped(self):
        out = increase(_item(250, 0, recurring=True))
        assert (out.percentage, out.times_finished) == (1, 1)
