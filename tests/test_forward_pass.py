"""Tests for the CPM forward pass."""

from datetime import date, timedelta

import pytest

from cascade.engine import compute_schedule, effective_duration
from cascade.models import Task
from tests.conftest import DAY, preds


def _dates(tasks: list[Task], reference_date: date = DAY) -> dict[str, tuple[date, date]]:
    computation = compute_schedule(tasks, reference_date)
    return {
        task_id: (computation.early_start[task_id], computation.early_finish[task_id])
        for task_id in computation.order
    }


def _days(n: int) -> date:
    return DAY + timedelta(days=n)


class TestDependencyTypes:
    """Required start per edge type."""

    def test_finish_to_start(self) -> None:
        tasks = [
            Task(id="p", duration=3),
            Task(id="s", duration=2, predecessors=preds("p")),
        ]
        dates = _dates(tasks)
        assert dates["p"] == (DAY, _days(3))
        # Successor starts the day after the predecessor finishes
        assert dates["s"] == (_days(4), _days(6))

    def test_start_to_start(self) -> None:
        tasks = [
            Task(id="p", duration=5),
            Task(id="s", duration=2, predecessors=preds("p:SS + 2d")),
        ]
        assert _dates(tasks)["s"] == (_days(2), _days(4))

    def test_finish_to_finish(self) -> None:
        tasks = [
            Task(id="p", duration=5),
            Task(id="s", duration=2, predecessors=preds("p:FF")),
        ]
        dates = _dates(tasks)
        assert dates["s"] == (_days(3), _days(5))
        assert dates["s"][1] == dates["p"][1]

    def test_start_to_finish(self) -> None:
        tasks = [
            Task(id="p", duration=5),
            Task(id="s", duration=2, predecessors=preds("p:SF")),
        ]
        # May start before the reference date: only roots anchor to it
        assert _dates(tasks)["s"] == (_days(-2), DAY)

    def test_unknown_type_contributes_nothing(self) -> None:
        tasks = [
            Task(id="p", duration=5),
            Task(id="s", duration=1, predecessors=preds("p:XY")),
        ]
        assert _dates(tasks)["s"] == (DAY, _days(1))


class TestLag:
    """Lag shifts the required start."""

    @pytest.mark.parametrize("dep_type", ["FS", "SS", "FF", "SF"])
    @pytest.mark.parametrize("lag", [1, 4, -2])
    def test_lag_shifts_start_by_exactly_n_days(self, dep_type: str, lag: int) -> None:
        def successor_start(edge_lag: int) -> date:
            sign = "+" if edge_lag >= 0 else "-"
            tasks = [
                Task(id="p", duration=10),
                Task(
                    id="s",
                    duration=3,
                    predecessors=preds(f"p:{dep_type} {sign} {abs(edge_lag)}d"),
                ),
            ]
            return _dates(tasks)["s"][0]

        assert successor_start(lag) - successor_start(0) == timedelta(days=lag)

    def test_lead_time_overlaps_predecessor(self) -> None:
        tasks = [
            Task(id="p", duration=3),
            Task(id="s", duration=1, predecessors=preds("p - 2d")),
        ]
        assert _dates(tasks)["s"][0] == _days(2)


class TestMultiplePredecessors:
    """The latest requirement wins."""

    def test_max_of_predecessors(self) -> None:
        tasks = [
            Task(id="short", duration=2),
            Task(id="long", duration=5),
            Task(id="join", duration=1, predecessors=preds("short", "long")),
        ]
        assert _dates(tasks)["join"] == (_days(6), _days(7))

    def test_lag_can_make_shorter_predecessor_win(self) -> None:
        tasks = [
            Task(id="short", duration=2),
            Task(id="long", duration=5),
            Task(id="join", duration=1, predecessors=preds("short + 10d", "long")),
        ]
        assert _dates(tasks)["join"][0] == _days(13)

    def test_chain_propagates(self) -> None:
        tasks = [
            Task(id="a", duration=1),
            Task(id="b", duration=1, predecessors=preds("a")),
            Task(id="c", duration=1, predecessors=preds("b")),
        ]
        dates = _dates(tasks)
        assert dates["b"] == (_days(2), _days(3))
        assert dates["c"] == (_days(4), _days(5))


class TestConstraints:
    """Task constraints applied after predecessor propagation."""

    def test_must_start_on_overrides_predecessors(self) -> None:
        tasks = [
            Task(id="p", duration=10),
            Task(
                id="s",
                duration=2,
                constraint_type="MUST_START_ON",
                constraint_date=_days(1),
                predecessors=preds("p"),
            ),
        ]
        assert _dates(tasks)["s"] == (_days(1), _days(3))

    def test_must_start_on_root(self) -> None:
        tasks = [
            Task(id="a", duration=1, constraint_type="MUST_START_ON", constraint_date=_days(30))
        ]
        assert _dates(tasks)["a"][0] == _days(30)

    def test_start_no_earlier_than_ignored_when_predecessor_is_later(self) -> None:
        tasks = [
            Task(id="p", duration=10),
            Task(
                id="s",
                duration=1,
                constraint_type="START_NO_EARLIER_THAN",
                constraint_date=_days(5),
                predecessors=preds("p"),
            ),
        ]
        assert _dates(tasks)["s"][0] == _days(11)

    def test_start_no_earlier_than_wins_when_later(self) -> None:
        tasks = [
            Task(id="p", duration=2),
            Task(
                id="s",
                duration=1,
                constraint_type="START_NO_EARLIER_THAN",
                constraint_date=_days(20),
                predecessors=preds("p"),
            ),
        ]
        assert _dates(tasks)["s"][0] == _days(20)

    def test_start_no_earlier_than_on_root_uses_constraint(self) -> None:
        earlier = _days(-10)
        tasks = [
            Task(
                id="a", duration=1, constraint_type="START_NO_EARLIER_THAN", constraint_date=earlier
            )
        ]
        assert _dates(tasks)["a"][0] == earlier

    def test_constraint_without_date_is_ignored(self) -> None:
        tasks = [Task(id="a", duration=1, constraint_type="MUST_START_ON")]
        assert _dates(tasks)["a"][0] == DAY

    def test_uninterpreted_constraint_is_ignored(self) -> None:
        tasks = [
            Task(
                id="a",
                duration=1,
                constraint_type="FINISH_NO_LATER_THAN",
                constraint_date=_days(-30),
            )
        ]
        assert _dates(tasks)["a"] == (DAY, _days(1))


class TestDurations:
    """Effective duration and root anchoring."""

    @pytest.mark.parametrize(
        ("duration", "is_milestone", "expected"),
        [(0, False, 1), (3, False, 3), (0, True, 0), (2, True, 2)],
    )
    def test_effective_duration(self, duration: int, is_milestone: bool, expected: int) -> None:
        assert effective_duration(duration, is_milestone) == expected

    def test_root_task_starts_on_reference_date(self) -> None:
        other_day = date(2024, 7, 1)
        assert _dates([Task(id="a", duration=3)], other_day)["a"] == (
            other_day,
            date(2024, 7, 4),
        )

    def test_zero_duration_task_spans_one_day(self) -> None:
        assert _dates([Task(id="a", duration=0)])["a"] == (DAY, _days(1))

    def test_milestone_start_equals_end(self) -> None:
        tasks = [
            Task(id="work", duration=4),
            Task(id="done", is_milestone=True, predecessors=preds("work")),
        ]
        start, end = _dates(tasks)["done"]
        assert start == end == _days(5)

    def test_finish_to_finish_uses_successor_effective_duration(self) -> None:
        tasks = [
            Task(id="p", duration=5),
            Task(id="m", is_milestone=True, predecessors=preds("p:FF")),
        ]
        assert _dates(tasks)["m"] == (_days(5), _days(5))
