"""Core dataclasses for the schedule engine."""

from dataclasses import dataclass, field
from datetime import date


def _default_str_list() -> list[str]:
    return []


def _default_edges() -> "list[PredecessorEdge]":
    return []


def _default_updates() -> "list[DateUpdate]":
    return []


def effective_duration(duration: int, is_milestone: bool) -> int:
    """Number of days a task spans.

    Every non-milestone task occupies at least one day; milestones may be zero.
    """
    return max(duration, 0 if is_milestone else 1)


@dataclass(frozen=True)
class PredecessorEdge:
    """A predecessor edge with the predecessor's attributes copied in at load time.

    ``predecessor_index`` is None when the predecessor is not part of the run.
    The ``predecessor_*`` attribute copies are not read by the forward pass;
    they are kept for callers inspecting the graph.
    """

    predecessor_id: str
    predecessor_index: int | None
    type: str
    lag: int
    predecessor_duration: int | None = None
    predecessor_constraint_type: str | None = None
    predecessor_constraint_date: date | None = None
    predecessor_is_milestone: bool = False


@dataclass
class TaskNode:
    """A task in the scheduling graph, addressed by its dense index."""

    index: int
    task_id: str
    duration: int
    is_milestone: bool
    constraint_type: str
    constraint_date: date | None
    start_date: date | None  # Stored schedule before this run
    end_date: date | None
    edges: "list[PredecessorEdge]" = field(default_factory=_default_edges)

    @property
    def effective_duration(self) -> int:
        return effective_duration(self.duration, self.is_milestone)


@dataclass(frozen=True)
class DateUpdate:
    """A pending write of computed dates for one task."""

    task_id: str
    start_date: date
    end_date: date
    previous_start: date | None = None
    previous_end: date | None = None


@dataclass
class ScheduleComputation:
    """Outcome of the pure in-memory computation (no I/O)."""

    order: list[str]  # Task IDs in topological order
    early_start: dict[str, date]
    early_finish: dict[str, date]
    updates: list[DateUpdate]
    skipped_task_ids: list[str]


@dataclass
class RecalculationResult:
    """Summary returned by ScheduleEngine.recalculate().

    ``total_count - ordered_count`` is the number of tasks in, or downstream
    of, a cycle (or waiting on a predecessor outside the run).
    """

    updated_count: int
    ordered_count: int
    total_count: int = 0
    skipped_task_ids: list[str] = field(default_factory=_default_str_list)
    updates: "list[DateUpdate]" = field(default_factory=_default_updates)
    warnings: list[str] = field(default_factory=_default_str_list)

    @property
    def skipped_count(self) -> int:
        return self.total_count - self.ordered_count
