"""Data models for Cascade."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

DAYS_PER_WEEK = 7


class DependencyType(str, Enum):
    """Precedence relation between a predecessor and its successor."""

    FS = "FS"  # Finish-to-Start
    SS = "SS"  # Start-to-Start
    FF = "FF"  # Finish-to-Finish
    SF = "SF"  # Start-to-Finish


class ConstraintType(str, Enum):
    """Date constraints interpreted by the engine.

    Stored tasks may carry other constraint strings; those are kept as-is
    and treated as no constraint.
    """

    NONE = "NONE"
    MUST_START_ON = "MUST_START_ON"
    START_NO_EARLIER_THAN = "START_NO_EARLIER_THAN"


class Methodology(str, Enum):
    """Delivery methodology of a project."""

    AGILE = "AGILE"
    WATERFALL = "WATERFALL"
    HYBRID = "HYBRID"


VALID_DEPENDENCY_TYPES = {t.value for t in DependencyType}

_PREDECESSOR_RE = re.compile(
    r"^(?P<id>[^:\s]+)(?::(?P<type>[A-Za-z]+))?"
    r"(?:\s+(?P<sign>[+-])\s*(?P<num>\d+)(?P<unit>[dw])?)?$"
)


@dataclass(frozen=True)
class Predecessor:
    """A dependency edge pointing at the task that must come first.

    The lag is a signed number of days applied on top of the natural date
    relationship of the edge type; a negative lag is lead time.
    """

    task_id: str
    type: str = DependencyType.FS.value
    lag: int = 0

    @classmethod
    def parse(cls, dep_str: str) -> Predecessor:
        """Parse a predecessor string.

        Supported formats:
        - "design" - Finish-to-Start, no lag
        - "design:SS" - Start-to-Start, no lag
        - "design:FS + 2d" - Finish-to-Start with 2 days lag
        - "design:FF - 1d" - Finish-to-Finish with 1 day lead
        - "design + 1w" - Finish-to-Start with 7 days lag
        """
        dep_str = dep_str.strip()
        match = _PREDECESSOR_RE.match(dep_str)
        if not match:
            raise ValueError(f"Invalid predecessor: '{dep_str}'")

        dep_type = (match.group("type") or DependencyType.FS.value).upper()
        lag = 0
        if match.group("num") is not None:
            lag = int(match.group("num"))
            if match.group("unit") == "w":
                lag *= DAYS_PER_WEEK
            if match.group("sign") == "-":
                lag = -lag

        return cls(task_id=match.group("id"), type=dep_type, lag=lag)

    def __str__(self) -> str:
        """Return the string form used in project files."""
        text = self.task_id
        if self.type != DependencyType.FS.value:
            text = f"{text}:{self.type}"
        if self.lag:
            sign = "+" if self.lag > 0 else "-"
            text = f"{text} {sign} {abs(self.lag)}d"
        return text


def _default_predecessors() -> list[Predecessor]:
    return []


@dataclass
class Task:
    """A schedulable unit of work belonging to one project."""

    id: str
    duration: int = 0
    name: str = ""
    is_milestone: bool = False
    constraint_type: str = ConstraintType.NONE.value
    constraint_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    baseline_start_date: date | None = None
    baseline_end_date: date | None = None
    archived: bool = False
    outline_level: int = 1
    position: int = 0
    predecessors: list[Predecessor] = field(default_factory=_default_predecessors)

    @property
    def display_name(self) -> str:
        return self.name or self.id


def _default_tasks() -> list[Task]:
    return []


@dataclass
class Project:
    """A project and the tasks scheduled within it."""

    id: str
    name: str = ""
    methodology: str = Methodology.WATERFALL.value
    tasks: list[Task] = field(default_factory=_default_tasks)

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by its ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def active_tasks(self) -> list[Task]:
        """Non-archived tasks in load order (outline level, then position)."""
        active = [task for task in self.tasks if not task.archived]
        return sorted(active, key=lambda t: (t.outline_level, t.position))
