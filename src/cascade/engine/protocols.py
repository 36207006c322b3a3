"""Protocol definitions for stores used by the engine and service."""

from datetime import date
from typing import Protocol

from cascade.models import Predecessor, Project, Task


class TaskStore(Protocol):
    """Source of the task graph and sink for computed dates."""

    def list_tasks_with_predecessors(self, project_id: str) -> list[Task]:
        """Return every non-archived task of the project with its predecessor edges.

        Tasks are returned in load order (outline level, then position).
        """
        ...

    def update_task_dates(self, task_id: str, start_date: date, end_date: date) -> None:
        """Persist computed dates for one task."""
        ...


class ProjectStore(TaskStore, Protocol):
    """Task store with the project-level operations used by ScheduleService."""

    def get_project(self, project_id: str) -> Project | None:
        """Return the project, or None if it does not exist."""
        ...

    def get_task(self, task_id: str) -> tuple[Project, Task] | None:
        """Return a task together with its owning project, or None."""
        ...

    def save_baseline(self, project_id: str) -> int:
        """Copy current dates to baseline fields of non-archived tasks.

        Returns:
            Number of tasks whose baseline was saved
        """
        ...

    def add_dependency(self, successor_id: str, predecessor: Predecessor) -> None:
        """Append a predecessor edge to a task."""
        ...
