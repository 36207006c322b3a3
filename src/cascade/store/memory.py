"""Dict-backed project store."""

from __future__ import annotations

import copy
from datetime import date

from cascade.models import Predecessor, Project, Task


class InMemoryStore:
    """Keeps projects in memory and records every date write.

    ``writes`` lists ``(task_id, start_date, end_date)`` in call order so
    callers can see exactly which tasks a recalculation touched.
    """

    def __init__(self, projects: list[Project] | None = None):
        self.projects: dict[str, Project] = {}
        self.writes: list[tuple[str, date, date]] = []
        for project in projects or []:
            self.add_project(project)

    def add_project(self, project: Project) -> None:
        self.projects[project.id] = project

    def get_project(self, project_id: str) -> Project | None:
        return self.projects.get(project_id)

    def get_task(self, task_id: str) -> tuple[Project, Task] | None:
        for project in self.projects.values():
            task = project.get_task(task_id)
            if task is not None:
                return (project, task)
        return None

    def list_tasks_with_predecessors(self, project_id: str) -> list[Task]:
        """Return snapshots of the project's non-archived tasks."""
        project = self.projects.get(project_id)
        if project is None:
            return []
        return [copy.deepcopy(task) for task in project.active_tasks()]

    def update_task_dates(self, task_id: str, start_date: date, end_date: date) -> None:
        found = self.get_task(task_id)
        if found is None:
            raise KeyError(f"Unknown task: {task_id}")
        _, task = found
        task.start_date = start_date
        task.end_date = end_date
        self.writes.append((task_id, start_date, end_date))

    def save_baseline(self, project_id: str) -> int:
        project = self.projects.get(project_id)
        if project is None:
            raise KeyError(f"Unknown project: {project_id}")
        tasks = project.active_tasks()
        for task in tasks:
            task.baseline_start_date = task.start_date
            task.baseline_end_date = task.end_date
        return len(tasks)

    def add_dependency(self, successor_id: str, predecessor: Predecessor) -> None:
        found = self.get_task(successor_id)
        if found is None:
            raise KeyError(f"Unknown task: {successor_id}")
        _, task = found
        task.predecessors.append(predecessor)
