"""Project store backed by a YAML project file.

Reads go through PyYAML and the pydantic schemas; writes go through
ruamel.yaml in round-trip mode so comments and layout in the file survive.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from cascade.exceptions import ParseError, ValidationError
from cascade.logger import get_logger
from cascade.models import Predecessor, Project, Task
from cascade.schemas import ProjectFileSchema, ProjectSchema, TaskSchema

logger = get_logger()


def _task_from_schema(task_id: str, schema: TaskSchema, position: int) -> Task:
    try:
        predecessors = [Predecessor.parse(dep) for dep in schema.depends_on]
    except ValueError as e:
        raise ValidationError(f"Task '{task_id}': {e}") from e

    return Task(
        id=task_id,
        name=schema.name,
        duration=schema.duration,
        is_milestone=schema.milestone,
        constraint_type=schema.constraint_type,
        constraint_date=schema.constraint_date,
        start_date=schema.start_date,
        end_date=schema.end_date,
        baseline_start_date=schema.baseline_start_date,
        baseline_end_date=schema.baseline_end_date,
        archived=schema.archived,
        outline_level=schema.outline_level,
        position=schema.position if schema.position is not None else position,
        predecessors=predecessors,
    )


def _project_from_schema(project_id: str, schema: ProjectSchema) -> Project:
    tasks = [
        _task_from_schema(task_id, task_schema, position)
        for position, (task_id, task_schema) in enumerate(schema.tasks.items())
    ]
    return Project(
        id=project_id,
        name=schema.name,
        methodology=schema.methodology.value,
        tasks=tasks,
    )


def parse_project_file(file_path: Path | str) -> list[Project]:
    """Parse a project file into Project objects.

    Raises:
        ParseError: If the file is missing or is not valid YAML
        ValidationError: If the content does not match the schema
    """
    path = Path(file_path)
    if not path.exists():
        raise ParseError(f"File not found: {file_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError("YAML must contain a dictionary at the root level")

    try:
        schema = ProjectFileSchema(**data)  # type: ignore[arg-type]
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid project file: {e}") from e

    projects = [_project_from_schema(pid, project) for pid, project in schema.projects.items()]

    seen: dict[str, str] = {}
    for project in projects:
        for task in project.tasks:
            if task.id in seen:
                raise ValidationError(
                    f"Task '{task.id}' appears in both '{seen[task.id]}' and '{project.id}'"
                )
            seen[task.id] = project.id

    return projects


class YamlProjectStore:
    """Project store reading from and writing to one YAML file.

    Every write rewrites the file, so each task's dates are persisted
    independently of the others.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.projects: dict[str, Project] = {p.id: p for p in parse_project_file(self.path)}
        self._project_of: dict[str, str] = {
            task.id: project.id for project in self.projects.values() for task in project.tasks
        }

    def get_project(self, project_id: str) -> Project | None:
        return self.projects.get(project_id)

    def get_task(self, task_id: str) -> tuple[Project, Task] | None:
        project_id = self._project_of.get(task_id)
        if project_id is None:
            return None
        project = self.projects[project_id]
        task = project.get_task(task_id)
        assert task is not None
        return (project, task)

    def list_tasks_with_predecessors(self, project_id: str) -> list[Task]:
        project = self.projects.get(project_id)
        if project is None:
            return []
        return project.active_tasks()

    def update_task_dates(self, task_id: str, start_date: date, end_date: date) -> None:
        found = self.get_task(task_id)
        if found is None:
            raise KeyError(f"Unknown task: {task_id}")
        _, task = found
        self._rewrite({task_id: {"start_date": start_date, "end_date": end_date}})
        task.start_date = start_date
        task.end_date = end_date

    def save_baseline(self, project_id: str) -> int:
        project = self.projects.get(project_id)
        if project is None:
            raise KeyError(f"Unknown project: {project_id}")
        tasks = project.active_tasks()
        self._rewrite(
            {
                task.id: {
                    "baseline_start_date": task.start_date,
                    "baseline_end_date": task.end_date,
                }
                for task in tasks
            }
        )
        for task in tasks:
            task.baseline_start_date = task.start_date
            task.baseline_end_date = task.end_date
        return len(tasks)

    def add_dependency(self, successor_id: str, predecessor: Predecessor) -> None:
        found = self.get_task(successor_id)
        if found is None:
            raise KeyError(f"Unknown task: {successor_id}")
        _, task = found
        depends_on = [str(dep) for dep in task.predecessors] + [str(predecessor)]
        self._rewrite({successor_id: {"depends_on": depends_on}})
        task.predecessors.append(predecessor)

    def _rewrite(self, edits: dict[str, dict[str, Any]]) -> None:
        """Apply field edits to task entries and write the file back."""
        yaml_rt = YAML()
        yaml_rt.preserve_quotes = True  # type: ignore[assignment]

        with self.path.open(encoding="utf-8") as f:
            data: Any = yaml_rt.load(f)  # type: ignore[no-untyped-call]

        for task_id, fields in edits.items():
            project_id = self._project_of[task_id]
            tasks_node = data["projects"][project_id]["tasks"]
            entry = tasks_node.get(task_id)
            if entry is None:
                entry = CommentedMap()
                tasks_node[task_id] = entry
            for key, value in fields.items():
                entry[key] = value

        with self.path.open("w", encoding="utf-8") as f:
            yaml_rt.dump(data, f)  # type: ignore[no-untyped-call]

        logger.debug(f"Wrote {len(edits)} task(s) to {self.path}")
