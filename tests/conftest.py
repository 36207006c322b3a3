"""Pytest configuration and fixtures for cascade tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from cascade.logger import reset_logger
from cascade.models import Predecessor, Project, Task
from cascade.store import InMemoryStore

# Reference date used as "today" throughout the tests
DAY = date(2025, 1, 6)


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


def preds(*specs: str) -> list[Predecessor]:
    """Create predecessor edges from their string form.

    Example:
        Task(..., predecessors=preds("design", "build:SS + 2d"))
    """
    return [Predecessor.parse(spec) for spec in specs]


def make_project(*tasks: Task, project_id: str = "proj", methodology: str = "WATERFALL") -> Project:
    """Wrap tasks in a project, assigning positions in argument order."""
    for position, task in enumerate(tasks):
        task.position = position
    return Project(
        id=project_id, name=project_id.title(), methodology=methodology, tasks=list(tasks)
    )


@pytest.fixture
def make_store() -> Callable[..., InMemoryStore]:
    """Factory for an in-memory store holding one project."""

    def _make(*tasks: Task, **kwargs: Any) -> InMemoryStore:
        return InMemoryStore([make_project(*tasks, **kwargs)])

    return _make


PROJECT_YAML = """\
# Release plan
projects:
  website:
    name: Website Relaunch
    methodology: WATERFALL
    tasks:
      design:
        duration: 5  # agreed with design team
      build:
        duration: 3
        depends_on: ["design:FS + 2d"]
      launch:
        milestone: true
        depends_on: [build]
  mobile:
    name: Mobile App
    methodology: AGILE
    tasks:
      sprint_zero:
        duration: 10
"""


@pytest.fixture
def project_file(tmp_path: Any) -> Any:
    """A project YAML file with one Waterfall and one Agile project."""
    path = tmp_path / "project.yaml"
    path.write_text(PROJECT_YAML, encoding="utf-8")
    return path
