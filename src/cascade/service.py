"""Project-scoped scheduling actions.

The engine itself performs no project checks; this service is the caller
boundary that rejects unknown projects and Agile projects before delegating.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from .engine import EngineConfig, RecalculationResult, ScheduleEngine
from .exceptions import NotFoundError, PreconditionFailedError, ValidationError
from .logger import get_logger
from .models import VALID_DEPENDENCY_TYPES, Methodology, Predecessor

if TYPE_CHECKING:
    from .engine import ProjectStore
    from .models import Project

logger = get_logger()


class ScheduleService:
    """High-level service for schedule actions on a project store.

    Coordinates:
    - project lookup and methodology policy
    - ScheduleEngine (recalculation)
    - baseline snapshots and dependency creation
    """

    def __init__(self, store: ProjectStore, config: EngineConfig | None = None):
        self.store = store
        self.engine = ScheduleEngine(store, config)

    def _require_project(self, project_id: str) -> Project:
        project = self.store.get_project(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    def recalculate_schedule(
        self, project_id: str, reference_date: date | None = None
    ) -> RecalculationResult:
        """Recalculate dates for a Waterfall or Hybrid project.

        Raises:
            NotFoundError: If the project does not exist
            PreconditionFailedError: If the project uses the Agile methodology
        """
        project = self._require_project(project_id)
        if project.methodology == Methodology.AGILE.value:
            raise PreconditionFailedError(
                "Schedule recalculation is only available for Waterfall and Hybrid projects."
            )
        return self.engine.recalculate(project_id, reference_date)

    def save_baseline(self, project_id: str) -> int:
        """Copy current start/end dates into the baseline fields.

        Returns:
            Number of tasks saved
        """
        self._require_project(project_id)
        saved = self.store.save_baseline(project_id)
        logger.changes(f"Saved baseline for {saved} tasks of '{project_id}'")
        return saved

    def create_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dep_type: str = "FS",
        lag: int = 0,
    ) -> Predecessor:
        """Link two tasks of the same project.

        Cycles are not rejected here; the engine leaves cyclic tasks unscheduled.

        Raises:
            ValidationError: Self-dependency, unknown type, tasks in different projects,
                an existing link between the pair, or a predecessor id that the
                predecessor text format cannot express
            NotFoundError: If either task does not exist
        """
        if predecessor_id == successor_id:
            raise ValidationError("A task cannot depend on itself.")

        dep_type = dep_type.upper()
        if dep_type not in VALID_DEPENDENCY_TYPES:
            raise ValidationError(
                f"Invalid dependency type '{dep_type}'. "
                f"Valid types are: {', '.join(sorted(VALID_DEPENDENCY_TYPES))}"
            )

        pred = self.store.get_task(predecessor_id)
        succ = self.store.get_task(successor_id)
        if pred is None or succ is None:
            missing = predecessor_id if pred is None else successor_id
            raise NotFoundError(f"Task not found: {missing}")

        if pred[0].id != succ[0].id:
            raise ValidationError("Tasks must be in the same project.")

        if any(p.task_id == predecessor_id for p in succ[1].predecessors):
            raise ValidationError(f"{successor_id} already depends on {predecessor_id}.")

        predecessor = Predecessor(task_id=predecessor_id, type=dep_type, lag=lag)
        try:
            reparsed = Predecessor.parse(str(predecessor))
        except ValueError:
            reparsed = None
        if reparsed != predecessor:
            raise ValidationError(
                f"Task id '{predecessor_id}' cannot be used as a predecessor; "
                "ids must not contain spaces or colons."
            )

        self.store.add_dependency(successor_id, predecessor)
        logger.changes(f"Linked {successor_id} <- {predecessor}")
        return predecessor
