"""Schedule recalculation: load, order, forward pass, diff, persist."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from cascade.logger import get_logger

from .config import EngineConfig
from .core import DateUpdate, RecalculationResult, ScheduleComputation
from .forward_pass import ForwardPass
from .graph import ScheduleGraph

if TYPE_CHECKING:
    from cascade.models import Task

    from .protocols import TaskStore

logger = get_logger()


def compute_schedule(
    tasks: list[Task],
    reference_date: date,
    config: EngineConfig | None = None,
) -> ScheduleComputation:
    """Compute early dates for a task set without touching any store.

    Args:
        tasks: Non-archived tasks of one project, in load order
        reference_date: Start date for unconstrained root tasks
        config: Optional engine configuration

    Returns:
        ScheduleComputation with the order, early dates, pending updates and
        the IDs of tasks that could not be ordered
    """
    config = config or EngineConfig()
    graph = ScheduleGraph.build(tasks, ignore_external=config.ignore_external_predecessors)
    order = graph.topological_order()

    forward = ForwardPass(graph, reference_date)
    forward.run(order)

    early_start: dict[str, date] = {}
    early_finish: dict[str, date] = {}
    updates: list[DateUpdate] = []

    for index in order:
        node = graph.nodes[index]
        start = forward.early_start[index]
        finish = forward.early_finish[index]
        assert start is not None and finish is not None
        early_start[node.task_id] = start
        early_finish[node.task_id] = finish

        if node.start_date != start or node.end_date != finish:
            updates.append(
                DateUpdate(
                    task_id=node.task_id,
                    start_date=start,
                    end_date=finish,
                    previous_start=node.start_date,
                    previous_end=node.end_date,
                )
            )

    return ScheduleComputation(
        order=[graph.nodes[index].task_id for index in order],
        early_start=early_start,
        early_finish=early_finish,
        updates=updates,
        skipped_task_ids=graph.unordered(order),
    )


class ScheduleEngine:
    """Recalculates and persists a project's schedule from its dependency graph.

    The engine holds no state between calls and takes no locks; concurrent
    runs on the same project are last-writer-wins per task.
    """

    def __init__(self, store: TaskStore, config: EngineConfig | None = None):
        """Initialize the engine.

        Args:
            store: Task store to read the graph from and write dates to
            config: Optional engine configuration
        """
        self.store = store
        self.config = config or EngineConfig()

    def recalculate(
        self, project_id: str, reference_date: date | None = None
    ) -> RecalculationResult:
        """Recalculate the schedule of one project.

        Store errors propagate unchanged. Each task is written independently,
        so a failure part-way leaves earlier writes in place; re-running is safe.

        Args:
            project_id: Project whose tasks are scheduled
            reference_date: Date root tasks start on (defaults to today)

        Returns:
            RecalculationResult with written and ordered counts
        """
        reference_date = reference_date or date.today()  # noqa: DTZ011
        tasks = self.store.list_tasks_with_predecessors(project_id)
        if not tasks:
            logger.checks(f"Project '{project_id}' has no tasks to schedule")
            return RecalculationResult(updated_count=0, ordered_count=0)

        logger.checks(f"Scheduling {len(tasks)} tasks of '{project_id}' from {reference_date}")
        computation = compute_schedule(tasks, reference_date, self.config)

        warnings: list[str] = []
        if computation.skipped_task_ids:
            msg = (
                f"{len(computation.skipped_task_ids)} of {len(tasks)} tasks could not be "
                f"scheduled (dependency cycle or missing predecessor): "
                f"{', '.join(computation.skipped_task_ids)}"
            )
            logger.warning(msg)
            warnings.append(msg)

        updated_count = 0
        for update in computation.updates:
            if self.config.dry_run:
                logger.changes(
                    f"  {update.task_id}: would set {update.start_date} -> {update.end_date}"
                )
                continue
            self.store.update_task_dates(update.task_id, update.start_date, update.end_date)
            updated_count += 1
            logger.changes(
                f"  {update.task_id}: {update.previous_start} -> {update.previous_end} "
                f"now {update.start_date} -> {update.end_date}"
            )

        return RecalculationResult(
            updated_count=updated_count,
            ordered_count=len(computation.order),
            total_count=len(tasks),
            skipped_task_ids=computation.skipped_task_ids,
            updates=computation.updates,
            warnings=warnings,
        )
