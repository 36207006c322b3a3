"""CPM forward pass: earliest start and finish for each task."""

from __future__ import annotations

from datetime import date, timedelta

from cascade.logger import debug_enabled, get_logger
from cascade.models import ConstraintType, DependencyType

from .core import PredecessorEdge, TaskNode
from .graph import ScheduleGraph

logger = get_logger()


def required_start(
    edge: PredecessorEdge,
    pred_start: date,
    pred_finish: date,
    duration_days: int,
) -> date | None:
    """Earliest start a single edge allows for its successor.

    Args:
        edge: The predecessor edge
        pred_start: Predecessor's early start
        pred_finish: Predecessor's early finish
        duration_days: Successor's effective duration

    Returns:
        The required start, or None for an unrecognized edge type
    """
    if edge.type == DependencyType.FS.value:
        # Starts the day after the predecessor finishes
        return pred_finish + timedelta(days=edge.lag + 1)
    if edge.type == DependencyType.SS.value:
        return pred_start + timedelta(days=edge.lag)
    if edge.type == DependencyType.FF.value:
        return pred_finish + timedelta(days=edge.lag - duration_days)
    if edge.type == DependencyType.SF.value:
        return pred_start + timedelta(days=edge.lag - duration_days)
    return None


def apply_constraint(node: TaskNode, earliest_start: date | None) -> date | None:
    """Apply the task's own date constraint after predecessor propagation."""
    if node.constraint_date is None:
        return earliest_start

    if node.constraint_type == ConstraintType.MUST_START_ON.value:
        return node.constraint_date
    if node.constraint_type == ConstraintType.START_NO_EARLIER_THAN.value:
        if earliest_start is None or node.constraint_date > earliest_start:
            return node.constraint_date
    return earliest_start


class ForwardPass:
    """Computes early start/finish dates over a topological order.

    Dates are kept in lists indexed by node index; a predecessor's slot is
    always filled before its successors are visited.
    """

    def __init__(self, graph: ScheduleGraph, reference_date: date):
        """Initialize the pass.

        Args:
            graph: Scheduling graph
            reference_date: Start date for tasks with no predecessor or constraint
        """
        self.graph = graph
        self.reference_date = reference_date
        self.early_start: list[date | None] = [None] * len(graph)
        self.early_finish: list[date | None] = [None] * len(graph)

    def run(self, order: list[int]) -> None:
        """Visit nodes in ``order`` and fill early_start / early_finish."""
        for index in order:
            self._schedule_node(self.graph.nodes[index])

    def _schedule_node(self, node: TaskNode) -> None:
        duration_days = node.effective_duration
        earliest_start: date | None = None  # Nothing applied yet
        verbose = debug_enabled()

        for edge in node.edges:
            if edge.predecessor_index is None:
                continue
            pred_start = self.early_start[edge.predecessor_index]
            pred_finish = self.early_finish[edge.predecessor_index]
            if pred_start is None or pred_finish is None:
                continue

            candidate = required_start(edge, pred_start, pred_finish, duration_days)
            if candidate is None:
                if verbose:
                    logger.debug(
                        f"    {node.task_id}: skipping '{edge.type}' edge "
                        f"from {edge.predecessor_id}"
                    )
                continue

            if verbose:
                logger.debug(
                    f"    {node.task_id}: {edge.type} from {edge.predecessor_id} "
                    f"(lag {edge.lag:+d}) requires start >= {candidate}"
                )
            if earliest_start is None or candidate > earliest_start:
                earliest_start = candidate

        earliest_start = apply_constraint(node, earliest_start)

        if earliest_start is None:
            earliest_start = self.reference_date

        earliest_finish = earliest_start + timedelta(days=duration_days)
        self.early_start[node.index] = earliest_start
        self.early_finish[node.index] = earliest_finish

        logger.checks(f"  {node.task_id}: {earliest_start} -> {earliest_finish}")
