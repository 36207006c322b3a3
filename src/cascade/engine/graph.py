"""Dependency graph construction and topological ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cascade.logger import get_logger

from .core import PredecessorEdge, TaskNode

if TYPE_CHECKING:
    from cascade.models import Task

logger = get_logger()


class ScheduleGraph:
    """Task graph with dense integer indices.

    Nodes live in a list in load order; ``successors[i]`` holds the index of
    every node with an edge from node ``i``, once per edge.
    """

    def __init__(self, nodes: list[TaskNode], successors: list[list[int]]):
        self.nodes = nodes
        self.successors = successors
        self.index_by_id = {node.task_id: node.index for node in nodes}

    def __len__(self) -> int:
        return len(self.nodes)

    @classmethod
    def build(cls, tasks: list[Task], *, ignore_external: bool = False) -> ScheduleGraph:
        """Build the graph from loaded tasks.

        Predecessor attributes are copied onto each edge so the forward pass
        never looks a predecessor up again.

        Args:
            tasks: Tasks of one run, in load order
            ignore_external: Drop edges whose predecessor is not among ``tasks``
        """
        index_by_id = {task.id: i for i, task in enumerate(tasks)}
        nodes: list[TaskNode] = []
        successors: list[list[int]] = [[] for _ in tasks]

        for i, task in enumerate(tasks):
            node = TaskNode(
                index=i,
                task_id=task.id,
                duration=task.duration,
                is_milestone=task.is_milestone,
                constraint_type=task.constraint_type,
                constraint_date=task.constraint_date,
                start_date=task.start_date,
                end_date=task.end_date,
            )
            for pred in task.predecessors:
                pred_index = index_by_id.get(pred.task_id)
                if pred_index is None:
                    if ignore_external:
                        logger.checks(
                            f"  {task.id}: ignoring edge from '{pred.task_id}' (not in this run)"
                        )
                        continue
                    node.edges.append(
                        PredecessorEdge(
                            predecessor_id=pred.task_id,
                            predecessor_index=None,
                            type=pred.type,
                            lag=pred.lag,
                        )
                    )
                    continue

                pred_task = tasks[pred_index]
                node.edges.append(
                    PredecessorEdge(
                        predecessor_id=pred.task_id,
                        predecessor_index=pred_index,
                        type=pred.type,
                        lag=pred.lag,
                        predecessor_duration=pred_task.duration,
                        predecessor_constraint_type=pred_task.constraint_type,
                        predecessor_constraint_date=pred_task.constraint_date,
                        predecessor_is_milestone=pred_task.is_milestone,
                    )
                )
                successors[pred_index].append(i)
            nodes.append(node)

        return cls(nodes, successors)

    def topological_order(self) -> list[int]:
        """Order node indices with Kahn's algorithm.

        In-degree is the number of predecessor edges. Nodes that never reach
        in-degree 0 (in a cycle, downstream of one, or waiting on a
        predecessor outside the run) are left out of the result.
        """
        in_degree = [len(node.edges) for node in self.nodes]

        # Seed in load order
        queue: list[int] = [i for i, degree in enumerate(in_degree) if degree == 0]
        result: list[int] = []

        while queue:
            index = queue.pop(0)
            result.append(index)

            for succ in self.successors[index]:
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    queue.append(succ)

        return result

    def unordered(self, order: list[int]) -> list[str]:
        """Task IDs missing from a topological order, in load order."""
        ordered = set(order)
        return [node.task_id for node in self.nodes if node.index not in ordered]
