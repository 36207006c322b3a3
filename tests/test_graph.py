"""Tests for dependency graph construction and topological ordering."""

from cascade.engine import ScheduleGraph
from cascade.models import Task
from tests.conftest import preds


def _order_ids(graph: ScheduleGraph) -> list[str]:
    return [graph.nodes[i].task_id for i in graph.topological_order()]


class TestGraphBuild:
    """Test ScheduleGraph.build()."""

    def test_dense_indices_follow_load_order(self) -> None:
        graph = ScheduleGraph.build([Task(id="a"), Task(id="b"), Task(id="c")])
        assert [node.index for node in graph.nodes] == [0, 1, 2]
        assert graph.index_by_id == {"a": 0, "b": 1, "c": 2}

    def test_predecessor_attributes_are_copied_onto_edges(self) -> None:
        tasks = [
            Task(id="a", duration=4, is_milestone=False, constraint_type="MUST_START_ON"),
            Task(id="b", duration=1, predecessors=preds("a:SS + 2d")),
        ]
        graph = ScheduleGraph.build(tasks)
        edge = graph.nodes[1].edges[0]

        assert edge.predecessor_index == 0
        assert edge.type == "SS"
        assert edge.lag == 2
        assert edge.predecessor_duration == 4
        assert edge.predecessor_constraint_type == "MUST_START_ON"
        assert graph.successors[0] == [1]

    def test_external_predecessor_kept_by_default(self) -> None:
        graph = ScheduleGraph.build([Task(id="b", predecessors=preds("gone"))])
        edge = graph.nodes[0].edges[0]
        assert edge.predecessor_index is None
        assert edge.predecessor_duration is None

    def test_external_predecessor_dropped_when_ignored(self) -> None:
        graph = ScheduleGraph.build(
            [Task(id="b", predecessors=preds("gone"))], ignore_external=True
        )
        assert graph.nodes[0].edges == []


class TestTopologicalOrder:
    """Test Kahn ordering."""

    def test_chain(self) -> None:
        tasks = [
            Task(id="c", predecessors=preds("b")),
            Task(id="b", predecessors=preds("a")),
            Task(id="a"),
        ]
        assert _order_ids(ScheduleGraph.build(tasks)) == ["a", "b", "c"]

    def test_roots_are_seeded_in_load_order(self) -> None:
        tasks = [Task(id="x"), Task(id="y"), Task(id="z", predecessors=preds("x", "y"))]
        assert _order_ids(ScheduleGraph.build(tasks)) == ["x", "y", "z"]

    def test_diamond(self) -> None:
        tasks = [
            Task(id="start"),
            Task(id="left", predecessors=preds("start")),
            Task(id="right", predecessors=preds("start")),
            Task(id="end", predecessors=preds("left", "right")),
        ]
        order = _order_ids(ScheduleGraph.build(tasks))
        assert order[0] == "start"
        assert order[-1] == "end"
        assert set(order) == {"start", "left", "right", "end"}

    def test_cycle_and_downstream_excluded(self) -> None:
        tasks = [
            Task(id="a", predecessors=preds("b")),
            Task(id="b", predecessors=preds("a")),
            Task(id="after", predecessors=preds("b")),
            Task(id="free"),
        ]
        graph = ScheduleGraph.build(tasks)
        order = graph.topological_order()

        assert [graph.nodes[i].task_id for i in order] == ["free"]
        assert graph.unordered(order) == ["a", "b", "after"]

    def test_self_dependency_excluded(self) -> None:
        graph = ScheduleGraph.build([Task(id="loop", predecessors=preds("loop"))])
        assert graph.topological_order() == []

    def test_external_predecessor_blocks_successor(self) -> None:
        tasks = [Task(id="a"), Task(id="b", predecessors=preds("a", "archived"))]
        assert _order_ids(ScheduleGraph.build(tasks)) == ["a"]

    def test_repeated_edge_still_orders(self) -> None:
        """Two edges from the same predecessor each count toward in-degree."""
        tasks = [Task(id="a"), Task(id="b", predecessors=preds("a", "a:SS"))]
        assert _order_ids(ScheduleGraph.build(tasks)) == ["a", "b"]
