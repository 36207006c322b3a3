"""Schedule engine package - critical-path date recalculation.

Main entry points:
- ScheduleEngine: load a project's tasks from a store, recalculate, persist changes
- compute_schedule: the same computation as a pure function of (tasks, reference date)

Building blocks:
- ScheduleGraph: dense-index dependency graph with Kahn ordering
- ForwardPass: earliest start/finish propagation
- EngineConfig: engine options
"""

from .config import EngineConfig
from .core import (
    DateUpdate,
    PredecessorEdge,
    RecalculationResult,
    ScheduleComputation,
    TaskNode,
    effective_duration,
)
from .engine import ScheduleEngine, compute_schedule
from .forward_pass import ForwardPass, apply_constraint, required_start
from .graph import ScheduleGraph
from .protocols import ProjectStore, TaskStore

__all__ = [
    # Core dataclasses
    "DateUpdate",
    "PredecessorEdge",
    "RecalculationResult",
    "ScheduleComputation",
    "TaskNode",
    "effective_duration",
    # Configuration
    "EngineConfig",
    # Protocols
    "ProjectStore",
    "TaskStore",
    # Algorithm
    "ScheduleGraph",
    "ForwardPass",
    "apply_constraint",
    "required_start",
    # Entry points
    "ScheduleEngine",
    "compute_schedule",
]
