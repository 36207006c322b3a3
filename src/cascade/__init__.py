"""Cascade - dependency-driven schedule recalculation for Waterfall and Hybrid projects."""

from .engine import EngineConfig, RecalculationResult, ScheduleEngine, compute_schedule
from .exceptions import (
    CascadeError,
    NotFoundError,
    ParseError,
    PreconditionFailedError,
    ValidationError,
)
from .models import ConstraintType, DependencyType, Methodology, Predecessor, Project, Task
from .service import ScheduleService

__version__ = "0.1.0"

__all__ = [
    "CascadeError",
    "ConstraintType",
    "DependencyType",
    "EngineConfig",
    "Methodology",
    "NotFoundError",
    "ParseError",
    "Predecessor",
    "PreconditionFailedError",
    "Project",
    "RecalculationResult",
    "ScheduleEngine",
    "ScheduleService",
    "Task",
    "ValidationError",
    "compute_schedule",
]
