"""Pydantic schemas for project file validation."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import ConstraintType, Methodology


class TaskSchema(BaseModel):
    """Schema for a single task in a project file."""

    name: str = ""
    duration: int = Field(default=0, ge=0)
    milestone: bool = False
    constraint_type: str = ConstraintType.NONE.value
    constraint_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    baseline_start_date: date | None = None
    baseline_end_date: date | None = None
    archived: bool = False
    outline_level: int = Field(default=1, ge=1)
    position: int | None = None
    depends_on: list[str] = Field(default_factory=list)

    @field_validator("depends_on", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Accept a single predecessor string as well as a list."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]

    @field_validator("constraint_type", mode="before")
    @classmethod
    def normalize_constraint(cls, v: Any) -> str:
        """Upper-case constraint names; a missing value means no constraint."""
        if v is None:
            return ConstraintType.NONE.value
        return str(v).strip().upper()


class ProjectSchema(BaseModel):
    """Schema for a project entry."""

    name: str = ""
    methodology: Methodology = Methodology.WATERFALL
    tasks: dict[str, TaskSchema] = Field(default_factory=dict)

    @field_validator("methodology", mode="before")
    @classmethod
    def normalize_methodology(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("tasks", mode="before")
    @classmethod
    def empty_tasks(cls, v: Any) -> Any:
        """Allow bare task keys (``design:``) with all defaults."""
        if not v:
            return {}
        if isinstance(v, dict):
            return {key: value or {} for key, value in v.items()}  # type: ignore[misc]
        return v


class ProjectFileSchema(BaseModel):
    """Schema for the whole project file."""

    projects: dict[str, ProjectSchema] = Field(default_factory=dict)
