"""Configuration file loading (cascade_config.yaml)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from . import context
from .engine import EngineConfig

CONFIG_FILENAME = "cascade_config.yaml"


class CascadeConfig(BaseModel):
    """Top-level configuration."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    default_project: str | None = None  # Used when --project is omitted


def load_config(config_path: Path | str) -> CascadeConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to cascade_config.yaml

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    try:
        return CascadeConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def discover_config(
    project_file: Path | None = None,
    config_path: Path | None = None,
) -> CascadeConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Project file directory / cascade_config.yaml
    4. Current directory / cascade_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config is not None:
        return load_config(ctx_config)

    if project_file is not None:
        dir_config = Path(project_file).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return CascadeConfig()
