"""Task store implementations."""

from .memory import InMemoryStore
from .yaml_store import YamlProjectStore, parse_project_file

__all__ = ["InMemoryStore", "YamlProjectStore", "parse_project_file"]
