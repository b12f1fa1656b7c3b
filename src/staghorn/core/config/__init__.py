"""Staghorn configuration: YAML loading, validation and path conventions."""

from .manager import (
    Config,
    config_from_dict,
    load_config,
    parse_duration,
    parse_repo,
    save_config,
    validate_config_data,
)
from .paths import Paths, ProjectPaths, find_project_root

__all__ = [
    "Config",
    "Paths",
    "ProjectPaths",
    "config_from_dict",
    "find_project_root",
    "load_config",
    "parse_duration",
    "parse_repo",
    "save_config",
    "validate_config_data",
]
