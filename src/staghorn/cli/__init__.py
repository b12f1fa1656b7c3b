"""
Staghorn CLI package.

Commands are auto-discovered from ``staghorn/cli/commands``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Config, layer and merge-plan helpers
"""
from ._output import OutputFormatter, print_success
from ._args import (
    add_config_flag,
    add_dry_run_flag,
    add_force_flag,
    add_json_flag,
    add_project_output_flag,
    add_project_root_flag,
    add_standard_flags,
    add_team_flag,
    add_verbose_flag,
)
from ._utils import (
    MergePlan,
    build_merge_plan,
    get_config,
    get_layer_stack,
    get_project_root,
    output_path_for,
    resolve_active_languages,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    "print_success",
    # Argument helpers
    "add_config_flag",
    "add_dry_run_flag",
    "add_force_flag",
    "add_json_flag",
    "add_project_output_flag",
    "add_project_root_flag",
    "add_standard_flags",
    "add_team_flag",
    "add_verbose_flag",
    # Utilities
    "MergePlan",
    "build_merge_plan",
    "get_config",
    "get_layer_stack",
    "get_project_root",
    "output_path_for",
    "resolve_active_languages",
]
