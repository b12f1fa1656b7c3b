"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_project_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --project-root flag for project root override."""
    parser.add_argument(
        "--project-root",
        type=str,
        help="Override project root path (default: nearest directory with .staghorn or .git)",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=str,
        help="Path to config.yaml (default: ~/.config/staghorn/config.yaml)",
    )


def add_team_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--team",
        type=str,
        help="Read the team layer from this file instead of the cache",
    )


def add_force_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Force operation without confirmation",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (DEBUG logging)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags that every staghorn command accepts."""
    add_json_flag(parser)
    add_project_root_flag(parser)
    add_config_flag(parser)
    add_verbose_flag(parser)


def add_project_output_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        action="store_true",
        help="Use <project>/CLAUDE.md instead of the configured output",
    )
