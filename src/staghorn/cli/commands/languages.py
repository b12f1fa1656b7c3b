"""
Staghorn languages command.

SUMMARY: List detected and active languages and the layers providing them
"""

from __future__ import annotations

import argparse

from staghorn.cli import (
    OutputFormatter,
    add_standard_flags,
    add_team_flag,
    get_config,
    get_layer_stack,
    get_project_root,
    resolve_active_languages,
)
from staghorn.core.exceptions import StaghornError
from staghorn.core.language import detect, get_display_name

SUMMARY = "List detected and active languages and the layers providing them"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_team_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_root = get_project_root(args)
        cfg = get_config(args, project_root)
        stack = get_layer_stack(args, cfg, project_root)
    except StaghornError as e:
        formatter.error(e, error_code="languages_error")
        return 1

    detected = detect(project_root) if project_root is not None else []
    active = resolve_active_languages(cfg, stack, project_root)
    files = stack.load_language_files(active) if active else {}

    rows = [
        {
            "id": language,
            "name": get_display_name(language),
            "detected": language in detected,
            "layers": [f.source for f in files.get(language, [])],
        }
        for language in active
    ]

    if formatter.json_mode:
        formatter.json_output(
            {
                "detected": detected,
                "active": active,
                "disabled": list(cfg.languages.disabled),
                "languages": rows,
            }
        )
        return 0

    formatter.text(f"Detected: {', '.join(detected) if detected else '(none)'}")
    if cfg.languages.enabled:
        formatter.text("Mode: explicit (languages.enabled)")
    elif cfg.languages.auto_detect:
        formatter.text("Mode: auto-detect")
    else:
        formatter.text("Mode: disabled")
    formatter.text("")
    if not rows:
        formatter.text("No active languages.")
        return 0
    formatter.text("Active:")
    for row in rows:
        layers = ", ".join(row["layers"]) if row["layers"] else "no files"
        formatter.text_kv(f"{row['name']} ({row['id']})", layers)
    return 0
