"""
Staghorn sync command.

SUMMARY: Merge team, personal and project layers into the managed CLAUDE.md
"""

from __future__ import annotations

import argparse
import logging

from staghorn.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_force_flag,
    add_project_output_flag,
    add_standard_flags,
    add_team_flag,
    build_merge_plan,
    get_config,
    get_layer_stack,
    get_project_root,
    output_path_for,
    print_success,
)
from staghorn.core.exceptions import StaghornError
from staghorn.core.merge import is_managed
from staghorn.core.utils.io import read_text, write_text

SUMMARY = "Merge team, personal and project layers into the managed CLAUDE.md"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write merged output here (default: config 'output')",
    )
    parser.add_argument(
        "--no-annotate",
        action="store_true",
        help="Omit the managed banner and provenance markers",
    )
    add_team_flag(parser)
    add_project_output_flag(parser)
    add_force_flag(parser)
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_root = get_project_root(args)
        cfg = get_config(args, project_root)
        stack = get_layer_stack(args, cfg, project_root)
        annotate = cfg.annotate and not args.no_annotate
        plan = build_merge_plan(cfg, stack, project_root, annotate=annotate)

        if not plan.sources:
            raise StaghornError(
                "no config layers found to merge",
                hint="Add a team config (--team) or create ~/.config/staghorn/personal.md",
            )

        output = plan.render()

        target = output_path_for(args, cfg, project_root)

        existing = read_text(target)
        if existing is not None and not is_managed(existing) and not args.force:
            raise StaghornError(
                f"{target} exists and is not managed by staghorn",
                hint="Move its content into ~/.config/staghorn/personal.md, or pass --force to back it up and overwrite",
                context={"path": str(target)},
            )

        data = {
            "output": str(target),
            "layers": plan.sources,
            "languages": sorted(plan.language_files),
            "bytes": len(output.encode("utf-8")),
            "dry_run": bool(args.dry_run),
        }

        if args.dry_run:
            if formatter.json_mode:
                formatter.json_output({**data, "content": output})
            else:
                print(output)
            return 0

        if existing is not None and not is_managed(existing):
            backup = target.with_name(target.name + ".backup")
            write_text(backup, existing)
            logger.info("Backed up unmanaged %s to %s", target, backup)
            data["backup"] = str(backup)

        write_text(target, output + "\n")
        if formatter.json_mode:
            formatter.json_output({"status": "success", **data})
        else:
            print_success(f"Applied to {target}")
            formatter.text_kv("Merged", " + ".join(plan.sources))
            if plan.language_files:
                formatter.text_kv("Languages", ", ".join(sorted(plan.language_files)))
        return 0

    except StaghornError as e:
        formatter.error(e, error_code="sync_error")
        return 1
