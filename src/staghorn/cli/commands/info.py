"""
Staghorn info command.

SUMMARY: Show configured layers and the merged section outline
"""

from __future__ import annotations

import argparse
from typing import Any, Dict, List

from staghorn.cli import (
    OutputFormatter,
    add_project_output_flag,
    add_standard_flags,
    add_team_flag,
    build_merge_plan,
    get_config,
    get_layer_stack,
    get_project_root,
    output_path_for,
)
from staghorn.core.exceptions import StaghornError
from staghorn.core.merge import addition_label, banner_source, is_managed, merge_document
from staghorn.core.utils.io import read_text

SUMMARY = "Show configured layers and the merged section outline"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Managed output file to inspect (default: config 'output')",
    )
    add_team_flag(parser)
    add_project_output_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_root = get_project_root(args)
        cfg = get_config(args, project_root)
        stack = get_layer_stack(args, cfg, project_root)
        plan = build_merge_plan(cfg, stack, project_root, annotate=False)
        output_path = output_path_for(args, cfg, project_root)
    except StaghornError as e:
        formatter.error(e, error_code="info_error")
        return 1

    doc, base_source = merge_document(plan.layers)
    outline: List[Dict[str, Any]] = []
    if doc is not None:
        for section in doc.sections:
            outline.append(
                {
                    "header": section.header,
                    "source": section.source or base_source,
                    "additions": [a.source for a in section.additions],
                }
            )

    layer_files = [
        {"layer": spec.id, "path": str(spec.path), "present": spec.path.exists()}
        for spec in stack.layers
    ]

    existing = read_text(output_path)
    output_state: Dict[str, Any] = {
        "path": str(output_path),
        "exists": existing is not None,
        "managed": existing is not None and is_managed(existing),
        "source": banner_source(existing) if existing else None,
    }

    if formatter.json_mode:
        formatter.json_output(
            {
                "source": cfg.source,
                "project_root": str(project_root) if project_root else None,
                "base": base_source,
                "layers": layer_files,
                "output": output_state,
                "languages": sorted(plan.language_files),
                "sections": outline,
            }
        )
        return 0

    formatter.text(f"Source: {cfg.source or '(none)'}")
    formatter.text(f"Project: {project_root or '(none)'}")
    if not output_state["exists"]:
        output_note = "not written yet"
    elif output_state["managed"]:
        output_note = f"managed, source {output_state['source']}" if output_state["source"] else "managed"
    else:
        output_note = "not managed by staghorn"
    formatter.text(f"Output: {output_path} ({output_note})")
    formatter.text("")
    formatter.text("Layers:")
    for item in layer_files:
        state = "present" if item["present"] else "missing"
        formatter.text_kv(item["layer"], f"{item['path']} ({state})")
    formatter.text("")
    formatter.text("Sections:")
    if not outline:
        formatter.text("  (none)")
    for entry in outline:
        formatter.text(f"  ## {entry['header']}  [{entry['source']}]")
        for source in entry["additions"]:
            formatter.text(f"     ### {addition_label(source)}  [{source}]")
    if plan.language_files:
        formatter.text("")
        formatter.text("Languages:")
        for language, files in sorted(plan.language_files.items()):
            formatter.text_kv(language, ", ".join(f.source for f in files))
    return 0
