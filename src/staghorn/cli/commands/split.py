"""
Staghorn split command.

SUMMARY: Split an annotated CLAUDE.md back into its source layer files
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List

from staghorn.cli import (
    OutputFormatter,
    add_project_output_flag,
    add_standard_flags,
    add_team_flag,
    get_config,
    get_layer_stack,
    get_project_root,
    output_path_for,
    print_success,
)
from staghorn.core.exceptions import NoProvenanceError, StaghornError
from staghorn.core.merge import split_provenance
from staghorn.core.utils.io import read_text

SUMMARY = "Split an annotated CLAUDE.md back into its source layer files"

logger = logging.getLogger(__name__)

NO_PROVENANCE_GUIDANCE = """\
The merged content has no provenance markers to identify which content
belongs to which source layer.

Provenance markers look like: <!-- staghorn:source:team -->

Run 'staghorn sync' with annotation enabled, then edit and split again."""


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        help="Annotated merged file to split (default: config 'output')",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Write recovered content back to the layer files (default: preview)",
    )
    add_team_flag(parser)
    add_project_output_flag(parser)
    add_standard_flags(parser)


def _plan_writes(split, stack) -> List[Dict[str, Any]]:
    """Build the list of layer and language writes recoverable from ``split``."""
    writes: List[Dict[str, Any]] = []
    for source in split.layers:
        spec = stack.layer_by_id(source)
        if spec is None:
            logger.info("Skipping unknown layer: %s", source)
            continue

        main_text = split.layer_content(source, include_languages=False)
        if main_text.strip():
            writes.append({"layer": source, "language": None, "path": spec.path, "content": main_text})

        for language in split.languages_for(source):
            text = split.language_content(source, language)
            if not text.strip() or spec.languages_dir is None:
                continue
            writes.append(
                {
                    "layer": source,
                    "language": language,
                    "path": spec.languages_dir / f"{language}.md",
                    "content": text,
                }
            )
    return writes


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_root = get_project_root(args)
        cfg = get_config(args, project_root)
        stack = get_layer_stack(args, cfg, project_root)
        source_path = Path(args.input).expanduser() if args.input else output_path_for(args, cfg, project_root)

        content = read_text(source_path)
        if content is None:
            raise StaghornError(
                f"nothing to split: {source_path} does not exist",
                hint="Pass --input or run 'staghorn sync' first",
                context={"path": str(source_path)},
            )

        try:
            split = split_provenance(content)
        except NoProvenanceError as e:
            if formatter.json_mode:
                formatter.error(e)
            else:
                formatter.text(NO_PROVENANCE_GUIDANCE)
            return 1

        writes = _plan_writes(split, stack)
        if not writes:
            raise StaghornError(
                "no valid source layers found to apply",
                context={"layers": split.layers},
            )

        if args.apply:
            for item in writes:
                if item["language"]:
                    stack.write_language(item["layer"], item["language"], item["content"])
                else:
                    stack.write_layer(item["layer"], item["content"])

        if formatter.json_mode:
            formatter.json_output(
                {
                    "status": "applied" if args.apply else "preview",
                    "input": str(source_path),
                    "layers": split.layers,
                    "writes": [
                        {
                            "layer": w["layer"],
                            "language": w["language"],
                            "path": str(w["path"]),
                            "bytes": len(w["content"].encode("utf-8")),
                        }
                        for w in writes
                    ],
                }
            )
            return 0

        for item in writes:
            label = f"{item['layer']}:{item['language']}" if item["language"] else item["layer"]
            if args.apply:
                formatter.text_kv(label, f"wrote {item['path']}")
            else:
                formatter.text(f"--- {label} -> {item['path']}")
                formatter.text(item["content"])
                formatter.text("")

        if args.apply:
            applied = sorted({w["layer"] for w in writes}, key=split.layers.index)
            print_success(f"Applied to {', '.join(applied)}")
            formatter.text("Run 'staghorn sync' to regenerate the managed CLAUDE.md.")
        else:
            formatter.text("Preview only. Re-run with --apply to write these files.")
        return 0

    except StaghornError as e:
        formatter.error(e, error_code="split_error")
        return 1
