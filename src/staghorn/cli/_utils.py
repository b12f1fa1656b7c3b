"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from staghorn.core.config import Config, Paths, ProjectPaths, find_project_root, load_config
from staghorn.core.exceptions import StaghornError
from staghorn.core.language import LanguageFile, filter_disabled, resolve
from staghorn.core.layers import LayerStack, resolve_layer_stack
from staghorn.core.merge import Layer, MergeOptions, merge_with_languages


def get_project_root(args: argparse.Namespace) -> Optional[Path]:
    """Get project root from ``--project-root`` or auto-detect (may be None)."""
    explicit = getattr(args, "project_root", None)
    if explicit:
        return Path(explicit).resolve()
    return find_project_root()


def get_config(args: argparse.Namespace, project_root: Optional[Path]) -> Config:
    """Load config, tolerating a missing file when ``--team`` is given."""
    explicit = getattr(args, "config", None)
    return load_config(
        Path(explicit) if explicit else None,
        project_root=project_root,
        required=not getattr(args, "team", None),
    )


def get_layer_stack(args: argparse.Namespace, cfg: Config, project_root: Optional[Path]) -> LayerStack:
    team = getattr(args, "team", None)
    return resolve_layer_stack(
        cfg,
        Paths.from_env(),
        project_root=project_root,
        team_override=Path(team) if team else None,
    )


def resolve_active_languages(cfg: Config, stack: LayerStack, project_root: Optional[Path]) -> List[str]:
    """Determine active languages, sorted for deterministic output.

    An explicit ``languages.enabled`` list wins. Otherwise languages with a
    file in any layer are combined with those detected in the project.
    """
    if cfg.languages.enabled:
        return sorted(filter_disabled(cfg.languages.enabled, cfg.languages.disabled))
    if not cfg.languages.auto_detect:
        return []
    available = set(stack.available_languages())
    if project_root is not None:
        available.update(resolve(cfg.languages, project_root))
    return sorted(filter_disabled(available, cfg.languages.disabled))


@dataclass
class MergePlan:
    """Everything needed to render the managed document."""

    layers: List[Layer]
    options: MergeOptions
    language_files: Dict[str, List[LanguageFile]] = field(default_factory=dict)

    def render(self) -> str:
        return merge_with_languages(self.layers, self.options)

    @property
    def sources(self) -> List[str]:
        return [layer.source for layer in self.layers if not layer.is_blank]


def build_merge_plan(
    cfg: Config,
    stack: LayerStack,
    project_root: Optional[Path],
    *,
    annotate: bool = True,
) -> MergePlan:
    layers = stack.read_layers()
    languages = resolve_active_languages(cfg, stack, project_root)
    language_files = stack.load_language_files(languages) if languages else {}
    options = MergeOptions(
        annotate_sources=annotate,
        source_repo=cfg.source,
        languages=languages,
        language_files=language_files,
    )
    return MergePlan(layers=layers, options=options, language_files=language_files)


def output_path_for(args: argparse.Namespace, cfg: Config, project_root: Optional[Path] = None) -> Path:
    """Resolve the managed output file: --output, then --project, then config."""
    explicit = getattr(args, "output", None)
    if explicit:
        return Path(explicit).expanduser()
    if getattr(args, "project", False):
        if project_root is None:
            raise StaghornError(
                "--project needs a project root",
                hint="Run inside a repository or pass --project-root",
            )
        return ProjectPaths(project_root).output_md
    return cfg.output_path
