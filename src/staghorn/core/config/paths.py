"""Filesystem layout for staghorn.

User-level files live under ``~/.config/staghorn`` and ``~/.cache/staghorn``
(overridable with ``STAGHORN_CONFIG_DIR`` / ``STAGHORN_CACHE_DIR``).
Project-level files live under ``<project>/.staghorn``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

PROJECT_DIR_NAME = ".staghorn"
OUTPUT_FILENAME = "CLAUDE.md"


def _env_dir(name: str, fallback: Path) -> Path:
    value = os.environ.get(name, "").strip()
    if value:
        return Path(value).expanduser()
    return fallback


@dataclass(frozen=True)
class Paths:
    """User-level staghorn paths."""

    config_dir: Path
    cache_dir: Path

    @classmethod
    def from_env(cls) -> "Paths":
        home = Path.home()
        return cls(
            config_dir=_env_dir("STAGHORN_CONFIG_DIR", home / ".config" / "staghorn"),
            cache_dir=_env_dir("STAGHORN_CACHE_DIR", home / ".cache" / "staghorn"),
        )

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.yaml"

    @property
    def personal_md(self) -> Path:
        return self.config_dir / "personal.md"

    @property
    def personal_languages(self) -> Path:
        return self.config_dir / "languages"

    def cache_file(self, owner: str, repo: str) -> Path:
        """Cached team CLAUDE.md for ``owner/repo``."""
        return self.cache_dir / f"{owner}-{repo}.md"

    def team_languages_dir(self, owner: str, repo: str) -> Path:
        return self.cache_dir / f"{owner}-{repo}-languages"


@dataclass(frozen=True)
class ProjectPaths:
    """Project-level staghorn paths."""

    root: Path

    @property
    def staghorn_dir(self) -> Path:
        return self.root / PROJECT_DIR_NAME

    @property
    def source_md(self) -> Path:
        """Project overlay source of truth (.staghorn/project.md)."""
        return self.staghorn_dir / "project.md"

    @property
    def output_md(self) -> Path:
        return self.root / OUTPUT_FILENAME

    @property
    def languages_dir(self) -> Path:
        return self.staghorn_dir / "languages"

    @property
    def config_file(self) -> Path:
        return self.staghorn_dir / "config.yaml"


def find_project_root(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start`` looking for a ``.staghorn`` or ``.git`` directory."""
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_DIR_NAME).is_dir() or (candidate / ".git").exists():
            return candidate
    return None


__all__ = ["OUTPUT_FILENAME", "PROJECT_DIR_NAME", "Paths", "ProjectPaths", "find_project_root"]
