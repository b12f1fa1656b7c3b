"""Project language detection from marker files."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Language:
    """A supported programming language."""

    id: str
    display_name: str
    markers: Tuple[str, ...]


SUPPORTED_LANGUAGES: Tuple[Language, ...] = (
    Language("python", "Python", ("pyproject.toml", "setup.py", "requirements.txt", "Pipfile", "poetry.lock")),
    Language("go", "Go", ("go.mod",)),
    Language("typescript", "TypeScript", ("tsconfig.json",)),
    Language("javascript", "JavaScript", ("package.json",)),
    Language("rust", "Rust", ("Cargo.toml",)),
    Language("java", "Java", ("pom.xml", "build.gradle", "build.gradle.kts")),
    Language("ruby", "Ruby", ("Gemfile",)),
    Language("csharp", "C#", ("*.csproj", "*.sln")),
    Language("swift", "Swift", ("Package.swift",)),
    Language("kotlin", "Kotlin", ("build.gradle.kts",)),
)


@dataclass
class LanguageConfig:
    """Language selection settings (``languages:`` in config.yaml)."""

    auto_detect: bool = True
    enabled: List[str] = field(default_factory=list)
    disabled: List[str] = field(default_factory=list)


def _marker_present(root: Path, marker: str) -> bool:
    if "*" in marker or "?" in marker:
        return any(root.glob(marker))
    return (root / marker).exists()


def detect(project_root: Path) -> List[str]:
    """Scan ``project_root`` for marker files and return sorted language IDs.

    TypeScript supersedes JavaScript when both are detected.
    """
    root = Path(project_root)
    detected = {
        lang.id
        for lang in SUPPORTED_LANGUAGES
        if any(_marker_present(root, marker) for marker in lang.markers)
    }
    if "typescript" in detected:
        detected.discard("javascript")
    logger.debug("Detected languages in %s: %s", root, sorted(detected))
    return sorted(detected)


def filter_disabled(languages: Iterable[str], disabled: Iterable[str]) -> List[str]:
    """Remove disabled languages, preserving order."""
    blocked = set(disabled)
    return [lang for lang in languages if lang not in blocked]


def resolve(cfg: LanguageConfig, project_root: Optional[Path]) -> List[str]:
    """Determine the active language list from config and detection.

    An explicit ``enabled`` list takes precedence; otherwise languages are
    auto-detected when ``auto_detect`` is set.
    """
    if cfg.enabled:
        return filter_disabled(cfg.enabled, cfg.disabled)
    if not cfg.auto_detect or project_root is None:
        return []
    return filter_disabled(detect(project_root), cfg.disabled)


def get_language(language_id: str) -> Optional[Language]:
    for lang in SUPPORTED_LANGUAGES:
        if lang.id == language_id:
            return lang
    return None


def get_display_name(language_id: str) -> str:
    """Return the display name for a language ID (title-cased when unknown)."""
    lang = get_language(language_id)
    if lang is not None:
        return lang.display_name
    return language_id.title()


__all__ = [
    "SUPPORTED_LANGUAGES",
    "Language",
    "LanguageConfig",
    "detect",
    "filter_disabled",
    "get_display_name",
    "get_language",
    "resolve",
]
