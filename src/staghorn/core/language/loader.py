"""Load per-language config files from the team, personal and project layers."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^#{1,6}\s+.*$", re.MULTILINE)
HTML_COMMENT_PATTERN = re.compile(r"<!--[\s\S]*?-->")


@dataclass
class LanguageFile:
    """A loaded language config file.

    Attributes:
        language: Language ID (e.g. "python")
        content: File contents
        source: "team" | "personal" | "project"
        path: Origin path of the file
    """

    language: str
    content: str
    source: str
    path: Optional[Path] = None


def has_user_content(content: str) -> bool:
    """Check whether a markdown file holds more than headings and comments.

    Personal and project language files are often scaffolded with just a
    heading; such files are skipped during loading.
    """
    stripped = HTML_COMMENT_PATTERN.sub("", content)
    stripped = HEADING_PATTERN.sub("", stripped)
    return bool(stripped.strip())


def _read_language_file(directory: Path, language: str) -> Optional[Tuple[str, Path]]:
    path = Path(directory) / f"{language}.md"
    try:
        return path.read_text(encoding="utf-8"), path
    except FileNotFoundError:
        return None


def load_language_files(
    languages: Sequence[str],
    team_dir: Optional[Path] = None,
    personal_dir: Optional[Path] = None,
    project_dir: Optional[Path] = None,
) -> Dict[str, List[LanguageFile]]:
    """Load language files from every layer for the given languages.

    Team files are always included; personal and project files only when
    they contain user content. Languages without any file are omitted.
    """
    layer_dirs = (("team", team_dir), ("personal", personal_dir), ("project", project_dir))
    result: Dict[str, List[LanguageFile]] = {}

    for language in languages:
        files: List[LanguageFile] = []
        for source, directory in layer_dirs:
            if directory is None:
                continue
            loaded = _read_language_file(directory, language)
            if loaded is None:
                continue
            content, path = loaded
            if source != "team" and not has_user_content(content):
                logger.debug("Skipping %s (no user content)", path)
                continue
            files.append(LanguageFile(language=language, content=content, source=source, path=path))
        if files:
            result[language] = files

    return result


def list_available_languages(*directories: Optional[Path]) -> List[str]:
    """Return sorted language IDs that have a ``<id>.md`` file in any directory."""
    found = set()
    for directory in directories:
        if directory is None or not Path(directory).is_dir():
            continue
        for entry in Path(directory).iterdir():
            if entry.is_file() and entry.suffix == ".md":
                found.add(entry.stem)
    return sorted(found)


__all__ = ["LanguageFile", "has_user_content", "list_available_languages", "load_language_files"]
