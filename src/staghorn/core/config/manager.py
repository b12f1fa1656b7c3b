"""
Staghorn configuration loading (YAML + JSON Schema validation).

Configuration sources (lowest to highest priority):
1. Bundled defaults: staghorn.data/config/defaults.yaml
2. User config: ~/.config/staghorn/config.yaml
3. Project config: <project>/.staghorn/config.yaml (optional)
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import jsonschema
from jsonschema import Draft202012Validator

from staghorn.core.exceptions import ConfigInvalidError, ConfigNotFoundError, InvalidRepoError
from staghorn.core.language.detect import LanguageConfig
from staghorn.core.utils.io import read_yaml, write_yaml
from staghorn.data import read_yaml as read_data_yaml

from .paths import Paths, ProjectPaths

logger = logging.getLogger(__name__)

DEFAULT_VERSION = 1
DEFAULT_CACHE_TTL = "24h"

_DURATION_PART = re.compile(r"([0-9]+(?:\.[0-9]+)?)(ns|us|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_REPO_PART = re.compile(r"^[A-Za-z0-9_.\-]+$")


@dataclass
class Config:
    """Parsed ``config.yaml``."""

    version: int = DEFAULT_VERSION
    source: str = ""
    cache_ttl: str = DEFAULT_CACHE_TTL
    languages: LanguageConfig = field(default_factory=LanguageConfig)
    output: str = "~/.claude/CLAUDE.md"
    annotate: bool = True

    @property
    def output_path(self) -> Path:
        return Path(self.output).expanduser()

    def owner_repo(self) -> Tuple[str, str]:
        return parse_repo(self.source)

    def ttl(self) -> timedelta:
        try:
            return parse_duration(self.cache_ttl)
        except ValueError:
            return parse_duration(DEFAULT_CACHE_TTL)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"version": self.version}
        if self.source:
            data["source"] = self.source
        data["cache"] = {"ttl": self.cache_ttl}
        data["languages"] = {
            "auto_detect": self.languages.auto_detect,
            "enabled": list(self.languages.enabled),
            "disabled": list(self.languages.disabled),
        }
        data["output"] = self.output
        data["annotate"] = self.annotate
        return data


def parse_duration(value: str) -> timedelta:
    """Parse a Go-style duration such as ``24h``, ``1h30m`` or ``45s``."""
    text = value.strip()
    pos = 0
    seconds = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if not text or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return timedelta(seconds=seconds)


def parse_repo(repo: str) -> Tuple[str, str]:
    """Split ``owner/repo`` (optionally prefixed with a github.com URL)."""
    text = repo.strip()
    for prefix in ("https://", "http://"):
        if text.startswith(prefix):
            text = text[len(prefix):]
    if text.startswith("github.com/"):
        text = text[len("github.com/"):]
    text = text.rstrip("/")
    if text.endswith(".git"):
        text = text[: -len(".git")]

    parts = text.split("/")
    if len(parts) != 2 or not all(_REPO_PART.match(p) for p in parts):
        raise InvalidRepoError(repo)
    return parts[0], parts[1]


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs (lists replace)."""
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def validate_config_data(data: Dict[str, Any]) -> None:
    """Validate raw config data against the bundled JSON schema.

    Raises:
        ConfigInvalidError: On the first schema violation (sorted by path)
    """
    schema = read_data_yaml("schemas", "config.schema.yaml")
    validator = Draft202012Validator(schema)
    errors: List[jsonschema.ValidationError] = sorted(
        validator.iter_errors(data), key=lambda e: list(e.path)
    )
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.path) or "<root>"
        raise ConfigInvalidError(
            f"{location}: {first.message}",
            context={"errors": [e.message for e in errors]},
        )


def _load_file(path: Path) -> Dict[str, Any]:
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except Exception as exc:
        raise ConfigInvalidError("failed to parse config YAML", hint="Check config syntax") from exc
    if not isinstance(data, dict):
        raise ConfigInvalidError(f"expected a mapping in {path}")
    return data


def config_from_dict(data: Dict[str, Any]) -> Config:
    """Build a :class:`Config` from validated data."""
    languages = data.get("languages") or {}
    enabled = list(languages.get("enabled") or [])
    auto_detect = languages.get("auto_detect")
    if auto_detect is None:
        auto_detect = not enabled

    cfg = Config(
        version=int(data.get("version") or DEFAULT_VERSION),
        source=str(data.get("source") or ""),
        cache_ttl=str((data.get("cache") or {}).get("ttl") or DEFAULT_CACHE_TTL),
        languages=LanguageConfig(
            auto_detect=bool(auto_detect),
            enabled=enabled,
            disabled=list(languages.get("disabled") or []),
        ),
        output=str(data.get("output") or Config.output),
        annotate=bool(data.get("annotate", True)),
    )
    if cfg.source:
        parse_repo(cfg.source)
    try:
        parse_duration(cfg.cache_ttl)
    except ValueError as exc:
        raise ConfigInvalidError(
            "invalid cache.ttl format, use a duration such as 24h or 30m"
        ) from exc
    return cfg


def load_config(
    path: Optional[Path] = None,
    *,
    project_root: Optional[Path] = None,
    required: bool = True,
) -> Config:
    """Load, merge and validate staghorn configuration.

    Args:
        path: Explicit config file (defaults to ~/.config/staghorn/config.yaml)
        project_root: When given, ``.staghorn/config.yaml`` is layered on top
        required: Raise :class:`ConfigNotFoundError` when the user file is missing

    Returns:
        Config: Validated configuration
    """
    config_path = Path(path) if path else Paths.from_env().config_file
    merged: Dict[str, Any] = dict(read_data_yaml("config", "defaults.yaml"))

    if config_path.exists():
        user_data = _load_file(config_path)
        validate_config_data(user_data)
        merged = deep_merge(merged, user_data)
    elif required:
        raise ConfigNotFoundError(str(config_path))

    if project_root is not None:
        project_file = ProjectPaths(Path(project_root)).config_file
        if project_file.exists():
            project_data = _load_file(project_file)
            validate_config_data(project_data)
            merged = deep_merge(merged, project_data)
            logger.debug("Applied project config %s", project_file)

    validate_config_data(merged)
    return config_from_dict(merged)


def save_config(cfg: Config, path: Optional[Path] = None) -> Path:
    """Write config as YAML (atomic) and return the written path."""
    target = Path(path) if path else Paths.from_env().config_file
    data = cfg.to_dict()
    validate_config_data(data)
    write_yaml(target, data)
    return target


__all__ = [
    "Config",
    "DEFAULT_CACHE_TTL",
    "config_from_dict",
    "deep_merge",
    "load_config",
    "parse_duration",
    "parse_repo",
    "save_config",
    "validate_config_data",
]
