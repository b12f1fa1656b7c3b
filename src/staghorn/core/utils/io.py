"""File I/O for staghorn: atomic text/YAML writes and tolerant reads."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, TextIO, Union

import yaml

PathLike = Union[str, Path]

DEFAULT_FILE_MODE = 0o644


def ensure_parent_dir(path: PathLike) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def atomic_write(path: PathLike, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    The parent directory is created if missing and a leftover temp file is
    removed on failure.
    """
    target = Path(path)
    ensure_parent_dir(target)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(target.parent),
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, DEFAULT_FILE_MODE)
        os.replace(str(tmp_path), str(target))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def read_text(path: PathLike, default: Optional[str] = None) -> Optional[str]:
    """Read a UTF-8 text file.

    Returns ``default`` when the file does not exist; other I/O errors
    propagate to callers.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return default


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(path, _writer)


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with ``yaml.safe_load``.

    Returns ``default`` if the file is missing or invalid, unless
    ``raise_on_error`` is True.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def write_yaml(path: PathLike, data: Any) -> None:
    """Atomically write YAML data to ``path`` (block style, keys kept in order)."""

    def _writer(f: TextIO) -> None:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    atomic_write(path, _writer)


__all__ = [
    "DEFAULT_FILE_MODE",
    "PathLike",
    "atomic_write",
    "ensure_parent_dir",
    "read_text",
    "read_yaml",
    "write_text",
    "write_yaml",
]
