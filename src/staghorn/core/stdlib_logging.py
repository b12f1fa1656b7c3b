from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_KEY: Optional[str] = None
_STAGHORN_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Configure the root logger for the staghorn CLI.

    Logs go to ``log_path`` when given, otherwise to stderr (stdout stays
    reserved for command output). Idempotent per process for the same target.
    """
    global _CONFIGURED_KEY, _STAGHORN_HANDLER

    key = f"{Path(log_path).resolve() if log_path else '<stderr>'}:{level.upper()}"
    if _CONFIGURED_KEY == key and _STAGHORN_HANDLER is not None:
        return

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _STAGHORN_HANDLER is not None:
        root.removeHandler(_STAGHORN_HANDLER)
        _STAGHORN_HANDLER.close()
        _STAGHORN_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        target = Path(log_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(target), encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _STAGHORN_HANDLER = handler
    _CONFIGURED_KEY = key


def reset_logging_for_tests() -> None:
    """Test-only: remove the staghorn-installed handler."""
    global _CONFIGURED_KEY, _STAGHORN_HANDLER
    if _STAGHORN_HANDLER is not None:
        logging.getLogger().removeHandler(_STAGHORN_HANDLER)
        _STAGHORN_HANDLER.close()
    _CONFIGURED_KEY = None
    _STAGHORN_HANDLER = None


__all__ = ["LOG_FORMAT", "configure_logging", "reset_logging_for_tests"]
