import sys
from pathlib import Path
from typing import Callable, Dict, Iterator

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'staghorn'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from staghorn.cli._dispatcher import discover_commands
from staghorn.core.stdlib_logging import reset_logging_for_tests
from staghorn.data import read_yaml as read_data_yaml


@pytest.fixture(autouse=True)
def isolated_staghorn_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Dict[str, Path]]:
    """Point every staghorn user directory into the test's tmp_path.

    CRITICAL: tests must never read or write the real ~/.config/staghorn.
    """
    config_dir = tmp_path / "home" / "config"
    cache_dir = tmp_path / "home" / "cache"
    monkeypatch.setenv("STAGHORN_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("STAGHORN_CACHE_DIR", str(cache_dir))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    yield {"config": config_dir, "cache": cache_dir}
    reset_logging_for_tests()
    read_data_yaml.cache_clear()
    discover_commands.cache_clear()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An isolated project directory with a .staghorn folder."""
    root = tmp_path / "project"
    (root / ".staghorn").mkdir(parents=True)
    return root


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
