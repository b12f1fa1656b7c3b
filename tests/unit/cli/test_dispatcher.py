"""Tests for command auto-discovery."""
from __future__ import annotations

import pytest

from staghorn import __version__
from staghorn.cli._dispatcher import build_parser, discover_commands, main


def test_discovers_all_commands() -> None:
    commands = discover_commands()
    assert {"sync", "info", "split", "languages"} <= set(commands)
    for info in commands.values():
        assert callable(info["main"])
        assert callable(info["register_args"])
        assert info["summary"]


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: staghorn" in capsys.readouterr().out


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_log_file(tmp_path, project_root) -> None:
    log_path = tmp_path / "logs" / "staghorn.log"

    main(["--log-file", str(log_path), "info", "--project-root", str(project_root), "--verbose"])

    assert log_path.exists()
