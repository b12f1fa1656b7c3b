"""Tests for `staghorn info` and `staghorn languages`."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from staghorn.cli._dispatcher import main
from staghorn.core.config import Paths


@pytest.fixture
def team_file(tmp_path: Path, write_file) -> Path:
    team = write_file(tmp_path / "standards" / "CLAUDE.md", "## Code Style\n\nFormat code.\n\n## Testing\n\nt\n")
    write_file(tmp_path / "standards" / "languages" / "python.md", "Use black.\n")
    paths = Paths.from_env()
    write_file(paths.personal_md, "## code style\n\ntabs\n\n## Editor\n\nvim\n")
    write_file(paths.personal_languages / "python.md", "# Python\n\n<!-- Add your preferences -->\n")
    write_file(paths.personal_languages / "go.md", "Run gofmt.\n")
    return team


class TestInfo:
    def test_json_outline(self, team_file, project_root, capsys) -> None:
        code = main(["info", "--team", str(team_file), "--project-root", str(project_root), "--json"])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["base"] == "team"
        assert payload["sections"] == [
            {"header": "Code Style", "source": "team", "additions": ["personal"]},
            {"header": "Testing", "source": "team", "additions": []},
            {"header": "Editor", "source": "personal", "additions": []},
        ]
        present = {item["layer"]: item["present"] for item in payload["layers"]}
        assert present == {"team": True, "personal": True, "project": False}

    def test_text_outline(self, team_file, project_root, capsys) -> None:
        assert main(["info", "--team", str(team_file), "--project-root", str(project_root)]) == 0

        out = capsys.readouterr().out
        assert "## Code Style  [team]" in out
        assert "### Personal Additions  [personal]" in out
        assert "## Editor  [personal]" in out

    def test_missing_config(self, project_root, capsys) -> None:
        assert main(["info", "--project-root", str(project_root)]) == 1
        assert "config file not found" in capsys.readouterr().err


class TestLanguages:
    def test_active_languages_and_layers(self, team_file, project_root, write_file, capsys) -> None:
        write_file(project_root / "pyproject.toml", "")

        code = main(["languages", "--team", str(team_file), "--project-root", str(project_root), "--json"])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["detected"] == ["python"]
        assert payload["active"] == ["go", "python"]
        rows = {row["id"]: row for row in payload["languages"]}
        assert rows["python"]["layers"] == ["team"]
        assert rows["python"]["detected"] is True
        assert rows["go"]["layers"] == ["personal"]

    def test_explicit_enabled_list(self, team_file, project_root, write_file, capsys) -> None:
        write_file(Paths.from_env().config_file, "languages:\n  enabled: [go]\n")

        code = main(["languages", "--team", str(team_file), "--project-root", str(project_root)])

        assert code == 0
        out = capsys.readouterr().out
        assert "Mode: explicit" in out
        assert "Go (go): personal" in out
        assert "Python (python)" not in out


class TestInfoOutputState:
    def test_reports_managed_output_and_banner_source(self, project_root, write_file, capsys) -> None:
        paths = Paths.from_env()
        write_file(paths.config_file, "source: acme/standards\n")
        write_file(paths.cache_file("acme", "standards"), "## Code Style\n\nFormat code.\n")
        assert main(["sync", "--project-root", str(project_root), "--project"]) == 0
        capsys.readouterr()

        assert main(["info", "--project-root", str(project_root), "--project", "--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["output"] == {
            "path": str(project_root.resolve() / "CLAUDE.md"),
            "exists": True,
            "managed": True,
            "source": "acme/standards",
        }

    def test_reports_unmanaged_output(self, team_file, project_root, tmp_path, capsys) -> None:
        out = tmp_path / "notes.md"
        out.write_text("## Mine\n\nhand written\n", encoding="utf-8")

        code = main(
            ["info", "--team", str(team_file), "--project-root", str(project_root), "--output", str(out)]
        )

        assert code == 0
        assert f"Output: {out} (not managed by staghorn)" in capsys.readouterr().out
