"""Tests for language detection and resolution."""
from __future__ import annotations

from pathlib import Path

import pytest

from staghorn.core.language import (
    LanguageConfig,
    detect,
    filter_disabled,
    get_display_name,
    get_language,
    resolve,
)


def _touch(root: Path, *names: str) -> None:
    for name in names:
        (root / name).write_text("", encoding="utf-8")


class TestDetect:
    @pytest.mark.parametrize(
        "markers,expected",
        [
            (["pyproject.toml"], ["python"]),
            (["requirements.txt"], ["python"]),
            (["go.mod"], ["go"]),
            (["package.json"], ["javascript"]),
            (["Cargo.toml"], ["rust"]),
            (["Gemfile"], ["ruby"]),
            (["App.csproj"], ["csharp"]),
            (["Package.swift"], ["swift"]),
            (["build.gradle.kts"], ["java", "kotlin"]),
        ],
    )
    def test_marker_files(self, tmp_path: Path, markers, expected) -> None:
        _touch(tmp_path, *markers)
        assert detect(tmp_path) == expected

    def test_typescript_supersedes_javascript(self, tmp_path: Path) -> None:
        _touch(tmp_path, "package.json", "tsconfig.json")
        assert detect(tmp_path) == ["typescript"]

    def test_results_are_sorted(self, tmp_path: Path) -> None:
        _touch(tmp_path, "pyproject.toml", "go.mod", "Cargo.toml")
        assert detect(tmp_path) == ["go", "python", "rust"]

    def test_empty_project(self, tmp_path: Path) -> None:
        assert detect(tmp_path) == []


class TestResolve:
    def test_explicit_enabled_list_wins(self, tmp_path: Path) -> None:
        _touch(tmp_path, "go.mod")
        cfg = LanguageConfig(enabled=["ruby", "python"], disabled=["ruby"])
        assert resolve(cfg, tmp_path) == ["python"]

    def test_auto_detect_respects_disabled(self, tmp_path: Path) -> None:
        _touch(tmp_path, "go.mod", "pyproject.toml")
        cfg = LanguageConfig(auto_detect=True, disabled=["go"])
        assert resolve(cfg, tmp_path) == ["python"]

    def test_auto_detect_off(self, tmp_path: Path) -> None:
        _touch(tmp_path, "go.mod")
        assert resolve(LanguageConfig(auto_detect=False), tmp_path) == []

    def test_no_project_root(self) -> None:
        assert resolve(LanguageConfig(), None) == []


def test_filter_disabled_preserves_order() -> None:
    assert filter_disabled(["rust", "go", "python"], ["go"]) == ["rust", "python"]


@pytest.mark.parametrize(
    "language_id,name",
    [("python", "Python"), ("csharp", "C#"), ("typescript", "TypeScript"), ("elixir", "Elixir")],
)
def test_display_names(language_id: str, name: str) -> None:
    assert get_display_name(language_id) == name


def test_get_language_unknown() -> None:
    assert get_language("cobol") is None
    assert get_language("go").markers == ("go.mod",)
