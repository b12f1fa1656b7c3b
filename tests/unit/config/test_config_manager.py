"""Tests for staghorn config loading and validation.

NO MOCKS - real YAML files under isolated STAGHORN_CONFIG_DIR.
"""
from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from staghorn.core.config import Config, Paths, load_config, parse_duration, parse_repo, save_config
from staghorn.core.config.manager import deep_merge
from staghorn.core.exceptions import ConfigInvalidError, ConfigNotFoundError, InvalidRepoError


def _write_config(text: str) -> Path:
    path = Paths.from_env().config_file
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_missing_config_raises_when_required(self) -> None:
        with pytest.raises(ConfigNotFoundError) as excinfo:
            load_config()
        assert isinstance(excinfo.value, FileNotFoundError)
        assert excinfo.value.hint

    def test_missing_config_uses_defaults_when_optional(self) -> None:
        cfg = load_config(required=False)

        assert cfg.version == 1
        assert cfg.source == ""
        assert cfg.cache_ttl == "24h"
        assert cfg.annotate is True
        assert cfg.languages.auto_detect is True
        assert cfg.languages.enabled == []
        assert cfg.output == "~/.claude/CLAUDE.md"

    def test_user_config_overrides_defaults(self) -> None:
        _write_config(
            "source: acme/standards\n"
            "cache:\n  ttl: 30m\n"
            "languages:\n  enabled: [python, go]\n  disabled: [go]\n"
        )

        cfg = load_config()

        assert cfg.owner_repo() == ("acme", "standards")
        assert cfg.ttl() == timedelta(minutes=30)
        assert cfg.languages.enabled == ["python", "go"]
        assert cfg.languages.disabled == ["go"]
        assert cfg.annotate is True

    def test_project_config_layers_on_top(self, project_root: Path) -> None:
        _write_config("source: acme/standards\n")
        (project_root / ".staghorn" / "config.yaml").write_text("annotate: false\n", encoding="utf-8")

        cfg = load_config(project_root=project_root)

        assert cfg.source == "acme/standards"
        assert cfg.annotate is False

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "elsewhere.yaml"
        path.write_text("output: /tmp/out/CLAUDE.md\n", encoding="utf-8")

        cfg = load_config(path)

        assert cfg.output_path == Path("/tmp/out/CLAUDE.md")

    @pytest.mark.parametrize(
        "text",
        [
            "cache:\n  ttl: forever\n",
            "bogus: 1\n",
            "languages:\n  enabled: python\n",
            "annotate: maybe\n",
            "version: 0\n",
        ],
    )
    def test_schema_violations(self, text: str) -> None:
        _write_config(text)
        with pytest.raises(ConfigInvalidError) as excinfo:
            load_config()
        assert isinstance(excinfo.value, ValueError)
        assert str(excinfo.value).startswith("invalid config:")

    def test_malformed_yaml(self) -> None:
        _write_config("source: [unclosed\n")
        with pytest.raises(ConfigInvalidError):
            load_config()

    def test_invalid_source_repo(self) -> None:
        _write_config("source: not a repo\n")
        with pytest.raises(InvalidRepoError):
            load_config()


class TestSaveConfig:
    def test_round_trip(self) -> None:
        written = save_config(Config(source="acme/standards", annotate=False))

        assert written == Paths.from_env().config_file
        cfg = load_config()
        assert cfg.source == "acme/standards"
        assert cfg.annotate is False

    def test_invalid_config_is_not_written(self) -> None:
        with pytest.raises(ConfigInvalidError):
            save_config(Config(cache_ttl="soon"))
        assert not Paths.from_env().config_file.exists()


@pytest.mark.parametrize(
    "value,expected",
    [
        ("24h", timedelta(hours=24)),
        ("1h30m", timedelta(minutes=90)),
        ("45s", timedelta(seconds=45)),
        ("500ms", timedelta(milliseconds=500)),
    ],
)
def test_parse_duration(value: str, expected: timedelta) -> None:
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "10", "h", "5d", "1h5d"])
def test_parse_duration_invalid(value: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(value)


@pytest.mark.parametrize(
    "repo",
    [
        "acme/standards",
        "github.com/acme/standards",
        "https://github.com/acme/standards.git",
        "github.com/acme/standards/",
    ],
)
def test_parse_repo(repo: str) -> None:
    assert parse_repo(repo) == ("acme", "standards")


@pytest.mark.parametrize("repo", ["", "acme", "a/b/c", "acme/stan dards"])
def test_parse_repo_invalid(repo: str) -> None:
    with pytest.raises(InvalidRepoError):
        parse_repo(repo)


def test_deep_merge_does_not_mutate() -> None:
    base = {"cache": {"ttl": "24h"}, "languages": {"enabled": ["go"]}}
    override = {"cache": {"ttl": "1h"}, "languages": {"enabled": ["python"]}}

    merged = deep_merge(base, override)

    assert merged == {"cache": {"ttl": "1h"}, "languages": {"enabled": ["python"]}}
    assert base["cache"]["ttl"] == "24h"
