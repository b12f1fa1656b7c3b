"""Tests for the layer merge algorithm.

NO MOCKS - plain strings in, plain strings out.
"""
from __future__ import annotations

import logging

from staghorn.core.language import LanguageFile
from staghorn.core.merge import (
    Layer,
    MergeOptions,
    merge,
    merge_document,
    merge_simple,
    merge_with_languages,
)


class TestMergeScenario:
    def test_personal_addition_under_team_section(self) -> None:
        """Matching headers nest the overlay under a Personal Additions subsection."""
        layers = [
            Layer(content="## Code Style\n\nFormat code.", source="team"),
            Layer(content="## Code Style\n\nI prefer tabs.", source="personal"),
        ]

        result = merge(layers, MergeOptions(annotate_sources=False))

        assert result == "## Code Style\n\nFormat code.\n\n### Personal Additions\n\nI prefer tabs."
        assert "<!--" not in result
        assert result.count("## Code Style") == 1

    def test_new_section_is_appended_as_peer(self) -> None:
        layers = [
            Layer(content="## X\n\nx content", source="team"),
            Layer(content="## Y\n\ny content", source="personal"),
        ]

        result = merge(layers)

        assert result == "## X\n\nx content\n\n## Y\n\ny content"
        assert "Additions" not in result


class TestMergeOrdering:
    def test_base_order_preserved_and_new_sections_appended(self) -> None:
        layers = [
            Layer(content="## A\n\na\n\n## B\n\nb", source="team"),
            Layer(content="## C\n\nc\n\n## A\n\nmore a", source="personal"),
            Layer(content="## D\n\nd", source="project"),
        ]

        doc, base = merge_document(layers)

        assert base == "team"
        assert doc is not None
        assert doc.section_headers() == ["A", "B", "C", "D"]
        assert [s.source for s in doc.sections] == ["team", "team", "personal", "project"]

    def test_additions_do_not_change_parent_source(self) -> None:
        layers = [
            Layer(content="## A\n\na", source="team"),
            Layer(content="## A\n\npa", source="personal"),
            Layer(content="## A\n\nja", source="project"),
        ]

        doc, _base = merge_document(layers)

        assert doc is not None
        section = doc.sections[0]
        assert section.source == "team"
        assert [(a.source, a.content) for a in section.additions] == [
            ("personal", "pa"),
            ("project", "ja"),
        ]

    def test_additions_render_in_layer_order(self) -> None:
        result = merge_simple("## A\n\none", "## A\n\ntwo", "## A\n\nthree")
        assert result == (
            "## A\n\none\n\n"
            "### Personal Additions\n\ntwo\n\n"
            "### Project Additions\n\nthree"
        )


class TestBlankSkipping:
    def test_all_blank_layers_yield_empty_string(self) -> None:
        layers = [Layer(content="", source="team"), Layer(content="  \n\t\n", source="personal")]
        assert merge(layers) == ""
        assert merge_document(layers) == (None, "")

    def test_blank_team_layer_makes_next_layer_the_base(self) -> None:
        layers = [
            Layer(content="   \n", source="team"),
            Layer(content="## A\n\npersonal a", source="personal"),
            Layer(content="## A\n\nproject a", source="project"),
        ]

        doc, base = merge_document(layers)

        assert base == "personal"
        assert doc is not None
        assert doc.sections[0].source == "personal"
        assert merge(layers) == "## A\n\npersonal a\n\n### Project Additions\n\nproject a"

    def test_empty_overlay_sections_are_dropped(self) -> None:
        layers = [
            Layer(content="## A\n\na", source="team"),
            Layer(content="## A\n\n## B\n\n   \n## C\n\nc", source="personal"),
        ]

        result = merge(layers)

        assert result == "## A\n\na\n\n## C\n\nc"
        assert "Additions" not in result

    def test_overlay_preamble_is_ignored(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="staghorn.core.merge.merge")
        layers = [
            Layer(content="# Team\n\n## A\n\na", source="team"),
            Layer(content="personal intro\n\n## B\n\nb", source="personal"),
        ]

        result = merge(layers)

        assert "personal intro" not in result
        assert result.startswith("# Team")
        assert any("Ignoring preamble" in r.getMessage() for r in caplog.records)


class TestCaseInsensitiveMatching:
    def test_differently_cased_headers_merge(self) -> None:
        layers = [
            Layer(content="## Code Style\n\nteam rules", source="team"),
            Layer(content="## code style\n\nmy rules", source="personal"),
        ]

        doc, _base = merge_document(layers)

        assert doc is not None
        assert doc.section_headers() == ["Code Style"]
        assert doc.sections[0].additions[0].content == "my rules"

    def test_casing_collision_is_logged(self, caplog) -> None:
        caplog.set_level(logging.WARNING, logger="staghorn.core.merge.merge")
        layers = [
            Layer(content="## Code Style\n\nteam rules", source="team"),
            Layer(content="## CODE STYLE\n\nmy rules", source="personal"),
        ]

        merge(layers)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "CODE STYLE" in warnings[0].getMessage()

    def test_identical_casing_is_not_logged(self, caplog) -> None:
        caplog.set_level(logging.WARNING, logger="staghorn.core.merge.merge")
        merge_simple("## A\n\na", "## A\n\nb")
        assert not [r for r in caplog.records if r.levelno == logging.WARNING]


class TestMergeSimple:
    def test_extra_layers_are_unknown(self) -> None:
        result = merge_simple("## A\n\n1", "", "", "## A\n\n4")
        assert result == "## A\n\n1\n\n### Unknown Additions\n\n4"

    def test_never_annotates(self) -> None:
        assert "<!--" not in merge_simple("## A\n\n1", "## B\n\n2")


class TestMergeWithLanguages:
    def test_without_languages_equals_base_merge(self) -> None:
        layers = [Layer(content="## A\n\na", source="team")]
        opts = MergeOptions(
            languages=[],
            language_files={"python": [LanguageFile(language="python", content="x", source="team")]},
        )
        assert merge_with_languages(layers, opts) == merge(layers, opts)

    def test_language_sections_are_appended(self) -> None:
        layers = [Layer(content="## A\n\na", source="team")]
        opts = MergeOptions(
            languages=["python"],
            language_files={
                "python": [LanguageFile(language="python", content="## Style\n\nUse black.", source="team")]
            },
        )

        result = merge_with_languages(layers, opts)

        assert result == "## A\n\na\n\n## Python\n\n### Style\n\nUse black."

    def test_languages_only(self) -> None:
        opts = MergeOptions(
            languages=["go"],
            language_files={"go": [LanguageFile(language="go", content="Run gofmt.", source="personal")]},
        )
        assert merge_with_languages([], opts) == "## Go\n\nRun gofmt."
