"""Per-language block composition.

Each active language becomes its own top-level ``## <Display Name>`` section.
Content headers are demoted one level so they nest under the language header;
layers after the first are wrapped in ``### <Source> Additions`` blocks.
"""
from __future__ import annotations

from typing import List, Mapping, Sequence

from .markers import addition_label, demote_headers, language_marker
from staghorn.core.language.detect import get_display_name
from staghorn.core.language.loader import LanguageFile


def _compose_language(language: str, files: Sequence[LanguageFile], annotate: bool) -> str:
    blocks: List[str] = [f"## {get_display_name(language)}"]
    first = True

    for lang_file in files:
        content = lang_file.content.strip()
        if not content:
            continue
        content = demote_headers(content)

        if not first:
            content = f"### {addition_label(lang_file.source)}\n\n{content}"
        if annotate:
            content = f"{language_marker(lang_file.source, language)}\n{content}"

        blocks.append(content)
        first = False

    if first:
        return ""
    return "\n\n".join(blocks)


def build_language_section(
    languages: Sequence[str],
    files: Mapping[str, Sequence[LanguageFile]],
    annotate: bool,
) -> str:
    """Build one top-level section per active language that has files.

    Args:
        languages: Active language IDs
        files: Language files by language ID, ordered team -> personal -> project
        annotate: Precede each layer's contribution with a source:language marker

    Returns:
        Composed markdown, or an empty string when no language has content
    """
    if not files:
        return ""

    composed: List[str] = []
    for language in sorted(set(languages)):
        lang_files = files.get(language)
        if not lang_files:
            continue
        block = _compose_language(language, lang_files, annotate)
        if block:
            composed.append(block)

    return "\n\n".join(composed).strip()


__all__ = ["build_language_section"]
