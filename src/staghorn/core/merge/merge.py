"""Layer merge algorithm.

Order: team (base) -> personal -> project. The first non-blank layer is the
base; later layers either extend a base section with a labelled
``### <Source> Additions`` subsection or append a brand new top-level section.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from .languages import build_language_section
from .parser import Addition, Document, Section, parse
from .render import render
from staghorn.core.language.loader import LanguageFile

logger = logging.getLogger(__name__)

DEFAULT_SOURCES = ("team", "personal", "project")


@dataclass(frozen=True)
class Layer:
    """A config layer with its source label ("team" | "personal" | "project")."""

    content: str
    source: str

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()


@dataclass
class MergeOptions:
    """Controls a single merge invocation.

    Attributes:
        annotate_sources: Emit the managed banner and provenance markers
        source_repo: Repository label for the banner (e.g. "acme/standards")
        languages: Active language IDs
        language_files: Per-language files, ordered by layer
        today: Date stamped into the banner (defaults to the current date)
    """

    annotate_sources: bool = False
    source_repo: str = ""
    languages: List[str] = field(default_factory=list)
    language_files: Dict[str, List[LanguageFile]] = field(default_factory=dict)
    today: Optional[date] = None


def _select_base(layers: Sequence[Layer]) -> Optional[int]:
    for idx, layer in enumerate(layers):
        if not layer.is_blank:
            return idx
    return None


def merge_layer(base: Document, layer: Layer) -> None:
    """Fold one overlay layer into ``base`` in place."""
    doc = parse(layer.content)
    if doc.preamble:
        logger.debug("Ignoring preamble of %s layer (only sections are merged)", layer.source)

    for section in doc.sections:
        if not section.content.strip():
            continue

        existing = base.find_section(section.header)
        if existing is not None:
            if existing.header != section.header:
                logger.warning(
                    "Section '%s' from %s layer merged into '%s' (header casing differs)",
                    section.header,
                    layer.source,
                    existing.header,
                )
            existing.additions.append(Addition(source=layer.source, content=section.content))
        else:
            base.sections.append(
                Section(header=section.header, content=section.content, source=layer.source)
            )


def merge_document(layers: Sequence[Layer]) -> Tuple[Optional[Document], str]:
    """Merge layers into an in-memory document.

    Returns:
        (document, base_source); document is None when every layer is blank
    """
    base_idx = _select_base(layers)
    if base_idx is None:
        return None, ""

    base_layer = layers[base_idx]
    doc = parse(base_layer.content)
    for section in doc.sections:
        section.source = base_layer.source

    for idx, layer in enumerate(layers):
        if idx == base_idx or layer.is_blank:
            continue
        merge_layer(doc, layer)

    logger.debug(
        "Merged %d layer(s) onto %s base: %d section(s)",
        len(layers),
        base_layer.source,
        len(doc.sections),
    )
    return doc, base_layer.source


def merge(layers: Sequence[Layer], options: Optional[MergeOptions] = None) -> str:
    """Combine layers into a single rendered markdown document.

    Returns an empty string when every layer is blank.
    """
    opts = options or MergeOptions()
    doc, base_source = merge_document(layers)
    if doc is None:
        return ""
    return render(doc, opts, base_source)


def merge_simple(*contents: str) -> str:
    """Merge positional contents tagged team, personal, project, then unknown."""
    layers = [
        Layer(
            content=content,
            source=DEFAULT_SOURCES[idx] if idx < len(DEFAULT_SOURCES) else "unknown",
        )
        for idx, content in enumerate(contents)
    ]
    return merge(layers, MergeOptions())


def merge_with_languages(layers: Sequence[Layer], options: Optional[MergeOptions] = None) -> str:
    """Merge base layers, then append one top-level section per active language."""
    opts = options or MergeOptions()
    base_result = merge(layers, opts)

    if not opts.languages or not opts.language_files:
        return base_result

    language_section = build_language_section(
        opts.languages, opts.language_files, opts.annotate_sources
    )
    if not language_section:
        return base_result

    return f"{base_result}\n\n{language_section}".strip()


__all__ = [
    "Layer",
    "MergeOptions",
    "merge",
    "merge_document",
    "merge_layer",
    "merge_simple",
    "merge_with_languages",
]
