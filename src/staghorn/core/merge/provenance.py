"""Recover per-source content from an annotated merged document.

This is the inverse of the renderer: text between one provenance marker and
the next belongs to that marker's source. Sources that appear several times
(a base block and later per-language blocks) are concatenated, never
overwritten.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from staghorn.core.exceptions import NoProvenanceError

from .markers import MARKER_PATTERN, addition_label, promote_headers
from .parser import H2_PATTERN

_H2_LINE = re.compile(r"^##\s+(.+)$")


@dataclass
class ProvenanceBlock:
    """A contiguous run of text attributed to one source.

    Attributes:
        source: Layer label from the marker
        language: Language ID for per-language markers, else None
        content: Recovered text with the injected additions header removed
        heading: Parent H2 header the block was nested under
    """

    source: str
    language: Optional[str]
    content: str
    heading: str = ""

    @property
    def is_language(self) -> bool:
        return self.language is not None

    @property
    def text(self) -> str:
        """Standalone markdown for this block."""
        if self.is_language and self.heading:
            return f"## {self.heading}\n\n{self.content}".strip()
        return self.content


@dataclass
class ProvenanceSplit:
    """Result of splitting an annotated document by source."""

    layers: List[str] = field(default_factory=list)
    content: Dict[str, str] = field(default_factory=dict)
    blocks: List[ProvenanceBlock] = field(default_factory=list)

    def layer_content(self, source: str, *, include_languages: bool = True) -> str:
        parts = [
            b.text
            for b in self.blocks
            if b.source == source and (include_languages or not b.is_language) and b.text
        ]
        return "\n\n".join(parts)

    def languages_for(self, source: str) -> List[str]:
        seen: List[str] = []
        for b in self.blocks:
            if b.source == source and b.language and b.language not in seen:
                seen.append(b.language)
        return seen

    def language_content(self, source: str, language: str) -> str:
        """Per-language file text for ``source`` with headers promoted back."""
        parts = [
            b.content
            for b in self.blocks
            if b.source == source and b.language == language and b.content
        ]
        return promote_headers("\n\n".join(parts))


def has_provenance(content: str) -> bool:
    """Check whether content carries any provenance marker."""
    return MARKER_PATTERN.search(content) is not None


def list_layers(content: str) -> List[str]:
    """Return distinct marker sources in first-occurrence order."""
    layers: List[str] = []
    for match in MARKER_PATTERN.finditer(content):
        if match.group(1) not in layers:
            layers.append(match.group(1))
    return layers


def _pop_trailing_h2(segment: str) -> Tuple[str, Optional[str]]:
    """Detach a trailing ``## Header`` line that introduces a language block."""
    lines = segment.rstrip().split("\n")
    if lines:
        match = _H2_LINE.match(lines[-1])
        if match:
            return "\n".join(lines[:-1]), match.group(1).strip()
    return segment, None


def _strip_additions_header(segment: str, source: str) -> Tuple[str, bool]:
    body = segment.strip()
    header = f"### {addition_label(source)}"
    first, _, rest = body.partition("\n")
    if first.strip() == header:
        return rest.strip(), True
    return body, False


def parse_provenance(content: str) -> List[ProvenanceBlock]:
    """Split annotated content into ordered provenance blocks.

    Text before the first marker (the managed banner) is discarded.
    """
    matches = list(MARKER_PATTERN.finditer(content))
    if not matches:
        return []

    heading = ""
    preceding = H2_PATTERN.findall(content[: matches[0].start()])
    if preceding:
        heading = preceding[-1].strip()

    blocks: List[ProvenanceBlock] = []
    for idx, match in enumerate(matches):
        source, language = match.group(1), match.group(2)
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(content)
        segment = content[match.end():end]

        next_heading: Optional[str] = None
        if idx + 1 < len(matches) and matches[idx + 1].group(2):
            segment, next_heading = _pop_trailing_h2(segment)

        body, was_addition = _strip_additions_header(segment, source)
        if was_addition and language is None and heading:
            body = f"## {heading}\n\n{body}".strip()

        blocks.append(
            ProvenanceBlock(
                source=source,
                language=language,
                content=body,
                heading=heading if language else "",
            )
        )

        # Language content is demoted, so any H2 inside it is not a parent.
        headers = H2_PATTERN.findall(segment) if language is None else []
        if headers:
            heading = headers[-1].strip()
        if next_heading:
            heading = next_heading

    return blocks


def _aggregate(blocks: List[ProvenanceBlock]) -> Tuple[List[str], Dict[str, str]]:
    layers: List[str] = []
    parts: Dict[str, List[str]] = {}
    for block in blocks:
        if block.source not in parts:
            layers.append(block.source)
            parts[block.source] = []
        if block.text:
            parts[block.source].append(block.text)
    return layers, {source: "\n\n".join(chunks) for source, chunks in parts.items()}


def parse_provenance_by_layer(content: str) -> Dict[str, str]:
    """Aggregate recovered text per source (main and per-language content)."""
    _layers, by_layer = _aggregate(parse_provenance(content))
    return by_layer


def split_provenance(content: str) -> ProvenanceSplit:
    """Split an annotated merged document into its source layers.

    Raises:
        NoProvenanceError: If the document carries no provenance markers
    """
    if not has_provenance(content):
        raise NoProvenanceError()
    blocks = parse_provenance(content)
    layers, by_layer = _aggregate(blocks)
    return ProvenanceSplit(layers=layers, content=by_layer, blocks=blocks)


__all__ = [
    "ProvenanceBlock",
    "ProvenanceSplit",
    "has_provenance",
    "list_layers",
    "parse_provenance",
    "parse_provenance_by_layer",
    "split_provenance",
]
