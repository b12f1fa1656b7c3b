"""Section parsing for layered CLAUDE.md composition.

A document is split on level-2 headers (``## Header``):
- everything before the first H2 is the preamble
- each H2 starts a section that runs until the next H2 or end of input

Level-1 headers are preamble text; level-3 and deeper headers are opaque
body text inside whichever section contains them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

# "###" never matches: the third character must be whitespace.
H2_PATTERN = re.compile(r"^##\s+(.+)$", re.MULTILINE)


@dataclass
class Addition:
    """Content a later layer contributed to an existing section."""

    source: str
    content: str


@dataclass
class Section:
    """An H2-delimited section of markdown.

    Attributes:
        header: The H2 header text (without ``##``)
        content: Everything until the next H2, trimmed
        source: Layer that owns the primary content (assigned during merge)
        additions: Overlay contributions nested under this section
    """

    header: str
    content: str
    source: str = ""
    additions: List[Addition] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Case-insensitive identity used for cross-layer matching."""
        return self.header.lower()


@dataclass
class Document:
    """A parsed markdown document."""

    preamble: str = ""
    sections: List[Section] = field(default_factory=list)

    def find_section(self, header: str) -> Optional[Section]:
        """Find a section by header name (case-insensitive exact match)."""
        wanted = header.lower()
        for section in self.sections:
            if section.key == wanted:
                return section
        return None

    def has_section(self, header: str) -> bool:
        return self.find_section(header) is not None

    def section_headers(self) -> List[str]:
        return [s.header for s in self.sections]


def parse(content: str) -> Document:
    """Split markdown into a preamble and H2 sections.

    Parsing is total: input without any H2 header becomes an all-preamble
    document, and empty input becomes an empty document.
    """
    doc = Document()
    if not content:
        return doc

    matches = list(H2_PATTERN.finditer(content))
    if not matches:
        doc.preamble = content.strip()
        return doc

    doc.preamble = content[: matches[0].start()].strip()

    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(content)
        doc.sections.append(
            Section(
                header=match.group(1).strip(),
                content=content[match.end():end].strip(),
            )
        )

    return doc


__all__ = ["Addition", "Document", "Section", "H2_PATTERN", "parse"]
