"""Serialize a merged :class:`Document` back to markdown.

Provenance markers are run-length encoded: a marker is written only when the
effective source differs from the most recently emitted one.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from .markers import addition_label, managed_banner, source_marker
from .parser import Document, Section

if TYPE_CHECKING:
    from .merge import MergeOptions


def _render_section(
    section: Section,
    base_source: str,
    annotate: bool,
    current: str,
) -> Tuple[List[str], str]:
    """Render one section and return its blocks plus the new running source."""
    blocks: List[str] = []
    source = section.source or base_source

    head = f"## {section.header}"
    if section.content:
        head = f"{head}\n\n{section.content}"
    if annotate and source and source != current:
        head = f"{source_marker(source)}\n{head}"
        current = source
    blocks.append(head)

    for addition in section.additions:
        block = f"### {addition_label(addition.source)}\n\n{addition.content}"
        if annotate and addition.source and addition.source != current:
            block = f"{source_marker(addition.source)}\n{block}"
            current = addition.source
        blocks.append(block)

    return blocks, current


def render(doc: Document, options: "MergeOptions", base_source: str) -> str:
    """Render a merged document.

    Args:
        doc: Merged document
        options: Merge options (annotation, banner source, date)
        base_source: Source of the base layer; sections without their own
            source inherit it

    Returns:
        Markdown text trimmed of leading/trailing whitespace
    """
    annotate = options.annotate_sources
    blocks: List[str] = []

    if annotate:
        blocks.append(managed_banner(options.source_repo, options.today))

    current = ""
    if doc.preamble:
        if annotate and base_source:
            blocks.append(f"{source_marker(base_source)}\n{doc.preamble}")
        else:
            blocks.append(doc.preamble)
        current = base_source

    for section in doc.sections:
        rendered, current = _render_section(section, base_source, annotate, current)
        blocks.extend(rendered)

    return "\n\n".join(blocks).strip()


__all__ = ["render"]
