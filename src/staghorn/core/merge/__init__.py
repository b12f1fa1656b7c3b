"""CLAUDE.md section parsing, layered merging and provenance splitting.

Forward path: parse -> merge -> render (plus per-language sections).
Inverse path: split an annotated render back into per-source text.
"""
from .markers import (
    HEADER_MANAGED_PREFIX,
    addition_label,
    banner_source,
    demote_headers,
    is_managed,
    language_marker,
    managed_banner,
    promote_headers,
    source_marker,
)
from .parser import Addition, Document, Section, parse
from .render import render
from .languages import build_language_section
from .merge import (
    Layer,
    MergeOptions,
    merge,
    merge_document,
    merge_layer,
    merge_simple,
    merge_with_languages,
)
from .provenance import (
    ProvenanceBlock,
    ProvenanceSplit,
    has_provenance,
    list_layers,
    parse_provenance,
    parse_provenance_by_layer,
    split_provenance,
)

__all__ = [
    "HEADER_MANAGED_PREFIX",
    "Addition",
    "Document",
    "Layer",
    "MergeOptions",
    "ProvenanceBlock",
    "ProvenanceSplit",
    "Section",
    "addition_label",
    "banner_source",
    "build_language_section",
    "demote_headers",
    "has_provenance",
    "is_managed",
    "language_marker",
    "list_layers",
    "managed_banner",
    "merge",
    "merge_document",
    "merge_layer",
    "merge_simple",
    "merge_with_languages",
    "parse",
    "parse_provenance",
    "parse_provenance_by_layer",
    "promote_headers",
    "render",
    "source_marker",
    "split_provenance",
]
