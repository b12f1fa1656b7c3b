"""Provenance marker grammar, managed banner and header level shifting.

Markers are HTML comments and are the only recognized provenance syntax:

    <!-- staghorn:source:team -->           plain source transition
    <!-- staghorn:source:personal:python -->  per-language contribution
"""
from __future__ import annotations

import re
from datetime import date
from typing import Optional

HEADER_MANAGED_PREFIX = "<!-- Managed by staghorn"

MARKER_PATTERN = re.compile(
    r"<!-- staghorn:source:([^:\n]+?)(?::([A-Za-z0-9_.+#\-]+))? -->"
)

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})(.*)$")

MAX_HEADING_LEVEL = 6

_BANNER_SOURCE = re.compile(r"Source: (.+?) \|")


def _marker_label(source: str) -> str:
    # ":" separates the language suffix; markers are single-line.
    return re.sub(r"[:\s]*[:\n][:\s]*", "-", source.strip())


def source_marker(source: str) -> str:
    """Return the plain provenance comment for a source."""
    return f"<!-- staghorn:source:{_marker_label(source)} -->"


def language_marker(source: str, language: str) -> str:
    """Return the compound provenance comment for a per-language contribution."""
    return f"<!-- staghorn:source:{_marker_label(source)}:{language} -->"


def managed_banner(source_repo: str = "", today: Optional[date] = None) -> str:
    """Return the one-line banner that flags a file as machine-managed."""
    stamp = (today or date.today()).isoformat()
    if source_repo:
        return f"{HEADER_MANAGED_PREFIX} | Source: {source_repo} | Do not edit directly | {stamp} -->"
    return f"{HEADER_MANAGED_PREFIX} | Do not edit directly | {stamp} -->"


def is_managed(content: str) -> bool:
    return HEADER_MANAGED_PREFIX in content


def banner_source(content: str) -> Optional[str]:
    """Extract the ``Source:`` label from a managed banner, if any."""
    for line in content.splitlines():
        if line.startswith(HEADER_MANAGED_PREFIX):
            match = _BANNER_SOURCE.search(line)
            return match.group(1) if match else None
    return None


def addition_label(source: str) -> str:
    """Return the sub-header label for a layer's additions."""
    if source == "personal":
        return "Personal Additions"
    if source == "project":
        return "Project Additions"
    if not source:
        return "Additions"
    return source[:1].upper() + source[1:] + " Additions"


def _shift_headers(content: str, delta: int) -> str:
    lines = content.split("\n")
    fence = ""
    for idx, line in enumerate(lines):
        fence_match = FENCE_PATTERN.match(line)
        if fence:
            # A fence closes only on a bare run of its own character, at least as long.
            if (
                fence_match is not None
                and fence_match.group(1)[0] == fence[0]
                and len(fence_match.group(1)) >= len(fence)
                and not fence_match.group(2).strip()
            ):
                fence = ""
            continue
        if fence_match is not None:
            fence = fence_match.group(1)
            continue
        match = HEADING_PATTERN.match(line)
        if match is None:
            continue
        level = min(max(len(match.group(1)) + delta, 1), MAX_HEADING_LEVEL)
        lines[idx] = "#" * level + " " + match.group(2)
    return "\n".join(lines)


def demote_headers(content: str) -> str:
    """Shift every markdown header one level deeper (H6 stays H6).

    Lines inside fenced code blocks are left untouched.
    """
    return _shift_headers(content, 1)


def promote_headers(content: str) -> str:
    """Inverse of :func:`demote_headers` (H1 stays H1)."""
    return _shift_headers(content, -1)


__all__ = [
    "HEADER_MANAGED_PREFIX",
    "MARKER_PATTERN",
    "addition_label",
    "banner_source",
    "demote_headers",
    "is_managed",
    "language_marker",
    "managed_banner",
    "promote_headers",
    "source_marker",
]
