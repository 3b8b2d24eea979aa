"""Heading recognition for Markdown documents.

Single-pass scan that classifies every line as an ATX heading (depth 1–6),
the opening fence of a code block (depth ``CODE_DEPTH`` in mixed documents),
or ordinary body content. Headings inside fenced code blocks are suppressed.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from foldcycle.models.cycle import CODE_DEPTH, DocumentKind, LeafRegion

if TYPE_CHECKING:
    from collections.abc import Sequence

_HEADING_RE = re.compile(r"^(#{1,6})\s+\S")
_FENCE_RE = re.compile(r"^(`{3,}|~{3,})(.*)$")


class MarkdownClassifier:
    """HeadingClassifier over a fixed list of Markdown lines.

    Also exposes the code blocks it found as leaf regions, so the same scan
    feeds both the document model and the leaf-region layer.
    """

    def __init__(self, lines: Sequence[str], kind: DocumentKind = DocumentKind.MIXED) -> None:
        self.kind = kind
        self._depths: dict[int, int] = {}
        self.leaf_regions: list[LeafRegion] = []
        self._scan(lines)

    def classify(self, line: int) -> int | None:
        return self._depths.get(line)

    def _scan(self, lines: Sequence[str]) -> None:
        fence_char: str | None = None
        fence_len = 0
        fence_start = 0

        for lineno, line in enumerate(lines):
            stripped = line.strip()

            # Rule 1: code block tracking
            fence_match = _FENCE_RE.match(stripped)
            if fence_match:
                fence, info = fence_match.groups()
                if fence_char is None:
                    fence_char = fence[0]
                    fence_len = len(fence)
                    fence_start = lineno
                    if self.kind is DocumentKind.MIXED:
                        self._depths[lineno] = CODE_DEPTH
                elif fence[0] == fence_char and len(fence) >= fence_len and not info.strip():
                    # Closing fence: same character, at least as long, no info string
                    self._close_region(fence_start, lineno)
                    fence_char = None
                continue

            if fence_char is not None:
                continue

            # Rule 2: heading detection
            match = _HEADING_RE.match(line)
            if match:
                self._depths[lineno] = len(match.group(1))

        if fence_char is not None:
            # Unclosed fence runs to the end of the document
            self._close_region(fence_start, len(lines) - 1)

    def _close_region(self, start: int, end: int) -> None:
        if self.kind is DocumentKind.MIXED:
            self.leaf_regions.append(LeafRegion(start=start, end=end))


def parse_headings(content: str) -> str:
    """Extract a plain-text heading map from Markdown content.

    Returns one line per heading in the format ``"<lineno>: <heading line>"``
    (1-based), joined by newlines. Code fences are not listed. Returns an
    empty string if no headings are found.
    """
    lines = content.splitlines()
    classifier = MarkdownClassifier(lines, DocumentKind.OUTLINE)
    return "\n".join(
        f"{lineno + 1}: {line}"
        for lineno, line in enumerate(lines)
        if classifier.classify(lineno) is not None
    )
