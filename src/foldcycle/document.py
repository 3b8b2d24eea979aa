"""Structural queries over a line-addressed outline.

Pure business logic: receives lines and a HeadingClassifier, answers depth,
subtree and children questions. No knowledge of visibility or history.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

import structlog

from foldcycle.models.cycle import CODE_DEPTH, ChildrenKind

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from foldcycle.protocols import HeadingClassifier

log = structlog.get_logger()


class DocumentModel:
    """Read-only outline structure of one document.

    Nodes are the 0-based indexes of lines the classifier reports a depth for.
    Ranges returned by ``subtree_end`` and ``entry_end`` are exclusive.
    """

    def __init__(self, lines: Sequence[str], classifier: HeadingClassifier) -> None:
        self.lines: list[str] = list(lines)
        self._classifier = classifier
        self._nodes: list[int] = []
        self._top_level: int | None = None
        self.refresh()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def nodes(self) -> Sequence[int]:
        return self._nodes

    def refresh(self) -> None:
        """Rescan node positions and drop the cached top-level depth."""
        self._nodes = [line for line in range(self.line_count) if self._classify(line) is not None]
        self._top_level = None

    # ------------------------------------------------------------------
    # Depth
    # ------------------------------------------------------------------

    def _classify(self, line: int) -> int | None:
        depth = self._classifier.classify(line)
        if depth is not None and not 1 <= depth <= CODE_DEPTH:
            raise ValueError(f"Depth {depth} on line {line} is outside 1..{CODE_DEPTH}")
        return depth

    def depth_of(self, line: int) -> int | None:
        depth = self._classify(line)
        if depth is not None and self._top_level is not None and depth < self._top_level:
            # Heading recognition can depend on context; a shallower node means
            # the cached value is stale.
            log.debug("top_level_cache_invalidated", cached=self._top_level, observed=depth)
            self._top_level = None
        return depth

    def is_node(self, line: int) -> bool:
        return self.depth_of(line) is not None

    def is_code(self, line: int) -> bool:
        return self.depth_of(line) == CODE_DEPTH

    def top_level_depth(self) -> int | None:
        """Minimum heading depth in the document, cached until proven stale.

        Code nodes do not count; a document without headings has no top level.
        """
        if self._top_level is None:
            # Full rescan: an invalidating node may not be in the node list yet
            depths = (self._classify(line) for line in range(self.line_count))
            self._top_level = min(
                (depth for depth in depths if depth is not None and depth != CODE_DEPTH),
                default=None,
            )
        return self._top_level

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _nodes_after(self, line: int) -> Iterator[int]:
        for index in range(bisect_right(self._nodes, line), len(self._nodes)):
            yield self._nodes[index]

    def first_node(self) -> int | None:
        return self._nodes[0] if self._nodes else None

    def next_node(self, line: int) -> int | None:
        return next(self._nodes_after(line), None)

    def enclosing_node(self, line: int) -> int | None:
        """Nearest node at or before ``line``."""
        index = bisect_right(self._nodes, line) - 1
        return self._nodes[index] if index >= 0 else None

    def parent(self, node: int) -> int | None:
        """Nearest preceding node strictly shallower than ``node``."""
        depth = self.depth_of(node)
        index = bisect_right(self._nodes, node) - 1
        while index >= 0:
            candidate = self._nodes[index]
            if candidate != node and self.depth_of(candidate) < depth:
                return candidate
            index -= 1
        return None

    def roots(self) -> Iterator[int]:
        """Nodes that do not sit inside an earlier node's subtree."""
        shallowest = CODE_DEPTH + 1
        for node in self._nodes:
            depth = self.depth_of(node)
            if depth <= shallowest:
                shallowest = depth
                yield node

    # ------------------------------------------------------------------
    # Subtrees
    # ------------------------------------------------------------------

    def entry_end(self, node: int) -> int:
        next_line = self.next_node(node)
        return self.line_count if next_line is None else next_line

    def subtree_end(self, node: int) -> int:
        depth = self.depth_of(node)
        for other in self._nodes_after(node):
            if self.depth_of(other) <= depth:
                return other
        return self.line_count

    def subtree_nodes(self, node: int) -> Iterator[int]:
        depth = self.depth_of(node)
        for other in self._nodes_after(node):
            if self.depth_of(other) <= depth:
                return
            yield other

    def direct_children(self, node: int) -> Iterator[int]:
        """Subtree nodes not nested inside an earlier node of the same subtree.

        A code node ahead of every sub-heading is a direct child; a code node
        after a sub-heading belongs to that sub-heading.
        """
        shallowest = CODE_DEPTH + 1
        for child in self.subtree_nodes(node):
            depth = self.depth_of(child)
            if depth <= shallowest:
                shallowest = depth
                yield child

    def has_children(self, node: int) -> bool:
        return next(self.subtree_nodes(node), None) is not None

    def has_non_code_descendant(self, node: int) -> bool:
        return any(not self.is_code(child) for child in self.subtree_nodes(node))

    def children_kinds(self, node: int) -> ChildrenKind:
        seen_heading = seen_code = False
        for child in self.subtree_nodes(node):
            if self.is_code(child):
                seen_code = True
            else:
                seen_heading = True
            if seen_heading and seen_code:
                return ChildrenKind.MIXED
        if seen_heading:
            return ChildrenKind.HEADINGS_ONLY
        if seen_code:
            return ChildrenKind.CODE_ONLY
        return ChildrenKind.NONE

    def is_empty_section(self, node: int) -> bool:
        """True when nothing follows the heading line inside its subtree."""
        return self.subtree_end(node) == node + 1
