"""Line visibility for one document.

Two independent layers decide whether a line is hidden:

- the outline layer, one flag per line, driven by section folding
- the leaf layer, one sticky ``collapsed`` flag per code region, hiding the
  region's body

Outline-layer reveals never clear a leaf flag, so a code region collapsed on
its own stays collapsed until it is toggled again.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from foldcycle.document import DocumentModel
    from foldcycle.models.cycle import LeafRegion


class LineVisibility:
    """Implements VisibilityProtocol and LeafRegionProtocol."""

    def __init__(self, document: DocumentModel, leaf_regions: Iterable[LeafRegion] = ()) -> None:
        self._document = document
        self._hidden = [False] * document.line_count
        self._regions = sorted(leaf_regions, key=lambda region: region.start)
        self._region_starts = [region.start for region in self._regions]
        self._collapsed: set[LeafRegion] = set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_hidden(self, line: int) -> bool:
        if self._hidden[line]:
            return True
        region = self.leaf_containing(line)
        return region is not None and region in self._collapsed

    def snapshot(self) -> tuple[bool, ...]:
        """Hidden flag of every line, both layers combined."""
        return tuple(self.is_hidden(line) for line in range(len(self._hidden)))

    def visible_lines(self) -> list[int]:
        return [line for line in range(len(self._hidden)) if not self.is_hidden(line)]

    def is_folded(self, node: int) -> bool:
        """True when every line below the heading inside its subtree is hidden."""
        end = self._document.subtree_end(node)
        return all(self.is_hidden(line) for line in range(node + 1, end))

    # ------------------------------------------------------------------
    # Outline layer
    # ------------------------------------------------------------------

    def _set_range(self, start: int, end: int, hidden: bool) -> None:
        for line in range(start, end):
            self._hidden[line] = hidden

    def show_line(self, line: int) -> None:
        self._hidden[line] = False

    def hide_entry(self, node: int) -> None:
        self._set_range(node + 1, self._document.entry_end(node), True)

    def show_entry(self, node: int) -> None:
        self._set_range(node + 1, self._document.entry_end(node), False)

    def hide_subtree(self, node: int) -> None:
        self._set_range(node + 1, self._document.subtree_end(node), True)

    def show_subtree(self, node: int) -> None:
        self._set_range(node + 1, self._document.subtree_end(node), False)

    def hide_all(self, start: int = 0) -> None:
        self._set_range(start, len(self._hidden), True)

    def show_all(self) -> None:
        self._set_range(0, len(self._hidden), False)

    # ------------------------------------------------------------------
    # Leaf layer
    # ------------------------------------------------------------------

    def leaf_at(self, line: int) -> LeafRegion | None:
        """Region whose span (opening line included) covers ``line``."""
        index = bisect_right(self._region_starts, line) - 1
        if index < 0:
            return None
        region = self._regions[index]
        return region if region.start <= line <= region.end else None

    def leaf_containing(self, line: int) -> LeafRegion | None:
        """Region whose body (opening line excluded) covers ``line``."""
        region = self.leaf_at(line)
        if region is None or not region.contains_body_line(line):
            return None
        return region

    def is_collapsed(self, region: LeafRegion) -> bool:
        return region in self._collapsed

    def set_collapsed(self, region: LeafRegion, collapsed: bool) -> None:
        if collapsed:
            self._collapsed.add(region)
        else:
            self._collapsed.discard(region)


def changed_lines(before: tuple[bool, ...], after: tuple[bool, ...]) -> list[int]:
    """Lines whose hidden flag differs between two snapshots."""
    return [line for line, (old, new) in enumerate(zip(before, after, strict=True)) if old != new]
