"""Protocol interfaces for the collaborators the cycle engines consume.

The engines reference these protocols, not the concrete implementations.
This allows:
- Tests to drive the engines with small hand-built documents
- Other heading syntaxes or editor buffers to be plugged in without
  changing engine code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from foldcycle.models.cycle import LeafRegion


class HeadingClassifier(Protocol):
    """Tells whether a line is a node and at what depth.

    Returns ``None`` for body content. Heading depths must be smaller than
    ``CODE_DEPTH``; leaf/code nodes return ``CODE_DEPTH`` itself.
    """

    def classify(self, line: int) -> int | None: ...


class VisibilityProtocol(Protocol):
    """Outline-layer show/hide primitives over a line-addressed document."""

    def is_hidden(self, line: int) -> bool: ...

    def show_line(self, line: int) -> None: ...

    def hide_entry(self, node: int) -> None: ...

    def show_entry(self, node: int) -> None: ...

    def hide_subtree(self, node: int) -> None: ...

    def show_subtree(self, node: int) -> None: ...

    def hide_all(self, start: int = 0) -> None: ...

    def show_all(self) -> None: ...


class LeafRegionProtocol(Protocol):
    """Leaf/code region lookup and the sticky per-region collapse flag."""

    def leaf_at(self, line: int) -> LeafRegion | None: ...

    def leaf_containing(self, line: int) -> LeafRegion | None: ...

    def is_collapsed(self, region: LeafRegion) -> bool: ...

    def set_collapsed(self, region: LeafRegion, collapsed: bool) -> None: ...


class CycleVisibility(VisibilityProtocol, LeafRegionProtocol, Protocol):
    """Both visibility layers plus the whole-view queries the engines need."""

    def snapshot(self) -> tuple[bool, ...]: ...

    def is_folded(self, node: int) -> bool: ...


class MessageSink(Protocol):
    """Receives the state name reported after each cycle step."""

    def report(self, state_name: str) -> None: ...
