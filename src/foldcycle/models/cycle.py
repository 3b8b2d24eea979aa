from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

# Depth assigned to leaf/code nodes. Every heading depth must stay below it.
CODE_DEPTH = 1000


class CycleState(StrEnum):
    """State names reported after a cycle step.

    Local cycling reports EMPTY, HIDE, SHOW, CODE, FOLDED, CHILDREN, HEADINGS,
    BRANCHES and SUBTREE; global cycling reports OVERVIEW, TOC, TREES and ALL.
    Both share the single history slot of a CycleContext.
    """

    EMPTY = "EMPTY"
    HIDE = "HIDE"
    SHOW = "SHOW"
    CODE = "CODE"
    FOLDED = "FOLDED"
    CHILDREN = "CHILDREN"
    HEADINGS = "HEADINGS"
    BRANCHES = "BRANCHES"
    SUBTREE = "SUBTREE"
    OVERVIEW = "OVERVIEW"
    TOC = "TOC"
    TREES = "TREES"
    ALL = "ALL"


class ChildrenKind(StrEnum):
    NONE = "NONE"
    HEADINGS_ONLY = "HEADINGS_ONLY"
    CODE_ONLY = "CODE_ONLY"
    MIXED = "MIXED"


class DocumentKind(StrEnum):
    MIXED = "mixed"  # code regions are leaf nodes
    OUTLINE = "outline"  # headings only, fences are body text


class LeafRegion(BaseModel):
    """A collapsible code region: its opening line and its last line (inclusive)."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @property
    def has_body(self) -> bool:
        return self.end > self.start

    def contains_body_line(self, line: int) -> bool:
        return self.start < line <= self.end


class CycleResult(BaseModel):
    """Outcome of one cycle invocation. Line numbers are 0-based."""

    scope: Literal["local", "global"]
    state: CycleState
    line: int | None = None  # node acted on (local only)
    changed_lines: list[int] = []  # lines whose visibility flipped
