"""Global cycling: the whole document at once.

OVERVIEW -> TOC -> TREES -> ALL, then back to OVERVIEW. TOC and TREES are
skipped when they would not reveal anything new.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from foldcycle.errors import ErrorCode, FoldCycleError
from foldcycle.models.cycle import ChildrenKind, CycleResult, CycleState
from foldcycle.visibility import changed_lines

if TYPE_CHECKING:
    from foldcycle.context import CycleContext

log = structlog.get_logger()


def cycle_global(ctx: CycleContext) -> CycleResult:
    """Cycle the visibility of every section in the document."""
    document = ctx.document
    first = document.first_node()
    if first is None or not any(not document.is_code(node) for node in document.nodes):
        raise FoldCycleError(
            code=ErrorCode.NO_HEADING,
            message="Found no heading",
            suggestion="Global cycling needs at least one heading in the document.",
            recoverable=False,
        )

    ctx.deactivate_selection = True
    before = ctx.visibility.snapshot()

    state = _cycle_document(ctx, first)

    ctx.history.record(state)
    ctx.report(state)
    changed = changed_lines(before, ctx.visibility.snapshot())
    log.debug("cycle_global", state=state, changed=len(changed))
    return CycleResult(scope="global", state=state, changed_lines=changed)


def _cycle_document(ctx: CycleContext, first: int) -> CycleState:
    document = ctx.document
    visibility = ctx.visibility
    history = ctx.history

    if history.last is CycleState.OVERVIEW:
        if history.attempt(
            CycleState.TOC,
            document.nodes,
            lambda node: not document.is_code(node) and visibility.is_hidden(node),
            visibility.show_line,
        ):
            return CycleState.TOC

    if history.last is CycleState.TOC:
        # Code pseudo-headings only add structure where headings and code mix
        mixed = any(document.children_kinds(root) is ChildrenKind.MIXED for root in document.roots())
        if history.attempt(
            CycleState.TREES,
            document.nodes if mixed else (),
            visibility.is_hidden,
            visibility.show_line,
        ):
            return CycleState.TREES

    if history.last is CycleState.TREES:
        visibility.show_all()
        return CycleState.ALL

    _show_overview(ctx, first)
    return CycleState.OVERVIEW


def _show_overview(ctx: CycleContext, first: int) -> None:
    document = ctx.document
    visibility = ctx.visibility
    top_level = document.top_level_depth()
    visibility.hide_all(first)
    for node in document.nodes:
        if document.depth_of(node) <= top_level:
            visibility.show_line(node)
