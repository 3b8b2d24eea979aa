"""Local cycling: one section at a time.

From the cursor line the engine picks exactly one transition:

1. Cursor in a code region body: toggle that region only.
2. Cursor on body text: move to the enclosing heading (skipping a code node
   to reach its parent heading) and continue there.
3. Cursor on a node:
   a. code node: toggle its region (CODE)
   b. nothing below the heading: EMPTY, no change
   c. no child nodes: toggle the body (HIDE / SHOW)
   d. the ladder FOLDED -> CHILDREN -> HEADINGS -> BRANCHES -> SUBTREE,
      where a rung that would change nothing visible is skipped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from foldcycle.errors import ErrorCode, FoldCycleError
from foldcycle.models.cycle import CycleResult, CycleState, DocumentKind
from foldcycle.visibility import changed_lines

if TYPE_CHECKING:
    from foldcycle.context import CycleContext
    from foldcycle.models.cycle import LeafRegion

log = structlog.get_logger()


def cycle_local(ctx: CycleContext, line: int) -> CycleResult:
    """Cycle the visibility of the section (or code region) at ``line``."""
    ctx.deactivate_selection = True
    before = ctx.visibility.snapshot()

    node, state = _step(ctx, line)

    ctx.history.record(state, node)
    ctx.report(state)
    changed = changed_lines(before, ctx.visibility.snapshot())
    log.debug("cycle_local", line=line, node=node, state=state, changed=len(changed))
    return CycleResult(scope="local", state=state, line=node, changed_lines=changed)


def _step(ctx: CycleContext, line: int) -> tuple[int, CycleState]:
    document = ctx.document
    visibility = ctx.visibility

    if not document.is_node(line):
        region = visibility.leaf_containing(line)
        if region is not None:
            return region.start, _toggle_leaf(ctx, region)
        line = _enclosing_heading(ctx, line)

    if document.is_code(line):
        region = visibility.leaf_at(line)
        if region is None or region.start != line or not region.has_body:
            return line, CycleState.EMPTY
        return line, _toggle_leaf(ctx, region)

    if document.is_empty_section(line):
        return line, CycleState.EMPTY

    if not document.has_children(line):
        if visibility.is_hidden(line + 1):
            visibility.show_entry(line)
            return line, CycleState.SHOW
        visibility.hide_entry(line)
        return line, CycleState.HIDE

    return line, _cycle_section(ctx, line)


def _enclosing_heading(ctx: CycleContext, line: int) -> int:
    document = ctx.document
    node = document.enclosing_node(line)
    if node is not None and document.is_code(node):
        node = document.parent(node)
    if node is None:
        raise FoldCycleError(
            code=ErrorCode.BEFORE_FIRST_HEADING,
            message=f"Line {line + 1} is before the first heading",
            suggestion="Move the cursor onto or below a heading before cycling.",
            recoverable=True,
        )
    return node


def _toggle_leaf(ctx: CycleContext, region: LeafRegion) -> CycleState:
    visibility = ctx.visibility
    if visibility.is_collapsed(region) or visibility.is_hidden(region.start + 1):
        visibility.show_line(region.start)
        visibility.show_entry(region.start)
        visibility.set_collapsed(region, False)
    else:
        # Only the sticky flag; prose after the closing fence stays visible
        visibility.set_collapsed(region, True)
    return CycleState.CODE


def _cycle_section(ctx: CycleContext, node: int) -> CycleState:
    document = ctx.document
    visibility = ctx.visibility
    history = ctx.history

    if history.node != node:
        # Another section was cycled last; its ladder position does not carry over
        history.reset()

    if history.last is not CycleState.CHILDREN and visibility.is_folded(node):
        if history.attempt(
            CycleState.CHILDREN,
            document.direct_children(node),
            visibility.is_hidden,
            visibility.show_line,
        ):
            return CycleState.CHILDREN

    if history.last is CycleState.CHILDREN:
        # Pure outlines have no code to keep apart, HEADINGS would equal BRANCHES
        candidates = document.subtree_nodes(node) if ctx.kind is DocumentKind.MIXED else ()
        if history.attempt(
            CycleState.HEADINGS,
            candidates,
            lambda child: not document.is_code(child) and visibility.is_hidden(child),
            visibility.show_line,
        ):
            return CycleState.HEADINGS

    if history.last is CycleState.HEADINGS:
        candidates = document.subtree_nodes(node) if document.has_non_code_descendant(node) else ()
        if history.attempt(
            CycleState.BRANCHES,
            candidates,
            visibility.is_hidden,
            visibility.show_line,
        ):
            return CycleState.BRANCHES

    if history.last is CycleState.BRANCHES:
        visibility.show_subtree(node)
        return CycleState.SUBTREE

    visibility.hide_subtree(node)
    return CycleState.FOLDED
