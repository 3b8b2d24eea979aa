"""Tool handler for cycle_visibility.

Receives AppState, runs one local or global cycle step on an open document,
and returns the reported state with the resulting view.
No MCP or FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from foldcycle.cycle import cycle
from foldcycle.errors import ErrorCode, FoldCycleError
from foldcycle.models.tools import CycleVisibilityInput, CycleVisibilityOutput
from foldcycle.render import render_view

if TYPE_CHECKING:
    from foldcycle.state import AppState


async def handle(
    document_id: str,
    line: int | None,
    whole_document: bool,
    state: AppState,
) -> dict:
    """Handle a cycle_visibility tool call."""
    log = structlog.get_logger().bind(tool="cycle_visibility", document_id=document_id)
    log.info("handler_called", line=line, whole_document=whole_document)

    # Validate input
    try:
        validated = CycleVisibilityInput(
            document_id=document_id,
            line=line,
            whole_document=whole_document,
        )
    except ValueError as exc:
        raise FoldCycleError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide line >= 1 for local cycling, or set whole_document to true.",
            recoverable=False,
        ) from exc

    ctx = state.get_document(validated.document_id)

    cursor: int | None = None
    # The input model guarantees a line whenever whole_document is false
    if not validated.whole_document and validated.line is not None:
        total_lines = ctx.document.line_count
        if validated.line > total_lines:
            raise FoldCycleError(
                code=ErrorCode.LINE_OUT_OF_RANGE,
                message=f"Line {validated.line} is past the end of the document ({total_lines} lines)",
                suggestion="Use a line number from the heading map returned by open_document.",
                recoverable=True,
            )
        cursor = validated.line - 1

    result = cycle(ctx, cursor, global_=validated.whole_document)
    log.info("cycle_complete", state=result.state, changed=len(result.changed_lines))

    view, _ = render_view(ctx)
    output = CycleVisibilityOutput(
        document_id=validated.document_id,
        state=result.state,
        line=None if result.line is None else result.line + 1,
        changed_lines=[changed + 1 for changed in result.changed_lines],
        view=view,
    )
    return output.model_dump(mode="json")
