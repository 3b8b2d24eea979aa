"""Tool handler for view_document.

Returns the currently visible lines of an open document.
No MCP or FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from foldcycle.errors import ErrorCode, FoldCycleError
from foldcycle.models.tools import ViewDocumentInput, ViewDocumentOutput
from foldcycle.render import render_view

if TYPE_CHECKING:
    from foldcycle.state import AppState


async def handle(document_id: str, state: AppState) -> dict:
    """Handle a view_document tool call."""
    log = structlog.get_logger().bind(tool="view_document", document_id=document_id)
    log.info("handler_called")

    try:
        validated = ViewDocumentInput(document_id=document_id)
    except ValueError as exc:
        raise FoldCycleError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide the document_id used with open_document.",
            recoverable=False,
        ) from exc

    ctx = state.get_document(validated.document_id)
    view, visible_lines = render_view(ctx)

    output = ViewDocumentOutput(
        document_id=validated.document_id,
        total_lines=ctx.document.line_count,
        visible_lines=visible_lines,
        view=view,
    )
    return output.model_dump(mode="json")
