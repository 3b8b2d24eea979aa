"""Tool handler for open_document.

Receives AppState, builds a CycleContext for the Markdown content and
registers it. No MCP or FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from foldcycle.context import open_markdown
from foldcycle.errors import ErrorCode, FoldCycleError
from foldcycle.models.tools import OpenDocumentInput, OpenDocumentOutput
from foldcycle.parser import parse_headings

if TYPE_CHECKING:
    from foldcycle.models.cycle import DocumentKind
    from foldcycle.state import AppState


async def handle(
    document_id: str,
    content: str,
    kind: DocumentKind | str | None,
    state: AppState,
) -> dict:
    """Handle an open_document tool call."""
    log = structlog.get_logger().bind(tool="open_document", document_id=document_id)
    log.info("handler_called")

    # Validate input
    try:
        validated = OpenDocumentInput(document_id=document_id, content=content, kind=kind)
    except ValueError as exc:
        raise FoldCycleError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a document_id of 1-128 letters, digits or _.:- and kind 'mixed' or 'outline'.",
            recoverable=False,
        ) from exc

    max_chars = state.settings.session.max_document_chars
    if len(validated.content) > max_chars:
        raise FoldCycleError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Document has {len(validated.content)} characters, limit is {max_chars}",
            suggestion="Open a smaller document or raise session.max_document_chars.",
            recoverable=False,
        )

    document_kind = validated.kind or state.settings.cycle.document_kind
    ctx = open_markdown(
        validated.content,
        kind=document_kind,
        echo=state.settings.cycle.echo_state,
    )
    state.store_document(validated.document_id, ctx)
    log.info("document_opened", kind=document_kind, total_lines=ctx.document.line_count)

    output = OpenDocumentOutput(
        document_id=validated.document_id,
        kind=document_kind,
        total_lines=ctx.document.line_count,
        headings=parse_headings(validated.content),
    )
    return output.model_dump(mode="json")
