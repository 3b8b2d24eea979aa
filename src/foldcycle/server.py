"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the stdio transport
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import foldcycle.tools.cycle_visibility as t_cycle
import foldcycle.tools.open_document as t_open
import foldcycle.tools.view_document as t_view
from foldcycle import __version__
from foldcycle.config import Settings
from foldcycle.errors import FoldCycleError
from foldcycle.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr — stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down the shared state for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        document_kind=settings.cycle.document_kind,
        max_documents=settings.session.max_documents,
    )

    state = AppState(settings=settings)

    try:
        yield state
    finally:
        log.info("server_stopping", open_documents=len(state.documents))
        state.documents.clear()


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("foldcycle", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg — set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: FoldCycleError) -> CallToolResult:
    """Convert a FoldCycleError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


def _log_tool_error(tool: str, exc: FoldCycleError) -> None:
    log.warning(
        "tool_error",
        tool=tool,
        code=exc.code,
        message=exc.message,
        recoverable=exc.recoverable,
    )


@mcp.tool()
async def open_document(
    document_id: str,
    content: str,
    ctx: Context,
    kind: str | None = None,
) -> object:
    """Open a Markdown document for visibility cycling.

    Returns the heading map (line numbers + heading text). kind is "mixed"
    (fenced code blocks fold on their own) or "outline" (headings only).
    Reopening an id replaces the document and resets its folds.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_open.handle(document_id, content, kind, state)
    except FoldCycleError as exc:
        _log_tool_error("open_document", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="open_document", exc_info=True)
        raise


@mcp.tool()
async def cycle_visibility(
    document_id: str,
    ctx: Context,
    line: int | None = None,
    whole_document: bool = False,
) -> object:
    """Advance the folding cycle of a section, or of the whole document.

    With line, cycles the section at that line: FOLDED, CHILDREN, HEADINGS,
    BRANCHES, SUBTREE. With whole_document, cycles OVERVIEW, TOC, TREES, ALL.
    Steps that would not change the view are skipped. Returns the reached
    state and the visible lines.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_cycle.handle(document_id, line, whole_document, state)
    except FoldCycleError as exc:
        _log_tool_error("cycle_visibility", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="cycle_visibility", exc_info=True)
        raise


@mcp.tool()
async def view_document(document_id: str, ctx: Context) -> object:
    """Return the currently visible lines of an open document."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_view.handle(document_id, state)
    except FoldCycleError as exc:
        _log_tool_error("view_document", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="view_document", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
