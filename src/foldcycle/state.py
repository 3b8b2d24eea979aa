"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool handler via the MCP Context object.
It keeps one CycleContext per opened document, least recently used first.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from foldcycle.errors import ErrorCode, FoldCycleError

if TYPE_CHECKING:
    from foldcycle.config import Settings
    from foldcycle.context import CycleContext

log = structlog.get_logger()


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    documents: OrderedDict[str, CycleContext] = field(default_factory=OrderedDict)

    def store_document(self, document_id: str, ctx: CycleContext) -> None:
        """Register ``ctx`` under ``document_id``, replacing any previous one."""
        self.documents.pop(document_id, None)
        self.documents[document_id] = ctx
        while len(self.documents) > self.settings.session.max_documents:
            evicted, _ = self.documents.popitem(last=False)
            log.info("document_evicted", document_id=evicted)

    def get_document(self, document_id: str) -> CycleContext:
        ctx = self.documents.get(document_id)
        if ctx is None:
            raise FoldCycleError(
                code=ErrorCode.DOCUMENT_NOT_FOUND,
                message=f"No open document with id: {document_id}",
                suggestion="Call open_document first, or reopen it if it was evicted.",
                recoverable=True,
            )
        self.documents.move_to_end(document_id)
        return ctx
