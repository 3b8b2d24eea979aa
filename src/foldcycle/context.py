"""Per-document cycling context.

A CycleContext is created once per opened document and passed to every cycle
call. It owns the document model, both visibility layers, and the one-slot
cycle history, so no cycling state lives at module level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from foldcycle.document import DocumentModel
from foldcycle.history import CycleHistory
from foldcycle.models.cycle import DocumentKind
from foldcycle.parser import MarkdownClassifier
from foldcycle.visibility import LineVisibility

if TYPE_CHECKING:
    from foldcycle.models.cycle import CycleState
    from foldcycle.protocols import CycleVisibility, MessageSink

log = structlog.get_logger()


class LogSink:
    """MessageSink that emits each reported state as a structlog event."""

    def report(self, state_name: str) -> None:
        log.info("cycle_state", state=state_name)


@dataclass
class RecordingSink:
    """MessageSink that keeps every reported state, newest last."""

    messages: list[str] = field(default_factory=list)

    def report(self, state_name: str) -> None:
        self.messages.append(state_name)


@dataclass
class CycleContext:
    document: DocumentModel
    visibility: CycleVisibility
    kind: DocumentKind = DocumentKind.MIXED
    sink: MessageSink = field(default_factory=LogSink)
    echo: bool = True
    history: CycleHistory = field(default_factory=CycleHistory)

    # Set by every cycle call; editors drop an active selection when they see it
    deactivate_selection: bool = False

    def report(self, state: CycleState) -> None:
        if self.echo:
            self.sink.report(str(state))


def open_markdown(
    content: str,
    *,
    kind: DocumentKind = DocumentKind.MIXED,
    sink: MessageSink | None = None,
    echo: bool = True,
) -> CycleContext:
    """Build a fully visible CycleContext for Markdown content."""
    lines = content.splitlines()
    classifier = MarkdownClassifier(lines, kind)
    document = DocumentModel(lines, classifier)
    return CycleContext(
        document=document,
        visibility=LineVisibility(document, classifier.leaf_regions),
        kind=kind,
        sink=sink if sink is not None else LogSink(),
        echo=echo,
    )
