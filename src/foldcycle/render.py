"""Plain-text rendering of the currently visible lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from foldcycle.context import CycleContext

FOLD_MARKER = " ..."


def render_view(ctx: CycleContext) -> tuple[str, int]:
    """Return the visible lines as ``"<lineno>: <text>"`` and their count.

    Line numbers are 1-based. A line directly followed by hidden content ends
    with ``FOLD_MARKER``.
    """
    lines = ctx.document.lines
    hidden = ctx.visibility.snapshot()
    rendered: list[str] = []
    for index, text in enumerate(lines):
        if hidden[index]:
            continue
        folded = index + 1 < len(lines) and hidden[index + 1]
        rendered.append(f"{index + 1}: {text}{FOLD_MARKER if folded else ''}")
    return "\n".join(rendered), len(rendered)
