"""Single entry point dispatching to the local or the global cycle engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foldcycle.global_cycle import cycle_global
from foldcycle.local_cycle import cycle_local

if TYPE_CHECKING:
    from foldcycle.context import CycleContext
    from foldcycle.models.cycle import CycleResult

__all__ = ["cycle", "cycle_global", "cycle_local"]


def cycle(ctx: CycleContext, line: int | None = None, *, global_: bool = False) -> CycleResult:
    """Cycle the whole document when ``global_`` is set, else the section at ``line``."""
    if global_:
        return cycle_global(ctx)
    if line is None:
        raise ValueError("line is required for local cycling")
    return cycle_local(ctx, line)
