"""Last-command tracking shared by the local and global cycle engines."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from foldcycle.models.cycle import CycleState

log = structlog.get_logger()


class CycleHistory:
    """One-slot record of the state the previous cycle step ended in.

    The engines infer the next state from ``last``: a step that continues the
    previous one moves down the ladder, anything else restarts the cycle.
    ``node`` is the line the previous local step acted on (``None`` after a
    global step), so a step on another section starts that section afresh.
    """

    def __init__(self) -> None:
        self.last: CycleState | None = None
        self.node: int | None = None

    def reset(self) -> None:
        self.last = None
        self.node = None

    def record(self, state: CycleState, node: int | None = None) -> None:
        self.last = state
        self.node = node

    def attempt(
        self,
        state: CycleState,
        nodes: Iterable[int],
        predicate: Callable[[int], bool],
        transition: Callable[[int], None],
    ) -> bool:
        """Apply ``transition`` to every node satisfying ``predicate``.

        ``state`` is recorded either way. When no node qualifies nothing
        visible would change, so the caller falls through to the next rung,
        which now sees ``state`` as the current one. Returns whether any
        node was transitioned.
        """
        matched = [node for node in nodes if predicate(node)]
        self.last = state
        if not matched:
            log.debug("cycle_step_skipped", state=state)
            return False
        for node in matched:
            transition(node)
        return True
