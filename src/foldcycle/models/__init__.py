from __future__ import annotations

from foldcycle.models.cycle import (
    CODE_DEPTH,
    ChildrenKind,
    CycleResult,
    CycleState,
    DocumentKind,
    LeafRegion,
)
from foldcycle.models.tools import (
    CycleVisibilityInput,
    CycleVisibilityOutput,
    OpenDocumentInput,
    OpenDocumentOutput,
    ViewDocumentInput,
    ViewDocumentOutput,
)

__all__ = [
    # cycle
    "CODE_DEPTH",
    "ChildrenKind",
    "CycleResult",
    "CycleState",
    "DocumentKind",
    "LeafRegion",
    # tools
    "OpenDocumentInput",
    "OpenDocumentOutput",
    "CycleVisibilityInput",
    "CycleVisibilityOutput",
    "ViewDocumentInput",
    "ViewDocumentOutput",
]
