"""Shared test fixtures for the foldcycle test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from foldcycle.context import RecordingSink, open_markdown
from foldcycle.models.cycle import DocumentKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from foldcycle.context import CycleContext


@pytest.fixture()
def headings_doc() -> str:
    """Headings only, three levels."""
    return (
        "# Guide\n"                    # 0
        "Intro text.\n"                # 1
        "## Install\n"                 # 2
        "Run the installer.\n"         # 3
        "### Linux\n"                  # 4
        "Use the package manager.\n"   # 5
        "## Usage\n"                   # 6
        "Call the tool.\n"             # 7
    )


@pytest.fixture()
def mixed_doc() -> str:
    """Headings mixed with fenced code blocks."""
    return (
        "# API\n"                # 0
        "Overview.\n"            # 1
        "```python\n"            # 2  code node, region 2..4
        "client = Client()\n"    # 3
        "```\n"                  # 4
        "## Methods\n"           # 5
        "Method list.\n"         # 6
        "```python\n"            # 7  code node, region 7..9
        "client.get()\n"         # 8
        "```\n"                  # 9
        "Trailing note.\n"       # 10
        "# Appendix\n"           # 11
        "Notes.\n"               # 12
    )


@pytest.fixture()
def code_only_doc() -> str:
    """A heading whose only content is one code block."""
    return (
        "# Snippet\n"   # 0
        "```python\n"   # 1
        "x = 1\n"       # 2
        "```\n"         # 3
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def make_ctx(sink: RecordingSink) -> Callable[..., CycleContext]:
    """Factory building a fully visible context that reports into ``sink``."""

    def _make(
        content: str,
        kind: DocumentKind = DocumentKind.MIXED,
        echo: bool = True,
    ) -> CycleContext:
        return open_markdown(content, kind=kind, sink=sink, echo=echo)

    return _make
