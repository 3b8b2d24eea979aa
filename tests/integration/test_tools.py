"""Integration tests for MCP tool handlers.

Tests the full path through each handler: input validation → cycling
→ output serialisation. Uses a real AppState.
"""

from __future__ import annotations

import pytest

from foldcycle.config import SessionSettings, Settings
from foldcycle.errors import ErrorCode, FoldCycleError
from foldcycle.state import AppState
from foldcycle.tools.cycle_visibility import handle as cycle_handle
from foldcycle.tools.open_document import handle as open_handle
from foldcycle.tools.view_document import handle as view_handle


class TestOpenDocumentHandler:
    async def test_returns_heading_map(self, app_state: AppState, mixed_doc: str) -> None:
        result = await open_handle("api", mixed_doc, None, app_state)
        assert result == {
            "document_id": "api",
            "kind": "mixed",
            "total_lines": 13,
            "headings": "1: # API\n6: ## Methods\n12: # Appendix",
        }

    async def test_kind_argument_overrides_settings(self, app_state: AppState, mixed_doc: str) -> None:
        result = await open_handle("api", mixed_doc, "outline", app_state)
        assert result["kind"] == "outline"
        assert app_state.get_document("api").document.nodes == [0, 5, 11]

    async def test_invalid_document_id(self, app_state: AppState) -> None:
        with pytest.raises(FoldCycleError) as exc_info:
            await open_handle("not valid!", "# A", None, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert exc_info.value.recoverable is False

    async def test_invalid_kind(self, app_state: AppState) -> None:
        with pytest.raises(FoldCycleError) as exc_info:
            await open_handle("doc", "# A", "tree", app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT

    async def test_document_over_size_limit(self) -> None:
        state = AppState(settings=Settings(session=SessionSettings(max_document_chars=10)))
        with pytest.raises(FoldCycleError) as exc_info:
            await open_handle("doc", "# A long heading", None, state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert "limit is 10" in exc_info.value.message


class TestCycleVisibilityHandler:
    async def test_local_cycle_folds_section(self, app_state: AppState, mixed_doc: str) -> None:
        await open_handle("api", mixed_doc, None, app_state)

        result = await cycle_handle("api", 1, False, app_state)

        assert result["state"] == "FOLDED"
        assert result["line"] == 1
        assert result["changed_lines"] == list(range(2, 12))
        assert result["view"] == "1: # API ...\n12: # Appendix\n13: Notes."

    async def test_global_cycle(self, app_state: AppState, mixed_doc: str) -> None:
        await open_handle("api", mixed_doc, None, app_state)

        first = await cycle_handle("api", None, True, app_state)
        second = await cycle_handle("api", None, True, app_state)

        assert first["state"] == "OVERVIEW"
        assert first["line"] is None
        assert first["view"] == "1: # API ...\n12: # Appendix ..."
        assert second["state"] == "TOC"
        assert second["changed_lines"] == [6]

    async def test_history_persists_between_calls(self, app_state: AppState, headings_doc: str) -> None:
        await open_handle("guide", headings_doc, None, app_state)
        states = [(await cycle_handle("guide", 1, False, app_state))["state"] for _ in range(4)]
        assert states == ["FOLDED", "CHILDREN", "HEADINGS", "SUBTREE"]

    async def test_unknown_document(self, app_state: AppState) -> None:
        with pytest.raises(FoldCycleError) as exc_info:
            await cycle_handle("nope", 1, False, app_state)
        assert exc_info.value.code == ErrorCode.DOCUMENT_NOT_FOUND

    async def test_local_cycle_requires_line(self, app_state: AppState, mixed_doc: str) -> None:
        await open_handle("api", mixed_doc, None, app_state)
        with pytest.raises(FoldCycleError) as exc_info:
            await cycle_handle("api", None, False, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT

    async def test_line_zero_rejected(self, app_state: AppState, mixed_doc: str) -> None:
        await open_handle("api", mixed_doc, None, app_state)
        with pytest.raises(FoldCycleError) as exc_info:
            await cycle_handle("api", 0, False, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT

    async def test_line_past_end(self, app_state: AppState, mixed_doc: str) -> None:
        await open_handle("api", mixed_doc, None, app_state)
        with pytest.raises(FoldCycleError) as exc_info:
            await cycle_handle("api", 14, False, app_state)
        assert exc_info.value.code == ErrorCode.LINE_OUT_OF_RANGE
        assert exc_info.value.recoverable is True

    async def test_global_cycle_without_heading(self, app_state: AppState) -> None:
        await open_handle("plain", "no headings\nhere", None, app_state)
        with pytest.raises(FoldCycleError) as exc_info:
            await cycle_handle("plain", None, True, app_state)
        assert exc_info.value.code == ErrorCode.NO_HEADING

    async def test_global_cycle_with_only_code_blocks(self, app_state: AppState) -> None:
        await open_handle("snippet", "```\nx = 1\n```", None, app_state)
        with pytest.raises(FoldCycleError) as exc_info:
            await cycle_handle("snippet", None, True, app_state)
        assert exc_info.value.code == ErrorCode.NO_HEADING

    async def test_each_section_starts_its_own_cycle(self, app_state: AppState) -> None:
        await open_handle("two", "# A\n## a1\ntext\n# B\n## b1\ntext", None, app_state)
        await cycle_handle("two", 1, False, app_state)
        await cycle_handle("two", 1, False, app_state)

        result = await cycle_handle("two", 4, False, app_state)

        assert result["state"] == "FOLDED"
        assert result["changed_lines"] == [5, 6]


class TestViewDocumentHandler:
    async def test_fresh_document_fully_visible(self, app_state: AppState, code_only_doc: str) -> None:
        await open_handle("snippet", code_only_doc, None, app_state)

        result = await view_handle("snippet", app_state)

        assert result == {
            "document_id": "snippet",
            "total_lines": 4,
            "visible_lines": 4,
            "view": "1: # Snippet\n2: ```python\n3: x = 1\n4: ```",
        }

    async def test_reflects_collapsed_code_block(self, app_state: AppState, code_only_doc: str) -> None:
        await open_handle("snippet", code_only_doc, None, app_state)
        await cycle_handle("snippet", 2, False, app_state)

        result = await view_handle("snippet", app_state)

        assert result["visible_lines"] == 2
        assert result["view"] == "1: # Snippet\n2: ```python ..."

    async def test_evicted_document_not_found(self, mixed_doc: str) -> None:
        state = AppState(settings=Settings(session=SessionSettings(max_documents=1)))
        await open_handle("first", mixed_doc, None, state)
        await open_handle("second", mixed_doc, None, state)
        with pytest.raises(FoldCycleError) as exc_info:
            await view_handle("first", state)
        assert exc_info.value.code == ErrorCode.DOCUMENT_NOT_FOUND
