from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from foldcycle.models.cycle import CycleState, DocumentKind

_DOCUMENT_ID_PATTERN = r"^[A-Za-z0-9_.:\-]{1,128}$"


class OpenDocumentInput(BaseModel):
    document_id: str = Field(pattern=_DOCUMENT_ID_PATTERN)
    content: str
    kind: DocumentKind | None = None  # None: use settings.cycle.document_kind


class OpenDocumentOutput(BaseModel):
    document_id: str
    kind: DocumentKind
    total_lines: int
    headings: str  # Plain-text heading map: "<line>: <heading>\n..."


class CycleVisibilityInput(BaseModel):
    document_id: str = Field(pattern=_DOCUMENT_ID_PATTERN)
    line: int | None = None  # 1-based cursor line, required for local cycling
    whole_document: bool = False

    @field_validator("line")
    @classmethod
    def _line_is_positive(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("line must be >= 1")
        return value

    @model_validator(mode="after")
    def _local_cycle_needs_line(self) -> CycleVisibilityInput:
        if not self.whole_document and self.line is None:
            raise ValueError("line is required unless whole_document is true")
        return self


class CycleVisibilityOutput(BaseModel):
    document_id: str
    state: CycleState
    line: int | None  # 1-based heading the local cycle acted on
    changed_lines: list[int]  # 1-based
    view: str


class ViewDocumentInput(BaseModel):
    document_id: str = Field(pattern=_DOCUMENT_ID_PATTERN)


class ViewDocumentOutput(BaseModel):
    document_id: str
    total_lines: int
    visible_lines: int
    view: str  # "<line>: <text>" per visible line, " ..." marks folded content
