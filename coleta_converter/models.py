from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .rules import XLSX_MEDIA_TYPE

# None = empty, str = text, float = number
Cell = Union[None, str, float]
Grid = List[List[Cell]]


class CollectionMetadata(BaseModel):
    location: str = Field(min_length=1, examples=["Escola"])
    date: str = Field(min_length=1, examples=["2024-09-05"])


class TransformedGrid(BaseModel):
    rows: List[List[Cell]]
    file_date: str

    @property
    def header(self) -> List[Cell]:
        return self.rows[0]

    @property
    def data_rows(self) -> List[List[Cell]]:
        return self.rows[1:]


class OutputArtifact(BaseModel):
    payload: bytes
    file_name: str
    media_type: str = XLSX_MEDIA_TYPE


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PARSING = "parsing"
    TRANSFORMING = "transforming"
    ENCODING = "encoding"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorDetail(BaseModel):
    kind: str
    message: str


class SubmissionOutcome(BaseModel):
    state: SubmissionState
    artifact: Optional[OutputArtifact] = None
    error: Optional[ErrorDetail] = None
    history: List[SubmissionState] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is SubmissionState.SUCCEEDED


class ErrorResponse(BaseModel):
    detail: ErrorDetail


class LocationsResponse(BaseModel):
    locations: List[str]


class HealthResponse(BaseModel):
    ok: bool = True
