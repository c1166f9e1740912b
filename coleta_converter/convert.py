"""
Submission pipeline: validate -> parse -> transform -> encode -> name.

``submit`` never raises for conversion problems; it returns a
SubmissionOutcome whose state is either SUCCEEDED (with the artifact) or
FAILED (with the error kind and message). Nothing is shared between calls.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from .errors import (
    ConversionError,
    EncodingFailure,
    InvalidFileType,
    InvalidLocation,
    MissingField,
    ParseFailure,
    ProcessingFailure,
)
from .models import (
    CollectionMetadata,
    ErrorDetail,
    Grid,
    OutputArtifact,
    SubmissionOutcome,
    SubmissionState,
    TransformedGrid,
)
from .parse import ParseError, parse_grid
from .rules import ALLOWED_LOCATIONS, CSV_MEDIA_TYPE, CSV_SUFFIX
from .transform import build_file_name, transform_grid
from .workbook import encode_workbook

logger = logging.getLogger(__name__)


class _Submission:
    """Tracks the state history of a single in-flight conversion."""

    def __init__(self) -> None:
        self.history: List[SubmissionState] = [SubmissionState.IDLE]

    @property
    def state(self) -> SubmissionState:
        return self.history[-1]

    def advance(self, state: SubmissionState) -> None:
        logger.debug("submission %s -> %s", self.state.value, state.value)
        self.history.append(state)

    def succeed(self, artifact: OutputArtifact) -> SubmissionOutcome:
        self.advance(SubmissionState.SUCCEEDED)
        return SubmissionOutcome(state=self.state, artifact=artifact, history=self.history)

    def fail(self, error: ConversionError) -> SubmissionOutcome:
        failed_at = self.state
        self.advance(SubmissionState.FAILED)
        logger.info("submission failed while %s: %s", failed_at.value, error.kind)
        return SubmissionOutcome(
            state=self.state,
            error=ErrorDetail(kind=error.kind, message=error.message),
            history=self.history,
        )


def is_csv_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    """An upload counts as CSV when either its media type or its name says so."""
    if content_type and content_type.split(";")[0].strip().lower() == CSV_MEDIA_TYPE:
        return True
    return bool(filename) and filename.lower().endswith(CSV_SUFFIX)


def validate_submission(
    raw: Optional[bytes],
    location: Optional[str],
    date: Optional[str],
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> CollectionMetadata:
    if raw is None or not location or not date:
        raise MissingField()
    if (filename is not None or content_type is not None) and not is_csv_upload(filename, content_type):
        raise InvalidFileType()
    if location not in ALLOWED_LOCATIONS:
        raise InvalidLocation(f"Local da coleta inválido: {location}. Use um de: {', '.join(ALLOWED_LOCATIONS)}.")
    return CollectionMetadata(location=location, date=date)


async def parse_upload(raw: bytes) -> Grid:
    try:
        return await run_in_threadpool(parse_grid, raw)
    except ParseError as e:
        logger.warning("csv parse error: %s", e)
        raise ParseFailure() from e
    except Exception as e:
        logger.exception("unexpected error while reading the csv")
        raise ParseFailure() from e


def transform_upload(grid: Grid, metadata: CollectionMetadata) -> TransformedGrid:
    try:
        return transform_grid(grid, metadata)
    except ConversionError:
        raise
    except Exception as e:
        logger.exception("unexpected error while transforming the grid")
        raise ProcessingFailure() from e


def encode_upload(transformed: TransformedGrid, location: str) -> OutputArtifact:
    try:
        payload = encode_workbook(transformed.rows)
    except Exception as e:
        logger.exception("workbook serialization failed")
        raise EncodingFailure() from e
    return OutputArtifact(payload=payload, file_name=build_file_name(location, transformed.file_date))


async def convert_csv(raw: bytes, metadata: CollectionMetadata) -> OutputArtifact:
    """Run parse, transform and encode for already validated inputs, raising on failure."""
    grid = await parse_upload(raw)
    transformed = transform_upload(grid, metadata)
    return encode_upload(transformed, metadata.location)


async def submit(
    raw: Optional[bytes],
    location: Optional[str],
    date: Optional[str],
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> SubmissionOutcome:
    """
    Convert one uploaded CSV into an .xlsx artifact.

    Stages are recorded in the outcome's history so callers can tell where a
    failure happened. Failures are terminal; nothing is retried.
    """
    submission = _Submission()
    try:
        submission.advance(SubmissionState.VALIDATING)
        metadata = validate_submission(raw, location, date, filename, content_type)

        submission.advance(SubmissionState.PARSING)
        grid = await parse_upload(raw)

        submission.advance(SubmissionState.TRANSFORMING)
        transformed = transform_upload(grid, metadata)

        submission.advance(SubmissionState.ENCODING)
        artifact = encode_upload(transformed, metadata.location)
    except ConversionError as e:
        return submission.fail(e)

    logger.info("converted %d data rows into %r", len(transformed.data_rows), artifact.file_name)
    return submission.succeed(artifact)
