from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.responses import JSONResponse, Response

from .convert import submit
from .models import ErrorResponse, HealthResponse, LocationsResponse
from .rules import ALLOWED_LOCATIONS, XLSX_MEDIA_TYPE

app = FastAPI(
    title="coleta-converter",
    description="CSV collection files to .xlsx with location and date metadata",
    version="0.1.0",
)

ERROR_STATUS = {
    "MissingField": 422,
    "InvalidFileType": 422,
    "InvalidLocation": 422,
    "InvalidDateFormat": 422,
    "EmptyOrInvalidInput": 400,
    "NoDataRows": 400,
    "ParseFailure": 400,
    "ProcessingFailure": 500,
    "EncodingFailure": 500,
}


def content_disposition(file_name: str) -> str:
    ascii_name = file_name.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(file_name)}"


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/locations", response_model=LocationsResponse)
def locations():
    return {"locations": list(ALLOWED_LOCATIONS)}


@app.post(
    "/convert",
    response_class=Response,
    responses={
        200: {"content": {XLSX_MEDIA_TYPE: {}}},
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def convert(
    file: Optional[UploadFile] = File(None),
    location: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
):
    raw = await file.read() if file is not None else None
    filename = file.filename if file is not None else None
    content_type = file.content_type if file is not None else None

    outcome = await submit(raw, location, date, filename=filename, content_type=content_type)
    if not outcome.ok:
        return JSONResponse(
            status_code=ERROR_STATUS.get(outcome.error.kind, 500),
            content={"detail": outcome.error.model_dump()},
        )

    artifact = outcome.artifact
    return Response(
        content=artifact.payload,
        media_type=artifact.media_type,
        headers={"Content-Disposition": content_disposition(artifact.file_name)},
    )
