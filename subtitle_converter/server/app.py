"""FastAPI application exposing detection, parsing, export, and conversion.

WHY: The editor front end, scripts, and other tools need the converter
over HTTP: load a file into cues, send edited cues back for export, or
convert a file between formats in one request. FastAPI provides automatic
OpenAPI documentation and request validation.

HOW: A single FastAPI app exposes endpoints grouped by tags. JSON
endpoints take and return the pydantic mirrors of the IR; /convert takes a
multipart upload and streams the converted file back as an attachment.
All format logic is delegated to subtitle_converter.formats.

RULES:
- All endpoints have OpenAPI descriptions and typed responses
- Error responses use a consistent ErrorResponse schema
- Unknown format tags → 400; oversized uploads → 413; non-UTF-8 → 422
- Parsing never fails on content; an unparseable document yields no cues
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from subtitle_converter import __version__
from subtitle_converter.config import API_HOST, API_PORT, MAX_UPLOAD_BYTES
from subtitle_converter.core.detect import detect_format
from subtitle_converter.core.ir import SubtitleFormat
from subtitle_converter.core.timeline import append_generated_cues
from subtitle_converter.formats import FORMATS, export_cues, parse_content, resolve_format
from subtitle_converter.server.models import (
    AppendGeneratedRequest,
    CueModel,
    DetectRequest,
    DetectResponse,
    ErrorResponse,
    ExportRequest,
    FormatInfoModel,
    HealthResponse,
    MetadataModel,
    ParseRequest,
    ParseResponse,
    TimelineResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Subtitle Converter API",
    description=(
        "REST API for converting time-synchronised captions and lyrics between "
        "SRT, WebVTT, LRC, TTML, JSON, and plain text, including word-level "
        "karaoke timing. Detect a format, parse it to cues, export cues, or "
        "convert a file in one call."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_format_or_400(value: str) -> SubtitleFormat:
    try:
        return resolve_format(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _attachment(content: str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Documents
# ---------------------------------------------------------------------------


@app.post(
    "/detect",
    response_model=DetectResponse,
    tags=["documents"],
    summary="Detect a document's format",
    description=(
        "Classify a document by filename extension, falling back to content "
        "sniffing when the extension is missing or unknown."
    ),
)
async def detect(request: DetectRequest) -> DetectResponse:
    return DetectResponse(format=detect_format(request.filename, request.content))


@app.post(
    "/parse",
    response_model=ParseResponse,
    tags=["documents"],
    summary="Parse a document into cues",
    description=(
        "Parse raw text into cues and metadata. The format is detected from "
        "filename and content when not given. Malformed fragments are skipped."
    ),
)
async def parse(request: ParseRequest) -> ParseResponse:
    fmt = request.format or detect_format(request.filename, request.content)
    result = parse_content(request.content, fmt)
    logger.info("Parsed %d cues as %s", len(result.cues), fmt.value)
    return ParseResponse(
        format=fmt,
        cues=[CueModel.from_ir(c) for c in result.cues],
        metadata=MetadataModel.from_ir(result.metadata),
    )


@app.post(
    "/export",
    tags=["documents"],
    summary="Serialize cues to a format",
    description=(
        "Serialize cues (and optional metadata) to the target format and "
        "return the document as a file attachment."
    ),
    responses={
        200: {"content": {"text/plain": {}}, "description": "Serialized document"},
    },
)
async def export(request: ExportRequest) -> Response:
    cues = [c.to_ir() for c in request.cues]
    metadata = request.metadata.to_ir() if request.metadata is not None else None
    output = export_cues(cues, request.format, metadata)
    filename = "{}{}".format(Path(request.filename_stem).name or "subtitles", output.suffix)
    return _attachment(output.content, filename, output.media_type)


@app.post(
    "/convert",
    tags=["documents"],
    summary="Convert an uploaded file",
    description=(
        "Upload a caption or lyric file and receive it converted to the "
        "target format. The source format is detected unless given."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown format"},
        413: {"model": ErrorResponse, "description": "Upload too large"},
        422: {"model": ErrorResponse, "description": "Upload is not UTF-8 text"},
    },
)
async def convert(
    file: Annotated[
        UploadFile,
        File(description="Caption or lyric file to convert."),
    ],
    target: Annotated[
        str,
        Form(description="Target format tag, e.g. 'srt' or 'vtt_karaoke'."),
    ],
    source: Annotated[
        Optional[str],
        Form(description="Source format tag. Detected when omitted."),
    ] = None,
) -> Response:
    target_format = _resolve_format_or_400(target)
    source_format = _resolve_format_or_400(source) if source else None

    raw = await file.read()
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail="Upload too large ({} bytes, max {}).".format(len(raw), MAX_UPLOAD_BYTES),
        )
    try:
        content = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="Uploaded file is not UTF-8 text.")

    # Sanitize filename to prevent path traversal
    filename = Path(file.filename or "upload").name
    if source_format is None:
        source_format = detect_format(filename, content)

    result = parse_content(content, source_format)
    output = export_cues(result.cues, target_format, result.metadata)
    logger.info(
        "Converted %s from %s to %s (%d cues)",
        filename, source_format.value, target_format.value, len(result.cues),
    )
    return _attachment(
        output.content,
        "{}{}".format(Path(filename).stem, output.suffix),
        output.media_type,
    )


# ---------------------------------------------------------------------------
# Endpoints: Timeline
# ---------------------------------------------------------------------------


@app.post(
    "/timeline/append",
    response_model=TimelineResponse,
    tags=["timeline"],
    summary="Append generated cues after a timeline",
    description=(
        "Shift generated cues so they start after the last existing cue's end "
        "and append them to the timeline."
    ),
)
async def append_generated(request: AppendGeneratedRequest) -> TimelineResponse:
    merged = append_generated_cues(
        [c.to_ir() for c in request.existing],
        [c.to_ir() for c in request.generated],
    )
    return TimelineResponse(cues=[CueModel.from_ir(c) for c in merged])


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfoModel],
    tags=["formats"],
    summary="List available formats",
    description=(
        "Returns all supported formats with their identifiers, human-readable "
        "names, file suffixes, and MIME types."
    ),
)
async def list_formats() -> List[FormatInfoModel]:
    return [
        FormatInfoModel(
            key=fmt.value,
            name=info.name,
            suffix=info.suffix,
            media_type=info.media_type,
            word_timing=fmt.is_word_timed,
        )
        for fmt, info in FORMATS.items()
    ]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the subtitle-converter-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
