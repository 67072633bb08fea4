from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.responses import Response

from kkextract.boxes import parse_boxes
from kkextract.config import get_settings
from kkextract.extractor import ERROR_KEY, extract_family_card_json
from kkextract.spatial_text import to_spatial_text

app = FastAPI()

logger = logging.getLogger(__name__)


def _error_response(message: str, *, status_code: int) -> JSONResponse:
    return JSONResponse({ERROR_KEY: message}, status_code=status_code)


async def _read_body(request: Request) -> bytes | JSONResponse:
    settings = get_settings()
    content = await request.body()
    if not content:
        logger.warning("Rejected %s: empty body", request.url.path)
        return _error_response("Empty request body.", status_code=400)
    if len(content) > settings.max_upload_bytes:
        logger.warning("Rejected %s: %d bytes", request.url.path, len(content))
        return _error_response(
            f"Request too large (>{settings.max_upload_bytes} bytes).",
            status_code=413,
        )
    return content


@app.post("/extract")
async def extract(request: Request) -> Response:
    body = await _read_body(request)
    if isinstance(body, JSONResponse):
        return body

    settings = get_settings()
    # CPU-bound; keep it off the event loop.
    result: dict[str, Any] = await run_in_threadpool(
        extract_family_card_json, body, max_boxes=settings.max_boxes
    )
    status_code = 422 if ERROR_KEY in result else 200
    return JSONResponse(result, status_code=status_code)


@app.post("/spatial-text")
async def spatial_text(request: Request) -> Response:
    body = await _read_body(request)
    if isinstance(body, JSONResponse):
        return body

    settings = get_settings()
    try:
        boxes = parse_boxes(body)
    except ValueError as exc:
        logger.warning("Rejected /spatial-text: %s", exc)
        return _error_response(str(exc), status_code=422)
    if len(boxes) > settings.max_boxes:
        return _error_response(
            f"Too many boxes ({len(boxes)}), max_boxes={settings.max_boxes}",
            status_code=422,
        )

    text = await run_in_threadpool(to_spatial_text, boxes)
    return PlainTextResponse(text, media_type="text/plain; charset=utf-8")


@app.get("/health")
def health() -> PlainTextResponse:
    return PlainTextResponse("ok", media_type="text/plain; charset=utf-8")


@app.get("/favicon.ico", include_in_schema=False)
def favicon() -> Response:
    return Response(status_code=204)
