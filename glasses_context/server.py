"""
HTTP ingestion server.

Endpoints:
    POST /media   - {"transcript": "..."} or {"image": "<base64>", "mediaType"?: "image/png"}
    POST /echo    - echoes the received JSON back
    GET  /health  - liveness check
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ContextQueryError, InvalidInputError, ReasoningError
from .ingestion import IngestionService

logger = logging.getLogger(__name__)


class MediaPayload(BaseModel):
    """Body of POST /media. Exactly one of transcript/image is expected."""

    transcript: str | None = None
    image: str | None = None
    mediaType: str | None = None


def error_response(error: ContextQueryError) -> JSONResponse:
    """Map the error taxonomy onto HTTP status codes."""
    body: dict[str, Any] = {"error": str(error)}
    if isinstance(error, InvalidInputError):
        status = 400
        if error.field:
            body["field"] = error.field
    elif isinstance(error, ReasoningError):
        status = 502
        if error.status_code is not None:
            body["status"] = error.status_code
    else:
        status = 500
    return JSONResponse(status_code=status, content=body)


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInputError("Invalid JSON") from e


def create_app(service: IngestionService) -> FastAPI:
    """Build the ingestion app around an IngestionService."""
    app = FastAPI(title="glasses-context ingestion")
    app.state.ingestion = service

    @app.middleware("http")
    async def log_timing(request: Request, call_next):
        start = time.perf_counter()
        logger.info(f"-> {request.method} {request.url.path}")
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"<- {request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms")
        return response

    @app.exception_handler(ContextQueryError)
    async def handle_context_error(request: Request, exc: ContextQueryError):
        if not isinstance(exc, InvalidInputError):
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/echo")
    async def echo(request: Request):
        body = await _read_json(request)
        return {"received": body}

    @app.post("/media")
    async def media(request: Request):
        body = await _read_json(request)
        if not isinstance(body, dict):
            raise InvalidInputError("Request body must be a JSON object")
        try:
            payload = MediaPayload.model_validate(body)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"])
            raise InvalidInputError(f"Invalid field {field!r}: {first['msg']}", field=field) from e

        result = await app.state.ingestion.handle_payload(payload.model_dump(exclude_none=True))
        return result.to_dict()

    return app


__all__ = ["MediaPayload", "create_app", "error_response"]
