"""HTTP route for customer file uploads."""

from __future__ import annotations

from uuid import uuid4

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect
from starlette.types import Message, Receive

from ..media.staging_store import StagingArea
from .upload_errors import InternalUploadError, UploadError
from .upload_models import StagedUpload, TransportError, UploadRequest
from .upload_service import UploadService

router = APIRouter(prefix="/api", tags=["upload"])
logger = structlog.get_logger(__name__)

FILE_FIELD = "file"
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
}


def get_upload_service(request: Request) -> UploadService:
    """Fetch the upload service from application state."""
    try:
        return request.app.state.upload_service  # type: ignore[attr-defined]
    except AttributeError as exc:
        raise RuntimeError("UploadService is not configured") from exc


def _respond(status_code: int, payload: dict[str, object]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=NO_CACHE_HEADERS)


class BodyLimitExceeded(Exception):
    """Raised from the receive channel once the body outgrows the transport cap."""

    def __init__(self, received: int) -> None:
        super().__init__(received)
        self.received = received


def _capped_receive(receive: Receive, limit_bytes: int) -> Receive:
    received = 0

    async def capped() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit_bytes:
                raise BodyLimitExceeded(received)
        return message

    return capped


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None or not raw.isdigit():
        return None
    return int(raw)


def _oversized(size: int, limit_bytes: int) -> StagedUpload:
    logger.warning("upload.body_too_large", size_bytes=size, limit_bytes=limit_bytes)
    return StagedUpload(filename="", size=size, path=None, error=TransportError.INI_SIZE)


async def _read_file_field(request: Request, staging: StagingArea) -> StagedUpload | str | None:
    """Parse the multipart body and stage the ``file`` part, if any.

    The transport cap applies to the whole body: a declared ``Content-Length``
    above it is refused before reading, and chunked bodies are cut off as soon
    as the running total crosses it.
    """
    limit_bytes = staging.limit_bytes
    declared = _declared_length(request)
    if declared is not None and declared > limit_bytes:
        return _oversized(declared, limit_bytes)

    capped = Request(request.scope, _capped_receive(request.receive, limit_bytes))
    try:
        form = await capped.form()
    except BodyLimitExceeded as exc:
        return _oversized(exc.received, limit_bytes)
    except (MultiPartException, StarletteHTTPException, ClientDisconnect):
        return StagedUpload(filename="", size=0, path=None, error=TransportError.PARTIAL)

    try:
        value = form.get(FILE_FIELD)
        if value is None:
            return None
        if isinstance(value, UploadFile):
            return await staging.stage(value)
        return str(value)
    finally:
        await form.close()


@router.api_route(
    "/upload", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
)
async def upload_file(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> JSONResponse:
    """Accept one file, validate it and publish it under the uploads directory."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(upload_id=uuid4().hex, method=request.method)
    upload_request = UploadRequest(method=request.method, base_path=request.url.path)
    try:
        if request.method == "POST":
            upload_request.file = await _read_file_field(request, service.staging)
        result = await run_in_threadpool(service.handle, upload_request)
    except UploadError as exc:
        logger.warning("upload.rejected", error=exc.code, status=exc.status_code, mime=exc.mime)
        return _respond(exc.status_code, exc.payload())
    except Exception:
        logger.exception("upload.unexpected_error")
        failure = InternalUploadError()
        return _respond(failure.status_code, failure.payload())
    finally:
        if isinstance(upload_request.file, StagedUpload):
            service.staging.release(upload_request.file)
        structlog.contextvars.clear_contextvars()

    logger.info("upload.accepted", url=result.url, size=result.size, mime=result.mime)
    return _respond(200, result.payload())
