"""POST /api/scan endpoint handler."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.schemas import ErrorResponse, ScanRequest, ScanResponse
from src.api.service import normalize_scan_url
from src.scanner.engine import ScanEngine
from src.scanner.errors import ScanError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _get_engine(request: Request) -> ScanEngine:
    return request.app.state.engine


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/scan",
    response_model=ScanResponse,
    responses={400: {"model": ErrorResponse}},
)
async def scan(
    body: ScanRequest,
    engine: ScanEngine = Depends(_get_engine),
):
    url = normalize_scan_url(body.url)
    if url is None:
        return error_response("Missing url.")

    try:
        return await engine.run(url)
    except ScanError as exc:
        return error_response(exc.message)
    except Exception:
        logger.exception("scan failed unexpectedly", extra={"url": url[:200]})
        return error_response("Scan failed.")
