"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import error_response, router
from src.config import get_settings
from src.logging_config import setup_logging
from src.scanner.engine import ScanEngine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce structured logs
    setup_logging(settings.log_level, settings.log_format)
    logger.info("starting site audit service")

    app.state.settings = settings
    app.state.engine = ScanEngine(settings)

    logger.info(
        "site audit service ready",
        extra={
            "fetch_timeout_seconds": settings.fetch_timeout_seconds,
            "max_html_bytes": settings.max_html_bytes,
            "max_redirects": settings.max_redirects,
        },
    )

    yield

    logger.info("shutting down site audit service")


app = FastAPI(title="Site Audit Service", lifespan=lifespan)
app.include_router(router)

_cors_origins = get_settings().cors_origins()
if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.debug("rejected request body", extra={"path": request.url.path, "errors": str(exc.errors())[:500]})
    return error_response("Invalid request body.")


@app.get("/health")
async def health():
    return {"status": "ok"}
