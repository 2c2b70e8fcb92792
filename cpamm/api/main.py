"""FastAPI application for the constant-product pool exchange.

Note: Authentication and rate limiting are not implemented at the application
level. Callers are identified only by the account id they send.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cpamm.api.endpoints import router
from cpamm.errors import AmmError, AssetAlreadyRegistered, PoolAlreadyExists, PoolNotFound
from cpamm.models import ErrorResponse
from cpamm.safe_int import SafeIntError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("CPAMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("CPAMM_PORT", "8000"))
DEBUG = os.environ.get("CPAMM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

ERROR_STATUS: dict[type[AmmError], int] = {
    PoolNotFound: 404,
    PoolAlreadyExists: 409,
    AssetAlreadyRegistered: 409,
}

app = FastAPI(
    title="Constant-product AMM",
    description="Pool registry, liquidity shares and invariant-checked swaps",
    version="0.1.0",
)


def configure_logging(verbose: bool = False) -> None:
    """Install the console processor chain used by the server."""
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def status_for(error: AmmError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 400


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(AmmError)
async def handle_amm_error(request: Request, exc: AmmError) -> JSONResponse:
    status = status_for(exc)
    logger.warning("request_rejected", path=request.url.path, error=exc.code, detail=str(exc))
    body = ErrorResponse(error=exc.code, detail=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump())


@app.exception_handler(SafeIntError)
async def handle_arithmetic_error(request: Request, exc: SafeIntError) -> JSONResponse:
    logger.warning("arithmetic_rejected", path=request.url.path, error=type(exc).__name__, detail=str(exc))
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - CPAMM_HOST: Host to bind to (default: 0.0.0.0)
    - CPAMM_PORT: Port to bind to (default: 8000)
    - CPAMM_DEBUG: Enable debug logging and reload mode (default: false)
    - CPAMM_INVARIANT_CHECK, CPAMM_TRUNCATE_INVARIANT, CPAMM_STRICT_PAIR_ORDER:
      pool behavior, see cpamm.config
    """
    configure_logging(verbose=DEBUG)
    uvicorn.run(
        "cpamm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
