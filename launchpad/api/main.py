"""FastAPI application for the launchpad pricing service.

The service is a read-only quoting front end: it prices requests against
the snapshot it is given and never stores or commits curve state.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from launchpad import __version__
from launchpad.api.endpoints import router
from launchpad.errors import PricingError
from launchpad.logging_config import configure_logging
from launchpad.models.responses import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("LAUNCHPAD_HOST", "0.0.0.0")
PORT = int(os.environ.get("LAUNCHPAD_PORT", "8000"))
DEBUG = os.environ.get("LAUNCHPAD_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Launchpad Pricing Engine",
    description="Fixed-point quotes for an exponential bonding curve",
    version=__version__,
)


@app.exception_handler(PricingError)
async def pricing_error_handler(request: Request, exc: PricingError) -> JSONResponse:
    """Map pricing failures to 400 responses carrying the error code."""
    logger.warning(
        "pricing_request_failed",
        path=request.url.path,
        error=exc.code,
        detail=str(exc),
    )
    body = ErrorResponse(error=exc.code, detail=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the pricing API server.

    Configuration via environment variables:
    - LAUNCHPAD_HOST: Host to bind to (default: 0.0.0.0)
    - LAUNCHPAD_PORT: Port to bind to (default: 8000)
    - LAUNCHPAD_DEBUG: Enable debug/reload mode (default: false)
    - LAUNCHPAD_LOG_LEVEL / LAUNCHPAD_LOG_JSON: see configure_logging
    """
    configure_logging()
    uvicorn.run(
        "launchpad.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
