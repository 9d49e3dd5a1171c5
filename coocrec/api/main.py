"""FastAPI application main module.

This module defines the FastAPI application instance, error handling and the
health, status and metrics endpoints of the CoocRec recommendation service.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coocrec import __version__
from coocrec.api.logging_config import RequestLoggingMiddleware
from coocrec.api.metrics import metrics_service
from coocrec.api.routes import recommend
from coocrec.exceptions import CollaborativeFilteringError, CoocRecException

logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title="CoocRec API",
    description="Item co-occurrence recommendation service",
    version=__version__,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(recommend.router)


@app.exception_handler(CoocRecException)
async def coocrec_exception_handler(request: Request, exc: CoocRecException) -> JSONResponse:
    """Turn CoocRec errors into JSON error responses."""
    if isinstance(exc, CollaborativeFilteringError):
        metrics_service.record_rejection()

    logger.warning(
        "Request rejected",
        extra={
            "path": str(request.url.path),
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
            "error": exc.message,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/status")
def status() -> Dict[str, Any]:
    """Report whether interaction data is loaded and how large it is."""
    return recommend.get_cache_status()


@app.get("/metrics")
def metrics() -> Dict[str, Any]:
    """Recommendation call counts and latency."""
    return metrics_service.get_metrics()


if __name__ == "__main__":
    import uvicorn

    from coocrec.api.logging_config import setup_logging
    from coocrec.config import settings

    setup_logging(settings.log_level)

    uvicorn.run(
        "coocrec.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
