from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import close_client

from .api.health import router as health_router
from .api.v1 import api_router
from .exceptions import TripServiceError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    try:
        yield
    finally:
        close_client()


async def handle_trip_service_error(
    request: Request, exc: TripServiceError
) -> JSONResponse:
    """도메인 에러를 {code, message, details} JSON 응답으로 변환한다."""

    extra = {
        "request_id": getattr(request.state, "request_id", None),
        "error_code": exc.kind.value,
        "path": request.url.path,
    }
    if exc.status_code >= 500:
        logger.error("request failed with %s", exc.kind.value, exc_info=exc, extra=extra)
    else:
        logger.info("request rejected: %s", exc.message, extra=extra)

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    setup_logger(name="trip-service")
    app = FastAPI(
        title="Trip Itinerary Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestTraceMiddleware)
    app.add_exception_handler(TripServiceError, handle_trip_service_error)  # type: ignore[arg-type]

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    """명령행에서 실행할 수 있도록 uvicorn 런처를 제공한다."""

    import uvicorn

    port = int(os.getenv("TRIP_SERVICE_PORT", "8003"))
    uvicorn.run(
        "trip_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
