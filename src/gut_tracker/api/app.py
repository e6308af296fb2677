"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from gut_tracker.api.ai import router as ai_router
from gut_tracker.api.analysis import router as analysis_router
from gut_tracker.api.dependencies import require_api_token
from gut_tracker.api.entries import router as entries_router
from gut_tracker.api.schemas import ErrorBody
from gut_tracker.api.settings import router as settings_router
from gut_tracker.app_logging import configure_logging
from gut_tracker.containers import AppContainer
from gut_tracker.domain.errors import AiError, AiErrorKind

AI_ERROR_STATUS = {
    AiErrorKind.CONFIGURATION: status.HTTP_400_BAD_REQUEST,
    AiErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    AiErrorKind.QUOTA: status.HTTP_429_TOO_MANY_REQUESTS,
    AiErrorKind.NETWORK: status.HTTP_503_SERVICE_UNAVAILABLE,
    AiErrorKind.PROVIDER: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    protected = [Depends(require_api_token)]
    app.include_router(entries_router, dependencies=protected)
    app.include_router(ai_router, dependencies=protected)
    app.include_router(analysis_router, dependencies=protected)
    app.include_router(settings_router, dependencies=protected)

    @app.exception_handler(AiError)
    async def ai_error_handler(request: Request, exc: AiError) -> JSONResponse:
        logger.warning(
            "AI call failed on %s (%s, %s): %s",
            request.url.path,
            exc.provider,
            exc.kind,
            exc.message,
        )
        body = ErrorBody(
            detail=exc.message,
            provider=exc.provider,
            kind=exc.kind.value,
            is_quota_error=exc.is_quota_error,
        )
        return JSONResponse(
            status_code=AI_ERROR_STATUS[exc.kind],
            content=body.model_dump(by_alias=True),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
