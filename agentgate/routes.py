from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from redis.exceptions import RedisError

from . import __version__
from .api.agent_routes import router as agent_router
from .api.workspace_routes import router as workspace_router
from .errors import internal_error_body
from .logging_config import logger, redact_headers


class HealthResponse(BaseModel):
    status: str = "ok"


def create_app() -> FastAPI:
    app = FastAPI(title="agentgate", version=__version__)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Request/response logging with credential headers redacted.
        """
        client_host = request.client.host if request.client else "-"
        logger.info(
            "HTTP %s %s from %s, headers=%s",
            request.method,
            request.url.path,
            client_host,
            redact_headers(request.headers),
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error while processing %s %s",
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=internal_error_body(),
            )
        logger.info(
            "HTTP %s %s -> %s", request.method, request.url.path, response.status_code
        )
        return response

    @app.exception_handler(RedisError)
    async def handle_redis_error(request: Request, exc: RedisError) -> JSONResponse:
        logger.error(
            "Persistence error while processing %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=internal_error_body(),
        )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    # Workspace routes first so "/{provider}/workspace" is not read as a provider action.
    app.include_router(workspace_router)
    app.include_router(agent_router)

    return app


__all__ = ["create_app"]
