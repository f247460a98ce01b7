from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlmodel import SQLModel
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def _error_content(code: str, message: str) -> dict:
    return {"success": False, "message": message, "error": {"code": code, "message": message}}


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc.base_error.code, exc.base_error.message),
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(exc.base_error.code, exc.public_message),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
    message = f"Invalid request: {field} {first.get('msg', 'is invalid')}".strip()
    logger.warning(f"Validation error on {request.url.path}: {field}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content("VALIDATION_ERROR", message),
    )


async def handle_rate_limit_exceeded(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded on {request.url.path} ({exc.detail})")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=_error_content(
            "RATE_LIMIT_EXCEEDED",
            "Too many requests. Please try again later.",
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(
            "INTERNAL_ERROR",
            "An error occurred while processing your request. Please try again later.",
        ),
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.adapter.services.expired_token_sweeper import ExpiredTokenSweeper
        from src.depends import AsyncSessionLocal, engine

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        sweeper = None
        if ApplicationConfig.TOKEN_SWEEP_ENABLED:
            sweeper = ExpiredTokenSweeper(
                AsyncSessionLocal,
                interval_seconds=ApplicationConfig.TOKEN_SWEEP_INTERVAL_MINUTES * 60,
            )
            await sweeper.start()
        app.state.token_sweeper = sweeper

        yield

        if sweeper is not None:
            await sweeper.stop()

    app = FastAPI(title="Advisor Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check
    from src.api.utils.rate_limit import limiter

    app.state.limiter = limiter

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit_exceeded)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
