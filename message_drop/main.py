# message_drop/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from message_drop.core.config import Settings, load_settings
from message_drop.core.errors import DropError
from message_drop.core.security import PasswordHasher
from message_drop.database import create_db_engine, init_db
from message_drop.routers.auth import router as auth_router
from message_drop.routers.drops import router as drops_router
from message_drop.routers.public import router as public_router
from message_drop.routers.health import router as health_router

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API. Raises a validation error when no usable SECRET_KEY
    is configured, so a misconfigured deployment never starts.
    """
    settings = settings or load_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    app = FastAPI(
        title="Message Drop API",
        version="0.1.0",
    )
    # process-wide resources, handed to requests through dependencies
    app.state.settings = settings
    app.state.engine = create_db_engine(settings)
    app.state.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    @app.middleware("http")
    async def preflight_and_no_cache(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_200_OK)
        else:
            response = await call_next(request)
        response.headers.update(NO_CACHE_HEADERS)
        return response

    # added last so it wraps everything and answers real CORS preflights itself
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DropError)
    async def drop_error_handler(request: Request, exc: DropError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            detail = "Method not allowed"
        else:
            detail = exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.on_event("startup")
    def on_startup():
        init_db(app.state.engine)

    app.include_router(auth_router)
    app.include_router(drops_router)
    app.include_router(public_router)
    app.include_router(health_router)

    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "message_drop.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )
