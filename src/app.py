"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the configuration overlay from ``domain.toml``
(e.g. "production" switches the default database to PostgreSQL).
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from sqlalchemy.exc import DBAPIError

from storefront import config
from storefront.api import routers
from storefront.api.middleware import DomainContextMiddleware, RateLimitMiddleware
from storefront.domain import logger, storefront
from storefront.errors import NotFound, StorageFailure, StorefrontError


@asynccontextmanager
async def lifespan(app: FastAPI):
    storefront.init()
    logger.info("Storefront started", domain=storefront.name)
    yield
    logger.info("Storefront stopped")


def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _storage_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    logger.error("Storage failure", path=request.url.path, error=str(exc.orig))
    return _storefront_error_handler(request, StorageFailure("Storage is unavailable, please retry"))


def _not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": exc.args[0] if exc.args else str(exc)})


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.setdefault(field or "request", []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": errors})


def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Something went wrong"})


def create_app(
    cors_origins: list[str] | None = None,
    rate_limit_max_requests: int | None = None,
    rate_limit_window_seconds: int | None = None,
    lifespan_handler=lifespan,
) -> FastAPI:
    """Build the storefront application.

    Options left as None fall back to the storefront settings. Passing
    ``lifespan_handler=None`` skips domain initialisation, for callers that
    have already initialised the domain.
    """
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout, reviews and wishlist",
        lifespan=lifespan_handler,
    )

    # The last middleware added is the outermost. CORS answers preflight
    # requests before they reach the rate limiter.
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.rate_limit_max_requests() if rate_limit_max_requests is None else rate_limit_max_requests,
        window_seconds=(
            config.rate_limit_window_seconds() if rate_limit_window_seconds is None else rate_limit_window_seconds
        ),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins() if cors_origins is None else cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(DomainContextMiddleware, domain=storefront)

    register_exception_handlers(app)
    app.add_exception_handler(NotFound, _not_found_handler)
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
    app.add_exception_handler(DBAPIError, _storage_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    for router in routers:
        app.include_router(router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app


app = create_app()
