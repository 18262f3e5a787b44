"""Главный файл приложения FastAPI."""

import logging
import random
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from diwaifox.api import api_router
from diwaifox.core.clock import utcnow
from diwaifox.core.config import Settings, settings as default_settings
from diwaifox.core.exceptions import ServiceError
from diwaifox.core.logging_config import request_id_var, setup_logging
from diwaifox.repositories import build_repositories
from diwaifox.services import DistanceEstimator, build_services

logger = logging.getLogger("diwaifox.main")

API_PREFIX = "/api"


def _format_validation_error(exc: RequestValidationError) -> str:
    """Собирает короткое сообщение из ошибок pydantic."""
    missing = []
    other = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        if error.get("type") in ("missing", "string_too_short"):
            missing.append(field)
        else:
            other.append(f"{field}: {error.get('msg')}")
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    return "; ".join(other) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_error(exc)
        logger.info(f"{request.method} {request.url.path} -> 400: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Необработанная ошибка в {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app(
    app_settings: Optional[Settings] = None,
    distance_estimator: Optional[DistanceEstimator] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Собирает приложение.
    Хранилище и сервисы создаются в lifespan и кладутся в app.state.services.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.LOG_LEVEL, app_settings.LOG_FORMAT)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Application startup...")
        repositories = build_repositories(app_settings)
        services = build_services(
            app_settings, repositories, distance_estimator=distance_estimator, rng=rng
        )
        app.state.services = services

        if app_settings.SEED_ADMIN:
            services.credentials.seed_admin(
                app_settings.ADMIN_EMAIL,
                app_settings.ADMIN_PASSWORD,
                app_settings.ADMIN_NAME,
                app_settings.ADMIN_PHONE,
            )

        yield

        logger.info("Application shutdown...")
        repositories.close()

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Заказ такси: пассажиры, водители и администраторы",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware для установки request_id
    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        request_id = str(uuid.uuid4())
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)
    app.include_router(api_router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health", tags=["Healthcheck"])
    async def healthcheck():
        """Проверка доступности сервиса."""
        return {"status": "ok", "timestamp": utcnow().isoformat()}

    return app


app = create_app()
