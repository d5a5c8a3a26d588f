"""FastAPI application factory with middleware, routers, and lifespan."""

import logging
import sys
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .auth.routes import router as auth_router
from .config import Settings, settings, setup_logging
from .database.base import Database
from .dependencies import Unauthorized
from .profiles.routes import router as profile_router
from .validation import field_errors

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    app.state.startup_time = time.time()
    app_settings: Settings = app.state.settings

    if not app_settings.jwt_secret:
        raise RuntimeError("JWT_SECRET missing. Configure .env file")

    database = Database(app_settings.database_url)
    try:
        database.connect()
    except Exception as exc:
        logger.critical("Database connection failed: %s", exc)
        database.dispose()
        raise RuntimeError("Database connection failed") from exc
    app.state.database = database
    logger.info("Database connected")

    try:
        yield
    finally:
        database.dispose()
        logger.info("Database connection closed")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="DevConnector API", version=VERSION, lifespan=lifespan)
    app.state.settings = app_settings or settings
    app.state.startup_time = 0.0

    # --- Exception handlers ---
    @app.exception_handler(Unauthorized)
    async def unauthorized_handler(request: Request, exc: Unauthorized):
        return JSONResponse({"msg": exc.msg}, status_code=401)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"errors": jsonable_encoder(field_errors(exc))}, status_code=400)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return PlainTextResponse("Server error", status_code=500)

    # --- Middleware ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app.state.settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    # --- Routers ---
    app.include_router(auth_router)
    app.include_router(profile_router)

    @app.get("/", response_class=PlainTextResponse)
    def home():
        return "Home route running"

    @app.get("/health")
    def health(request: Request):
        database = getattr(request.app.state, "database", None)
        db_status = "ok" if database is not None and database.ping() else "unreachable"
        status = "ok" if db_status == "ok" else "degraded"
        started = request.app.state.startup_time
        uptime = round(time.time() - started, 1) if started else 0.0

        return {
            "status": status,
            "db": db_status,
            "version": VERSION,
            "uptime_seconds": uptime,
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve on the configured port.

    Exits with status 1 when the database cannot be reached.
    """
    setup_logging(settings)
    database = Database(settings.database_url)
    try:
        database.connect()
    except Exception as exc:
        logger.critical("Database connection failed: %s", exc)
        sys.exit(1)
    finally:
        database.dispose()

    logger.info("Server starting on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
