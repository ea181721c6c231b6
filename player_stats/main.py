"""
Main entry point for FastAPI application.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from player_stats.config import settings
from player_stats.logging_config import setup_logging
from player_stats.models.players import ApiIndexResponse, ErrorResponse, HealthResponse
from player_stats.routes import players, ui
from player_stats.services.roster_filter import rating_tier
from player_stats.utils.db_async import Database

logger = logging.getLogger(__name__)

setup_logging(level=settings.log_level, access_log=settings.access_log)

PACKAGE_DIR = Path(__file__).resolve().parent


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database.from_settings(settings)
    database.connect()
    logger.info(f"DB target: {database.description}")

    # Fail fast: refuse to serve if the store is unreachable
    try:
        await database.ping()
    except Exception:
        logger.exception("Database connection failed")
        await database.dispose()
        raise
    logger.info("Connected to database")

    if settings.is_dev and settings.auto_init_db:
        logger.info("Creating missing tables…")
        await database.create_schema()
    else:
        logger.info("Skipping schema creation; auto_init_db disabled or non-dev env")

    app.state.db = database

    yield

    try:
        logger.info("Disposing DB engine…")
        await database.dispose()
        logger.info("DB engine disposed.")
    except Exception:
        logger.exception("Failed to dispose DB engine")


app = FastAPI(title="Player Stats API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.mount("/static", StaticFiles(directory=PACKAGE_DIR / "static"), name="static")
app.state.templates = Jinja2Templates(directory=PACKAGE_DIR / "templates")
app.state.templates.env.globals["rating_tier"] = rating_tier
app.include_router(players.router)
app.include_router(ui.router)


@app.middleware("http")
async def request_timeout(request: Request, call_next):
    try:
        return await asyncio.wait_for(
            call_next(request), timeout=settings.request_timeout_seconds
        )
    except asyncio.TimeoutError:
        logger.warning(
            f"{request.method} {request.url.path} exceeded "
            f"{settings.request_timeout_seconds}s"
        )
        return error_response(504, "Request timed out")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == 404 and detail == "Not Found":
        detail = "Route not found"
    return error_response(
        exc.status_code, str(detail), headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return error_response(400, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}", exc_info=exc
    )
    return error_response(500, "Internal server error")


@app.get("/", response_model=ApiIndexResponse)
async def api_index():
    return ApiIndexResponse(
        message="Welcome to Player Stats API",
        endpoints={
            "health": "/api/health",
            "players": "/api/players",
            "roster": "/roster",
        },
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health Check Endpoint"""
    return HealthResponse(
        status="OK",
        message="Player Stats API is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


if __name__ == "__main__":
    import uvicorn

    logger.info(f"API available at http://{settings.host}:{settings.port}/api/players")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
