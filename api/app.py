"""
FastAPI application factory.

Usage:
    DATABASE_URL=sqlite:///advocates.sqlite python -m api.app   # Dev server on port 8000
    uvicorn --factory api.app:create_app

OpenAPI docs available at http://localhost:8000/docs after starting.

The database client is built once, before any request is served, and held
on ``app.state.database``.  A missing DATABASE_URL aborts startup with
ConfigurationError.

Structured JSON logging when APP_LOG_FORMAT=json.
CORS origins are configurable via APP_CORS_ORIGINS.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from api.database import Database
from api.routes import advocates
from api.routes import frontend as frontend_routes
from utils.config import AppConfig
from utils.formatting import format_phone
from utils.logging import configure_logging

_logger = logging.getLogger("advocate_directory_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warn on startup if the configured database file does not exist yet."""
    db: Database = app.state.database
    if not db.exists():
        _logger.warning(
            "Database not found at %s. Run 'python build_advocates_db.py' first.",
            db.path,
        )
    yield


def create_app(database: Database | None = None, cfg: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        database: Query client to serve from.  Built from DATABASE_URL when
            omitted (useful to override in tests).
        cfg: Configuration; read from the environment when omitted.

    Returns:
        Configured FastAPI application instance.

    Raises:
        ConfigurationError: *database* omitted and DATABASE_URL unset.
    """
    cfg = cfg or AppConfig.from_env()
    configure_logging(cfg.log_format, cfg.log_level)
    if database is None:
        database = Database.from_env(cfg)

    app = FastAPI(
        title="Advocate Directory API",
        summary="Directory of advocates with filterable listing.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "advocates",
                "description": "The full advocate collection in a `{\"data\": [...]}` envelope.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )
    app.state.database = database
    app.state.config = cfg

    # ── CORS middleware ──────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with a short request ID."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "client_ip": client_ip,
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f ip=%s rid=%s",
                request.method, path, response.status_code, duration_ms,
                client_ip, request_id,
            )
        return response

    # ── Security headers ──────────────────────────────────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        # 'unsafe-inline' covers the inline <style> block in index.html.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' unpkg.com; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.error("unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "status_code": 500,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"error": "Bad request", "detail": str(exc), "status_code": 400},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the API is running and can query the advocates table."""
        db: Database = app.state.database
        if not db.exists():
            return JSONResponse(
                status_code=503,
                content={"status": "no_database", "database": str(db.path)},
            )
        try:
            with db.connect() as conn:
                count = conn.execute("SELECT COUNT(*) FROM advocates").fetchone()[0]
        except Exception as e:
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "error": str(e)},
            )
        return {"status": "ok", "database": str(db.path), "advocates": count}

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(advocates.router)

    # ── Jinja2 templates ──────────────────────────────────────────────────────
    templates_dir = Path(__file__).parent.parent / "templates"

    if templates_dir.exists():
        templates = Jinja2Templates(directory=str(templates_dir))
        templates.env.filters["fmt_phone"] = format_phone

        # Wire templates into the frontend router
        frontend_routes.set_templates(templates)
        app.include_router(frontend_routes.router)

    return app


if __name__ == "__main__":
    import uvicorn
    _cfg = AppConfig.from_env()
    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
