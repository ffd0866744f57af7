import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer import __version__, database
from string_analyzer.config import get_settings
from string_analyzer.limiter import limiter
from string_analyzer.logging import RequestLoggingMiddleware, init_logging, setup_query_logging
from string_analyzer.routes import health, strings

settings = get_settings()

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
init_logging(settings)
logger = logging.getLogger("string_analyzer")


# ---------------------------------------------------------------------------
# App lifespan (startup/shutdown)
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup, release the pool on shutdown."""
    logger.info("Startup (%s): initializing database...", settings.env)
    try:
        database.init_db()
    except Exception as e:
        logger.critical("Database initialization failed: %s", e)
        raise

    if limiter.enabled:
        logger.info("Rate limiting enabled: %s", settings.rate_limit)
    else:
        logger.info("Rate limiting disabled (RATE_LIMIT_ENABLED=false)")

    yield

    logger.info("Shutdown: closing database connection pool...")
    try:
        database.shutdown_db()
    except Exception as e:
        logger.error("Error during shutdown cleanup: %s", e)


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------
def install_rate_limiting(app: FastAPI, app_limiter: Limiter) -> None:
    """Attach a slowapi limiter: default limits apply to every route, 429 on excess."""
    app.state.limiter = app_limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# FastAPI Application
# ---------------------------------------------------------------------------
app = FastAPI(
    title="String Analyzer Service",
    version=__version__,
    description=(
        "Analyze strings and store their computed properties.\n\n"
        "Features:\n"
        "- Length, palindrome check, unique characters, word count, SHA-256, character frequencies\n"
        "- Lookup and delete by exact value\n"
        "- Structured filters and a heuristic natural language filter"
    ),
    lifespan=lifespan,
)

install_rate_limiting(app, limiter)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_query_logging(database.engine, settings.slow_query_threshold_ms)

app.include_router(health.router)
app.include_router(strings.router)


# -------------------------------
# Unified error response handlers
# -------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    level = logging.WARNING if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "HTTPException: %s %s -> %s | detail=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    body = {"error": exc.detail if isinstance(exc.detail, str) else "Error"}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(
        "ValidationError: %s %s | errors=%s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body or parameters", "details": details},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception: %s %s",
        request.method,
        request.url.path,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
