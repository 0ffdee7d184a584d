# ============================================================================
# FILE: songly/main.py
# ============================================================================
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from songly.api.v1.router import api_router
from songly.core.errors import BadRequestError, SonglyError, UnauthorizedError
from songly.core.logging import setup_logging
from songly.core.soundcloud_client import SoundcloudClient
from songly.core.validation import format_errors
from songly.config import settings
import logging
import time

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title="Songly API",
    description="Playlists and songs with user accounts",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One access line per request: method, path, status, duration"""
    start = time.perf_counter()
    # Unhandled errors escape call_next and become 500s further out
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {status_code} - {elapsed_ms:.1f} ms")

def _envelope(message, status_code: int, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
        headers=headers,
    )

@app.exception_handler(SonglyError)
async def songly_error_handler(request: Request, exc: SonglyError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status, content=exc.to_dict(), headers=headers)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = BadRequestError(format_errors(exc.errors()))
    return JSONResponse(status_code=error.status, content=error.to_dict())

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched routes and wrong methods land here
    return _envelope(exc.detail, exc.status_code, getattr(exc, "headers", None))

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Generic error handler; anything unhandled goes here"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _envelope(str(exc), 500)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    logger.info("Starting Songly API")
    # Create database tables if they do not exist yet
    from songly.db.base import init_db
    from songly.db.session import engine
    init_db(engine)
    app.state.soundcloud = SoundcloudClient()

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Songly API")
    soundcloud = getattr(app.state, "soundcloud", None)
    if soundcloud is not None:
        soundcloud.close()

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
