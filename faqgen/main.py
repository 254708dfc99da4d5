"""
Main FastAPI application for the FAQ generator.
Handles CORS, request logging middleware, lifespan events, and router registration.
"""
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from faqgen.config import settings
from faqgen.database import close_db, init_db
from faqgen.routers import documents, generate, health

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting %s …", settings.APP_NAME)
    logger.info("=" * 60)

    await init_db()
    logger.info("✓ Database ready")

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    logger.info("✓ Upload directory: %s", os.path.abspath(settings.UPLOAD_DIR))

    logger.info("=" * 60)
    logger.info("  %s ready on http://%s:%d", settings.APP_NAME, settings.HOST, settings.PORT)
    logger.info("  POST   /api/upload                     - Upload PDF/DOCX file")
    logger.info("  POST   /api/generate                   - Generate FAQs from text")
    logger.info("  GET    /api/documents                  - List all documents")
    logger.info("  GET    /api/documents/{id}             - Get document details")
    logger.info("  DELETE /api/documents/{id}             - Delete document")
    logger.info("  POST   /api/documents/{id}/regenerate  - Regenerate FAQs")
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("Shutting down %s …", settings.APP_NAME)
    await close_db()
    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Generates FAQs from pasted text or uploaded documents using "
        "rule-based text analysis.\n\n"
        "Key endpoints:\n"
        "- `POST /api/generate` - generate FAQs from text\n"
        "- `POST /api/upload` - generate FAQs from a PDF or DOCX\n"
        "- `GET  /api/documents` - list stored documents\n"
        "- `POST /api/documents/{id}/regenerate` - regenerate a FAQ set\n"
    ),
    version=settings.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) to every response.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Skip noisy health-check polling
    if not request.url.path.startswith("/api/health"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a structured JSON error for any unhandled exception."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error": str(exc),
            "path": str(request.url.path),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,    prefix="/api/health",    tags=["Health"])
app.include_router(generate.router,  prefix="/api",           tags=["Generate"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    """API root - returns basic service info."""
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "generate": "/api/generate",
            "upload": "/api/upload",
            "documents": "/api/documents",
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "faqgen.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
