# ============================================================================
# FILE: goonj/main.py
# ============================================================================
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from goonj.api.v1.router import api_router
from goonj.core.logging import setup_logging
from goonj.config import settings
from goonj.schemas.envelope import message, ERROR
import logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title="Goonj Music Streaming API",
    description="Song catalogue, playlists and authentication for the Goonj player",
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

# Include API router
app.include_router(api_router, prefix="/api")

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as the uniform error envelope"""
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=message(detail, status=ERROR),
        headers=getattr(exc, "headers", None)
    )

def _describe_validation_errors(errors) -> str:
    missing = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if error.get("type") in ("missing", "string_too_short") and field:
            missing.append(field)
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    first = errors[0] if errors else {}
    return first.get("msg", "Invalid request")

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Validation failures are client errors (400), not 422"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=message(_describe_validation_errors(exc.errors()), status=ERROR)
    )

@app.on_event("startup")
async def startup_event():
    """Create database tables on startup"""
    logger.info("Starting Goonj API")
    from goonj.db.base import Base
    from goonj.db.session import engine
    Base.metadata.create_all(bind=engine)

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Goonj API")

@app.get("/")
async def root():
    return {"status": "success", "message": "Goonj API", "version": "1.0.0", "docs": "/docs"}

