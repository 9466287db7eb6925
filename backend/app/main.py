"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.database import Base, engine
from app.errors import (
    BadRequest,
    Conflict,
    Forbidden,
    IntegrityError,
    InvalidOperation,
    InvalidReference,
    NotFound,
    TreeError,
)

# Import routers
from app.routers import users, discussions, operations

# Import all models so Base.metadata knows about them
from app.models.user import User                # noqa: F401
from app.models.discussion import Discussion    # noqa: F401
from app.models.operation import Operation      # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Number Discussions",
    description="Computation trees of discussions rooted at a unique number, grown by arithmetic operations",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(discussions.router, prefix="/api/discussions", tags=["Discussions"])
app.include_router(operations.router, prefix="/api/operations", tags=["Operations"])

_STATUS_BY_ERROR = {
    BadRequest: 400,
    NotFound: 404,
    Forbidden: 403,
    Conflict: 409,
    InvalidReference: 400,
    InvalidOperation: 422,
    IntegrityError: 500,
}


@app.exception_handler(TreeError)
async def tree_error_handler(request: Request, exc: TreeError):
    """Map domain errors to HTTP statuses."""
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        500,
    )
    if isinstance(exc, IntegrityError):
        logger.error("Integrity violation on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"detail": "Stored computation tree is inconsistent"})

    detail = exc.message
    if isinstance(exc, Conflict) and exc.existing is not None:
        detail = {
            "message": exc.message,
            "existing_discussion": {
                "discussion_id": exc.existing.discussion_id,
                "starting_number": exc.existing.starting_number,
            },
        }
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a plain 400."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
