"""FastAPI application for the Lost & Found service."""

import contextlib
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.dependencies import get_service_container
from .endpoints import claims, found_items, health, lost_items
from .endpoints.health import VERSION

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

_MISSING_ERROR_TYPES = {"missing", "string_too_short"}


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application.

    Creates the repository on startup so storage problems surface at boot,
    and releases it on shutdown.
    """
    container = get_service_container()
    try:
        await container.startup()
    except Exception as e:
        logger.error(f"❌ Cannot initialize storage: {e}")

    yield  # Application runs here

    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Lost & Found API",
    description="Campus lost and found: reports, found items, matching and claims",
    version=VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_service_container().config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(lost_items.router)
app.include_router(found_items.router)
app.include_router(claims.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid or missing request fields as a 400."""
    errors = exc.errors()
    # Blank strings count as missing
    only_missing = all(error.get("type") in _MISSING_ERROR_TYPES for error in errors)
    message = "Missing required fields" if only_missing else "Invalid request"

    logger.warning(f"⚠️ Rejected {request.method} {request.url.path}: {message.lower()}")
    return JSONResponse(
        status_code=400,
        content={
            "message": message,
            "errors": jsonable_encoder(errors),
        },
    )


@app.get("/")
async def root():
    """Simple liveness message."""
    return {"message": "Lost & Found backend is running"}
