import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from caterlead.api.routes import leads_router, outreach_router, workflows_router
from caterlead.config import settings
from caterlead.core.logging import StructuredLogger, request_id_var
from caterlead.db.db import close_pool
from caterlead.services.places.exceptions import PlacesError


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    yield
    # Shutdown
    await close_pool()


app = FastAPI(
    title=f"{settings.app_name} API",
    description="Venue discovery and lead enrichment API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REQUEST_ID_HEADER = "X-Request-ID"


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its request id."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    start = time.monotonic()
    try:
        response = await call_next(request)
        StructuredLogger.info(
            f"{request.method} {request.url.path}",
            status_code=response.status_code,
            duration=round(time.monotonic() - start, 3),
        )
    finally:
        request_id_var.reset(token)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# Include routers
app.include_router(leads_router)
app.include_router(workflows_router)
app.include_router(outreach_router)


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors."""
    details = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        details.append({"field": field, "message": error["msg"]})

    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request body",
            "details": details,
        },
    )


@app.exception_handler(PlacesError)
async def places_exception_handler(request: Request, exc: PlacesError):
    return JSONResponse(
        status_code=400,
        content={"error": "SEARCH_FAILED", "message": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": str(exc)},
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
