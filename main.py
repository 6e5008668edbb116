# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
People API
==========
CRUD over person records with filtered, sorted and paged search, JWT login
and an Admin-only delete.

    /api/v1/auth/*     register, login
    /api/v1/people*    search, CRUD, age range, domain count, exists
    /health, /metrics  ops

Port: 8000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from people_api.controllers import auth_controller, person_controller, system_controller
from people_api.core.config import settings
from people_api.core.database import engine
from people_api.core.dependencies import get_auth_service
from people_api.core.logging import get_logger
from people_api.middleware import MetricsMiddleware, RequestIDMiddleware
from people_api.models.tables import Base
from people_api.schemas import ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create the schema, verify DB connectivity and provision the bootstrap Admin; dispose pool on shutdown."""
    try:
        if settings.AUTO_CREATE_SCHEMA:
            Base.metadata.create_all(engine)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
        if settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD:
            get_auth_service().provision_admin(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    except Exception as exc:
        logger.error("Database connection FAILED — service will start but DB calls will fail: %s", exc)
    yield
    engine.dispose()
    logger.info("Database connection pool disposed — shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="People API",
    description="Person records with search, pagination and JWT-protected deletes.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        409: {"model": ErrorResponse, "description": "Conflict"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Exception handlers ────────────────────────────────────────────────────
@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    req_id = getattr(request.state, "request_id", None)
    logger.warning("Constraint violation: %s", exc.orig, extra={"request_id": req_id})
    return JSONResponse(
        status_code=409,
        content={
            "error": "conflict",
            "detail": "The operation could not be completed due to a conflict.",
            "request_id": req_id,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path,
                     extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "detail": "An error occurred while processing your request.",
            "request_id": req_id,
        },
    )


app.include_router(system_controller.router)
app.include_router(auth_controller.router)
app.include_router(person_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
