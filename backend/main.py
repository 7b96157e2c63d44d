# backend/main.py
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

load_dotenv()

from config import Settings, get_settings
from database import build_engine, build_session_factory
from exceptions import DelegationAppError, ValidationFailed
from migrations import apply_migrations

# Routers
from routes.auth import router as auth_router
from routes.profile import router as profile_router
from routes.delegations import router as delegations_router
from routes.analytics import router as analytics_router

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema problems are fatal: do not start serving with a missing table
    apply_migrations(app.state.engine)
    logger.info("Delegation API ready")
    yield
    app.state.engine.dispose()


def _error_fields(exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc and loc[0] not in fields:
            fields.append(loc[0])
    return fields


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(DelegationAppError)
    async def handle_app_error(request: Request, exc: DelegationAppError):
        content = {"detail": exc.message}
        if isinstance(exc, ValidationFailed):
            content["fields"] = exc.fields
        return JSONResponse(status_code=exc.status_code, content=content)

    # Body/query validation is reported as 400 like every other input problem
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        missing_only = all(error.get("type") == "missing" for error in exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Missing fields" if missing_only else "Invalid fields",
                "fields": _error_fields(exc),
            },
        )

    def server_error(exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        content = {"detail": "Server error"}
        if settings.EXPOSE_ERROR_DETAILS:
            content["details"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError):
        return server_error(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return server_error(exc)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Delegation Tracker API", version="1.0.0", lifespan=lifespan)

    # One engine (and connection pool) per process, handed to requests via get_db
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.dependency_overrides[get_settings] = lambda: settings

    # Open to every origin unless a frontend URL is configured
    origins = [settings.FRONTEND_URL] if settings.FRONTEND_URL else ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    # Register routers
    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(delegations_router)
    app.include_router(analytics_router)

    @app.get("/")
    def read_root():
        return {"message": "Delegation Tracker API is running"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=get_settings().PORT)
