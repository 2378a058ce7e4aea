import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from todoapi.config import get_settings
from todoapi.database import Database
from todoapi.errors import AppError
from todoapi.log import setup_logging
from todoapi.routers import user_router, todo_router

logger = logging.getLogger(__name__)

RESOURCES = {
    "users": (user_router.router, "Users"),
    "todos": (todo_router.router, "Todos"),
}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.error, "message": exc.message})


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "InternalError", "message": "Internal server error"})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "InternalError", "message": "Internal server error"})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def create_app(
    db: Optional[Database] = None,
    *,
    title: Optional[str] = None,
    resources: Iterable[str] = ("users", "todos"),
) -> FastAPI:
    """Build the API with ``db`` as its storage handle.

    Without an explicit ``db`` one is created from ``DATABASE_URL``. Tables are
    created on startup and the engine is disposed on shutdown.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    if db is None:
        db = Database(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.create_all()
        logger.info("Database ready at %s", db.engine.url.render_as_string(hide_password=True))
        yield
        await db.dispose()

    app = FastAPI(title=title or settings.app_title, lifespan=lifespan)
    app.state.db = db

    for name in resources:
        router, tag = RESOURCES[name]
        app.include_router(router, prefix=f"/{name}", tags=[tag])

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Root health
    @app.get("/")
    async def read_root():
        return {"status": "ok"}

    return app
