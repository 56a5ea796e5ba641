import logging
import traceback
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
import uvicorn

import config
from database import Database
from errors import AppError, InvalidIdentifier, ValidationFailed
from routers import users_router, properties_router, tasks_router
from schemas import MessageResponse

logger = logging.getLogger(__name__)


def _error_payload(detail: str, errors: Optional[list] = None, stack: Optional[str] = None) -> dict:
    payload: dict = {"detail": detail}
    if errors:
        payload["errors"] = errors
    if stack and not config.is_production():
        payload["stack"] = stack
    return payload


def _describe(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ())[1:])
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(exc.detail, getattr(exc, "errors", None)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # A path parameter that does not parse is a malformed identifier, not bad input
    if any(error.get("loc", ("",))[0] == "path" for error in errors):
        return JSONResponse(
            status_code=InvalidIdentifier.status_code,
            content=_error_payload(InvalidIdentifier.default_detail),
        )
    return JSONResponse(
        status_code=ValidationFailed.status_code,
        content=_error_payload(ValidationFailed.default_detail, [_describe(error) for error in errors]),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_payload("Operation conflicts with existing data"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_payload("Internal server error", stack=stack),
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application around a Database.

    The database is opened when the app starts and disposed when it stops;
    handlers reach it through request.app.state.database.
    """
    config.configure_logging()
    database = database or Database(config.DATABASE_URL, echo=config.SQL_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init()
        if config.DB_AUTO_CREATE:
            database.create_all()
        logger.info("Application started (env=%s)", config.APP_ENV)
        yield
        database.close()

    app = FastAPI(title="Real Estate Back Office API", lifespan=lifespan)
    app.state.database = database

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/api", response_model=MessageResponse, tags=["health"])
    def read_root():
        return {"message": "Real Estate Back Office API is running"}

    app.include_router(users_router)
    app.include_router(properties_router)
    app.include_router(tasks_router)

    return app


app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=not config.is_production())
