# pyright: reportAny=false
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, cast

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from controlroom.config import Config, safe_load_config
from controlroom.exceptions import ControlRoomError, ValidationError
from controlroom.supervisor import SupervisorClient
from controlroom.utils import create_server_logger

from ._api import router as api_router
from ._schemas import ErrorResponse

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from structlog.typing import FilteringBoundLogger

# Read when no configuration is passed in, so a reloading server started
# from the CLI still honors --config and --project-dir
CONFIG_PATH_ENV = "CONTROLROOM_CONFIG"
PROJECT_DIR_ENV = "CONTROLROOM_PROJECT_DIR"


def _path_from_env(name: str) -> Path | None:
    value = os.environ.get(name)
    return Path(value) if value else None


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _logger(request: Request) -> "FilteringBoundLogger":
    return cast("FilteringBoundLogger", request.app.state.logger)


async def _handle_control_room_error(request: Request, exc: Exception) -> JSONResponse:
    """Convert a control layer error into the failure envelope."""
    error = cast("ControlRoomError", exc)
    status_code = (
        status.HTTP_400_BAD_REQUEST
        if isinstance(error, ValidationError)
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    _logger(request).warning(
        "request_failed",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        error_type=type(error).__name__,
        error=str(error),
    )
    return _error_response(status_code, str(error))


async def _handle_request_validation_error(
    request: Request, exc: Exception
) -> JSONResponse:
    """Convert a malformed request into the failure envelope."""
    error = cast("RequestValidationError", exc)
    details = error.errors()
    if details:
        first = details[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    _logger(request).warning(
        "request_failed",
        method=request.method,
        path=request.url.path,
        status_code=status.HTTP_400_BAD_REQUEST,
        error_type="RequestValidationError",
        error=message,
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


def create_app(
    *,
    config: Config | None = None,
    client: SupervisorClient | None = None,
    logger: "FilteringBoundLogger | None" = None,
) -> FastAPI:
    """Create the HTTP application.

    Anything not supplied is built from configuration when the app starts.

    Args:
        config: Loaded configuration. If None it is loaded at startup from
            the file named by ``CONTROLROOM_CONFIG``, or else discovered
            under ``CONTROLROOM_PROJECT_DIR``.
        client: Supervisor client; built from ``config`` if None.
        logger: Server logger; built from ``config`` if None.

    Returns:
        A configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> "AsyncGenerator[None]":
        effective_config = cast("Config | None", app.state.config)
        if effective_config is None:
            effective_config, _ = safe_load_config(
                config_path=_path_from_env(CONFIG_PATH_ENV),
                project_dir=_path_from_env(PROJECT_DIR_ENV),
            )
            app.state.config = effective_config

        if app.state.logger is None:
            log_config = effective_config.logging
            app.state.logger = create_server_logger(
                level=log_config.level,
                log_format=log_config.format,
                log_file=log_config.file,
            )
        if app.state.client is None:
            app.state.client = SupervisorClient.from_config(
                effective_config, logger=app.state.logger
            )

        app.state.logger.info("server_started", host=effective_config.host.name)
        yield

    app = FastAPI(docs_url=None, redoc_url="/api-docs", lifespan=lifespan)
    app.state.config = config
    app.state.client = client
    app.state.logger = logger
    app.include_router(router=api_router)
    app.add_exception_handler(ControlRoomError, _handle_control_room_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    return app


app = create_app()
