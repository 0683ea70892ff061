# pyright: reportUnusedCallResult=false
"""HTTP API server command."""

import os
from typing import Annotated, Literal

from cyclopts import Parameter

from ._context import CLIContext

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


def serve(
    *,
    host: Annotated[
        str,
        Parameter(help="Bind socket to this host."),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        Parameter(help="Bind socket to this port."),
    ] = 6280,
    reload: Annotated[
        bool,
        Parameter(help="Enable auto-reload."),
    ] = False,
    log_level: Annotated[
        LogLevel,
        Parameter(help="Log level."),
    ] = "info",
) -> None:
    """Run the HTTP API server using uvicorn.

    The server uses the configuration loaded for this invocation. A
    reloading server imports the app in a fresh process, so the global
    --config and --project-dir are handed over through the environment.
    """
    import uvicorn

    from controlroom.server import CONFIG_PATH_ENV, PROJECT_DIR_ENV, create_app

    ctx = CLIContext.get_current()

    print(f"Starting control room API server on {host}:{port}")
    if reload:
        if ctx.config_path is not None:
            os.environ[CONFIG_PATH_ENV] = str(ctx.config_path.resolve())
        if ctx.project_dir is not None:
            os.environ[PROJECT_DIR_ENV] = str(ctx.project_dir.resolve())
        uvicorn.run(
            "controlroom.server:app",
            host=host,
            port=port,
            reload=True,
            log_level=log_level,
        )
        return

    uvicorn.run(
        create_app(config=ctx.config),
        host=host,
        port=port,
        log_level=log_level,
    )
