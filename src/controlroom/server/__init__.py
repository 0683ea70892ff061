"""HTTP API over the supervisor control layer."""

from ._app import CONFIG_PATH_ENV, PROJECT_DIR_ENV, app, create_app

__all__ = ["CONFIG_PATH_ENV", "PROJECT_DIR_ENV", "app", "create_app"]
