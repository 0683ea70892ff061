"""Configuration source discovery.

This module locates the configuration files that feed into a merged
Config: the per-user file in the platform config directory and the
``controlroom.toml`` file of the working directory.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_FILENAME = "controlroom.toml"


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/controlroom/config.toml``
    - macOS: ``~/Library/Application Support/controlroom/config.toml``
    - Windows: ``%APPDATA%\controlroom\config.toml``

    The path is returned regardless of whether the file exists.

    Returns:
        Path to the user config file for the current platform.
    """
    return platformdirs.user_config_path("controlroom") / "config.toml"


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get the path of the project config file.

    Args:
        project_dir: Directory holding the file. Defaults to the current
            working directory.

    Returns:
        Path to ``controlroom.toml``.
    """
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_FILENAME


def discover_sources(
    project_dir: Path | None = None,
    *,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Args:
        project_dir: Directory holding ``controlroom.toml``.
        include_env: Include environment variables as a source.
        cli_overrides: Dictionary of CLI argument overrides, if any.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        File sources that don't exist are still included with exists=False.
    """
    sources: list[ConfigSource] = []

    if cli_overrides is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    project_path = get_project_config_path(project_dir)
    sources.append(
        ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=project_path,
            exists=project_path.is_file(),
            values={},
        )
    )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=user_path.is_file(),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
