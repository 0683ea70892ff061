# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""The merged, validated configuration of one control room process."""

from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Self, TypeVar, cast, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr

from controlroom.config._defaults import DEFAULT_CONFIG
from controlroom.config._loader import deep_merge, parse_env_vars, read_toml_file
from controlroom.config._models._common import ConfigSource, ConfigSourceName
from controlroom.config._models._health import HealthConfig
from controlroom.config._models._host import HostConfig
from controlroom.config._models._logging import LoggingConfig
from controlroom.config._models._logs import LogsConfig
from controlroom.config._models._supervisor import SupervisorConfig

if TYPE_CHECKING:
    from pathlib import Path

T = TypeVar("T")

_SECTIONS: MappingProxyType[str, type[BaseModel]] = MappingProxyType(
    {
        "logging": LoggingConfig,
        "host": HostConfig,
        "supervisor": SupervisorConfig,
        "logs": LogsConfig,
        "health": HealthConfig,
    }
)


def _validated(data: dict[str, Any], source: str | None = None) -> dict[str, Any]:
    # Deferred import to avoid circular dependency
    from controlroom.config._validation import (  # noqa: PLC0415
        raise_if_validation_errors,
        validate_config,
    )

    raise_if_validation_errors(validate_config(data), source=source)
    return data


class Config(BaseModel):
    """Read-only view over merged configuration.

    Each section is exposed as its own frozen model. Build instances with
    ``from_dict``, ``from_file`` or ``load``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _sections: dict[str, BaseModel] = PrivateAttr(default_factory=dict)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
    ) -> None:
        super().__init__()
        data = _data if _data is not None else deep_merge(DEFAULT_CONFIG, {})
        self._data = data
        self._sources = _sources
        self._sections = {
            name: model.model_validate(data.get(name, {}))
            for name, model in _SECTIONS.items()
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Build configuration from values layered over the defaults.

        Raises:
            ConfigValidationError: If a value is invalid and ``validate`` is set.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls(_data=_validated(merged) if validate else merged)

    @classmethod
    def from_file(
        cls,
        path: "Path",
        *,
        cli_overrides: dict[str, Any] | None = None,
        validate: bool = True,
    ) -> Self:
        """Build configuration from one TOML file layered over the defaults.

        Other files and the environment are not consulted.

        Args:
            path: The TOML file.
            cli_overrides: Values applied on top of the file.
            validate: Whether to validate the result.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file is not valid TOML.
            ConfigValidationError: If a value is invalid.
        """
        values = read_toml_file(path)
        sources = [
            ConfigSource(
                name=ConfigSourceName.PROJECT, path=path, exists=True, values=values
            )
        ]
        merged = deep_merge(DEFAULT_CONFIG, values)
        if cli_overrides:
            sources.insert(
                0,
                ConfigSource(
                    name=ConfigSourceName.CLI,
                    path=None,
                    exists=True,
                    values=cli_overrides,
                ),
            )
            merged = deep_merge(merged, cli_overrides)

        if validate:
            merged = _validated(merged, source=str(path))
        return cls(_data=merged, _sources=tuple(sources))

    @classmethod
    def load(
        cls,
        *,
        project_dir: "Path | None" = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Merge every configuration source.

        Precedence from lowest to highest: defaults, user file, project
        file, environment, CLI overrides.

        Args:
            project_dir: Directory holding ``controlroom.toml``. Defaults to
                the current working directory.
            include_env: Read ``CONTROLROOM_*`` environment variables.
            cli_overrides: Values given on the command line.

        Raises:
            ConfigLoadError: If a file is not valid TOML.
            ConfigValidationError: If the merged result is invalid.
        """
        from controlroom.config._discovery import discover_sources  # noqa: PLC0415

        discovered = discover_sources(
            project_dir=project_dir,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded: list[ConfigSource] = []
        for source in reversed(discovered):
            match source.name:
                case ConfigSourceName.ENV:
                    values = parse_env_vars()
                case ConfigSourceName.PROJECT | ConfigSourceName.USER:
                    values = (
                        read_toml_file(source.path)
                        if source.path and source.exists
                        else {}
                    )
                case _:
                    values = source.values

            merged = deep_merge(merged, values)
            loaded.append(replace(source, values=values))

        return cls(_data=_validated(merged), _sources=tuple(reversed(loaded)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Sources that contributed, highest precedence first."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        return cast("LoggingConfig", self._sections["logging"])

    @property
    def host(self) -> HostConfig:
        return cast("HostConfig", self._sections["host"])

    @property
    def supervisor(self) -> SupervisorConfig:
        return cast("SupervisorConfig", self._sections["supervisor"])

    @property
    def logs(self) -> LogsConfig:
        return cast("LogsConfig", self._sections["logs"])

    @property
    def health(self) -> HealthConfig:
        return cast("HealthConfig", self._sections["health"])

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a raw value by dotted key.

        Examples:
            >>> Config.from_dict({}).get("supervisor.binary")
            'pm2'
            >>> Config.from_dict({}).get("missing.key", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged values."""
        return deep_merge(self._data, {})
