# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Reading and combining raw configuration values.

Raw values come from TOML files and ``CONTROLROOM_*`` environment
variables. They are plain nested dictionaries until Config validates them.
"""

import copy
import json
import os
import tomllib
from typing import TYPE_CHECKING, Any

from controlroom.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

ENV_PREFIX = "CONTROLROOM_"

# Section and key are separated by a double underscore in variable names
_ENV_KEY_SEPARATOR = "__"


def read_toml_file(path: "Path") -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse one TOML configuration file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not valid TOML.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError(
            f"Invalid TOML in {path}: {e}",
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def deep_merge(
    base: "Mapping[str, Any]",  # pyright: ignore[reportExplicitAny]
    override: "Mapping[str, Any]",  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Return ``base`` updated with ``override``, recursing into tables.

    Tables present on both sides are merged key by key. Any other value in
    ``override`` replaces the one in ``base`` outright, lists included.
    The result shares no mutable state with either input.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: "Mapping[str, str] | None" = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect configuration values from environment variables.

    ``CONTROLROOM_SUPERVISOR__BINARY=/opt/pm2`` sets ``supervisor.binary``.
    Values are typed by ``_parse_env_value``.

    Args:
        prefix: Variable name prefix.
        environ: Variables to read. Defaults to ``os.environ``.

    Returns:
        Nested dictionary of the values found.
    """
    values: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    source = os.environ if environ is None else environ

    for name, raw in source.items():
        if not name.startswith(prefix) or name == prefix:
            continue
        key_path = name.removeprefix(prefix).replace(_ENV_KEY_SEPARATOR, ".").lower()
        set_nested_key(values, key_path, _parse_env_value(raw))

    return values


def _parse_env_value(raw: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Type an environment variable value.

    Booleans are matched case-insensitively. Numbers, arrays and objects
    are read as JSON. Anything else, including JSON null, stays a string.
    """
    lowered = raw.strip().lower()
    if lowered in {"true", "false"}:
        return lowered == "true"

    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return raw

    if value is None or isinstance(value, str):
        return raw
    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Assign ``value`` at a dotted path, creating tables along the way.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "health.timeout", 2.5)
        >>> d
        {'health': {'timeout': 2.5}}
    """
    *parents, leaf = key_path.split(".")
    table = d
    for part in parents:
        child = table.get(part)
        if not isinstance(child, dict):
            child = table[part] = {}
        table = child
    table[leaf] = value
