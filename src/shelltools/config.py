"""Configuration loading and management for shelltools.

Settings shared by every tool are merged in priority order:
    1. Defaults (defined in ToolSettings)
    2. Global config (~/.shelltools.toml)
    3. Project config (./shelltools.toml)
    4. Explicit config file (--config)
    5. Environment variables (SHELLTOOLS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> settings = load_settings(workers=4)
    >>> settings.max_workers(10)
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, ShellToolsError

Verbosity = Literal["quiet", "normal", "verbose"]

VERBOSITY_LEVELS = ("quiet", "normal", "verbose")

# Threads mostly wait on file I/O, so allow more than one per core.
DEFAULT_WORKERS = min(32, (os.cpu_count() or 1) + 4)


@dataclass(frozen=True)
class ToolSettings:
    """Settings shared by all tools.

    Attributes:
        workers: Upper bound on concurrent per-path tasks (None = auto)
        verbosity: Logging verbosity level
        log_file: Optional file that receives a copy of all log records
    """

    workers: Optional[int] = None
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.verbosity not in VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(VERBOSITY_LEVELS)}"
            )

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"

    def max_workers(self, task_count: int) -> int:
        """Pool size for ``task_count`` independent tasks."""
        limit = self.workers or DEFAULT_WORKERS
        return max(1, min(task_count, limit))


def load_settings(config_file: Optional[Path] = None, **overrides) -> ToolSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset flags do not mask file settings

    Returns:
        Validated ToolSettings instance

    Raises:
        ShellToolsError: If a config file is missing or unreadable
        InvalidConfigError: If a value or key is invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".shelltools.toml"
    if global_config.exists():
        merged.update(_read_config(global_config, "global"))

    project_config = Path.cwd() / "shelltools.toml"
    if project_config.exists():
        merged.update(_read_config(project_config, "project"))

    if config_file is not None:
        if not config_file.exists():
            raise ShellToolsError(f"Config file not found: {config_file}")
        merged.update(_read_config(config_file, "explicit"))

    merged.update(_load_env_vars())

    # --verbose / --quiet arrive as booleans
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(merged) - set(ToolSettings.__dataclass_fields__)
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, merged[key], "unknown setting")

    return ToolSettings(**merged)


def _read_config(path: Path, kind: str) -> dict:
    try:
        return _load_toml_file(path)
    except ShellToolsError:
        raise
    except Exception as e:
        raise ShellToolsError(f"Invalid {kind} config '{path}': {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load settings from SHELLTOOLS_* environment variables.

    Supported environment variables:
        SHELLTOOLS_WORKERS: int
        SHELLTOOLS_VERBOSITY: quiet/normal/verbose
        SHELLTOOLS_LOG_FILE: path

    Returns:
        Dict of field_name -> parsed_value for any SHELLTOOLS_* vars found.
    """
    type_hints = get_type_hints(ToolSettings)

    result: dict[str, Any] = {}

    for field_name in ToolSettings.__dataclass_fields__:
        env_key = f"SHELLTOOLS_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ShellToolsError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ShellToolsError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)


default_settings = ToolSettings()
