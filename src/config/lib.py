"""Centralized environment configuration management for mjml-schema.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from src.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> output_dir = get_environment(EnvVar.MJML_SCHEMA_OUTPUT_DIR)  # Path | None
    >>> base_id = get_environment(EnvVar.MJML_SCHEMA_BASE_ID)  # Returns str
    >>>
    >>> # Override at runtime
    >>> level = get_environment(EnvVar.MJML_SCHEMA_LOG_LEVEL, override="DEBUG")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "MJML_SCHEMA_OUTPUT_DIR").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str or Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by mjml-schema.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - paths: Input and output locations
        - schema: Generated document settings
        - logging: Console output
    """

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------
    MJML_SCHEMA_OUTPUT_DIR = EnvConfig(
        name="MJML_SCHEMA_OUTPUT_DIR",
        default=None,  # Computed from repo root
        var_type=Path,
        description="Directory receiving the generated JSON artifacts",
        category="paths",
    )
    MJML_SCHEMA_SOURCE = EnvConfig(
        name="MJML_SCHEMA_SOURCE",
        default=None,
        var_type=Path,
        description="Optional JSON dump of component attribute tables",
        category="paths",
    )

    # -------------------------------------------------------------------------
    # Schema Documents
    # -------------------------------------------------------------------------
    MJML_SCHEMA_BASE_ID = EnvConfig(
        name="MJML_SCHEMA_BASE_ID",
        default="https://notifuse.com/schemas",
        var_type=str,
        description="Base URL for the $id of generated schemas",
        category="schema",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    MJML_SCHEMA_LOG_LEVEL = EnvConfig(
        name="MJML_SCHEMA_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for generator output (DEBUG, INFO, WARNING)",
        category="logging",
    )


# =============================================================================
# Repository Root Detection
# =============================================================================


def _find_repo_root(start_path: Path | None = None) -> Path:
    """Find repository root by searching for .gitignore file.

    Args:
        start_path: Directory to start search from. Defaults to cwd.

    Returns:
        Path to repository root directory.

    Raises:
        RuntimeError: If .gitignore is not found.
    """
    current = (start_path or Path.cwd()).resolve()

    while True:
        if (current / ".gitignore").exists():
            return current

        parent = current.parent
        if parent == current:
            raise RuntimeError(
                f"Could not find repository root. No .gitignore found "
                f"starting from: {start_path or Path.cwd()}"
            )
        current = parent


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None or value == "":
        return default

    if var_type is str:
        return value

    if var_type is Path:
        return Path(value)

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str or Path).

    Example:
        >>> get_environment(EnvVar.MJML_SCHEMA_BASE_ID)
        'https://notifuse.com/schemas'
        >>> get_environment(EnvVar.MJML_SCHEMA_LOG_LEVEL, override="DEBUG")
        'DEBUG'
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_output_dir(override: Path | str | None = None) -> Path:
    """Get the artifact output directory.

    Resolution: override > MJML_SCHEMA_OUTPUT_DIR > {repo_root}/schemas
    """
    if override is not None:
        return Path(override)

    env_path = get_environment(EnvVar.MJML_SCHEMA_OUTPUT_DIR)
    if env_path:
        return env_path

    return _find_repo_root() / "schemas"


def get_source_path(override: Path | str | None = None) -> Path | None:
    """Get the optional component definition dump path.

    Resolution: override > MJML_SCHEMA_SOURCE > None (built-in tables)
    """
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.MJML_SCHEMA_SOURCE)


def get_base_id(override: str | None = None) -> str:
    """Get the schema $id base URL without a trailing slash."""
    return get_environment(EnvVar.MJML_SCHEMA_BASE_ID, override).rstrip("/")


def get_log_level(override: str | None = None) -> str:
    """Get the configured log level name."""
    return get_environment(EnvVar.MJML_SCHEMA_LOG_LEVEL, override)


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (paths, schema, logging).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_output_dir",
    "get_source_path",
    "get_base_id",
    "get_log_level",
    # Introspection
    "list_environment_variables",
]
