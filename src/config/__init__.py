"""Centralized configuration management for mjml-schema.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from src.config import EnvVar, get_environment
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> base_id = get_environment(EnvVar.MJML_SCHEMA_BASE_ID)
    >>> output_dir = get_output_dir()  # Path, defaults to {repo}/schemas
    >>>
    >>> # List available variables by category
    >>> for var in list_environment_variables("paths"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    paths: Output directory and optional definition dump
    schema: Generated document settings ($id base URL)
    logging: Console log level
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_base_id,
    get_environment,
    get_environment_info,
    get_log_level,
    get_output_dir,
    get_source_path,
    # Introspection
    list_environment_variables,
)

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
