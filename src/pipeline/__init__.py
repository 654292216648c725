"""Pipeline module - runs the generator end to end."""

from .lib import (
    GenerationResult,
    build_documents,
    generate_artifacts,
    resolve_definitions,
)

__all__ = [
    "GenerationResult",
    "resolve_definitions",
    "build_documents",
    "generate_artifacts",
]
