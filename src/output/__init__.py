"""Output module for writing generated artifacts."""

from .lib import (
    AI_SCHEMA_FILENAME,
    RAW_SPECS_FILENAME,
    SCHEMA_FILENAME,
    ArtifactPaths,
    dump_json,
    write_artifacts,
    write_json,
)

__all__ = [
    "AI_SCHEMA_FILENAME",
    "RAW_SPECS_FILENAME",
    "SCHEMA_FILENAME",
    "ArtifactPaths",
    "dump_json",
    "write_json",
    "write_artifacts",
]
