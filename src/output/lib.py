"""Artifact writing for generated schema documents.

Serializes the raw spec dump and both JSON Schemas to a directory as
two-space indented UTF-8 JSON.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.core.log import get_logger

logger = get_logger(__name__)

RAW_SPECS_FILENAME = "mjml-specs-raw.json"
SCHEMA_FILENAME = "mjml-components-schema.json"
AI_SCHEMA_FILENAME = "mjml-components-schema-ai.json"


@dataclass
class ArtifactPaths:
    """Locations of the written artifacts.

    Attributes:
        raw_specs: Raw specification dump.
        schema: Full JSON Schema.
        ai_schema: AI-optimized JSON Schema.
    """

    raw_specs: Path
    schema: Path
    ai_schema: Path


def dump_json(data: Any) -> str:
    """Serialize a document the way all artifacts are written."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(path: Path, data: Any) -> Path:
    """Write one JSON document, creating parent directories.

    Raises:
        OSError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(data), encoding="utf-8")
    return path


def write_artifacts(
    raw_specs: dict[str, Any],
    schema: dict[str, Any],
    ai_schema: dict[str, Any],
    output_dir: Path | str,
) -> ArtifactPaths:
    """Write the three generated documents into a directory.

    Args:
        raw_specs: Raw specification document.
        schema: Full JSON Schema.
        ai_schema: AI-optimized JSON Schema.
        output_dir: Target directory (created if missing).

    Returns:
        ArtifactPaths pointing at the written files.
    """
    output_dir = Path(output_dir)

    paths = ArtifactPaths(
        raw_specs=write_json(output_dir / RAW_SPECS_FILENAME, raw_specs),
        schema=write_json(output_dir / SCHEMA_FILENAME, schema),
        ai_schema=write_json(output_dir / AI_SCHEMA_FILENAME, ai_schema),
    )

    logger.info(f"Raw specifications written to: {paths.raw_specs}")
    logger.info(f"Full JSON Schema written to: {paths.schema}")
    logger.info(f"AI JSON Schema written to: {paths.ai_schema}")
    return paths


__all__ = [
    "AI_SCHEMA_FILENAME",
    "RAW_SPECS_FILENAME",
    "SCHEMA_FILENAME",
    "ArtifactPaths",
    "dump_json",
    "write_json",
    "write_artifacts",
]
