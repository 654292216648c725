"""End-to-end generation pipeline.

Runs extraction, schema generation and artifact writing in sequence:

    definitions -> component specs -> raw dump + full schema + AI schema -> files
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.components import (
    COMPONENT_REGISTRY,
    ComponentDefinition,
    ComponentSpec,
    extract_component_specs,
    load_component_definitions,
)
from src.core.log import get_logger
from src.output import ArtifactPaths, write_artifacts
from src.schema import (
    DEFAULT_BASE_ID,
    export_raw_specs,
    generate_ai_schema,
    generate_json_schema,
)

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Everything produced by one generator run.

    Attributes:
        specs: Extracted component specs.
        raw_specs: Raw specification document.
        schema: Full JSON Schema.
        ai_schema: AI-optimized JSON Schema.
        paths: Written file locations, None when nothing was written.
    """

    specs: dict[str, ComponentSpec]
    raw_specs: dict[str, Any]
    schema: dict[str, Any]
    ai_schema: dict[str, Any]
    paths: ArtifactPaths | None = None

    @property
    def component_count(self) -> int:
        return len(self.specs)

    @property
    def ai_component_count(self) -> int:
        return len(self.ai_schema["properties"]["type"]["enum"])


def resolve_definitions(
    source: Path | str | None = None,
) -> dict[str, ComponentDefinition]:
    """Get the definitions to extract from.

    Args:
        source: Optional definition dump layered over the built-in tables.

    Returns:
        Component definitions by name.
    """
    if source is None:
        return dict(COMPONENT_REGISTRY)
    return load_component_definitions(source)


def build_documents(
    definitions: dict[str, ComponentDefinition] | None = None,
    base_id: str = DEFAULT_BASE_ID,
) -> GenerationResult:
    """Extract specs and build the three documents in memory.

    Args:
        definitions: Component definitions. Defaults to the built-in registry.
        base_id: Base URL for schema ``$id`` values.

    Returns:
        GenerationResult without paths.
    """
    specs = extract_component_specs(definitions)
    logger.info(f"Extracted specifications for {len(specs)} components")

    schema = generate_json_schema(specs, base_id=base_id)

    logger.info("Generating AI-optimized schema...")
    ai_schema = generate_ai_schema(specs, base_id=base_id)

    result = GenerationResult(
        specs=specs,
        raw_specs=export_raw_specs(specs),
        schema=schema,
        ai_schema=ai_schema,
    )
    logger.info(
        f"AI schema includes {result.ai_component_count} components "
        f"(excluded complex ones)"
    )
    return result


def generate_artifacts(
    output_dir: Path | str,
    source: Path | str | None = None,
    base_id: str = DEFAULT_BASE_ID,
) -> GenerationResult:
    """Run the full generator and write all artifacts.

    Args:
        output_dir: Directory receiving the JSON files.
        source: Optional definition dump file.
        base_id: Base URL for schema ``$id`` values.

    Returns:
        GenerationResult including written paths.

    Raises:
        DefinitionLoadError: If the source file cannot be used.
        OSError: If writing fails.
    """
    result = build_documents(resolve_definitions(source), base_id=base_id)
    result.paths = write_artifacts(
        result.raw_specs, result.schema, result.ai_schema, output_dir
    )
    return result


__all__ = [
    "GenerationResult",
    "resolve_definitions",
    "build_documents",
    "generate_artifacts",
]
