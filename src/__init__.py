"""mjml-schema: JSON Schema generator for MJML email components."""

from src.components import ComponentSpec, extract_component_specs
from src.inference import AttributeSchema, infer_attribute_schema
from src.schema import (
    SchemaValidationError,
    generate_ai_schema,
    generate_json_schema,
    validate_document,
)

__all__ = [
    # Inference
    "AttributeSchema",
    "infer_attribute_schema",
    # Components
    "ComponentSpec",
    "extract_component_specs",
    # Schema
    "generate_json_schema",
    "generate_ai_schema",
    "validate_document",
    "SchemaValidationError",
]
