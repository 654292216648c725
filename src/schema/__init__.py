"""Schema module - JSON Schema documents for MJML component trees.

This module provides:
- The full component schema (one conditional branch per component)
- The AI-optimized schema (restricted set plus hierarchy rules)
- The raw specification dump
- Validation of component trees against a generated schema

Example usage:
    >>> from src.components import extract_component_specs
    >>> from src.schema import generate_ai_schema, generate_json_schema
    >>> specs = extract_component_specs()
    >>> schema = generate_json_schema(specs)
    >>> ai_schema = generate_ai_schema(specs)
"""

from .lib import (
    BASIC_EXAMPLE,
    DEFAULT_BASE_ID,
    EXCLUDED_ATTRIBUTES,
    EXCLUDED_COMPONENTS,
    HIERARCHY_RULES,
    JSON_SCHEMA_DRAFT,
    DocumentValidator,
    SchemaValidationError,
    compile_pattern,
    export_raw_specs,
    filter_specs_for_ai,
    generate_ai_schema,
    generate_json_schema,
    get_allowed_children,
    is_valid_document,
    validate_document,
)

__all__ = [
    # Constants
    "JSON_SCHEMA_DRAFT",
    "DEFAULT_BASE_ID",
    "EXCLUDED_COMPONENTS",
    "EXCLUDED_ATTRIBUTES",
    "HIERARCHY_RULES",
    "BASIC_EXAMPLE",
    # Lookup
    "get_allowed_children",
    # Generation
    "export_raw_specs",
    "generate_json_schema",
    "filter_specs_for_ai",
    "generate_ai_schema",
    # Validation
    "SchemaValidationError",
    "DocumentValidator",
    "compile_pattern",
    "validate_document",
    "is_valid_document",
]
