"""JSON Schema documents for MJML component trees.

Builds the three generated artifacts from extracted component specs:
- the raw specification dump
- the full JSON Schema (draft 2020-12), one if/then branch per component
- the AI-optimized JSON Schema, restricted to a simpler component and
  attribute set, with parent/child hierarchy constraints and an example

A document node has ``id``, ``type`` (component name), optional
``children``, ``attributes`` and ``content``.
"""

import copy
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any

from jsonschema import Draft202012Validator, ValidationError, validators

from src.components import ComponentSpec

JSON_SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"
DEFAULT_BASE_ID = "https://notifuse.com/schemas"

FULL_SCHEMA_FILENAME = "mjml-components.json"
AI_SCHEMA_FILENAME = "mjml-components-ai.json"

# Components too complex for generated templates
EXCLUDED_COMPONENTS: tuple[str, ...] = (
    "mj-table",
    "mj-accordion",
    "mj-accordion-element",
    "mj-accordion-title",
    "mj-accordion-text",
    "mj-hero",
    "mj-navbar",
    "mj-navbar-link",
    "mj-carousel",
    "mj-carousel-image",
)

# Shorthand and inner-* attributes; the per-side longhands remain
EXCLUDED_ATTRIBUTES: tuple[str, ...] = (
    "padding",
    "border",
    "inner-padding",
    "inner-padding-top",
    "inner-padding-right",
    "inner-padding-bottom",
    "inner-padding-left",
    "inner-border",
    "inner-border-top",
    "inner-border-right",
    "inner-border-bottom",
    "inner-border-left",
    "inner-border-radius",
    "inner-background-color",
)

HIERARCHY_RULES: dict[str, tuple[str, ...]] = {
    "mjml": ("mj-head", "mj-body"),
    "mj-head": (
        "mj-attributes",
        "mj-breakpoint",
        "mj-font",
        "mj-html-attributes",
        "mj-preview",
        "mj-style",
        "mj-title",
        "mj-raw",
    ),
    "mj-body": ("mj-wrapper", "mj-section", "mj-raw"),
    "mj-wrapper": ("mj-section", "mj-raw"),
    "mj-section": ("mj-column", "mj-group", "mj-raw"),
    "mj-group": ("mj-column",),
    "mj-column": (
        "mj-text",
        "mj-button",
        "mj-image",
        "mj-divider",
        "mj-spacer",
        "mj-social",
        "mj-raw",
    ),
    "mj-attributes": (
        "mj-text",
        "mj-button",
        "mj-image",
        "mj-section",
        "mj-column",
        "mj-wrapper",
        "mj-group",
        "mj-divider",
        "mj-spacer",
        "mj-social",
    ),
}

BASIC_EXAMPLE: dict[str, Any] = {
    "description": (
        "Basic 'Hello World' email showing proper hierarchy "
        "and explicit attribute usage"
    ),
    "value": {
        "id": "root-1",
        "type": "mjml",
        "children": [
            {
                "id": "body-1",
                "type": "mj-body",
                "attributes": {"backgroundColor": "#f4f4f4"},
                "children": [
                    {
                        "id": "section-1",
                        "type": "mj-section",
                        "attributes": {
                            "backgroundColor": "#ffffff",
                            "paddingTop": "20px",
                            "paddingBottom": "20px",
                        },
                        "children": [
                            {
                                "id": "column-1",
                                "type": "mj-column",
                                "children": [
                                    {
                                        "id": "text-1",
                                        "type": "mj-text",
                                        "content": (
                                            "<h1>Hello World!</h1><p>This is a "
                                            "simple email built with MJML.</p>"
                                        ),
                                        "attributes": {
                                            "align": "center",
                                            "color": "#333333",
                                            "fontSize": "16px",
                                            "paddingTop": "10px",
                                            "paddingBottom": "10px",
                                        },
                                    },
                                    {
                                        "id": "button-1",
                                        "type": "mj-button",
                                        "content": "Click Me",
                                        "attributes": {
                                            "href": "https://example.com",
                                            "backgroundColor": "#007bff",
                                            "color": "#ffffff",
                                            "borderRadius": "4px",
                                            "paddingTop": "10px",
                                            "paddingBottom": "10px",
                                        },
                                    },
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
    },
}

AI_SCHEMA_DESCRIPTION = (
    "JSON Schema for generating valid MJML email templates. This schema defines "
    "a tree structure where each node has: 'id' (string), 'type' (component "
    "name), optional 'children' (array of nodes), optional 'attributes' (object "
    "with component-specific properties), and optional 'content' (string for "
    "text/HTML). The schema enforces parent-child hierarchy rules and validates "
    "attribute formats with regex patterns."
)

AI_SCHEMA_COMMENT = (
    "STRUCTURE RULES: Every object MUST have 'id' and 'type'. Root MUST be "
    "type='mjml'. Standard email structure: mjml > mj-body > mj-section > "
    "mj-column > content components (mj-text, mj-button, mj-image). "
    "ATTRIBUTE RULES: Use explicit attributes only: 'paddingTop'/'paddingRight'/"
    "'paddingBottom'/'paddingLeft' instead of 'padding', 'borderTop'/"
    "'borderRight' etc instead of 'border'. NO 'inner-*' attributes allowed. "
    "COMPONENT RESTRICTIONS: Do NOT use mj-table, mj-accordion, mj-hero, "
    "mj-navbar, or mj-carousel (excluded for simplicity). HIERARCHY: Check "
    "'Allowed children' in component descriptions for valid nesting. "
    "EXAMPLES: See the examples array for a complete 'Hello World' template "
    "structure."
)


# =============================================================================
# Document Building Blocks
# =============================================================================


def _node_properties(component_types: list[str]) -> dict[str, Any]:
    """Properties shared by every node of a component tree."""
    return {
        "id": {
            "type": "string",
            "description": "Unique identifier for the component",
        },
        "type": {
            "type": "string",
            "enum": component_types,
            "description": "MJML component type",
        },
        "children": {
            "type": "array",
            "description": "Child components",
            "items": {"$ref": "#"},
        },
        "attributes": {
            "type": "object",
            "description": "Component attributes",
            "additionalProperties": True,
        },
        "content": {
            "type": "string",
            "description": "Text/HTML content for leaf components",
        },
    }


def _component_branch(spec: ComponentSpec) -> dict[str, Any]:
    """Build the if/then branch constraining one component's attributes."""
    return {
        "if": {"properties": {"type": {"const": spec.name}}},
        "then": {
            "description": f"{spec.name} component",
            "properties": {
                "attributes": {
                    "type": "object",
                    "additionalProperties": True,
                    "properties": {
                        attr_name: schema.to_dict()
                        for attr_name, schema in spec.attributes.items()
                    },
                }
            },
        },
    }


def _children_constraint(allowed: tuple[str, ...]) -> dict[str, Any]:
    return {
        "type": "array",
        "description": f"Allowed children: {', '.join(allowed)}",
        "items": {"properties": {"type": {"enum": list(allowed)}}},
    }


def get_allowed_children(component: str) -> tuple[str, ...] | None:
    """Get the permitted child component types for a parent.

    Returns:
        Tuple of component names, or None if nesting is unconstrained.
    """
    return HIERARCHY_RULES.get(component)


# =============================================================================
# Artifact Generation
# =============================================================================


def export_raw_specs(specs: dict[str, ComponentSpec]) -> dict[str, Any]:
    """Export the raw specification document.

    Returns:
        Dict mapping component name to packageName, allowedAttributes,
        defaultAttributes and inferred attributes.
    """
    return {name: spec.to_dict() for name, spec in specs.items()}


def generate_json_schema(
    specs: dict[str, ComponentSpec], base_id: str = DEFAULT_BASE_ID
) -> dict[str, Any]:
    """Generate the full JSON Schema covering every extracted component.

    Args:
        specs: Extracted component specs, in output order.
        base_id: Base URL for the schema ``$id``.

    Returns:
        JSON Schema dict with one ``allOf`` branch per component.
    """
    return {
        "$schema": JSON_SCHEMA_DRAFT,
        "$id": f"{base_id}/{FULL_SCHEMA_FILENAME}",
        "title": "MJML Components Schema",
        "description": (
            "Auto-generated JSON Schema for MJML components extracted "
            "from official MJML packages"
        ),
        "type": "object",
        "required": ["id", "type"],
        "properties": _node_properties(list(specs)),
        "allOf": [_component_branch(spec) for spec in specs.values()],
    }


def filter_specs_for_ai(specs: dict[str, ComponentSpec]) -> dict[str, ComponentSpec]:
    """Drop excluded components and excluded attributes.

    Args:
        specs: Extracted component specs.

    Returns:
        New dict of specs; the input specs are left untouched.
    """
    filtered: dict[str, ComponentSpec] = {}
    for name, spec in specs.items():
        if name in EXCLUDED_COMPONENTS:
            continue
        filtered[name] = replace(
            spec,
            attributes={
                attr_name: schema
                for attr_name, schema in spec.attributes.items()
                if attr_name not in EXCLUDED_ATTRIBUTES
            },
        )
    return filtered


def generate_ai_schema(
    specs: dict[str, ComponentSpec], base_id: str = DEFAULT_BASE_ID
) -> dict[str, Any]:
    """Generate the AI-optimized JSON Schema with hierarchy validation.

    Components in EXCLUDED_COMPONENTS and attributes in EXCLUDED_ATTRIBUTES
    are left out. Parents listed in HIERARCHY_RULES get a ``children``
    constraint limiting child types.

    Args:
        specs: Extracted component specs, in output order.
        base_id: Base URL for the schema ``$id``.

    Returns:
        JSON Schema dict intended for LLM structured output.
    """
    filtered = filter_specs_for_ai(specs)

    branches = []
    for name, spec in filtered.items():
        branch = _component_branch(spec)
        allowed = get_allowed_children(name)
        if allowed:
            branch["then"]["properties"]["children"] = _children_constraint(allowed)
        branches.append(branch)

    return {
        "$schema": JSON_SCHEMA_DRAFT,
        "$id": f"{base_id}/{AI_SCHEMA_FILENAME}",
        "title": "MJML Components Schema (AI-Optimized)",
        "description": AI_SCHEMA_DESCRIPTION,
        "$comment": AI_SCHEMA_COMMENT,
        "type": "object",
        "examples": [copy.deepcopy(BASIC_EXAMPLE)],
        "required": ["id", "type"],
        "properties": _node_properties(list(filtered)),
        "allOf": branches,
    }


# =============================================================================
# Document Validation
# =============================================================================


@dataclass
class SchemaValidationError:
    """Represents a schema validation error in a component tree."""

    path: str
    message: str
    error_type: str


def _format_path(parts) -> str:
    path = "root"
    for part in parts:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a schema ``pattern`` with ECMA-262 anchoring and digits.

    An unescaped ``$`` outside a character class only matches at the very
    end of the string, and ``\\d`` / ``\\s`` / ``\\w`` are ASCII-only.
    """
    out = []
    escaped = in_class = False
    for char in pattern:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            out.append(char)
            escaped = True
        elif in_class:
            out.append(char)
            in_class = char != "]"
        elif char == "[":
            out.append(char)
            in_class = True
        elif char == "$":
            out.append(r"\Z")
        else:
            out.append(char)
    return re.compile("".join(out), re.ASCII)


def _ecma_pattern(validator, pattern, instance, schema):
    if validator.is_type(instance, "string") and not compile_pattern(
        pattern
    ).search(instance):
        yield ValidationError(f"{instance!r} does not match {pattern!r}")


DocumentValidator = validators.extend(
    Draft202012Validator, {"pattern": _ecma_pattern}
)


def validate_document(
    document: dict[str, Any], schema: dict[str, Any]
) -> list[SchemaValidationError]:
    """Validate a component tree against a generated schema.

    Patterns are matched as JSON Schema defines them (ECMA-262), so a
    trailing newline or non-ASCII digits do not satisfy ``^\\d+px$``.

    Args:
        document: Component tree (root node dict).
        schema: Full or AI-optimized schema from this module.

    Returns:
        List of validation errors ordered by path, empty if valid.
    """
    validator = DocumentValidator(schema)
    errors = [
        SchemaValidationError(
            path=_format_path(error.absolute_path),
            message=error.message,
            error_type=str(error.validator),
        )
        for error in validator.iter_errors(document)
    ]
    return sorted(errors, key=lambda e: (e.path, e.error_type))


def is_valid_document(document: dict[str, Any], schema: dict[str, Any]) -> bool:
    """Check if a component tree satisfies a generated schema."""
    return not validate_document(document, schema)


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
