"""Attribute schema inference - annotation heuristics for MJML attributes.

Example usage:
    >>> from src.inference import infer_attribute_schema
    >>> infer_attribute_schema("align", "enum(left,right,center)").enum
    ['left', 'right', 'center']
"""

from .lib import (
    DESCRIPTION_RULES,
    PATTERN_RULES,
    AttributeInput,
    AttributeSchema,
    DescriptionRule,
    PatternRule,
    derive_pattern,
    describe_attribute,
    format_units_hint,
    infer_attribute_schema,
    infer_type,
    match_pattern_rule,
    parse_enum_values,
    parse_units,
)

__all__ = [
    # Parsing
    "AttributeInput",
    "parse_enum_values",
    "parse_units",
    # Patterns
    "PatternRule",
    "PATTERN_RULES",
    "match_pattern_rule",
    "derive_pattern",
    # Descriptions
    "DescriptionRule",
    "DESCRIPTION_RULES",
    "format_units_hint",
    "describe_attribute",
    # Inference
    "AttributeSchema",
    "infer_type",
    "infer_attribute_schema",
]
