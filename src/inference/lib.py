"""Attribute schema inference for MJML component attributes.

MJML components declare their attributes with a loose annotation
mini-language (``enum(...)``, ``unit(...)``, ``unit(...){m,n}``,
``boolean``, ``integer``, ``color``, ``string``). This module maps one
attribute declaration to a JSON Schema fragment:

- a JSON type (``string`` or ``integer``)
- an optional enumeration of literal values
- an optional regex pattern for free-form strings
- a human-readable description

Pattern derivation and description generation are ordered rule tables.
Rules are evaluated top-to-bottom and the first match wins. The rules are
heuristics keyed on the annotation and the attribute name; they are not a
grammar and make no completeness claims.

Example:
    >>> from src.inference import infer_attribute_schema
    >>> schema = infer_attribute_schema("padding", "unit(px,%){1,4}", "10px 25px")
    >>> schema.type, "pattern" in schema.to_dict()
    ('string', True)
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Literal

from pydantic import BaseModel

# =============================================================================
# Annotation Parsing
# =============================================================================

_ENUM_RE = re.compile(r"enum\((.*?)\)")
_UNIT_RE = re.compile(r"unit\((.*?)\)")

BOOLEAN_VALUES = ["true", "false"]

NUMBER = r"\d+(\.\d+)?"

COLOR_PATTERN = (
    r"^(#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})"
    r"|rgba?\s*\([^)]+\)|hsla?\s*\([^)]+\)|[a-zA-Z]+)$"
)
BORDER_PATTERN = (
    r"^(\d+(\.\d+)?(px|em|rem)\s+"
    r"(solid|dashed|dotted|double|groove|ridge|inset|outset|none|hidden)"
    r"\s+.+|none)$"
)
# Only markup delimiters are rejected: templates, data URIs and empty values pass.
URL_PATTERN = r"^[^<>]*$"
FONT_FAMILY_PATTERN = r"^[^;{}]+$"
DIMENSION_PATTERN = r"^(\d+(\.\d+)?(px|%|em|rem|auto)|auto)$"
SPACING_PATTERN = r"^\d+(\.\d+)?(px|%|em|rem)(\s+\d+(\.\d+)?(px|%|em|rem))*$"


def parse_enum_values(annotation: str) -> list[str]:
    """Extract the literal values of an ``enum(...)`` annotation.

    Values are split on commas as-is. Empty tokens are kept, so
    ``enum(full-width,false,)`` yields ``["full-width", "false", ""]``.

    Args:
        annotation: Annotation string starting with ``enum(``.

    Returns:
        Ordered list of values, empty if the parentheses are not closed.
    """
    match = _ENUM_RE.search(annotation)
    if match is None:
        return []
    return match.group(1).split(",")


def parse_units(annotation: Any) -> list[str] | None:
    """Extract the unit tokens of a ``unit(...)`` annotation.

    Tokens are trimmed and empty tokens dropped, so ``unit(px,%,)`` yields
    ``["px", "%"]`` and ``unit()`` yields ``[]``.

    Args:
        annotation: Raw annotation value (any type).

    Returns:
        List of unit tokens, or None if the annotation is not a unit form.
    """
    if not isinstance(annotation, str) or not annotation.startswith("unit("):
        return None
    match = _UNIT_RE.search(annotation)
    if match is None:
        return None
    return [unit.strip() for unit in match.group(1).split(",") if unit.strip()]


@dataclass(frozen=True)
class AttributeInput:
    """Normalized view of one attribute declaration, shared by all rules.

    Attributes:
        name: Attribute name as declared.
        key: Lower-cased attribute name used for substring checks.
        annotation: Annotation string ("" when absent or not a string).
        units: Parsed ``unit(...)`` tokens, None for non-unit annotations.
        repeated: True when the annotation carries a ``{m,n}`` suffix.
    """

    name: str
    key: str
    annotation: str
    units: list[str] | None
    repeated: bool

    @classmethod
    def build(cls, name: str, annotation: Any) -> "AttributeInput":
        text = annotation if isinstance(annotation, str) else ""
        return cls(
            name=name,
            key=name.lower(),
            annotation=text,
            units=parse_units(text),
            # Any brace counts; the m..n bounds themselves are not enforced.
            repeated="{" in text,
        )

    @property
    def is_unit_form(self) -> bool:
        return self.annotation.startswith("unit(")

    def has(self, *fragments: str) -> bool:
        """Check whether the lower-cased name contains any fragment."""
        return any(fragment in self.key for fragment in fragments)


# =============================================================================
# Pattern Rules
# =============================================================================


@dataclass(frozen=True)
class PatternRule:
    """Predicate/result pair for regex pattern derivation."""

    name: str
    applies: Callable[[AttributeInput], bool]
    build: Callable[[AttributeInput], str]


def _repeated_units_pattern(attr: AttributeInput) -> str:
    units = "|".join(attr.units or [])
    return rf"^{NUMBER}({units})(\s+{NUMBER}({units}))*$"


def _single_unit_pattern(attr: AttributeInput) -> str:
    if attr.units:
        return rf"^{NUMBER}({'|'.join(attr.units)})$"
    return rf"^{NUMBER}$"


def _constant(pattern: str) -> Callable[[AttributeInput], str]:
    return lambda _attr: pattern


PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        name="repeated_units",
        applies=lambda a: bool(a.units) and a.repeated,
        build=_repeated_units_pattern,
    ),
    PatternRule(
        name="single_unit",
        applies=lambda a: a.units is not None,
        build=_single_unit_pattern,
    ),
    PatternRule(
        name="color",
        applies=lambda a: a.annotation == "color" or a.has("color"),
        build=_constant(COLOR_PATTERN),
    ),
    PatternRule(
        name="border",
        applies=lambda a: a.has("border") and not a.has("radius"),
        build=_constant(BORDER_PATTERN),
    ),
    PatternRule(
        name="url",
        applies=lambda a: a.has("url", "href", "src"),
        build=_constant(URL_PATTERN),
    ),
    PatternRule(
        name="font_family",
        applies=lambda a: a.has("font") and a.has("family"),
        build=_constant(FONT_FAMILY_PATTERN),
    ),
    PatternRule(
        name="dimension",
        applies=lambda a: a.has("width", "height", "size") and not a.is_unit_form,
        build=_constant(DIMENSION_PATTERN),
    ),
    PatternRule(
        name="spacing",
        applies=lambda a: a.has("padding", "margin", "spacing")
        and not a.is_unit_form,
        build=_constant(SPACING_PATTERN),
    ),
)


def match_pattern_rule(annotation: Any, name: str) -> PatternRule | None:
    """Find the first pattern rule applying to an attribute.

    Args:
        annotation: Attribute annotation (non-strings never match).
        name: Attribute name.

    Returns:
        The matching PatternRule, or None for a free string.
    """
    if not annotation or not isinstance(annotation, str):
        return None
    attr = AttributeInput.build(name, annotation)
    for rule in PATTERN_RULES:
        if rule.applies(attr):
            return rule
    return None


def derive_pattern(annotation: Any, name: str) -> str | None:
    """Derive a validation regex for a free-form string attribute.

    Args:
        annotation: Attribute annotation.
        name: Attribute name.

    Returns:
        Regex source string, or None if no rule applies.
    """
    rule = match_pattern_rule(annotation, name)
    if rule is None:
        return None
    return rule.build(AttributeInput.build(name, annotation))


# =============================================================================
# Description Rules
# =============================================================================


@dataclass(frozen=True)
class DescriptionRule:
    """Predicate/text pair for description generation.

    When ``with_units`` is set, the unit hint of a ``unit(...)`` annotation
    is appended to the text.
    """

    name: str
    applies: Callable[[AttributeInput], bool]
    text: str
    with_units: bool = False


def _is(*names: str) -> Callable[[AttributeInput], bool]:
    return lambda a: a.key in names


def _both(first: str, second: str) -> Callable[[AttributeInput], bool]:
    return lambda a: first in a.key and second in a.key


DESCRIPTION_RULES: tuple[DescriptionRule, ...] = (
    DescriptionRule(
        "color",
        lambda a: a.has("color"),
        'Color value (e.g., "#ffffff", "red", "rgb(255,255,255)").',
        with_units=True,
    ),
    DescriptionRule(
        "width",
        lambda a: a.has("width"),
        'Width value (e.g., "100px", "50%", "auto").',
        with_units=True,
    ),
    DescriptionRule(
        "height",
        lambda a: a.has("height"),
        'Height value (e.g., "100px", "auto").',
        with_units=True,
    ),
    DescriptionRule(
        "padding",
        lambda a: a.has("padding"),
        'Padding value. Supports 1-4 values (e.g., "10px", "10px 20px").',
        with_units=True,
    ),
    DescriptionRule(
        "margin",
        lambda a: a.has("margin"),
        'Margin value. Supports 1-4 values (e.g., "10px", "10px 20px").',
        with_units=True,
    ),
    DescriptionRule(
        "border_radius",
        _both("border", "radius"),
        'Border radius (e.g., "4px", "50%").',
        with_units=True,
    ),
    DescriptionRule(
        "border",
        lambda a: a.has("border"),
        'Border definition (e.g., "1px solid #ccc", "2px dashed red").',
        with_units=True,
    ),
    DescriptionRule(
        "align",
        _is("align", "text-align", "textalign"),
        "Text/content alignment.",
    ),
    DescriptionRule(
        "vertical_align",
        _is("vertical-align", "verticalalign"),
        "Vertical alignment.",
    ),
    DescriptionRule(
        "font_family",
        _both("font", "family"),
        'Font family (e.g., "Arial, sans-serif", "Roboto, sans-serif").',
    ),
    DescriptionRule(
        "font_size",
        _both("font", "size"),
        'Font size (e.g., "16px", "1.2em").',
        with_units=True,
    ),
    DescriptionRule(
        "font_weight",
        _both("font", "weight"),
        'Font weight (e.g., "normal", "bold", "400", "700").',
    ),
    DescriptionRule(
        "href",
        _is("href"),
        'Link URL. Supports Liquid templating (e.g., "{{variable}}").',
    ),
    DescriptionRule(
        "src",
        _is("src"),
        "Image/resource URL. Supports Liquid templating.",
    ),
    DescriptionRule(
        "alt",
        _is("alt"),
        "Alternative text for accessibility and when images fail to load.",
    ),
    DescriptionRule("title", _is("title"), "Title text shown as tooltip on hover."),
    DescriptionRule("target", _is("target"), 'Link target (e.g., "_blank", "_self").'),
    DescriptionRule("rel", _is("rel"), 'Link relationship (e.g., "noopener noreferrer").'),
    DescriptionRule(
        "background_url",
        _both("background", "url"),
        "Background image URL.",
    ),
    DescriptionRule(
        "background_position",
        _both("background", "position"),
        'Background position (e.g., "center", "top left", "50% 50%").',
    ),
    DescriptionRule(
        "background_size",
        _both("background", "size"),
        'Background size (e.g., "cover", "contain", "100px 200px").',
    ),
    DescriptionRule(
        "background_repeat",
        _both("background", "repeat"),
        'Background repeat (e.g., "repeat", "no-repeat").',
    ),
    DescriptionRule(
        "css_class",
        _is("css-class", "cssclass"),
        "CSS class name to apply to the generated HTML element.",
    ),
    DescriptionRule(
        "direction",
        _is("direction"),
        "Text/content direction (ltr or rtl).",
    ),
    DescriptionRule(
        "spacing",
        lambda a: a.has("spacing"),
        'Spacing value (e.g., "0.5px", "0.1em").',
        with_units=True,
    ),
)


def format_units_hint(annotation: Any) -> str:
    """Build the unit hint appended to unit-typed descriptions.

    Returns:
        " Units: a, b." for unit lists, " Unitless number." for ``unit()``,
        and "" for every other annotation.
    """
    units = parse_units(annotation)
    if units is None:
        return ""
    if units:
        return f" Units: {', '.join(units)}."
    return " Unitless number."


def describe_attribute(name: str, annotation: Any = None) -> str:
    """Generate a human-readable description for an attribute.

    Args:
        name: Attribute name.
        annotation: Attribute annotation, used only for the unit hint.

    Returns:
        Description sentence. Falls back to "<name> attribute".
    """
    attr = AttributeInput.build(name, annotation)
    hint = format_units_hint(annotation)
    for rule in DESCRIPTION_RULES:
        if rule.applies(attr):
            return f"{rule.text}{hint}" if rule.with_units else rule.text
    return f"{name} attribute{hint}"


# =============================================================================
# Type Inference
# =============================================================================


class AttributeSchema(BaseModel):
    """JSON Schema fragment inferred for one component attribute.

    ``enum`` and ``pattern`` are mutually exclusive. ``default`` is omitted
    from the serialized form when it is None.
    """

    type: Literal["string", "integer"] = "string"
    enum: list[str] | None = None
    pattern: str | None = None
    description: str = ""
    default: Any = None

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON Schema property definition."""
        return self.model_dump(exclude_none=True)


def infer_type(annotation: Any, name: str, default: Any = None) -> dict[str, Any]:
    """Map an annotation to JSON Schema type keywords.

    Decision order (first match wins):
        1. ``enum(...)`` -> string enum of the listed values
        2. ``boolean`` or a native bool default -> string enum true/false
        3. ``integer`` -> integer
        4. anything else -> string, with a derived pattern when one applies

    A native bool default forces the boolean enum whatever the annotation
    says; generated schemas have always behaved this way.

    Args:
        annotation: Attribute annotation (absent or non-string -> string).
        name: Attribute name.
        default: Declared default value.

    Returns:
        Dict with ``type`` and optionally ``enum`` or ``pattern``.
    """
    if not annotation or not isinstance(annotation, str):
        return {"type": "string"}

    if annotation.startswith("enum("):
        return {"type": "string", "enum": parse_enum_values(annotation)}

    if annotation == "boolean" or isinstance(default, bool):
        return {"type": "string", "enum": list(BOOLEAN_VALUES)}

    if annotation == "integer":
        return {"type": "integer"}

    result: dict[str, Any] = {"type": "string"}
    pattern = derive_pattern(annotation, name)
    if pattern:
        result["pattern"] = pattern
    return result


def infer_attribute_schema(
    name: str, annotation: Any = None, default: Any = None
) -> AttributeSchema:
    """Infer the full schema fragment for one attribute declaration.

    Pure function: identical inputs always produce identical output and
    no input raises.

    Args:
        name: Attribute name (e.g. "background-color").
        annotation: MJML annotation (e.g. "color", "unit(px,%)").
        default: Declared default value, None when absent.

    Returns:
        AttributeSchema with type, enum/pattern, description and default.
    """
    return AttributeSchema(
        **infer_type(annotation, name, default),
        description=describe_attribute(name, annotation),
        default=default,
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
