"""Unit tests for the attribute inference module."""

import re

import pytest
from pydantic import ValidationError

from .lib import (
    DESCRIPTION_RULES,
    PATTERN_RULES,
    AttributeInput,
    AttributeSchema,
    derive_pattern,
    describe_attribute,
    format_units_hint,
    infer_attribute_schema,
    infer_type,
    match_pattern_rule,
    parse_enum_values,
    parse_units,
)


def _accepts(pattern: str | None, value: str) -> bool:
    assert pattern is not None, "expected a derived pattern"
    return re.search(pattern, value) is not None


# =============================================================================
# Annotation Parsing
# =============================================================================


class TestParseUnits:
    """Tests for unit(...) extraction."""

    @pytest.mark.unit
    def test_unit_list(self):
        assert parse_units("unit(px,%)") == ["px", "%"]

    @pytest.mark.unit
    def test_trailing_comma_dropped(self):
        """Empty tokens are filtered out."""
        assert parse_units("unit(px,%,)") == ["px", "%"]

    @pytest.mark.unit
    def test_whitespace_trimmed(self):
        assert parse_units("unit( px , em )") == ["px", "em"]

    @pytest.mark.unit
    def test_empty_unit_list(self):
        assert parse_units("unit()") == []

    @pytest.mark.unit
    def test_multiplicity_suffix_ignored(self):
        assert parse_units("unit(px,%){1,4}") == ["px", "%"]

    @pytest.mark.unit
    def test_non_unit_annotations(self):
        for annotation in ("color", "enum(a,b)", "", None, 42, "unit(px"):
            assert parse_units(annotation) is None


class TestParseEnumValues:
    """Tests for enum(...) extraction."""

    @pytest.mark.unit
    def test_values_in_order(self):
        assert parse_enum_values("enum(left,right,center)") == [
            "left",
            "right",
            "center",
        ]

    @pytest.mark.unit
    def test_empty_token_kept(self):
        """Trailing commas produce an empty-string value."""
        assert parse_enum_values("enum(full-width,false,)") == [
            "full-width",
            "false",
            "",
        ]

    @pytest.mark.unit
    def test_unclosed_enum(self):
        assert parse_enum_values("enum(left,right") == []


class TestAttributeInput:
    """Tests for the normalized rule input."""

    @pytest.mark.unit
    def test_key_is_lowercased(self):
        attr = AttributeInput.build("Background-Color", "color")
        assert attr.key == "background-color"
        assert attr.name == "Background-Color"

    @pytest.mark.unit
    def test_non_string_annotation(self):
        attr = AttributeInput.build("width", 12)
        assert attr.annotation == ""
        assert attr.units is None
        assert not attr.repeated

    @pytest.mark.unit
    def test_repeated_flag(self):
        assert AttributeInput.build("padding", "unit(px,%){1,4}").repeated
        assert not AttributeInput.build("padding", "unit(px,%)").repeated


# =============================================================================
# Pattern Derivation
# =============================================================================


class TestPatternRuleTable:
    """Tests for rule table ordering."""

    @pytest.mark.unit
    def test_rule_order(self):
        assert [rule.name for rule in PATTERN_RULES] == [
            "repeated_units",
            "single_unit",
            "color",
            "border",
            "url",
            "font_family",
            "dimension",
            "spacing",
        ]

    @pytest.mark.unit
    def test_unit_rule_beats_name_rules(self):
        """A unit annotation wins over color/border name heuristics."""
        rule = match_pattern_rule("unit(px)", "border-color-width")
        assert rule is not None
        assert rule.name == "single_unit"

    @pytest.mark.unit
    def test_color_beats_border(self):
        rule = match_pattern_rule("color", "border-color")
        assert rule is not None
        assert rule.name == "color"

    @pytest.mark.unit
    def test_no_rule_for_plain_name(self):
        assert match_pattern_rule("string", "mode") is None

    @pytest.mark.unit
    def test_no_rule_without_annotation(self):
        assert match_pattern_rule(None, "background-color") is None
        assert match_pattern_rule("", "background-color") is None


class TestColorPattern:
    """Tests for the color pattern."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,annotation",
        [
            ("color", "color"),
            ("background-color", "color"),
            ("Container-Background-Color", "string"),
            ("tint", "color"),
        ],
    )
    def test_accepts_color_forms(self, name, annotation):
        pattern = derive_pattern(annotation, name)
        for value in ("#fff", "#ffffff", "#ff000088", "#ABCDEF"):
            assert _accepts(pattern, value), value
        for value in ("rgb(1,2,3)", "rgba(1,2,3,0.5)", "hsl(0, 50%, 50%)", "red"):
            assert _accepts(pattern, value), value

    @pytest.mark.unit
    def test_rejects_invalid_colors(self):
        pattern = derive_pattern("color", "color")
        for value in ("#ff", "15", "#ggg", ""):
            assert not _accepts(pattern, value), value


class TestUnitPatterns:
    """Tests for unit(...) derived patterns."""

    @pytest.mark.unit
    def test_single_unit(self):
        pattern = derive_pattern("unit(px,%)", "width")
        for value in ("15px", "50%", "12.5px"):
            assert _accepts(pattern, value), value
        for value in ("15", "15pt", "px", "15px 20px"):
            assert not _accepts(pattern, value), value

    @pytest.mark.unit
    def test_repeated_units(self):
        pattern = derive_pattern("unit(px,%){1,4}", "padding")
        for value in ("10px", "10px 20px", "10px 20px 30px 40px", "0px 5%"):
            assert _accepts(pattern, value), value
        for value in ("10px,20px", "10", "10px  ", ""):
            assert not _accepts(pattern, value), value

    @pytest.mark.unit
    def test_repeated_units_upper_bound_not_enforced(self):
        """Known looseness: {1,4} is encoded as one-or-more."""
        pattern = derive_pattern("unit(px,%){1,4}", "padding")
        assert _accepts(pattern, "1px 2px 3px 4px 5px 6px")

    @pytest.mark.unit
    def test_unitless(self):
        pattern = derive_pattern("unit()", "line-height")
        assert pattern == r"^\d+(\.\d+)?$"
        for value in ("1", "1.5"):
            assert _accepts(pattern, value), value
        assert not _accepts(pattern, "1px")

    @pytest.mark.unit
    def test_unitless_with_multiplicity(self):
        """An empty unit list always yields a bare number pattern."""
        assert derive_pattern("unit(){1,2}", "scale") == r"^\d+(\.\d+)?$"

    @pytest.mark.unit
    def test_trailing_comma_units(self):
        pattern = derive_pattern("unit(px,%,)", "line-height")
        assert pattern == r"^\d+(\.\d+)?(px|%)$"


class TestNamePatterns:
    """Tests for name-based patterns on free strings."""

    @pytest.mark.unit
    def test_border(self):
        pattern = derive_pattern("string", "border-top")
        for value in ("1px solid #ccc", "2px dashed red", "0.5em dotted blue", "none"):
            assert _accepts(pattern, value), value
        for value in ("1px", "solid", "1pt solid red"):
            assert not _accepts(pattern, value), value

    @pytest.mark.unit
    def test_border_radius_has_no_pattern(self):
        """The radius exclusion lets border-radius fall through every rule."""
        assert derive_pattern("string", "border-radius") is None
        assert "pattern" not in infer_type("string", "border-radius")

    @pytest.mark.unit
    def test_border_style_gets_border_pattern(self):
        """Name heuristics apply even when the value is only a style keyword."""
        pattern = derive_pattern("string", "border-style")
        assert not _accepts(pattern, "solid")

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["href", "src", "background-url", "srcset"])
    def test_url_like(self, name):
        pattern = derive_pattern("string", name)
        for value in ("", "https://example.com", "{{ unsubscribe_url }}", "/img/a.png"):
            assert _accepts(pattern, value), value
        assert _accepts(pattern, "data:image/png;base64,AAAA")
        assert not _accepts(pattern, "<script>")

    @pytest.mark.unit
    def test_font_family(self):
        pattern = derive_pattern("string", "font-family")
        assert _accepts(pattern, "Ubuntu, Helvetica, Arial, sans-serif")
        for value in ("Arial; color: red", "a{b}", ""):
            assert not _accepts(pattern, value), value

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["width", "max-height", "icon-size"])
    def test_dimension(self, name):
        pattern = derive_pattern("string", name)
        for value in ("100px", "50%", "1.5em", "2rem", "auto"):
            assert _accepts(pattern, value), value
        for value in ("100", "100pt"):
            assert not _accepts(pattern, value), value

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["text-padding", "margin", "letter-spacing"])
    def test_spacing(self, name):
        pattern = derive_pattern("string", name)
        for value in ("10px", "10px 5%", "1em 2rem 3px 4px"):
            assert _accepts(pattern, value), value
        assert not _accepts(pattern, "10")

    @pytest.mark.unit
    def test_free_string(self):
        assert derive_pattern("string", "mode") is None
        assert derive_pattern("string", "title") is None


# =============================================================================
# Description Generation
# =============================================================================


class TestDescriptions:
    """Tests for describe_attribute."""

    @pytest.mark.unit
    def test_rule_order_starts_and_ends(self):
        names = [rule.name for rule in DESCRIPTION_RULES]
        assert names[:3] == ["color", "width", "height"]
        assert names[-2:] == ["direction", "spacing"]

    @pytest.mark.unit
    def test_color(self):
        assert describe_attribute("background-color", "color").startswith(
            "Color value"
        )

    @pytest.mark.unit
    def test_units_hint(self):
        assert (
            describe_attribute("width", "unit(px,%)")
            == 'Width value (e.g., "100px", "50%", "auto"). Units: px, %.'
        )

    @pytest.mark.unit
    def test_unitless_hint(self):
        assert describe_attribute("scale", "unit()") == (
            "scale attribute Unitless number."
        )

    @pytest.mark.unit
    def test_generic_fallback_keeps_name_case(self):
        assert describe_attribute("Mode", "string") == "Mode attribute"

    @pytest.mark.unit
    def test_border_radius_before_border(self):
        assert describe_attribute("border-radius").startswith("Border radius")
        assert describe_attribute("border-top").startswith("Border definition")

    @pytest.mark.unit
    def test_exact_name_rules(self):
        assert describe_attribute("align") == "Text/content alignment."
        assert describe_attribute("text-align") == "Text/content alignment."
        assert describe_attribute("vertical-align") == "Vertical alignment."
        assert describe_attribute("css-class").startswith("CSS class name")
        assert describe_attribute("target").startswith("Link target")
        assert describe_attribute("rel").startswith("Link relationship")
        assert describe_attribute("direction").startswith("Text/content direction")

    @pytest.mark.unit
    def test_href_mentions_liquid(self):
        assert "{{variable}}" in describe_attribute("href", "string")

    @pytest.mark.unit
    def test_rules_without_units_ignore_hint(self):
        assert describe_attribute("font-family", "unit(px)") == (
            'Font family (e.g., "Arial, sans-serif", "Roboto, sans-serif").'
        )

    @pytest.mark.unit
    def test_width_wins_over_background_size(self):
        """Earlier rules shadow later ones."""
        assert describe_attribute("background-width").startswith("Width value")
        assert describe_attribute("background-size").startswith("Background size")

    @pytest.mark.unit
    def test_format_units_hint(self):
        assert format_units_hint("unit(px)") == " Units: px."
        assert format_units_hint("unit()") == " Unitless number."
        assert format_units_hint("color") == ""
        assert format_units_hint(None) == ""


# =============================================================================
# Type Inference
# =============================================================================


class TestInferType:
    """Tests for infer_type decision order."""

    @pytest.mark.unit
    def test_enum(self):
        result = infer_type("enum(left,right,center)", "align")
        assert result == {"type": "string", "enum": ["left", "right", "center"]}

    @pytest.mark.unit
    def test_enum_short_circuits_pattern(self):
        """Enum annotations never carry a pattern, even for color names."""
        result = infer_type("enum(red,blue)", "color")
        assert "pattern" not in result

    @pytest.mark.unit
    def test_boolean_annotation(self):
        assert infer_type("boolean", "fluid-on-mobile") == {
            "type": "string",
            "enum": ["true", "false"],
        }

    @pytest.mark.unit
    def test_boolean_default_coupling(self):
        """A native bool default forces the boolean enum."""
        for default in (True, False):
            result = infer_type("string", "border-color", default)
            assert result == {"type": "string", "enum": ["true", "false"]}

    @pytest.mark.unit
    def test_integer_like_defaults_not_boolean(self):
        """Only real bools trigger the coupling, not 0/1."""
        assert "enum" not in infer_type("string", "mode", 1)
        assert "enum" not in infer_type("string", "mode", 0)

    @pytest.mark.unit
    def test_integer(self):
        assert infer_type("integer", "cellspacing") == {"type": "integer"}

    @pytest.mark.unit
    def test_enum_checked_before_boolean_default(self):
        result = infer_type("enum(a,b)", "mode", True)
        assert result["enum"] == ["a", "b"]

    @pytest.mark.unit
    def test_missing_annotation(self):
        """Absent annotations give a bare string, boolean default or not."""
        assert infer_type(None, "color") == {"type": "string"}
        assert infer_type("", "width", True) == {"type": "string"}
        assert infer_type(["unit(px)"], "width") == {"type": "string"}


class TestInferAttributeSchema:
    """Tests for the public inference entry point."""

    @pytest.mark.unit
    def test_full_schema(self):
        schema = infer_attribute_schema("padding", "unit(px,%){1,4}", "10px 25px")
        assert isinstance(schema, AttributeSchema)
        data = schema.to_dict()
        assert list(data) == ["type", "pattern", "description", "default"]
        assert data["default"] == "10px 25px"
        assert data["description"].endswith("Units: px, %.")

    @pytest.mark.unit
    def test_enum_key_order(self):
        data = infer_attribute_schema("align", "enum(left,center,right)", "center").to_dict()
        assert list(data) == ["type", "enum", "description", "default"]

    @pytest.mark.unit
    def test_none_default_omitted(self):
        data = infer_attribute_schema("background-url", "string", None).to_dict()
        assert "default" not in data

    @pytest.mark.unit
    def test_empty_string_default_kept(self):
        data = infer_attribute_schema("alt", "string", "").to_dict()
        assert data["default"] == ""

    @pytest.mark.unit
    def test_boolean_default_preserved(self):
        data = infer_attribute_schema("fluid-on-mobile", "boolean", False).to_dict()
        assert data["default"] is False
        assert data["enum"] == ["true", "false"]

    @pytest.mark.unit
    def test_idempotent(self):
        first = infer_attribute_schema("border", "string", "none")
        second = infer_attribute_schema("border", "string", "none")
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    @pytest.mark.unit
    def test_malformed_input_never_raises(self):
        for annotation in ("unit(", "enum(", "{", 3.5, object()):
            schema = infer_attribute_schema("weird", annotation)
            assert schema.type == "string"
            assert schema.description

    @pytest.mark.unit
    def test_schema_is_frozen(self):
        schema = infer_attribute_schema("color", "color")
        with pytest.raises(ValidationError):
            schema.pattern = None
