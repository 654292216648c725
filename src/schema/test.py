"""Unit tests for the Schema module."""

import json

import pytest

from src.components import COMPONENT_PACKAGES, extract_component_specs

from .lib import (
    BASIC_EXAMPLE,
    EXCLUDED_ATTRIBUTES,
    EXCLUDED_COMPONENTS,
    HIERARCHY_RULES,
    JSON_SCHEMA_DRAFT,
    export_raw_specs,
    filter_specs_for_ai,
    generate_ai_schema,
    generate_json_schema,
    get_allowed_children,
    compile_pattern,
    is_valid_document,
    validate_document,
)


@pytest.fixture(scope="module")
def specs():
    """Specs extracted from the built-in component tables."""
    return extract_component_specs()


@pytest.fixture(scope="module")
def full_schema(specs):
    return generate_json_schema(specs)


@pytest.fixture(scope="module")
def ai_schema(specs):
    return generate_ai_schema(specs)


def _branch_for(schema, component):
    for branch in schema["allOf"]:
        if branch["if"]["properties"]["type"]["const"] == component:
            return branch
    raise AssertionError(f"No branch for {component}")


class TestRawSpecs:
    """Tests for the raw specification dump."""

    @pytest.mark.unit
    def test_one_entry_per_component(self, specs):
        raw = export_raw_specs(specs)
        assert list(raw) == list(COMPONENT_PACKAGES)

    @pytest.mark.unit
    def test_json_serializable(self, specs):
        raw = export_raw_specs(specs)
        assert json.loads(json.dumps(raw)) == raw


class TestFullSchema:
    """Tests for the full JSON Schema."""

    @pytest.mark.unit
    def test_envelope(self, full_schema):
        assert full_schema["$schema"] == JSON_SCHEMA_DRAFT
        assert full_schema["$id"] == "https://notifuse.com/schemas/mjml-components.json"
        assert full_schema["required"] == ["id", "type"]
        assert full_schema["properties"]["children"]["items"] == {"$ref": "#"}

    @pytest.mark.unit
    def test_type_enum_lists_components(self, full_schema):
        assert full_schema["properties"]["type"]["enum"] == list(COMPONENT_PACKAGES)

    @pytest.mark.unit
    def test_one_branch_per_component(self, full_schema):
        consts = [b["if"]["properties"]["type"]["const"] for b in full_schema["allOf"]]
        assert consts == list(COMPONENT_PACKAGES)

    @pytest.mark.unit
    def test_branch_attributes(self, full_schema):
        branch = _branch_for(full_schema, "mj-button")
        attributes = branch["then"]["properties"]["attributes"]
        assert attributes["additionalProperties"] is True
        assert attributes["properties"]["align"]["enum"] == ["left", "center", "right"]
        assert "pattern" in attributes["properties"]["background-color"]
        assert branch["then"]["description"] == "mj-button component"

    @pytest.mark.unit
    def test_component_without_attributes(self, full_schema):
        branch = _branch_for(full_schema, "mj-head")
        assert branch["then"]["properties"]["attributes"]["properties"] == {}

    @pytest.mark.unit
    def test_full_schema_has_no_hierarchy(self, full_schema):
        branch = _branch_for(full_schema, "mjml")
        assert "children" not in branch["then"]["properties"]

    @pytest.mark.unit
    def test_custom_base_id(self, specs):
        schema = generate_json_schema(specs, base_id="https://example.com/s")
        assert schema["$id"] == "https://example.com/s/mjml-components.json"


class TestAISchema:
    """Tests for the AI-optimized JSON Schema."""

    @pytest.mark.unit
    def test_branch_count(self, full_schema, ai_schema):
        assert len(ai_schema["allOf"]) == len(full_schema["allOf"]) - len(
            EXCLUDED_COMPONENTS
        )

    @pytest.mark.unit
    def test_excluded_components_absent(self, ai_schema):
        component_types = ai_schema["properties"]["type"]["enum"]
        for name in EXCLUDED_COMPONENTS:
            assert name not in component_types

    @pytest.mark.unit
    def test_excluded_attributes_absent(self, ai_schema):
        for branch in ai_schema["allOf"]:
            properties = branch["then"]["properties"]["attributes"]["properties"]
            for attr_name in properties:
                assert not attr_name.startswith("inner-"), attr_name
                assert attr_name not in ("padding", "border"), attr_name

    @pytest.mark.unit
    def test_longhands_kept(self, ai_schema):
        properties = _branch_for(ai_schema, "mj-section")["then"]["properties"][
            "attributes"
        ]["properties"]
        assert "padding-top" in properties
        assert "border-top" in properties

    @pytest.mark.unit
    def test_hierarchy_constraints(self, ai_schema):
        children = _branch_for(ai_schema, "mj-column")["then"]["properties"]["children"]
        assert children["items"]["properties"]["type"]["enum"] == list(
            HIERARCHY_RULES["mj-column"]
        )
        assert children["description"].startswith("Allowed children: mj-text, ")

    @pytest.mark.unit
    def test_leaf_components_unconstrained(self, ai_schema):
        branch = _branch_for(ai_schema, "mj-text")
        assert "children" not in branch["then"]["properties"]

    @pytest.mark.unit
    def test_example_and_comment(self, ai_schema):
        assert ai_schema["examples"][0]["value"]["type"] == "mjml"
        assert "STRUCTURE RULES" in ai_schema["$comment"]
        assert ai_schema["$id"].endswith("/mjml-components-ai.json")

    @pytest.mark.unit
    def test_example_is_a_copy(self, specs):
        schema = generate_ai_schema(specs)
        schema["examples"][0]["value"]["id"] = "changed"
        assert BASIC_EXAMPLE["value"]["id"] == "root-1"

    @pytest.mark.unit
    def test_filter_leaves_input_untouched(self, specs):
        filter_specs_for_ai(specs)
        assert "padding" in specs["mj-section"].attributes
        assert "mj-table" in specs

    @pytest.mark.unit
    def test_excluded_attribute_list(self):
        assert len(EXCLUDED_ATTRIBUTES) == 14
        assert get_allowed_children("mj-text") is None
        assert get_allowed_children("mjml") == ("mj-head", "mj-body")


class TestValidateDocument:
    """Tests for validating component trees against generated schemas."""

    @pytest.mark.unit
    def test_basic_example_is_valid(self, ai_schema, full_schema, basic_email):
        assert is_valid_document(basic_email, ai_schema)
        assert is_valid_document(basic_email, full_schema)

    @pytest.mark.unit
    def test_text_directly_in_body_rejected(self, ai_schema, basic_email):
        body = basic_email["children"][0]
        body["children"].append({"id": "stray", "type": "mj-text"})
        errors = validate_document(basic_email, ai_schema)
        assert any(e.path == "root.children[0].children[1].type" for e in errors)

    @pytest.mark.unit
    def test_missing_required_fields(self, full_schema):
        errors = validate_document({"type": "mjml"}, full_schema)
        assert [e.error_type for e in errors] == ["required"]
        assert errors[0].path == "root"

    @pytest.mark.unit
    def test_pattern_violation(self, full_schema):
        document = {"id": "t", "type": "mj-text", "attributes": {"color": "#ff"}}
        errors = validate_document(document, full_schema)
        assert len(errors) == 1
        assert errors[0].error_type == "pattern"
        assert errors[0].path == "root.attributes.color"

    @pytest.mark.unit
    def test_nested_hierarchy_violation(self, ai_schema):
        document = {
            "id": "col",
            "type": "mj-column",
            "children": [{"id": "sec", "type": "mj-section"}],
        }
        errors = validate_document(document, ai_schema)
        assert any(
            e.path == "root.children[0].type" and e.error_type == "enum"
            for e in errors
        )

    @pytest.mark.unit
    def test_excluded_component_rejected_by_ai_schema(self, ai_schema, full_schema):
        document = {"id": "t", "type": "mj-table"}
        assert is_valid_document(document, full_schema)
        assert not is_valid_document(document, ai_schema)

    @pytest.mark.unit
    def test_trailing_newline_rejected(self, full_schema):
        document = {
            "id": "b",
            "type": "mj-button",
            "attributes": {"width": "15px\n", "color": "red\n"},
        }
        errors = validate_document(document, full_schema)
        assert sorted(e.path for e in errors) == [
            "root.attributes.color",
            "root.attributes.width",
        ]
        assert {e.error_type for e in errors} == {"pattern"}

    @pytest.mark.unit
    def test_non_ascii_digits_rejected(self, full_schema):
        document = {"id": "b", "type": "mj-button", "attributes": {"width": "١٥px"}}
        errors = validate_document(document, full_schema)
        assert [e.path for e in errors] == ["root.attributes.width"]

    @pytest.mark.unit
    def test_plain_values_still_accepted(self, full_schema):
        document = {
            "id": "b",
            "type": "mj-button",
            "attributes": {"width": "15px", "color": "red"},
        }
        assert validate_document(document, full_schema) == []


class TestCompilePattern:
    """Tests for JSON Schema pattern compilation."""

    @pytest.mark.unit
    def test_dollar_anchors_at_end(self):
        assert compile_pattern(r"^\d+$").search("12")
        assert not compile_pattern(r"^\d+$").search("12\n")

    @pytest.mark.unit
    def test_escaped_and_class_dollar_untouched(self):
        assert compile_pattern(r"^\$\d+$").search("$5")
        assert compile_pattern(r"^[$]+$").search("$$")

    @pytest.mark.unit
    def test_ascii_digits_only(self):
        assert not compile_pattern(r"^\d+$").search("١٥")
