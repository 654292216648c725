"""Unit tests for the components module."""

import json
import logging

import pytest

from .lib import (
    COMPONENT_PACKAGES,
    COMPONENT_REGISTRY,
    ComponentDefinition,
    DefinitionLoadError,
    build_component_spec,
    extract_component_specs,
    get_component_definition,
    load_component_definitions,
    parse_component_definitions,
)


class TestComponentTables:
    """Tests for the static component tables."""

    @pytest.mark.unit
    def test_package_table_has_32_components(self):
        assert len(COMPONENT_PACKAGES) == 32

    @pytest.mark.unit
    def test_every_component_registered(self):
        """Every known component has a built-in definition."""
        for name in COMPONENT_PACKAGES:
            assert name in COMPONENT_REGISTRY, f"Missing definition for {name}"

    @pytest.mark.unit
    def test_package_names_match(self):
        for name, definition in COMPONENT_REGISTRY.items():
            assert definition.package_name == COMPONENT_PACKAGES[name]

    @pytest.mark.unit
    def test_head_components_without_attributes(self):
        for name in ("mj-head", "mj-attributes", "mj-preview", "mj-title"):
            assert get_component_definition(name).allowed_attributes == {}

    @pytest.mark.unit
    def test_unknown_component(self):
        with pytest.raises(KeyError):
            get_component_definition("mj-unknown")


class TestBuildComponentSpec:
    """Tests for per-component inference."""

    @pytest.mark.unit
    def test_attribute_order_preserved(self):
        definition = ComponentDefinition(
            name="mj-test",
            package_name="mjml-test",
            allowed_attributes={"width": "unit(px)", "align": "enum(left,right)"},
        )
        spec = build_component_spec(definition)
        assert list(spec.attributes) == ["width", "align"]

    @pytest.mark.unit
    def test_defaults_attached(self):
        spec = build_component_spec(get_component_definition("mj-button"))
        assert spec.attributes["background-color"].default == "#414141"
        assert spec.attributes["href"].default is None

    @pytest.mark.unit
    def test_null_defaults(self):
        """Null defaults stay in the raw tables but not on attributes."""
        spec = build_component_spec(get_component_definition("mj-hero"))
        raw = spec.to_dict()
        assert raw["defaultAttributes"]["background-url"] is None
        assert "default" not in raw["attributes"]["background-url"]

    @pytest.mark.unit
    def test_to_dict_shape(self):
        raw = build_component_spec(get_component_definition("mj-body")).to_dict()
        assert list(raw) == [
            "packageName",
            "allowedAttributes",
            "defaultAttributes",
            "attributes",
        ]
        assert raw["packageName"] == "mjml-body"
        assert raw["attributes"]["width"]["default"] == "600px"

    @pytest.mark.unit
    def test_integer_attributes(self):
        spec = build_component_spec(get_component_definition("mj-table"))
        assert spec.attributes["cellpadding"].type == "integer"
        assert spec.attributes["cellspacing"].type == "integer"

    @pytest.mark.unit
    def test_enum_with_empty_value(self):
        spec = build_component_spec(get_component_definition("mj-section"))
        assert spec.attributes["full-width"].enum == ["full-width", "false", ""]

    @pytest.mark.unit
    def test_boolean_attribute(self):
        spec = build_component_spec(get_component_definition("mj-image"))
        assert spec.attributes["fluid-on-mobile"].enum == ["true", "false"]


class TestExtractComponentSpecs:
    """Tests for extraction over the component table."""

    @pytest.mark.unit
    def test_extracts_all_builtin(self):
        specs = extract_component_specs()
        assert list(specs) == list(COMPONENT_PACKAGES)

    @pytest.mark.unit
    def test_missing_definition_skipped(self, caplog):
        definitions = {
            name: definition
            for name, definition in COMPONENT_REGISTRY.items()
            if name != "mj-hero"
        }
        with caplog.at_level(logging.WARNING):
            specs = extract_component_specs(definitions)

        assert "mj-hero" not in specs
        assert len(specs) == len(COMPONENT_PACKAGES) - 1
        assert "mj-hero" in caplog.text

    @pytest.mark.unit
    def test_failing_component_skipped(self, caplog, monkeypatch):
        """A failure in one component does not stop the others."""
        import src.components.lib as components_lib

        original = components_lib.build_component_spec

        def flaky(definition):
            if definition.name == "mj-text":
                raise RuntimeError("boom")
            return original(definition)

        monkeypatch.setattr(components_lib, "build_component_spec", flaky)
        with caplog.at_level(logging.ERROR):
            specs = extract_component_specs()

        assert "mj-text" not in specs
        assert "mj-button" in specs
        assert "boom" in caplog.text

    @pytest.mark.unit
    def test_custom_component_table(self):
        specs = extract_component_specs(components={"mj-text": "mjml-text"})
        assert list(specs) == ["mj-text"]


class TestDefinitionLoading:
    """Tests for definition dump files."""

    @pytest.mark.unit
    def test_parse_definitions(self):
        definitions = parse_component_definitions(
            {
                "mj-text": {
                    "allowedAttributes": {"color": "color"},
                    "defaultAttributes": {"color": "#000"},
                },
                "mj-custom": {"packageName": "mjml-custom"},
            }
        )
        assert definitions["mj-text"].package_name == "mjml-text"
        assert definitions["mj-text"].default_attributes == {"color": "#000"}
        assert definitions["mj-custom"].allowed_attributes == {}

    @pytest.mark.unit
    def test_parse_rejects_bad_shape(self):
        with pytest.raises(DefinitionLoadError):
            parse_component_definitions(
                {"mj-text": {"allowedAttributes": ["color"]}}
            )
        with pytest.raises(DefinitionLoadError):
            parse_component_definitions(["mj-text"])

    @pytest.mark.unit
    def test_load_overrides_builtin(self, tmp_path):
        source = tmp_path / "definitions.json"
        source.write_text(
            json.dumps({"mj-body": {"allowedAttributes": {"width": "unit(px)"}}})
        )

        definitions = load_component_definitions(source)

        assert definitions["mj-body"].default_attributes == {}
        assert definitions["mj-button"] is COMPONENT_REGISTRY["mj-button"]

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DefinitionLoadError, match="not found"):
            load_component_definitions(tmp_path / "nope.json")

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path):
        source = tmp_path / "broken.json"
        source.write_text("{not json")
        with pytest.raises(DefinitionLoadError, match="not valid JSON"):
            load_component_definitions(source)

    @pytest.mark.unit
    def test_null_tables_mean_no_attributes(self):
        definitions = parse_component_definitions(
            {
                "mj-text": {
                    "allowedAttributes": {"color": "color"},
                    "defaultAttributes": None,
                },
                "mj-raw": {"allowedAttributes": None, "defaultAttributes": None},
            }
        )
        assert definitions["mj-text"].allowed_attributes == {"color": "color"}
        assert definitions["mj-text"].default_attributes == {}
        assert definitions["mj-raw"].allowed_attributes == {}

        spec = build_component_spec(definitions["mj-text"])
        assert spec.attributes["color"].default is None

    @pytest.mark.unit
    def test_unknown_component_warned(self, definition_file, caplog):
        source = definition_file(
            {
                "mj-fancy": {"allowedAttributes": {"color": "color"}},
                "mj-text": {"allowedAttributes": {"color": "color"}},
            }
        )

        with caplog.at_level(logging.WARNING):
            definitions = load_component_definitions(source)

        assert "mj-fancy" in definitions
        warnings = [
            r.getMessage() for r in caplog.records if r.levelno == logging.WARNING
        ]
        assert warnings == [
            "mj-fancy is not a known MJML component and will not be extracted"
        ]
