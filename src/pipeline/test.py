"""Tests for the generation pipeline."""

import json

import pytest

from src.components import (
    COMPONENT_PACKAGES,
    COMPONENT_REGISTRY,
    DefinitionLoadError,
)
from src.pipeline import build_documents, generate_artifacts, resolve_definitions
from src.schema import EXCLUDED_COMPONENTS


class TestResolveDefinitions:
    """Tests for definition source selection."""

    @pytest.mark.unit
    def test_builtin_by_default(self):
        assert resolve_definitions() == COMPONENT_REGISTRY

    @pytest.mark.unit
    def test_source_file_layered(self, definition_file):
        source = definition_file({"mj-raw": {"allowedAttributes": {}}})
        definitions = resolve_definitions(source)
        assert definitions["mj-raw"].allowed_attributes == {}
        assert len(definitions) == len(COMPONENT_REGISTRY)


class TestBuildDocuments:
    """Tests for in-memory document generation."""

    @pytest.mark.unit
    def test_counts(self):
        result = build_documents()
        assert result.component_count == len(COMPONENT_PACKAGES)
        assert result.ai_component_count == len(COMPONENT_PACKAGES) - len(
            EXCLUDED_COMPONENTS
        )
        assert result.paths is None

    @pytest.mark.unit
    def test_deterministic(self):
        """Two runs produce byte-identical documents."""
        first = build_documents()
        second = build_documents()
        assert json.dumps(first.schema) == json.dumps(second.schema)
        assert json.dumps(first.ai_schema) == json.dumps(second.ai_schema)
        assert json.dumps(first.raw_specs) == json.dumps(second.raw_specs)

    @pytest.mark.unit
    def test_partial_definitions(self):
        """Components without definitions are skipped, not fatal."""
        definitions = {"mj-text": COMPONENT_REGISTRY["mj-text"]}
        result = build_documents(definitions)
        assert list(result.raw_specs) == ["mj-text"]
        assert result.ai_component_count == 1


class TestGenerateArtifacts:
    """Tests for the full run."""

    @pytest.mark.unit
    def test_writes_files(self, tmp_path):
        result = generate_artifacts(tmp_path, base_id="https://example.com/x")

        assert result.paths is not None
        schema = json.loads(result.paths.schema.read_text(encoding="utf-8"))
        assert schema["$id"] == "https://example.com/x/mjml-components.json"
        raw = json.loads(result.paths.raw_specs.read_text(encoding="utf-8"))
        assert raw["mj-body"]["packageName"] == "mjml-body"

    @pytest.mark.unit
    def test_bad_source_raises(self, tmp_path):
        with pytest.raises(DefinitionLoadError):
            generate_artifacts(tmp_path / "out", source=tmp_path / "missing.json")
        assert not (tmp_path / "out").exists()
