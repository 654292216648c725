"""Tests for output module."""

import json

import pytest

from src.output import (
    AI_SCHEMA_FILENAME,
    RAW_SPECS_FILENAME,
    SCHEMA_FILENAME,
    ArtifactPaths,
    dump_json,
    write_artifacts,
    write_json,
)


@pytest.fixture
def documents():
    """Minimal stand-ins for the three generated documents."""
    return (
        {"mj-text": {"packageName": "mjml-text"}},
        {"title": "MJML Components Schema"},
        {"title": "MJML Components Schema (AI-Optimized)"},
    )


class TestDumpJson:
    """Tests for JSON serialization."""

    @pytest.mark.unit
    def test_two_space_indent(self):
        assert dump_json({"a": 1}) == '{\n  "a": 1\n}'

    @pytest.mark.unit
    def test_non_ascii_kept(self):
        assert "⊗" in dump_json({"ico-close": "⊗"})


class TestWriteArtifacts:
    """Tests for write_artifacts."""

    @pytest.mark.unit
    def test_writes_three_files(self, tmp_path, documents):
        paths = write_artifacts(*documents, tmp_path)

        assert isinstance(paths, ArtifactPaths)
        assert paths.raw_specs == tmp_path / RAW_SPECS_FILENAME
        assert paths.schema == tmp_path / SCHEMA_FILENAME
        assert paths.ai_schema == tmp_path / AI_SCHEMA_FILENAME
        assert json.loads(paths.raw_specs.read_text()) == documents[0]
        assert json.loads(paths.schema.read_text()) == documents[1]
        assert json.loads(paths.ai_schema.read_text()) == documents[2]

    @pytest.mark.unit
    def test_creates_output_dir(self, tmp_path, documents):
        target = tmp_path / "nested" / "schemas"
        write_artifacts(*documents, str(target))
        assert (target / SCHEMA_FILENAME).exists()

    @pytest.mark.unit
    def test_overwrites_existing(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("stale")
        write_json(path, {"fresh": True})
        assert json.loads(path.read_text()) == {"fresh": True}

    @pytest.mark.unit
    def test_write_failure_propagates(self, tmp_path, documents):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        with pytest.raises(OSError):
            write_artifacts(*documents, blocker)
