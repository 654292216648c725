"""Tests for generate CLI command."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, ".", *args],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        timeout=60,
    )


@pytest.mark.unit
def test_generate_writes_artifacts(tmp_path):
    """generate should write all three documents and exit cleanly."""
    result = run_cli("generate", "--output-dir", str(tmp_path))

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "mjml-specs-raw.json").exists()
    assert (tmp_path / "mjml-components-schema.json").exists()
    assert (tmp_path / "mjml-components-schema-ai.json").exists()


@pytest.mark.unit
def test_generate_reports_progress(tmp_path):
    """generate should log per-component counts and the AI summary."""
    result = run_cli("generate", "--output-dir", str(tmp_path))

    assert "mj-button:" in result.stderr
    assert "AI schema includes 22 components" in result.stderr
    assert "Schema generation completed successfully!" in result.stderr


@pytest.mark.unit
def test_generate_base_id(tmp_path):
    """generate should honor --base-id for the schema $id."""
    result = run_cli(
        "generate", "--output-dir", str(tmp_path), "--base-id", "https://x.test/s/"
    )

    assert result.returncode == 0, result.stderr
    schema = json.loads(
        (tmp_path / "mjml-components-schema.json").read_text(encoding="utf-8")
    )
    assert schema["$id"] == "https://x.test/s/mjml-components.json"


@pytest.mark.unit
def test_generate_missing_source_fails(tmp_path):
    """generate should exit 1 when the definition file is missing."""
    result = run_cli(
        "generate",
        "--output-dir",
        str(tmp_path / "out"),
        "--source",
        str(tmp_path / "missing.json"),
    )

    assert result.returncode == 1
    assert "Error generating schema" in result.stderr
    assert not (tmp_path / "out").exists()


@pytest.mark.unit
def test_generate_help_lists_flags():
    """generate --help should describe its options."""
    result = run_cli("generate", "--help")

    assert result.returncode == 0
    assert "--output-dir" in result.stdout
    assert "--source" in result.stdout
    assert "--base-id" in result.stdout
