"""Tests for infer, components, validate and env CLI commands."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from src.schema import BASIC_EXAMPLE

REPO_ROOT = Path(__file__).resolve().parents[2]


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, ".", *args],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        timeout=60,
    )


# =============================================================================
# Top-level
# =============================================================================


@pytest.mark.unit
def test_no_command_shows_help():
    result = run_cli()
    assert result.returncode == 1
    assert "Usage: python . {command}" in result.stdout


@pytest.mark.unit
def test_help_flag_exits_cleanly():
    result = run_cli("--help")
    assert result.returncode == 0
    assert "generate" in result.stdout


@pytest.mark.unit
def test_unknown_command():
    result = run_cli("frobnicate")
    assert result.returncode == 1
    assert "Unknown command: frobnicate" in result.stderr


# =============================================================================
# infer
# =============================================================================


@pytest.mark.unit
def test_infer_enum():
    result = run_cli("infer", "align", "--type", "enum(left,right,center)")

    assert result.returncode == 0, result.stderr
    schema = json.loads(result.stdout)
    assert schema["type"] == "string"
    assert schema["enum"] == ["left", "right", "center"]
    assert schema["description"] == "Text/content alignment."


@pytest.mark.unit
def test_infer_default_parsed_as_json():
    result = run_cli("infer", "border-radius", "-t", "unit(px,%){1,4}", "-d", '"3px"')

    schema = json.loads(result.stdout)
    assert schema["default"] == "3px"
    assert schema["pattern"].startswith("^")


@pytest.mark.unit
def test_infer_bare_default():
    result = run_cli("infer", "color", "-t", "color", "-d", "red")

    schema = json.loads(result.stdout)
    assert schema["default"] == "red"


@pytest.mark.unit
def test_infer_without_annotation():
    result = run_cli("infer", "mystery")

    schema = json.loads(result.stdout)
    assert schema["type"] == "string"
    assert schema["description"] == "mystery attribute"


# =============================================================================
# components
# =============================================================================


@pytest.mark.unit
def test_components_lists_all():
    result = run_cli("components")

    assert result.returncode == 0, result.stderr
    assert "MJML Components (32/32)" in result.stdout
    assert "mj-carousel-image" in result.stdout
    assert "Skipped" not in result.stdout


# =============================================================================
# validate
# =============================================================================


@pytest.mark.unit
def test_validate_valid_document(tmp_path):
    document = tmp_path / "email.json"
    document.write_text(json.dumps(BASIC_EXAMPLE["value"]), encoding="utf-8")

    result = run_cli("validate", str(document), "--ai")

    assert result.returncode == 0, result.stderr
    assert "valid" in result.stdout


@pytest.mark.unit
def test_validate_invalid_document(tmp_path):
    document = tmp_path / "email.json"
    document.write_text(json.dumps({"type": "mj-text"}), encoding="utf-8")

    result = run_cli("validate", str(document))

    assert result.returncode == 1
    assert "error(s)" in result.stdout
    assert "'id' is a required property" in result.stdout


@pytest.mark.unit
def test_validate_ai_and_schema_conflict(tmp_path):
    document = tmp_path / "email.json"
    document.write_text(json.dumps(BASIC_EXAMPLE["value"]), encoding="utf-8")
    schema = tmp_path / "schema.json"
    schema.write_text("{}", encoding="utf-8")

    result = run_cli("validate", str(document), "--ai", "--schema", str(schema))

    assert result.returncode == 2
    assert "not allowed with argument" in result.stderr


@pytest.mark.unit
def test_validate_missing_file(tmp_path):
    result = run_cli("validate", str(tmp_path / "nope.json"))

    assert result.returncode == 1
    assert "Failed to load input" in result.stderr


# =============================================================================
# env
# =============================================================================


@pytest.mark.unit
def test_env_lists_variables():
    result = run_cli("env")

    assert result.returncode == 0
    assert "MJML_SCHEMA_OUTPUT_DIR" in result.stdout
    assert "MJML_SCHEMA_BASE_ID" in result.stdout
    assert "Resolved output directory:" in result.stdout


@pytest.mark.unit
def test_env_without_repo_root(tmp_path):
    """env should log an error instead of a traceback outside a repository."""
    result = subprocess.run(
        [sys.executable, str(REPO_ROOT), "env"],
        capture_output=True,
        text=True,
        cwd=tmp_path,
        timeout=60,
    )

    assert result.returncode == 1
    assert "Cannot resolve output directory" in result.stderr
    assert "Traceback" not in result.stderr
