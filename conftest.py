"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation from MJML_SCHEMA_* variables set in the developer shell
- Shared component tree and definition file fixtures
- Global test configuration
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest
from dotenv import load_dotenv

from src.config import EnvVar
from src.schema import BASIC_EXAMPLE

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Mark subprocess-driven CLI tests so they can be deselected with -m."""
    cli_marker = pytest.mark.cli
    for item in items:
        if "tests/cli" in Path(str(item.fspath)).as_posix():
            item.add_marker(cli_marker)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove generator settings so every test starts from defaults."""
    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def basic_email() -> dict[str, Any]:
    """A valid mjml > mj-body > mj-section > mj-column tree.

    Returns:
        Fresh copy of the embedded "Hello World" example.
    """
    return copy.deepcopy(BASIC_EXAMPLE["value"])


@pytest.fixture
def definition_file(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Factory writing a component definition dump to a temp file.

    Returns:
        Callable taking the definition mapping and returning the file path.
    """

    def _write(data: dict[str, Any], name: str = "definitions.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
