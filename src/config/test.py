"""Tests for configuration management."""

import re
from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _find_repo_root,
    get_base_id,
    get_environment,
    get_environment_info,
    get_log_level,
    get_output_dir,
    get_source_path,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("MJML_SCHEMA_LOG_LEVEL", raising=False)
        assert get_environment(EnvVar.MJML_SCHEMA_LOG_LEVEL) == "INFO"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("MJML_SCHEMA_LOG_LEVEL", "WARNING")
        result = get_environment(EnvVar.MJML_SCHEMA_LOG_LEVEL, override="DEBUG")
        assert result == "DEBUG"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("MJML_SCHEMA_LOG_LEVEL", "WARNING")
        assert get_environment(EnvVar.MJML_SCHEMA_LOG_LEVEL) == "WARNING"

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables are converted from strings."""
        monkeypatch.setenv("MJML_SCHEMA_SOURCE", str(tmp_path / "defs.json"))
        result = get_environment(EnvVar.MJML_SCHEMA_SOURCE)
        assert isinstance(result, Path)
        assert result == tmp_path / "defs.json"

    @pytest.mark.unit
    def test_empty_value_uses_default(self, monkeypatch):
        """An exported but empty variable counts as unset."""
        monkeypatch.setenv("MJML_SCHEMA_SOURCE", "")
        assert get_environment(EnvVar.MJML_SCHEMA_SOURCE) is None


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.MJML_SCHEMA_OUTPUT_DIR)
        assert isinstance(info, EnvConfig)
        assert info.name == "MJML_SCHEMA_OUTPUT_DIR"
        assert info.default is None
        assert info.var_type is Path
        assert info.category == "paths"

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's EnvConfig name matches the member name."""
        for var in EnvVar:
            assert var.value.name == var.name


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        path_vars = list_environment_variables("paths")
        assert EnvVar.MJML_SCHEMA_OUTPUT_DIR in path_vars
        assert EnvVar.MJML_SCHEMA_SOURCE in path_vars
        assert EnvVar.MJML_SCHEMA_BASE_ID not in path_vars


# =============================================================================
# Tests for convenience functions
# =============================================================================


class TestGetOutputDir:
    """Tests for output directory resolution."""

    @pytest.mark.unit
    def test_override_takes_priority(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MJML_SCHEMA_OUTPUT_DIR", str(tmp_path / "env"))
        assert get_output_dir(str(tmp_path / "cli")) == tmp_path / "cli"

    @pytest.mark.unit
    def test_env_var_used(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MJML_SCHEMA_OUTPUT_DIR", str(tmp_path / "env"))
        assert get_output_dir() == tmp_path / "env"

    @pytest.mark.unit
    def test_default_finds_repo_root(self, tmp_path, monkeypatch):
        """Default behavior finds repo root and returns schemas/."""
        repo_root = tmp_path / "fake_repo"
        repo_root.mkdir()
        (repo_root / ".gitignore").touch()
        subdir = repo_root / "src" / "submodule"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)
        monkeypatch.delenv("MJML_SCHEMA_OUTPUT_DIR", raising=False)

        assert get_output_dir() == repo_root / "schemas"


class TestGetSourcePath:
    """Tests for definition dump resolution."""

    @pytest.mark.unit
    def test_none_by_default(self, monkeypatch):
        monkeypatch.delenv("MJML_SCHEMA_SOURCE", raising=False)
        assert get_source_path() is None

    @pytest.mark.unit
    def test_override(self, tmp_path):
        assert get_source_path(str(tmp_path / "a.json")) == tmp_path / "a.json"


class TestSchemaSettings:
    """Tests for base id and log level."""

    @pytest.mark.unit
    def test_base_id_default(self, monkeypatch):
        monkeypatch.delenv("MJML_SCHEMA_BASE_ID", raising=False)
        assert get_base_id() == "https://notifuse.com/schemas"

    @pytest.mark.unit
    def test_base_id_trailing_slash_stripped(self):
        assert get_base_id("https://example.com/s/") == "https://example.com/s"

    @pytest.mark.unit
    def test_log_level_env(self, monkeypatch):
        monkeypatch.setenv("MJML_SCHEMA_LOG_LEVEL", "DEBUG")
        assert get_log_level() == "DEBUG"


# =============================================================================
# Tests for repository root detection
# =============================================================================


class TestFindRepoRoot:
    """Tests for repository root detection."""

    @pytest.mark.unit
    def test_from_subdirectory(self, tmp_path, monkeypatch):
        """Walks up from subdirectory."""
        repo_root = tmp_path / "repo"
        repo_root.mkdir()
        (repo_root / ".gitignore").touch()
        deep_subdir = repo_root / "a" / "b" / "c"
        deep_subdir.mkdir(parents=True)
        monkeypatch.chdir(deep_subdir)

        assert _find_repo_root() == repo_root

    @pytest.mark.unit
    def test_explicit_start_path(self, tmp_path):
        """Accepts explicit start path."""
        repo_root = tmp_path / "explicit_repo"
        repo_root.mkdir()
        (repo_root / ".gitignore").touch()
        subdir = repo_root / "src"
        subdir.mkdir()

        assert _find_repo_root(start_path=subdir) == repo_root

    @pytest.mark.unit
    def test_error_includes_start_path(self, tmp_path, monkeypatch):
        """Error message includes the start path."""
        no_repo = tmp_path / "no_git_here"
        no_repo.mkdir()
        with monkeypatch.context() as m:
            # Ignore any .gitignore above the temp directory.
            m.setattr(Path, "exists", lambda self: False)
            with pytest.raises(RuntimeError, match=re.escape(str(no_repo))):
                _find_repo_root(start_path=no_repo)
