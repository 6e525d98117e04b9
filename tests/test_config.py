"""
Configuration tests for Stepwise.

Tests YAML loading, environment overrides and source selection.
"""

import pytest

from stepwise.classroom import DirectorySource, PackageSource
from stepwise.config import Settings, create_content_source, load_config_file, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    for name in ("STEPWISE_CONFIG", "STEPWISE_CONTENT_DIR", "STEPWISE_CONTENT_PATTERN", "STEPWISE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Test the Settings model."""

    def test_defaults(self):
        settings = load_settings()
        assert settings.content_dir is None
        assert settings.content_pattern == "*.md"
        assert settings.log_level == "INFO"

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            Settings(log_level="chatty")


class TestLoading:
    """Test YAML files and environment overrides."""

    def test_yaml_in_working_directory(self, tmp_path):
        (tmp_path / "stepwise.yaml").write_text(
            "content_dir: docs/chapters\npage_title: Course\n", encoding="utf-8"
        )
        settings = load_settings()
        assert str(settings.content_dir) == "docs/chapters"
        assert settings.page_title == "Course"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("log_level: warning\n", encoding="utf-8")
        monkeypatch.setenv("STEPWISE_CONFIG", str(path))
        assert load_settings().log_level == "WARNING"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "stepwise.yaml"
        path.write_text("content_pattern: '*.markdown'\n", encoding="utf-8")
        monkeypatch.setenv("STEPWISE_CONTENT_PATTERN", "ch-*.md")
        assert load_settings(path).content_pattern == "ch-*.md"

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config_file(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}


class TestContentSource:
    """Test source selection."""

    def test_bundled_by_default(self):
        assert isinstance(create_content_source(Settings()), PackageSource)

    def test_directory_when_configured(self, tmp_path):
        source = create_content_source(Settings(content_dir=tmp_path, content_pattern="*.txt"))
        assert isinstance(source, DirectorySource)
        assert source.directory == tmp_path
        assert source.pattern == "*.txt"
