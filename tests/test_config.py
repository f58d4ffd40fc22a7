"""
Tests for the configuration loader.
"""
import pytest

from backoffice.config import TimelineConfig, get_config, reload_config, ConfigurationError


class TestTimelineConfig:
    """Tests for TimelineConfig class."""

    def test_load_default_config(self):
        config = get_config()
        assert config.version == "1.0.0"
        assert config.search_default_limit == 20
        assert config.search_max_limit == 100
        assert config.search_max_workers == 4

    def test_orphan_client_label(self):
        assert get_config().orphan_client_label == "Sin cliente"

    def test_detail_paths(self):
        config = get_config()
        assert config.get_detail_path("OT", "abc") == "/work-orders/abc"
        assert config.get_detail_path("COT", "abc") == "/quotes/abc"

    def test_unknown_detail_path(self):
        with pytest.raises(ConfigurationError):
            get_config().get_detail_path("XX", "abc")

    def test_dictionary_access(self):
        config = get_config()
        assert "search" in config
        assert config["timeline"]["orphan_client_label"] == "Sin cliente"
        assert config.get("missing", "fallback") == "fallback"

    def test_reload_returns_new_instance(self):
        first = get_config()
        assert reload_config() is not first


class TestConfigFiles:
    """Tests for loading alternative files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            TimelineConfig(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("search: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            TimelineConfig(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            TimelineConfig(path)

    def test_default_limit_above_max(self, tmp_path):
        path = tmp_path / "limits.yaml"
        path.write_text("search:\n  default_limit: 50\n  max_limit: 10\n")
        with pytest.raises(ConfigurationError, match="default_limit"):
            TimelineConfig(path)

    def test_defaults_when_sections_missing(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BACKOFFICE_DATABASE_URL", raising=False)
        path = tmp_path / "minimal.yaml"
        path.write_text("version: '2.0'\n")

        config = TimelineConfig(path)

        assert config.version == "2.0"
        assert config.database_url == "sqlite:///./backoffice.db"
        assert config.search_default_limit == 20
        assert config.detail_paths["OG"] == "/expense-orders"
        assert config.log_level == "INFO"

    def test_database_url_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "db.yaml"
        path.write_text("database:\n  url: sqlite:///./from-file.db\n")
        monkeypatch.setenv("BACKOFFICE_DATABASE_URL", "postgresql://db/backoffice")

        assert TimelineConfig(path).database_url == "postgresql://db/backoffice"

    def test_config_path_env(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("timeline:\n  orphan_client_label: 'No client'\n")
        monkeypatch.setenv("BACKOFFICE_CONFIG", str(path))

        assert TimelineConfig().orphan_client_label == "No client"
