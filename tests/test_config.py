"""
Tests for configuration loading.
"""

import pytest

from lead_enricher.config import Config, ConfigManager, DEFAULT_SEARCH_URL


class TestConfigManager:
    """Test YAML loading, env overrides and validation."""

    def test_defaults_without_file(self, temp_dir):
        manager = ConfigManager(str(temp_dir / 'missing.yml'))

        config = manager.get_config()

        assert isinstance(config, Config)
        assert config.crawler.timeout == 10
        assert config.crawler.search_url == DEFAULT_SEARCH_URL
        assert 'facebook.com' in config.crawler.search_excluded_domains
        assert config.app.log_level == 'DEBUG'  # from LOG_LEVEL in the test environment

    def test_load_from_yaml(self, temp_dir, monkeypatch):
        monkeypatch.delenv('LOG_LEVEL')
        path = temp_dir / 'config.yml'
        path.write_text(
            "crawler:\n"
            "  user_agent: YamlBot/2.0\n"
            "  timeout: 12\n"
            "  search_excluded_domains: [bing.com]\n"
            "app:\n"
            "  log_level: warning\n"
        )

        config = ConfigManager(str(path)).get_config()

        assert config.crawler.user_agent == 'YamlBot/2.0'
        assert config.crawler.timeout == 12
        assert config.crawler.search_excluded_domains == ['bing.com']
        assert config.app.log_level == 'WARNING'

    def test_env_overrides(self, temp_dir, monkeypatch):
        path = temp_dir / 'config.yml'
        path.write_text("crawler:\n  timeout: 12\n")
        monkeypatch.setenv('ENRICHER_TIMEOUT', '10.5')
        monkeypatch.setenv('ENRICHER_USER_AGENT', 'EnvBot/1.0')
        monkeypatch.setenv('LOG_LEVEL', 'error')

        config = ConfigManager(str(path)).get_config()

        assert config.crawler.timeout == 10.5
        assert config.crawler.user_agent == 'EnvBot/1.0'
        assert config.app.log_level == 'ERROR'

    @pytest.mark.parametrize('yaml_text', [
        "crawler:\n  timeout: 0\n",
        "crawler:\n  timeout: 1\n",
        "crawler:\n  timeout: 600\n",
        "crawler:\n  timeout: 12.5\n",
        "crawler:\n  search_url: ftp://search.example\n",
        "app:\n  log_level: CHATTY\n",
    ])
    def test_invalid_config(self, temp_dir, monkeypatch, yaml_text):
        monkeypatch.delenv('LOG_LEVEL')
        path = temp_dir / 'config.yml'
        path.write_text(yaml_text)

        with pytest.raises(ValueError, match="Configuration validation failed"):
            ConfigManager(str(path)).get_config()

    def test_config_is_cached(self, temp_dir):
        manager = ConfigManager(str(temp_dir / 'config.yml'))

        assert manager.load_config() is manager.load_config()

    @pytest.mark.parametrize('raw', ['ten', '', '5', '30'])
    def test_bad_env_timeout(self, temp_dir, monkeypatch, raw):
        monkeypatch.setenv('ENRICHER_TIMEOUT', raw)

        with pytest.raises(ValueError, match="Configuration validation failed"):
            ConfigManager(str(temp_dir / 'config.yml')).get_config()
