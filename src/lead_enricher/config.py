"""
Configuration management for Lead Enricher.
Handles loading and validation of configuration from YAML files and environment variables.
"""

import os
import yaml
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from urllib.parse import urlparse


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36 LeadEnricher/1.0"
)
DEFAULT_SEARCH_URL = "https://html.duckduckgo.com/html/"
DEFAULT_EXCLUDED_DOMAINS = ["duckduckgo.com", "facebook.com", "linkedin.com"]

# Bounds for a single page fetch, in seconds
MIN_TIMEOUT = 10
MAX_TIMEOUT = 12


@dataclass
class CrawlerConfig:
    """Crawler configuration settings."""
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10  # seconds, per request
    search_url: str = DEFAULT_SEARCH_URL
    search_excluded_domains: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DOMAINS)
    )


@dataclass
class AppConfig:
    """Application configuration settings."""
    log_level: str = "INFO"


@dataclass
class Config:
    """Main configuration class."""
    crawler: CrawlerConfig = field(default_factory=CrawlerConfig)
    app: AppConfig = field(default_factory=AppConfig)


class ConfigManager:
    """Configuration manager for loading and validating settings."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Config] = None

    def _find_config_file(self) -> str:
        """Find configuration file in standard locations."""
        possible_paths = [
            "config.yml",
            "config.yaml",
            os.path.expanduser("~/.lead-enricher/config.yml"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return path

        return "config.yml"

    def load_config(self) -> Config:
        """Load configuration from file and environment variables."""
        if self._config is not None:
            return self._config

        config_data = {}
        if os.path.exists(self.config_path):
            with open(self.config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}

        config_data = self._apply_env_overrides(config_data)

        self._config = self._create_config_from_dict(config_data)
        return self._config

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'ENRICHER_USER_AGENT': ['crawler', 'user_agent'],
            'ENRICHER_TIMEOUT': ['crawler', 'timeout'],
            'ENRICHER_SEARCH_URL': ['crawler', 'search_url'],
            'LOG_LEVEL': ['app', 'log_level'],
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                current = config_data
                for key in config_path[:-1]:
                    if key not in current or current[key] is None:
                        current[key] = {}
                    current = current[key]

                if env_var == 'ENRICHER_TIMEOUT':
                    try:
                        value = float(value)
                    except ValueError:
                        raise ValueError(
                            f"Configuration validation failed: {env_var} must be a number, got {value!r}"
                        )
                elif env_var == 'LOG_LEVEL':
                    value = value.upper()

                current[config_path[-1]] = value

        return config_data

    def _create_config_from_dict(self, data: Dict[str, Any]) -> Config:
        """Create Config object from dictionary data."""
        crawler_data = data.get('crawler') or {}
        crawler_config = CrawlerConfig(
            user_agent=crawler_data.get('user_agent', DEFAULT_USER_AGENT),
            timeout=crawler_data.get('timeout', 10),
            search_url=crawler_data.get('search_url', DEFAULT_SEARCH_URL),
            search_excluded_domains=list(
                crawler_data.get('search_excluded_domains', DEFAULT_EXCLUDED_DOMAINS)
            ),
        )

        app_data = data.get('app') or {}
        app_config = AppConfig(
            log_level=str(app_data.get('log_level', 'INFO')).upper(),
        )

        return Config(crawler=crawler_config, app=app_config)

    def validate_config(self, config: Config) -> bool:
        """Validate configuration settings."""
        errors = []

        timeout = config.crawler.timeout
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) \
                or not MIN_TIMEOUT <= timeout <= MAX_TIMEOUT:
            errors.append(f"crawler.timeout must be between {MIN_TIMEOUT} and {MAX_TIMEOUT} seconds")

        parsed = urlparse(config.crawler.search_url or '')
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            errors.append("crawler.search_url must be an absolute http(s) URL")

        if config.app.log_level not in ['DEBUG', 'INFO', 'WARNING', 'ERROR']:
            errors.append("Invalid log level")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        return True

    def get_config(self) -> Config:
        """Get validated configuration."""
        config = self.load_config()
        self.validate_config(config)
        return config


# Global configuration manager instance
config_manager = ConfigManager()


def get_config() -> Config:
    """Get the global configuration."""
    return config_manager.get_config()


def reload_config(config_path: Optional[str] = None) -> Config:
    """Reload configuration from file."""
    global config_manager
    config_manager = ConfigManager(config_path)
    return config_manager.get_config()
