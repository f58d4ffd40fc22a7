"""
Configuration loader for the print backoffice lineage service.

Loads settings from timeline_config.yaml and provides typed access
to all configuration sections.
"""
import os
from pathlib import Path
from typing import Any, Optional
from functools import lru_cache

import yaml


# Default config path relative to project root
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "timeline_config.yaml"

CONFIG_PATH_ENV = "BACKOFFICE_CONFIG"
DATABASE_URL_ENV = "BACKOFFICE_DATABASE_URL"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class TimelineConfig:
    """
    Configuration manager for the backoffice lineage service.

    Loads YAML configuration and provides typed access to all sections.
    Use get_config() to obtain the singleton instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        env_path = os.environ.get(CONFIG_PATH_ENV)
        self._config_path = config_path or (Path(env_path) if env_path else DEFAULT_CONFIG_PATH)
        self._config: dict = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            raise ConfigurationError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

        if not isinstance(self._config, dict):
            raise ConfigurationError("Config file must contain a YAML mapping")

        self._validate()

    def _validate(self) -> None:
        default_limit = self.search_default_limit
        max_limit = self.search_max_limit
        if max_limit < 1:
            raise ConfigurationError("search.max_limit must be at least 1")
        if not 1 <= default_limit <= max_limit:
            raise ConfigurationError(
                f"search.default_limit ({default_limit}) must be between 1 and "
                f"search.max_limit ({max_limit})"
            )
        if self.search_max_workers < 1:
            raise ConfigurationError("search.max_workers must be at least 1")

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._load()
        # Clear the cached singleton to force reload on next get_config()
        get_config.cache_clear()

    @property
    def version(self) -> str:
        """Configuration file version."""
        return self._config.get("version", "unknown")

    # =========================================================================
    # Database
    # =========================================================================

    @property
    def database(self) -> dict:
        """Database configuration."""
        return self._config.get("database", {})

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL; BACKOFFICE_DATABASE_URL takes precedence."""
        return os.environ.get(DATABASE_URL_ENV) or self.database.get("url", "sqlite:///./backoffice.db")

    @property
    def database_echo(self) -> bool:
        """Whether SQLAlchemy echoes emitted SQL."""
        return bool(self.database.get("echo", False))

    # =========================================================================
    # Search
    # =========================================================================

    @property
    def search(self) -> dict:
        """Cross-type search configuration."""
        return self._config.get("search", {})

    @property
    def search_default_limit(self) -> int:
        """Results per document type when the caller gives no limit."""
        return int(self.search.get("default_limit", 20))

    @property
    def search_max_limit(self) -> int:
        """Upper bound accepted for the per-type limit."""
        return int(self.search.get("max_limit", 100))

    @property
    def search_max_workers(self) -> int:
        """Thread pool size for the per-type search queries."""
        return int(self.search.get("max_workers", 4))

    # =========================================================================
    # Timeline
    # =========================================================================

    @property
    def timeline(self) -> dict:
        """Lineage graph configuration."""
        return self._config.get("timeline", {})

    @property
    def orphan_client_label(self) -> str:
        """Client name shown for expense orders with no work order."""
        return self.timeline.get("orphan_client_label", "Sin cliente")

    @property
    def detail_paths(self) -> dict:
        """Detail link prefixes keyed by node type (COT, OP, OT, OG)."""
        return self.timeline.get("detail_paths", {
            "COT": "/quotes",
            "OP": "/orders",
            "OT": "/work-orders",
            "OG": "/expense-orders",
        })

    def get_detail_path(self, node_type: str, entity_id: str) -> str:
        """
        Build the detail link for a node.

        Args:
            node_type: Node type tag (e.g., 'OT')
            entity_id: Document id

        Returns:
            Path such as '/work-orders/<id>'
        """
        prefix = self.detail_paths.get(node_type)
        if prefix is None:
            raise ConfigurationError(f"No detail path configured for node type '{node_type}'")
        return f"{prefix.rstrip('/')}/{entity_id}"

    # =========================================================================
    # Logging
    # =========================================================================

    @property
    def logging(self) -> dict:
        """Logging configuration."""
        return self._config.get("logging", {})

    @property
    def log_level(self) -> str:
        return str(self.logging.get("level", "INFO")).upper()

    @property
    def log_format(self) -> str:
        return self.logging.get("format", '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level config value by key."""
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        return key in self._config


@lru_cache(maxsize=1)
def get_config(config_path: Optional[str] = None) -> TimelineConfig:
    """
    Get the singleton configuration instance.

    Args:
        config_path: Optional path to config file. Only used on first call.

    Returns:
        TimelineConfig singleton instance
    """
    path = Path(config_path) if config_path else None
    return TimelineConfig(path)


def reload_config() -> TimelineConfig:
    """Reload configuration from disk and return new instance."""
    get_config.cache_clear()
    return get_config()
