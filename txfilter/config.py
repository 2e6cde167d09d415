from pathlib import Path
from typing import Any, Dict, Optional

import tomli

from txfilter.logger import logger


class Config:
    """
    Configuration manager for txfilter

    Loads builder options, logging settings and named filter definitions
    from a TOML file. Missing or unreadable files yield an empty configuration.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Path to the TOML configuration file.
                        If not provided, defaults to "txfilter.toml"
        """
        self.config_path = config_path or "txfilter.toml"
        self.config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from TOML file

        Returns:
            Dict[str, Any]: Configuration dictionary, empty if file not found or invalid
        """
        config_path = Path(self.config_path)
        if not config_path.exists():
            logger.warning(
                f"Config file not found: {self.config_path}, using empty configuration"
            )
            return {}

        try:
            with open(config_path, "rb") as f:
                return tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            logger.error(f"Error loading config file: {e}")
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key

        Args:
            key: Dot-separated configuration key (e.g., "builder.nesting")
            default: Default value if key not found

        Returns:
            Any: Configuration value or default if not found
        """
        value = self.config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k, default)
        return value if value is not None else default

    @property
    def builder(self) -> dict:
        """Builder options"""
        return self.config.get("builder", {})

    @property
    def logging(self) -> dict:
        """Logging options"""
        return self.config.get("logging", {})

    @property
    def filters(self) -> dict:
        """Named filter definitions"""
        return self.config.get("filters", {})

    def get_filter_config(self, filter_name: str) -> dict:
        """
        Get the definition of a named filter

        Args:
            filter_name: Name of the filter

        Returns:
            dict: Filter definition or empty dict if not found
        """
        return self.filters.get(filter_name, {})
