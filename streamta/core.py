import logging
import logging.config
from typing import Any, Dict, Optional

import yaml

from .base import BaseIndicator
from .exceptions import InvalidParameterError
from .factory import create

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and manages configuration from a YAML file."""
    def __init__(self, config_path: str):
        """Initialize with path to config file."""
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load YAML configuration file. An empty file yields an empty config."""
        try:
            with open(self.config_path, 'r') as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.error(f"Configuration file not found at '{self.config_path}'")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Malformed YAML in configuration file: {e}")
            raise

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key with optional default."""
        return self.config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self.config[key]

    def get_all(self) -> Dict[str, Any]:
        """Return entire configuration dictionary."""
        return self.config


def setup_logging(config: Optional[Dict[str, Any]]) -> None:
    """Configure application logging with fallback to basic config."""
    try:
        logging.config.dictConfig(config)
        logging.info("Logging configured successfully from config file.")
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        # Fallback to a basic configuration if the one in the file is malformed
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(levelname)s - %(message)s")
        logging.warning(f"Could not configure logging from dict: {e}. Using basic config.")


def build_indicators(config: Dict[str, Any]) -> Dict[str, BaseIndicator]:
    """
    Create the indicator set described by the ``indicators`` section.

    Expected layout::

        indicators:
          fast_trend:
            type: ema
            params: {period: 12}
          bands:
            type: bollinger_bands
            params: {period: 20, multiplier: 2.0}

    Returns:
        Dict[str, BaseIndicator]: Indicators keyed by their alias, in config order.

    Raises:
        InvalidParameterError: If an entry is malformed or its parameters are rejected.
        IndicatorNotFoundError: If an entry names an unknown indicator.
    """
    section = config.get('indicators') or {}
    if not isinstance(section, dict):
        raise InvalidParameterError("indicators", section, "mapping of alias to indicator settings")

    indicators: Dict[str, BaseIndicator] = {}
    for alias, entry in section.items():
        if not isinstance(entry, dict) or 'type' not in entry:
            raise InvalidParameterError(alias, entry, "mapping with a 'type' key")
        params = entry.get('params') or {}
        if not isinstance(params, dict):
            raise InvalidParameterError(f"{alias}.params", params, "mapping of constructor parameters")

        indicators[alias] = create(entry['type'], **params)
        logger.info(f"Configured indicator '{alias}': {indicators[alias]}")

    return indicators
