"""Configuration loading for the Wiki.js API.

This module resolves the wiki URL and API token either from environment
variables (optionally populated from a .env file via python-dotenv) or from
a configuration file under ~/.config. The configuration is read once per
ConfigProvider and cached until explicitly invalidated.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError, ConfigNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.config' / 'wikijs.json'


class WikiConfig(NamedTuple):
    """Wiki.js connection settings."""
    url: str
    api_token: str
    default_locale: str = 'en'
    default_editor: str = 'markdown'


class ConfigProvider:
    """Loads and validates Wiki.js configuration.

    Resolution order:
        1. WIKIJS_URL and WIKIJS_API_TOKEN environment variables (a .env file
           in the working directory is loaded first). WIKIJS_DEFAULT_LOCALE
           and WIKIJS_DEFAULT_EDITOR are optional.
        2. The config file named by WIKIJS_CONFIG, or ~/.config/wikijs.json.
           The file may be JSON or YAML:

               {"url": "https://wiki.example.com", "apiToken": "...",
                "defaultLocale": "en", "defaultEditor": "markdown"}

    The API token is never logged.

    Example:
        >>> provider = ConfigProvider()
        >>> config = provider.get_config()
        >>> print(f"Connecting to {config.url}")
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the provider and load environment variables from .env.

        Args:
            config_path: Explicit config file path (overrides WIKIJS_CONFIG)
        """
        load_dotenv()
        self._config_path = config_path
        self._config: Optional[WikiConfig] = None

    @property
    def config_path(self) -> Path:
        """Path of the config file consulted when the environment is not set."""
        if self._config_path:
            return Path(self._config_path).expanduser()
        env_path = os.getenv('WIKIJS_CONFIG')
        if env_path:
            return Path(env_path).expanduser()
        return DEFAULT_CONFIG_PATH

    def get_config(self) -> WikiConfig:
        """Return the cached configuration, loading it on first use.

        Returns:
            WikiConfig with url, api_token and defaults

        Raises:
            ConfigNotFoundError: If no environment config and no file exist
            ConfigError: If the file is malformed or url/apiToken are missing
        """
        if self._config is None:
            self._config = self._load()
        return self._config

    def invalidate(self) -> None:
        """Drop the cached configuration so the next call reloads it."""
        self._config = None

    def _load(self) -> WikiConfig:
        url = os.getenv('WIKIJS_URL')
        api_token = os.getenv('WIKIJS_API_TOKEN')
        if url and api_token:
            logger.debug("Using Wiki.js configuration from environment")
            return self._build({
                'url': url,
                'apiToken': api_token,
                'defaultLocale': os.getenv('WIKIJS_DEFAULT_LOCALE'),
                'defaultEditor': os.getenv('WIKIJS_DEFAULT_EDITOR'),
            })

        return self._build(self._read_file(self.config_path))

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(str(path))
        except OSError as e:
            raise ConfigError(f"Failed to read config {path}: {e}")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config: {e}")

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config must be a mapping, got {type(data).__name__}"
            )

        logger.debug(f"Loaded Wiki.js configuration from {path}")
        return data

    @staticmethod
    def _build(data: Dict[str, Any]) -> WikiConfig:
        if not data.get('url'):
            raise ConfigError('Missing "url" in config')
        if not data.get('apiToken'):
            raise ConfigError('Missing "apiToken" in config')

        return WikiConfig(
            url=str(data['url']).rstrip('/'),
            api_token=str(data['apiToken']),
            default_locale=data.get('defaultLocale') or 'en',
            default_editor=data.get('defaultEditor') or 'markdown',
        )
