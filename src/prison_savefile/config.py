"""
Savefile Tool Configuration

Loads configuration from a YAML file or environment variables.
Settings control how the command-line tools write savefiles.
"""

import codecs
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from prison_savefile.tools.format import FormatOptions

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".prison_savefile" / "config.yaml",
]


DEFAULT_CONFIG = {
    "indent_width": 4,           # Spaces per nesting level when writing
    "encoding": "utf-8",         # Encoding used when writing
    "backup_on_write": False,    # Copy <file> to <file>.bak before overwriting
}


def _to_indent_width(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("expected an integer")
    width = int(value)
    if width < 0:
        raise ValueError("must not be negative")
    return width


def _to_encoding(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError("expected a codec name")
    codecs.lookup(value)
    return value


def _to_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError("expected true or false")
    return value


_CONVERTERS = {
    "indent_width": _to_indent_width,
    "encoding": _to_encoding,
    "backup_on_write": _to_bool,
}

# Environment variables and the keys they override
ENV_OVERRIDES = {
    "PRISON_SAVEFILE_INDENT": "indent_width",
    "PRISON_SAVEFILE_ENCODING": "encoding",
}


class SavefileConfig:
    """Configuration for the savefile tools."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS
        if explicit_path and not Path(explicit_path).exists():
            logger.warning("Config file %s not found, using defaults", explicit_path)

        for config_path in search_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                    self._config.update(self._validated(user_config, config_path))
                    self._config_path = config_path
                    logger.debug("Loaded config from %s", config_path)
                    return
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning("Failed to load config from %s: %s", config_path, e)

    def _validated(self, user_config: Dict[str, Any], source: Path) -> Dict[str, Any]:
        """Convert each known key, dropping bad values with a warning."""
        accepted: Dict[str, Any] = {}
        for key, value in user_config.items():
            if key not in DEFAULT_CONFIG:
                logger.warning("Ignoring unknown config key %r in %s", key, source)
                continue
            try:
                accepted[key] = _CONVERTERS[key](value)
            except (TypeError, ValueError, LookupError) as e:
                logger.warning("Ignoring %s=%r in %s: %s, using default %r",
                               key, value, source, e, DEFAULT_CONFIG[key])
        return accepted

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        for var, key in ENV_OVERRIDES.items():
            if var not in os.environ:
                continue
            try:
                self._config[key] = _CONVERTERS[key](os.environ[var])
            except (TypeError, ValueError, LookupError) as e:
                logger.warning("Ignoring %s=%r: %s", var, os.environ[var], e)

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def indent_width(self) -> int:
        return self._config["indent_width"]

    @property
    def encoding(self) -> str:
        return self._config["encoding"]

    @property
    def backup_on_write(self) -> bool:
        return self._config["backup_on_write"]

    def format_options(self) -> FormatOptions:
        """Build formatter options from this configuration."""
        return FormatOptions(indent=" " * self.indent_width, encoding=self.encoding)

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "indent_width": self.indent_width,
            "encoding": self.encoding,
            "backup_on_write": self.backup_on_write,
            "config_file": str(self.config_path) if self.config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[SavefileConfig] = None


def get_config(config_path: Optional[Path] = None) -> SavefileConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = SavefileConfig(config_path)
    return _config
