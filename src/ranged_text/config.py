"""
Configuration management for ranged-text.

Handles loading and managing configuration from files and environment
variables, and building the tag registry the converters use.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .core.tag_registry import DEFAULT_REGISTRY, TagRegistry

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RangedTextConfig:
    """Main configuration for ranged-text."""

    # BeautifulSoup parser used to read HTML input
    parser: str = "html.parser"

    # Indentation for JSON output (None for compact)
    json_indent: Optional[int] = 2

    log_level: str = "WARNING"

    # Registry extensions
    aliases: Dict[str, str] = field(default_factory=dict)
    opaque_tags: List[str] = field(default_factory=list)

    def build_registry(self) -> TagRegistry:
        """Return the default registry extended with the configured tables."""
        registry = DEFAULT_REGISTRY
        if self.aliases:
            registry = registry.with_aliases(self.aliases)
        if self.opaque_tags:
            registry = registry.with_opaque_tags(self.opaque_tags)
        return registry


class ConfigManager:
    """Manages ranged-text configuration from multiple sources."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / '.ranged-text'
        self.config_file = self.config_dir / 'config.yaml'
        self._config: Optional[RangedTextConfig] = None

    def load_config(self) -> RangedTextConfig:
        """Load configuration from all sources."""
        if self._config:
            return self._config

        # Start with defaults
        config = RangedTextConfig()

        # Load from file if it exists
        if self.config_file.exists():
            file_config = self._load_from_file()
            config = self._merge_configs(config, file_config)

        # Override with environment variables
        env_config = self._load_from_env()
        config = self._merge_configs(config, env_config)

        self._config = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file}: expected a mapping")
            return {}
        return data

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        parser = os.getenv('RANGED_TEXT_PARSER')
        if parser:
            env_config['parser'] = parser

        indent = os.getenv('RANGED_TEXT_INDENT')
        if indent:
            try:
                env_config['json_indent'] = int(indent)
            except ValueError:
                logger.warning(f"Ignoring RANGED_TEXT_INDENT={indent!r}: not an integer")

        log_level = os.getenv('RANGED_TEXT_LOG_LEVEL')
        if log_level:
            env_config['log_level'] = log_level

        return env_config

    def _merge_configs(self, base: RangedTextConfig, override: Dict[str, Any]) -> RangedTextConfig:
        """Merge a configuration dictionary into ``base``."""
        if 'parser' in override:
            base.parser = str(override['parser'])

        if 'json_indent' in override:
            indent = override['json_indent']
            try:
                base.json_indent = None if indent is None else int(indent)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring json_indent={indent!r}: not an integer")

        if 'log_level' in override:
            level = str(override['log_level']).upper()
            if level in LOG_LEVELS:
                base.log_level = level
            else:
                logger.warning(f"Ignoring unknown log level {override['log_level']!r}")

        if 'aliases' in override and isinstance(override['aliases'], dict):
            base.aliases.update({str(k): str(v) for k, v in override['aliases'].items()})

        if 'opaque_tags' in override and isinstance(override['opaque_tags'], list):
            for tag in override['opaque_tags']:
                if tag not in base.opaque_tags:
                    base.opaque_tags.append(str(tag))

        return base

    def save_config(self, config: RangedTextConfig) -> None:
        """Save configuration to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        config_dict = {
            'parser': config.parser,
            'json_indent': config.json_indent,
            'log_level': config.log_level,
            'aliases': dict(config.aliases),
            'opaque_tags': list(config.opaque_tags),
        }

        with open(self.config_file, 'w') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
        self._config = config

    def create_default_config(self) -> Path:
        """Create a default configuration file and return its path."""
        self.save_config(RangedTextConfig())
        logger.info(f"Created default configuration at {self.config_file}")
        return self.config_file

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about current configuration."""
        config = self.load_config()

        return {
            'config_file': str(self.config_file),
            'config_exists': self.config_file.exists(),
            'parser': config.parser,
            'json_indent': config.json_indent,
            'log_level': config.log_level,
            'aliases': dict(config.aliases),
            'opaque_tags': list(config.opaque_tags),
        }


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config() -> RangedTextConfig:
    """Load the current configuration."""
    return get_config_manager().load_config()
