"""
Configuration management for Device Detector.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger('config')


@dataclass
class RulesConfig:
    """Configuration for rule definition files."""
    os_files: List[str] = field(default_factory=list)  # Empty means the bundled oss.yml


@dataclass
class CacheConfig:
    """Configuration for the classification cache."""
    enabled: bool = True


@dataclass
class PlatformConfig:
    """Platform-class settings."""
    # None keeps the registry's built-in desktop family set
    desktop_families: Optional[List[str]] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: Optional[str] = None
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    rules: RulesConfig = field(default_factory=RulesConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    platform: PlatformConfig = field(default_factory=PlatformConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Config object with loaded settings

    Raises:
        ConfigurationError: If configuration file is invalid
    """
    config = Config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration file: {e}")

        if config_data:
            if not isinstance(config_data, dict):
                raise ConfigurationError("Configuration file must contain a mapping")
            _update_config_from_dict(config, config_data)
            logger.info(f"Loaded configuration from {config_path}")

    elif config_path:
        logger.warning(f"Configuration file not found: {config_path}")

    return config


def _update_config_from_dict(config: Config, config_data: Dict) -> None:
    """
    Update configuration object from dictionary data.

    Args:
        config: Config object to update
        config_data: Dictionary with configuration data
    """
    if 'rules' in config_data:
        rules_data = config_data['rules'] or {}
        if 'os_files' in rules_data:
            os_files = rules_data['os_files'] or []
            if not isinstance(os_files, list):
                raise ConfigurationError("'rules.os_files' must be a list of paths")
            config.rules.os_files = [str(path) for path in os_files]

    if 'cache' in config_data:
        cache_data = config_data['cache'] or {}
        if 'enabled' in cache_data:
            config.cache.enabled = bool(cache_data['enabled'])

    if 'platform' in config_data:
        platform_data = config_data['platform'] or {}
        if 'desktop_families' in platform_data:
            families = platform_data['desktop_families']
            if families is not None and not isinstance(families, list):
                raise ConfigurationError("'platform.desktop_families' must be a list of family names")
            config.platform.desktop_families = families

    if 'logging' in config_data:
        logging_data = config_data['logging'] or {}
        if 'level' in logging_data:
            config.logging.level = logging_data['level']
        if 'log_file' in logging_data:
            config.logging.log_file = logging_data['log_file']
        if 'verbose' in logging_data:
            config.logging.verbose = logging_data['verbose']


def get_default_config_path() -> Optional[str]:
    """
    Get the default configuration file path.

    Returns:
        Path to default config file if it exists, None otherwise
    """
    possible_paths = [
        'device_detector.yaml',
        'device_detector.yml',
        os.path.expanduser('~/.device_detector.yaml'),
        os.path.expanduser('~/.device_detector.yml'),
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    return None
