"""
Entry point that owns a classification cache.

``DeviceDetector`` holds the per-user-agent results for every classifier it
creates. Those results are released together with the detector. Compiled
rule sets and registries stay in the process-wide shared store.
"""

from typing import Optional, Union

from .cache import MemoryCache
from .config import Config, get_default_config_path, load_config
from .logging_config import get_logger, setup_logging
from .os_detection import OperatingSystem

logger = get_logger('detector')


class DeviceDetector:
    """Creates classifiers that share one owned result cache."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.cache = MemoryCache() if self.config.cache.enabled else None

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None,
                         configure_logging: bool = True) -> "DeviceDetector":
        """
        Build a detector from a YAML configuration file.

        Args:
            config_path: Path to the configuration file; the default
                locations are searched when omitted
            configure_logging: Apply the file's logging section

        Returns:
            DeviceDetector using the loaded configuration
        """
        config = load_config(config_path or get_default_config_path())
        if configure_logging:
            setup_logging(config.logging.level, config.logging.log_file, config.logging.verbose)
        return cls(config)

    def os(self, user_agent: Union[str, bytes, None]) -> OperatingSystem:
        return OperatingSystem(user_agent, cache=self.cache, config=self.config)

    def clear_cache(self):
        if self.cache is not None:
            self.cache.clear()
            logger.debug("Cleared classification cache")
