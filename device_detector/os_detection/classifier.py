"""
Operating system classification for a single user agent.
"""

from typing import List, Optional, Union

from ..cache import MemoryCache, get_shared_cache
from ..config import Config
from ..logging_config import get_logger
from ..models import OSInfo
from ..parser import Parser
from ..rules import RuleMatcher
from .registry import OSRegistry, UNKNOWN_SHORT_CODE, build_os_registry, get_os_registry
from .version import normalize_version

logger = get_logger('os_detection.classifier')


class OperatingSystem(Parser):
    """Classifies the operating system of one user agent.

    Every accessor derives from a single ``OSInfo`` record that is computed
    on first use and memoized per matcher, registry and user agent.
    """

    kind = "os"

    def __init__(self, user_agent: Union[str, bytes, None],
                 matcher: Optional[RuleMatcher] = None,
                 cache: Optional[MemoryCache] = None,
                 config: Optional[Config] = None,
                 registry: Optional[OSRegistry] = None):
        super().__init__(user_agent, matcher=matcher, cache=cache, config=config)
        self.registry = registry if registry is not None else self._default_registry()

    def name(self) -> Optional[str]:
        return self.os_info().name

    def short_name(self) -> str:
        return self.os_info().short_code

    def family(self) -> Optional[str]:
        return self.os_info().family

    def is_desktop(self) -> bool:
        return self.registry.is_desktop_family(self.family())

    def full_version(self) -> Optional[str]:
        return normalize_version(super().full_version())

    def os_info(self) -> OSInfo:
        return self.from_cache(("os_info", self.kind, self.matcher, self.registry, self.user_agent),
                               self._classify)

    def filenames(self) -> List[str]:
        return ['oss.yml']

    def rule_files(self) -> List[str]:
        return list(self.config.rules.os_files) or super().rule_files()

    def _classify(self) -> OSInfo:
        identity = self.registry.canonicalize(self.extracted_name())
        if identity.short_code == UNKNOWN_SHORT_CODE:
            logger.debug(f"No known operating system for user agent {self.user_agent!r}")
        return OSInfo(
            name=identity.name,
            short_code=identity.short_code,
            family=self.registry.family_of(identity.short_code),
        )

    def _default_registry(self) -> OSRegistry:
        desktop_families = self.config.platform.desktop_families
        if desktop_families is None:
            return get_os_registry()
        return get_shared_cache().fetch(("registry", self.kind, tuple(desktop_families)),
                                        lambda: build_os_registry(desktop_families=desktop_families))
