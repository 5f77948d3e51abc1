"""
Base class for rule-driven user agent classifiers.

A parser is bound to one user agent. It finds the first matching rule once
and exposes the templated name and raw version fragment. Results are
memoized in the parser's cache under keys namespaced by the parser's
``kind`` and by the matcher that produced them, so parsers with different
rule sets can share one cache safely.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from .cache import MemoryCache, get_shared_cache
from .config import Config
from .logging_config import get_logger
from .models import RuleMatch
from .rules import NameExtractor, RuleMatcher, RegexRuleMatcher, VersionExtractor, bundled_rule_file

logger = get_logger('parser')


class Parser(ABC):
    """Shared extraction and caching for classifiers of one kind."""

    kind = "generic"

    def __init__(self, user_agent: Union[str, bytes, None],
                 matcher: Optional[RuleMatcher] = None,
                 cache: Optional[MemoryCache] = None,
                 config: Optional[Config] = None):
        self.user_agent = self._coerce_user_agent(user_agent)
        self.config = config or Config()
        if cache is None and self.config.cache.enabled:
            cache = MemoryCache()
        # None disables per-user-agent memoization
        self.cache = cache
        self.matcher = matcher if matcher is not None else self._default_matcher()

    @abstractmethod
    def filenames(self) -> List[str]:
        """Bundled rule files for this kind of parser."""
        pass

    def rule_files(self) -> List[str]:
        return [bundled_rule_file(name) for name in self.filenames()]

    def from_cache(self, key: tuple, compute):
        if self.cache is None:
            return compute()
        return self.cache.fetch(key, compute)

    def rule_match(self) -> Optional[RuleMatch]:
        """First matching rule for this user agent, computed once per cache."""
        return self.from_cache(("rule_match", self.kind, self.matcher, self.user_agent),
                               lambda: self.matcher.match(self.user_agent))

    def extracted_name(self) -> Optional[str]:
        return NameExtractor(self.user_agent, self.rule_match()).call()

    def full_version(self) -> Optional[str]:
        return VersionExtractor(self.user_agent, self.rule_match()).call()

    def _default_matcher(self) -> RuleMatcher:
        files = tuple(self.rule_files())
        # Compiled once per process for each distinct list of files
        return get_shared_cache().fetch(("regexes", self.kind, files),
                                        lambda: RegexRuleMatcher.from_files(files))

    @staticmethod
    def _coerce_user_agent(user_agent: Union[str, bytes, None]) -> str:
        if user_agent is None:
            return ""
        if isinstance(user_agent, (bytes, bytearray)):
            return bytes(user_agent).decode("utf-8", errors="replace")
        return str(user_agent)
