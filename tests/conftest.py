from typing import Optional

import pytest

from device_detector.cache import MemoryCache
from device_detector.models import RuleMatch
from device_detector.rules import RegexRuleMatcher, RuleMatcher, bundled_rule_file, load_rules


class CountingMatcher(RuleMatcher):
    """Wraps a real matcher and counts how often it is asked to match."""

    def __init__(self, inner: RuleMatcher):
        self.inner = inner
        self.calls = 0

    def match(self, user_agent: str) -> Optional[RuleMatch]:
        self.calls += 1
        return self.inner.match(user_agent)


@pytest.fixture(scope="session")
def os_rules():
    return load_rules([bundled_rule_file("oss.yml")])


@pytest.fixture
def os_matcher(os_rules):
    return RegexRuleMatcher(os_rules)


@pytest.fixture
def counting_matcher(os_matcher):
    return CountingMatcher(os_matcher)


@pytest.fixture
def cache():
    return MemoryCache()
