"""
Ordered regex rule matching.
"""

from typing import Iterable, List, Optional

from ..logging_config import get_logger
from ..models import Rule, RuleMatch
from .base import RuleMatcher
from .loader import load_rules

logger = get_logger('rules.matcher')


class RegexRuleMatcher(RuleMatcher):
    """Runs rules in their fixed order and returns the first hit."""

    def __init__(self, rules: Iterable[Rule]):
        self.rules: List[Rule] = list(rules)

    @classmethod
    def from_files(cls, file_paths: Iterable[str]) -> "RegexRuleMatcher":
        return cls(load_rules(list(file_paths)))

    def match(self, user_agent: str) -> Optional[RuleMatch]:
        if not user_agent:
            return None

        for rule in self.rules:
            found = rule.regex.search(user_agent)
            if found:
                groups = (found.group(0),) + tuple(g or "" for g in found.groups())
                return RuleMatch(rule=rule, groups=groups)

        return None

    def __len__(self) -> int:
        return len(self.rules)
