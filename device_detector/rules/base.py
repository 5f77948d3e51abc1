"""
Abstract base classes for rule matching.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import RuleMatch


class RuleMatcher(ABC):
    """Abstract base class for first-match rule matchers."""

    @abstractmethod
    def match(self, user_agent: str) -> Optional[RuleMatch]:
        """
        Find the first rule matching a user agent.

        Args:
            user_agent: Raw user agent string

        Returns:
            RuleMatch for the first matching rule, or None if no rule matches
        """
        pass
