"""
Core data models for Device Detector.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Rule:
    """A single extraction rule from a rule definition file."""
    regex: re.Pattern
    name: str
    version: Optional[str] = None
    source: Optional[str] = None  # file the rule was loaded from


@dataclass(frozen=True)
class RuleMatch:
    """The first rule that matched a user agent and its captured groups."""
    rule: Rule
    groups: Tuple[str, ...]  # groups[0] is the whole match; unmatched groups are ""

    def group(self, index: int) -> str:
        """Return capture group ``index``, or "" when it does not exist."""
        if 0 <= index < len(self.groups):
            return self.groups[index]
        return ""


@dataclass(frozen=True)
class OSIdentity:
    """Canonical operating system identity from the static registry."""
    short_code: str
    name: str


@dataclass(frozen=True)
class OSInfo:
    """Classified operating system for one user agent."""
    name: Optional[str]
    short_code: str
    family: Optional[str]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "name": self.name,
            "short_name": self.short_code,
            "family": self.family,
        }
