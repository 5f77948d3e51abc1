"""
Name and version extraction from a matched rule's templates.

Templates reference capture groups as ``$1`` .. ``$9``. A reference to a
group that did not participate in the match, or that does not exist,
substitutes an empty string.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional

from ..models import RuleMatch

GROUP_REFERENCE = re.compile(r'\$(\d)')


def substitute(template: str, match: RuleMatch) -> str:
    """Fill ``$N`` references in ``template`` from ``match`` and strip the result."""
    return GROUP_REFERENCE.sub(lambda ref: match.group(int(ref.group(1))), template).strip()


class MetadataExtractor(ABC):
    """Base class for pulling one templated field out of a rule match."""

    def __init__(self, user_agent: str, match: Optional[RuleMatch]):
        self.user_agent = user_agent
        self.match = match

    def call(self) -> Optional[str]:
        if self.match is None:
            return None
        return substitute(self.metadata_string(), self.match)

    @abstractmethod
    def metadata_string(self) -> str:
        pass


class NameExtractor(MetadataExtractor):
    """Extracts the display name; literal names are returned as written."""

    def call(self) -> Optional[str]:
        if self.match is None:
            return None
        template = self.metadata_string()
        if GROUP_REFERENCE.search(template):
            return substitute(template, self.match)
        return template

    def metadata_string(self) -> str:
        return self.match.rule.name


class VersionExtractor(MetadataExtractor):
    """Extracts the raw version fragment; rules without a version give ""."""

    def metadata_string(self) -> str:
        return self.match.rule.version or ""
