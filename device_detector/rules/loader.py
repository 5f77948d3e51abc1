"""
Rule set loader for YAML rule definition files.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..exceptions import RuleSetError
from ..logging_config import get_logger
from ..models import Rule

logger = get_logger('rules.loader')

# Patterns only match at a token boundary of the user agent
RULE_PREFIX = r'(?:^|[^A-Z0-9\-_]|[^A-Z0-9\-]_|sprd-)(?:'
RULE_SUFFIX = r')'

BUNDLED_RULES_DIR = Path(__file__).resolve().parent.parent / "regexes"


def build_regex(source: str) -> re.Pattern:
    """Compile a rule pattern with the token-boundary prefix, case-insensitively."""
    return re.compile(RULE_PREFIX + source + RULE_SUFFIX, re.IGNORECASE)


def bundled_rule_file(filename: str) -> str:
    """Path of a rule file shipped with the package."""
    return str(BUNDLED_RULES_DIR / filename)


class RuleSetLoader:
    """Loads ordered extraction rules from one or more YAML files."""

    def __init__(self):
        self.rules: List[Rule] = []
        self._loaded_files: List[str] = []

    def load_from_file(self, file_path: str) -> List[Rule]:
        """
        Load rules from a YAML file, appending them after any loaded earlier.

        Args:
            file_path: Path to a rule definition file

        Returns:
            The rules read from this file, in file order

        Raises:
            RuleSetError: If the file is missing, unparsable, or has a bad entry
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Rule file not found: {file_path}")
            raise RuleSetError("file not found", file_path=file_path)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in rule file {file_path}: {e}")
            raise RuleSetError(f"invalid YAML: {e}", file_path=file_path)

        if not isinstance(data, list):
            raise RuleSetError("rule file must contain a list of rules", file_path=file_path)

        rules = [self._build_rule(entry, file_path, i) for i, entry in enumerate(data)]
        self.rules.extend(rules)
        self._loaded_files.append(file_path)

        logger.info(f"Loaded {len(rules)} rules from {file_path}")
        return rules

    def load_from_files(self, file_paths: Sequence[str]) -> List[Rule]:
        """
        Load rules from several files, preserving file order then entry order.

        Args:
            file_paths: Paths to rule definition files

        Returns:
            All rules loaded so far
        """
        for file_path in file_paths:
            self.load_from_file(file_path)
        return list(self.rules)

    def _build_rule(self, entry: Any, file_path: str, index: int) -> Rule:
        """Validate one YAML entry and compile its pattern."""
        if not isinstance(entry, dict):
            raise RuleSetError("rule must be a mapping", file_path=file_path, entry_index=index)

        self._validate_entry(entry, file_path, index)

        try:
            regex = build_regex(str(entry['regex']))
        except re.error as e:
            raise RuleSetError(f"invalid regex {entry['regex']!r}: {e}",
                               file_path=file_path, entry_index=index)

        version = entry.get('version')
        return Rule(
            regex=regex,
            name=str(entry['name']),
            version=None if version is None else str(version),
            source=file_path,
        )

    @staticmethod
    def _validate_entry(entry: Dict[str, Any], file_path: str, index: int) -> None:
        for key in ('regex', 'name'):
            if key not in entry or entry[key] is None:
                raise RuleSetError(f"missing '{key}' field", file_path=file_path, entry_index=index)
        if not str(entry['regex']):
            raise RuleSetError("empty 'regex' field", file_path=file_path, entry_index=index)


def load_rules(file_paths: Sequence[str]) -> List[Rule]:
    """Load and compile rules from ``file_paths`` in order."""
    return RuleSetLoader().load_from_files(file_paths)
