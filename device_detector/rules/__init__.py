"""
Rules Module

Contains rule file loading, first-match rule matching and template extraction.
"""

from .base import RuleMatcher
from .extractors import NameExtractor, VersionExtractor
from .loader import RuleSetLoader, bundled_rule_file, load_rules
from .matcher import RegexRuleMatcher

__all__ = [
    'RuleMatcher',
    'RegexRuleMatcher',
    'RuleSetLoader',
    'NameExtractor',
    'VersionExtractor',
    'bundled_rule_file',
    'load_rules',
]
