"""
OS Detection module for identifying operating systems from user agents.
"""

from .classifier import OperatingSystem
from .registry import OSRegistry, build_os_registry, canonicalize, family_of, get_os_registry
from .version import normalize_version

__all__ = [
    'OperatingSystem',
    'OSRegistry',
    'build_os_registry',
    'canonicalize',
    'family_of',
    'get_os_registry',
    'normalize_version',
]
