"""
Device Detector

Classifies user agent strings into canonical operating system identities
using ordered regex rules, a static registry and per-input memoization.
"""

__version__ = "0.1.0"

from .os_detection import OperatingSystem
from .detector import DeviceDetector


def get_version():
    """Get the current version of Device Detector."""
    return __version__


__all__ = ['DeviceDetector', 'OperatingSystem', 'get_version']
