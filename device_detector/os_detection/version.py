"""
OS version fragment normalization.
"""

from typing import Optional

VERSION_SEPARATOR = '_'


def normalize_version(raw_fragment: Optional[str]) -> Optional[str]:
    """
    Rewrite a raw version fragment into dotted form.

    ``"10_15_7"`` becomes ``"10.15.7"``. A missing, empty or whitespace-only
    fragment returns None, meaning no version was reported.
    """
    if raw_fragment is None:
        return None
    version = raw_fragment.strip().replace(VERSION_SEPARATOR, '.')
    return version or None
