"""
sunmoon/version.py
==================
Version of SunMoon-Core. ``pyproject.toml`` reads ``__version__`` from here.
"""

from typing import NamedTuple

__version__ = "0.2.0"


class VersionInfo(NamedTuple):
    major: int
    minor: int
    patch: int


VERSION_INFO = VersionInfo(*(int(part) for part in __version__.split(".")))
