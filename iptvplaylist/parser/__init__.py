"""
iptvplaylist.parser - Playlist parsing module

Pure parsing logic without HTTP or caching responsibilities.
"""

from .playlist import PlaylistParser, parse
from . import rules

__all__ = [
    "PlaylistParser",  # Extended M3U state machine
    "parse",           # Convenience wrapper
    "rules",           # Line grammar matchers
]
