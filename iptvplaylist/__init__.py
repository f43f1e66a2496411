"""
iptvplaylist - Extended M3U playlist parser

Parses live TV playlists into channel entries, keeping per-channel HTTP
headers and clear-key material from #EXTVLCOPT, #KODIPROP and inline URL
parameters, and turns them into catalog entries and playback links.
"""

__version__ = "1.0.0"
__author__ = "th0ma7"
__license__ = "GPL-3.0"

from .exceptions import InvalidHeaderError, KeyDecodeError, PlaylistParserError
from .models import LoadData, Playlist, PlaylistItem
from .parser import PlaylistParser, parse
from .downloader import PlaylistDownloader
from .provider import PlaylistProvider
from .config import ConfigManager
from .links import StreamLink, build_links, decode_hex

__all__ = [
    "InvalidHeaderError",
    "KeyDecodeError",
    "PlaylistParserError",
    "LoadData",
    "Playlist",
    "PlaylistItem",
    "PlaylistParser",
    "parse",
    "PlaylistDownloader",
    "PlaylistProvider",
    "ConfigManager",
    "StreamLink",
    "build_links",
    "decode_hex",
]
