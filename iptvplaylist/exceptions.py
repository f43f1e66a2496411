"""
iptvplaylist.exceptions - Error types

The parser has a single structured failure (invalid header); key decoding
failures are raised by the playback link builder.
"""


class PlaylistParserError(Exception):
    """Base class for playlist errors"""


class InvalidHeaderError(PlaylistParserError):
    """Document does not begin with #EXTM3U"""

    def __init__(self, message: str = "Invalid file header. Header doesn't start with #EXTM3U"):
        super().__init__(message)


class KeyDecodeError(PlaylistParserError, ValueError):
    """Clear-key material is not valid even-length hexadecimal"""
