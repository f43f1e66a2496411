"""
Extended M3U playlist parser for iptvplaylist

Single forward pass over the playlist lines. Directive lines (#KODIPROP,
#EXTINF, #EXTVLCOPT) accumulate into a pending entry which is flushed on the
next URL line. Contains only parsing logic, no HTTP or caching code.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from ..exceptions import InvalidHeaderError
from ..models import Playlist, PlaylistItem
from . import rules


@dataclass
class _PendingEntry:
    """Metadata collected since the last URL line"""
    title: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    key: Optional[str] = None
    keyid: Optional[str] = None


class PlaylistParser:
    """Parses Extended M3U text into a Playlist"""

    def parse(self, source: Union[str, bytes, io.IOBase]) -> Playlist:
        """
        Parse a playlist

        Args:
            source: Playlist text, UTF-8 bytes, or a readable text/byte stream

        Returns:
            Playlist: Entries in document order

        Raises:
            InvalidHeaderError: First line does not start with #EXTM3U
        """
        lines = self._iter_lines(source)

        if not rules.is_extended_m3u(next(lines, None)):
            raise InvalidHeaderError()

        items: List[PlaylistItem] = []
        pending = _PendingEntry()
        dropped = 0

        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                continue

            if rules.starts_with(line, rules.KODI_LICENSE_KEY):
                license_key = rules.parse_license_key(line)
                if license_key:
                    pending.keyid, pending.key = license_key

            elif rules.starts_with(line, rules.EXT_INF):
                if pending.title is not None:
                    dropped += 1
                    logging.debug("No URL for entry %s, skipping", pending.title)
                pending.title = rules.parse_title(line)
                pending.attributes = rules.parse_attributes(line)
                pending.user_agent = None
                pending.referrer = None
                pending.headers = {}

            elif rules.starts_with(line, rules.EXT_VLC_OPT):
                option = rules.parse_vlc_option(line)
                if option:
                    header, value = option
                    pending.headers = {**pending.headers, header: value}
                    if header == "User-Agent":
                        pending.user_agent = value
                    elif header == "Referer":
                        pending.referrer = value

            elif not line.startswith("#"):
                item = self._flush(line, pending)
                if item:
                    items.append(item)
                pending = _PendingEntry()

        if pending.title is not None:
            dropped += 1

        logging.debug("Parsed %d playlist entries (%d without URL)", len(items), dropped)
        return Playlist(tuple(items))

    def _flush(self, line: str, pending: _PendingEntry) -> Optional[PlaylistItem]:
        """Build an item from a URL line and the pending metadata"""
        url, params = rules.split_url_line(line)
        inline = rules.parse_url_parameters(params)

        headers = dict(pending.headers)
        for name, value in inline:
            headers[rules.normalize_header_key(name)] = value

        user_agent = self._inline_header(inline, "User-Agent")
        if user_agent is None:
            user_agent = pending.user_agent
        if user_agent and user_agent.strip():
            headers["User-Agent"] = user_agent

        if pending.referrer is not None and "Referer" not in headers:
            headers["Referer"] = pending.referrer

        key = rules.find_parameter(inline, "key")
        if key is None:
            key = pending.key
        keyid = rules.find_parameter(inline, "keyid")
        if keyid is None:
            keyid = pending.keyid

        if pending.title is None or not url:
            return None

        attributes = dict(pending.attributes)
        if key:
            attributes["key"] = key
        if keyid:
            attributes["keyid"] = keyid

        return PlaylistItem(
            title=pending.title,
            attributes=attributes,
            headers={k: v for k, v in headers.items() if v and v.strip()},
            url=url,
            user_agent=user_agent,
            key=key,
            keyid=keyid,
        )

    @staticmethod
    def _inline_header(inline, header: str) -> Optional[str]:
        """Last inline parameter value that normalizes to the given header"""
        value = None
        for name, param_value in inline:
            if rules.normalize_header_key(name) == header:
                value = param_value
        return value

    @staticmethod
    def _iter_lines(source) -> Iterator[str]:
        """Yield lines of the source, decoding bytes as UTF-8"""
        if hasattr(source, "read"):
            source = source.read()
        if isinstance(source, (bytes, bytearray)):
            source = bytes(source).decode("utf-8", errors="replace")
        return iter(io.StringIO(source, newline=None))


def parse(source: Union[str, bytes, io.IOBase]) -> Playlist:
    """Parse a playlist with a fresh parser"""
    return PlaylistParser().parse(source)
