"""
iptvplaylist.parser.rules - Line grammar for Extended M3U playlists

Small, independent matchers used by the playlist parser. Each one accepts a
single trimmed line (or a fragment of one) and never raises on malformed
input: anything it cannot understand is simply not returned.
"""

import re
import urllib.parse
from typing import Dict, List, Optional, Tuple

EXT_M3U = "#EXTM3U"
EXT_INF = "#EXTINF"
EXT_VLC_OPT = "#EXTVLCOPT"
KODI_LICENSE_KEY = "#KODIPROP:inputstream.adaptive.license_key="

# Leading "#EXTINF:-1" duration token
DURATION_PATTERN = re.compile(r"#EXTINF:\s*[-+]?[0-9]+", re.IGNORECASE)

# name="double quoted" | name='single quoted' | name=bare
ATTRIBUTE_PATTERN = re.compile(r"""(\S+)=("([^"]*)"|'([^']*)'|(\S+))""")

HEADER_ALIASES = {
    "http-user-agent": "User-Agent",
    "user-agent": "User-Agent",
    "http-referrer": "Referer",
    "http-referer": "Referer",
    "referer": "Referer",
    "referrer": "Referer",
    "http-origin": "Origin",
    "origin": "Origin",
    "http-cookie": "Cookie",
    "cookie": "Cookie",
}


def starts_with(line: str, prefix: str) -> bool:
    """Case-insensitive prefix test"""
    return line[: len(prefix)].lower() == prefix.lower()


def strip_quotes(value: str) -> str:
    """Drop every double quote, then surrounding whitespace"""
    return value.replace('"', "").strip()


def is_extended_m3u(line: Optional[str]) -> bool:
    return line is not None and starts_with(line, EXT_M3U)


def normalize_header_key(key: str) -> str:
    """Map known header spellings to their canonical form, pass others through"""
    return HEADER_ALIASES.get(key.lower(), key)


def parse_title(line: str) -> Optional[str]:
    """Display name: everything after the last comma"""
    return strip_quotes(line.split(",")[-1])


def parse_attributes(line: str) -> Dict[str, str]:
    """
    Extract name=value attributes from an #EXTINF line

    The duration token and everything from the first comma onwards are
    ignored. Values may be double-quoted, single-quoted or bare; a repeated
    name keeps its last value.
    """
    attributes_string = DURATION_PATTERN.sub("", line).strip().split(",", 1)[0]

    attributes = {}
    for match in ATTRIBUTE_PATTERN.finditer(attributes_string):
        if match.group(3) is not None:
            value = match.group(3)
        elif match.group(4) is not None:
            value = match.group(4)
        else:
            value = match.group(5) or ""
        attributes[match.group(1)] = value
    return attributes


def parse_license_key(line: str) -> Optional[Tuple[str, str]]:
    """Return (keyid, key) from a KODIPROP license_key line, or None"""
    license_value = line.split("=", 1)[1] if "=" in line else ""
    parts = license_value.split(":")
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def parse_vlc_option(line: str) -> Optional[Tuple[str, str]]:
    """
    Return (normalized header, value) from an #EXTVLCOPT line

    Only http-* options are honored; other options and lines without a
    name=value pair give None.
    """
    option = line
    if starts_with(option, EXT_VLC_OPT + ":"):
        option = option[len(EXT_VLC_OPT) + 1:]

    name, sep, value = option.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    if not starts_with(name, "http-"):
        return None

    return normalize_header_key(name), strip_quotes(value.strip())


def split_url_line(line: str) -> Tuple[str, Optional[str]]:
    """Split "url|params" on the first pipe into (url, params or None)"""
    url, sep, params = line.partition("|")
    return strip_quotes(url), (params if sep else None)


def decode_parameter_value(raw: str) -> str:
    """Form-decode (percent escapes, "+" as space), falling back to the raw text when decoding fails"""
    try:
        return urllib.parse.unquote_plus(raw, errors="strict")
    except UnicodeDecodeError:
        return raw


def parse_url_parameters(params: Optional[str]) -> List[Tuple[str, str]]:
    """
    Parse an inline "name=value&name=value" parameter string

    Returns (raw name, value) pairs in order; values are percent-decoded,
    unquoted and trimmed. Tokens without a name are skipped.
    """
    if params is None:
        return []

    params = strip_quotes(params)
    if not params:
        return []

    pairs = []
    for token in params.split("&"):
        name, sep, value = token.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        pairs.append((name, strip_quotes(decode_parameter_value(value.strip()))))
    return pairs


def find_parameter(pairs: List[Tuple[str, str]], name: str) -> Optional[str]:
    """First value of a parameter, matched case-insensitively by name"""
    for param_name, value in pairs:
        if param_name.lower() == name.lower():
            return value
    return None
