"""
iptvplaylist.links - Playback link selection

HLS playlists are played as-is; anything else is treated as DASH protected
with clear-key material, which is converted from hexadecimal to unpadded
base64 before being handed to the player.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .exceptions import KeyDecodeError
from .models import LoadData

CLEARKEY_UUID = "e2719d58-a985-b3c9-781a-b030af78d30e"
QUALITY_UNKNOWN = 400


class LinkType(Enum):
    M3U8 = "m3u8"
    DASH = "dash"


@dataclass(frozen=True)
class StreamLink:
    """A link the player can open"""
    source: str
    name: str
    url: str
    type: LinkType
    quality: int = QUALITY_UNKNOWN
    headers: Dict[str, str] = field(default_factory=dict)
    drm_scheme: Optional[str] = None
    key: Optional[str] = None
    kid: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "source": self.source,
            "name": self.name,
            "url": self.url,
            "type": self.type.value,
            "quality": self.quality,
            "headers": dict(self.headers),
            "drm_scheme": self.drm_scheme,
            "key": self.key,
            "kid": self.kid,
        }


def decode_hex(hex_string: str) -> str:
    """
    Convert hex key material to the base64 form expected by the player

    "ab" -> b"\\xab" -> "qw" (standard alphabet, padding removed).

    Raises:
        KeyDecodeError: Odd length or non-hexadecimal input
    """
    if len(hex_string) % 2:
        raise KeyDecodeError(f"Odd-length key material: {hex_string!r}")
    try:
        raw = binascii.unhexlify(hex_string)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"Invalid hex key material: {hex_string!r}") from e
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def build_links(data: Union[str, LoadData], provider_name: str) -> List[StreamLink]:
    """
    Build the playback links for a catalog payload

    Args:
        data: LoadData or its JSON form
        provider_name: Prefix for link source and name

    Returns:
        List[StreamLink]: One link, or none when key material is unusable
    """
    payload = LoadData.from_json(data) if isinstance(data, str) else data
    headers = {k: v for k, v in payload.headers.items() if v and v.strip()}

    if ".m3u8" in payload.url.lower():
        label = f"{provider_name} HLS"
        return [
            StreamLink(
                source=label,
                name=label,
                url=payload.url,
                type=LinkType.M3U8,
                headers=headers,
            )
        ]

    try:
        key = decode_hex(payload.key)
        kid = decode_hex(payload.keyid)
    except KeyDecodeError as e:
        logging.warning("Skipping %s: %s", payload.title or payload.url, str(e))
        return []

    label = f"{provider_name} DASH"
    return [
        StreamLink(
            source=label,
            name=label,
            url=payload.url,
            type=LinkType.DASH,
            headers=headers,
            drm_scheme=CLEARKEY_UUID,
            key=key,
            kid=kid,
        )
    ]
