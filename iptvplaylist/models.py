"""
iptvplaylist.models - Value records

Immutable records produced by the parser and the payload exchanged between
the catalog and the playback link builder.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, Optional, Tuple


@dataclass(frozen=True)
class PlaylistItem:
    """One playable channel entry"""
    title: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    url: Optional[str] = None
    user_agent: Optional[str] = None
    key: Optional[str] = None
    keyid: Optional[str] = None

    @property
    def logo(self) -> str:
        return self.attributes.get("tvg-logo", "")

    @property
    def group(self) -> Optional[str]:
        return self.attributes.get("group-title")

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class Playlist:
    """Ordered channel entries, in document order"""
    items: Tuple[PlaylistItem, ...] = ()

    def __iter__(self) -> Iterator[PlaylistItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def to_list(self):
        return [item.to_dict() for item in self.items]


@dataclass(frozen=True)
class LoadData:
    """
    Opaque payload handed from a catalog entry to the playback link builder

    Serialized as a JSON object with the keys url, title, poster, nation,
    key, keyid and headers.
    """
    url: str
    title: str
    poster: str
    nation: str
    key: str
    keyid: str
    headers: Dict[str, str] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str) -> "LoadData":
        """Rebuild a payload, ignoring unknown keys and tolerating missing ones"""
        raw = json.loads(data)
        headers = raw.get("headers") or {}
        return cls(
            url=raw.get("url", ""),
            title=raw.get("title", ""),
            poster=raw.get("poster", ""),
            nation=raw.get("nation", ""),
            key=raw.get("key", ""),
            keyid=raw.get("keyid", ""),
            headers={str(k): str(v) for k, v in headers.items() if v is not None},
        )
