"""
iptvplaylist.catalog - Browsable and searchable channel entries

Turns parsed playlist items into catalog entries grouped by their
group-title, each carrying an opaque LoadData payload for playback.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .models import LoadData, Playlist, PlaylistItem


@dataclass(frozen=True)
class CatalogEntry:
    """A live channel as shown in listings and search results"""
    name: str
    data: str
    poster_url: str

    def to_dict(self) -> Dict:
        return {"name": self.name, "data": self.data, "poster_url": self.poster_url}


@dataclass(frozen=True)
class CatalogGroup:
    """Channels sharing one group-title"""
    title: str
    entries: List[CatalogEntry]

    def to_dict(self) -> Dict:
        return {"title": self.title, "entries": [e.to_dict() for e in self.entries]}


@dataclass(frozen=True)
class LiveStreamLoad:
    """Details of a single channel, rebuilt from its payload"""
    title: str
    url: str
    data: str
    poster_url: str
    plot: str

    def to_dict(self) -> Dict:
        return {
            "title": self.title,
            "url": self.url,
            "data": self.data,
            "poster_url": self.poster_url,
            "plot": self.plot,
        }


def merged_headers(item: PlaylistItem) -> Dict[str, str]:
    """Item headers plus its user agent when missing, without blank values"""
    headers = dict(item.headers)
    if "User-Agent" not in headers and item.user_agent and item.user_agent.strip():
        headers["User-Agent"] = item.user_agent
    return {k: v for k, v in headers.items() if v and v.strip()}


def to_load_data(item: PlaylistItem) -> LoadData:
    return LoadData(
        url=item.url or "",
        title=item.title or "",
        poster=item.attributes.get("tvg-logo", ""),
        nation=item.attributes.get("group-title", ""),
        key=item.key or "",
        keyid=item.keyid or "",
        headers=merged_headers(item),
    )


def to_catalog_entry(item: PlaylistItem) -> CatalogEntry:
    payload = to_load_data(item)
    return CatalogEntry(name=payload.title, data=payload.to_json(), poster_url=payload.poster)


def build_main_page(playlist: Playlist) -> List[CatalogGroup]:
    """Group channels by group-title, keeping first-seen order"""
    groups: Dict[Optional[str], List[CatalogEntry]] = {}
    for item in playlist:
        groups.setdefault(item.attributes.get("group-title"), []).append(
            to_catalog_entry(item)
        )

    logging.debug("Built %d groups from %d channels", len(groups), len(playlist))
    return [CatalogGroup(title=title or "", entries=entries) for title, entries in groups.items()]


def search(playlist: Playlist, query: str) -> List[CatalogEntry]:
    """Channels whose title contains the query, ignoring case"""
    needle = query.lower()
    results = [
        to_catalog_entry(item)
        for item in playlist
        if item.title is not None and needle in item.title.lower()
    ]
    logging.debug('Search "%s": %d matches', query, len(results))
    return results


def load(data: str) -> LiveStreamLoad:
    """Rebuild channel details from a catalog payload"""
    payload = LoadData.from_json(data)
    return LiveStreamLoad(
        title=payload.title,
        url=payload.url,
        data=data,
        poster_url=payload.poster,
        plot=payload.nation,
    )
