"""
Playlist provider orchestrator

The PlaylistProvider coordinates between:
- the downloader (HTTP retrieval of the playlist document)
- the parser (pure Extended M3U parsing)
- the catalog and link builders (listing, search and playback)
"""

import logging
from typing import List, Optional

from .catalog import CatalogEntry, CatalogGroup, LiveStreamLoad
from .downloader import PlaylistDownloader
from .exceptions import PlaylistParserError
from .links import StreamLink
from .models import Playlist
from .parser import PlaylistParser
from . import catalog, links


class PlaylistProvider:
    """Live TV provider backed by a single remote playlist"""

    def __init__(
        self,
        main_url: str,
        name: str = "Indo IPTV",
        downloader: Optional[PlaylistDownloader] = None,
    ):
        self.main_url = main_url
        self.name = name
        self.downloader = downloader or PlaylistDownloader()
        self.parser = PlaylistParser()

    def fetch_playlist(self) -> Playlist:
        """
        Download and parse the provider playlist

        Returns:
            Playlist: Parsed entries

        Raises:
            PlaylistParserError: Download failed or the document is not Extended M3U
        """
        content = self.downloader.fetch(self.main_url)
        if content is None:
            raise PlaylistParserError(f"Could not download playlist: {self.main_url}")

        try:
            playlist = self.parser.parse(content)
        except PlaylistParserError as e:
            logging.error("Invalid playlist from %s: %s", self.main_url, str(e))
            raise

        logging.info("%d channels found in %s", len(playlist), self.main_url)
        return playlist

    def get_main_page(self) -> List[CatalogGroup]:
        return catalog.build_main_page(self.fetch_playlist())

    def search(self, query: str) -> List[CatalogEntry]:
        return catalog.search(self.fetch_playlist(), query)

    def load(self, data: str) -> LiveStreamLoad:
        return catalog.load(data)

    def load_links(self, data: str) -> List[StreamLink]:
        return links.build_links(data, self.name)

    def close(self):
        self.downloader.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
