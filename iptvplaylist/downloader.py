"""
iptvplaylist.downloader - Playlist download manager

Handles HTTP retrieval of playlist documents with connection reuse and
retry logic. Returns text or None; never raises on network failures.
"""

import logging
import random
import time
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class PlaylistDownloader:
    """Downloads playlist documents over HTTP"""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        user_agent: Optional[str] = None,
        retry_delay: float = 1.0,
    ):
        self.session: Optional[requests.Session] = None
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.retry_delay = retry_delay
        self.total_requests = 0
        self.failed_requests = 0
        self.bytes_downloaded = 0

        self.init_session()

    def init_session(self):
        """Initialize session with connection reuse"""
        if self.session:
            self.session.close()

        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/x-mpegurl, audio/mpegurl, text/plain, */*",
                "Accept-Encoding": "gzip, deflate",
                "Connection": "keep-alive",
            }
        )

        # Retries are handled in fetch()
        adapter = HTTPAdapter(max_retries=Retry(total=0, backoff_factor=0, status_forcelist=[]))
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        logging.debug("HTTP session initialized (User-Agent: %s)", self.user_agent[:50])

    def fetch(self, url: str) -> Optional[str]:
        """
        Download a playlist

        Args:
            url: Playlist location

        Returns:
            Optional[str]: Document text, or None when every attempt failed
        """
        for attempt in range(self.max_retries):
            self.total_requests += 1
            current_timeout = self.timeout + (attempt * 2)  # Increase timeout on each retry
            logging.debug(
                "  Attempt %d/%d: %s (timeout: %ds)",
                attempt + 1,
                self.max_retries,
                url[:100] + "..." if len(url) > 100 else url,
                current_timeout,
            )

            try:
                response = self.session.get(url, timeout=current_timeout)

                if response.status_code == 200:
                    self.bytes_downloaded += len(response.content)
                    logging.info("Downloaded playlist: %d bytes from %s", len(response.content), url)
                    if not response.encoding or response.encoding.lower() == "iso-8859-1":
                        # Servers rarely declare a charset for .m3u
                        return response.content.decode("utf-8", errors="replace")
                    return response.text

                logging.warning("  HTTP %d received", response.status_code)
                if response.status_code in [404, 410]:
                    self.failed_requests += 1
                    break  # Don't retry for permanent errors

            except requests.exceptions.Timeout:
                logging.warning("  Timeout (%ds) on attempt %d", current_timeout, attempt + 1)

            except requests.exceptions.ConnectionError as e:
                logging.warning("  Connection error on attempt %d: %s", attempt + 1, str(e))
                # Force reconnection on connection errors
                self.init_session()

            except requests.exceptions.RequestException as e:
                logging.warning("  Request error on attempt %d: %s", attempt + 1, str(e))

            self.failed_requests += 1

            # Wait before retry
            if attempt < self.max_retries - 1:
                time.sleep(random.uniform(self.retry_delay, self.retry_delay * 3))

        logging.warning("Could not download playlist from %s", url)
        return None

    def close(self):
        """Clean shutdown"""
        if self.session:
            self.session.close()
            self.session = None

    def get_stats(self) -> Dict[str, Any]:
        """Get download statistics"""
        return {
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
            "bytes_downloaded": self.bytes_downloaded,
        }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
