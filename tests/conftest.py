import logging

import pytest

SAMPLE_PLAYLIST = """#EXTM3U x-tvg-url="http://example.com/epg.xml"
#EXTINF:-1 tvg-id="tvri" tvg-logo="http://example.com/tvri.png" group-title="Nasional",TVRI
http://example.com/tvri.m3u8

#KODIPROP:inputstream.adaptive.license_type=clearkey
#KODIPROP:inputstream.adaptive.license_key=abcd1234:ef567890
#EXTINF:-1 tvg-logo="http://example.com/rcti.png" group-title="Nasional",RCTI
#EXTVLCOPT:http-user-agent=Mozilla/5.0
#EXTVLCOPT:http-referrer=https://rcti.example.com/
https://cdn.example.com/rcti/manifest.mpd

#EXTINF:-1 tvg-logo='http://example.com/metro.png' group-title="Berita",Metro TV
https://cdn.example.com/metro/index.m3u8|User-Agent=Other&Referer=http%3A%2F%2Fr.com

#EXTINF:-1 group-title="Berita",Orphan without URL
#EXTINF:0 group-title=Olahraga,"Sport One"
#EXTVLCOPT:network-caching=1000
https://cdn.example.com/sport/live.mpd|key=00112233&keyid=44556677
"""


@pytest.fixture
def sample_playlist():
    return SAMPLE_PLAYLIST


@pytest.fixture
def restore_logging():
    """Keep handlers installed by setup_logging from leaking into other tests"""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
