import json

from iptvplaylist import LoadData, Playlist, PlaylistItem, parse
from iptvplaylist import catalog


def test_merged_headers_adds_missing_user_agent():
    item = PlaylistItem(title="A", url="http://x/a.m3u8", headers={"Referer": "r"}, user_agent="UA")
    assert catalog.merged_headers(item) == {"Referer": "r", "User-Agent": "UA"}


def test_merged_headers_keeps_existing_user_agent_and_drops_blank():
    item = PlaylistItem(
        title="A",
        url="http://x/a.m3u8",
        headers={"User-Agent": "Header", "Cookie": " "},
        user_agent="Other",
    )
    assert catalog.merged_headers(item) == {"User-Agent": "Header"}

    blank = PlaylistItem(title="B", url="http://x/b.m3u8", user_agent="  ")
    assert catalog.merged_headers(blank) == {}


def test_to_load_data(sample_playlist):
    rcti = parse(sample_playlist)[1]
    payload = catalog.to_load_data(rcti)

    assert payload == LoadData(
        url="https://cdn.example.com/rcti/manifest.mpd",
        title="RCTI",
        poster="http://example.com/rcti.png",
        nation="Nasional",
        key="ef567890",
        keyid="abcd1234",
        headers={"User-Agent": "Mozilla/5.0", "Referer": "https://rcti.example.com/"},
    )


def test_catalog_entry_payload_is_json(sample_playlist):
    entry = catalog.to_catalog_entry(parse(sample_playlist)[0])

    assert entry.name == "TVRI"
    assert entry.poster_url == "http://example.com/tvri.png"
    assert json.loads(entry.data) == {
        "url": "http://example.com/tvri.m3u8",
        "title": "TVRI",
        "poster": "http://example.com/tvri.png",
        "nation": "Nasional",
        "key": "",
        "keyid": "",
        "headers": {},
    }


def test_build_main_page_groups_in_first_seen_order(sample_playlist):
    groups = catalog.build_main_page(parse(sample_playlist))

    assert [group.title for group in groups] == ["Nasional", "Berita", "Olahraga"]
    assert [entry.name for entry in groups[0].entries] == ["TVRI", "RCTI"]
    assert [entry.name for entry in groups[1].entries] == ["Metro TV"]


def test_build_main_page_without_group_title():
    playlist = Playlist(
        (
            PlaylistItem(title="A", url="http://x/a.m3u8"),
            PlaylistItem(title="B", url="http://x/b.m3u8", attributes={"group-title": "G"}),
            PlaylistItem(title="C", url="http://x/c.m3u8"),
        )
    )

    groups = catalog.build_main_page(playlist)
    assert [(g.title, [e.name for e in g.entries]) for g in groups] == [("", ["A", "C"]), ("G", ["B"])]


def test_search_is_case_insensitive(sample_playlist):
    playlist = parse(sample_playlist)

    assert [entry.name for entry in catalog.search(playlist, "tv")] == ["TVRI", "Metro TV"]
    assert [entry.name for entry in catalog.search(playlist, "SPORT")] == ["Sport One"]
    assert catalog.search(playlist, "nothing") == []


def test_search_skips_untitled_items():
    playlist = Playlist((PlaylistItem(title=None, url="http://x/a.m3u8"),))
    assert catalog.search(playlist, "") == []


def test_load_round_trip(sample_playlist):
    entry = catalog.to_catalog_entry(parse(sample_playlist)[2])
    loaded = catalog.load(entry.data)

    assert loaded.title == "Metro TV"
    assert loaded.url == "https://cdn.example.com/metro/index.m3u8"
    assert loaded.poster_url == "http://example.com/metro.png"
    assert loaded.plot == "Berita"
    assert loaded.data == entry.data


def test_load_data_from_json_tolerates_missing_keys():
    payload = LoadData.from_json('{"url": "http://x/a.mpd", "title": "A", "extra": 1}')
    assert payload.headers == {}
    assert payload.key == ""
    assert payload.poster == ""
