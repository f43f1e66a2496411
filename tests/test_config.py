import xml.etree.ElementTree as ET

import pytest

from iptvplaylist.config import ConfigManager


def write_config(path, settings):
    lines = ['<?xml version="1.0" encoding="utf-8"?>', '<settings version="1">']
    for key, value in settings.items():
        lines.append(f'  <setting id="{key}">{value}</setting>')
    lines.append("</settings>")
    path.write_text("\n".join(lines), encoding="utf-8")


def test_default_config_created(tmp_path):
    config_file = tmp_path / "conf" / "iptvplaylist.xml"
    manager = ConfigManager(config_file)
    settings = manager.load_config()

    assert config_file.exists()
    assert settings["playlisturl"] == ConfigManager.DEFAULT_PLAYLIST_URL
    assert manager.get_provider_name() == "Indo IPTV"
    assert manager.get_timeout() == 30
    assert manager.get_retries() == 3
    assert manager.get_user_agent() is None


def test_custom_settings(tmp_path):
    config_file = tmp_path / "iptvplaylist.xml"
    write_config(
        config_file,
        {
            "playlisturl": "https://example.com/tv.m3u",
            "provider": "My TV",
            "timeout": "10",
            "retries": "5",
            "useragent": "Agent/2.0",
        },
    )

    manager = ConfigManager(config_file)
    manager.load_config()

    assert manager.get_playlist_url() == "https://example.com/tv.m3u"
    assert manager.get_provider_name() == "My TV"
    assert manager.get_timeout() == 10
    assert manager.get_retries() == 5
    assert manager.get_user_agent() == "Agent/2.0"


def test_value_attribute_and_unknown_settings(tmp_path):
    config_file = tmp_path / "iptvplaylist.xml"
    config_file.write_text(
        '<settings version="1">'
        '<setting id="provider" value="Attr TV" />'
        '<setting id="zipcode">92101</setting>'
        "</settings>",
        encoding="utf-8",
    )

    manager = ConfigManager(config_file)
    settings = manager.load_config()

    assert manager.get_provider_name() == "Attr TV"
    assert "zipcode" not in settings


@pytest.mark.parametrize("timeout, retries", [("0", "11"), ("abc", ""), ("999", "-1")])
def test_invalid_numbers_fall_back_to_defaults(tmp_path, timeout, retries):
    config_file = tmp_path / "iptvplaylist.xml"
    write_config(config_file, {"timeout": timeout, "retries": retries})

    manager = ConfigManager(config_file)
    manager.load_config()

    assert manager.get_timeout() == 30
    assert manager.get_retries() == 3


def test_command_line_overrides(tmp_path):
    config_file = tmp_path / "iptvplaylist.xml"
    write_config(config_file, {"playlisturl": "https://example.com/a.m3u", "timeout": "10"})

    manager = ConfigManager(config_file)
    manager.load_config(playlist_url="https://example.com/b.m3u", timeout=20)

    assert manager.get_playlist_url() == "https://example.com/b.m3u"
    assert manager.get_timeout() == 20
    assert set(manager.config_changes) == {"playlisturl", "timeout"}

    # Overrides are not written back
    assert "https://example.com/a.m3u" in config_file.read_text(encoding="utf-8")


def test_malformed_config_raises(tmp_path):
    config_file = tmp_path / "iptvplaylist.xml"
    config_file.write_text("<settings><setting id=", encoding="utf-8")

    with pytest.raises(ET.ParseError):
        ConfigManager(config_file).load_config()


def test_settings_are_stored_as_text(tmp_path):
    config_file = tmp_path / "iptvplaylist.xml"
    config_file.write_text(
        '<settings version="1">'
        '<setting id="timeout">15</setting>'
        '<setting id="useragent" />'
        '<setting id="lang">id</setting>'
        "</settings>",
        encoding="utf-8",
    )

    manager = ConfigManager(config_file)
    settings = manager.load_config()

    assert settings["timeout"] == "15"
    assert settings["useragent"] == ""
    assert all(isinstance(value, str) for value in settings.values())
    assert set(settings) == set(ConfigManager.DEFAULTS)
    assert "lang" not in settings
    assert manager.get_timeout() == 15
    assert manager.get_user_agent() is None
