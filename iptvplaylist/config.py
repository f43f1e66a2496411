"""
iptvplaylist.config - Configuration management

Handles the XML configuration file: creation of a default file, parsing,
validation of numeric settings and temporary command line overrides.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Optional


class ConfigManager:
    """Manages iptvplaylist configuration file"""

    DEFAULT_PLAYLIST_URL = "https://raw.githubusercontent.com/TeKuma25/Koleksi-IPTV/main/id.m3u"

    # Default configuration template
    DEFAULT_CONFIG = """<?xml version="1.0" encoding="utf-8"?>
<settings version="1">
  <!-- Playlist source -->
  <setting id="playlisturl">https://raw.githubusercontent.com/TeKuma25/Koleksi-IPTV/main/id.m3u</setting>
  <setting id="provider">Indo IPTV</setting>

  <!-- HTTP retrieval -->
  <setting id="timeout">30</setting>
  <setting id="retries">3</setting>
  <setting id="useragent"></setting>
</settings>"""

    # Known settings and their defaults, all stored as text
    DEFAULTS = {
        "playlisturl": DEFAULT_PLAYLIST_URL,
        "provider": "Indo IPTV",
        "timeout": "30",
        "retries": "3",
        "useragent": "",
    }

    # (min, max) for numeric settings
    NUMERIC_RANGES = {
        "timeout": (1, 300),
        "retries": (1, 10),
    }

    def __init__(self, config_file: Path):
        self.config_file = Path(config_file)
        self.settings: Dict[str, Any] = {}
        self.config_changes: Dict[str, str] = {}  # Track command line changes for clean logging

    def load_config(
        self,
        playlist_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Load and validate configuration file"""
        # Create default config if doesn't exist
        if not self.config_file.exists():
            self._create_default_config()

        self._parse_config_file()
        self._set_defaults()

        # Override with command line arguments (TEMPORARY for this execution only)
        self.config_changes = {}
        if playlist_url and playlist_url != self.settings["playlisturl"]:
            self.config_changes["playlisturl"] = (
                f"{self.settings['playlisturl']} → {playlist_url} (from command line)"
            )
            self.settings["playlisturl"] = playlist_url
        if timeout is not None and str(timeout) != self.settings["timeout"]:
            self.config_changes["timeout"] = (
                f"{self.settings['timeout']} → {timeout} (from command line)"
            )
            self.settings["timeout"] = str(timeout)

        self._validate_config()
        return self.settings

    def _create_default_config(self):
        """Create default configuration file"""
        logging.info("Creating default configuration: %s", self.config_file)

        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True, mode=0o755)
        except OSError:
            # Fallback: create without mode specification (depends on umask)
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as f:
            f.write(self.DEFAULT_CONFIG)

    def _parse_config_file(self):
        """Parse XML configuration file, ignoring unknown settings"""
        try:
            tree = ET.parse(self.config_file)
            root = tree.getroot()

            logging.info("Reading configuration from: %s", self.config_file)

            valid_settings = {}
            for setting in root.findall("setting"):
                setting_id = setting.get("id")

                # 'value' attribute first, then text
                setting_value = setting.get("value")
                if setting_value is None:
                    setting_value = setting.text
                if setting_value is not None:
                    setting_value = setting_value.strip()

                logging.debug("Config setting: %s = %s", setting_id, setting_value)

                if setting_id in self.DEFAULTS:
                    valid_settings[setting_id] = setting_value
                else:
                    logging.warning(
                        "Unknown configuration setting: %s = %s (ignored)",
                        setting_id,
                        setting_value,
                    )

            self._process_settings(valid_settings)

        except ET.ParseError as e:
            logging.error("Cannot parse configuration file %s: %s", self.config_file, e)
            raise
        except OSError as e:
            logging.error("Error reading configuration file %s: %s", self.config_file, e)
            raise

    def _process_settings(self, settings_dict: Dict[str, Optional[str]]):
        """Store settings as text, an empty element becomes an empty string"""
        for setting_id, setting_value in settings_dict.items():
            self.settings[setting_id] = setting_value if setting_value is not None else ""

    def _set_defaults(self):
        """Set default values for missing or empty settings"""
        added_defaults = []
        for key, default_value in self.DEFAULTS.items():
            if key == "useragent":
                self.settings.setdefault(key, default_value)
                continue
            if not self.settings.get(key):
                self.settings[key] = default_value
                added_defaults.append(f"{key}={default_value}")

        if added_defaults:
            logging.debug("Using defaults: %s", ", ".join(added_defaults))

    def _validate_config(self):
        """Validate numeric settings, falling back to defaults"""
        for key, (minimum, maximum) in self.NUMERIC_RANGES.items():
            value = self.settings.get(key)
            try:
                number = int(value)
                if number < minimum or number > maximum:
                    logging.warning(
                        "Invalid %s %d (allowed %d-%d), using default %s",
                        key, number, minimum, maximum, self.DEFAULTS[key],
                    )
                    self.settings[key] = self.DEFAULTS[key]
            except (ValueError, TypeError):
                logging.warning('Invalid %s setting "%s", using default %s', key, value, self.DEFAULTS[key])
                self.settings[key] = self.DEFAULTS[key]

        if not self.settings["playlisturl"].lower().startswith(("http://", "https://")):
            logging.warning("Playlist URL does not look like HTTP(S): %s", self.settings["playlisturl"])

    def get_playlist_url(self) -> str:
        return self.settings.get("playlisturl", self.DEFAULT_PLAYLIST_URL)

    def get_provider_name(self) -> str:
        return self.settings.get("provider", self.DEFAULTS["provider"])

    def get_timeout(self) -> int:
        return int(self.settings.get("timeout", self.DEFAULTS["timeout"]))

    def get_retries(self) -> int:
        return int(self.settings.get("retries", self.DEFAULTS["retries"]))

    def get_user_agent(self) -> Optional[str]:
        return self.settings.get("useragent") or None

    def log_config_summary(self):
        """Log configuration summary"""
        logging.info("Configuration values processed:")
        logging.info("  playlisturl: %s", self.get_playlist_url())
        logging.info("  provider: %s", self.get_provider_name())
        logging.info("  timeout: %ds, retries: %d", self.get_timeout(), self.get_retries())
        if self.get_user_agent():
            logging.info("  useragent: %s", self.get_user_agent())
        for setting, change in self.config_changes.items():
            logging.info("  %s changed: %s", setting, change)
