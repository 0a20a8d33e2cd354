"""Tests for songlink/config.py"""

import dataclasses
import sys
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from songlink.config import BotConfig, UnfurlSettings, reload_config
from songlink.odesli.client import DEFAULT_API_URL

YAML_CONFIG = """
discord:
  token: "file-token"
odesli:
  timeout: 5
unfurl:
  auto_unfurl: true
  user_country: " gb "
logging:
  level: DEBUG
"""


class ConfigFileTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "config.yaml"

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, text):
        self.path.write_text(text)


class TestBotConfigLoad(ConfigFileTestCase):
    """Test BotConfig.load."""

    def test_defaults_without_file(self):
        with patch.dict(os.environ, {}, clear=True):
            config = BotConfig.load(self.path)

        self.assertEqual(config.discord.token, "")
        self.assertEqual(config.odesli.api_url, DEFAULT_API_URL)
        self.assertEqual(config.odesli.timeout, 8.0)
        self.assertFalse(config.unfurl.auto_unfurl)
        self.assertEqual(config.unfurl.user_country, "")

    def test_load_from_file(self):
        self.write(YAML_CONFIG)
        with patch.dict(os.environ, {}, clear=True):
            config = BotConfig.load(self.path)

        self.assertEqual(config.discord.token, "file-token")
        self.assertEqual(config.odesli.timeout, 5.0)
        self.assertTrue(config.unfurl.auto_unfurl)
        self.assertEqual(config.logging.level, "DEBUG")

    def test_env_overrides_file(self):
        self.write(YAML_CONFIG)
        env = {
            "SONGLINK_DISCORD_TOKEN": "env-token",
            "SONGLINK_AUTO_UNFURL": "false",
            "SONGLINK_USER_COUNTRY": "US",
            "SONGLINK_API_TIMEOUT": "3",
        }
        with patch.dict(os.environ, env, clear=True):
            config = BotConfig.load(self.path)

        self.assertEqual(config.discord.token, "env-token")
        self.assertFalse(config.unfurl.auto_unfurl)
        self.assertEqual(config.unfurl.user_country, "US")
        self.assertEqual(config.odesli.timeout, 3.0)

    def test_empty_sections_are_tolerated(self):
        self.write("discord:\nunfurl:\n")
        with patch.dict(os.environ, {}, clear=True):
            config = BotConfig.load(self.path)
        self.assertFalse(config.unfurl.auto_unfurl)


class TestUnfurlSettings(ConfigFileTestCase):
    """Test the immutable settings snapshot."""

    def test_snapshot_trims_country(self):
        self.write(YAML_CONFIG)
        with patch.dict(os.environ, {}, clear=True):
            settings = BotConfig.load(self.path).unfurl_settings()

        self.assertEqual(settings, UnfurlSettings(auto_unfurl=True, user_country="gb"))

    def test_snapshot_is_frozen(self):
        settings = UnfurlSettings()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            settings.auto_unfurl = True

    def test_defaults(self):
        settings = UnfurlSettings()
        self.assertFalse(settings.auto_unfurl)
        self.assertEqual(settings.user_country, "")


class TestValidate(ConfigFileTestCase):
    """Test BotConfig.validate and reload_config."""

    def test_missing_token(self):
        errors = BotConfig().validate()
        self.assertEqual(len(errors), 1)
        self.assertIn("SONGLINK_DISCORD_TOKEN", errors[0])

    def test_bad_timeout(self):
        config = BotConfig()
        config.discord.token = "t"
        config.odesli.timeout = 0
        self.assertEqual(config.validate(), ["Odesli timeout must be positive"])

    def test_reload_returns_fresh_config(self):
        self.write(YAML_CONFIG)
        with patch.dict(os.environ, {}, clear=True):
            config = reload_config(self.path)
        self.assertTrue(config.unfurl.auto_unfurl)

    def test_reload_rejects_invalid_config(self):
        self.write("odesli:\n  timeout: -1\n")
        with patch.dict(os.environ, {"SONGLINK_DISCORD_TOKEN": "t"}, clear=True):
            with self.assertRaises(ValueError):
                reload_config(self.path)


if __name__ == "__main__":
    unittest.main()
