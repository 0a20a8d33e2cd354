"""
Configuration management for the Songlink bot.

Configuration is loaded from (in priority order):
1. Environment variables (highest priority)
2. Config file (songlink/config.yaml)
3. Defaults (lowest priority)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .odesli.client import DEFAULT_API_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

TRUE_VALUES = {"1", "true", "yes", "on"}


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


@dataclass
class DiscordConfig:
    """Discord-related configuration."""
    token: str = ""
    application_id: Optional[str] = None


@dataclass
class OdesliConfig:
    """Odesli API connection configuration."""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class UnfurlConfig:
    """Admin-controlled unfurl behaviour."""
    auto_unfurl: bool = False
    user_country: str = ""


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"


@dataclass(frozen=True)
class UnfurlSettings:
    """Immutable snapshot of the unfurl settings, swapped as a whole on reload."""
    auto_unfurl: bool = False
    user_country: str = ""


@dataclass
class BotConfig:
    """Main bot configuration container."""
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    odesli: OdesliConfig = field(default_factory=OdesliConfig)
    unfurl: UnfurlConfig = field(default_factory=UnfurlConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "BotConfig":
        """
        Load configuration from file and environment variables.

        Args:
            config_path: Optional path to config.yaml file

        Returns:
            Loaded BotConfig instance
        """
        config = cls()

        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        if config_path.exists():
            config._load_from_file(config_path)

        config._load_from_env()

        return config

    def _load_from_file(self, path: Path) -> None:
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if "discord" in data:
            discord_data = data["discord"] or {}
            if "token" in discord_data:
                self.discord.token = discord_data["token"]
            if "application_id" in discord_data:
                self.discord.application_id = discord_data["application_id"]

        if "odesli" in data:
            odesli_data = data["odesli"] or {}
            if "api_url" in odesli_data:
                self.odesli.api_url = odesli_data["api_url"]
            if "timeout" in odesli_data:
                self.odesli.timeout = float(odesli_data["timeout"])
            if "user_agent" in odesli_data:
                self.odesli.user_agent = odesli_data["user_agent"]

        if "unfurl" in data:
            unfurl_data = data["unfurl"] or {}
            if "auto_unfurl" in unfurl_data:
                self.unfurl.auto_unfurl = _as_bool(unfurl_data["auto_unfurl"])
            if "user_country" in unfurl_data:
                self.unfurl.user_country = str(unfurl_data["user_country"] or "")

        if "logging" in data:
            logging_data = data["logging"] or {}
            if "level" in logging_data:
                self.logging.level = logging_data["level"]

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        # Discord
        if token := os.getenv("SONGLINK_DISCORD_TOKEN"):
            self.discord.token = token
        if app_id := os.getenv("SONGLINK_APPLICATION_ID"):
            self.discord.application_id = app_id

        # Odesli
        if api_url := os.getenv("SONGLINK_API_URL"):
            self.odesli.api_url = api_url
        if timeout := os.getenv("SONGLINK_API_TIMEOUT"):
            self.odesli.timeout = float(timeout)

        # Unfurl
        if auto_unfurl := os.getenv("SONGLINK_AUTO_UNFURL"):
            self.unfurl.auto_unfurl = _as_bool(auto_unfurl)
        if country := os.getenv("SONGLINK_USER_COUNTRY"):
            self.unfurl.user_country = country

        # Logging
        if level := os.getenv("SONGLINK_LOG_LEVEL"):
            self.logging.level = level

    def unfurl_settings(self) -> UnfurlSettings:
        """Snapshot of the unfurl settings for concurrent readers."""
        return UnfurlSettings(
            auto_unfurl=self.unfurl.auto_unfurl,
            user_country=(self.unfurl.user_country or "").strip(),
        )

    def validate(self) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.discord.token:
            errors.append("Discord token is required (set SONGLINK_DISCORD_TOKEN)")

        if not self.odesli.api_url:
            errors.append("Odesli API URL is required")

        if self.odesli.timeout <= 0:
            errors.append("Odesli timeout must be positive")

        return errors


def reload_config(config_path: Optional[Path] = None) -> BotConfig:
    """Reload configuration from disk and environment, validating it first."""
    config = BotConfig.load(config_path)
    errors = config.validate()
    if errors:
        raise ValueError("; ".join(errors))
    return config
