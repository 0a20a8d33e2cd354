import discord
from discord.ext import commands
import logging
from pathlib import Path
from typing import Optional

from .config import BotConfig
from .odesli.client import OdesliClient
from .services.delivery import DeliveryService
from .services.unfurl import UnfurlService

logger = logging.getLogger(__name__)

EXTENSIONS = [
    "songlink.cogs.songlink",
    "songlink.cogs.admin",
]


class SonglinkBot(commands.Bot):
    """
    Main Bot Class for Songlink.
    """

    def __init__(self, config: BotConfig, config_path: Optional[Path] = None):
        intents = discord.Intents.default()
        intents.message_content = True  # Needed to scan messages for links

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
            description="Smart music links by Odesli",
            application_id=config.discord.application_id,
        )
        self.config = config
        self.config_path = config_path

        self.odesli_client = OdesliClient(
            api_url=config.odesli.api_url,
            timeout=config.odesli.timeout,
            user_agent=config.odesli.user_agent,
        )
        self.delivery_service = DeliveryService(self)
        self.unfurl = UnfurlService(
            self.odesli_client,
            self.delivery_service,
            settings=config.unfurl_settings(),
        )

    async def setup_hook(self):
        """Async setup before bot starts."""
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info(f"Loaded extension: {ext}")
            except Exception as e:
                logger.error(f"Failed to load extension {ext}: {e}")

        try:
            synced = await self.tree.sync()
            logger.info(f"Synced {len(synced)} slash commands.")
        except Exception as e:
            logger.error(f"Failed to sync commands: {e}")

    async def close(self):
        """Cleanup on shutdown."""
        logger.info("Shutting down bot...")
        await self.unfurl.close()
        await self.odesli_client.close()
        await super().close()

    async def on_ready(self):
        logger.info(f"Bot logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guilds")
