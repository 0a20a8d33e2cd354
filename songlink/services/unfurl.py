import asyncio
import discord
import logging
from typing import Optional, Set

from ..config import UnfurlSettings
from ..embeds.builders import EmbedBuilder, Preview, build_preview
from ..odesli.client import OdesliClient, LookupFailed
from ..urls import normalize_url, find_first_url, extract_command_url
from .delivery import DeliveryService, DeliveryError

logger = logging.getLogger(__name__)

USAGE_TEXT = "Usage: /songlink <music-url>"
ACK_TEXT = "Fetching preview…"
LOOKUP_FAILED_TEXT = "Couldn't fetch details for that link."
POST_FAILED_TEXT = "Failed to post preview."


class UnfurlService:
    """
    Turns music links into previews and delivers them.

    Two entry points share the normalize -> resolve -> build pipeline:
    handle_command() for /songlink and scan_message() for auto-unfurl.
    """

    def __init__(
        self,
        client: OdesliClient,
        delivery: DeliveryService,
        settings: Optional[UnfurlSettings] = None,
    ):
        self.client = client
        self.delivery = delivery
        # Replaced as a whole on reload; readers take a reference and never mutate it
        self.settings: Optional[UnfurlSettings] = settings
        self._tasks: Set[asyncio.Task] = set()

    def apply_settings(self, settings: Optional[UnfurlSettings]):
        """Swap in a new settings snapshot."""
        self.settings = settings
        if settings is not None:
            logger.info(
                f"Unfurl settings applied (auto_unfurl={settings.auto_unfurl}, "
                f"user_country={settings.user_country or '-'})"
            )

    def _current_settings(self) -> UnfurlSettings:
        return self.settings or UnfurlSettings()

    async def resolve_preview(self, url: str, settings: Optional[UnfurlSettings] = None) -> Preview:
        """Resolve a normalized URL and build its preview. Raises LookupFailed."""
        settings = settings or self._current_settings()
        result = await self.client.resolve(url, settings.user_country or None)
        return build_preview(result)

    # -- Command path --

    async def handle_command(self, interaction: discord.Interaction, argument: Optional[str]) -> Optional[asyncio.Task]:
        """
        Handle /songlink <url>.

        Replies with a usage hint when no URL is given. Otherwise
        acknowledges immediately and resolves the link in a background
        task, which is returned.
        """
        try:
            raw_url = extract_command_url(argument)
            if raw_url is None:
                await interaction.response.send_message(USAGE_TEXT, ephemeral=True)
                return None

            url = normalize_url(raw_url)
            await interaction.response.send_message(ACK_TEXT, ephemeral=True)
            return self._spawn(self._deliver_command(interaction, url))
        except Exception as e:
            logger.exception(f"Unexpected error handling /songlink: {e}")
            return None

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _deliver_command(self, interaction: discord.Interaction, url: str):
        """Background work for a /songlink invocation."""
        try:
            try:
                preview = await self.resolve_preview(url)
            except LookupFailed as e:
                logger.error(f"Odesli lookup failed for {url}: {e.reason}")
                preview = None

            if preview is None:
                await self.delivery.notify_user(interaction, LOOKUP_FAILED_TEXT)
                return

            try:
                await self.delivery.post_as_user(
                    interaction.channel,
                    interaction.user,
                    EmbedBuilder.preview(preview),
                )
                logger.info(f"Posted preview '{preview.fallback}' for user {interaction.user.id}")
            except DeliveryError as e:
                logger.error(f"Failed to post preview for {url}: {e}")
                await self.delivery.notify_user(interaction, POST_FAILED_TEXT)
        except asyncio.CancelledError:
            logger.debug(f"Preview task for {url} cancelled")
        except Exception as e:
            logger.exception(f"Unexpected error delivering preview for {url}: {e}")

    # -- Passive scan path --

    async def scan_message(self, message: discord.Message) -> bool:
        """
        Reply with a preview for the first link in a message.

        Does nothing unless auto-unfurl is enabled. Failures are logged
        and never affect the original message. Returns True if a reply
        was posted.
        """
        settings = self.settings
        if settings is None or not settings.auto_unfurl:
            return False

        try:
            if message.author.bot or message.webhook_id is not None:
                return False

            raw_url = find_first_url(message.content)
            if raw_url is None:
                return False

            url = normalize_url(raw_url)
            preview = await self.resolve_preview(url, settings)
            await self.delivery.reply(message, EmbedBuilder.preview(preview))
            logger.info(f"Unfurled {url} in channel {message.channel.id}")
            return True
        except LookupFailed as e:
            logger.warning(f"Auto-unfurl lookup failed: {e.reason}")
        except DeliveryError as e:
            logger.warning(f"Failed to create unfurl reply: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error during auto-unfurl: {e}")
        return False

    async def close(self):
        """Cancel pending preview tasks."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
