import asyncio
import discord
import logging
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

IDENTITY_NAME = "Songlink"
IDENTITY_REASON = "Smart music links by Odesli"

WebhookChannel = Union[discord.TextChannel, discord.VoiceChannel]


class DeliveryError(Exception):
    """Raised when a preview could not be posted."""


class DeliveryService:
    """Handles delivery of previews and notices to Discord."""

    def __init__(self, bot: discord.Client):
        self.bot = bot
        # channel id -> webhook used to post on behalf of users
        self._identities: Dict[int, discord.Webhook] = {}
        # channel id -> lock serializing provisioning for that channel
        self._provisioning: Dict[int, asyncio.Lock] = {}

    @staticmethod
    def _webhook_target(channel) -> Optional[WebhookChannel]:
        """Channel that owns webhooks for a destination (threads use their parent)."""
        if isinstance(channel, discord.Thread):
            return channel.parent
        if isinstance(channel, (discord.TextChannel, discord.VoiceChannel)):
            return channel
        return None

    async def ensure_identity(self, channel) -> Optional[discord.Webhook]:
        """
        Ensure the Songlink webhook exists for a channel.

        Reuses a webhook we created earlier, otherwise creates one. The
        result is memoized per channel. Concurrent callers for the same
        channel wait on a single provisioning. Failures are logged and return None
        so the subsequent post fails through the normal delivery path.
        """
        target = self._webhook_target(channel)
        if target is None:
            logger.warning(f"Channel {getattr(channel, 'id', '?')} does not support webhooks")
            return None

        cached = self._identities.get(target.id)
        if cached is not None:
            return cached

        lock = self._provisioning.setdefault(target.id, asyncio.Lock())
        async with lock:
            # Another caller may have finished provisioning while we waited
            cached = self._identities.get(target.id)
            if cached is not None:
                return cached
            return await self._provision_identity(target)

    async def _provision_identity(self, target: WebhookChannel) -> Optional[discord.Webhook]:
        try:
            webhook = None
            bot_user = self.bot.user
            for existing in await target.webhooks():
                owned = bot_user is not None and existing.user is not None and existing.user.id == bot_user.id
                if existing.name == IDENTITY_NAME and owned and existing.token:
                    webhook = existing
                    break
            if webhook is None:
                webhook = await target.create_webhook(name=IDENTITY_NAME, reason=IDENTITY_REASON)
                logger.info(f"Created {IDENTITY_NAME} webhook in channel {target.id}")
        except discord.HTTPException as e:
            logger.warning(f"Failed to ensure {IDENTITY_NAME} webhook for channel {target.id}: {e}")
            return None

        self._identities[target.id] = webhook
        return webhook

    async def post_as_user(self, channel, user: Union[discord.User, discord.Member], embed: discord.Embed) -> discord.Message:
        """Post an embed into a channel under the invoking user's name and avatar."""
        webhook = await self.ensure_identity(channel)
        if webhook is None:
            raise DeliveryError(f"no {IDENTITY_NAME} webhook available for channel {getattr(channel, 'id', '?')}")

        kwargs = {}
        if isinstance(channel, discord.Thread):
            kwargs["thread"] = channel

        try:
            return await webhook.send(
                embed=embed,
                username=user.display_name,
                avatar_url=user.display_avatar.url,
                allowed_mentions=discord.AllowedMentions.none(),
                wait=True,
                **kwargs,
            )
        except discord.HTTPException as e:
            if isinstance(e, discord.NotFound):
                # Webhook was deleted behind our back; recreate on next use
                target = self._webhook_target(channel)
                if target is not None:
                    self._identities.pop(target.id, None)
            raise DeliveryError(str(e)) from e

    async def reply(self, message: discord.Message, embed: discord.Embed) -> discord.Message:
        """Reply to a message as the bot, without pinging its author."""
        if self.bot.user is None:
            raise DeliveryError("bot identity is not ready")
        try:
            return await message.reply(embed=embed, mention_author=False)
        except discord.HTTPException as e:
            raise DeliveryError(str(e)) from e

    async def notify_user(self, interaction: discord.Interaction, text: str) -> bool:
        """Send a notice only the invoking user can see."""
        try:
            await interaction.followup.send(text, ephemeral=True)
            return True
        except discord.HTTPException as e:
            logger.error(f"Failed to send notice to user {interaction.user.id}: {e}")
            return False
