import discord
from discord import app_commands
from discord.ext import commands
import logging

from ..config import reload_config
from ..embeds.builders import EmbedBuilder

logger = logging.getLogger(__name__)


class AdminCog(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @app_commands.command(name="songlink-admin", description="Songlink configuration (Admin only)")
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    @app_commands.choices(action=[
        app_commands.Choice(name="status", value="status"),
        app_commands.Choice(name="reload", value="reload"),
    ])
    async def admin(self, interaction: discord.Interaction, action: app_commands.Choice[str]):
        if action.value == "status":
            await self._show_status(interaction)
        elif action.value == "reload":
            await self._reload(interaction)

    async def _show_status(self, interaction: discord.Interaction):
        embed = EmbedBuilder.settings_status(self.bot.unfurl.settings, self.bot.odesli_client.api_url)
        await interaction.response.send_message(embed=embed, ephemeral=True)

    async def _reload(self, interaction: discord.Interaction):
        """Reload config from disk and environment, replacing the settings snapshot."""
        try:
            config = reload_config(self.bot.config_path)
        except Exception as e:
            logger.error(f"Failed to reload configuration: {e}")
            await interaction.response.send_message("❌ Failed to reload configuration.", ephemeral=True)
            return

        self.bot.config = config
        self.bot.unfurl.apply_settings(config.unfurl_settings())
        embed = EmbedBuilder.settings_status(self.bot.unfurl.settings, self.bot.odesli_client.api_url)
        await interaction.response.send_message("✅ Configuration reloaded.", embed=embed, ephemeral=True)


async def setup(bot):
    await bot.add_cog(AdminCog(bot))
