import discord
from discord import app_commands
from discord.ext import commands
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class SonglinkCog(commands.Cog):
    def __init__(self, bot):
        self.bot = bot

    @app_commands.command(
        name="songlink",
        description="Create a smart music preview from a URL. Usage: /songlink <url>",
    )
    @app_commands.describe(url="Link to a song or album on any streaming platform")
    async def songlink(self, interaction: discord.Interaction, url: Optional[str] = None):
        await self.bot.unfurl.handle_command(interaction, url)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        await self.bot.unfurl.scan_message(message)


async def setup(bot):
    await bot.add_cog(SonglinkCog(bot))
