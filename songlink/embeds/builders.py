import discord
from dataclasses import dataclass
from typing import Optional, Dict, List

from ..odesli.models import ResolutionResult

DEFAULT_TITLE = "Track"
TITLE_SEPARATOR = " — "
CHIP_SEPARATOR = " • "

# Discord embed limits
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096

# Platforms shown as chips, in display order
PLATFORM_ORDER: List[str] = [
    "spotify",
    "itunes",
    "appleMusic",
    "youtubeMusic",
    "qobuz",
    "tidal",
    "amazonMusic",
    "soundcloud",
    "bandcamp",
]

PLATFORM_LABELS: Dict[str, str] = {
    "spotify": "Spotify",
    "itunes": "iTunes",
    "appleMusic": "Apple Music",
    "youtubeMusic": "YouTube Music",
    "qobuz": "Qobuz",
    "tidal": "TIDAL",
    "amazonMusic": "Amazon Music",
    "soundcloud": "SoundCloud",
    "bandcamp": "Bandcamp",
}


@dataclass(frozen=True)
class Preview:
    """A presentable music preview built from one Odesli lookup."""
    title: str
    fallback: str
    link: str
    thumbnail_url: Optional[str] = None
    text: Optional[str] = None


def format_display_text(artist: str, title: str) -> str:
    """'Artist — Title' trimmed as a whole; a blank artist drops the separator."""
    if not artist or not artist.strip():
        return (title or "").strip()
    return f"{artist}{TITLE_SEPARATOR}{title}".strip()


def build_platform_chips(result: ResolutionResult) -> Optional[str]:
    """Join markdown links for allow-listed platforms, or None if there are none."""
    chips = []
    for key in PLATFORM_ORDER:
        link = result.links_by_platform.get(key)
        if link and link.url:
            chips.append(f"[{PLATFORM_LABELS[key]}]({link.url})")
    if not chips:
        return None
    return CHIP_SEPARATOR.join(chips)


def build_preview(result: ResolutionResult) -> Preview:
    """
    Build a Preview from a decoded lookup.

    Missing entity data falls back to the title "Track" with no artist.
    Never raises for incomplete responses.
    """
    title = DEFAULT_TITLE
    artist = ""
    thumbnail_url = None

    entity = result.entities_by_unique_id.get(result.entity_unique_id)
    if entity is not None:
        if entity.title.strip():
            title = entity.title
        artist = entity.artist_name
        if entity.thumbnail_url.strip():
            thumbnail_url = entity.thumbnail_url

    display = format_display_text(artist, title)
    return Preview(
        title=display,
        fallback=display,
        link=result.page_url,
        thumbnail_url=thumbnail_url,
        text=build_platform_chips(result),
    )


class EmbedBuilder:
    """Helper for building Discord embeds."""

    @staticmethod
    def preview(preview: Preview) -> discord.Embed:
        """Embed for a resolved music link."""
        title = preview.title
        if len(title) > MAX_TITLE_LENGTH:
            title = title[:MAX_TITLE_LENGTH - 1] + "…"

        description = preview.text
        if description and len(description) > MAX_DESCRIPTION_LENGTH:
            # Drop whole chips rather than cutting a link in half
            chips = description.split(CHIP_SEPARATOR)
            while chips and len(CHIP_SEPARATOR.join(chips)) > MAX_DESCRIPTION_LENGTH:
                chips.pop()
            description = CHIP_SEPARATOR.join(chips) or None

        embed = discord.Embed(
            title=title,
            url=preview.link or None,
            description=description,
            color=discord.Color.blurple(),
        )
        if preview.thumbnail_url:
            embed.set_thumbnail(url=preview.thumbnail_url)
        embed.set_footer(text="Powered by Odesli")
        return embed

    @staticmethod
    def settings_status(settings, api_url: str) -> discord.Embed:
        """Embed describing the current unfurl settings."""
        embed = discord.Embed(title="Songlink Status", color=discord.Color.dark_grey())
        auto_unfurl = bool(settings and settings.auto_unfurl)
        country = settings.user_country if settings and settings.user_country else "not set"
        embed.add_field(name="Auto-unfurl", value="✅ enabled" if auto_unfurl else "❌ disabled", inline=True)
        embed.add_field(name="Country", value=country, inline=True)
        embed.add_field(name="Odesli API", value=api_url, inline=False)
        return embed
