"""Preview building and Discord embeds."""

from .builders import EmbedBuilder, Preview, build_preview, PLATFORM_ORDER, PLATFORM_LABELS

__all__ = ["EmbedBuilder", "Preview", "build_preview", "PLATFORM_ORDER", "PLATFORM_LABELS"]
