"""Discord bot cogs (command groups)."""

from .songlink import SonglinkCog
from .admin import AdminCog

__all__ = [
    "SonglinkCog",
    "AdminCog",
]
