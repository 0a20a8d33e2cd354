"""
Songlink Discord Bot

A Discord bot that turns music-streaming links into cross-platform
previews using the Odesli (song.link) API, either on request through
/songlink or automatically when a link is posted in a channel.
"""

__version__ = "0.1.0"
__author__ = "AEmotionStudio"
