"""Odesli (song.link) integration package."""

from .client import OdesliClient, LookupFailed, UnexpectedStatus, MalformedResponse
from .models import ResolutionResult, Entity, PlatformLink

__all__ = [
    "OdesliClient",
    "LookupFailed",
    "UnexpectedStatus",
    "MalformedResponse",
    "ResolutionResult",
    "Entity",
    "PlatformLink",
]
