"""
Typed view of the Odesli /links response.

Decoding is lenient: missing keys or values of the wrong type decode to
empty strings and empty mappings so that preview building can fall back
to defaults instead of failing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass
class Entity:
    """Metadata for one platform entity (song or album)."""
    title: str = ""
    artist_name: str = ""
    thumbnail_url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Entity":
        data = _mapping(data)
        return cls(
            title=_text(data.get("title")),
            artist_name=_text(data.get("artistName")),
            thumbnail_url=_text(data.get("thumbnailUrl")),
        )


@dataclass
class PlatformLink:
    """Link to the entity on a single platform."""
    url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "PlatformLink":
        return cls(url=_text(_mapping(data).get("url")))


@dataclass
class ResolutionResult:
    """Decoded Odesli response for one lookup."""
    entity_unique_id: str = ""
    page_url: str = ""
    entities_by_unique_id: Dict[str, Entity] = field(default_factory=dict)
    links_by_platform: Dict[str, PlatformLink] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolutionResult":
        entities = _mapping(data.get("entitiesByUniqueId"))
        links = _mapping(data.get("linksByPlatform"))
        return cls(
            entity_unique_id=_text(data.get("entityUniqueId")),
            page_url=_text(data.get("pageUrl")),
            entities_by_unique_id={
                str(key): Entity.from_dict(value) for key, value in entities.items()
            },
            links_by_platform={
                str(key): PlatformLink.from_dict(value) for key, value in links.items()
            },
        )
