"""Bot services for business logic."""

from .delivery import DeliveryService, DeliveryError
from .unfurl import UnfurlService

__all__ = [
    "DeliveryService",
    "DeliveryError",
    "UnfurlService",
]
