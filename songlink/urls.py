"""
URL helpers for Songlink

Cleans music links pasted by users and finds links inside free text.
"""

import re
import string
from typing import Optional

# Generic URL pattern used when scanning messages
URL_PATTERN = re.compile(r"https?://\S+")

# Punctuation that chat clients and sentences leave glued to a link
TRAILING_PUNCTUATION = ").,]>"


def normalize_url(raw: str) -> str:
    """
    Clean a raw link into an absolute URL for the Odesli API.

    Args:
        raw: Text supplied by a user or extracted from a message

    Returns:
        Best-effort URL, always starting with http:// or https://
    """
    url = (raw or "").strip()

    # Strip surrounding angle brackets often added by chat clients
    if url.startswith("<"):
        url = url[1:]
    if url.endswith(">"):
        url = url[:-1]

    # Whitespace is stripped along with the punctuation so that
    # normalize_url(normalize_url(s)) == normalize_url(s)
    url = url.strip().rstrip(TRAILING_PUNCTUATION + string.whitespace)

    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def find_first_url(text: str) -> Optional[str]:
    """Return the first http(s) link in text, or None."""
    if not text:
        return None
    match = URL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_command_url(argument: Optional[str]) -> Optional[str]:
    """Return the first whitespace-separated token of a command argument."""
    if not argument:
        return None
    parts = argument.split()
    return parts[0] if parts else None
