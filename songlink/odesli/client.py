import aiohttp
import asyncio
import logging
from typing import Optional, Dict

from .models import ResolutionResult

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.song.link/v1-alpha.1/links"
DEFAULT_TIMEOUT = 8.0
DEFAULT_USER_AGENT = "Songlink-Discord-Bot/0.1"


class LookupFailed(Exception):
    """Raised when a link could not be resolved by Odesli."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnexpectedStatus(LookupFailed):
    """Odesli answered with something other than HTTP 200."""

    def __init__(self, status: int):
        super().__init__(f"unexpected status {status}")
        self.status = status


class MalformedResponse(LookupFailed):
    """Odesli answered 200 but the body could not be decoded."""


class OdesliClient:
    """Async client for the Odesli (song.link) links API."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
            )
        return self.session

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()

    @staticmethod
    def build_params(url: str, user_country: Optional[str] = None) -> Dict[str, str]:
        """Query parameters for a lookup; userCountry only when set."""
        params = {"url": url}
        country = (user_country or "").strip()
        if country:
            params["userCountry"] = country
        return params

    async def resolve(self, url: str, user_country: Optional[str] = None) -> ResolutionResult:
        """
        Resolve a music link into its cross-platform equivalents.

        Args:
            url: Normalized music URL
            user_country: Optional ISO country code to localize availability

        Returns:
            Decoded ResolutionResult (not validated further)

        Raises:
            LookupFailed: empty input, transport failure or timeout
            UnexpectedStatus: non-200 response
            MalformedResponse: body is not a JSON object
        """
        if not url or not url.strip():
            raise LookupFailed("empty url")

        params = self.build_params(url, user_country)
        try:
            session = await self._get_session()
            async with session.get(self.api_url, params=params) as response:
                if response.status != 200:
                    raise UnexpectedStatus(response.status)
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponse(str(e)) from e
        except LookupFailed:
            raise
        except asyncio.TimeoutError as e:
            raise LookupFailed(str(e) or "request timed out") from e
        except aiohttp.ClientError as e:
            raise LookupFailed(str(e) or e.__class__.__name__) from e

        if not isinstance(payload, dict):
            raise MalformedResponse(f"expected JSON object, got {type(payload).__name__}")

        logger.debug(f"Resolved {url} to {payload.get('pageUrl')}")
        return ResolutionResult.from_dict(payload)
