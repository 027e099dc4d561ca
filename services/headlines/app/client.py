# services/headlines/app/client.py
import asyncio
from typing import Any, Dict, Optional

import httpx

from services.headlines.app.errors import (
    FeedTimeoutError,
    FetchError,
    MalformedFeedError,
    TransportError,
)
from shared.app_logging.logger import get_logger
from shared.config.settings import FeedSettings

logger = get_logger("headlines.client")


class FeedClient:
    """
    Fetches the headline feed with a single bounded GET.

    No retries and no caching: every call is one attempt. A client passed
    in via ``http_client`` stays owned by the caller; one created here is
    closed by ``aclose``.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[FeedSettings] = None,
    ):
        settings = settings or FeedSettings()
        self.url = url or settings.feed_url
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        )

    async def fetch_headlines(self) -> Dict[str, Any]:
        """GET the feed and return the decoded JSON document."""
        logger.debug(f"Fetching headlines from {self.url}")
        try:
            response = await asyncio.wait_for(
                self._client.get(self.url), timeout=self.timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"⏱️ Feed request timed out after {self.timeout}s")
            raise FeedTimeoutError(self.timeout) from e
        except httpx.RequestError as e:
            logger.warning(f"❌ Transport failure fetching feed: {e!r}")
            raise TransportError(str(e) or type(e).__name__) from e

        if response.status_code != 200:
            logger.warning(f"❌ Feed answered with HTTP {response.status_code}")
            raise FetchError(response.status_code, response.reason_phrase)

        try:
            document = response.json()
        except ValueError as e:
            raise MalformedFeedError(f"response body is not valid JSON ({e})") from e

        logger.info(f"📥 Fetched feed ({len(response.content)} bytes)")
        return document

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "FeedClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
