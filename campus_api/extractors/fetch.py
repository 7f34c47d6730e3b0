"""HTTP fetcher for upstream pages.

One shared httpx.AsyncClient per Fetcher for connection pooling. A failed
request raises FetchError; there are no retries, callers decide what a
failure means for them.
"""

import random
from typing import Optional

import httpx
from rich.console import Console

from campus_api.errors import FetchError

console = Console()

# Realistic Firefox User-Agents
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.7; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (X11; Linux x86_64; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:133.0) Gecko/20100101 Firefox/133.0",
]

DEFAULT_TIMEOUT = 10.0
MAX_REDIRECTS = 5


class Fetcher:
    """Fetches page HTML over a lazily created, shared client."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                max_redirects=MAX_REDIRECTS,
                transport=self._transport,
                headers={
                    "User-Agent": random.choice(USER_AGENTS),
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    "Accept-Language": "tr-TR,tr;q=0.9,en;q=0.8",
                },
            )
        return self._client

    async def fetch(self, url: str) -> str:
        """GET `url` and return its body as text.

        Raises:
            FetchError: on timeout, connection failure or a non-2xx status.
        """
        client = self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(url, "timeout") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchError(url, str(status), status=status) from e
        except httpx.ConnectError as e:
            raise FetchError(url, "connection") from e
        except httpx.HTTPError as e:
            raise FetchError(url, type(e).__name__.lower()) from e

        return response.text

    async def close(self) -> None:
        """Close the shared client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
