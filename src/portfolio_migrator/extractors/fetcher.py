"""HTTP fetching for portfolio scraping.

Single Responsibility: Fetch the source page with timeout and bounded retries.
"""

import asyncio
from dataclasses import dataclass

import httpx

from ..errors import NetworkError
from ..utils.logging import MigrationLogger


@dataclass
class FetchResult:
    """Result of an HTTP fetch."""

    url: str
    content: str
    status_code: int
    content_type: str


class HtmlFetcher:
    """Fetch HTML documents with retry and linear backoff.

    Each attempt is bounded by ``timeout`` and torn down via cancellation
    when it expires. Non-2xx responses, transport errors and timeouts are
    retried; the delay before attempt ``n + 1`` is ``retry_delay * n``.

    An ``httpx.AsyncClient`` may be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise a client is opened per fetch.
    """

    DEFAULT_TIMEOUT = 10.0
    USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
        client: httpx.AsyncClient | None = None,
        logger: MigrationLogger | None = None,
    ) -> None:
        """Initialize fetcher with timeout and retry configuration.

        Args:
            timeout: Per-attempt timeout in seconds
            retry_attempts: Total number of attempts
            retry_delay: Base delay in seconds, multiplied by the attempt number
            client: Optional shared HTTP client
            logger: Run logger (a private one is created if not provided)
        """
        self.timeout = timeout
        self.retry_attempts = max(1, retry_attempts)
        self.retry_delay = retry_delay
        self._client = client
        self._logger = logger or MigrationLogger()

    async def fetch(self, url: str) -> FetchResult:
        """Fetch content from URL, retrying on failure.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with content and metadata

        Raises:
            NetworkError: When every attempt failed
        """
        last_error: Exception | None = None

        for attempt in range(1, self.retry_attempts + 1):
            try:
                self._logger.debug(f"Fetching {url} (attempt {attempt}/{self.retry_attempts})")
                return await asyncio.wait_for(self._get(url), timeout=self.timeout)
            except (NetworkError, httpx.HTTPError, TimeoutError) as e:
                last_error = e
                self._logger.warn(
                    f"Attempt {attempt} failed: {_describe(e, self.timeout)}",
                    {"url": url},
                )

            if attempt < self.retry_attempts:
                await asyncio.sleep(self.retry_delay * attempt)

        if isinstance(last_error, NetworkError):
            raise last_error
        raise NetworkError(_describe(last_error, self.timeout), url=url) from last_error

    async def _get(self, url: str) -> FetchResult:
        """Perform a single GET request."""
        if self._client is not None:
            return await self._request(self._client, url)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            max_redirects=5,
            headers={"User-Agent": self.USER_AGENT},
        ) as client:
            return await self._request(client, url)

    async def _request(self, client: httpx.AsyncClient, url: str) -> FetchResult:
        response = await client.get(url, headers={"User-Agent": self.USER_AGENT})
        if not response.is_success:
            raise NetworkError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )

        return FetchResult(
            url=str(response.url),
            content=response.text,
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
        )


def _describe(error: Exception | None, timeout: float) -> str:
    if error is None:
        return "All retry attempts failed"
    if isinstance(error, TimeoutError):
        return f"Request timed out after {timeout}s"
    return str(error) or type(error).__name__
