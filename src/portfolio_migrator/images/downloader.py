"""Image downloading with retries.

Downloads are idempotent: an existing destination file counts as a success
and no request is made. Failures are reported through ``DownloadResult``
rather than raised, so a batch always yields one result per job.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from urllib.parse import urljoin

import httpx

from ..utils.logging import get_logger

logger = get_logger(__name__)

DOWNLOAD_TIMEOUT = 30.0
RETRY_BASE_DELAY = 1.0
REDIRECT_CODES = frozenset({301, 302})
USER_AGENT = "Mozilla/5.0 (compatible; portfolio-migrator)"


@dataclass(frozen=True)
class ImageDownloadConfig:
    """One download job: fetch ``url`` into ``directory / filename``."""

    url: str
    filename: str
    directory: Path

    @property
    def destination(self) -> Path:
        return Path(self.directory) / self.filename


@dataclass(frozen=True)
class DownloadResult:
    success: bool
    filepath: Path | None = None
    error: str | None = None


def ensure_directory_exists(path: Path | str) -> None:
    """Create ``path`` and its parents if missing."""
    Path(path).mkdir(parents=True, exist_ok=True)


def _remove_partial(path: Path) -> None:
    path.unlink(missing_ok=True)


def _request_failed(error: Exception) -> DownloadResult:
    # httpx timeout exceptions carry an empty message
    message = str(error) or type(error).__name__
    return DownloadResult(success=False, error=f"Request error: {message}")


async def _write_body(response: httpx.Response, destination: Path) -> DownloadResult:
    try:
        with destination.open("wb") as handle:
            async for chunk in response.aiter_bytes():
                handle.write(chunk)
    except OSError as e:
        _remove_partial(destination)
        return DownloadResult(success=False, error=f"File write error: {e}")
    except httpx.HTTPError as e:
        _remove_partial(destination)
        return _request_failed(e)

    logger.info("Downloaded: %s", destination)
    return DownloadResult(success=True, filepath=destination)


async def _download(
    client: httpx.AsyncClient,
    config: ImageDownloadConfig,
    follow_redirect: bool = True,
) -> DownloadResult:
    redirect_url: str | None = None
    try:
        async with client.stream("GET", config.url) as response:
            location = response.headers.get("location")
            if response.status_code in REDIRECT_CODES and location and follow_redirect:
                redirect_url = urljoin(config.url, location)
            elif response.status_code != 200:
                return DownloadResult(
                    success=False,
                    error=f"HTTP {response.status_code}: {response.reason_phrase}",
                )
            else:
                return await _write_body(response, config.destination)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return _request_failed(e)

    logger.debug("Following redirect from %s to %s", config.url, redirect_url)
    return await _download(client, replace(config, url=redirect_url), follow_redirect=False)


async def download_image(
    config: ImageDownloadConfig,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> DownloadResult:
    """Download one image to ``config.destination``.

    Follows a single 301/302 hop. The whole attempt, redirect included, is
    bounded by ``timeout`` seconds. Any partially written file is removed
    when the attempt fails.

    Args:
        config: Download job
        client: Optional shared HTTP client (injected in tests)
        timeout: Attempt timeout in seconds

    Returns:
        DownloadResult; this coroutine does not raise on download failures
    """
    destination = config.destination
    try:
        ensure_directory_exists(config.directory)
    except OSError as e:
        return DownloadResult(success=False, error=f"Directory error: {e}")

    if destination.exists():
        logger.info("Image already exists: %s", destination)
        return DownloadResult(success=True, filepath=destination)

    try:
        if client is not None:
            return await asyncio.wait_for(_download(client, config), timeout=timeout)
        async with httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": USER_AGENT}
        ) as own_client:
            return await asyncio.wait_for(_download(own_client, config), timeout=timeout)
    except TimeoutError:
        _remove_partial(destination)
        return DownloadResult(success=False, error="Request timeout")


async def download_images(
    configs: Sequence[ImageDownloadConfig],
    max_retries: int = 3,
    *,
    base_delay: float = RETRY_BASE_DELAY,
    client: httpx.AsyncClient | None = None,
) -> list[DownloadResult]:
    """Download jobs one after another, retrying each failed job.

    Each job gets up to ``max_retries`` attempts (at least one); the wait
    before attempt ``n + 1`` is ``base_delay * n`` seconds.

    Returns:
        One result per job, in input order
    """
    attempts_allowed = max(1, max_retries)
    results: list[DownloadResult] = []

    for config in configs:
        attempt = 0
        while True:
            attempt += 1
            result = await download_image(config, client=client)
            if result.success or attempt >= attempts_allowed:
                break
            logger.info("Retry %d/%d for %s", attempt, attempts_allowed, config.url)
            await asyncio.sleep(base_delay * attempt)
        results.append(result)

    return results
