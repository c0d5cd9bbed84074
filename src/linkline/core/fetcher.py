"""Page title fetching.

Downloads a page with httpx and reads its ``<title>`` element with
BeautifulSoup. Failures are mapped onto error codes so callers can report
them the same way regardless of where the request broke down.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from linkline.config import FetchSettings
from linkline.core.normalizer import trim
from linkline.utils.errors import ErrorCode, classify_exception, get_user_message, http_status_for
from linkline.utils.retry import RetryError, retry_with_backoff

logger = logging.getLogger(__name__)

NO_TITLE_FOUND = "No title found"
CONNECT_FAILURE_LABEL = "Error: Could not connect to server or fetch title."


class TitleFetchError(Exception):
    """Error raised when a page title cannot be fetched.

    Attributes:
        code: Classified error code.
        status_code: HTTP status to report for this failure.
        message: User-facing description.
        details: Underlying error text.
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: int,
        message: str,
        details: str | None = None,
    ):
        self.code = code
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def label(self) -> str:
        """Placeholder title shown for this failure in a batch."""
        return f"Error fetching title (Status: {self.status_code})"


@dataclass(frozen=True)
class TitleLookup:
    """Outcome of fetching the title for one URL."""

    url: str
    title: str
    ok: bool


def extract_title(html: str) -> str:
    """Extract the text of the first <title> element.

    Args:
        html: Page markup.

    Returns:
        The trimmed title text, or an empty string if there is none.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    tag = soup.find("title")
    if tag is None:
        return ""
    return trim(tag.get_text())


def create_client(settings: FetchSettings) -> httpx.AsyncClient:
    """Create an HTTP client configured for page requests."""
    return httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        follow_redirects=settings.follow_redirects,
        headers={"User-Agent": settings.user_agent},
    )


def to_fetch_error(exc: Exception) -> TitleFetchError:
    """Map a request exception onto a TitleFetchError."""
    if isinstance(exc, RetryError):
        exc = exc.original_error

    code = classify_exception(exc)

    if isinstance(exc, httpx.HTTPStatusError):
        upstream_status = exc.response.status_code
        return TitleFetchError(
            code=code,
            status_code=http_status_for(code, upstream_status),
            message=f"Failed to fetch content: Server responded with {upstream_status}",
            details=str(exc),
        )

    return TitleFetchError(
        code=code,
        status_code=http_status_for(code),
        message=get_user_message(code),
        details=str(exc) or type(exc).__name__,
    )


async def _download(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


async def fetch_page_title(
    url: str,
    settings: FetchSettings,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Fetch the title of the page at url.

    Args:
        url: Page URL.
        settings: Fetch settings (timeout, user agent, retries).
        client: Optional shared client. A new one is created and closed
            when omitted.

    Returns:
        The page title, or NO_TITLE_FOUND when the page has none.

    Raises:
        TitleFetchError: If the page could not be downloaded.
    """
    try:
        if client is None:
            async with create_client(settings) as owned_client:
                html = await retry_with_backoff(
                    _download,
                    owned_client,
                    url,
                    max_retries=settings.max_retries,
                    base_delay=settings.retry_base_delay,
                )
        else:
            html = await retry_with_backoff(
                _download,
                client,
                url,
                max_retries=settings.max_retries,
                base_delay=settings.retry_base_delay,
            )
    except Exception as e:
        error = to_fetch_error(e)
        logger.warning(
            f"Error fetching title for {url}: {error.message}",
            extra={"url": url, "error_type": type(e).__name__},
        )
        raise error from e

    title = extract_title(html)
    logger.debug(f"Fetched title for {url}: {title!r}")
    return title or NO_TITLE_FOUND


async def fetch_titles(urls: Iterable[str], settings: FetchSettings) -> list[TitleLookup]:
    """Fetch titles for a list of URLs.

    Blank entries are dropped and URLs are trimmed. Pages are fetched
    concurrently up to settings.max_concurrency; results keep input order.
    Failures become placeholder titles that compose_links will skip.

    Args:
        urls: URLs to fetch.
        settings: Fetch settings.

    Returns:
        One TitleLookup per non-blank URL, in input order.
    """
    cleaned = [url.strip() for url in urls if url and url.strip()]
    if not cleaned:
        return []

    semaphore = asyncio.Semaphore(settings.max_concurrency)

    async with create_client(settings) as client:

        async def lookup(url: str) -> TitleLookup:
            async with semaphore:
                try:
                    title = await fetch_page_title(url, settings, client=client)
                except TitleFetchError as e:
                    return TitleLookup(url=url, title=e.label, ok=False)
                except Exception as e:
                    logger.error(f"Unexpected error fetching {url}: {type(e).__name__}: {e}")
                    return TitleLookup(url=url, title=CONNECT_FAILURE_LABEL, ok=False)
            return TitleLookup(url=url, title=title, ok=True)

        results = await asyncio.gather(*(lookup(url) for url in cleaned))

    logger.info(f"Fetched titles for {len(results)} URLs")
    return list(results)
