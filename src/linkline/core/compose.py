"""Compose an ordered list of (url, title) pairs into one HTML document."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from linkline.core.segmenter import segment_title

logger = logging.getLogger(__name__)

# Titles containing these markers are fetch failures, not real titles
SKIP_MARKERS = ("error", "title not found")


def is_usable_title(title: str) -> bool:
    """Check whether a title should be segmented.

    Args:
        title: The title to check.

    Returns:
        False for empty titles and titles carrying a fetch error marker.
    """
    if not title or not title.strip():
        return False

    lowered = title.lower()
    return not any(marker in lowered for marker in SKIP_MARKERS)


def skipped_notice(url: str) -> str:
    """Preview fragment shown in place of a skipped link."""
    return f"<p><em>Skipped link for {url} due to missing or error in title.</em></p>\n"


@dataclass(frozen=True)
class ComposedLink:
    """One input pair and its rendered fragment (None when skipped)."""

    url: str
    title: str
    html: str | None

    @property
    def skipped(self) -> bool:
        return self.html is None


@dataclass(frozen=True)
class ComposedDocument:
    """Result of composing a list of links.

    Attributes:
        links: Per-item results in input order.
        preview_html: Fragments plus skip notices, for display.
        html: Fragments only, one per line.
    """

    links: tuple[ComposedLink, ...]
    preview_html: str
    html: str


def compose_links(items: Iterable[tuple[str, str]]) -> ComposedDocument:
    """Segment each usable (url, title) pair in order.

    Args:
        items: Ordered (url, title) pairs.

    Returns:
        The composed document.
    """
    links: list[ComposedLink] = []
    preview_parts: list[str] = []
    raw_parts: list[str] = []

    for url, title in items:
        if not is_usable_title(title):
            logger.info(f"Skipping link for {url} due to missing or error in title")
            links.append(ComposedLink(url=url, title=title, html=None))
            preview_parts.append(skipped_notice(url))
            raw_parts.append("\n")
            continue

        fragment = segment_title(title, url)
        links.append(ComposedLink(url=url, title=title, html=fragment))
        preview_parts.append(fragment)
        raw_parts.append(fragment + "\n")

    logger.debug(
        f"Composed {len(links)} links ({sum(link.skipped for link in links)} skipped)"
    )

    return ComposedDocument(
        links=tuple(links),
        preview_html="".join(preview_parts),
        html="".join(raw_parts).strip(),
    )
