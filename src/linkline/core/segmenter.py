"""Rule-based title segmentation into bold, middle and linked spans.

A title is split into words and partitioned by word count:

- a bold lead of one word (two for titles longer than five words),
- an unmarked middle,
- a hyperlinked tail covering roughly the last 35% of the title.

The partition is rendered as a single ``<p>`` HTML fragment. Titles and URLs
are inserted verbatim; no HTML escaping is performed.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from linkline.core.normalizer import WHITESPACE_RUN, clean_and_lower, to_sentence_case, trim

logger = logging.getLogger(__name__)

EMPTY_TITLE_HTML = "<p><em>(Title was empty)</em></p>"

# Titles longer than this get a two-word bold lead
LONG_TITLE_WORDS = 5
LINK_RATIO = 0.35


class SpanKind(str, Enum):
    """Role of a span within a segmented title."""

    BOLD = "bold"
    MIDDLE = "middle"
    LINK = "link"


class Layout(str, Enum):
    """How a segmentation is rendered."""

    SINGLE_WORD = "single_word"
    SPLIT = "split"
    # Nothing remained after the bold lead, so the lead itself is the link
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Span:
    """A contiguous run of title words."""

    kind: SpanKind
    words: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return " ".join(self.words)


@dataclass(frozen=True)
class Segmentation:
    """Partition of a title's words into bold, middle and link spans."""

    bold: Span
    middle: Span
    link: Span
    layout: Layout

    @property
    def word_count(self) -> int:
        if self.layout == Layout.FALLBACK:
            return len(self.bold.words)
        return len(self.bold.words) + len(self.middle.words) + len(self.link.words)


def split_words(title: str) -> list[str]:
    """Split a title on runs of whitespace, dropping empty tokens."""
    if not title:
        return []
    trimmed = trim(title)
    if not trimmed:
        return []
    return WHITESPACE_RUN.split(trimmed)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return math.floor(value + 0.5)


def bold_word_count(total_words: int) -> int:
    """Number of words in the bold lead for a title of total_words words."""
    if total_words > LONG_TITLE_WORDS and total_words - 2 >= 1:
        return 2
    return 1


def link_word_target(total_words: int) -> int:
    """Target number of linked words, never fewer than one."""
    return max(1, round_half_up(total_words * LINK_RATIO))


def partition_words(words: list[str]) -> Segmentation | None:
    """Partition words into spans.

    Args:
        words: Title words, already split.

    Returns:
        The segmentation, or None when there are no words.
    """
    total_words = len(words)

    if total_words == 0:
        return None

    if total_words == 1:
        return Segmentation(
            bold=Span(SpanKind.BOLD, tuple(words)),
            middle=Span(SpanKind.MIDDLE),
            link=Span(SpanKind.LINK, tuple(words)),
            layout=Layout.SINGLE_WORD,
        )

    num_bold = bold_word_count(total_words)
    bold = Span(SpanKind.BOLD, tuple(words[:num_bold]))
    rest = words[num_bold:]
    target = link_word_target(total_words)

    if not rest:
        logger.warning(f"No words remain after the bold lead for title: {' '.join(words)!r}")
        return Segmentation(
            bold=bold,
            middle=Span(SpanKind.MIDDLE),
            link=Span(SpanKind.LINK, bold.words),
            layout=Layout.FALLBACK,
        )

    if len(rest) <= target:
        return Segmentation(
            bold=bold,
            middle=Span(SpanKind.MIDDLE),
            link=Span(SpanKind.LINK, tuple(rest)),
            layout=Layout.SPLIT,
        )

    # Link is always taken from the tail
    num_linked = min(target, len(rest))
    return Segmentation(
        bold=bold,
        middle=Span(SpanKind.MIDDLE, tuple(rest[:-num_linked])),
        link=Span(SpanKind.LINK, tuple(rest[-num_linked:])),
        layout=Layout.SPLIT,
    )


def partition_title(title: str) -> Segmentation | None:
    """Split a title into words and partition them into spans."""
    return partition_words(split_words(title))


def _anchor(url: str, text: str) -> str:
    return f'<a href="{url}" target="_blank">{text}</a>'


@dataclass(frozen=True)
class RenderedLink:
    """A segmented title bound to the URL it links to."""

    url: str
    segmentation: Segmentation

    def to_html(self) -> str:
        """Render the segmentation as a paragraph fragment ending in ``.</p>``."""
        seg = self.segmentation
        bold_text = to_sentence_case(seg.bold.text)

        if seg.layout in (Layout.SINGLE_WORD, Layout.FALLBACK):
            return f"<p><strong>{_anchor(self.url, bold_text)}</strong>.</p>"

        middle_text = trim(seg.middle.text).lower()
        link_text = clean_and_lower(seg.link.text)

        parts = [f"<p><strong>{bold_text}</strong>"]
        if middle_text:
            parts.append(f" {middle_text}")
        if link_text:
            parts.append(f" {_anchor(self.url, link_text)}")
        parts.append(".</p>")
        return "".join(parts)


def segment_title(title: str, url: str) -> str:
    """Segment a title and render it as an HTML fragment.

    Args:
        title: The article title. May be empty or whitespace-only.
        url: The article URL, inserted verbatim into the href attribute.

    Returns:
        The HTML fragment. Empty titles yield a fixed placeholder fragment.
    """
    segmentation = partition_title(title)

    if segmentation is None:
        logger.warning("segment_title called with an empty title")
        return EMPTY_TITLE_HTML

    return RenderedLink(url=url, segmentation=segmentation).to_html()
