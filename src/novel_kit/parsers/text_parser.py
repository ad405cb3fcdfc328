# src/novel_kit/parsers/text_parser.py

import logging
import re
from pathlib import Path
from time import monotonic

from novel_kit.observability import names
from novel_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import NovelParser
from .headings import DEFAULT_MATCHERS, HeadingMatcher, match_heading
from .models import Chapter, Segment

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLE = "Start"
SEGMENT_ID_PREFIX = "seg-"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def segment_text(
    text: str,
    *,
    matchers: tuple[HeadingMatcher, ...] = DEFAULT_MATCHERS,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chapter]:
    """Split raw novel text into chapters of one-line segments.

    Every non-blank line becomes exactly one segment; adjacent lines are never
    merged. A heading line closes the chapter being built and opens a new one
    with the heading as its first segment. Text before the first heading goes
    into a placeholder chapter, which is dropped when empty.
    """
    start = monotonic()
    chapters: list[Chapter] = []
    current = Chapter(title=PLACEHOLDER_TITLE)
    is_placeholder = True
    counter = 0

    for line in _LINE_BREAK_RE.split(text):
        clean = line.strip()
        if not clean:
            continue

        heading = match_heading(clean, matchers)
        if heading is not None:
            if current.segments or not is_placeholder:
                chapters.append(current)
            current = Chapter(title=clean)
            is_placeholder = False
            logger.debug("Heading %r matched as %s", clean, heading.kind.value)

        current.segments.append(
            Segment(
                id=f"{SEGMENT_ID_PREFIX}{counter}",
                text=clean,
                is_chapter_header=heading is not None,
            )
        )
        counter += 1

    if current.segments:
        chapters.append(current)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.PARSING_DURATION, elapsed_ms)
    metrics_hook.increment(names.PARSING_CHAPTERS_CREATED, len(chapters))
    metrics_hook.increment(names.PARSING_SEGMENTS_CREATED, counter)
    logger.info("Parsed %d chapters, %d segments", len(chapters), counter)
    return chapters


def decode_text(data: bytes) -> str:
    """Decode novel bytes as UTF-8, falling back to GB18030."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("UTF-8 decode failed, falling back to GB18030")
        return data.decode("gb18030", errors="replace")


class PlainTextParser(NovelParser):
    """
    Deterministic plain-text novel parser.
    - One segment per non-blank line
    - Heading detection through named sub-matchers
    - Document-wide increasing segment ids
    """

    def __init__(
        self,
        matchers: tuple[HeadingMatcher, ...] = DEFAULT_MATCHERS,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._matchers = matchers
        self.metrics_hook = metrics_hook

    def parse(self, text: str) -> list[Chapter]:
        return segment_text(
            text, matchers=self._matchers, metrics_hook=self.metrics_hook
        )

    def parse_file(self, path: str | Path) -> list[Chapter]:
        logger.info("Reading novel from %s", path)
        return self.parse(decode_text(Path(path).read_bytes()))


def read_novel(path: str | Path) -> list[Chapter]:
    return PlainTextParser().parse_file(path)
