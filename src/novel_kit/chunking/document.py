# src/novel_kit/chunking/document.py

import logging
from collections.abc import Iterable
from typing import Any

from novel_kit.observability.base import MetricsHook, NoOpMetricsHook
from novel_kit.parsers.models import Chapter, SegmentStatus, find_segment
from novel_kit.vocabulary.database import VocabularyDatabase
from novel_kit.vocabulary.models import VocabWord

from .chunking import chunk_print_items
from .heights import HeightModel
from .models import (
    BreakItem,
    ContentItem,
    HeaderItem,
    LayoutRow,
    PrintItem,
    item_from_dict,
    item_to_dict,
)

logger = logging.getLogger(__name__)


class PrintDocument:
    """Ordered print items. Append and remove-by-index are the only edits.

    Layout rows are recomputed from the items on every `layout` call.
    """

    def __init__(self, items: Iterable[PrintItem] = ()) -> None:
        self._items: list[PrintItem] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> PrintItem:
        return self._items[index]

    @property
    def items(self) -> tuple[PrintItem, ...]:
        return tuple(self._items)

    def add_header(self, text: str) -> None:
        self._items.append(HeaderItem(text=text))

    def add_content(
        self, cn: str, en: str, vocab: Iterable[VocabWord] = ()
    ) -> None:
        self._items.append(ContentItem(cn=cn, en=en, vocab=tuple(vocab)))

    def add_break(self) -> None:
        self._items.append(BreakItem())

    def remove(self, index: int) -> PrintItem:
        if not 0 <= index < len(self._items):
            logger.error("Cannot remove print item, index out of range: %d", index)
            raise IndexError(f"Print item {index} out of range")
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def add_segments(self, chapters: list[Chapter], segment_ids: Iterable[str]) -> int:
        """Append headers and annotated segments, in the order of `segment_ids`.

        Segments that are neither headers nor done are skipped. Returns the
        number of items added.
        """
        added = 0
        for segment_id in segment_ids:
            segment = find_segment(chapters, segment_id)
            if segment is None:
                logger.debug("Segment not found: %s", segment_id)
                continue
            if segment.is_chapter_header:
                self.add_header(segment.text)
            elif segment.status == SegmentStatus.DONE:
                vocab = segment.vocab_result.vocab if segment.vocab_result else []
                self.add_content(segment.text, segment.en_text or "", vocab)
            else:
                continue
            added += 1
        logger.info("Added %d items to print document", added)
        return added

    def layout(
        self,
        vocabulary: VocabularyDatabase,
        *,
        model: HeightModel = HeightModel(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> list[LayoutRow]:
        return chunk_print_items(
            self._items, vocabulary, model=model, metrics_hook=metrics_hook
        )

    def to_list(self) -> list[dict[str, Any]]:
        return [item_to_dict(item) for item in self._items]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> "PrintDocument":
        return cls(item_from_dict(d) for d in data)
