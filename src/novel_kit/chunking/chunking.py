# src/novel_kit/chunking/chunking.py

from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce
from time import monotonic

from novel_kit.observability import names
from novel_kit.observability.base import MetricsHook, NoOpMetricsHook
from novel_kit.vocabulary.database import VocabularyDatabase

from .heights import HeightModel, estimate_card_height, estimate_text_height
from .models import ContentItem, ItemRow, LayoutRow, PrintItem, SmartRow


@dataclass(frozen=True)
class _ChunkState:
    rows: tuple[LayoutRow, ...] = ()
    batch: tuple[tuple[ContentItem, int], ...] = ()
    text_height: float = 0.0
    card_height: float = 0.0

    def flush(self) -> "_ChunkState":
        if not self.batch:
            return self
        return _ChunkState(rows=self.rows + (SmartRow(entries=self.batch),))


def chunk_print_items(
    items: Sequence[PrintItem],
    vocabulary: VocabularyDatabase,
    *,
    model: HeightModel = HeightModel(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[LayoutRow]:
    """Group print items into layout rows.

    Headers and breaks always stand alone and close any pending batch.
    Consecutive content items are batched until the estimated text height
    reaches `model.balance_ratio` of the estimated sidebar card height, so
    the cards never run far past the paragraphs they annotate. Leftovers are
    flushed at the end. Pure and order-preserving.
    """
    start = monotonic()

    def step(state: _ChunkState, indexed: tuple[int, PrintItem]) -> _ChunkState:
        index, item = indexed
        if not isinstance(item, ContentItem):
            flushed = state.flush()
            return _ChunkState(rows=flushed.rows + (ItemRow(item=item, index=index),))

        grown = _ChunkState(
            rows=state.rows,
            batch=state.batch + ((item, index),),
            text_height=state.text_height + estimate_text_height(item, model),
            card_height=state.card_height
            + estimate_card_height(item, vocabulary, model),
        )
        if grown.text_height >= grown.card_height * model.balance_ratio:
            return grown.flush()
        return grown

    final = reduce(step, enumerate(items), _ChunkState()).flush()
    rows = list(final.rows)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.LAYOUT_DURATION, elapsed_ms)
    metrics_hook.increment(names.LAYOUT_ROWS_CREATED, len(rows))
    metrics_hook.increment(
        names.LAYOUT_SMART_ROWS_CREATED,
        sum(1 for r in rows if isinstance(r, SmartRow)),
    )
    return rows
