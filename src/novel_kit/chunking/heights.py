# src/novel_kit/chunking/heights.py

"""Height estimates for the two-column print layout.

Heights are in abstract line units. The numbers are tuned by eye against the
rendered page and are meant to be overridden, not relied on.
"""

import math
from dataclasses import dataclass

from novel_kit.vocabulary.classifier import SIDEBAR_TIERS, entry_level
from novel_kit.vocabulary.database import VocabularyDatabase

from .models import ContentItem


@dataclass(frozen=True)
class HeightModel:
    """Tunable constants of the layout heuristic.

    Immutable. Every field can be overridden per call.
    """

    # close a row once text height reaches this share of the card height
    balance_ratio: float = 0.95
    en_chars_per_line: int = 55
    en_line_height: float = 2.8
    cn_chars_per_line: int = 40
    cn_line_height: float = 1.6
    paragraph_buffer: float = 1.5
    card_height: float = 3.2

    def __post_init__(self) -> None:
        if self.en_chars_per_line <= 0 or self.cn_chars_per_line <= 0:
            raise ValueError("chars_per_line must be > 0")
        if self.balance_ratio < 0:
            raise ValueError("balance_ratio must be >= 0")


def estimate_text_height(item: ContentItem, model: HeightModel) -> float:
    """Translated text plus the source line beneath it, plus a fixed buffer."""
    en_lines = math.ceil(len(item.en) / model.en_chars_per_line)
    cn_lines = math.ceil(len(item.cn) / model.cn_chars_per_line)
    return (
        en_lines * model.en_line_height
        + cn_lines * model.cn_line_height
        + model.paragraph_buffer
    )


def sidebar_card_count(item: ContentItem, vocabulary: VocabularyDatabase) -> int:
    # out-of-syllabus words are highlighted inline but get no sidebar card
    return sum(
        1
        for v in item.vocab
        if entry_level(v.w, v.l, vocabulary) in SIDEBAR_TIERS
    )


def estimate_card_height(
    item: ContentItem,
    vocabulary: VocabularyDatabase,
    model: HeightModel,
) -> float:
    return sidebar_card_count(item, vocabulary) * model.card_height
