# src/novel_kit/vocabulary/targets.py

import re
from collections.abc import Mapping
from dataclasses import dataclass

from .classifier import IGNORED, MIN_TARGET_TIER, OUT_OF_SYLLABUS, classify
from .database import VocabularyDatabase
from .irregular import IRREGULAR_FORMS

_WORD_RE = re.compile(r"[a-zA-Z]+")


@dataclass(frozen=True)
class TargetWord:
    word: str
    level: int


def extract_target_words(
    sentence: str,
    vocabulary: VocabularyDatabase,
    irregular: Mapping[str, str] = IRREGULAR_FORMS,
) -> list[TargetWord]:
    """Pick the words of a translated sentence worth annotating.

    Keeps tier 3-6 words and out-of-syllabus words, once each
    (case-insensitive), in first-occurrence order with their original casing.
    Capitalized out-of-syllabus words are taken to be names and skipped, even
    at the start of a sentence.
    """
    targets: list[TargetWord] = []
    seen: set[str] = set()

    for word in _WORD_RE.findall(sentence):
        level = classify(word, vocabulary, irregular)
        if level == IGNORED:
            continue
        if level == OUT_OF_SYLLABUS and word[0].isupper():
            continue

        lower = word.lower()
        if (level >= MIN_TARGET_TIER or level == OUT_OF_SYLLABUS) and lower not in seen:
            targets.append(TargetWord(word=word, level=level))
            seen.add(lower)

    return targets
