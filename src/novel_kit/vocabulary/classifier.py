# src/novel_kit/vocabulary/classifier.py

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .database import VocabularyDatabase
from .irregular import IRREGULAR_FORMS

IGNORED = 0
OUT_OF_SYLLABUS = 99

# Tiers 1-2 are assumed known; only 3-6 are annotation targets.
MIN_TARGET_TIER = 3
SIDEBAR_TIERS = frozenset({3, 4, 5, 6})

_NON_LETTER_RE = re.compile(r"[^a-zA-Z]")
_VOWELS = frozenset("aeiou")


def _undouble(stem: str) -> list[str]:
    # "runn" -> "run", "stopp" -> "stop"
    if len(stem) >= 3 and stem[-1] == stem[-2] and stem[-1] not in _VOWELS:
        return [stem[:-1]]
    return []


def _ly_candidates(word: str) -> list[str]:
    candidates = [word[:-2]]
    if word.endswith("ily"):
        candidates.append(word[:-3] + "y")
    return candidates


def _s_candidates(word: str) -> list[str]:
    candidates = [word[:-1]]
    if word.endswith("ies"):
        candidates.append(word[:-3] + "y")
    elif word.endswith("es"):
        candidates.append(word[:-2])
    return candidates


def _ed_candidates(word: str) -> list[str]:
    stem = word[:-2]
    candidates = [stem, word[:-1], *_undouble(stem)]
    if word.endswith("ied"):
        candidates.append(word[:-3] + "y")
    return candidates


def _ing_candidates(word: str) -> list[str]:
    stem = word[:-3]
    return [stem, stem + "e", *_undouble(stem)]


def _er_candidates(word: str) -> list[str]:
    stem = word[:-2]
    candidates = [stem, word[:-1], *_undouble(stem)]
    if word.endswith("ier"):
        candidates.append(word[:-3] + "y")
    return candidates


def _est_candidates(word: str) -> list[str]:
    stem = word[:-3]
    candidates = [stem, word[:-2], *_undouble(stem)]
    if word.endswith("iest"):
        candidates.append(word[:-4] + "y")
    return candidates


@dataclass(frozen=True)
class SuffixRule:
    suffix: str
    min_length: int
    candidates: Callable[[str], list[str]]

    def applies_to(self, word: str) -> bool:
        return word.endswith(self.suffix) and len(word) > self.min_length


# Evaluated in order; the first rule yielding a known base wins.
SUFFIX_RULES: tuple[SuffixRule, ...] = (
    SuffixRule("ly", 3, _ly_candidates),
    SuffixRule("s", 3, _s_candidates),
    SuffixRule("ed", 4, _ed_candidates),
    SuffixRule("ing", 5, _ing_candidates),
    SuffixRule("er", 4, _er_candidates),
    SuffixRule("est", 5, _est_candidates),
)


def clean_token(token: str) -> str:
    return _NON_LETTER_RE.sub("", token).lower()


def lemmatize(
    word: str,
    vocabulary: VocabularyDatabase,
    irregular: Mapping[str, str] = IRREGULAR_FORMS,
) -> str:
    """Heuristically recover the base form of an inflected word.

    The irregular table is consulted first. Otherwise each suffix rule whose
    length gate passes proposes candidate bases (plain strip plus the usual
    spelling variants) and the first candidate present in the vocabulary is
    returned. With no hit the word itself is the lemma.
    """
    word = word.lower()
    if word in irregular:
        return irregular[word]

    for rule in SUFFIX_RULES:
        if not rule.applies_to(word):
            continue
        for candidate in rule.candidates(word):
            if candidate in vocabulary:
                return candidate
    return word


def classify(
    token: str,
    vocabulary: VocabularyDatabase,
    irregular: Mapping[str, str] = IRREGULAR_FORMS,
) -> int:
    """Return the difficulty tier of a token.

    0 for tokens under two letters, 1-6 for the lowest tier containing the
    word or its lemma, 99 when neither is in any tier.
    """
    word = clean_token(token)
    if len(word) < 2:
        return IGNORED

    level = vocabulary.level_of(word)
    if level:
        return level

    level = vocabulary.level_of(lemmatize(word, vocabulary, irregular))
    return level or OUT_OF_SYLLABUS


def entry_level(
    word: str,
    declared: int | str | None,
    vocabulary: VocabularyDatabase,
) -> int:
    """Tier of an annotation entry: its declared level if usable, else classified."""
    try:
        level = int(declared) if declared is not None else 0
    except (TypeError, ValueError):
        level = 0
    return level if level > 0 else classify(word, vocabulary)
