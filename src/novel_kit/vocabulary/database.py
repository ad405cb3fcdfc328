# src/novel_kit/vocabulary/database.py

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger(__name__)

TIERS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)

_VOCAB_WORD_RE = re.compile(r"\b[a-zA-Z-]{2,}\b")


def tokenize_vocabulary(text: str) -> set[str]:
    """Extract lowercase word forms (letters and hyphens, length >= 2)."""
    return {w.lower() for w in _VOCAB_WORD_RE.findall(text)}


def _check_tier(tier: int) -> None:
    if tier not in TIERS:
        raise ValueError(f"tier must be one of {TIERS}, got {tier!r}")


@dataclass(frozen=True)
class VocabularyDatabase:
    """Six graded vocabulary tiers, 1 (basic) to 6 (advanced).

    Immutable value owned by the caller. Every "with_*" method returns a new
    database; tiers are unioned, never replaced. A word may sit in several
    tiers, lookups report the lowest.
    """

    tiers: Mapping[int, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({t: frozenset() for t in TIERS})
    )

    def __post_init__(self) -> None:
        for tier in self.tiers:
            _check_tier(tier)
        normalized = {t: frozenset(self.tiers.get(t, ())) for t in TIERS}
        object.__setattr__(self, "tiers", MappingProxyType(normalized))

    @classmethod
    def from_words(cls, words_by_tier: Mapping[int, Iterable[str]]) -> "VocabularyDatabase":
        return cls(
            tiers={t: frozenset(w.lower() for w in ws) for t, ws in words_by_tier.items()}
        )

    @classmethod
    def from_directory(cls, directory: str | Path) -> "VocabularyDatabase":
        """Load tiers from "1.txt" .. "6.txt"; missing files are skipped."""
        db = cls()
        base = Path(directory)
        for tier in TIERS:
            path = base / f"{tier}.txt"
            if not path.exists():
                logger.warning("Vocabulary tier file missing: %s", path)
                continue
            db = db.with_file(tier, path)
        logger.info("Loaded vocabulary from %s: %s", base, db.stats())
        return db

    def with_words(self, tier: int, text: str) -> "VocabularyDatabase":
        """Return a copy with the words found in `text` added to `tier`."""
        _check_tier(tier)
        words = tokenize_vocabulary(text)
        merged = dict(self.tiers)
        merged[tier] = self.tiers[tier] | words
        logger.debug("Imported %d words into tier %d", len(words), tier)
        return VocabularyDatabase(tiers=merged)

    def with_file(self, tier: int, path: str | Path) -> "VocabularyDatabase":
        return self.with_words(tier, load_tier_file(path))

    def level_of(self, word: str) -> int:
        """Lowest tier containing `word` exactly, or 0."""
        for tier in TIERS:
            if word in self.tiers[tier]:
                return tier
        return 0

    def __hash__(self) -> int:
        return hash(tuple(self.tiers[t] for t in TIERS))

    def __contains__(self, word: object) -> bool:
        return any(word in self.tiers[t] for t in TIERS)

    def __iter__(self) -> Iterator[int]:
        return iter(TIERS)

    def stats(self) -> dict[int, int]:
        return {t: len(self.tiers[t]) for t in TIERS}

    @property
    def is_empty(self) -> bool:
        return not any(self.tiers[t] for t in TIERS)


def load_tier_file(path: str | Path) -> str:
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()
