from .classifier import (
    IGNORED,
    MIN_TARGET_TIER,
    OUT_OF_SYLLABUS,
    SIDEBAR_TIERS,
    classify,
    entry_level,
    lemmatize,
)
from .database import TIERS, VocabularyDatabase, load_tier_file, tokenize_vocabulary
from .irregular import IRREGULAR_FORMS
from .models import VocabResult, VocabWord
from .targets import TargetWord, extract_target_words

__all__ = [
    "IGNORED",
    "IRREGULAR_FORMS",
    "MIN_TARGET_TIER",
    "OUT_OF_SYLLABUS",
    "SIDEBAR_TIERS",
    "TIERS",
    "TargetWord",
    "VocabResult",
    "VocabWord",
    "VocabularyDatabase",
    "classify",
    "entry_level",
    "extract_target_words",
    "lemmatize",
    "load_tier_file",
    "tokenize_vocabulary",
]
