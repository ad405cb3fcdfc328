# Parsing
from .parsers import (
    Chapter,
    PlainTextParser,
    Segment,
    SegmentStatus,
    normalize_title,
    read_novel,
    segment_text,
    to_arabic,
)

# Vocabulary
from .vocabulary import (
    TargetWord,
    VocabResult,
    VocabularyDatabase,
    VocabWord,
    classify,
    extract_target_words,
    lemmatize,
)

# Chunking
from .chunking import (
    BreakItem,
    ContentItem,
    HeaderItem,
    HeightModel,
    ItemRow,
    PrintDocument,
    SmartRow,
    chunk_print_items,
)

# LLMs
from .llms import LLMConfig, create_llm_client

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Pipeline
from .pipeline import AnnotationReport, Annotator, TranslationReport, Translator

# Prompts
from .prompts import Prompt, PromptsLibrary

__all__ = [
    # Parsing
    "Chapter",
    "PlainTextParser",
    "Segment",
    "SegmentStatus",
    "normalize_title",
    "read_novel",
    "segment_text",
    "to_arabic",
    # Vocabulary
    "TargetWord",
    "VocabResult",
    "VocabWord",
    "VocabularyDatabase",
    "classify",
    "extract_target_words",
    "lemmatize",
    # Chunking
    "BreakItem",
    "ContentItem",
    "HeaderItem",
    "HeightModel",
    "ItemRow",
    "PrintDocument",
    "SmartRow",
    "chunk_print_items",
    # LLMs
    "LLMConfig",
    "create_llm_client",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Pipeline
    "AnnotationReport",
    "Annotator",
    "TranslationReport",
    "Translator",
    # Prompts
    "Prompt",
    "PromptsLibrary",
]
