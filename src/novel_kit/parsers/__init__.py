from .base import NovelParser
from .headings import HeadingKind, HeadingMatch, match_heading
from .models import Chapter, Segment, SegmentStatus, find_segment
from .numerals import to_arabic
from .text_parser import PlainTextParser, decode_text, read_novel, segment_text
from .titles import normalize_title

__all__ = [
    "Chapter",
    "HeadingKind",
    "HeadingMatch",
    "NovelParser",
    "PlainTextParser",
    "Segment",
    "SegmentStatus",
    "decode_text",
    "find_segment",
    "match_heading",
    "normalize_title",
    "read_novel",
    "segment_text",
    "to_arabic",
]
