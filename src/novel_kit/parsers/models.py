# src/novel_kit/parsers/models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from novel_kit.vocabulary.models import VocabResult


class SegmentStatus(str, Enum):
    """Processing state of a single segment."""

    PENDING = "pending"
    TRANSLATING = "translating"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass
class Segment:
    """One line of source text.

    Identity is `id`; it is assigned once at parse time and never changes.
    `status`, `en_text` and `vocab_result` are updated by the pipeline.
    """

    id: str
    text: str
    is_chapter_header: bool = False
    status: SegmentStatus = SegmentStatus.PENDING
    en_text: str | None = None
    vocab_result: VocabResult | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "is_chapter_header": self.is_chapter_header,
            "status": self.status.value,
        }
        if self.en_text is not None:
            data["en_text"] = self.en_text
        if self.vocab_result is not None:
            data["vocab_result"] = self.vocab_result.model_dump(by_alias=True)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        vocab = data.get("vocab_result")
        return cls(
            id=data["id"],
            text=data["text"],
            is_chapter_header=data.get("is_chapter_header", False),
            status=SegmentStatus(data.get("status", SegmentStatus.PENDING.value)),
            en_text=data.get("en_text"),
            vocab_result=VocabResult.model_validate(vocab) if vocab else None,
        )


@dataclass
class Chapter:
    """A heading plus the lines that follow it, in source order."""

    title: str
    segments: list[Segment] = field(default_factory=list)
    is_translated: bool = False

    @property
    def content_segments(self) -> list[Segment]:
        return [s for s in self.segments if not s.is_chapter_header]

    def find_segment(self, segment_id: str) -> Segment | None:
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "segments": [s.to_dict() for s in self.segments],
            "is_translated": self.is_translated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chapter":
        return cls(
            title=data["title"],
            segments=[Segment.from_dict(s) for s in data.get("segments", [])],
            is_translated=data.get("is_translated", False),
        )


def find_segment(chapters: list[Chapter], segment_id: str) -> Segment | None:
    """Look a segment up by id across a whole document."""
    for chapter in chapters:
        segment = chapter.find_segment(segment_id)
        if segment is not None:
            return segment
    return None
