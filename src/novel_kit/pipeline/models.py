# src/novel_kit/pipeline/models.py

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class AnnotationRequest(BaseModel):
    """One translated segment sent for vocabulary notes."""

    model_config = ConfigDict(extra="forbid")

    id: str
    en: str
    focus_words: list[str]


@dataclass(frozen=True)
class AnnotationReport:
    """Outcome of one annotation batch.

    A missing id is a failure of that segment only; siblings keep their
    results.
    """

    succeeded: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    failed_previews: tuple[str, ...] = ()
    unexpected: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class TranslationReport:
    chapter_title: str
    translated: int
    missing: int = 0

    @property
    def ok(self) -> bool:
        return self.missing == 0
