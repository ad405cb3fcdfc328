# src/novel_kit/vocabulary/models.py

from pydantic import BaseModel, ConfigDict, Field


class VocabWord(BaseModel):
    """One annotated word as returned by the annotation model.

    Field names follow the compact wire format: w (word), l (level),
    cm (meaning in context), def (side definition).
    """

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    w: str
    l: int | str = 99  # noqa: E741
    cm: str = ""
    definition: str = Field(default="", alias="def")


class VocabResult(BaseModel):
    """Annotations for one segment, matched back to it by id."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    vocab: list[VocabWord] = Field(default_factory=list)
