# src/novel_kit/chunking/models.py

from dataclasses import dataclass, field
from typing import Any, Literal

from novel_kit.vocabulary.models import VocabWord


@dataclass(frozen=True)
class HeaderItem:
    text: str
    kind: Literal["header"] = field(default="header", init=False)


@dataclass(frozen=True)
class ContentItem:
    cn: str
    en: str
    vocab: tuple[VocabWord, ...] = ()
    kind: Literal["content"] = field(default="content", init=False)


@dataclass(frozen=True)
class BreakItem:
    kind: Literal["break"] = field(default="break", init=False)


PrintItem = HeaderItem | ContentItem | BreakItem


@dataclass(frozen=True)
class ItemRow:
    """A header or break standing on its own row."""

    item: HeaderItem | BreakItem
    index: int


@dataclass(frozen=True)
class SmartRow:
    """Consecutive content items laid out as one text/sidebar row.

    `entries` pairs each item with its index in the print item sequence.
    """

    entries: tuple[tuple[ContentItem, int], ...]

    @property
    def items(self) -> list[ContentItem]:
        return [item for item, _ in self.entries]

    @property
    def indices(self) -> list[int]:
        return [index for _, index in self.entries]


LayoutRow = ItemRow | SmartRow


def item_to_dict(item: PrintItem) -> dict[str, Any]:
    if isinstance(item, HeaderItem):
        return {"type": "header", "data": {"text": item.text}}
    if isinstance(item, ContentItem):
        return {
            "type": "content",
            "data": {
                "cn": item.cn,
                "en": item.en,
                "vocab": [v.model_dump(by_alias=True) for v in item.vocab],
            },
        }
    return {"type": "break", "data": {}}


def item_from_dict(data: dict[str, Any]) -> PrintItem:
    kind = data.get("type")
    payload = data.get("data") or {}
    if kind == "header":
        return HeaderItem(text=payload.get("text", ""))
    if kind == "content":
        return ContentItem(
            cn=payload.get("cn", ""),
            en=payload.get("en") or "",
            vocab=tuple(VocabWord.model_validate(v) for v in payload.get("vocab") or []),
        )
    if kind == "break":
        return BreakItem()
    raise ValueError(f"Unknown print item type: {kind!r}")
