from .chunking import chunk_print_items
from .document import PrintDocument
from .heights import (
    HeightModel,
    estimate_card_height,
    estimate_text_height,
    sidebar_card_count,
)
from .models import (
    BreakItem,
    ContentItem,
    HeaderItem,
    ItemRow,
    LayoutRow,
    PrintItem,
    SmartRow,
)

__all__ = [
    "BreakItem",
    "ContentItem",
    "HeaderItem",
    "HeightModel",
    "ItemRow",
    "LayoutRow",
    "PrintDocument",
    "PrintItem",
    "SmartRow",
    "chunk_print_items",
    "estimate_card_height",
    "estimate_text_height",
    "sidebar_card_count",
]
