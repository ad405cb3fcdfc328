import pytest

from novel_kit.chunking.document import PrintDocument
from novel_kit.chunking.models import BreakItem, ContentItem, HeaderItem, SmartRow
from novel_kit.parsers.models import Chapter, Segment, SegmentStatus
from novel_kit.vocabulary.database import VocabularyDatabase
from novel_kit.vocabulary.models import VocabResult, VocabWord


def _chapters() -> list[Chapter]:
    return [
        Chapter(
            title="第一章",
            segments=[
                Segment(id="seg-0", text="第一章", is_chapter_header=True),
                Segment(
                    id="seg-1",
                    text="他笑了。",
                    status=SegmentStatus.DONE,
                    en_text="He laughed.",
                    vocab_result=VocabResult(
                        id="seg-1", vocab=[VocabWord(w="laughed", l=3)]
                    ),
                ),
                Segment(id="seg-2", text="她哭了。", en_text="She cried."),
            ],
        )
    ]


class TestPrintDocument:
    def test_add_items_in_order(self) -> None:
        doc = PrintDocument()

        doc.add_header("Chapter 1")
        doc.add_content("猫", "cat")
        doc.add_break()

        assert doc.items == (
            HeaderItem(text="Chapter 1"),
            ContentItem(cn="猫", en="cat"),
            BreakItem(),
        )
        assert len(doc) == 3

    def test_remove_by_index(self) -> None:
        doc = PrintDocument([HeaderItem(text="a"), BreakItem(), HeaderItem(text="b")])

        removed = doc.remove(1)

        assert removed == BreakItem()
        assert [item.kind for item in doc.items] == ["header", "header"]

    def test_remove_out_of_range(self) -> None:
        doc = PrintDocument()

        with pytest.raises(IndexError):
            doc.remove(0)

    @pytest.mark.parametrize("index", [-1, 3])
    def test_remove_rejects_out_of_range_index(self, index: int) -> None:
        doc = PrintDocument([HeaderItem(text="a"), BreakItem(), HeaderItem(text="b")])

        with pytest.raises(IndexError):
            doc.remove(index)

        assert len(doc) == 3

    def test_clear(self) -> None:
        doc = PrintDocument([BreakItem()])

        doc.clear()

        assert len(doc) == 0

    def test_add_segments_takes_headers_and_done_only(self) -> None:
        doc = PrintDocument()

        added = doc.add_segments(_chapters(), ["seg-0", "seg-1", "seg-2", "seg-9"])

        assert added == 2
        assert doc[0] == HeaderItem(text="第一章")
        assert isinstance(doc[1], ContentItem)
        assert doc[1].en == "He laughed."
        assert [v.w for v in doc[1].vocab] == ["laughed"]

    def test_layout_recomputed_from_items(self) -> None:
        doc = PrintDocument()
        doc.add_content("猫", "cat")
        vocabulary = VocabularyDatabase()

        first = doc.layout(vocabulary)
        doc.add_content("狗", "dog")
        second = doc.layout(vocabulary)

        assert len(first) == 1
        assert len(second) == 2
        assert all(isinstance(r, SmartRow) for r in second)

    def test_layout_after_remove_skips_removed_item(self) -> None:
        doc = PrintDocument()
        doc.add_header("Chapter 1")
        doc.add_content("猫", "cat")
        doc.add_break()

        doc.remove(1)
        rows = doc.layout(VocabularyDatabase())

        assert [row.item.kind for row in rows] == ["header", "break"]
        assert [row.index for row in rows] == [0, 1]

    def test_list_round_trip(self) -> None:
        doc = PrintDocument()
        doc.add_header("Chapter 1")
        doc.add_content("猫", "cat", [VocabWord(w="cat", l=1, cm="猫", definition="/kæt/")])
        doc.add_break()

        data = doc.to_list()

        assert data[1]["data"]["vocab"][0]["def"] == "/kæt/"
        assert PrintDocument.from_list(data).items == doc.items

    def test_from_list_rejects_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            PrintDocument.from_list([{"type": "image", "data": {}}])
