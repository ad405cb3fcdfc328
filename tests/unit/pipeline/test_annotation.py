from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from novel_kit.parsers.models import Chapter, Segment, SegmentStatus
from novel_kit.pipeline.annotation import (
    Annotator,
    apply_annotation_results,
    build_annotation_requests,
    parse_annotation_results,
)
from novel_kit.vocabulary.database import VocabularyDatabase
from novel_kit.vocabulary.models import VocabResult, VocabWord


@pytest.fixture
def vocabulary() -> VocabularyDatabase:
    return VocabularyDatabase.from_words(
        {
            1: ["he", "the", "she", "in", "wind", "into"],
            2: ["walked", "laughed"],
            3: ["harbor"],
            4: ["lantern", "sway"],
        }
    )


@pytest.fixture
def translated(chapter: Chapter) -> Chapter:
    for segment, text in zip(
        chapter.content_segments,
        ["He walked into the harbor.", "The lantern swayed in the wind.", "She laughed."],
    ):
        segment.en_text = text
    return chapter


def _result(segment_id: str, word: str = "harbor") -> dict:
    return {"id": segment_id, "vocab": [{"w": word, "l": 3, "cm": "港口", "def": "/ˈhɑːrbər/"}]}


class TestBuildAnnotationRequests:
    def test_requests_carry_focus_words(
        self, translated: Chapter, vocabulary: VocabularyDatabase
    ) -> None:
        requests = build_annotation_requests([translated], ["seg-1", "seg-2"], vocabulary)

        assert [r.id for r in requests] == ["seg-1", "seg-2"]
        assert requests[0].focus_words == ["harbor"]
        assert requests[1].focus_words == ["lantern", "swayed"]
        assert translated.segments[1].status == SegmentStatus.PROCESSING

    def test_untranslated_and_unknown_skipped(
        self, chapter: Chapter, vocabulary: VocabularyDatabase
    ) -> None:
        requests = build_annotation_requests([chapter], ["seg-1", "seg-9"], vocabulary)

        assert requests == []
        assert chapter.segments[1].status == SegmentStatus.PENDING


class TestParseAnnotationResults:
    def test_malformed_entries_dropped(self) -> None:
        results = parse_annotation_results([_result("seg-1"), {"vocab": []}, "junk"])

        assert [r.id for r in results] == ["seg-1"]

    def test_numeric_ids_coerced(self) -> None:
        results = parse_annotation_results([{"id": 7, "vocab": []}])

        assert results[0].id == "7"


class TestApplyAnnotationResults:
    def test_partial_results(
        self, translated: Chapter, vocabulary: VocabularyDatabase
    ) -> None:
        requests = build_annotation_requests([translated], ["seg-1", "seg-2"], vocabulary)
        results = [VocabResult(id="seg-1", vocab=[VocabWord(w="harbor", l=3)])]

        report = apply_annotation_results([translated], requests, results)

        assert report.succeeded == ("seg-1",)
        assert report.failed == ("seg-2",)
        assert report.failed_previews == ("灯笼在风中摇晃。",)
        assert translated.segments[1].status == SegmentStatus.DONE
        assert translated.segments[1].vocab_result == results[0]
        assert translated.segments[2].status == SegmentStatus.ERROR

    def test_unrequested_ids_ignored(
        self, translated: Chapter, vocabulary: VocabularyDatabase
    ) -> None:
        requests = build_annotation_requests([translated], ["seg-1"], vocabulary)
        results = [VocabResult(id="seg-1"), VocabResult(id="seg-3")]

        report = apply_annotation_results([translated], requests, results)

        assert report.ok
        assert report.unexpected == ("seg-3",)
        assert translated.segments[3].vocab_result is None

    def test_long_previews_truncated(self, vocabulary: VocabularyDatabase) -> None:
        chapter = Chapter(title="x")
        chapter.segments.append(Segment(id="seg-0", text="长" * 50, en_text="harbor"))
        requests = build_annotation_requests([chapter], ["seg-0"], vocabulary)

        report = apply_annotation_results([chapter], requests, [])

        assert report.failed_previews == ("长" * 40 + "...",)


class TestAnnotator:
    @pytest.mark.asyncio
    async def test_annotates_batch(
        self,
        translated: Chapter,
        vocabulary: VocabularyDatabase,
        make_client: Callable[..., MagicMock],
    ) -> None:
        client = make_client([_result("seg-1"), _result("seg-2", "lantern")])

        report = await Annotator(client, vocabulary).annotate(
            [translated], ["seg-1", "seg-2"]
        )

        assert report.ok
        assert report.succeeded == ("seg-1", "seg-2")
        assert translated.segments[2].vocab_result.vocab[0].w == "lantern"
        assert client.complete.call_args.kwargs["json_mode"] is True
        assert '"focus_words": ["harbor"]' in client.complete.call_args.kwargs[
            "messages"
        ][0].content

    @pytest.mark.asyncio
    async def test_missing_id_fails_only_that_segment(
        self,
        translated: Chapter,
        vocabulary: VocabularyDatabase,
        make_client: Callable[..., MagicMock],
    ) -> None:
        client = make_client([_result("seg-2", "lantern")])
        metrics_hook = MagicMock()

        report = await Annotator(client, vocabulary, metrics_hook=metrics_hook).annotate(
            [translated], ["seg-1", "seg-2"]
        )

        assert report.failed == ("seg-1",)
        assert translated.segments[1].status == SegmentStatus.ERROR
        assert translated.segments[2].status == SegmentStatus.DONE
        metrics_hook.increment.assert_any_call("annotation_segments_succeeded", 1)
        metrics_hook.increment.assert_any_call("annotation_segments_failed", 1)

    @pytest.mark.asyncio
    async def test_hard_failure_reverts_to_pending(
        self,
        translated: Chapter,
        vocabulary: VocabularyDatabase,
        make_client: Callable[..., MagicMock],
    ) -> None:
        client = make_client("this is not json")

        with pytest.raises(ValueError):
            await Annotator(client, vocabulary).annotate([translated], ["seg-1", "seg-2"])

        assert translated.segments[1].status == SegmentStatus.PENDING
        assert translated.segments[2].status == SegmentStatus.PENDING

    @pytest.mark.asyncio
    async def test_nothing_to_annotate(
        self,
        chapter: Chapter,
        vocabulary: VocabularyDatabase,
        make_client: Callable[..., MagicMock],
    ) -> None:
        client = make_client()

        report = await Annotator(client, vocabulary).annotate([chapter], ["seg-1"])

        assert report.succeeded == ()
        client.complete.assert_not_called()
