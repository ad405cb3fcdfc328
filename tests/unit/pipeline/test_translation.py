import json
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from novel_kit.parsers.models import Chapter, SegmentStatus
from novel_kit.pipeline.translation import Translator


class TestTranslator:
    @pytest.mark.asyncio
    async def test_translates_content_segments(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(
            ["He walked into the harbor.", "The lantern swayed.", "She laughed."]
        )

        report = await Translator(client).translate_chapter(chapter)

        assert report.ok
        assert report.translated == 3
        assert chapter.is_translated
        assert [s.en_text for s in chapter.content_segments] == [
            "He walked into the harbor.",
            "The lantern swayed.",
            "She laughed.",
        ]
        assert all(s.status == SegmentStatus.PENDING for s in chapter.segments)
        assert chapter.segments[0].en_text is None

    @pytest.mark.asyncio
    async def test_sends_source_texts_in_json_mode(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(["a", "b", "c"])

        await Translator(client).translate_chapter(chapter)

        kwargs = client.complete.call_args.kwargs
        assert kwargs["json_mode"] is True
        prompt = kwargs["messages"][0].content
        assert json.dumps(["他走进了港口。", "灯笼在风中摇晃。", "她笑了。"], ensure_ascii=False) in prompt
        assert "第一章 开始" not in prompt

    @pytest.mark.asyncio
    async def test_wrapped_array_accepted(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client({"translations": ["a", "b", "c"]})

        report = await Translator(client).translate_chapter(chapter)

        assert report.translated == 3

    @pytest.mark.asyncio
    async def test_short_answer_marks_missing_segments(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(["a", "b"])

        report = await Translator(client).translate_chapter(chapter)

        assert not report.ok
        assert report.missing == 1
        assert not chapter.is_translated
        assert chapter.segments[3].status == SegmentStatus.ERROR
        assert chapter.segments[3].en_text is None
        assert chapter.segments[1].en_text == "a"

    @pytest.mark.asyncio
    async def test_null_and_blank_entries_count_as_missing(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(["a", None, "  "])

        report = await Translator(client).translate_chapter(chapter)

        assert report.translated == 1
        assert report.missing == 2
        assert not chapter.is_translated
        assert chapter.segments[2].en_text is None
        assert chapter.segments[2].status == SegmentStatus.ERROR
        assert chapter.segments[3].status == SegmentStatus.ERROR

    @pytest.mark.asyncio
    async def test_surplus_results_ignored(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(["a", "b", "c", "d"])

        report = await Translator(client).translate_chapter(chapter)

        assert report.translated == 3
        assert chapter.is_translated

    @pytest.mark.asyncio
    async def test_transport_failure_marks_chapter_errored(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(ConnectionError("down"))
        metrics_hook = MagicMock()

        with pytest.raises(ConnectionError):
            await Translator(client, metrics_hook=metrics_hook).translate_chapter(chapter)

        assert all(s.status == SegmentStatus.ERROR for s in chapter.content_segments)
        assert not chapter.is_translated
        metrics_hook.increment.assert_called_once_with("translation_errors_total")

    @pytest.mark.asyncio
    async def test_unparseable_answer_raises(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client("I cannot translate this.")

        with pytest.raises(ValueError):
            await Translator(client).translate_chapter(chapter)

        assert chapter.segments[1].status == SegmentStatus.ERROR

    @pytest.mark.asyncio
    async def test_empty_content_raises(
        self, chapter: Chapter, make_client: Callable[..., MagicMock]
    ) -> None:
        client = make_client(None)

        with pytest.raises(ValueError, match="Empty response content"):
            await Translator(client).translate_chapter(chapter)

    @pytest.mark.asyncio
    async def test_header_only_chapter_skips_request(
        self, make_client: Callable[..., MagicMock]
    ) -> None:
        chapter = Chapter(title="序章")
        client = make_client()

        report = await Translator(client).translate_chapter(chapter)

        assert report.translated == 0
        client.complete.assert_not_called()
