# src/novel_kit/pipeline/translation.py

import json
import logging
from time import monotonic
from typing import Any

from novel_kit.llms.base import LLMClient, Message, Role
from novel_kit.observability import names
from novel_kit.observability.base import MetricsHook, NoOpMetricsHook
from novel_kit.parsers.models import Chapter, SegmentStatus
from novel_kit.prompts.prompts_library import TRANSLATE_PROMPT, PromptsLibrary

from .json_utils import extract_list, parse_json
from .models import TranslationReport

logger = logging.getLogger(__name__)


class Translator:
    """Translates one chapter per call.

    Failures are reported per chapter: every content segment of the failed
    chapter is marked as errored and the exception propagates.
    """

    def __init__(
        self,
        client: LLMClient,
        prompts: PromptsLibrary | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._client = client
        self._prompt = (prompts or PromptsLibrary()).get(*TRANSLATE_PROMPT)
        self.metrics_hook = metrics_hook

    async def translate_chapter(self, chapter: Chapter) -> TranslationReport:
        segments = chapter.content_segments
        if not segments:
            logger.debug("Chapter %r has no content to translate", chapter.title)
            return TranslationReport(chapter_title=chapter.title, translated=0)

        start = monotonic()
        for segment in segments:
            segment.status = SegmentStatus.TRANSLATING
        self.metrics_hook.record_gauge(names.TRANSLATION_BATCH_SIZE, len(segments))

        try:
            translations = await self._request([s.text for s in segments])
        except Exception:
            for segment in segments:
                segment.status = SegmentStatus.ERROR
            self.metrics_hook.increment(names.TRANSLATION_ERRORS_TOTAL)
            logger.exception("Translation failed for chapter %r", chapter.title)
            raise

        # results are matched by position; surplus entries are dropped and
        # null, non-string or blank entries count as missing
        missing = []
        for index, segment in enumerate(segments):
            text = translations[index] if index < len(translations) else None
            if isinstance(text, str) and text.strip():
                segment.en_text = text
                segment.status = SegmentStatus.PENDING
            else:
                segment.status = SegmentStatus.ERROR
                missing.append(segment)
        chapter.is_translated = not missing
        if missing:
            logger.warning(
                "Chapter %r: %d of %d segments came back untranslated",
                chapter.title,
                len(missing),
                len(segments),
            )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.TRANSLATION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.TRANSLATION_SEGMENTS_TOTAL, len(segments) - len(missing)
        )
        logger.info(
            "Translated chapter %r: %d segments in %.0fms",
            chapter.title,
            len(segments) - len(missing),
            elapsed_ms,
        )
        return TranslationReport(
            chapter_title=chapter.title,
            translated=len(segments) - len(missing),
            missing=len(missing),
        )

    async def _request(self, texts: list[str]) -> list[Any]:
        prompt = self._prompt.render(segments=json.dumps(texts, ensure_ascii=False))
        response = await self._client.complete(
            messages=[Message(role=Role.USER, content=prompt)],
            json_mode=True,
        )
        if not response.content:
            raise ValueError(
                f"Empty response content. Finish reason: {response.finish_reason}"
            )
        return extract_list(parse_json(response.content))
