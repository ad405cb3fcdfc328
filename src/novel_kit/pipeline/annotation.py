# src/novel_kit/pipeline/annotation.py

import json
import logging
from collections.abc import Iterable
from time import monotonic

from pydantic import ValidationError

from novel_kit.llms.base import LLMClient, Message, Role
from novel_kit.observability import names
from novel_kit.observability.base import MetricsHook, NoOpMetricsHook
from novel_kit.parsers.models import Chapter, SegmentStatus, find_segment
from novel_kit.prompts.prompts_library import ANNOTATE_PROMPT, PromptsLibrary
from novel_kit.vocabulary.database import VocabularyDatabase
from novel_kit.vocabulary.models import VocabResult
from novel_kit.vocabulary.targets import extract_target_words

from .json_utils import extract_list, parse_json
from .models import AnnotationReport, AnnotationRequest

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 40


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def build_annotation_requests(
    chapters: list[Chapter],
    segment_ids: Iterable[str],
    vocabulary: VocabularyDatabase,
) -> list[AnnotationRequest]:
    """Build one request per translated segment and mark it as processing.

    Unknown ids and segments without a translation are skipped.
    """
    requests: list[AnnotationRequest] = []
    for segment_id in segment_ids:
        segment = find_segment(chapters, segment_id)
        if segment is None or not segment.en_text:
            logger.debug("Skipping segment without translation: %s", segment_id)
            continue
        segment.status = SegmentStatus.PROCESSING
        targets = extract_target_words(segment.en_text, vocabulary)
        requests.append(
            AnnotationRequest(
                id=segment.id,
                en=segment.en_text,
                focus_words=[t.word for t in targets],
            )
        )
    return requests


def parse_annotation_results(data: object) -> list[VocabResult]:
    """Validate raw model output; malformed entries are dropped with a warning."""
    results: list[VocabResult] = []
    for entry in extract_list(data):
        try:
            results.append(VocabResult.model_validate(entry))
        except ValidationError as e:
            logger.warning("Dropping malformed annotation entry %r: %s", entry, e)
    return results


def apply_annotation_results(
    chapters: list[Chapter],
    requests: list[AnnotationRequest],
    results: list[VocabResult],
) -> AnnotationReport:
    """Attach results to segments by id.

    Requested ids missing from `results` mark only their own segment as
    errored. Results for ids that were not requested are ignored.
    """
    by_id = {result.id: result for result in results}
    requested = {request.id for request in requests}

    succeeded: list[str] = []
    failed: list[str] = []
    previews: list[str] = []

    for request in requests:
        segment = find_segment(chapters, request.id)
        if segment is None:
            continue
        result = by_id.get(request.id)
        if result is None:
            segment.status = SegmentStatus.ERROR
            failed.append(request.id)
            previews.append(_preview(segment.text))
        else:
            segment.vocab_result = result
            segment.status = SegmentStatus.DONE
            succeeded.append(request.id)

    unexpected = tuple(rid for rid in by_id if rid not in requested)
    if unexpected:
        logger.warning("Ignoring annotation results for unrequested ids: %s", unexpected)
    if failed:
        logger.warning(
            "Failed to generate notes for %d of %d segments: %s",
            len(failed),
            len(requests),
            failed,
        )

    return AnnotationReport(
        succeeded=tuple(succeeded),
        failed=tuple(failed),
        failed_previews=tuple(previews),
        unexpected=unexpected,
    )


class Annotator:
    """Generates vocabulary notes for a batch of translated segments.

    A hard failure (transport, unparseable answer) reverts the batch to
    pending and propagates; missing ids are reported in the AnnotationReport.
    """

    def __init__(
        self,
        client: LLMClient,
        vocabulary: VocabularyDatabase,
        prompts: PromptsLibrary | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._client = client
        self._vocabulary = vocabulary
        self._prompt = (prompts or PromptsLibrary()).get(*ANNOTATE_PROMPT)
        self.metrics_hook = metrics_hook

    async def annotate(
        self, chapters: list[Chapter], segment_ids: Iterable[str]
    ) -> AnnotationReport:
        start = monotonic()
        requests = build_annotation_requests(chapters, segment_ids, self._vocabulary)
        if not requests:
            logger.info("No translated segments to annotate")
            return AnnotationReport()
        self.metrics_hook.record_gauge(names.ANNOTATION_BATCH_SIZE, len(requests))

        try:
            results = await self._request(requests)
        except Exception:
            for request in requests:
                segment = find_segment(chapters, request.id)
                if segment is not None:
                    segment.status = SegmentStatus.PENDING
            self.metrics_hook.increment(names.ANNOTATION_ERRORS_TOTAL)
            logger.exception("Annotation batch of %d segments failed", len(requests))
            raise

        report = apply_annotation_results(chapters, requests, results)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.ANNOTATION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.ANNOTATION_SEGMENTS_SUCCEEDED, len(report.succeeded)
        )
        self.metrics_hook.increment(names.ANNOTATION_SEGMENTS_FAILED, len(report.failed))
        logger.info(
            "Annotated %d segments (%d failed) in %.0fms",
            len(report.succeeded),
            len(report.failed),
            elapsed_ms,
        )
        return report

    async def _request(self, requests: list[AnnotationRequest]) -> list[VocabResult]:
        payload = json.dumps([r.model_dump() for r in requests], ensure_ascii=False)
        response = await self._client.complete(
            messages=[
                Message(role=Role.USER, content=self._prompt.render(payload=payload))
            ],
            json_mode=True,
        )
        if not response.content:
            raise ValueError(
                f"Empty response content. Finish reason: {response.finish_reason}"
            )
        return parse_annotation_results(parse_json(response.content))
