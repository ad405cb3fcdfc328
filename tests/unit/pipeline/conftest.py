import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from novel_kit.llms.base import LLMResponse, Usage
from novel_kit.parsers.models import Chapter, Segment


def _response(payload: Any) -> LLMResponse:
    if payload is None or isinstance(payload, str):
        content = payload
    else:
        content = json.dumps(payload, ensure_ascii=False)
    return LLMResponse(
        content=content,
        finish_reason="stop",
        usage=Usage(prompt_tokens=1, completion_tokens=1, total_tokens=2),
        latency_ms=1.0,
    )


@pytest.fixture
def make_client() -> Callable[..., MagicMock]:
    """Build a fake LLM client answering with the given payloads in turn.

    Exceptions in the payload list are raised instead of answered.
    """

    def factory(*payloads: Any) -> MagicMock:
        client = MagicMock()
        client.complete = AsyncMock(
            side_effect=[p if isinstance(p, Exception) else _response(p) for p in payloads]
        )
        return client

    return factory


@pytest.fixture
def chapter() -> Chapter:
    return Chapter(
        title="第一章 开始",
        segments=[
            Segment(id="seg-0", text="第一章 开始", is_chapter_header=True),
            Segment(id="seg-1", text="他走进了港口。"),
            Segment(id="seg-2", text="灯笼在风中摇晃。"),
            Segment(id="seg-3", text="她笑了。"),
        ],
    )
