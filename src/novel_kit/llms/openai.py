# src/novel_kit/llms/openai.py

import logging
from time import monotonic
from typing import Any, Literal

from openai import (
    NOT_GIVEN,
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    BadRequestError,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from novel_kit.observability import names
from novel_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient, LLMResponse, Message, Role, Usage

logger = logging.getLogger(__name__)

JSON_SYSTEM_PROMPT = "You are a JSON generator. Output valid JSON only."

_TRANSPORT_ERRORS = (
    APIConnectionError,
    APITimeoutError,
    RateLimitError,
    InternalServerError,
)


class OpenAILLMClient(LLMClient):
    """OpenAI (and OpenAI-compatible endpoint) LLM client.

    Stateless. Transport-only retries. Falls back to a plain request when an
    endpoint rejects JSON mode or answers it with empty content.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout: float = 60.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized OpenAILLMClient with model=%s, base_url=%s, timeout=%s",
            model,
            base_url,
            timeout,
        )

    @property
    def _is_reasoning_model(self) -> bool:
        # o1 models take neither system messages nor response_format
        return self._model.startswith("o1")

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        start = monotonic()
        openai_messages = self._convert_messages(messages, json_mode=json_mode)
        use_json_format = json_mode and not self._is_reasoning_model

        logger.debug(
            "Calling OpenAI: model=%s, messages=%d, json_mode=%s",
            self._model,
            len(messages),
            json_mode,
        )

        try:
            raw = await self._call_api(
                messages=openai_messages,
                temperature=temperature,
                max_tokens=max_tokens,
                json_format=use_json_format,
            )
        except BadRequestError:
            if not use_json_format:
                self.metrics_hook.increment(
                    names.LLM_ERRORS_TOTAL, labels={"provider": "openai"}
                )
                raise
            logger.warning(
                "OpenAI rejected response_format=json_object, retrying without it"
            )
            raw = await self._call_api(
                messages=openai_messages,
                temperature=temperature,
                max_tokens=max_tokens,
                json_format=False,
            )

        if use_json_format and not raw.choices[0].message.content:
            logger.warning("Empty content received in JSON mode, retrying without it")
            raw = await self._call_api(
                messages=openai_messages,
                temperature=temperature,
                max_tokens=max_tokens,
                json_format=False,
            )

        elapsed_ms = 1000 * (monotonic() - start)
        response = self._normalize_response(raw, elapsed_ms)

        self.metrics_hook.record_latency(names.LLM_COMPLETION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.LLM_REQUESTS_TOTAL,
            labels={"provider": "openai", "model": self._model},
        )
        self.metrics_hook.increment(
            names.LLM_TOKENS_PROMPT, response.usage.prompt_tokens
        )
        self.metrics_hook.increment(
            names.LLM_TOKENS_COMPLETION, response.usage.completion_tokens
        )
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, response.usage.total_tokens)

        logger.info(
            "OpenAI completion: finish=%s, tokens=%d, latency=%.0fms",
            response.finish_reason,
            response.usage.total_tokens,
            elapsed_ms,
        )
        return response

    async def _call_api(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int | None,
        json_format: bool,
    ) -> Any:
        """Call OpenAI API with transport-only retries."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(_TRANSPORT_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens if max_tokens else NOT_GIVEN,
                    response_format=(
                        {"type": "json_object"} if json_format else NOT_GIVEN  # type: ignore[arg-type]
                    ),
                )

    def _convert_messages(
        self, messages: list[Message], *, json_mode: bool = False
    ) -> list[dict]:
        """Convert Message objects to OpenAI format.

        Internal only. Provider format never leaks outside.
        """
        result = []
        has_system = any(m.role == Role.SYSTEM for m in messages)
        if json_mode and not has_system and not self._is_reasoning_model:
            result.append({"role": Role.SYSTEM.value, "content": JSON_SYSTEM_PROMPT})
        for m in messages:
            if m.role == Role.SYSTEM and self._is_reasoning_model:
                continue
            result.append({"role": m.role.value, "content": m.content})
        return result

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        """Normalize OpenAI response to LLMResponse.

        This is the boundary. Raw provider objects stop here.
        """
        choice = raw.choices[0]
        refusal = getattr(choice.message, "refusal", None)

        finish_reason: Literal["stop", "length", "refusal", "error"]
        if isinstance(refusal, str) and refusal:
            logger.warning("OpenAI model refused: %s", refusal)
            finish_reason = "refusal"
        elif choice.finish_reason == "stop":
            finish_reason = "stop"
        elif choice.finish_reason == "length":
            finish_reason = "length"
        else:
            finish_reason = "error"

        return LLMResponse(
            content=choice.message.content,
            finish_reason=finish_reason,
            usage=Usage(
                prompt_tokens=raw.usage.prompt_tokens,
                completion_tokens=raw.usage.completion_tokens,
                total_tokens=raw.usage.total_tokens,
            ),
            latency_ms=latency_ms,
        )
