"""Backend adapter interface and the shared InvokeModel round trip."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Protocol

from ..types import (
    AdapterError,
    AdapterErrorKind,
    LLMRequest,
    LLMResult,
    SamplingParams,
    Usage,
)

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"


class Invoker(Protocol):
    def invoke(
        self,
        model_id: str,
        body: bytes,
        content_type: str = CONTENT_TYPE,
        accept: str = CONTENT_TYPE,
    ) -> bytes:
        ...


class BackendAdapter(Protocol):
    name: str
    model_id: str
    params: SamplingParams

    def build(self, request: LLMRequest) -> Dict[str, Any]:
        ...

    def decode(self, raw: bytes) -> LLMResult:
        ...

    def generate(self, request: LLMRequest) -> LLMResult:
        ...


def _int_field(record: Dict[str, Any], *keys: str) -> int:
    for key in keys:
        value = record.get(key)
        if value:
            return int(value)
    return 0


def parse_usage(data: Dict[str, Any]) -> Usage:
    """Reads token counters, tolerating snake_case, camelCase and Llama's native names."""
    usage = data.get("usage")
    if not isinstance(usage, dict):
        usage = {}
    return Usage(
        input_tokens=_int_field(usage, "input_tokens", "inputTokens")
        or _int_field(data, "prompt_token_count"),
        output_tokens=_int_field(usage, "output_tokens", "outputTokens")
        or _int_field(data, "generation_token_count"),
    )


def first_text(items: Any, key: str = "text") -> str:
    """Text of the first content item; an empty or missing list yields ''."""
    if not isinstance(items, list) or not items:
        return ""
    head = items[0]
    if not isinstance(head, dict):
        raise TypeError(f"content item is {type(head).__name__}, expected object")
    text = head.get(key) or ""
    if not isinstance(text, str):
        raise TypeError(f"content '{key}' is {type(text).__name__}, expected string")
    return text


class BedrockAdapter:
    """Common build/serialize/invoke/decode flow; subclasses supply the shapes."""

    name = ""
    default_model_id = ""
    params: SamplingParams

    def __init__(self, invoker: Invoker, model_id: str | None = None) -> None:
        self._invoker = invoker
        self.model_id = model_id or self.default_model_id

    def build(self, request: LLMRequest) -> Dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    def encode(self, payload: Dict[str, Any]) -> bytes:
        try:
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise AdapterError(AdapterErrorKind.SERIALIZATION_FAILED, self.name, exc) from exc

    def decode(self, raw: bytes) -> LLMResult:
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"response is {type(data).__name__}, expected object")
            text = self.extract_text(data)
            usage = parse_usage(data)
        except (TypeError, ValueError, AttributeError) as exc:
            raise AdapterError(AdapterErrorKind.DESERIALIZATION_FAILED, self.name, exc) from exc

        if not text:
            logger.debug("No response content received from %s", self.name)
        return LLMResult(text=text, backend=self.name, model_id=self.model_id, usage=usage)

    def generate(self, request: LLMRequest) -> LLMResult:
        body = self.encode(self.build(request))
        logger.debug("%s payload: %s", self.name, body.decode("utf-8"))

        start = time.perf_counter()
        try:
            raw = self._invoker.invoke(self.model_id, body, content_type=CONTENT_TYPE, accept=CONTENT_TYPE)
        except Exception as exc:
            raise AdapterError(AdapterErrorKind.INVOCATION_FAILED, self.name, exc) from exc
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("Raw %s response: %r", self.name, raw)

        result = self.decode(raw)
        result.latency_ms = latency_ms
        return result
