"""DeepSeek R1 provider (chat-completions style response)."""

from __future__ import annotations

from typing import Any, Dict

from ..types import LLMRequest, SamplingParams
from .base import BedrockAdapter


class DeepSeekAdapter(BedrockAdapter):
    name = "deepseek"
    default_model_id = "us.deepseek.r1-v1:0"
    params = SamplingParams(max_tokens=512, temperature_max=2.0)

    def build(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "inferenceConfig": {"max_tokens": self.params.max_tokens},
            "messages": [{"role": "user", "content": request.prompt}],
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        message = choices[0].get("message") or {}
        content = message.get("content") or ""
        if not isinstance(content, str):
            raise TypeError(f"message content is {type(content).__name__}, expected string")
        return content
