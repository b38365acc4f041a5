"""Anthropic Claude on Bedrock (Messages API body)."""

from __future__ import annotations

from typing import Any, Dict

from ..types import LLMRequest, SamplingParams
from .base import BedrockAdapter, first_text

ANTHROPIC_VERSION = "bedrock-2023-05-31"


class ClaudeAdapter(BedrockAdapter):
    name = "claude"
    default_model_id = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"
    params = SamplingParams(max_tokens=200, temperature=1.0, top_p=0.999, top_k=250)

    def build(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": self.params.max_tokens,
            "top_k": self.params.top_k,
            "stop_sequences": list(self.params.stop_sequences),
            "temperature": self.params.temperature,
            "top_p": self.params.top_p,
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": request.prompt}]},
            ],
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        return first_text(data.get("content"))
