"""Amazon Nova messages provider."""

from __future__ import annotations

from typing import Any, Dict

from ..types import LLMRequest, SamplingParams
from .base import BedrockAdapter, first_text


class NovaAdapter(BedrockAdapter):
    name = "nova"
    default_model_id = "us.amazon.nova-pro-v1:0"
    params = SamplingParams(max_tokens=512, temperature=0.7, top_p=0.9)

    def build(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "inferenceConfig": {
                "max_new_tokens": self.params.max_tokens,
                "temperature": self.params.temperature,
                "top_p": self.params.top_p,
            },
            "messages": [
                {"role": "user", "content": [{"text": request.prompt}]},
            ],
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        output = data.get("output") or {}
        if "content" in output:
            return first_text(output["content"])
        # The live service nests the reply one level deeper.
        return first_text((output.get("message") or {}).get("content"))
