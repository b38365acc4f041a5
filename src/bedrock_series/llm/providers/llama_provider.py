"""Meta Llama completion-style providers."""

from __future__ import annotations

from typing import Any, Dict

from ..types import LLMRequest, SamplingParams
from .base import BedrockAdapter


class LlamaAdapter(BedrockAdapter):
    name = "llama"
    default_model_id = "us.meta.llama3-2-1b-instruct-v1:0"
    params = SamplingParams(max_tokens=512, temperature=0.7, top_p=0.9)

    def build(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "prompt": request.prompt,
            "max_gen_len": self.params.max_tokens,
            "temperature": self.params.temperature,
            "top_p": self.params.top_p,
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        generation = data.get("generation") or ""
        if not isinstance(generation, str):
            raise TypeError(f"generation is {type(generation).__name__}, expected string")
        return generation


class Llama70bAdapter(LlamaAdapter):
    # Tuned for terse, near-deterministic output.
    name = "llama70b"
    default_model_id = "us.meta.llama3-3-70b-instruct-v1:0"
    params = SamplingParams(max_tokens=64, temperature=0.01, top_p=0.5)
