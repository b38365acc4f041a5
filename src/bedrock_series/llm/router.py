"""Backend-name routing: one adapter, one round trip, one output line."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Mapping, TextIO

from ..extractor import extract
from .providers.anthropic_provider import ClaudeAdapter
from .providers.base import BackendAdapter, Invoker
from .providers.deepseek_provider import DeepSeekAdapter
from .providers.llama_provider import Llama70bAdapter, LlamaAdapter
from .providers.nova_provider import NovaAdapter
from .types import ConfigurationError, LLMRequest

logger = logging.getLogger(__name__)

ADAPTER_CLASSES = {
    cls.name: cls
    for cls in (NovaAdapter, LlamaAdapter, Llama70bAdapter, ClaudeAdapter, DeepSeekAdapter)
}
BACKEND_NAMES = tuple(ADAPTER_CLASSES)
DEFAULT_BACKEND = "nova"


@dataclass(frozen=True)
class ExitOutcome:
    exit_code: int
    output: str


class BackendRouter:
    def __init__(
        self,
        settings: Dict[str, Any],
        invoker: Invoker,
        adapters: Mapping[str, BackendAdapter] | None = None,
    ) -> None:
        self.settings = settings
        self.invoker = invoker
        self._adapters = dict(adapters) if adapters is not None else None

    def names(self) -> list[str]:
        if self._adapters is not None:
            return list(self._adapters)
        return list(BACKEND_NAMES)

    def resolve(self, backend_name: str) -> BackendAdapter:
        if self._adapters is not None:
            adapter = self._adapters.get(backend_name)
        else:
            adapter = self._build_adapter(backend_name)
        if adapter is None:
            raise ConfigurationError(
                f"UnknownBackend: '{backend_name}' (expected one of {', '.join(self.names())})"
            )
        return adapter

    def _build_adapter(self, backend_name: str) -> BackendAdapter | None:
        adapter_cls = ADAPTER_CLASSES.get(backend_name)
        if adapter_cls is None:
            return None
        backend_cfg = (self.settings.get("backends") or {}).get(backend_name) or {}
        return adapter_cls(self.invoker, model_id=backend_cfg.get("model_id"))

    def run(self, backend_name: str, prompt_text: str, stdout: TextIO | None = None) -> ExitOutcome:
        adapter = self.resolve(backend_name)
        logger.info("Sending prompt to %s (%s)", adapter.name, adapter.model_id)

        result = adapter.generate(LLMRequest(prompt=prompt_text))
        extracted = extract(result.text)
        if not extracted.resolved:
            logger.info("No series pattern in %s output, printing raw text", adapter.name)

        output = extracted.render()
        print(output, file=stdout or sys.stdout)

        logger.info("Input tokens: %d", result.usage.input_tokens)
        logger.info("Output tokens: %d", result.usage.output_tokens)
        logger.debug("Latency: %d ms", result.latency_ms)
        return ExitOutcome(exit_code=0, output=output)
