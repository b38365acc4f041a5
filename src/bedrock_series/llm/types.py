"""Shared LLM data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class LLMRequest:
    prompt: str


@dataclass(frozen=True)
class SamplingParams:
    """Fixed generation controls for one backend."""

    max_tokens: int
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    stop_sequences: List[str] = field(default_factory=list)
    temperature_max: float = 1.0

    def __post_init__(self) -> None:
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be >= 1, got {self.max_tokens}")
        if self.temperature is not None and not 0.0 <= self.temperature <= self.temperature_max:
            raise ValueError(
                f"temperature must be within [0, {self.temperature_max}], got {self.temperature}"
            )
        if self.top_p is not None and not 0.0 < self.top_p <= 1.0:
            raise ValueError(f"top_p must be within (0, 1], got {self.top_p}")
        if self.top_k is not None and self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")


@dataclass(frozen=True)
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class LLMResult:
    text: str
    backend: str
    model_id: str
    usage: Usage = field(default_factory=Usage)
    latency_ms: int = 0


class ConfigurationError(RuntimeError):
    """Invalid or missing configuration; raised before any API call."""


class AdapterErrorKind(str, Enum):
    SERIALIZATION_FAILED = "SerializationFailed"
    INVOCATION_FAILED = "InvocationFailed"
    DESERIALIZATION_FAILED = "DeserializationFailed"


class AdapterError(RuntimeError):
    """A backend round trip failed. The originating exception is chained."""

    def __init__(self, kind: AdapterErrorKind, backend: str, cause: BaseException) -> None:
        super().__init__(f"{backend}: {kind.value}: {cause}")
        self.kind = kind
        self.backend = backend
        self.cause = cause
