"""Recovers the series name from free-form model output.

Strategies run in order and the first one that yields a value wins:

1. strict: a ``[{"series": "..."}]`` array anywhere in the text
2. loose: a bare ``"series": "..."`` pair
3. fallback: the text itself, stripped of surrounding whitespace

The fallback never fails, so extraction always produces something printable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

# ASCII whitespace only: a no-break space between tokens does not count as a match.
STRICT_PATTERN = re.compile(r'\[\s*\{\s*"series"\s*:\s*"([^"]*)"\s*\}\s*\]', re.ASCII)
LOOSE_PATTERN = re.compile(r'"series"\s*:\s*"([^"]*)"', re.ASCII)


@dataclass(frozen=True)
class ExtractedSeries:
    series: Optional[str]
    text: str

    @property
    def resolved(self) -> bool:
        return self.series is not None

    def render(self) -> str:
        if self.series is None:
            return self.text
        return f'[{{"series": "{self.series}"}}]'


def _search(pattern: re.Pattern[str]) -> Callable[[str], Optional[str]]:
    def strategy(text: str) -> Optional[str]:
        match = pattern.search(text)
        return match.group(1) if match else None

    return strategy


strict_array = _search(STRICT_PATTERN)
loose_key_value = _search(LOOSE_PATTERN)

STRATEGIES: List[Callable[[str], Optional[str]]] = [strict_array, loose_key_value]


def extract(raw_text: str) -> ExtractedSeries:
    for strategy in STRATEGIES:
        value = strategy(raw_text)
        if value is not None:
            return ExtractedSeries(series=value, text=raw_text)
    return ExtractedSeries(series=None, text=raw_text.strip())
