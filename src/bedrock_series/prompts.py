"""Prompt builders."""

from __future__ import annotations

DEFAULT_SERIES_TEMPLATE = (
    "Identify the TV series referred to in the text below. "
    'Respond with only a JSON array of one object, exactly in the form [{{"series": "<name>"}}], '
    "and no other text. If no series can be identified, use an empty string as the name.\n\n"
    "Text:\n{input}"
)


class _SafeDict(dict):
    def __missing__(self, key):
        return "{" + key + "}"


def build_series_prompt(input_text: str, template: str | None = None) -> str:
    return (template or DEFAULT_SERIES_TEMPLATE).format_map(_SafeDict(input=input_text))
