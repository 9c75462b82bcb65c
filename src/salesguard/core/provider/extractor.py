"""Recover a JSON value from free-text LLM output.

Strategies run in order and the first one that produces a value wins:

1. the whole text is JSON;
2. the interior of the first ```-fenced block (optionally tagged ``json``);
3. the span from the first ``{`` to the last ``}``.

No lenient repair is attempted. A text that none of the strategies can read
yields a :class:`ParseFailure` carrying the original text.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from salesguard.core.errors import ResponseParseError

NO_MATCH = object()

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")

Strategy = Callable[[str], Any]


@dataclass(frozen=True)
class Extracted:
    value: Any
    strategy: str

    ok = True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class ParseFailure:
    raw: str
    reason: str = "Could not parse valid JSON from LLM response"

    ok = False

    def unwrap(self) -> Any:
        raise ResponseParseError(self.reason, raw=self.raw)


ExtractResult = Extracted | ParseFailure


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return NO_MATCH


def parse_direct(raw: str) -> Any:
    return _loads(raw)


def parse_fenced(raw: str) -> Any:
    match = _FENCE_RE.search(raw)
    if match is None or not match.group(1):
        return NO_MATCH
    return _loads(match.group(1))


def parse_braces(raw: str) -> Any:
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end < start:
        return NO_MATCH
    return _loads(raw[start : end + 1])


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("direct", parse_direct),
    ("fenced", parse_fenced),
    ("braces", parse_braces),
)


def extract(raw: str, strategies: tuple[tuple[str, Strategy], ...] = STRATEGIES) -> ExtractResult:
    if not isinstance(raw, str):
        return ParseFailure(raw=repr(raw), reason="LLM response is not text")
    for name, strategy in strategies:
        value = strategy(raw)
        if value is not NO_MATCH:
            return Extracted(value=value, strategy=name)
    return ParseFailure(raw=raw)
