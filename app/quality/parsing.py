"""
Extract the JSON payload from raw model text as an ordered chain of parse attempts.
"""
import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from app.errors import GenerationFailed

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
SNIPPET_CHARS = 300


@dataclass(frozen=True)
class ParseResult:
    ok: bool
    data: Any = None
    error: str = ""


def _parse_direct(content: str) -> ParseResult:
    try:
        return ParseResult(ok=True, data=json.loads(content))
    except json.JSONDecodeError as e:
        return ParseResult(ok=False, error=f"direct parse failed: {e}")


def _parse_fenced(content: str) -> ParseResult:
    match = FENCE_RE.search(content)
    if not match:
        return ParseResult(ok=False, error="no fenced code block")
    try:
        return ParseResult(ok=True, data=json.loads(match.group(1)))
    except json.JSONDecodeError as e:
        return ParseResult(ok=False, error=f"fenced block parse failed: {e}")


PARSE_CHAIN: list[Callable[[str], ParseResult]] = [_parse_direct, _parse_fenced]


def parse_model_json(content: str) -> ParseResult:
    """First successful attempt wins; otherwise the last failure is returned."""
    result = ParseResult(ok=False, error="empty content")
    for attempt in PARSE_CHAIN:
        result = attempt(content)
        if result.ok:
            return result
    return result


def parse_or_fail(content: str) -> Any:
    result = parse_model_json(content)
    if not result.ok:
        logger.error("Failed to parse AI response as JSON (%s). Snippet: %r", result.error, content[:SNIPPET_CHARS])
        raise GenerationFailed(f"unparseable model output: {result.error}")
    return result.data
