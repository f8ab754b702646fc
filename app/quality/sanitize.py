import re
from typing import Any

# Applied in order; earlier patterns take precedence over later, broader ones.
TEXT_REPLACEMENTS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bstreamlining\s+", re.IGNORECASE), "reducing "),
    (re.compile(r"\bstreamlines?\s+the\b", re.IGNORECASE), "reduces friction in"),
    (re.compile(r"\bstreamlines?\s", re.IGNORECASE), "reduces "),
    (re.compile(r"\bsmoother\s+operational\b", re.IGNORECASE), "fewer disruptive"),
    (re.compile(r"\boperational\s+workflows?\b", re.IGNORECASE), "cross-functional processes"),
    (re.compile(r"\boperational\s+readiness\b", re.IGNORECASE), "team focus"),
    (re.compile(r"\boperational\s+efficiency\b", re.IGNORECASE), "qualification clarity"),
    (re.compile(r"\bcan disrupt workflow significantly\b", re.IGNORECASE), "pulls your team off planned work"),
    (re.compile(r"\bsave your team time\b", re.IGNORECASE), "free your team from unqualified noise"),
    (re.compile(r"\bwaste valuable time\b", re.IGNORECASE), "cost your team cycles on deals that never close"),
]

ANALYSIS_FIELDS = ("value_proposition", "prospect_insights")


def sanitize_text(text: str) -> str:
    for pattern, replacement in TEXT_REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return text


def sanitize(parsed: dict[str, Any]) -> None:
    """Rewrite residual banned phrasing in place."""
    analysis = parsed.get("analysis")
    if isinstance(analysis, dict):
        for field in ANALYSIS_FIELDS:
            if isinstance(analysis.get(field), str):
                analysis[field] = sanitize_text(analysis[field])
    for msg in parsed.get("messages") or []:
        if isinstance(msg, dict) and isinstance(msg.get("message"), str):
            msg["message"] = sanitize_text(msg["message"])
