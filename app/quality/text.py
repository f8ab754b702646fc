"""
Phrase lists and small text helpers shared by the content checks and the confidence estimator.
"""
import re
from typing import Any

# Outbound automation cannot touch these systems; only flagged for non-sales roles.
HARD_DOMAIN_CLAIMS = [
    "improve ci/cd",
    "improve deployment",
    "improve backend performance",
    "improve threat modeling",
    "improve security controls",
    "enhance infrastructure",
    "boost reliability",
]

GENERIC_FILLER_PHRASES = [
    "would you be open to a brief chat",
    "would love to connect",
    "let me know if you'd be interested",
    "can we schedule a call",
    "happy to chat",
    "i've been following",
    "i came across your profile",
    "innovative approach",
    "i imagine",
    "i can see how",
    "cross-team collaboration",
    "this could help",
]

ANALYSIS_GENERIC_PHRASES = [
    "industry-leading",
    "unlock new opportunities",
    "drive growth",
    "transform your business",
]

CROSS_FUNCTIONAL_WORKFLOW_HINTS = [
    "sales-engineering handoff",
    "technical validation loop",
    "prospect qualification feedback cycle",
    "founder interrupt-driven engineering",
    "inbound triage burden",
    "pre-sales technical review",
    "outbound personalization research load",
    "qualification loop",
    "inbound triage",
    "technical validation step",
    "cross-functional escalation loop",
]

STOPWORDS = {
    "and", "the", "for", "with", "that", "this", "from", "into", "your",
    "their", "about", "over", "under", "build", "building", "senior",
    "lead", "manager", "engineer", "team", "role",
}

CONTENT_FILLER = STOPWORDS | {
    "often", "these", "they", "them", "which", "when", "what", "where",
    "many", "most", "some", "more", "also", "just", "like", "have", "been",
    "will", "would", "could", "should", "does", "didn", "aren", "isn",
    "wasn", "hasn", "don", "can", "not", "very", "much", "well", "even",
    "still", "come", "before", "after", "without", "leading",
}

SALES_ROLE_MARKERS = ("sales", "revenue", "business development")

PERCENT_RE = re.compile(r"\d+%")
WORKFLOW_TERM_RE = re.compile(
    r"\b(handoff|triage|qualification|validation|pre-sales|interrupt|research load|review cycle)\b"
)


def lower_text(value: Any) -> str:
    return str(value or "").lower()


def hits(text: str, tokens: list[str]) -> bool:
    """True when any token appears in the (already lowercased) text."""
    return any(t and t.lower() in text for t in tokens)


def extract_label(reasoning: str, label: str) -> str:
    """Value after 'Label:' in a reasoning string, up to the next separator."""
    match = re.search(rf"{label}\s*:\s*([^|.;\n]+)", reasoning, re.IGNORECASE)
    return match.group(1).strip().lower() if match else ""


def has_named_workflow(text: str) -> bool:
    lowered = text.lower()
    return hits(lowered, CROSS_FUNCTIONAL_WORKFLOW_HINTS) or bool(WORKFLOW_TERM_RE.search(lowered))


def is_sales_role(role: str) -> bool:
    lowered = role.lower()
    return any(marker in lowered for marker in SALES_ROLE_MARKERS)


def signal_keywords(text: str, limit: int = 12) -> list[str]:
    """Distinct headline keywords (>= 4 chars, no stopwords) in first-seen order."""
    seen: list[str] = []
    for token in re.split(r"[^a-z0-9]+", text.lower()):
        if len(token) >= 4 and token not in STOPWORDS and token not in seen:
            seen.append(token)
    return seen[:limit]


def content_words(text: str) -> set[str]:
    return {w for w in re.split(r"[^a-z]+", text.lower()) if len(w) >= 4 and w not in CONTENT_FILLER}


def word_count(text: str) -> int:
    return len(str(text or "").split())
