"""
Content-quality checks over a structurally valid model payload.

Every check runs and every finding is collected. Nothing here raises or blocks: what to do with
the findings is the caller's decision (see app.quality.policy).
"""
from typing import Any

from app.prompts.layers import LAYER_TEMPLATES, build_layer_plan
from app.quality.text import (
    ANALYSIS_GENERIC_PHRASES,
    GENERIC_FILLER_PHRASES,
    HARD_DOMAIN_CLAIMS,
    PERCENT_RE,
    content_words,
    extract_label,
    hits,
    is_sales_role,
    lower_text,
    word_count,
)
from app.schemas.prospect import ProspectProfile

RESTATEMENT_THRESHOLD = 0.5
EXPECTED_HOOKS = 2


def restatement_ratio(first: str, second: str) -> float:
    """Shared content words over the smaller message's content-word count; 0 when either is empty."""
    a = content_words(first)
    b = content_words(second)
    if not a or not b:
        return 0.0
    return len(a & b) / min(len(a), len(b))


def _check_analysis(analysis: dict[str, Any], profile: ProspectProfile) -> list[str]:
    issues: list[str] = []
    insights = lower_text(analysis.get("prospect_insights"))
    value_prop = lower_text(analysis.get("value_proposition"))
    raw_hooks = analysis.get("personalization_hooks")
    hooks = raw_hooks if isinstance(raw_hooks, list) else []
    skills = [s.lower() for s in profile.skills]

    analysis_text = " ".join([insights, value_prop] + [lower_text(h) for h in hooks])
    if PERCENT_RE.search(analysis_text):
        issues.append("analysis contains numeric percentage claims")

    if skills and not hits(insights, skills):
        issues.append("prospect_insights should reference at least one skill")
    if hits(insights, ANALYSIS_GENERIC_PHRASES):
        issues.append("prospect_insights contains generic phrasing")

    if len(hooks) != EXPECTED_HOOKS:
        issues.append(f"personalization_hooks must be exactly {EXPECTED_HOOKS} (found {len(hooks)})")

    if not is_sales_role(profile.role_category.value) and hits(value_prop, HARD_DOMAIN_CLAIMS):
        issues.append("value_proposition claims improvement to core technical system")
    return issues


def _check_message(index: int, msg: dict[str, Any], sales_role: bool, word_limit: int | None) -> list[str]:
    issues: list[str] = []
    idx = index + 1
    text = lower_text(msg.get("message"))
    reasoning = str(msg.get("reasoning") or "")

    if word_limit is not None:
        words = word_count(msg.get("message"))
        if words > word_limit:
            issues.append(f"message {idx} exceeds {word_limit} words ({words})")

    if PERCENT_RE.search(text):
        issues.append(f"message {idx} contains numeric percentage claim")
    if hits(text, GENERIC_FILLER_PHRASES):
        issues.append(f"message {idx} contains generic filler")
    if not sales_role and hits(text, HARD_DOMAIN_CLAIMS):
        issues.append(f"message {idx} claims improvement to core technical system")

    if not extract_label(reasoning, "angle"):
        issues.append(f"message {idx} reasoning missing Angle label")
    if not extract_label(reasoning, "workflow"):
        issues.append(f"message {idx} reasoning missing Workflow label")
    if len(extract_label(reasoning, "signal")) < 3:
        issues.append(f"message {idx} reasoning missing Signal (should mention a concrete profile element)")
    return issues


def _check_narrative(messages: list[dict[str, Any]]) -> list[str]:
    issues: list[str] = []
    texts = [str(m.get("message") or "").strip() for m in messages]

    if len(texts) >= 2 and all(t.endswith("?") for t in texts):
        issues.append("all messages end with questions; need progressive narrative layers")

    for i in range(1, len(texts)):
        ratio = restatement_ratio(texts[i - 1], texts[i])
        if ratio > RESTATEMENT_THRESHOLD:
            issues.append(f"messages {i} and {i + 1} are too similar ({round(ratio * 100)}% overlap)")
    return issues


def assess_quality(parsed: dict[str, Any], profile: ProspectProfile, company_context: str) -> list[str]:
    """Grounding and narrative findings for a structurally valid payload; empty list when clean."""
    analysis = parsed.get("analysis") or {}
    messages = parsed.get("messages") or []
    sales_role = is_sales_role(profile.role_category.value)

    plan = build_layer_plan(len(messages)) if messages else []

    issues = _check_analysis(analysis, profile)
    for index, msg in enumerate(messages):
        limit = LAYER_TEMPLATES[plan[index]].word_limit
        issues.extend(_check_message(index, msg, sales_role, limit))
    issues.extend(_check_narrative(messages))
    return issues
