"""
Grounding-based confidence. The model's self-reported score is only trusted when it roughly
agrees with what the payload actually references.
"""
from typing import Any

from app.quality.text import ANALYSIS_GENERIC_PHRASES, has_named_workflow, hits, lower_text, signal_keywords
from app.schemas.prospect import ProspectProfile

BASE_SCORE = 0.5
MIN_CONFIDENCE = 0.4
MAX_CONFIDENCE = 0.95
DISAGREEMENT_LIMIT = 0.3


def estimate_confidence(parsed: dict[str, Any], profile: ProspectProfile) -> float:
    analysis = parsed.get("analysis") or {}
    insights = lower_text(analysis.get("prospect_insights"))
    value_prop = lower_text(analysis.get("value_proposition"))
    skills = [s.lower() for s in profile.skills]
    headline_kw = signal_keywords(profile.headline)

    score = BASE_SCORE

    if skills:
        score += 0.2 if hits(insights, skills) else -0.1
    else:
        score -= 0.1

    # role grounding
    score += 0.15 if headline_kw and hits(insights, headline_kw) else -0.15

    # causal mapping
    if has_named_workflow(value_prop) and headline_kw and hits(value_prop, headline_kw):
        score += 0.15
    else:
        score -= 0.15

    if hits(insights, ANALYSIS_GENERIC_PHRASES):
        score -= 0.2

    return round(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, score)), 4)


def blend_confidence(model_confidence: float, computed: float) -> float:
    """
    Discard the model's score when it disagrees with the computed one by more than 0.3.

    The comparison uses the raw self-report, so a model answering on a 0-100 scale is discarded
    rather than clamped into agreement.
    """
    model_confidence = float(model_confidence)
    if abs(model_confidence - computed) > DISAGREEMENT_LIMIT:
        return computed
    return max(0.0, min(1.0, (model_confidence + computed) / 2))
