"""
Convert numerical TOV parameters (0-1) into a natural-language tone description for the model.
Banded so small slider changes don't produce different prompts.
"""

# (lower bound, wording); first band whose lower bound the value reaches wins
FORMALITY_BANDS = [
    (0.9, "very formal and professional"),
    (0.7, "formal but not stiff"),
    (0.5, "moderately formal"),
    (0.3, "casual but professional"),
    (0.0, "very casual and conversational"),
]

WARMTH_BANDS = [
    (0.8, "very warm and friendly"),
    (0.6, "moderately warm and approachable"),
    (0.4, "neutral tone"),
    (0.2, "slightly reserved"),
    (0.0, "professional and reserved"),
]

DIRECTNESS_BANDS = [
    (0.8, "very direct and to-the-point"),
    (0.6, "direct but not abrupt"),
    (0.4, "balanced directness"),
    (0.2, "subtle and indirect"),
    (0.0, "very subtle and indirect"),
]


def _band(value: float, bands: list[tuple[float, str]]) -> str:
    for lo, text in bands:
        if value >= lo:
            return text
    return bands[-1][1]


def tov_to_description(formality: float, warmth: float, directness: float) -> str:
    """One-line tone description, e.g. 'moderately formal, neutral tone, and balanced directness'."""
    f = _band(max(0, min(1, formality)), FORMALITY_BANDS)
    w = _band(max(0, min(1, warmth)), WARMTH_BANDS)
    d = _band(max(0, min(1, directness)), DIRECTNESS_BANDS)
    return f"{f}, {w}, and {d}"
