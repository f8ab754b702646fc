"""
Adaptive step progression: how many narrative layers a sequence of N messages carries, and what
each layer must do.

Every position argues for the same friction (chosen by the model from the active workflows);
the layers only change the rhetorical job of each message.
"""
from dataclasses import dataclass
from enum import Enum

STEP_ONE_WORD_LIMIT = 60


class NarrativeLayer(str, Enum):
    OBSERVATION_CTA = "observation+cta"
    OBSERVATION = "observation"
    SPOTLIGHT = "spotlight"
    CAUSAL_LINK = "causal-link"
    IMPROVEMENT = "improvement"
    SOCIAL_PROOF = "social-proof"
    EXPANSION = "expansion"
    GENERIC_FOLLOW_UP = "follow-up"


@dataclass(frozen=True)
class LayerTemplate:
    title: str
    instructions: str
    word_limit: int | None = None
    example: str = ""

    def render(self) -> str:
        text = f"{self.title}. {self.instructions}"
        if self.example:
            text += f' Example: "{self.example}"'
        return text


LAYER_TEMPLATES: dict[NarrativeLayer, LayerTemplate] = {
    NarrativeLayer.OBSERVATION_CTA: LayerTemplate(
        title="OBSERVATION + CTA",
        instructions=(
            f'"Hi [Name]," + grounded hypothesis about the friction + how we help + low-friction ask. '
            f"All in one concise message (<{STEP_ONE_WORD_LIMIT} words)."
        ),
        word_limit=STEP_ONE_WORD_LIMIT,
    ),
    NarrativeLayer.OBSERVATION: LayerTemplate(
        title="OBSERVATION",
        instructions=(
            f'"Hi [Name]," + a grounded hypothesis about their role and the chosen friction '
            f"(<{STEP_ONE_WORD_LIMIT} words). Reference a skill or headline detail. Statement, not a question."
        ),
        word_limit=STEP_ONE_WORD_LIMIT,
        example=(
            "Hi Neo, most DevOps leads I talk to end up fielding late-stage security review requests for "
            "prospects that were never qualified, especially painful when the team's deep in Kubernetes work."
        ),
    ),
    NarrativeLayer.SPOTLIGHT: LayerTemplate(
        title="WORKFLOW SPOTLIGHT",
        instructions=(
            "No greeting. Name a specific capability or workflow FROM THE COMPANY CONTEXT and connect it to "
            "the friction. You MUST reference what the company sells (from company_context), not just restate "
            "the friction from Step 1. Be concrete about what happens and who triggers it. Can end with one question."
        ),
        example=(
            "The pattern I keep hearing is that security reviews get triggered before anyone confirms the "
            "prospect has real budget or timeline, so your team does the work and the deal stalls anyway."
        ),
    ),
    NarrativeLayer.CAUSAL_LINK: LayerTemplate(
        title="CAUSAL LINK",
        instructions=(
            "No greeting. Explain HOW the upstream problem (poor qualification, noisy pipeline) creates the "
            "friction for their team. Connect company_context to their pain."
        ),
        example=(
            "It usually starts upstream: qualification isn't precise enough, so technical validation gets "
            "triggered for prospects that should have been filtered two steps earlier."
        ),
    ),
    NarrativeLayer.IMPROVEMENT: LayerTemplate(
        title="IMPROVEMENT + CTA",
        instructions=(
            "No greeting. Name the concrete operational change and what's different after. "
            "End with a specific, low-friction ask."
        ),
        example=(
            "We help sales teams tighten that qualification layer so security reviews only happen when deal "
            "intent is confirmed. Happy to show what that filter looks like if the pattern sounds familiar."
        ),
    ),
    NarrativeLayer.SOCIAL_PROOF: LayerTemplate(
        title="SOCIAL PROOF",
        instructions="No greeting. Reference how similar teams solved this + reinforce the improvement.",
        example=(
            "One platform team we work with cut their ad-hoc prospect-driven review load by routing all "
            "technical asks through a qualification gate first; only confirmed-intent prospects reach their queue now."
        ),
    ),
    NarrativeLayer.EXPANSION: LayerTemplate(
        title="EXPANSION",
        instructions=(
            "No greeting. Broaden the impact: name a second workflow or team that benefits from the same "
            "upstream fix. End with a specific ask."
        ),
        example=(
            "The same qualification filter also means your security team stops fielding questionnaires for "
            "deals that were never going to close, so the fix compounds across teams."
        ),
    ),
    NarrativeLayer.GENERIC_FOLLOW_UP: LayerTemplate(
        title="Follow-up",
        instructions="No greeting. Add a new angle or reinforce the improvement with a specific ask.",
    ),
}

# Fixed plans for short sequences; longer ones extend the five-layer arc.
_SHORT_PLANS: dict[int, list[NarrativeLayer]] = {
    1: [NarrativeLayer.OBSERVATION_CTA],
    2: [NarrativeLayer.OBSERVATION, NarrativeLayer.IMPROVEMENT],
    3: [NarrativeLayer.OBSERVATION, NarrativeLayer.SPOTLIGHT, NarrativeLayer.IMPROVEMENT],
    4: [
        NarrativeLayer.OBSERVATION,
        NarrativeLayer.SPOTLIGHT,
        NarrativeLayer.CAUSAL_LINK,
        NarrativeLayer.IMPROVEMENT,
    ],
}


def build_layer_plan(sequence_length: int) -> list[NarrativeLayer]:
    """Ordered layer per step; always exactly `sequence_length` entries."""
    if sequence_length < 1:
        raise ValueError("sequence_length must be >= 1")
    if sequence_length in _SHORT_PLANS:
        return list(_SHORT_PLANS[sequence_length])

    plan = list(_SHORT_PLANS[4]) + [NarrativeLayer.SOCIAL_PROOF]
    if sequence_length >= 6:
        plan.append(NarrativeLayer.EXPANSION)
    plan.extend([NarrativeLayer.GENERIC_FOLLOW_UP] * (sequence_length - len(plan)))
    return plan


def render_step_progression(plan: list[NarrativeLayer]) -> str:
    steps = [f"{i}: {LAYER_TEMPLATES[layer].render()}" for i, layer in enumerate(plan, start=1)]
    return "STEP PROGRESSION (each step is a DIFFERENT LAYER, not a different friction):\n" + "\n".join(steps)
