"""
Role-context strategy engine.

Derives the persona a message should target from the seller's company context, extracts what
the seller's product does, and intersects the two through the static catalog so the generator
only argues for frictions that are both legitimate for the persona and addressable by the product.
Every function here is pure and deterministic.
"""

from app.strategy.catalog import (
    CAPABILITY_FALLBACKS,
    CAPABILITY_WORKFLOW_BRIDGE,
    CONTEXT_CAPABILITY_MAP,
    CONTEXT_ROLE_SIGNALS,
    DEFAULT_CAPABILITY,
    DEFAULT_ROLE,
    ROLE_ALLOWED_WORKFLOWS,
    ROLE_FALLBACKS,
    WORKFLOW_DESCRIPTIONS,
)
from app.strategy.types import CapabilityTag, MessageStrategy, RoleCategory, WorkflowTag


# (threshold, note); first threshold the score reaches wins
ALIGNMENT_BANDS = [
    (0.75, "Strong alignment: company capabilities directly address most role frictions"),
    (0.5, "Moderate alignment: some role frictions are addressable"),
]
LOW_ALIGNMENT_NOTE = "Low contextual alignment between target role and company context"
NO_OVERLAP_NOTE = "No overlap: company capabilities do not address any frictions for this role"


def infer_target_role(company_context: str) -> RoleCategory:
    """Highest accumulated keyword weight wins; ties go to the role whose signal is declared first."""
    ctx = company_context.lower()
    scores: dict[RoleCategory, int] = {}
    for keywords, role, weight in CONTEXT_ROLE_SIGNALS:
        for kw in keywords:
            if kw in ctx:
                scores[role] = scores.get(role, 0) + weight

    best_role = DEFAULT_ROLE
    best_score = 0
    for role, score in scores.items():
        if score > best_score:
            best_role, best_score = role, score

    if best_score == 0:
        for kw, role in ROLE_FALLBACKS:
            if kw in ctx:
                return role
        return DEFAULT_ROLE
    return best_role


def extract_capability_tags(company_context: str) -> frozenset[CapabilityTag]:
    """Never empty: falls back to broad heuristics, then to qualification."""
    ctx = company_context.lower()
    tags: set[CapabilityTag] = set()
    for keywords, tag in CONTEXT_CAPABILITY_MAP:
        if any(kw in ctx for kw in keywords):
            tags.add(tag)

    if not tags:
        for keywords, tag in CAPABILITY_FALLBACKS:
            if any(kw in ctx for kw in keywords):
                tags.add(tag)
    if not tags:
        tags.add(DEFAULT_CAPABILITY)
    return frozenset(tags)


def intersect_workflows(
    capability_tags: frozenset[CapabilityTag],
    allowed: tuple[WorkflowTag, ...],
) -> tuple[WorkflowTag, ...]:
    addressable: set[WorkflowTag] = set()
    for tag in capability_tags:
        addressable.update(CAPABILITY_WORKFLOW_BRIDGE.get(tag, ()))
    return tuple(wf for wf in allowed if wf in addressable)


def score_alignment(active: tuple[WorkflowTag, ...], allowed: tuple[WorkflowTag, ...]) -> tuple[float, str]:
    if not allowed:
        return 0.0, "No allowed workflows defined for role"
    score = round(len(active) / len(allowed), 2)
    for threshold, note in ALIGNMENT_BANDS:
        if score >= threshold:
            return score, note
    return score, LOW_ALIGNMENT_NOTE if score > 0 else NO_OVERLAP_NOTE


def compute_strategy(company_context: str, enriched_role: RoleCategory) -> MessageStrategy:
    """
    Compose the message strategy for one request.

    The context-derived persona always wins; `enriched_role` is the prospect's actual identity and
    only feeds the audit note.
    """
    target_persona = infer_target_role(company_context)
    capability_tags = extract_capability_tags(company_context)
    allowed = ROLE_ALLOWED_WORKFLOWS[target_persona]
    active = intersect_workflows(capability_tags, allowed)
    score, note = score_alignment(active, allowed)

    if enriched_role != target_persona:
        full_note = (
            f"Persona shift: prospect is {enriched_role.value}, targeting {target_persona.value} "
            f"frictions (context-driven). {note}"
        )
    else:
        full_note = f"Persona confirmed: {target_persona.value}. {note}"

    return MessageStrategy(
        target_persona=target_persona,
        capability_tags=capability_tags,
        allowed_workflows=allowed,
        active_workflows=active,
        alignment_score=score,
        alignment_note=full_note,
    )


def strategy_to_prompt_block(strategy: MessageStrategy) -> str:
    """Render the friction block of the user prompt."""
    persona = strategy.target_persona.value
    if not strategy.active_workflows:
        lines = "\n".join(f"- {WORKFLOW_DESCRIPTIONS[wf]}" for wf in strategy.allowed_workflows)
        return (
            f"PERSONA FRICTIONS ({persona}). Pick the ONE most relevant to company_context:\n"
            f"{lines}\n"
            "Their skills are CONTEXT for personalization. The friction is what our product solves."
        )

    lines = "\n".join(f"- {WORKFLOW_DESCRIPTIONS[wf]}" for wf in strategy.active_workflows)
    return (
        f"TARGETED FRICTIONS ({persona}, derived from company_context alignment):\n"
        f"{lines}\n"
        "These frictions are causally validated: the company's capabilities directly address them for this persona.\n"
        "Pick the ONE most relevant. Build ALL messages around it as a progressive narrative.\n"
        "Their skills are CONTEXT for personalization. The friction is what our product solves."
    )
