from app.prompts.layers import STEP_ONE_WORD_LIMIT, NarrativeLayer, render_step_progression
from app.schemas.prospect import ProspectProfile
from app.strategy import MessageStrategy, strategy_to_prompt_block

SEQUENCE_SYSTEM_PROMPT = """You write LinkedIn DMs for B2B outbound automation. Output ONLY valid JSON.

{{
  "analysis": {{
    "prospect_insights": "Max 3 sentences. Reference one skill + one inferred responsibility.",
    "personalization_hooks": ["hook referencing actual data", "hook referencing actual data"],
    "value_proposition": "How our product reduces cross-functional friction for the prospect's team."
  }},
  "messages": [{{ "step": 1, "message": "DM text", "reasoning": "Angle: <layer> | Workflow: <named> | Signal: <data point>" }}],
  "confidence": 0.85
}}

Generate exactly {sequence_length} messages. Pick ONE friction from the user prompt. Build ALL messages as a progressive {sequence_length}-layer narrative, not {sequence_length} restatements.

SCOPE:
- Sales roles: frame as direct workflow improvement (targeting, enrichment, personalization, pipeline velocity).
- Non-sales roles: frame as UPSTREAM FRICTION REDUCTION from their perspective. Not "we help sales qualify"; instead describe what changes FOR THEM: fewer interruptions, less validation noise, better filtering before escalation, reduced internal back-and-forth. Example: instead of "We help sales qualify prospects earlier" write "We reduce how often security gets pulled into late-stage reviews for deals that were never a fit."

RULES:
- LinkedIn DMs only. No subject lines, signatures, placeholders.
- Step 1: "Hi [Name]," + observation (<{step_one_limit} words). Steps 2+: no re-greeting.
- Each step = new narrative layer. Spotlight step must reference company_context.
- No invented stats. No numeric claims. Hooks must reference real prospect data.
- BANNED: "Would you be open to a brief chat", "Would love to connect", "I imagine", "I came across your profile", "I've been following", "operational workflows", "save your team time", "innovative approach".
- Reasoning: max 25 words. Angle = layer name, not friction name.
- Layer examples are style guidance only. Never copy them.

{step_progression}

Confidence: 0.8-0.95 (clear signals), 0.6-0.79 (ambiguous), 0.4-0.59 (weak)."""

SEQUENCE_USER_PROMPT = """Generate {sequence_length} LinkedIn DMs for this prospect.

PROSPECT:
- Name: {full_name}
- Headline: {headline}
- Company: {company}
- Role: {role} ({seniority})
- Skills: {skills}
- Responsibilities: {responsibilities}
- Experience: {experience}{persona_signal}

COMPANY CONTEXT (what we sell): {company_context}

TONE: {tone_description}

{friction_block}

GROUNDING:
- prospect_insights: reference one skill + one headline responsibility. Max 3 sentences.
- personalization_hooks: exactly 2. Must reference actual data (skill name, company, headline keyword).
- value_proposition: how our product reduces the chosen friction. Reference company capability + prospect role.
- Pick ONE friction. Build {sequence_length} progressive layers. Last message = company_context + CTA.

Return ONLY JSON."""

PERSONA_SIGNAL = (
    "\nTARGET PERSONA: {persona}. The prospect's profile is {role}, but the company_context is most relevant "
    "to {persona} frictions. Frame the outreach through {persona}-relevant pain points while personalizing "
    "with the prospect's actual skills and experience."
)

REPAIR_NOTE = """

PREVIOUS ATTEMPT HAD QUALITY ISSUES. Fix all of them this time:
{issues}"""


def build_system_prompt(plan: list[NarrativeLayer]) -> str:
    return SEQUENCE_SYSTEM_PROMPT.format(
        sequence_length=len(plan),
        step_one_limit=STEP_ONE_WORD_LIMIT,
        step_progression=render_step_progression(plan),
    )


def build_user_prompt(
    profile: ProspectProfile,
    company_context: str,
    tone_description: str,
    sequence_length: int,
    strategy: MessageStrategy,
) -> str:
    experience = " | ".join(f"{e.title} at {e.company} ({e.duration})" for e in profile.experience)

    # The profile stays authentic; the persona only steers which frictions to surface.
    persona_signal = ""
    if strategy.target_persona != profile.role_category:
        persona_signal = PERSONA_SIGNAL.format(
            persona=strategy.target_persona.value,
            role=profile.role_category.value,
        )

    return SEQUENCE_USER_PROMPT.format(
        sequence_length=sequence_length,
        full_name=profile.full_name or "n/a",
        headline=profile.headline or "n/a",
        company=profile.company or "n/a",
        role=profile.role_category.value,
        seniority=profile.seniority or "n/a",
        skills=", ".join(profile.skills) or "n/a",
        responsibilities=", ".join(profile.inferred_responsibilities) or "n/a",
        experience=experience or "n/a",
        persona_signal=persona_signal,
        company_context=company_context,
        tone_description=tone_description,
        friction_block=strategy_to_prompt_block(strategy),
    )


def build_repair_note(issues: list[str]) -> str:
    return REPAIR_NOTE.format(issues="\n".join(f"- {issue}" for issue in issues))
