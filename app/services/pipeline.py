"""
Generation pipeline: strategy -> layer plan -> prompts -> model -> validation -> sanitization -> confidence.

Everything except the model call is a pure function of the request; nothing is shared between calls.
"""
import logging
from dataclasses import dataclass, field
from typing import Any

from app.errors import GenerationFailed
from app.prompts import (
    NarrativeLayer,
    build_layer_plan,
    build_repair_note,
    build_system_prompt,
    build_user_prompt,
)
from app.quality import (
    LogAndProceed,
    QualityPolicy,
    assess_quality,
    blend_confidence,
    estimate_confidence,
    parse_or_fail,
    sanitize,
    validate_structure,
)
from app.schemas.prospect import ProspectProfile
from app.services.ai import ModelClient, ModelCompletion, estimate_cost
from app.strategy import MessageStrategy, compute_strategy

logger = logging.getLogger(__name__)

LOW_ALIGNMENT_THRESHOLD = 0.25


@dataclass
class PipelineResult:
    analysis: dict[str, Any]
    messages: list[dict[str, Any]]
    confidence: float
    strategy: MessageStrategy
    layer_plan: list[NarrativeLayer]
    issues: list[str] = field(default_factory=list)
    raw_response: dict[str, Any] = field(default_factory=dict)
    input_tokens: int = 0
    output_tokens: int = 0
    attempts: int = 1

    @property
    def cost_estimate(self) -> float:
        return estimate_cost(self.input_tokens, self.output_tokens)

    def to_response(self) -> dict[str, Any]:
        return {"analysis": self.analysis, "messages": self.messages, "confidence": self.confidence}


class SequencePipeline:
    def __init__(self, model_client: ModelClient, quality_policy: QualityPolicy | None = None) -> None:
        self.model_client = model_client
        self.quality_policy = quality_policy or LogAndProceed()

    async def run(
        self,
        company_context: str,
        profile: ProspectProfile,
        tone_description: str,
        sequence_length: int,
    ) -> PipelineResult:
        strategy = compute_strategy(company_context, profile.role_category)
        if strategy.alignment_score < LOW_ALIGNMENT_THRESHOLD:
            logger.warning(
                "Low alignment score %.2f for persona %s: %s",
                strategy.alignment_score,
                strategy.target_persona.value,
                strategy.alignment_note,
            )
        else:
            logger.info("Message strategy: %s", strategy.alignment_note)
        if strategy.persona_shift:
            logger.info(
                "Persona shift: prospect is %s, targeting %s",
                profile.role_category.value,
                strategy.target_persona.value,
            )

        plan = build_layer_plan(sequence_length)
        system_prompt = build_system_prompt(plan)
        user_prompt = build_user_prompt(profile, company_context, tone_description, sequence_length, strategy)

        input_tokens = output_tokens = 0
        attempt = 0
        prompt = user_prompt
        accepted: tuple[dict[str, Any], list[str], ModelCompletion] | None = None
        while True:
            try:
                completion = await self.model_client.complete(system_prompt, prompt)
                input_tokens += completion.input_tokens
                output_tokens += completion.output_tokens

                parsed = parse_or_fail(completion.content)
                validate_structure(parsed, sequence_length)
            except GenerationFailed as e:
                if accepted is None:
                    raise
                # A failed repair never discards an earlier structurally valid attempt
                logger.warning("Repair attempt %d failed (%s); keeping previous attempt", attempt + 1, e.detail)
                parsed, issues, completion = accepted
                break

            # Issues reflect the text as generated, before sanitization
            issues = assess_quality(parsed, profile, company_context)
            accepted = (parsed, issues, completion)
            if not self.quality_policy.should_retry(issues, attempt):
                break
            attempt += 1
            prompt = user_prompt + build_repair_note(issues)

        sanitize(parsed)
        computed = estimate_confidence(parsed, profile)
        confidence = blend_confidence(parsed["confidence"], computed)

        return PipelineResult(
            analysis=parsed["analysis"],
            messages=[
                {"step": m["step"], "message": m["message"], "reasoning": m["reasoning"]}
                for m in parsed["messages"]
            ],
            confidence=confidence,
            strategy=strategy,
            layer_plan=plan,
            issues=issues,
            raw_response=completion.raw,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            attempts=attempt + 1,
        )
