"""
Orchestrates: idempotency lookup -> enrichment -> tone translation -> generation pipeline -> persistence.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import PROMPT_VERSION
from app.models import AIGeneration, MessageSequence, Prospect, TovConfig
from app.prompts import tov_to_description
from app.schemas.generate import GenerateSequenceRequest, GenerateSequenceResponse, TovConfigIn
from app.schemas.prospect import ProspectProfile
from app.services.enrichment import EnrichmentProvider
from app.services.pipeline import PipelineResult, SequencePipeline

logger = logging.getLogger(__name__)


async def find_tov_config(session: AsyncSession, tov: TovConfigIn) -> TovConfig | None:
    result = await session.execute(
        select(TovConfig).where(
            TovConfig.formality == tov.formality,
            TovConfig.warmth == tov.warmth,
            TovConfig.directness == tov.directness,
        )
    )
    return result.scalars().first()


async def find_existing_sequence(
    session: AsyncSession,
    body: GenerateSequenceRequest,
    prompt_version: str = PROMPT_VERSION,
) -> MessageSequence | None:
    """Most recent sequence generated for identical inputs under the same prompt version."""
    prospect = (
        await session.execute(select(Prospect).where(Prospect.linkedin_url == body.prospect_url))
    ).scalars().one_or_none()
    if prospect is None:
        return None

    tov = await find_tov_config(session, body.tov_config)
    if tov is None:
        return None

    result = await session.execute(
        select(MessageSequence)
        .where(
            MessageSequence.prospect_id == prospect.id,
            MessageSequence.tov_config_id == tov.id,
            MessageSequence.company_context == body.company_context,
            MessageSequence.sequence_length == body.sequence_length,
            MessageSequence.prompt_version == prompt_version,
        )
        .order_by(MessageSequence.created_at.desc())
        .limit(1)
    )
    return result.scalars().first()


async def upsert_prospect(session: AsyncSession, prospect_url: str, profile: ProspectProfile) -> Prospect:
    prospect = (
        await session.execute(select(Prospect).where(Prospect.linkedin_url == prospect_url))
    ).scalars().one_or_none()
    if prospect is None:
        prospect = Prospect(linkedin_url=prospect_url)
        session.add(prospect)
    prospect.full_name = profile.full_name
    prospect.headline = profile.headline
    prospect.company = profile.company
    prospect.profile_data = profile.model_dump(mode="json")
    await session.flush()
    return prospect


async def get_or_create_tov_config(session: AsyncSession, tov: TovConfigIn, description: str) -> TovConfig:
    config = await find_tov_config(session, tov)
    if config is None:
        config = TovConfig(
            formality=tov.formality,
            warmth=tov.warmth,
            directness=tov.directness,
            description=description,
        )
        session.add(config)
        await session.flush()
    return config


def _to_response(analysis: dict, messages: list, confidence: float) -> GenerateSequenceResponse:
    hooks = analysis.get("personalization_hooks")
    return GenerateSequenceResponse.model_validate(
        {
            "analysis": {
                "prospect_insights": str(analysis.get("prospect_insights") or ""),
                "personalization_hooks": [str(h) for h in hooks] if isinstance(hooks, list) else [],
                "value_proposition": str(analysis.get("value_proposition") or ""),
            },
            "messages": messages,
            "confidence": confidence,
        }
    )


class GenerateSequenceService:
    def __init__(
        self,
        session: AsyncSession,
        enrichment_provider: EnrichmentProvider,
        pipeline: SequencePipeline,
    ) -> None:
        self.session = session
        self.enrichment = enrichment_provider
        self.pipeline = pipeline

    async def run(self, body: GenerateSequenceRequest) -> GenerateSequenceResponse:
        # 1) Idempotency: identical request under the same prompt version never reaches the model
        existing = await find_existing_sequence(self.session, body)
        if existing is not None:
            logger.info(
                "Idempotent sequence hit, returning stored result (sequence_id=%s, no AI cost incurred)",
                existing.id,
            )
            return _to_response(existing.analysis, existing.messages, existing.confidence)

        # 2) Enrich prospect
        profile = await self.enrichment.enrich(body.prospect_url)

        # 3) Tone description
        tov = body.tov_config
        tone_description = tov_to_description(tov.formality, tov.warmth, tov.directness)

        # 4) Generate
        result = await self.pipeline.run(
            company_context=body.company_context,
            profile=profile,
            tone_description=tone_description,
            sequence_length=body.sequence_length,
        )

        # 5) Persist
        await self._persist(body, profile, tone_description, result)
        return _to_response(**result.to_response())

    async def _persist(
        self,
        body: GenerateSequenceRequest,
        profile: ProspectProfile,
        tone_description: str,
        result: PipelineResult,
    ) -> MessageSequence:
        prospect = await upsert_prospect(self.session, body.prospect_url, profile)
        tov_config = await get_or_create_tov_config(self.session, body.tov_config, tone_description)

        sequence = MessageSequence(
            prospect_id=prospect.id,
            tov_config_id=tov_config.id,
            company_context=body.company_context,
            sequence_length=body.sequence_length,
            prompt_version=PROMPT_VERSION,
            messages=result.messages,
            analysis=result.analysis,
            confidence=result.confidence,
            role_hint=result.strategy.target_persona.value,
            strategy=result.strategy.model_dump(mode="json"),
        )
        self.session.add(sequence)
        await self.session.flush()

        self.session.add(
            AIGeneration(
                sequence_id=sequence.id,
                model_used=self.pipeline.model_client.model_name,
                prompt_version=PROMPT_VERSION,
                input_tokens=result.input_tokens,
                output_tokens=result.output_tokens,
                cost_estimate=result.cost_estimate,
                attempts=result.attempts,
                quality_issues=result.issues or None,
                raw_response=result.raw_response,
                thinking=result.analysis,
            )
        )
        await self.session.flush()
        return sequence
