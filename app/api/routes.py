from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.schemas.generate import GenerateSequenceRequest, GenerateSequenceResponse
from app.services.enrichment import EnrichmentProvider
from app.services.generate import GenerateSequenceService
from app.services.pipeline import SequencePipeline

router = APIRouter(prefix="/api", tags=["api"])


def get_enrichment_provider(request: Request) -> EnrichmentProvider:
    return request.app.state.enrichment_provider


def get_pipeline(request: Request) -> SequencePipeline:
    return request.app.state.pipeline


def get_generate_service(
    session: AsyncSession = Depends(get_session),
    enrichment_provider: EnrichmentProvider = Depends(get_enrichment_provider),
    pipeline: SequencePipeline = Depends(get_pipeline),
) -> GenerateSequenceService:
    return GenerateSequenceService(session, enrichment_provider, pipeline)


@router.post("/generate-sequence", response_model=GenerateSequenceResponse)
async def generate_sequence(
    body: GenerateSequenceRequest,
    service: GenerateSequenceService = Depends(get_generate_service),
) -> GenerateSequenceResponse:
    """Generate a personalized LinkedIn messaging sequence. Generation failures surface as a uniform 500."""
    return await service.run(body)
