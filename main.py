import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router
from app.config import settings
from app.db import get_engine, init_db
from app.errors import register_error_handlers
from app.quality import build_quality_policy
from app.services.ai import OpenAIChatClient
from app.services.enrichment import build_enrichment_provider
from app.services.pipeline import SequencePipeline

# Ensure all models are registered with Base.metadata before create_all
from app import models  # noqa: F401

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up (model=%s, enrichment=%s, quality_policy=%s)",
                settings.openai_model, settings.enrichment_provider, settings.quality_policy)
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY is missing. AI generation requests will fail until it is set.")

    # Collaborators are built once here and injected into requests via app.state
    app.state.enrichment_provider = build_enrichment_provider(settings)
    app.state.pipeline = SequencePipeline(
        OpenAIChatClient(settings),
        build_quality_policy(settings.quality_policy, settings.quality_max_retries),
    )

    await init_db()
    yield
    await get_engine().dispose()


app = FastAPI(
    title="LinkedIn Sequence API",
    description="Generate grounded, multi-step LinkedIn outreach sequences from a prospect URL and company context.",
    version="0.2.0",
    lifespan=lifespan,
)
register_error_handlers(app)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
