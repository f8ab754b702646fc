"""
Prospect enrichment providers.

The pipeline only sees ProspectProfile; which provider produced it is decided once at startup
by build_enrichment_provider and injected from there.
"""
import logging
import re
from abc import ABC, abstractmethod

from app.config import Settings
from app.schemas.prospect import ExperienceEntry, ProspectProfile
from app.strategy import RoleCategory

logger = logging.getLogger(__name__)

SLUG_RE = re.compile(r"linkedin\.com/in/([^/?#]+)")


def slug_from_url(url: str) -> str:
    match = SLUG_RE.search(url)
    return match.group(1) if match else "unknown"


def name_from_slug(slug: str) -> str:
    return " ".join(part.capitalize() for part in slug.split("-") if part and not part.isdigit())


class EnrichmentProvider(ABC):
    name: str = "base"

    @abstractmethod
    async def enrich(self, prospect_url: str) -> ProspectProfile:
        ...


class MockEnrichmentProvider(EnrichmentProvider):
    """Placeholder data keyed on the URL slug; no network access."""

    name = "mock"

    async def enrich(self, prospect_url: str) -> ProspectProfile:
        slug = slug_from_url(prospect_url)
        return ProspectProfile(
            full_name=name_from_slug(slug) or "Unknown",
            headline="Senior Software Engineer | Building scalable systems",
            company="Tech Corp Inc.",
            role_category=RoleCategory.ENGINEERING,
            seniority="Senior",
            skills=["TypeScript", "Node.js", "PostgreSQL", "AWS"],
            inferred_responsibilities=["system architecture", "technical validation", "code review"],
            experience=[
                ExperienceEntry(title="Senior Software Engineer", company="Tech Corp Inc.", duration="2020 - Present"),
            ],
        )


PROVIDERS: dict[str, type[EnrichmentProvider]] = {
    MockEnrichmentProvider.name: MockEnrichmentProvider,
}


def build_enrichment_provider(config: Settings) -> EnrichmentProvider:
    """To add a real provider: subclass EnrichmentProvider, register it here, set ENRICHMENT_PROVIDER."""
    key = (config.enrichment_provider or "mock").strip().lower()
    provider_cls = PROVIDERS.get(key)
    if provider_cls is None:
        logger.warning('Unknown ENRICHMENT_PROVIDER "%s". Falling back to "mock".', key)
        provider_cls = MockEnrichmentProvider
    return provider_cls()
