from pydantic import BaseModel, ConfigDict, Field

from app.strategy.types import RoleCategory


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    company: str = ""
    duration: str = ""


class ProspectProfile(BaseModel):
    """
    Enriched prospect identity. Consumed by the pipeline, never modified by it:
    `role_category` is who the prospect actually is, not who the message targets.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    full_name: str = ""
    headline: str = ""
    company: str = ""
    role_category: RoleCategory = RoleCategory.ENGINEERING
    seniority: str = ""
    skills: list[str] = Field(default_factory=list)
    inferred_responsibilities: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
