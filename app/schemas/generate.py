from pydantic import BaseModel, Field, field_validator


class TovConfigIn(BaseModel):
    formality: float = Field(0.5, ge=0, le=1, description="0=casual, 1=formal")
    warmth: float = Field(0.5, ge=0, le=1, description="0=neutral, 1=warm")
    directness: float = Field(0.5, ge=0, le=1, description="0=subtle, 1=direct")


class GenerateSequenceRequest(BaseModel):
    prospect_url: str = Field(..., min_length=10, max_length=512)
    tov_config: TovConfigIn = Field(default_factory=TovConfigIn)
    company_context: str = Field(..., min_length=1, max_length=2000)
    sequence_length: int = Field(3, ge=1, le=10)

    @field_validator("prospect_url")
    @classmethod
    def normalize_linkedin_url(cls, v: str) -> str:
        v = v.strip()
        if "linkedin.com/in/" not in v:
            raise ValueError("prospect_url must be a LinkedIn profile URL (e.g. https://linkedin.com/in/username)")
        if not v.startswith("http"):
            v = "https://" + v
        return v.rstrip("/")

    @field_validator("company_context")
    @classmethod
    def strip_context(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("company_context is required")
        return v


class SequenceMessageOut(BaseModel):
    step: int = Field(..., ge=1)
    message: str
    reasoning: str


class SequenceAnalysisOut(BaseModel):
    prospect_insights: str = ""
    personalization_hooks: list[str] = Field(default_factory=list)
    value_proposition: str = ""


class GenerateSequenceResponse(BaseModel):
    analysis: SequenceAnalysisOut
    messages: list[SequenceMessageOut]
    confidence: float = Field(..., ge=0, le=1)
