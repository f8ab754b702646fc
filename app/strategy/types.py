"""
Closed vocabularies of the strategy engine and the strategy record it produces.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class RoleCategory(str, Enum):
    ENGINEERING = "Engineering"
    DEVOPS = "DevOps"
    SECURITY = "Security"
    DATA = "Data"
    PRODUCT = "Product"
    SALES = "Sales"


class CapabilityTag(str, Enum):
    """What the selling company's product does."""

    QUALIFICATION = "qualification"
    FILTERING = "filtering"
    ENRICHMENT = "enrichment"
    PERSONALIZATION = "personalization"
    SECURITY_REVIEW_REDUCTION = "security-review-reduction"
    PIPELINE_AUTOMATION = "pipeline-automation"
    HANDOFF_OPTIMIZATION = "handoff-optimization"
    TRIAGE_AUTOMATION = "triage-automation"
    DEMO_QUALIFICATION = "demo-qualification"
    TARGETING_PRECISION = "targeting-precision"
    ESCALATION_REDUCTION = "escalation-reduction"


class WorkflowTag(str, Enum):
    """A concrete operational friction a role experiences."""

    UNQUALIFIED_ESCALATIONS = "unqualified-escalations"
    AD_HOC_DATA_REQUESTS = "ad-hoc-data-requests"
    PRE_SALES_FEASIBILITY = "pre-sales-feasibility"
    SECURITY_QUESTIONNAIRES = "security-questionnaires"
    DEMO_ENVIRONMENT_REQUESTS = "demo-environment-requests"
    ROADMAP_DISRUPTION = "roadmap-disruption"
    FOUNDER_INTERRUPTS = "founder-interrupts"
    MANUAL_ENRICHMENT = "manual-enrichment"
    LOW_FIT_LEADS = "low-fit-leads"
    QUALIFICATION_CYCLES = "qualification-cycles"
    PERSONALIZATION_AT_SCALE = "personalization-at-scale"
    FEATURE_REQUEST_NOISE = "feature-request-noise"
    COMPLIANCE_CHECKS = "compliance-checks"
    ARCHITECTURE_DISCUSSIONS = "architecture-discussions"


class MessageStrategy(BaseModel):
    """
    Focused strategy for one request: who the pitch targets and which frictions it may claim.

    Immutable once composed; `model_dump(mode="json")` is the audit form.
    """

    model_config = ConfigDict(frozen=True)

    target_persona: RoleCategory
    capability_tags: frozenset[CapabilityTag]
    allowed_workflows: tuple[WorkflowTag, ...]
    active_workflows: tuple[WorkflowTag, ...]
    alignment_score: float = Field(ge=0, le=1)
    alignment_note: str

    @field_serializer("capability_tags")
    def _serialize_capability_tags(self, tags: frozenset[CapabilityTag]) -> list[str]:
        # Declaration order keeps the audit record stable across processes
        return [tag.value for tag in CapabilityTag if tag in tags]

    @property
    def persona_shift(self) -> bool:
        return self.alignment_note.startswith("Persona shift")
