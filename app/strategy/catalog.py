"""
Static rule tables behind the strategy engine.

Order matters: role signals are evaluated top to bottom and ties between roles resolve to the
role declared first; allowed workflows keep their listed order through intersection.
"""
from app.strategy.types import CapabilityTag, RoleCategory, WorkflowTag

R = RoleCategory
C = CapabilityTag
W = WorkflowTag

# (keywords, role, weight). Every matching keyword adds the weight to its role.
CONTEXT_ROLE_SIGNALS: tuple[tuple[tuple[str, ...], RoleCategory, int], ...] = (
    # Engineering: interrupt / escalation reduction
    (("engineering team", "technical validation", "engineering escalation", "architect"), R.ENGINEERING, 3),
    (("backend", "frontend", "sprint planning", "engineering bandwidth"), R.ENGINEERING, 2),
    # DevOps: interrupt reduction
    (("infrastructure", "demo environment", "infra feasibility", "environment request", "devops"), R.DEVOPS, 3),
    (("deployment", "ci/cd", "platform team", "sre"), R.DEVOPS, 2),
    # Security: burden reduction
    (
        ("security review", "security questionnaire", "compliance review", "vendor review", "security assessment"),
        R.SECURITY,
        3,
    ),
    (("compliance", "risk assessment", "audit"), R.SECURITY, 2),
    # Data: noise reduction
    (("data team", "data pull", "analytics request", "data feasibility", "enrichment request"), R.DATA, 3),
    (("reporting", "bi team", "data validation"), R.DATA, 2),
    # Product: prioritization protection
    (("product team", "roadmap", "feature request", "prioritization", "product scope"), R.PRODUCT, 3),
    (("backlog", "product-market", "user research"), R.PRODUCT, 2),
    # Sales: direct outbound improvement
    (("sales team", "outbound", "pipeline", "prospecting", "sdr", "bdr", "quota", "revenue team"), R.SALES, 3),
    (("crm", "cold outreach", "sales cycle", "close rate"), R.SALES, 2),
)

# Coarse checks used only when no weighted signal matched at all.
ROLE_FALLBACKS: tuple[tuple[str, RoleCategory], ...] = (
    ("sales", R.SALES),
    ("automate", R.SALES),
    ("security", R.SECURITY),
)
DEFAULT_ROLE = R.ENGINEERING

CONTEXT_CAPABILITY_MAP: tuple[tuple[tuple[str, ...], CapabilityTag], ...] = (
    (("qualify", "qualification", "icp", "fit", "qualified"), C.QUALIFICATION),
    (("filter", "filtering", "gate", "screen", "fewer"), C.FILTERING),
    (("enrich", "enrichment", "research", "prospect data"), C.ENRICHMENT),
    (("personalize", "personalization", "tailor", "custom message"), C.PERSONALIZATION),
    (("security review", "security questionnaire", "compliance review"), C.SECURITY_REVIEW_REDUCTION),
    (("pipeline", "outbound", "sequence", "automate sales"), C.PIPELINE_AUTOMATION),
    (("handoff", "escalation", "routing", "hand-off"), C.HANDOFF_OPTIMIZATION),
    (("triage", "inbound", "sort", "prioritize inbound"), C.TRIAGE_AUTOMATION),
    (("demo", "trial", "poc", "proof of concept"), C.DEMO_QUALIFICATION),
    (("target", "targeting", "precision", "icp match"), C.TARGETING_PRECISION),
    (("reduce escalation", "fewer escalation", "escalation volume"), C.ESCALATION_REDUCTION),
)

CAPABILITY_FALLBACKS: tuple[tuple[tuple[str, ...], CapabilityTag], ...] = (
    (("automate", "automation"), C.PIPELINE_AUTOMATION),
    (("sales",), C.QUALIFICATION),
)
DEFAULT_CAPABILITY = C.QUALIFICATION

# The only frictions a message aimed at each role may claim.
ROLE_ALLOWED_WORKFLOWS: dict[RoleCategory, tuple[WorkflowTag, ...]] = {
    R.ENGINEERING: (
        W.UNQUALIFIED_ESCALATIONS,
        W.FOUNDER_INTERRUPTS,
        W.PRE_SALES_FEASIBILITY,
        W.ARCHITECTURE_DISCUSSIONS,
    ),
    R.DEVOPS: (
        W.DEMO_ENVIRONMENT_REQUESTS,
        W.PRE_SALES_FEASIBILITY,
        W.FOUNDER_INTERRUPTS,
        W.ARCHITECTURE_DISCUSSIONS,
    ),
    R.SECURITY: (
        W.SECURITY_QUESTIONNAIRES,
        W.COMPLIANCE_CHECKS,
        W.PRE_SALES_FEASIBILITY,
        W.UNQUALIFIED_ESCALATIONS,
    ),
    R.DATA: (
        W.AD_HOC_DATA_REQUESTS,
        W.PRE_SALES_FEASIBILITY,
        W.MANUAL_ENRICHMENT,
        W.UNQUALIFIED_ESCALATIONS,
    ),
    R.PRODUCT: (
        W.ROADMAP_DISRUPTION,
        W.FEATURE_REQUEST_NOISE,
        W.PRE_SALES_FEASIBILITY,
        W.QUALIFICATION_CYCLES,
    ),
    R.SALES: (
        W.LOW_FIT_LEADS,
        W.MANUAL_ENRICHMENT,
        W.QUALIFICATION_CYCLES,
        W.PERSONALIZATION_AT_SCALE,
    ),
}

# Bridge from what the company does to the frictions it can plausibly remove.
CAPABILITY_WORKFLOW_BRIDGE: dict[CapabilityTag, tuple[WorkflowTag, ...]] = {
    C.QUALIFICATION: (
        W.UNQUALIFIED_ESCALATIONS,
        W.PRE_SALES_FEASIBILITY,
        W.SECURITY_QUESTIONNAIRES,
        W.LOW_FIT_LEADS,
        W.QUALIFICATION_CYCLES,
        W.COMPLIANCE_CHECKS,
        W.ARCHITECTURE_DISCUSSIONS,
        W.DEMO_ENVIRONMENT_REQUESTS,
    ),
    C.FILTERING: (
        W.UNQUALIFIED_ESCALATIONS,
        W.AD_HOC_DATA_REQUESTS,
        W.FEATURE_REQUEST_NOISE,
        W.SECURITY_QUESTIONNAIRES,
        W.COMPLIANCE_CHECKS,
        W.LOW_FIT_LEADS,
    ),
    C.ENRICHMENT: (W.MANUAL_ENRICHMENT, W.AD_HOC_DATA_REQUESTS, W.PERSONALIZATION_AT_SCALE),
    C.PERSONALIZATION: (W.PERSONALIZATION_AT_SCALE, W.MANUAL_ENRICHMENT),
    C.SECURITY_REVIEW_REDUCTION: (W.SECURITY_QUESTIONNAIRES, W.COMPLIANCE_CHECKS),
    C.PIPELINE_AUTOMATION: (
        W.LOW_FIT_LEADS,
        W.QUALIFICATION_CYCLES,
        W.PERSONALIZATION_AT_SCALE,
        W.MANUAL_ENRICHMENT,
    ),
    C.HANDOFF_OPTIMIZATION: (W.UNQUALIFIED_ESCALATIONS, W.FOUNDER_INTERRUPTS, W.PRE_SALES_FEASIBILITY),
    C.TRIAGE_AUTOMATION: (
        W.UNQUALIFIED_ESCALATIONS,
        W.AD_HOC_DATA_REQUESTS,
        W.LOW_FIT_LEADS,
        W.FEATURE_REQUEST_NOISE,
    ),
    C.DEMO_QUALIFICATION: (W.DEMO_ENVIRONMENT_REQUESTS, W.PRE_SALES_FEASIBILITY),
    C.TARGETING_PRECISION: (W.LOW_FIT_LEADS, W.QUALIFICATION_CYCLES, W.UNQUALIFIED_ESCALATIONS),
    C.ESCALATION_REDUCTION: (W.UNQUALIFIED_ESCALATIONS, W.FOUNDER_INTERRUPTS, W.ARCHITECTURE_DISCUSSIONS),
}

WORKFLOW_DESCRIPTIONS: dict[WorkflowTag, str] = {
    W.UNQUALIFIED_ESCALATIONS: "unqualified prospects escalated to technical teams",
    W.AD_HOC_DATA_REQUESTS: "ad-hoc data pulls for prospects that go nowhere",
    W.PRE_SALES_FEASIBILITY: '"can we support this?" feasibility checks for unqualified deals',
    W.SECURITY_QUESTIONNAIRES: "security questionnaires filled for prospects who never buy",
    W.DEMO_ENVIRONMENT_REQUESTS: "demo environments spun up for prospects who never close",
    W.ROADMAP_DISRUPTION: "roadmap disrupted by unqualified prospect feature requests",
    W.FOUNDER_INTERRUPTS: "founders pulling team into unqualified prospect conversations",
    W.MANUAL_ENRICHMENT: "manual hours spent researching prospects",
    W.LOW_FIT_LEADS: "time wasted on prospects who don't match ICP",
    W.QUALIFICATION_CYCLES: "slow back-and-forth to determine prospect fit",
    W.PERSONALIZATION_AT_SCALE: "individual messages written without structured prospect intelligence",
    W.FEATURE_REQUEST_NOISE: "cross-functional noise from prospect-driven feature requests",
    W.COMPLIANCE_CHECKS: "compliance checks triggered by low-fit prospects",
    W.ARCHITECTURE_DISCUSSIONS: "architecture discussions triggered by unqualified prospects",
}
