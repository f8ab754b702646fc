from .parsing import ParseResult, parse_model_json, parse_or_fail
from .structure import validate_structure
from .content import assess_quality, restatement_ratio
from .sanitize import sanitize, sanitize_text
from .confidence import blend_confidence, estimate_confidence
from .policy import LogAndProceed, QualityPolicy, RetryOnIssues, build_quality_policy

__all__ = [
    "ParseResult",
    "parse_model_json",
    "parse_or_fail",
    "validate_structure",
    "assess_quality",
    "restatement_ratio",
    "sanitize",
    "sanitize_text",
    "blend_confidence",
    "estimate_confidence",
    "LogAndProceed",
    "QualityPolicy",
    "RetryOnIssues",
    "build_quality_policy",
]
