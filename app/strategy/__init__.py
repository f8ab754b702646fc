from .types import CapabilityTag, MessageStrategy, RoleCategory, WorkflowTag
from .engine import compute_strategy, extract_capability_tags, infer_target_role, strategy_to_prompt_block

__all__ = [
    "CapabilityTag",
    "MessageStrategy",
    "RoleCategory",
    "WorkflowTag",
    "compute_strategy",
    "extract_capability_tags",
    "infer_target_role",
    "strategy_to_prompt_block",
]
