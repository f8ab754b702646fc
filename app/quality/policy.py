"""
What to do when a generated sequence has content-quality issues.

The default accepts the output and logs the findings: no repair call, no regeneration.
`RetryOnIssues` is the bounded alternative for deployments that prefer quality over cost.
"""
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class QualityPolicy(Protocol):
    def should_retry(self, issues: list[str], attempt: int) -> bool:
        """`attempt` is 0 for the first generation."""
        ...


class LogAndProceed:
    def should_retry(self, issues: list[str], attempt: int) -> bool:
        if issues:
            logger.warning("Quality issues detected (accepted, no repair): %s", issues)
        return False


class RetryOnIssues:
    def __init__(self, max_retries: int = 1) -> None:
        self.max_retries = max(0, max_retries)

    def should_retry(self, issues: list[str], attempt: int) -> bool:
        if not issues:
            return False
        if attempt < self.max_retries:
            logger.warning("Quality issues on attempt %d, regenerating: %s", attempt + 1, issues)
            return True
        logger.warning("Quality issues after %d retries (accepted): %s", attempt, issues)
        return False


def build_quality_policy(name: str, max_retries: int = 1) -> QualityPolicy:
    key = (name or "log").strip().lower()
    if key == "retry":
        return RetryOnIssues(max_retries)
    if key != "log":
        logger.warning('Unknown quality policy "%s"; falling back to "log"', key)
    return LogAndProceed()
