"""
Shared pytest fixtures for the sequence generation test suite.
"""
import copy
import json

import pytest

from app.schemas.prospect import ExperienceEntry, ProspectProfile
from app.services.ai import ModelCompletion
from app.strategy import RoleCategory

SCENARIO_A_CONTEXT = "We help sales teams qualify prospects so fewer security reviews are triggered"

CLEAN_PAYLOAD = {
    "analysis": {
        "prospect_insights": (
            "Works hands-on with PostgreSQL and AWS on scalable systems while owning technical "
            "validation for new deals."
        ),
        "personalization_hooks": [
            "PostgreSQL and AWS skill set",
            "Senior Software Engineer at Tech Corp Inc.",
        ],
        "value_proposition": (
            "We reduce how often unqualified prospects trigger technical validation work for "
            "scalable systems teams."
        ),
    },
    "messages": [
        {
            "step": 1,
            "message": (
                "Hi Sam, engineers running PostgreSQL on AWS often get pulled into feasibility calls "
                "for deals that were never qualified."
            ),
            "reasoning": "Angle: observation | Workflow: pre-sales feasibility | Signal: PostgreSQL skill",
        },
        {
            "step": 2,
            "message": (
                "Our qualification layer scores inbound prospects against your ICP before anything "
                "reaches engineering, so validation requests arrive with confirmed budget."
            ),
            "reasoning": "Angle: spotlight | Workflow: pre-sales feasibility | Signal: headline systems focus",
        },
        {
            "step": 3,
            "message": "Happy to show what that filter looks like in practice. Worth a short walkthrough next week?",
            "reasoning": "Angle: improvement | Workflow: pre-sales feasibility | Signal: AWS skill",
        },
    ],
    "confidence": 0.9,
}


@pytest.fixture
def profile() -> ProspectProfile:
    return ProspectProfile(
        full_name="Sam Rivera",
        headline="Senior Software Engineer | Building scalable systems",
        company="Tech Corp Inc.",
        role_category=RoleCategory.ENGINEERING,
        seniority="Senior",
        skills=["TypeScript", "Node.js", "PostgreSQL", "AWS"],
        inferred_responsibilities=["system architecture", "technical validation"],
        experience=[ExperienceEntry(title="Senior Software Engineer", company="Tech Corp Inc.", duration="2020 - Present")],
    )


@pytest.fixture
def sales_profile(profile) -> ProspectProfile:
    return profile.model_copy(update={"role_category": RoleCategory.SALES, "headline": "Head of Sales"})


@pytest.fixture
def payload() -> dict:
    """A fresh, clean three-message payload (mutable copy per test)."""
    return copy.deepcopy(CLEAN_PAYLOAD)


class FakeModelClient:
    """Returns queued raw contents in order and records every prompt it was sent."""

    model_name = "fake-model"

    def __init__(self, *contents: str) -> None:
        self.contents = list(contents)
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> ModelCompletion:
        self.calls.append((system_prompt, user_prompt))
        content = self.contents.pop(0)
        return ModelCompletion(content=content, input_tokens=100, output_tokens=50, raw={"content": content})


@pytest.fixture
def fake_client_factory():
    def _make(*payloads) -> FakeModelClient:
        return FakeModelClient(*[p if isinstance(p, str) else json.dumps(p) for p in payloads])

    return _make
