"""
End-to-end tests for the generation pipeline with a scripted model client.
"""
import json
import logging

import pytest

from app.errors import GenerationFailed
from app.prompts import NarrativeLayer
from app.quality import RetryOnIssues
from app.services.pipeline import SequencePipeline
from app.strategy import RoleCategory
from tests.conftest import SCENARIO_A_CONTEXT


@pytest.mark.asyncio
async def test_happy_path(payload, profile, fake_client_factory):
    client = fake_client_factory(payload)
    result = await SequencePipeline(client).run(SCENARIO_A_CONTEXT, profile, "neutral tone", 3)

    assert [m["step"] for m in result.messages] == [1, 2, 3]
    assert result.strategy.target_persona == RoleCategory.SECURITY
    assert result.layer_plan == [NarrativeLayer.OBSERVATION, NarrativeLayer.SPOTLIGHT, NarrativeLayer.IMPROVEMENT]
    assert result.issues == []
    assert result.attempts == 1
    # model 0.9 vs computed 0.95 -> averaged
    assert result.confidence == pytest.approx(0.925)
    assert result.input_tokens == 100 and result.output_tokens == 50
    assert result.to_response().keys() == {"analysis", "messages", "confidence"}
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_prompts_carry_strategy_and_plan(payload, profile, fake_client_factory):
    client = fake_client_factory(payload)
    await SequencePipeline(client).run(SCENARIO_A_CONTEXT, profile, "balanced directness", 3)

    system_prompt, user_prompt = client.calls[0]
    assert "Generate exactly 3 messages" in system_prompt
    assert "TARGET PERSONA: Security" in user_prompt
    assert SCENARIO_A_CONTEXT in user_prompt
    assert "TONE: balanced directness" in user_prompt


@pytest.mark.asyncio
async def test_step_numbers_rewritten(payload, profile, fake_client_factory):
    for msg in payload["messages"]:
        msg["step"] = 9
    result = await SequencePipeline(fake_client_factory(payload)).run("we make things better", profile, "t", 3)
    assert [m["step"] for m in result.messages] == [1, 2, 3]


@pytest.mark.asyncio
async def test_fenced_output_is_accepted(payload, profile, fake_client_factory):
    content = "```json\n" + json.dumps(payload) + "\n```"
    result = await SequencePipeline(fake_client_factory(content)).run("we make things better", profile, "t", 3)
    assert len(result.messages) == 3


@pytest.mark.asyncio
async def test_wrong_message_count_fails_without_partial_result(payload, profile, fake_client_factory):
    payload["messages"].append(dict(payload["messages"][0]))
    pipeline = SequencePipeline(fake_client_factory(payload))
    with pytest.raises(GenerationFailed):
        await pipeline.run(SCENARIO_A_CONTEXT, profile, "t", 3)


@pytest.mark.asyncio
async def test_unparseable_output_fails(profile, fake_client_factory):
    pipeline = SequencePipeline(fake_client_factory("I'm sorry, I cannot do that."))
    with pytest.raises(GenerationFailed):
        await pipeline.run(SCENARIO_A_CONTEXT, profile, "t", 3)


@pytest.mark.asyncio
async def test_model_failure_propagates(profile):
    class FailingClient:
        model_name = "failing"

        async def complete(self, system_prompt, user_prompt):
            raise GenerationFailed("model call timed out")

    with pytest.raises(GenerationFailed):
        await SequencePipeline(FailingClient()).run(SCENARIO_A_CONTEXT, profile, "t", 3)


@pytest.mark.asyncio
async def test_quality_issues_do_not_block(payload, profile, fake_client_factory):
    payload["analysis"]["personalization_hooks"] = ["one", "two", "three"]
    client = fake_client_factory(payload)
    result = await SequencePipeline(client).run(SCENARIO_A_CONTEXT, profile, "t", 3)

    assert "personalization_hooks must be exactly 2 (found 3)" in result.issues
    assert result.analysis["personalization_hooks"] == ["one", "two", "three"]
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_issues_reflect_pre_sanitized_text(payload, profile, fake_client_factory):
    payload["messages"][2]["message"] = "Streamlining this should save your team time. Happy to chat?"
    result = await SequencePipeline(fake_client_factory(payload)).run(SCENARIO_A_CONTEXT, profile, "t", 3)

    assert "message 3 contains generic filler" in result.issues
    assert result.messages[2]["message"] == "reducing this should free your team from unqualified noise. Happy to chat?"


@pytest.mark.asyncio
async def test_single_message_sequence(payload, profile, fake_client_factory):
    payload["messages"] = payload["messages"][:1]
    result = await SequencePipeline(fake_client_factory(payload)).run(SCENARIO_A_CONTEXT, profile, "t", 1)
    assert result.layer_plan == [NarrativeLayer.OBSERVATION_CTA]
    assert len(result.messages) == 1


@pytest.mark.asyncio
async def test_retry_policy_regenerates_once(payload, profile, fake_client_factory):
    flawed = json.loads(json.dumps(payload))
    flawed["analysis"]["personalization_hooks"] = ["only one"]
    client = fake_client_factory(flawed, payload)

    result = await SequencePipeline(client, RetryOnIssues(max_retries=1)).run(SCENARIO_A_CONTEXT, profile, "t", 3)

    assert len(client.calls) == 2
    assert "PREVIOUS ATTEMPT HAD QUALITY ISSUES" in client.calls[1][1]
    assert "personalization_hooks must be exactly 2 (found 1)" in client.calls[1][1]
    assert result.issues == []
    assert result.attempts == 2
    assert result.input_tokens == 200


@pytest.mark.asyncio
async def test_failed_repair_keeps_previous_valid_attempt(payload, profile, fake_client_factory):
    payload["analysis"]["personalization_hooks"] = ["only one"]
    client = fake_client_factory(payload, "not json at all")

    result = await SequencePipeline(client, RetryOnIssues(max_retries=1)).run(SCENARIO_A_CONTEXT, profile, "t", 3)

    assert len(client.calls) == 2
    assert [m["step"] for m in result.messages] == [1, 2, 3]
    assert "personalization_hooks must be exactly 2 (found 1)" in result.issues
    assert result.analysis["personalization_hooks"] == ["only one"]
    assert result.attempts == 2


@pytest.mark.asyncio
async def test_low_alignment_is_logged_and_does_not_block(payload, profile, fake_client_factory, caplog):
    caplog.set_level(logging.WARNING, logger="app.services.pipeline")
    result = await SequencePipeline(fake_client_factory(payload)).run("roadmap personalize", profile, "t", 3)

    assert result.strategy.target_persona == RoleCategory.PRODUCT
    assert result.strategy.alignment_score == 0.0
    assert len(result.messages) == 3
    assert any(
        r.levelno == logging.WARNING and "Low alignment score 0.00" in r.getMessage() for r in caplog.records
    )


@pytest.mark.asyncio
async def test_persona_shift_is_logged(payload, profile, fake_client_factory, caplog):
    caplog.set_level(logging.INFO, logger="app.services.pipeline")
    await SequencePipeline(fake_client_factory(payload)).run(SCENARIO_A_CONTEXT, profile, "t", 3)

    assert "Persona shift: prospect is Engineering, targeting Security" in caplog.text


@pytest.mark.asyncio
async def test_retry_policy_keeps_last_attempt_when_exhausted(payload, profile, fake_client_factory):
    payload["analysis"]["personalization_hooks"] = ["only one"]
    client = fake_client_factory(payload, payload)

    result = await SequencePipeline(client, RetryOnIssues(max_retries=1)).run(SCENARIO_A_CONTEXT, profile, "t", 3)

    assert len(client.calls) == 2
    assert result.issues
    assert result.analysis["personalization_hooks"] == ["only one"]
