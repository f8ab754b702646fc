"""
Unit tests for the narrative layer planner, tone translation and prompt assembly.
"""
import pytest

from app.prompts import NarrativeLayer, build_layer_plan, build_repair_note, build_system_prompt, build_user_prompt
from app.prompts.layers import LAYER_TEMPLATES, STEP_ONE_WORD_LIMIT
from app.prompts.tov import tov_to_description
from app.strategy import RoleCategory, compute_strategy
from tests.conftest import SCENARIO_A_CONTEXT

L = NarrativeLayer


class TestLayerPlan:
    @pytest.mark.parametrize("n", range(1, 11))
    def test_length_law(self, n):
        assert len(build_layer_plan(n)) == n

    @pytest.mark.parametrize(
        "n, expected",
        [
            (1, [L.OBSERVATION_CTA]),
            (2, [L.OBSERVATION, L.IMPROVEMENT]),
            (3, [L.OBSERVATION, L.SPOTLIGHT, L.IMPROVEMENT]),
            (4, [L.OBSERVATION, L.SPOTLIGHT, L.CAUSAL_LINK, L.IMPROVEMENT]),
            (5, [L.OBSERVATION, L.SPOTLIGHT, L.CAUSAL_LINK, L.IMPROVEMENT, L.SOCIAL_PROOF]),
            (6, [L.OBSERVATION, L.SPOTLIGHT, L.CAUSAL_LINK, L.IMPROVEMENT, L.SOCIAL_PROOF, L.EXPANSION]),
        ],
    )
    def test_policy_table(self, n, expected):
        assert build_layer_plan(n) == expected

    def test_long_sequences_pad_with_follow_ups(self):
        plan = build_layer_plan(8)
        assert plan[5] == L.EXPANSION
        assert plan[6:] == [L.GENERIC_FOLLOW_UP, L.GENERIC_FOLLOW_UP]

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            build_layer_plan(0)

    def test_only_opening_layers_carry_word_limit(self):
        limited = {layer for layer, tpl in LAYER_TEMPLATES.items() if tpl.word_limit is not None}
        assert limited == {L.OBSERVATION, L.OBSERVATION_CTA}
        for layer in limited:
            assert LAYER_TEMPLATES[layer].word_limit == STEP_ONE_WORD_LIMIT

    def test_plan_is_a_fresh_list(self):
        plan = build_layer_plan(3)
        plan.append(L.EXPANSION)
        assert len(build_layer_plan(3)) == 3


class TestTov:
    def test_midpoint(self):
        assert tov_to_description(0.5, 0.5, 0.5) == "moderately formal, neutral tone, and balanced directness"

    def test_extremes(self):
        assert tov_to_description(0.95, 0.1, 0.85) == (
            "very formal and professional, professional and reserved, and very direct and to-the-point"
        )
        assert tov_to_description(0.0, 1.0, 0.0) == (
            "very casual and conversational, very warm and friendly, and very subtle and indirect"
        )


class TestPromptAssembly:
    def test_system_prompt_renders_plan(self):
        prompt = build_system_prompt(build_layer_plan(3))
        assert "Generate exactly 3 messages" in prompt
        assert "1: OBSERVATION." in prompt
        assert "2: WORKFLOW SPOTLIGHT." in prompt
        assert "3: IMPROVEMENT + CTA." in prompt
        assert '"personalization_hooks"' in prompt

    def test_single_step_prompt_keeps_word_ceiling(self):
        prompt = build_system_prompt(build_layer_plan(1))
        assert "1: OBSERVATION + CTA." in prompt
        assert f"<{STEP_ONE_WORD_LIMIT} words" in prompt

    def test_user_prompt_flags_persona_shift(self, profile):
        strategy = compute_strategy(SCENARIO_A_CONTEXT, profile.role_category)
        prompt = build_user_prompt(profile, SCENARIO_A_CONTEXT, "neutral tone", 3, strategy)
        assert "TARGET PERSONA: Security" in prompt
        assert "The prospect's profile is Engineering" in prompt
        assert "Skills: TypeScript, Node.js, PostgreSQL, AWS" in prompt
        assert "Senior Software Engineer at Tech Corp Inc. (2020 - Present)" in prompt
        assert "TARGETED FRICTIONS (Security" in prompt
        assert "TONE: neutral tone" in prompt

    def test_user_prompt_without_shift(self, profile):
        strategy = compute_strategy("we make things better", RoleCategory.ENGINEERING)
        prompt = build_user_prompt(profile, "we make things better", "neutral tone", 2, strategy)
        assert "TARGET PERSONA" not in prompt

    def test_missing_profile_fields_render_as_na(self, profile):
        bare = profile.model_copy(update={"skills": [], "experience": [], "inferred_responsibilities": []})
        strategy = compute_strategy("we make things better", bare.role_category)
        prompt = build_user_prompt(bare, "we make things better", "neutral tone", 2, strategy)
        assert "Skills: n/a" in prompt
        assert "Experience: n/a" in prompt

    def test_repair_note_lists_issues(self):
        note = build_repair_note(["personalization_hooks must be exactly 2 (found 1)"])
        assert "- personalization_hooks must be exactly 2 (found 1)" in note
