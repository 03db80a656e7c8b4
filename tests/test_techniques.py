"""Tests for the five prompt builders."""
import pytest

from tutorprompt.adaptation import LearnerProfile
from tutorprompt.exceptions import InvalidQueryError, SubjectNotFoundError
from tutorprompt.library import default_library
from tutorprompt.selection import ExampleSelector
from tutorprompt.techniques import (
    TECHNIQUES,
    PromptBuilder,
    format_examples,
    format_prompt_with_examples,
    normalize_technique,
    validate_prompt,
)


@pytest.fixture
def builder():
    return PromptBuilder(default_library())


# ── normalize_technique ───────────────────────────────────────────────────────

class TestNormalizeTechnique:

    @pytest.mark.parametrize("name,expected", [
        ('multi_shot', 'multi_shot'),
        ('Multi-Shot', 'multi_shot'),
        ('chain of thought', 'chain_of_thought'),
        ('cot', 'chain_of_thought'),
        (' zero-shot ', 'zero_shot'),
    ])
    def test_accepts_variants(self, name, expected):
        assert normalize_technique(name) == expected

    def test_unknown_technique_raises(self):
        with pytest.raises(ValueError, match="Valid options"):
            normalize_technique('tree_of_thought')


# ── Formatting ────────────────────────────────────────────────────────────────

class TestFormatting:

    def test_examples_are_numbered_in_order(self):
        examples = default_library().get_examples('mathematics')
        text = format_examples(examples)
        assert text.index('EXAMPLE 1 - ') < text.index('EXAMPLE 2 - ') < text.index('EXAMPLE 3 - ')
        assert f'Student Query: "{examples[0].query}"' in text

    def test_format_prompt_with_examples_substitutes_query_and_level(self):
        examples = default_library().get_examples('science')
        prompt = format_prompt_with_examples(examples, "Why is the sky blue?", "9th Grade")
        assert 'Student Query: "Why is the sky blue?"' in prompt
        assert 'Student Level: 9th Grade' in prompt
        assert 'NOW RESPOND' in prompt

    def test_empty_examples_still_formats(self):
        prompt = format_prompt_with_examples([], "Why is the sky blue?", "9th Grade")
        assert 'EXAMPLE 1' not in prompt
        assert 'Why is the sky blue?' in prompt


# ── Builders ──────────────────────────────────────────────────────────────────

class TestZeroShot:

    def test_contains_instructions_and_no_examples(self, builder):
        generated = builder.zero_shot('mathematics', "Solve 3x - 4 = 11", "8th Grade")
        assert 'EXAMPLE' not in generated.prompt
        assert 'Student Query: "Solve 3x - 4 = 11"' in generated.prompt
        assert generated.metadata['token_target'] == 300
        assert generated.token_estimate > 0


class TestOneShot:

    def test_uses_first_basic_example(self, builder):
        generated = builder.one_shot('science', "What is inertia?", "9th Grade")
        assert generated.metadata['example_id'] == 'science_physics_basic'
        assert 'EXAMPLE:' in generated.prompt
        assert 'SAME FORMAT' in generated.prompt


class TestMultiShot:

    def test_selects_most_relevant_examples_first(self, builder):
        generated = builder.multi_shot('Mathematics', "Solve 2x + 5 = 13", "8th Grade")
        assert generated.subject == 'mathematics'
        assert generated.metadata['selected_example_ids'][0] == 'math_basic_algebra'
        assert generated.metadata['examples_used'] == 3
        assert generated.prompt.index('Linear Equation') < generated.prompt.index('EXAMPLE 2')

    def test_respects_selector_top_k(self):
        builder = PromptBuilder(default_library(), selector=ExampleSelector(top_k=2))
        generated = builder.multi_shot('literature', "What does the green light symbolize?", "11th Grade")
        assert generated.metadata['examples_used'] == 2
        assert 'EXAMPLE 3' not in generated.prompt

    def test_relevance_scores_reported_for_each_example(self, builder):
        generated = builder.multi_shot('science', "How does photosynthesis work?", "10th Grade")
        assert set(generated.metadata['relevance_scores']) == set(generated.metadata['selected_example_ids'])

    def test_prompt_passes_structural_validation(self, builder):
        generated = builder.multi_shot('mathematics', "Solve 2x + 5 = 13", "8th Grade")
        validation = validate_prompt(generated.prompt)
        assert validation.example_count == 3
        assert validation.is_valid
        assert validation.quality >= 95

    def test_validate_accepts_generated_prompt(self, builder):
        generated = builder.multi_shot('mathematics', "Solve 2x + 5 = 13", "8th Grade")
        assert validate_prompt(generated) == validate_prompt(generated.prompt)


class TestChainOfThought:

    def test_has_five_numbered_steps_with_thoughts(self, builder):
        generated = builder.chain_of_thought('science', "Explain why the sky is blue", "12th Grade")
        for n in range(1, 6):
            assert f'STEP {n} - ' in generated.prompt
        assert generated.prompt.count('🤔 Thought:') == 5
        assert generated.metadata['reasoning_steps'] == 5
        assert generated.metadata['chain_depth'] == 6

    def test_younger_students_get_metacognitive_guidance(self, builder):
        generated = builder.chain_of_thought('mathematics', "Explain how to factor x² - 9", "9th Grade")
        assert 'METACOGNITIVE GUIDANCE' in generated.prompt

    def test_advanced_query_gets_thinking_tools(self, builder):
        generated = builder.chain_of_thought('literature', "Evaluate the narrator's reliability", "12th Grade")
        assert 'THINKING TOOLS' in generated.prompt
        assert 'METACOGNITIVE GUIDANCE' not in generated.prompt

    def test_full_scaffolding_adds_everything(self, builder):
        generated = builder.chain_of_thought(
            'science', "Describe the water cycle", "12th Grade", scaffolding='full',
        )
        assert 'METACOGNITIVE GUIDANCE' in generated.prompt
        assert 'THINKING TOOLS' in generated.prompt


class TestDynamic:

    def test_default_profile_is_struggling_beginner(self, builder):
        generated = builder.dynamic('mathematics', "Solve 2x + 5 = 13", "8th Grade")
        assert generated.metadata['learner_level'] == 'beginner'
        assert generated.metadata['strategy'] == 'struggling_student'
        assert 'understand' in generated.prompt

    def test_profile_changes_strategy(self, builder):
        profile = LearnerProfile(accuracy=0.8, interactions=8, preferred_style='practical')
        generated = builder.dynamic('science', "How do batteries work?", "10th Grade", profile=profile)
        assert generated.metadata['strategy'] == 'practical_learner'
        assert 'practical learning style' in generated.prompt

    def test_stuck_student_gets_next_step_guidance(self, builder):
        generated = builder.dynamic('literature', "I'm stuck on the theme of Macbeth", "10th Grade")
        assert generated.metadata['urgency'] == 'high'
        assert 'stuck' in generated.prompt


# ── Validation and dispatch ───────────────────────────────────────────────────

class TestGenerate:

    @pytest.mark.parametrize("technique", TECHNIQUES)
    def test_every_technique_builds_for_every_subject(self, builder, technique):
        for subject in default_library().subjects:
            generated = builder.generate(technique, subject, "Explain the main idea", "10th Grade")
            assert generated.technique == technique
            assert generated.prompt

    def test_dispatch_accepts_aliases(self, builder):
        generated = builder.generate('cot', 'mathematics', "Solve 2x + 5 = 13", "8th Grade")
        assert generated.technique == 'chain_of_thought'

    def test_missing_level_uses_default(self, builder):
        generated = builder.generate('zero_shot', 'science', "What is DNA?", None)
        assert generated.level == 'High School'

    @pytest.mark.parametrize("technique", TECHNIQUES)
    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_raises(self, builder, technique, query):
        with pytest.raises(InvalidQueryError):
            builder.generate(technique, 'mathematics', query, "8th Grade")

    @pytest.mark.parametrize("technique", TECHNIQUES)
    def test_unknown_subject_raises(self, builder, technique):
        with pytest.raises(SubjectNotFoundError):
            builder.generate(technique, 'history', "Who won the war?", "8th Grade")

    @pytest.mark.parametrize("technique", TECHNIQUES)
    def test_direct_builder_call_without_level_uses_default(self, builder, technique):
        method = getattr(builder, technique)
        generated = method('science', "What is DNA?", None)
        assert generated.level == 'High School'
        assert 'Student Level: None' not in generated.prompt
        assert 'High School' in generated.prompt

    @pytest.mark.parametrize("technique", TECHNIQUES)
    def test_non_string_subject_raises_subject_not_found(self, builder, technique):
        with pytest.raises(SubjectNotFoundError):
            builder.generate(technique, None, "What is DNA?", "9th Grade")
