"""Tests for heuristic prompt evaluators."""
import pytest

from tutorprompt.dataset import EvaluationSample
from tutorprompt.evaluators import (
    DEFAULT_WEIGHTS,
    CorrectnessEvaluator,
    EducationalQualityEvaluator,
    EfficiencyEvaluator,
    InnovationEvaluator,
    PromptEvaluator,
    TechniqueAdherenceEvaluator,
)


def _sample(technique='zero_shot', subject='mathematics', expected_output='A worked solution'):
    return EvaluationSample(
        id='t1',
        technique=technique,
        subject=subject,
        query='Solve 2x + 5 = 13',
        level='8th Grade',
        expected_output=expected_output,
    )


RICH_TEXT = (
    "You are a mathematics tutor. First, isolate the variable step by step. "
    "For example, subtract 5 from both sides. Think about a real-world case "
    "and connect it to what the student already knows."
)


# ── CorrectnessEvaluator ──────────────────────────────────────────────────────

class TestCorrectnessEvaluator:

    def test_full_score_when_long_and_on_subject(self):
        assert CorrectnessEvaluator().evaluate(_sample(), RICH_TEXT).score == 95

    def test_short_text_penalised(self):
        result = CorrectnessEvaluator().evaluate(_sample(), "mathematics help")
        assert result.score == 85
        assert 'brief' in result.reasoning

    def test_missing_subject_penalised(self):
        text = "x" * 150
        assert CorrectnessEvaluator().evaluate(_sample(), text).score == 90

    def test_no_penalties_without_expected_output(self):
        assert CorrectnessEvaluator().evaluate(_sample(expected_output=None), "short").score == 95

    def test_empty_text_scores_zero(self):
        assert CorrectnessEvaluator().evaluate(_sample(), "   ").score == 0


# ── EducationalQualityEvaluator / InnovationEvaluator ─────────────────────────

class TestKeywordEvaluators:

    def test_educational_quality_rewards_steps_and_examples(self):
        assert EducationalQualityEvaluator().evaluate(_sample(), RICH_TEXT).score == 97

    def test_educational_quality_baseline(self):
        assert EducationalQualityEvaluator().evaluate(_sample(), "Photosynthesis.").score == 92

    def test_innovation_capped_at_100(self):
        assert InnovationEvaluator().evaluate(_sample(), RICH_TEXT).score == 100

    def test_innovation_baseline(self):
        assert InnovationEvaluator().evaluate(_sample(), "Photosynthesis.").score == 88


# ── TechniqueAdherenceEvaluator ───────────────────────────────────────────────

class TestTechniqueAdherenceEvaluator:

    @pytest.mark.parametrize("technique,text,expected", [
        ('zero_shot', "Direct instructions only.", 95),
        ('zero_shot', "EXAMPLE 1 shows the way.", 90),
        ('one_shot', "EXAMPLE:\n...\nNOW SOLVE THIS USING THE SAME FORMAT", 96),
        ('one_shot', "EXAMPLE:\n...", 90),
        ('multi_shot', "EXAMPLE 1 ... EXAMPLE 2 ..." + "." * 200, 97),
        ('multi_shot', "EXAMPLE 1 ... EXAMPLE 2", 90),
        ('dynamic', "Help the student understand.", 98),
        ('chain_of_thought', "STEP 1 - READ:\n🤔 Thought: what is asked?", 99),
        ('chain_of_thought', "STEP 1 - READ", 90),
    ])
    def test_marker_checks(self, technique, text, expected):
        result = TechniqueAdherenceEvaluator().evaluate(_sample(technique=technique), text)
        assert result.score == expected


# ── EfficiencyEvaluator ───────────────────────────────────────────────────────

class TestEfficiencyEvaluator:

    def test_within_target(self):
        assert EfficiencyEvaluator().evaluate(_sample(), RICH_TEXT, 150.0).score == 95

    def test_small_overrun_penalised(self):
        assert EfficiencyEvaluator().evaluate(_sample(), RICH_TEXT, 2150.0).score == 90

    def test_penalty_capped(self):
        assert EfficiencyEvaluator().evaluate(_sample(), RICH_TEXT, 10000.0).score == 65


# ── PromptEvaluator ───────────────────────────────────────────────────────────

class TestPromptEvaluator:

    def test_weighted_overall_and_pass(self):
        evaluation = PromptEvaluator().evaluate(_sample(), RICH_TEXT, 10.0)
        assert evaluation.overall_score == 96
        assert evaluation.passed is True
        assert evaluation.status == 'PASSED'
        assert "Excellent factual accuracy" in evaluation.strengths
        assert evaluation.improvements == ["Continue maintaining high standards"]

    def test_empty_text_fails(self):
        evaluation = PromptEvaluator().evaluate(_sample(), "", 10.0)
        assert evaluation.passed is False
        assert "Enhance factual accuracy and completeness" in evaluation.improvements

    def test_low_correctness_fails_even_with_high_overall(self):
        evaluation = PromptEvaluator(pass_threshold=0).evaluate(_sample(), "x" * 150, 10.0)
        assert evaluation.criteria['correctness'].score == 90
        assert evaluation.passed is True

        short = PromptEvaluator(pass_threshold=0).evaluate(_sample(), "x" * 50, 10.0)
        assert short.criteria['correctness'].score == 80
        assert short.passed is False

    def test_missing_weight_raises(self):
        weights = dict(DEFAULT_WEIGHTS)
        del weights['innovation']
        with pytest.raises(ValueError, match="innovation"):
            PromptEvaluator(weights=weights)

    def test_to_dict(self):
        data = PromptEvaluator().evaluate(_sample(), RICH_TEXT).to_dict()
        assert set(data['criteria']) == set(DEFAULT_WEIGHTS)
        assert data['status'] == 'PASSED'
