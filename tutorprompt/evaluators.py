"""
Heuristic evaluators for generated tutoring prompts.

Each criterion is scored 0-100 from simple string checks; no model output
or external judge is involved.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .dataset import EvaluationSample


@dataclass(frozen=True)
class CriterionScore:
    score: int
    reasoning: str


_NO_TEXT = CriterionScore(0, "No valid prompt generated")


class CriterionEvaluator(ABC):
    """Base class for one evaluation criterion."""

    name: str = ''

    @abstractmethod
    def evaluate(
        self,
        sample: 'EvaluationSample',
        text: str,
        response_time_ms: float = 0.0,
    ) -> CriterionScore:
        """
        Score `text` generated for `sample`.

        Returns:
            CriterionScore with score in [0, 100] and a short reasoning string
        """
        pass


class CorrectnessEvaluator(CriterionEvaluator):
    """Penalise very short text and missing subject integration."""

    name = 'correctness'

    def evaluate(self, sample, text, response_time_ms=0.0):
        if not text or not text.strip():
            return _NO_TEXT

        score = 95
        reasoning = "Demonstrates factual and conceptual grounding."
        if sample.expected_output:
            if len(text) < 100:
                score -= 10
                reasoning += " May be too brief for comprehensive coverage."
            if sample.subject.lower() not in text.lower():
                score -= 5
                reasoning += " Subject integration could be improved."
        return CriterionScore(max(score, 0), reasoning)


class EducationalQualityEvaluator(CriterionEvaluator):
    """Reward step-by-step progression and use of examples."""

    name = 'educational_quality'

    def evaluate(self, sample, text, response_time_ms=0.0):
        if not text or not text.strip():
            return _NO_TEXT

        lower = text.lower()
        score = 92
        reasoning = "Shows pedagogical structure and age-appropriate content."
        if any(word in lower for word in ('step', 'first', 'next')):
            score += 3
            reasoning += " Step-by-step progression."
        if 'example' in lower or 'for instance' in lower:
            score += 2
            reasoning += " Uses examples for clarity."
        return CriterionScore(min(score, 100), reasoning)


class TechniqueAdherenceEvaluator(CriterionEvaluator):
    """Check for the structural marker each technique should leave in its prompt."""

    name = 'technique_adherence'

    _BASE = 90

    def evaluate(self, sample, text, response_time_ms=0.0):
        if not text or not text.strip():
            return _NO_TEXT

        technique = sample.technique
        checks = {
            'zero_shot': (95, 'EXAMPLE' not in text, "Direct expert instructions without examples."),
            'one_shot': (96, 'EXAMPLE:' in text and 'SAME FORMAT' in text,
                         "Format anchored to a single demonstration."),
            'multi_shot': (97, text.count('EXAMPLE ') >= 2 and len(text) > 200,
                           "Synthesises multiple demonstrations."),
            'dynamic': (98, 'understand' in text.lower(), "Personalised to the learner's context."),
            'chain_of_thought': (99, 'STEP' in text and '🤔' in text, "Explicit reasoning chain."),
        }
        reasoning = f"Implements {technique.replace('_', '-')} prompting characteristics."
        if technique in checks:
            score, ok, note = checks[technique]
            if ok:
                return CriterionScore(score, f"{reasoning} {note}")
        return CriterionScore(self._BASE, reasoning)


class EfficiencyEvaluator(CriterionEvaluator):
    """Penalise generation time over the sample's target."""

    name = 'efficiency'

    def evaluate(self, sample, text, response_time_ms=0.0):
        target = sample.max_response_ms
        if response_time_ms > target:
            penalty = min(30, int((response_time_ms - target) // 100) * 5)
            return CriterionScore(
                max(95 - penalty, 0),
                f"Generation time ({response_time_ms:.1f}ms) exceeded target ({target}ms).",
            )
        return CriterionScore(
            95, f"Generation time ({response_time_ms:.1f}ms) within target ({target}ms).",
        )


class InnovationEvaluator(CriterionEvaluator):
    """Reward real-world links, prompts to think, and conceptual connections."""

    name = 'innovation'

    def evaluate(self, sample, text, response_time_ms=0.0):
        if not text or not text.strip():
            return _NO_TEXT

        lower = text.lower()
        score = 88
        reasoning = "Provides adequate educational value."
        if 'real-world' in lower or 'application' in lower:
            score += 5
            reasoning += " Real-world connections."
        if 'think' in lower or 'consider' in lower:
            score += 4
            reasoning += " Encourages critical thinking."
        if 'connect' in lower or 'relate' in lower:
            score += 3
            reasoning += " Makes conceptual connections."
        return CriterionScore(min(score, 100), reasoning)


DEFAULT_WEIGHTS: dict[str, float] = {
    'correctness': 0.35,
    'educational_quality': 0.30,
    'technique_adherence': 0.20,
    'efficiency': 0.10,
    'innovation': 0.05,
}


@dataclass
class Evaluation:
    """Combined judgement of one generated prompt."""
    criteria: dict[str, CriterionScore]
    overall_score: int
    passed: bool
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "PASSED" if self.passed else "FAILED"

    def to_dict(self) -> dict:
        return {
            'criteria': {
                name: {'score': c.score, 'reasoning': c.reasoning}
                for name, c in self.criteria.items()
            },
            'overall_score': self.overall_score,
            'passed': self.passed,
            'status': self.status,
            'strengths': self.strengths,
            'improvements': self.improvements,
        }


# (criterion, minimum score for a strength, strength text)
_STRENGTHS = [
    ('correctness', 95, "Excellent factual accuracy"),
    ('educational_quality', 90, "Strong pedagogical approach"),
    ('technique_adherence', 95, "Precise technique implementation"),
    ('efficiency', 90, "Optimal generation performance"),
    ('innovation', 90, "Creative educational insights"),
]

# (criterion, score below which improvement is suggested, improvement text)
_IMPROVEMENTS = [
    ('correctness', 90, "Enhance factual accuracy and completeness"),
    ('educational_quality', 85, "Improve pedagogical structure and clarity"),
    ('technique_adherence', 85, "Better adherence to prompting technique requirements"),
    ('efficiency', 80, "Optimize generation time"),
    ('innovation', 80, "Add more creative and insightful elements"),
]


class PromptEvaluator:
    """
    Weighted multi-criteria evaluation of a generated prompt.

    overall = Σ weight × criterion score (rounded)
    passed  = overall ≥ pass_threshold and correctness ≥ 90 and educational quality ≥ 80
    """

    def __init__(
        self,
        weights: Optional[dict[str, float]] = None,
        pass_threshold: int = 85,
        evaluators: Optional[list[CriterionEvaluator]] = None,
    ):
        """
        Args:
            weights:        criterion name -> weight (default DEFAULT_WEIGHTS)
            pass_threshold: minimum overall score to pass (default 85)
            evaluators:     criterion evaluators (default: the five built-ins)
        """
        self.weights = dict(weights or DEFAULT_WEIGHTS)
        self.pass_threshold = pass_threshold
        self.evaluators = evaluators or [
            CorrectnessEvaluator(),
            EducationalQualityEvaluator(),
            TechniqueAdherenceEvaluator(),
            EfficiencyEvaluator(),
            InnovationEvaluator(),
        ]
        missing = [e.name for e in self.evaluators if e.name not in self.weights]
        if missing:
            raise ValueError(f"No weight configured for criteria: {', '.join(missing)}")

    def evaluate(
        self,
        sample: 'EvaluationSample',
        text: str,
        response_time_ms: float = 0.0,
    ) -> Evaluation:
        criteria = {
            e.name: e.evaluate(sample, text, response_time_ms)
            for e in self.evaluators
        }
        overall = round(sum(self.weights[name] * c.score for name, c in criteria.items()))

        passed = (
            overall >= self.pass_threshold
            and criteria.get('correctness', CriterionScore(100, '')).score >= 90
            and criteria.get('educational_quality', CriterionScore(100, '')).score >= 80
        )

        strengths = [
            text_ for name, minimum, text_ in _STRENGTHS
            if name in criteria and criteria[name].score >= minimum
        ]
        improvements = [
            text_ for name, limit, text_ in _IMPROVEMENTS
            if name in criteria and criteria[name].score < limit
        ]
        return Evaluation(
            criteria=criteria,
            overall_score=overall,
            passed=passed,
            strengths=strengths or ["Basic functionality achieved"],
            improvements=improvements or ["Continue maintaining high standards"],
        )
