"""
Token counting and aggregate metrics for evaluation runs.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

import tiktoken

if TYPE_CHECKING:
    from .evaluators import Evaluation


DEFAULT_ENCODING = "cl100k_base"

# A technique below this pass rate is flagged for improvement.
PASS_RATE_TARGET = 80.0
# Average score below which overall quality is flagged.
AVERAGE_SCORE_TARGET = 90.0


@lru_cache(maxsize=None)
def _get_encoding(name: str):
    return tiktoken.get_encoding(name)


def count_tokens(text: str, encoding: str = DEFAULT_ENCODING) -> int:
    """Number of tokens in `text` under the given tiktoken encoding."""
    if not text:
        return 0
    return len(_get_encoding(encoding).encode(text))


@dataclass
class TestResult:
    """Outcome of evaluating one sample's generated prompt."""
    __test__ = False  # not a pytest test class

    sample_id: str
    technique: str
    subject: str
    query: str
    overall_score: int
    passed: bool
    response_time_ms: float
    prompt: Optional[str] = None
    evaluation: Optional['Evaluation'] = None
    error: Optional[str] = None


@dataclass
class TechniqueSummary:
    """Aggregate results for one prompting technique."""
    technique: str
    total: int
    passed: int
    average_score: float

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def pass_rate(self) -> float:
        return self.passed / self.total * 100 if self.total else 0.0


@dataclass
class EvaluationSummary:
    """Aggregate results across all evaluated techniques."""
    total_tests: int
    passed_tests: int
    average_score: float
    techniques: dict[str, TechniqueSummary] = field(default_factory=dict)

    @property
    def failed_tests(self) -> int:
        return self.total_tests - self.passed_tests

    @property
    def pass_rate(self) -> float:
        return self.passed_tests / self.total_tests * 100 if self.total_tests else 0.0

    @property
    def all_criteria_met(self) -> bool:
        return self.pass_rate >= PASS_RATE_TARGET and self.average_score >= 85

    def to_dict(self) -> dict:
        return {
            'total_tests': self.total_tests,
            'passed_tests': self.passed_tests,
            'failed_tests': self.failed_tests,
            'pass_rate': self.pass_rate,
            'average_score': self.average_score,
            'all_criteria_met': self.all_criteria_met,
            'techniques': {
                name: {
                    'total': t.total,
                    'passed': t.passed,
                    'pass_rate': t.pass_rate,
                    'average_score': t.average_score,
                }
                for name, t in self.techniques.items()
            },
        }


def summarize(results: list[TestResult]) -> EvaluationSummary:
    """Group results by technique and compute pass rates and average scores."""
    by_technique: dict[str, list[TestResult]] = {}
    for r in results:
        by_technique.setdefault(r.technique, []).append(r)

    techniques = {}
    for technique, group in by_technique.items():
        techniques[technique] = TechniqueSummary(
            technique=technique,
            total=len(group),
            passed=sum(1 for r in group if r.passed),
            average_score=sum(r.overall_score for r in group) / len(group),
        )

    total = len(results)
    return EvaluationSummary(
        total_tests=total,
        passed_tests=sum(1 for r in results if r.passed),
        average_score=sum(r.overall_score for r in results) / total if total else 0.0,
        techniques=techniques,
    )


def recommendations(summary: EvaluationSummary) -> list[str]:
    """Improvement suggestions derived from a summary."""
    recs = [
        f"Enhance {name.replace('_', '-')} implementation quality"
        for name, t in summary.techniques.items()
        if t.pass_rate < PASS_RATE_TARGET
    ]
    if summary.total_tests and summary.average_score < AVERAGE_SCORE_TARGET:
        recs.append("Focus on improving overall educational quality")
    return recs
