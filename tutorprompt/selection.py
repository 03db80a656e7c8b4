"""
Relevance scoring and top-K example selection for multi-shot prompts.

Score = level match + concept relevance + query overlap + grade proximity

Scores are used only for relative ranking. They are not normalised or
clamped, so custom weights can push them past 100.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidQueryError
from .library import Example, ExampleLibrary

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = "High School"
DEFAULT_TOP_K = 3

_GRADE_RE = re.compile(r'(\d+)')


@dataclass(frozen=True)
class ScoringWeights:
    """Policy constants for relevance scoring."""
    level_match: float = 40.0
    concept: float = 30.0
    query_overlap: float = 20.0
    grade_proximity: float = 10.0
    grade_step_penalty: float = 2.0   # points lost per grade of distance
    default_grade: int = 10           # used when a level string has no number

    def __post_init__(self):
        negative = [
            name for name in (
                'level_match', 'concept', 'query_overlap', 'grade_proximity',
                'grade_step_penalty', 'default_grade',
            )
            if getattr(self, name) < 0
        ]
        if negative:
            raise ValueError(f"Scoring weights must be non-negative: {', '.join(negative)}")

    @property
    def maximum(self) -> float:
        """Score of an example that saturates every signal."""
        return self.level_match + self.concept + self.query_overlap + self.grade_proximity


@dataclass(frozen=True)
class RelevanceBreakdown:
    """Per-signal contributions to a relevance score."""
    level_match: float
    concept: float
    query_overlap: float
    grade_proximity: float

    @property
    def total(self) -> float:
        return self.level_match + self.concept + self.query_overlap + self.grade_proximity


@dataclass(frozen=True)
class ScoredExample:
    """An example with its relevance to one (query, level) request."""
    example: Example
    score: float
    breakdown: RelevanceBreakdown


def extract_grade_level(level: str, default: int = 10) -> int:
    """First integer in a level descriptor ("10th Grade" -> 10), else `default`."""
    match = _GRADE_RE.search(level or '')
    return int(match.group(1)) if match else default


def _validate_query(query: Optional[str]) -> str:
    if not query:
        raise InvalidQueryError("Query must be a non-empty string")
    return query


class RelevanceScorer:
    """
    Score how well a stored example matches an incoming query and level.

    Usage:
        scorer = RelevanceScorer()
        scorer.score(example, "Solve 2x + 5 = 13", "8th Grade")
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights()

    def breakdown(
        self,
        example: Example,
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
    ) -> RelevanceBreakdown:
        """Score each signal separately."""
        query = _validate_query(query)
        level = level or DEFAULT_LEVEL
        query_words = query.lower().split()

        return RelevanceBreakdown(
            level_match=self._level_match(example, level),
            concept=self._concept_relevance(example, query_words),
            query_overlap=self._query_overlap(example, query_words),
            grade_proximity=self._grade_proximity(example, level),
        )

    def score(
        self,
        example: Example,
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
    ) -> float:
        return self.breakdown(example, query, level).total

    # ── Signals ───────────────────────────────────────────────────────────────

    def _level_match(self, example: Example, level: str) -> float:
        tokens = level.lower().split()
        if not tokens:
            return 0.0
        return self.weights.level_match if tokens[0] in example.level.lower() else 0.0

    def _concept_relevance(self, example: Example, query_words: list[str]) -> float:
        if not query_words:
            return 0.0
        concept_words = example.concept.lower().split()
        matches = sum(
            1 for word in query_words
            if any(word in concept or concept in word for concept in concept_words)
        )
        return matches / len(query_words) * self.weights.concept

    def _query_overlap(self, example: Example, query_words: list[str]) -> float:
        if not query_words:
            return 0.0
        example_query = example.query.lower()
        matches = sum(1 for word in query_words if word in example_query)
        return matches / len(query_words) * self.weights.query_overlap

    def _grade_proximity(self, example: Example, level: str) -> float:
        default = self.weights.default_grade
        diff = abs(extract_grade_level(level, default) - extract_grade_level(example.level, default))
        return max(0.0, self.weights.grade_proximity - self.weights.grade_step_penalty * diff)


class ExampleSelector:
    """
    Rank a subject's examples and keep the top K for prompt assembly.

    An empty example sequence yields an empty selection; an unknown subject
    passed to `select_for_subject` raises SubjectNotFoundError.
    """

    def __init__(self, scorer: Optional[RelevanceScorer] = None, top_k: int = DEFAULT_TOP_K):
        if not isinstance(top_k, int) or isinstance(top_k, bool) or top_k < 1:
            raise ValueError(f"top_k must be a positive integer, got {top_k!r}")
        self.scorer = scorer or RelevanceScorer()
        self.top_k = top_k

    def rank(
        self,
        examples: Sequence[Example],
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
    ) -> list[ScoredExample]:
        """All examples, highest score first; ties keep their original order."""
        _validate_query(query)
        scored = []
        for example in examples:
            breakdown = self.scorer.breakdown(example, query, level)
            scored.append(ScoredExample(example=example, score=breakdown.total, breakdown=breakdown))
        # sorted() is stable, including with reverse=True
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def select_scored(
        self,
        examples: Sequence[Example],
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
    ) -> list[ScoredExample]:
        ranked = self.rank(examples, query, level)[:self.top_k]
        logger.debug(
            "Selected %s for query %r at level %r",
            [(s.example.id, round(s.score, 2)) for s in ranked], query, level,
        )
        return ranked

    def select(
        self,
        examples: Sequence[Example],
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
    ) -> list[Example]:
        return [s.example for s in self.select_scored(examples, query, level)]

    def select_for_subject(
        self,
        library: ExampleLibrary,
        subject: str,
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
    ) -> list[Example]:
        return self.select(library.get_examples(subject), query, level)
