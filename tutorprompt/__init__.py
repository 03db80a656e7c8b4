"""
TutorPrompt: tutoring prompt generation for five prompting techniques

Relevance-ranked example selection, prompt builders and a heuristic
evaluation harness.
"""

from .exceptions import TutorPromptError, SubjectNotFoundError, InvalidQueryError
from .library import (
    Example, ExampleLibrary, default_library, get_examples_for_subject,
)
from .selection import (
    ExampleSelector, RelevanceScorer, RelevanceBreakdown, ScoredExample,
    ScoringWeights, extract_grade_level,
)
from .adaptation import LearnerProfile, AdaptationStrategy
from .techniques import (
    TECHNIQUES, GeneratedPrompt, PromptBuilder, format_examples,
    format_prompt_with_examples, validate_prompt,
)
from .evaluators import PromptEvaluator, Evaluation, CriterionScore
from .dataset import EvaluationSample, load_dataset
from .metrics import EvaluationSummary, TestResult, count_tokens, summarize
from .harness import EvaluationHarness

__version__ = "0.1.0"

__all__ = [
    # Errors
    "TutorPromptError",
    "SubjectNotFoundError",
    "InvalidQueryError",
    # Library
    "Example",
    "ExampleLibrary",
    "default_library",
    "get_examples_for_subject",
    # Selection
    "ExampleSelector",
    "RelevanceScorer",
    "RelevanceBreakdown",
    "ScoredExample",
    "ScoringWeights",
    "extract_grade_level",
    # Techniques
    "TECHNIQUES",
    "GeneratedPrompt",
    "PromptBuilder",
    "LearnerProfile",
    "AdaptationStrategy",
    "format_examples",
    "format_prompt_with_examples",
    "validate_prompt",
    # Evaluation
    "PromptEvaluator",
    "Evaluation",
    "CriterionScore",
    "EvaluationSample",
    "load_dataset",
    "EvaluationHarness",
    "EvaluationSummary",
    "TestResult",
    "count_tokens",
    "summarize",
]
