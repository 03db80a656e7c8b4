"""
Prompt builders for the five tutoring techniques.

Usage:
    from tutorprompt import PromptBuilder, default_library

    builder = PromptBuilder(default_library())
    generated = builder.generate('multi_shot', 'mathematics', 'Solve 3x - 4 = 11', '8th Grade')
    print(generated.prompt)
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

from . import templates
from .adaptation import (
    LearnerProfile,
    analyze_query,
    analyze_reasoning_complexity,
    select_adaptation_strategy,
)
from .exceptions import InvalidQueryError, SubjectNotFoundError
from .library import Example, ExampleLibrary, normalize_subject
from .metrics import count_tokens
from .selection import DEFAULT_LEVEL, ExampleSelector

logger = logging.getLogger(__name__)

TECHNIQUES = ('zero_shot', 'one_shot', 'multi_shot', 'dynamic', 'chain_of_thought')


def normalize_technique(technique: str) -> str:
    """'multi-shot' / 'Multi Shot' -> 'multi_shot'; raises ValueError if unknown."""
    key = re.sub(r'[\s\-]+', '_', technique.strip().lower())
    if key == 'cot':
        key = 'chain_of_thought'
    if key not in TECHNIQUES:
        raise ValueError(
            f"Unknown technique {technique!r}. Valid options: {', '.join(TECHNIQUES)}"
        )
    return key


@dataclass
class GeneratedPrompt:
    """A prompt produced by one technique, with diagnostics."""
    technique: str
    subject: str
    query: str
    level: str
    prompt: str
    token_estimate: int
    metadata: dict = field(default_factory=dict)


# ── Example formatting ────────────────────────────────────────────────────────

def format_examples(examples: Sequence[Example]) -> str:
    """Render examples as numbered EXAMPLE blocks."""
    return '\n\n'.join(
        f'EXAMPLE {i} - {ex.concept}:\n'
        f'Student Query: "{ex.query}"\n'
        f'Student Level: {ex.level}\n\n'
        f'Response:\n{ex.response}'
        for i, ex in enumerate(examples, start=1)
    )


def format_prompt_with_examples(
    examples: Sequence[Example],
    query: str,
    level: str = DEFAULT_LEVEL,
    template: str = templates.GENERIC_MULTI_SHOT,
) -> str:
    """Substitute examples, query and level into a multi-shot template."""
    return template.format(examples=format_examples(examples), query=query, level=level)


# ── Validation ────────────────────────────────────────────────────────────────

@dataclass
class PromptValidation:
    """Structural checks on a generated multi-example prompt."""
    example_count: int
    has_multiple_examples: bool
    has_instructions: bool
    has_structure: bool
    token_count: int

    @property
    def is_valid(self) -> bool:
        return self.has_multiple_examples and self.has_instructions and self.has_structure

    @property
    def quality(self) -> int:
        """0-100 structural quality score."""
        score = 0
        if self.has_multiple_examples:
            score += 40
        if self.has_instructions:
            score += 25
        if self.has_structure:
            score += 20
        if self.example_count >= 3:
            score += 10
        if 500 < self.token_count < 1500:
            score += 5
        return score


_EXAMPLE_BLOCK_RE = re.compile(r'EXAMPLE \d+')


def validate_prompt(generated: Union[GeneratedPrompt, str]) -> PromptValidation:
    """Check a generated prompt (or its text) for multi-example structure."""
    prompt = generated.prompt if isinstance(generated, GeneratedPrompt) else generated
    example_count = len(_EXAMPLE_BLOCK_RE.findall(prompt))
    return PromptValidation(
        example_count=example_count,
        has_multiple_examples=example_count >= 2,
        has_instructions=any(
            marker in prompt for marker in ('NOW SOLVE', 'NOW EXPLAIN', 'NOW ANALYZE', 'NOW RESPOND')
        ),
        has_structure='**' in prompt and '1.' in prompt,
        token_count=count_tokens(prompt),
    )


# ── Builder ───────────────────────────────────────────────────────────────────

class PromptBuilder:
    """
    Generate tutoring prompts from an example library.

    Every technique validates the query (InvalidQueryError when empty) and
    the subject (SubjectNotFoundError when no template or examples exist).
    """

    def __init__(self, library: ExampleLibrary, selector: Optional[ExampleSelector] = None):
        self.library = library
        self.selector = selector or ExampleSelector()

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _check(self, subject: str, query: str, table: dict) -> str:
        if not query or not query.strip():
            raise InvalidQueryError("Subject and query are required")
        key = normalize_subject(subject) if isinstance(subject, str) else None
        if key not in table:
            raise SubjectNotFoundError(subject, tuple(table))
        return key

    def _result(self, technique, subject, query, level, prompt, **metadata) -> GeneratedPrompt:
        generated = GeneratedPrompt(
            technique=technique,
            subject=subject,
            query=query,
            level=level,
            prompt=prompt,
            token_estimate=count_tokens(prompt),
            metadata=metadata,
        )
        logger.debug(
            "Generated %s prompt for %s (%d tokens)",
            technique, subject, generated.token_estimate,
        )
        return generated

    # ── Techniques ────────────────────────────────────────────────────────────

    def zero_shot(self, subject: str, query: str, level: Optional[str] = DEFAULT_LEVEL) -> GeneratedPrompt:
        """Instructions only, no demonstrations."""
        key = self._check(subject, query, templates.ZERO_SHOT)
        level = level or DEFAULT_LEVEL
        template = templates.ZERO_SHOT[key]
        prompt = templates.ZERO_SHOT_PROMPT.format(
            instructions=template.instructions,
            query=query,
            level=level,
            token_target=template.token_target,
        )
        return self._result('zero_shot', key, query, level, prompt, token_target=template.token_target)

    def one_shot(self, subject: str, query: str, level: Optional[str] = DEFAULT_LEVEL) -> GeneratedPrompt:
        """A single demonstration: the subject's first basic example."""
        key = self._check(subject, query, templates.ONE_SHOT)
        level = level or DEFAULT_LEVEL
        examples = self.library.get_examples(key)
        example = next((ex for ex in examples if ex.difficulty == 'basic'), examples[0])
        prompt = templates.ONE_SHOT[key].format(
            example_query=example.query,
            example_level=example.level,
            example_response=example.response,
            query=query,
            level=level,
        )
        return self._result('one_shot', key, query, level, prompt, example_id=example.id)

    def multi_shot(self, subject: str, query: str, level: Optional[str] = DEFAULT_LEVEL) -> GeneratedPrompt:
        """The top-K most relevant examples from the library."""
        key = self._check(subject, query, templates.MULTI_SHOT)
        level = level or DEFAULT_LEVEL
        scored = self.selector.select_scored(self.library.get_examples(key), query, level)
        prompt = format_prompt_with_examples(
            [s.example for s in scored], query, level, template=templates.MULTI_SHOT[key],
        )
        return self._result(
            'multi_shot', key, query, level, prompt,
            examples_used=len(scored),
            selected_example_ids=[s.example.id for s in scored],
            relevance_scores={s.example.id: s.score for s in scored},
        )

    def chain_of_thought(
        self,
        subject: str,
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
        scaffolding: str = 'standard',
    ) -> GeneratedPrompt:
        """An explicit five-step reasoning chain with metacognitive scaffolding."""
        key = self._check(subject, query, templates.CHAIN_OF_THOUGHT)
        level = level or DEFAULT_LEVEL
        framework = templates.CHAIN_OF_THOUGHT[key]
        complexity = analyze_reasoning_complexity(query, level)

        lines = [
            framework.role,
            '',
            f'STUDENT QUERY: "{query}"',
            f'STUDENT LEVEL: {level}',
            '',
            framework.heading,
        ]
        for number, (title, opener, thought) in enumerate(framework.steps, start=1):
            lines += ['', f'STEP {number} - {title}:', opener, f'🤔 Thought: {thought}']
        lines += ['', framework.closing]
        prompt = '\n'.join(lines)

        if complexity.metacognitive_support == 'high' or scaffolding == 'full':
            prompt += templates.METACOGNITIVE_GUIDANCE.format(skills=', '.join(complexity.skills))
        if complexity.scaffolding_needed or scaffolding == 'full':
            prompt += templates.THINKING_TOOLS

        return self._result(
            'chain_of_thought', key, query, level, prompt,
            reasoning_steps=len(framework.steps),
            complexity_level=complexity.level,
            chain_depth=complexity.chain_depth,
            thinking_skills=list(complexity.skills),
            scaffolding=scaffolding,
        )

    def dynamic(
        self,
        subject: str,
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
        profile: Optional[LearnerProfile] = None,
    ) -> GeneratedPrompt:
        """Adapt the prompt to a learner profile and the query's character."""
        key = self._check(subject, query, templates.DYNAMIC)
        level = level or DEFAULT_LEVEL
        profile = profile or LearnerProfile()
        strategy = select_adaptation_strategy(key, profile)
        analysis = analyze_query(query)

        adaptive_content = '\n'.join([
            f'Complexity Level: {strategy.complexity}',
            f'Learning Pace: {strategy.pace}',
            f'Encouragement Style: {strategy.encouragement}',
            f'Example Type: {strategy.examples}',
            f'Question Type: {analysis.question_type}',
        ])
        guidance = [
            f'This response is adapted for a {profile.preferred_style} learning style.',
            f'Use a {strategy.approach} approach so the student can understand each idea before moving on.',
            f'Calibrate the explanation to a {profile.learner_level} learner.',
        ]
        if analysis.urgency == 'high':
            guidance.append('The student sounds stuck: lead with the single most useful next step.')

        prompt = templates.DYNAMIC[key].format(
            learner_level=profile.learner_level,
            learning_style=profile.preferred_style,
            strategy=strategy.name,
            approach=strategy.approach,
            adaptive_content=adaptive_content,
            guidance='\n'.join(guidance),
            query=query,
            level=level,
        )
        return self._result(
            'dynamic', key, query, level, prompt,
            strategy=strategy.name,
            approach=strategy.approach,
            learner_level=profile.learner_level,
            query_complexity=analysis.complexity,
            question_type=analysis.question_type,
            urgency=analysis.urgency,
        )

    def generate(
        self,
        technique: str,
        subject: str,
        query: str,
        level: Optional[str] = DEFAULT_LEVEL,
        **options,
    ) -> GeneratedPrompt:
        """Dispatch to a technique by name ('multi_shot', 'chain-of-thought', ...)."""
        builders = {
            'zero_shot': self.zero_shot,
            'one_shot': self.one_shot,
            'multi_shot': self.multi_shot,
            'dynamic': self.dynamic,
            'chain_of_thought': self.chain_of_thought,
        }
        return builders[normalize_technique(technique)](subject, query, level or DEFAULT_LEVEL, **options)
