"""
Example library: annotated tutoring demonstrations grouped by subject.

The library is built once and passed explicitly to the selector and prompt
builder. It never changes after construction; `with_example` returns a new
library instead of mutating the old one.
"""

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Union

from .exceptions import SubjectNotFoundError


DIFFICULTIES = ('basic', 'intermediate', 'advanced')


@dataclass(frozen=True)
class Example:
    """A stored demonstration query/response pair."""
    id: str
    difficulty: str
    level: str
    query: str
    concept: str
    approach: str
    response: str

    def __post_init__(self):
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(
                f"Unknown difficulty {self.difficulty!r} for example {self.id!r}. "
                f"Valid options: {', '.join(DIFFICULTIES)}"
            )


def normalize_subject(subject: str) -> str:
    return subject.strip().lower()


class ExampleLibrary(Mapping):
    """Read-only mapping of subject -> tuple of Examples."""

    def __init__(self, examples: Mapping[str, Iterable[Example]]):
        subjects: dict[str, tuple[Example, ...]] = {}
        for subject, items in examples.items():
            key = normalize_subject(subject)
            items = tuple(items)
            if not items:
                raise ValueError(f"Subject {key!r} has no examples")
            subjects[key] = items
        self._subjects = MappingProxyType(subjects)

    def __getitem__(self, subject: str) -> tuple[Example, ...]:
        if not isinstance(subject, str):
            raise KeyError(subject)
        return self._subjects[normalize_subject(subject)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._subjects)

    def __len__(self) -> int:
        return len(self._subjects)

    def __repr__(self) -> str:
        return f"ExampleLibrary(subjects={list(self._subjects)}, examples={self.total_examples})"

    @property
    def subjects(self) -> tuple[str, ...]:
        return tuple(self._subjects)

    @property
    def total_examples(self) -> int:
        return sum(len(items) for items in self._subjects.values())

    def get_examples(self, subject: str) -> tuple[Example, ...]:
        """Return the examples for a subject, raising SubjectNotFoundError if unknown."""
        try:
            return self[subject]
        except KeyError:
            raise SubjectNotFoundError(subject, self.subjects) from None

    def with_example(self, subject: str, example: Example) -> 'ExampleLibrary':
        """Return a new library with `example` appended to `subject` (created if new)."""
        data = dict(self._subjects)
        key = normalize_subject(subject)
        data[key] = data.get(key, ()) + (example,)
        return ExampleLibrary(data)

    def describe(self) -> list[dict]:
        """Summarise each subject: example count, difficulty and grade levels."""
        summary = []
        for subject, items in self._subjects.items():
            summary.append({
                'subject': subject,
                'example_count': len(items),
                'difficulty_levels': sorted({ex.difficulty for ex in items}, key=DIFFICULTIES.index),
                'grade_levels': list(dict.fromkeys(ex.level for ex in items)),
            })
        return summary

    # ── Serialisation ─────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable[dict]]) -> 'ExampleLibrary':
        return cls({
            subject: [Example(**record) for record in records]
            for subject, records in data.items()
        })

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'ExampleLibrary':
        with open(path, encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            subject: [asdict(ex) for ex in items]
            for subject, items in self._subjects.items()
        }


def get_examples_for_subject(library: ExampleLibrary, subject: str) -> list[Example]:
    """Examples for `subject` as a list; raises SubjectNotFoundError if unknown."""
    return list(library.get_examples(subject))


# ── Built-in examples ─────────────────────────────────────────────────────────
# Three demonstrations per subject, one per difficulty.

_DEFAULT_EXAMPLES: dict[str, list[dict]] = {
    'mathematics': [
        {
            'id': 'math_basic_algebra',
            'difficulty': 'basic',
            'level': '8th Grade',
            'query': 'Solve 2x + 5 = 13',
            'concept': 'Linear Equation (one variable)',
            'approach': 'step-by-step isolation',
            'response': (
                "I'll help you solve this linear equation step by step.\n\n"
                "**Problem**: 2x + 5 = 13\n"
                "**Concept**: Linear Equation (one variable)\n\n"
                "**Step-by-step Solution:**\n"
                "1. **Subtract 5 from both sides**: 2x + 5 - 5 = 13 - 5\n"
                "2. **Simplify**: 2x = 8\n"
                "3. **Divide both sides by 2**: x = 4\n\n"
                "**Verification**: 2(4) + 5 = 8 + 5 = 13 ✓\n"
                "**Key Learning**: Always perform the same operation to both sides."
            ),
        },
        {
            'id': 'math_quadratic',
            'difficulty': 'intermediate',
            'level': '10th Grade',
            'query': 'Solve x² - 5x + 6 = 0',
            'concept': 'Quadratic Equation (factoring method)',
            'approach': 'factoring technique',
            'response': (
                "Let me show you how to solve this quadratic equation by factoring.\n\n"
                "**Problem**: x² - 5x + 6 = 0\n"
                "**Concept**: Quadratic Equation (factoring method)\n\n"
                "**Step-by-step Solution:**\n"
                "1. **Identify coefficients**: a=1, b=-5, c=6\n"
                "2. **Find factors of 6 that add to -5**: -2 and -3\n"
                "3. **Factor the equation**: (x - 2)(x - 3) = 0\n"
                "4. **Solve each factor**: x = 2 or x = 3\n\n"
                "**Verification**: (2)² - 5(2) + 6 = 4 - 10 + 6 = 0 ✓\n"
                "**Key Learning**: Look for factor pairs that multiply to c and add to b."
            ),
        },
        {
            'id': 'math_calculus',
            'difficulty': 'advanced',
            'level': '12th Grade',
            'query': 'Find the derivative of f(x) = 3x² + 2x - 1',
            'concept': 'Derivatives using Power Rule',
            'approach': 'power rule application',
            'response': (
                "I'll demonstrate the power rule for differentiation.\n\n"
                "**Problem**: f(x) = 3x² + 2x - 1\n"
                "**Concept**: Derivatives using Power Rule\n\n"
                "**Step-by-step Solution:**\n"
                "1. **Power rule**: d/dx[ax^n] = n·a·x^(n-1)\n"
                "2. **First term**: d/dx[3x²] = 6x\n"
                "3. **Second term**: d/dx[2x] = 2\n"
                "4. **Constant term**: d/dx[-1] = 0\n"
                "5. **Combine**: f'(x) = 6x + 2\n\n"
                "**Key Learning**: The power rule is the foundation for polynomial differentiation."
            ),
        },
    ],
    'science': [
        {
            'id': 'science_physics_basic',
            'difficulty': 'basic',
            'level': '9th Grade',
            'query': 'Why do objects fall at the same rate in a vacuum?',
            'concept': 'Gravitational Acceleration in Vacuum',
            'approach': 'conceptual explanation',
            'response': (
                "Let me explain this fundamental physics principle!\n\n"
                "**Concept**: Gravitational Acceleration in Vacuum\n\n"
                "**Simple Explanation:**\n"
                "1. **Gravity's universal effect**: Earth accelerates every object at 9.8 m/s²\n"
                "2. **Mass independence**: heavy and light objects fall equally fast\n"
                "3. **Air resistance**: normally slows lighter objects more\n"
                "4. **Vacuum**: no air means no resistance, only gravity\n\n"
                "**Real-World Example**: On Apollo 15 a hammer and a feather landed together on the Moon.\n"
                "**Why It Matters**: It underpins orbital mechanics and space travel."
            ),
        },
        {
            'id': 'science_biology_intermediate',
            'difficulty': 'intermediate',
            'level': '10th Grade',
            'query': 'How does photosynthesis convert sunlight into energy?',
            'concept': 'Photosynthesis - Light Energy Conversion',
            'approach': 'process breakdown',
            'response': (
                "I'll break down this biological process step by step.\n\n"
                "**Concept**: Photosynthesis - Light Energy Conversion\n\n"
                "**Process Breakdown:**\n"
                "1. **Light absorption**: chlorophyll captures sunlight in the leaves\n"
                "2. **Water splitting**: H₂O breaks into hydrogen and oxygen\n"
                "3. **Carbon fixation**: CO₂ combines with hydrogen\n"
                "4. **Sugar production**: glucose stores the captured energy\n"
                "5. **Oxygen release**: O₂ is released as a byproduct\n\n"
                "**Chemical Equation**: 6CO₂ + 6H₂O + light → C₆H₁₂O₆ + 6O₂\n"
                "**Connection**: Photosynthesis is the base of every food chain."
            ),
        },
        {
            'id': 'science_molecular_advanced',
            'difficulty': 'advanced',
            'level': '12th Grade',
            'query': 'Explain how DNA replication ensures genetic accuracy',
            'concept': 'DNA Replication Fidelity Mechanisms',
            'approach': 'molecular analysis',
            'response': (
                "Let me detail the mechanisms that keep DNA copies accurate.\n\n"
                "**Concept**: DNA Replication Fidelity Mechanisms\n\n"
                "**Molecular Process:**\n"
                "1. **Helicase**: unwinds the double helix at the replication fork\n"
                "2. **Primase**: lays down RNA primers as starting points\n"
                "3. **DNA polymerase III**: adds complementary nucleotides\n"
                "4. **Proofreading**: 3' to 5' exonuclease removes mismatched bases\n"
                "5. **Mismatch repair**: post-replication systems catch remaining errors\n\n"
                "**Significance**: fewer than 1 error in 10 billion bases.\n"
                "**Clinical Relevance**: defects in these systems can lead to cancer."
            ),
        },
    ],
    'literature': [
        {
            'id': 'lit_symbolism_standard',
            'difficulty': 'basic',
            'level': '11th Grade',
            'query': 'What does the green light symbolize in The Great Gatsby?',
            'concept': 'Symbolism',
            'approach': 'symbol analysis',
            'response': (
                "Let's explore this powerful symbol together!\n\n"
                "**Literary Element**: Symbolism\n"
                "**Work**: The Great Gatsby by F. Scott Fitzgerald\n\n"
                "**Symbol Analysis:**\n"
                "1. **Literal level**: the light at the end of Daisy's dock\n"
                "2. **Personal meaning**: Gatsby's hope and longing for Daisy\n"
                "3. **Thematic significance**: the elusive American Dream\n"
                "4. **Universal theme**: the pursuit of unattainable desires\n\n"
                "**Textual Evidence**: \"Gatsby believed in the green light, the orgastic future "
                "that year by year recedes before us.\"\n"
                "**Essay Applications**: themes of hope, love or the American Dream."
            ),
        },
        {
            'id': 'lit_character_intermediate',
            'difficulty': 'intermediate',
            'level': '9th Grade',
            'query': 'How does Scout Finch change throughout To Kill a Mockingbird?',
            'concept': 'Character Development (Bildungsroman)',
            'approach': 'character arc analysis',
            'response': (
                "I'll trace Scout's character arc through the novel's key events.\n\n"
                "**Literary Element**: Character Development (Bildungsroman)\n"
                "**Work**: To Kill a Mockingbird by Harper Lee\n\n"
                "**Character Evolution:**\n"
                "1. **Beginning**: an innocent child with a narrow worldview\n"
                "2. **Catalysts**: the Tom Robinson trial and the Boo Radley encounters\n"
                "3. **Growing awareness**: she recognises injustice and prejudice\n"
                "4. **Moral development**: she learns empathy\n\n"
                "**Key Scenes**: Mrs. Dubose, the courthouse, Halloween night\n"
                "**Thematic Connection**: loss of innocence and moral education."
            ),
        },
        {
            'id': 'lit_narrative_advanced',
            'difficulty': 'advanced',
            'level': '12th Grade',
            'query': 'Analyze the narrative structure and its effect in Beloved',
            'concept': 'Narrative Structure and Temporal Manipulation',
            'approach': 'structural analysis',
            'response': (
                "Let me examine Morrison's narrative techniques and their effect.\n\n"
                "**Literary Element**: Narrative Structure and Temporal Manipulation\n"
                "**Work**: Beloved by Toni Morrison\n\n"
                "**Structural Analysis:**\n"
                "1. **Non-linear timeline**: past and present interweave through memory\n"
                "2. **Fragmented narration**: mirrors trauma's effect on memory\n"
                "3. **Multiple perspectives**: Sethe, Denver, Paul D and Beloved\n"
                "4. **Cyclical patterns**: repetition reflects unresolved trauma\n\n"
                "**Psychological Effect**: the reader experiences trauma's disorientation.\n"
                "**Postmodern Elements**: the reliability of memory is questioned."
            ),
        },
    ],
}


@lru_cache(maxsize=None)
def default_library() -> ExampleLibrary:
    """The built-in mathematics/science/literature library."""
    return ExampleLibrary.from_dict(_DEFAULT_EXAMPLES)
