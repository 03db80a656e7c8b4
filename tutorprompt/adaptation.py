"""
Query analysis and learner adaptation for the dynamic and chain-of-thought
techniques.

All analysis is keyword based. Learner profiles are plain values passed in
by the caller; nothing here stores state between requests.
"""

from dataclasses import dataclass

from .exceptions import SubjectNotFoundError
from .library import normalize_subject
from .selection import extract_grade_level


# ── Query analysis ────────────────────────────────────────────────────────────

# Checked in order; the first level with a matching indicator wins.
_QUERY_COMPLEXITY = {
    'basic': ('what is', 'define', 'explain simply', 'basic'),
    'intermediate': ('how does', 'why does', 'compare', 'analyze'),
    'advanced': ('evaluate', 'synthesize', 'critique', 'derive', 'prove'),
}

_QUESTION_TYPES = {
    'procedural': ('how to', 'steps', 'solve', 'calculate'),
    'conceptual': ('why', 'what', 'explain', 'understand'),
    'analytical': ('analyze', 'compare', 'evaluate', 'critique'),
    'creative': ('design', 'create', 'imagine', 'invent'),
}

_URGENCY_KEYWORDS = ('urgent', 'quickly', 'asap', 'help', 'stuck', 'confused')


@dataclass(frozen=True)
class QueryAnalysis:
    complexity: str
    question_type: str
    urgency: str
    length: int


def _first_match(text: str, table: dict, default: str) -> str:
    for label, indicators in table.items():
        if any(indicator in text for indicator in indicators):
            return label
    return default


def analyze_query(query: str) -> QueryAnalysis:
    """Classify a query's complexity, question type and urgency."""
    lower = query.lower()
    return QueryAnalysis(
        complexity=_first_match(lower, _QUERY_COMPLEXITY, 'intermediate'),
        question_type=_first_match(lower, _QUESTION_TYPES, 'conceptual'),
        urgency='high' if any(k in lower for k in _URGENCY_KEYWORDS) else 'normal',
        length=len(query),
    )


# ── Reasoning complexity (chain-of-thought) ───────────────────────────────────

_COGNITIVE_LEVELS = {
    'basic': ('what is', 'define', 'identify', 'list', 'recall'),
    'intermediate': ('explain', 'describe', 'compare', 'analyze', 'how does'),
    'advanced': ('evaluate', 'synthesize', 'critique', 'justify', 'design', 'create'),
    'expert': ('theorize', 'hypothesize', 'construct', 'derive', 'prove'),
}

_THINKING_SKILLS = {
    'analysis': ('analyze', 'break down', 'examine', 'dissect'),
    'synthesis': ('combine', 'create', 'design', 'construct'),
    'evaluation': ('evaluate', 'assess', 'judge', 'critique'),
    'application': ('apply', 'use', 'implement', 'solve'),
    'interpretation': ('interpret', 'explain', 'meaning', 'significance'),
    'inference': ('infer', 'conclude', 'deduce', 'imply'),
}

_BASE_CHAIN_DEPTH = {'basic': 3, 'intermediate': 5, 'advanced': 7, 'expert': 9}


@dataclass(frozen=True)
class ReasoningComplexity:
    level: str
    skills: tuple[str, ...]
    chain_depth: int
    metacognitive_support: str   # 'high' or 'moderate'
    scaffolding_needed: bool


def identify_thinking_skills(query: str) -> tuple[str, ...]:
    lower = query.lower()
    skills = tuple(
        skill for skill, indicators in _THINKING_SKILLS.items()
        if any(indicator in lower for indicator in indicators)
    )
    return skills or ('analysis', 'interpretation')


def reasoning_chain_depth(cognitive_level: str, grade: int) -> int:
    if grade <= 8:
        factor = 0.8
    elif grade >= 12:
        factor = 1.2
    else:
        factor = 1.0
    return round(_BASE_CHAIN_DEPTH[cognitive_level] * factor)


def analyze_reasoning_complexity(query: str, level: str) -> ReasoningComplexity:
    """Estimate how deep a reasoning chain the query calls for."""
    cognitive_level = _first_match(query.lower(), _COGNITIVE_LEVELS, 'intermediate')
    grade = extract_grade_level(level)
    return ReasoningComplexity(
        level=cognitive_level,
        skills=identify_thinking_skills(query),
        chain_depth=reasoning_chain_depth(cognitive_level, grade),
        metacognitive_support='high' if grade <= 10 else 'moderate',
        scaffolding_needed=cognitive_level in ('advanced', 'expert'),
    )


# ── Learner adaptation (dynamic) ──────────────────────────────────────────────

@dataclass(frozen=True)
class LearnerProfile:
    """What is known about a learner's performance in one subject."""
    accuracy: float = 0.0
    interactions: int = 0
    preferred_style: str = 'analytical'

    @property
    def learner_level(self) -> str:
        if self.accuracy > 0.9 and self.interactions > 10:
            return 'advanced'
        if self.accuracy > 0.7 and self.interactions > 5:
            return 'intermediate'
        return 'beginner'


@dataclass(frozen=True)
class AdaptationStrategy:
    name: str
    approach: str
    complexity: str
    pace: str
    encouragement: str
    examples: str


def _strategy(name, approach, complexity, pace, encouragement, examples):
    return AdaptationStrategy(name, approach, complexity, pace, encouragement, examples)


# Per subject: 'struggling' and 'advanced' are chosen from performance, the
# learning style named in 'style_match' picks 'style', anything else 'default'.
ADAPTATION_STRATEGIES: dict[str, dict] = {
    'mathematics': {
        'style_match': 'visual',
        'struggling': _strategy('struggling_student', 'scaffolded_support', 'simplified',
                                'slower', 'high', 'more_basic'),
        'advanced': _strategy('advanced_learner', 'challenge_focused', 'advanced',
                              'accelerated', 'achievement', 'complex_applications'),
        'style': _strategy('visual_learner', 'diagram_focused', 'spatial',
                           'visual_progression', 'visual_success', 'graphical_demonstrations'),
        'default': _strategy('analytical_learner', 'step_by_step', 'logical_progression',
                             'systematic', 'logical_validation', 'proof_based'),
    },
    'science': {
        'style_match': 'practical',
        'struggling': _strategy('conceptual_gaps', 'foundation_building', 'prerequisite_review',
                                'careful_progression', 'understanding_focused', 'real_world_connections'),
        'advanced': _strategy('high_engagement', 'exploration_focused', 'investigation_based',
                              'discovery_driven', 'curiosity_driven', 'experimental_scenarios'),
        'style': _strategy('practical_learner', 'application_focused', 'real_world_problems',
                           'problem_solving', 'practical_success', 'industry_applications'),
        'default': _strategy('inquiry_learner', 'guided_inquiry', 'evidence_based',
                             'steady', 'supportive', 'everyday_phenomena'),
    },
    'literature': {
        'style_match': 'creative',
        'struggling': _strategy('developing_analysis', 'guided_interpretation', 'structured_analysis',
                                'step_by_step_development', 'insight_recognition', 'clear_textual_evidence'),
        'advanced': _strategy('advanced_critical_thinking', 'independent_analysis',
                              'sophisticated_interpretation', 'advanced_discussion',
                              'original_thinking', 'complex_literary_theory'),
        'style': _strategy('creative_thinker', 'imaginative_exploration', 'metaphorical_connections',
                           'creative_discovery', 'innovative_insights', 'artistic_interpretations'),
        'default': _strategy('close_reader', 'close_reading', 'textual_analysis',
                             'moderate', 'supportive', 'relevant_passages'),
    },
}


def select_adaptation_strategy(subject: str, profile: LearnerProfile) -> AdaptationStrategy:
    """Pick the adaptation strategy for a learner in a subject."""
    key = normalize_subject(subject) if isinstance(subject, str) else None
    if key not in ADAPTATION_STRATEGIES:
        raise SubjectNotFoundError(subject, tuple(ADAPTATION_STRATEGIES))
    strategies = ADAPTATION_STRATEGIES[key]

    level = profile.learner_level
    if level == 'beginner' or profile.accuracy < 0.5:
        return strategies['struggling']
    if level == 'advanced' and profile.accuracy > 0.9:
        return strategies['advanced']
    if profile.preferred_style == strategies['style_match']:
        return strategies['style']
    return strategies['default']
