"""
Subject templates for each prompting technique.

Templates are `str.format` strings. Fields used: {query}, {level},
{examples}, {example_query}, {example_level}, {example_response},
{token_target}, plus the technique-specific fields documented per table.
"""

from dataclasses import dataclass


# ── Zero-shot ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ZeroShotTemplate:
    instructions: str
    token_target: int


ZERO_SHOT: dict[str, ZeroShotTemplate] = {
    'mathematics': ZeroShotTemplate(
        instructions=(
            "You are an expert mathematics tutor. A student needs help with a math problem.\n\n"
            "Provide a clear, step-by-step solution that:\n"
            "1. Identifies what mathematical concept is being used\n"
            "2. Shows each calculation step with explanation\n"
            "3. Explains the reasoning behind each step\n"
            "4. Verifies the final answer\n"
            "5. Offers one key insight or learning tip"
        ),
        token_target=300,
    ),
    'science': ZeroShotTemplate(
        instructions=(
            "You are a science educator. A student is learning about a scientific concept.\n\n"
            "Explain this concept by:\n"
            "1. Providing a clear, accurate definition\n"
            "2. Using a real-world analogy they can understand\n"
            "3. Explaining why this concept is important\n"
            "4. Connecting it to something they already know\n"
            "5. Including one fascinating fact"
        ),
        token_target=250,
    ),
    'literature': ZeroShotTemplate(
        instructions=(
            "You are a literature teacher helping a student understand literary concepts.\n\n"
            "Provide educational support by:\n"
            "1. Explaining the literary concept clearly\n"
            "2. Providing relevant historical, cultural or thematic context\n"
            "3. Using specific examples from the text when applicable\n"
            "4. Connecting to broader literary themes or techniques\n"
            "5. Suggesting how this knowledge applies to their analysis"
        ),
        token_target=275,
    ),
}

ZERO_SHOT_PROMPT = """{instructions}

Student Query: "{query}"
Student Level: {level}
Response Requirements: Educational, accurate, engaging
Token Target: {token_target}"""


# ── One-shot ──────────────────────────────────────────────────────────────────
# Fields: {example_query}, {example_level}, {example_response}, {query}, {level}

ONE_SHOT: dict[str, str] = {
    'mathematics': """You are an expert mathematics tutor. Here's how to help students with step-by-step problem solving:

EXAMPLE:
Student Query: "{example_query}"
Student Level: {example_level}

Response:
{example_response}

NOW SOLVE THIS PROBLEM USING THE SAME FORMAT:
Student Query: "{query}"
Student Level: {level}

Provide your response following the same structure and educational approach as the example above.""",

    'science': """You are a science educator. Here's how to explain scientific concepts clearly:

EXAMPLE:
Student Query: "{example_query}"
Student Level: {example_level}

Response:
{example_response}

NOW EXPLAIN THIS CONCEPT USING THE SAME FORMAT:
Student Query: "{query}"
Student Level: {level}

Follow the same structure and educational approach as demonstrated in the example above.""",

    'literature': """You are a literature teacher. Here's how to analyze literary works with students:

EXAMPLE:
Student Query: "{example_query}"
Student Level: {example_level}

Response:
{example_response}

NOW ANALYZE THIS LITERARY ELEMENT USING THE SAME FORMAT:
Student Query: "{query}"
Student Level: {level}

Follow the same analytical structure and educational approach as shown in the example above.""",
}


# ── Multi-shot ────────────────────────────────────────────────────────────────
# Fields: {examples}, {query}, {level}

MULTI_SHOT: dict[str, str] = {
    'mathematics': """You are an expert mathematics tutor. Here are examples of how to help students with different types of math problems:

{examples}

NOW SOLVE THIS PROBLEM USING THE MOST APPROPRIATE APPROACH FROM THE EXAMPLES:
Student Query: "{query}"
Student Level: {level}
Choose the example style that best matches the problem complexity and student level.""",

    'science': """You are a science educator. Here are examples of how to explain different types of scientific concepts:

{examples}

NOW EXPLAIN THIS CONCEPT USING THE MOST SUITABLE APPROACH FROM THE EXAMPLES:
Student Query: "{query}"
Student Level: {level}
Match your explanation style to the appropriate complexity level and student background.""",

    'literature': """You are a literature teacher. Here are examples of how to analyze different types of literary works:

{examples}

NOW ANALYZE THIS LITERARY ELEMENT USING THE MOST APPROPRIATE APPROACH:
Student Query: "{query}"
Student Level: {level}
Select the analytical depth and approach that matches the student's academic level.""",
}

GENERIC_MULTI_SHOT = """Here are examples of how to help students:

{examples}

NOW RESPOND TO THIS QUERY USING THE MOST APPROPRIATE APPROACH FROM THE EXAMPLES:
Student Query: "{query}"
Student Level: {level}"""


# ── Chain-of-thought ──────────────────────────────────────────────────────────
# Each framework is a role line plus five (title, prompt, thought) steps.

@dataclass(frozen=True)
class ReasoningFramework:
    role: str
    heading: str
    steps: tuple[tuple[str, str, str], ...]
    closing: str


CHAIN_OF_THOUGHT: dict[str, ReasoningFramework] = {
    'mathematics': ReasoningFramework(
        role="You are an expert mathematics tutor who shows students HOW to think through problems step-by-step.",
        heading="🧠 MY THINKING PROCESS (Follow along with me):",
        steps=(
            ("UNDERSTANDING THE PROBLEM",
             "Let me first understand what this problem is really asking...",
             "I need to identify the mathematical concept involved, the given values and what we're solving for."),
            ("CHOOSING MY STRATEGY",
             "Now I need to decide how to approach this...",
             "I could use direct calculation, algebraic manipulation or a geometric interpretation; "
             "I'll pick the one that fits the problem type."),
            ("WORKING THROUGH THE SOLUTION",
             "Let me solve this step by step, showing each decision...",
             "At every step I'll say why I'm taking it and how it moves us toward the answer."),
            ("VERIFYING MY ANSWER",
             "I should check if this makes sense...",
             "I'll substitute the answer back or estimate to confirm it is reasonable."),
            ("REFLECTING ON THE PROCESS",
             "What can we learn from this approach?",
             "The key insight is the reasoning method, which I can reuse on similar problems."),
        ),
        closing="COMPLETE SOLUTION WITH REASONING CHAIN:",
    ),
    'science': ReasoningFramework(
        role="You are a science educator who demonstrates scientific thinking and reasoning processes.",
        heading="🔬 MY SCIENTIFIC REASONING (Think along with me):",
        steps=(
            ("ANALYZING THE SCIENTIFIC QUESTION",
             "Let me break down what we're investigating...",
             "This question involves specific scientific concepts that I need to identify and connect."),
            ("CONNECTING TO SCIENTIFIC PRINCIPLES",
             "What scientific laws and theories apply here?",
             "I need to link this to established theories and the evidence behind them."),
            ("BUILDING THE SCIENTIFIC EXPLANATION",
             "Let me construct the explanation step by step...",
             "I want to explain not just what happens, but why it happens, cause by cause."),
            ("APPLYING SCIENTIFIC METHOD",
             "How would we test or verify this?",
             "I'll describe an observation or experiment and the outcome we'd predict."),
            ("REAL-WORLD IMPLICATIONS",
             "Why does this matter in the real world?",
             "I'll connect the idea to everyday applications and its wider impact."),
        ),
        closing="COMPLETE SCIENTIFIC REASONING CHAIN:",
    ),
    'literature': ReasoningFramework(
        role="You are a literature teacher who demonstrates critical analysis and interpretive thinking.",
        heading="📚 MY ANALYTICAL THINKING (Follow my reasoning):",
        steps=(
            ("EXAMINING THE LITERARY QUESTION",
             "Let me first understand what we're analyzing...",
             "This question asks me to analyze specific textual elements and what they mean."),
            ("GATHERING TEXTUAL EVIDENCE",
             "What does the text actually show us?",
             "I should look for specific quotes and passages that support an interpretation."),
            ("INTERPRETING THE EVIDENCE",
             "What does this evidence mean?",
             "I'll consider the literary devices and symbolism at work in those passages."),
            ("CONNECTING TO BROADER THEMES",
             "How does this fit into the bigger picture?",
             "I'll relate the evidence to universal themes and its cultural context."),
            ("FORMING THE CRITICAL ARGUMENT",
             "What's my overall interpretation and why?",
             "I'll state a thesis and show how the evidence supports it."),
        ),
        closing="COMPLETE LITERARY ANALYSIS WITH REASONING:",
    ),
}

METACOGNITIVE_GUIDANCE = """

🧠 METACOGNITIVE GUIDANCE:
As you follow my thinking process, ask yourself:
• "What is the teacher thinking about at each step?"
• "Why did they choose this approach over others?"
• "How can I apply this thinking to similar problems?"

💡 THINKING SKILLS DEVELOPMENT:
This problem helps you practice: {skills}"""

THINKING_TOOLS = """

🔧 THINKING TOOLS:
When you encounter similar problems:
1. Always start by clearly understanding what you're being asked
2. Identify what you know and what you need to find out
3. Consider multiple approaches before choosing one
4. Check your reasoning at each step
5. Reflect on what you learned from the process"""


# ── Dynamic ───────────────────────────────────────────────────────────────────
# Fields: {learner_level}, {learning_style}, {strategy}, {approach},
# {adaptive_content}, {guidance}, {query}, {level}

DYNAMIC: dict[str, str] = {
    'mathematics': """DYNAMIC CONTEXT ANALYSIS:
- Detected Level: {learner_level}
- Learning Style: {learning_style}
- Adaptation Strategy: {strategy}
- Recommended Approach: {approach}

You are an expert mathematics tutor with real-time student insights.

ADAPTIVE TEACHING STRATEGY:
{adaptive_content}

Student Query: "{query}"
Student Level: {level}

PERSONALIZED MATHEMATICAL GUIDANCE:
{guidance}""",

    'science': """CONTEXTUAL INTELLIGENCE ACTIVE:
- Student Profile: {learner_level}
- Optimal Teaching Style: {learning_style}
- Current Adaptation: {strategy}
- Selected Methodology: {approach}

You are a science educator with deep student understanding.

REAL-TIME ADAPTATION:
{adaptive_content}

Student Query: "{query}"
Student Level: {level}

PERSONALIZED SCIENTIFIC EXPLANATION:
{guidance}""",

    'literature': """LITERARY ANALYSIS ADAPTATION:
- Analytical Level: {learner_level}
- Interpretation Style: {learning_style}
- Current Focus: {strategy}
- Optimal Approach: {approach}

You are a literature teacher with comprehensive student insight.

ADAPTIVE LITERARY GUIDANCE:
{adaptive_content}

Student Query: "{query}"
Student Level: {level}

PERSONALIZED INTERPRETATION SUPPORT:
{guidance}""",
}
