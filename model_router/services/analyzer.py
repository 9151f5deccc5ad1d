from typing import Tuple

from model_router.models.domain import Complexity, Criteria, TaskType

CODE_TERMS = (
    "code", "program", "debug", "function", "algorithm", "script", "api",
    "database", "sql", "javascript", "python", "react", "html", "css",
)
CREATIVE_TERMS = (
    "write", "story", "poem", "creative", "blog", "article", "marketing",
    "content", "design", "brainstorm",
)
REASONING_TERMS = (
    "analyze", "compare", "explain", "reason", "logic", "problem", "solve",
    "strategy", "plan", "decision",
)
SPEED_TERMS = ("quick", "fast", "urgent", "immediately", "asap", "now")
ACCURACY_TERMS = (
    "accurate", "precise", "exact", "detailed", "thorough", "comprehensive", "research",
)
BUDGET_TERMS = ("cheap", "cost", "budget", "affordable", "economical")
MULTIMODAL_TERMS = ("image", "picture", "photo", "visual", "diagram", "chart", "multimodal")

LOW_COMPLEXITY_TERMS = ("simple", "basic", "easy", "quick")
HIGH_COMPLEXITY_TERMS = ("complex", "advanced", "detailed", "comprehensive", "difficult")


def _mentions(text: str, terms: Tuple[str, ...]) -> bool:
    # Substring match: "now" also matches inside "know".
    return any(term in text for term in terms)


def _complexity(text: str) -> Complexity:
    complexity: Complexity = "medium"
    if _mentions(text, LOW_COMPLEXITY_TERMS):
        complexity = "low"
    # High wins when both sets match.
    if _mentions(text, HIGH_COMPLEXITY_TERMS):
        complexity = "high"
    return complexity


def analyze(prompt: str) -> Criteria:
    """
    Infer selection criteria from a free-text prompt.

    Every flag is an independent keyword test, so any combination may be set.
    The task type follows a fixed priority: coding, creative, reasoning,
    multimodal, then general.
    """
    text = prompt.lower()

    requires_code = _mentions(text, CODE_TERMS)
    requires_creative = _mentions(text, CREATIVE_TERMS)
    requires_reasoning = _mentions(text, REASONING_TERMS)
    requires_multimodal = _mentions(text, MULTIMODAL_TERMS)

    task_type: TaskType = "general"
    if requires_code:
        task_type = "coding"
    elif requires_creative:
        task_type = "creative"
    elif requires_reasoning:
        task_type = "reasoning"
    elif requires_multimodal:
        task_type = "multimodal"

    return Criteria(
        task_type=task_type,
        complexity=_complexity(text),
        requires_speed=_mentions(text, SPEED_TERMS),
        requires_accuracy=_mentions(text, ACCURACY_TERMS),
        budget_sensitive=_mentions(text, BUDGET_TERMS),
        requires_multimodal=requires_multimodal,
        requires_code=requires_code,
        requires_creative=requires_creative,
        requires_reasoning=requires_reasoning,
    )
