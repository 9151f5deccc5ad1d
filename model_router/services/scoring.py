"""
Candidate scoring.

Scoring is an ordered table of rules. Each rule that applies adds its points
to the candidate's score and may contribute a reasoning fragment. The total
does not depend on rule order; the order of the fragments does.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from model_router.models.domain import Candidate, Criteria

Predicate = Callable[[Criteria, Candidate], bool]
Points = Union[int, Callable[[Criteria, Candidate], int]]

CHEAP_AVERAGE_RATE = 0.002
EXPENSIVE_AVERAGE_RATE = 0.02
HIGH_ACCURACY = 90
ACCURACY_BASELINE = 80


@dataclass(frozen=True)
class ScoringRule:
    name: str
    applies: Predicate
    points: Points
    label: Optional[str] = None
    # When set, the label is only emitted if this also holds.
    label_if: Optional[Predicate] = None

    def evaluate(self, criteria: Criteria, candidate: Candidate) -> Tuple[int, Optional[str]]:
        """Return (points, fragment) for this rule; (0, None) when it does not apply."""
        if not self.applies(criteria, candidate):
            return 0, None
        points = self.points(criteria, candidate) if callable(self.points) else self.points
        label = self.label
        if label is not None and self.label_if is not None and not self.label_if(criteria, candidate):
            label = None
        return points, label


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: Candidate
    score: int
    reasons: Tuple[str, ...] = ()

    @property
    def reasoning(self) -> str:
        return ", ".join(self.reasons)


def _accuracy_points(criteria: Criteria, candidate: Candidate) -> int:
    return (candidate.accuracy - ACCURACY_BASELINE) * 2


def _is_highly_accurate(criteria: Criteria, candidate: Candidate) -> bool:
    return candidate.accuracy >= HIGH_ACCURACY


SCORING_RULES: Tuple[ScoringRule, ...] = (
    # Capability matches
    ScoringRule(
        "code",
        lambda cr, c: cr.requires_code and c.has_capability("code"),
        30, "excellent for coding tasks",
    ),
    ScoringRule(
        "creative",
        lambda cr, c: cr.requires_creative and c.has_capability("creative-writing"),
        25, "strong creative capabilities",
    ),
    ScoringRule(
        "reasoning",
        lambda cr, c: cr.requires_reasoning and c.has_capability("reasoning"),
        25, "advanced reasoning abilities",
    ),
    ScoringRule(
        "multimodal",
        lambda cr, c: cr.requires_multimodal and c.has_capability("multimodal"),
        35, "multimodal support",
    ),
    # Speed
    ScoringRule(
        "speed-fast",
        lambda cr, c: cr.requires_speed and c.response_time == "fast",
        20, "fast response time",
    ),
    ScoringRule("speed-medium", lambda cr, c: cr.requires_speed and c.response_time == "medium", 10),
    ScoringRule("speed-slow", lambda cr, c: cr.requires_speed and c.response_time == "slow", -10),
    # Accuracy
    ScoringRule(
        "accuracy",
        lambda cr, c: cr.requires_accuracy,
        _accuracy_points, "high accuracy", label_if=_is_highly_accurate,
    ),
    # Budget
    ScoringRule(
        "budget-cheap",
        lambda cr, c: cr.budget_sensitive and c.pricing.average_rate < CHEAP_AVERAGE_RATE,
        20, "cost-effective",
    ),
    ScoringRule(
        "budget-expensive",
        lambda cr, c: cr.budget_sensitive and c.pricing.average_rate > EXPENSIVE_AVERAGE_RATE,
        -15,
    ),
    # Complexity
    ScoringRule(
        "complexity-high",
        lambda cr, c: cr.complexity == "high" and c.accuracy >= HIGH_ACCURACY,
        15, "handles complex tasks well",
    ),
    ScoringRule(
        "complexity-low",
        lambda cr, c: cr.complexity == "low" and c.response_time == "fast",
        10, "efficient for simple tasks",
    ),
    # Provider affinity
    ScoringRule(
        "provider-openai",
        lambda cr, c: c.provider == "OpenAI" and (cr.requires_code or cr.requires_reasoning),
        5,
    ),
    ScoringRule("provider-anthropic", lambda cr, c: c.provider == "Anthropic" and cr.requires_reasoning, 5),
    ScoringRule(
        "provider-google",
        lambda cr, c: c.provider == "Google" and (cr.requires_speed or cr.requires_multimodal),
        5,
    ),
    ScoringRule(
        "provider-meta",
        lambda cr, c: c.provider == "Meta" and (cr.budget_sensitive or cr.requires_code),
        5,
    ),
)


def score_candidate(
    criteria: Criteria,
    candidate: Candidate,
    rules: Tuple[ScoringRule, ...] = SCORING_RULES,
) -> ScoredCandidate:
    score = 0
    reasons: List[str] = []
    for rule in rules:
        points, label = rule.evaluate(criteria, candidate)
        score += points
        if label:
            reasons.append(label.lower())
    return ScoredCandidate(candidate=candidate, score=score, reasons=tuple(reasons))
