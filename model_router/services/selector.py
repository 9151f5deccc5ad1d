import logging
from typing import Iterable, List

from model_router.core.registry import ConfigurationError
from model_router.models.domain import Candidate, Criteria, SelectionResult
from model_router.services.scoring import ScoredCandidate, score_candidate

log = logging.getLogger(__name__)

MIN_CONFIDENCE = 60
MAX_CONFIDENCE = 95
MAX_ALTERNATIVES = 3
FALLBACK_REASONING = "best overall match for your requirements"


def clamp_confidence(score: int) -> int:
    """Map a raw score onto the displayed confidence range."""
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, score))


def rank(criteria: Criteria, candidates: Iterable[Candidate]) -> List[ScoredCandidate]:
    """
    Score every candidate and order them best first.

    sorted() is stable, so candidates with equal scores keep catalog order.
    """
    scored = [score_candidate(criteria, candidate) for candidate in candidates]
    for item in scored:
        log.debug(f"Scored '{item.candidate.id}': {item.score} ({item.reasoning or 'no matches'})")
    return sorted(scored, key=lambda item: item.score, reverse=True)


def select(criteria: Criteria, candidates: Iterable[Candidate]) -> SelectionResult:
    """
    Select the best candidate for the given criteria.

    Args:
        criteria: Requirements inferred from the prompt.
        candidates: The catalog to choose from, usually a CandidateRegistry.

    Returns:
        The chosen model, a clamped confidence, reasoning text and up to three
        runners-up.

    Raises:
        ConfigurationError: If there is nothing to choose from.
    """
    ranking = rank(criteria, candidates)
    if not ranking:
        raise ConfigurationError("Cannot select a model from an empty catalog.")

    top = ranking[0]
    result = SelectionResult(
        selected_model=top.candidate,
        confidence=clamp_confidence(top.score),
        reasoning=top.reasoning or FALLBACK_REASONING,
        alternatives=tuple(item.candidate for item in ranking[1:1 + MAX_ALTERNATIVES]),
    )
    log.info(
        f"Selected model '{result.selected_model.id}' (score {top.score}, "
        f"confidence {result.confidence}) for task type '{criteria.task_type}'"
    )
    return result
