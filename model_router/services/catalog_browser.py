from typing import Iterable, List, Literal, Optional

from model_router.models.domain import Candidate

SortKey = Literal["accuracy", "speed", "cost", "name"]

SPEED_ORDER = {"fast": 3, "medium": 2, "slow": 1}


def _matches(
    candidate: Candidate,
    search: Optional[str],
    provider: Optional[str],
    capability: Optional[str],
) -> bool:
    if search:
        needle = search.lower()
        if needle not in candidate.name.lower() and needle not in candidate.description.lower():
            return False
    if provider and candidate.provider != provider:
        return False
    if capability and not candidate.has_capability(capability):
        return False
    return True


def browse_catalog(
    candidates: Iterable[Candidate],
    search: Optional[str] = None,
    provider: Optional[str] = None,
    capability: Optional[str] = None,
    sort_by: Optional[SortKey] = None,
) -> List[Candidate]:
    """
    Filter and order the catalog for comparison views.

    search matches name or description case-insensitively; provider and
    capability must match exactly. Without sort_by the catalog order is kept.
    """
    models = [c for c in candidates if _matches(c, search, provider, capability)]

    if sort_by == "accuracy":
        models.sort(key=lambda c: c.accuracy, reverse=True)
    elif sort_by == "speed":
        models.sort(key=lambda c: SPEED_ORDER[c.response_time], reverse=True)
    elif sort_by == "cost":
        models.sort(key=lambda c: c.pricing.average_rate)
    elif sort_by == "name":
        models.sort(key=lambda c: c.name.lower())
    return models
