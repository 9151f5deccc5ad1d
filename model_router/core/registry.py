"""
Candidate registry.

Holds the ordered, read-only catalog of backend models. A registry is built
once and never mutated; reloading the catalog means building a new registry
and publishing it in place of the old one.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from model_router.models.catalog import DEFAULT_CATALOG
from model_router.models.domain import Candidate

log = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """The model catalog is unusable (empty, duplicate ids, invalid records)."""


class CandidateRegistry:
    """Immutable, ordered catalog of candidates with lookup by id."""

    def __init__(self, candidates: Iterable[Candidate]):
        ordered: Tuple[Candidate, ...] = tuple(candidates)
        if not ordered:
            raise ConfigurationError("Model catalog is empty.")

        by_id: Dict[str, Candidate] = {}
        for candidate in ordered:
            if candidate.id in by_id:
                raise ConfigurationError(f"Duplicate model id in catalog: '{candidate.id}'")
            by_id[candidate.id] = candidate

        self._candidates = ordered
        self._by_id: Mapping[str, Candidate] = MappingProxyType(by_id)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "CandidateRegistry":
        """Build a registry from catalog configuration records."""
        candidates: List[Candidate] = []
        for position, record in enumerate(records):
            try:
                candidates.append(Candidate.model_validate(record))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid catalog record at position {position}: {e}") from e
        return cls(candidates)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "CandidateRegistry":
        """
        Load a registry from a JSON file.

        The file holds either a list of records or an object with a "models" list.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read model catalog file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Model catalog file {path} is not valid JSON: {e}") from e

        if isinstance(data, dict):
            data = data.get("models")
        if not isinstance(data, list):
            raise ConfigurationError(f"Model catalog file {path} must contain a list of models.")

        registry = cls.from_records(data)
        log.info(f"Loaded {len(registry)} models from catalog file {path}")
        return registry

    @classmethod
    def default(cls) -> "CandidateRegistry":
        return cls.from_records(DEFAULT_CATALOG)

    def all(self) -> Tuple[Candidate, ...]:
        return self._candidates

    def get(self, candidate_id: str) -> Optional[Candidate]:
        return self._by_id.get(candidate_id)

    def providers(self) -> List[str]:
        """Distinct providers, in first-seen catalog order."""
        return list(dict.fromkeys(c.provider for c in self._candidates))

    def capabilities(self) -> List[str]:
        """Distinct capabilities, in first-seen catalog order."""
        return list(dict.fromkeys(cap for c in self._candidates for cap in c.capabilities))

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __contains__(self, candidate_id: object) -> bool:
        return candidate_id in self._by_id

    def __repr__(self) -> str:
        return f"CandidateRegistry({[c.id for c in self._candidates]!r})"


def load_registry(catalog_path: Optional[str] = None) -> CandidateRegistry:
    """Load the catalog file if one is configured, otherwise the built-in catalog."""
    if catalog_path:
        return CandidateRegistry.from_json_file(catalog_path)
    log.info("Using built-in model catalog.")
    return CandidateRegistry.default()
