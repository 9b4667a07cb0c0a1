"""Candidate entities surfaced by a reconciliation service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class ReconCandidate:
    """One possible external entity for a cell, ranked by ``score``."""

    id: str
    name: str
    types: tuple[str, ...] = ()
    score: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(self.types))

    def get_field(self, name: str) -> object | None:
        accessor = _CANDIDATE_FIELDS.get(name)
        return accessor(self) if accessor is not None else None

    def field_also_has_fields(self, name: str) -> bool:
        _ = name
        return False


_CANDIDATE_FIELDS: Final[dict[str, Callable[[ReconCandidate], object]]] = {
    "id": lambda candidate: candidate.id,
    "name": lambda candidate: candidate.name,
    "type": lambda candidate: candidate.types,
    "types": lambda candidate: candidate.types,
    "score": lambda candidate: candidate.score,
}
