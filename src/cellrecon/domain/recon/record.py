"""Immutable reconciliation record attached to a table cell.

A ``Recon`` answers "which external entity does this cell refer to, and how
sure are we". Records are values: every change goes through a ``with_*``
method returning a new record that keeps the same ``id``, so a record shared
between history entries can never be altered behind another holder's back.
"""

from __future__ import annotations

import random
import time
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Final

from cellrecon.domain.recon.candidate import ReconCandidate
from cellrecon.domain.recon.enums import Judgment
from cellrecon.domain.recon.features import FeatureValue, FeatureVector
from cellrecon.domain.recon.fields import recon_field, recon_field_has_fields

WIKIDATA_IDENTIFIER_SPACE: Final[str] = "http://www.wikidata.org/entity/"
WIKIDATA_SCHEMA_SPACE: Final[str] = "http://www.wikidata.org/prop/direct/"

# Kept so results produced against Freebase still load with their URIs.
FREEBASE_IDENTIFIER_SPACE: Final[str] = "http://rdf.freebase.com/ns/type.object.mid"
FREEBASE_SCHEMA_SPACE: Final[str] = "http://rdf.freebase.com/ns/type.object.id"

UNKNOWN: Final[str] = "unknown"

_MAX_INT64: Final[int] = 2**63 - 1


def new_recon_id() -> int:
    """Return a fresh 64-bit record id (milliseconds mixed with randomness)."""

    millis = time.time_ns() // 1_000_000
    return (millis * 1_000_000 + random.randint(0, 1_000_000)) & _MAX_INT64  # noqa: S311


@dataclass(frozen=True, slots=True, kw_only=True)
class Recon:
    id: int = field(default_factory=new_recon_id)
    judgment_history_entry: int = 0
    judgment: Judgment = Judgment.NONE
    match: ReconCandidate | None = None
    match_rank: int = -1
    features: FeatureVector = field(default_factory=FeatureVector)
    candidates: tuple[ReconCandidate, ...] = ()
    service: str = UNKNOWN
    identifier_space: str | None = WIKIDATA_IDENTIFIER_SPACE
    schema_space: str | None = WIKIDATA_SCHEMA_SPACE
    judgment_action: str = UNKNOWN
    judgment_batch_size: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "candidates", tuple(self.candidates))

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def best_candidate(self) -> ReconCandidate | None:
        return self.candidates[0] if self.candidates else None

    @property
    def is_matched(self) -> bool:
        return self.judgment is Judgment.MATCHED

    @property
    def is_new(self) -> bool:
        return self.judgment is Judgment.NEW

    def feature(self, index: int) -> FeatureValue:
        return self.features[index]

    def get_field(self, name: str) -> object | None:
        return recon_field(self, name)

    def field_also_has_fields(self, name: str) -> bool:
        return recon_field_has_fields(name)

    def with_id(self, new_id: int) -> Recon:
        return replace(self, id=new_id)

    def with_judgment_history_entry(self, entry: int) -> Recon:
        return replace(self, judgment_history_entry=entry)

    def dup(self, judgment_history_entry: int) -> Recon:
        return self.with_judgment_history_entry(judgment_history_entry)

    def with_judgment(self, judgment: Judgment) -> Recon:
        return replace(self, judgment=judgment)

    def with_match(self, match: ReconCandidate | None) -> Recon:
        return replace(self, match=match)

    def with_match_rank(self, match_rank: int) -> Recon:
        return replace(self, match_rank=match_rank)

    def with_features(self, features: FeatureVector | Iterable[FeatureValue]) -> Recon:
        vector = features if isinstance(features, FeatureVector) else FeatureVector.of(features)
        return replace(self, features=vector)

    def with_candidates(self, candidates: Iterable[ReconCandidate]) -> Recon:
        return replace(self, candidates=tuple(candidates))

    def with_candidate(self, candidate: ReconCandidate) -> Recon:
        """Append ``candidate`` after the existing ones, keeping rank order."""

        return replace(self, candidates=(*self.candidates, candidate))

    def with_service(self, service: str) -> Recon:
        return replace(self, service=service)

    def with_identifier_space(self, identifier_space: str | None) -> Recon:
        return replace(self, identifier_space=identifier_space)

    def with_schema_space(self, schema_space: str | None) -> Recon:
        return replace(self, schema_space=schema_space)

    def with_judgment_action(self, judgment_action: str) -> Recon:
        return replace(self, judgment_action=judgment_action)

    def with_judgment_batch_size(self, judgment_batch_size: int) -> Recon:
        return replace(self, judgment_batch_size=judgment_batch_size)


def make_wikidata_recon(judgment_history_entry: int = 0) -> Recon:
    return Recon(
        judgment_history_entry=judgment_history_entry,
        identifier_space=WIKIDATA_IDENTIFIER_SPACE,
        schema_space=WIKIDATA_SCHEMA_SPACE,
    )


def make_freebase_recon(judgment_history_entry: int = 0) -> Recon:
    """Build a record against the legacy Freebase URIs."""

    return Recon(
        judgment_history_entry=judgment_history_entry,
        identifier_space=FREEBASE_IDENTIFIER_SPACE,
        schema_space=FREEBASE_SCHEMA_SPACE,
    )
