"""Named field lookup for reconciliation records.

Expression engines read record attributes by name (``cell.recon.judgment``,
``cell.recon.features.nameMatch``). Lookups go through an explicit accessor
table so the record layout never leaks; unknown names resolve to ``None``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from cellrecon.domain.recon.enums import Feature, Judgment, judgment_to_string

if TYPE_CHECKING:
    from cellrecon.domain.recon.features import FeatureValue, FeatureVector
    from cellrecon.domain.recon.record import Recon


@runtime_checkable
class HasFields(Protocol):
    """Values whose attributes can be looked up by name."""

    def get_field(self, name: str) -> object | None: ...

    def field_also_has_fields(self, name: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class FeaturesView:
    """Read-only named view over a record's feature vector."""

    vector: FeatureVector

    def get_field(self, name: str) -> FeatureValue:
        feature = Feature.from_key(name)
        return self.vector[feature] if feature is not None else None

    def field_also_has_fields(self, name: str) -> bool:
        _ = name
        return False


_RECON_FIELDS: Final[dict[str, Callable[[Recon], object]]] = {
    "id": lambda recon: recon.id,
    "judgment": lambda recon: judgment_to_string(recon.judgment),
    "judgmentAction": lambda recon: recon.judgment_action,
    "judgmentHistoryEntry": lambda recon: recon.judgment_history_entry,
    "judgmentBatchSize": lambda recon: recon.judgment_batch_size,
    "matched": lambda recon: recon.judgment is Judgment.MATCHED,
    "new": lambda recon: recon.judgment is Judgment.NEW,
    "match": lambda recon: recon.match,
    "matchRank": lambda recon: recon.match_rank,
    "candidates": lambda recon: recon.candidates,
    "best": lambda recon: recon.best_candidate,
    "features": lambda recon: FeaturesView(recon.features),
    "service": lambda recon: recon.service,
    "identifierSpace": lambda recon: recon.identifier_space,
    "schemaSpace": lambda recon: recon.schema_space,
}

# Legacy spellings still found in saved expressions.
_ALIASES: Final[dict[str, str]] = {
    "judgement": "judgment",
    "judgementAction": "judgmentAction",
    "judgementHistoryEntry": "judgmentHistoryEntry",
    "judgementBatchSize": "judgmentBatchSize",
}

_NESTED_FIELDS: Final[frozenset[str]] = frozenset({"match", "best"})


def recon_field(recon: Recon, name: str) -> object | None:
    accessor = _RECON_FIELDS.get(_ALIASES.get(name, name))
    return accessor(recon) if accessor is not None else None


def recon_field_has_fields(name: str) -> bool:
    return name in _NESTED_FIELDS


def field_names() -> tuple[str, ...]:
    """Return every recognised field name, including legacy spellings."""

    return (*_RECON_FIELDS, *_ALIASES)
