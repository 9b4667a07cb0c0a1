"""Standard reconciliation-service config and its similarity features.

Features compare the cell text with the candidate the record currently points
at: the explicit match when there is one, otherwise the best-ranked candidate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from Levenshtein import distance as levenshtein_distance

from cellrecon.domain.recon.enums import Feature
from cellrecon.domain.recon.features import FeatureVector
from cellrecon.domain.recon.record import UNKNOWN, WIKIDATA_IDENTIFIER_SPACE, WIKIDATA_SCHEMA_SPACE

if TYPE_CHECKING:
    from cellrecon.domain.recon.candidate import ReconCandidate
    from cellrecon.domain.recon.record import Recon

STANDARD_MODE: Final[str] = "standard-service"

_STOP_WORDS: Final[frozenset[str]] = frozenset({"the", "a", "and", "of", "on", "in", "at", "by"})


@dataclass(frozen=True, slots=True, kw_only=True)
class StandardReconConfig:
    """Column configuration for a standard reconciliation service."""

    service: str = UNKNOWN
    identifier_space: str | None = WIKIDATA_IDENTIFIER_SPACE
    schema_space: str | None = WIKIDATA_SCHEMA_SPACE
    type_id: str | None = None
    type_name: str | None = None

    @property
    def mode(self) -> str:
        return STANDARD_MODE

    def compute_features(self, recon: Recon, text: str) -> Recon:
        candidate = recon.match or recon.best_candidate
        if candidate is None:
            return recon.with_features(FeatureVector())

        values = dict(zip(Feature, recon.features, strict=True))
        if candidate.name:
            values[Feature.NAME_MATCH] = text.lower() == candidate.name.lower()
            values[Feature.NAME_LEVENSHTEIN] = levenshtein_distance(
                text.lower(), candidate.name.lower()
            )
            values[Feature.NAME_WORD_DISTANCE] = word_distance(text, candidate.name)
        values[Feature.TYPE_MATCH] = self._type_matches(candidate)
        return recon.with_features(FeatureVector.from_mapping(values))

    def _type_matches(self, candidate: ReconCandidate) -> bool:
        return self.type_id is not None and self.type_id in candidate.types


def break_words(text: str) -> set[str]:
    return {word for word in text.lower().split() if word not in _STOP_WORDS}


def word_distance(a: str, b: str) -> float:
    """Share of words the two strings have in common, relative to the larger word set."""

    words_a = break_words(a)
    words_b = break_words(b)
    longer, shorter = (words_a, words_b) if len(words_a) >= len(words_b) else (words_b, words_a)
    if not longer:
        return 0.0
    return len(longer & shorter) / len(longer)
