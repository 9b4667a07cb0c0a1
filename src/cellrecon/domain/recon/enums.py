"""Reconciliation enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Judgment(StrEnum):
    NONE = "none"
    MATCHED = "matched"
    NEW = "new"


class Feature(IntEnum):
    """Slots of the similarity feature vector attached to a record."""

    TYPE_MATCH = 0
    NAME_MATCH = 1
    NAME_LEVENSHTEIN = 2
    NAME_WORD_DISTANCE = 3

    @property
    def key(self) -> str:
        return _FEATURE_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> Feature | None:
        return _FEATURES_BY_KEY.get(key)


_FEATURE_KEYS: dict[Feature, str] = {
    Feature.TYPE_MATCH: "typeMatch",
    Feature.NAME_MATCH: "nameMatch",
    Feature.NAME_LEVENSHTEIN: "nameLevenshtein",
    Feature.NAME_WORD_DISTANCE: "nameWordDistance",
}
_FEATURES_BY_KEY: dict[str, Feature] = {key: feature for feature, key in _FEATURE_KEYS.items()}


def judgment_to_string(judgment: Judgment) -> str:
    return judgment.value


def string_to_judgment(value: str | None) -> Judgment:
    """Parse a judgment label; anything unrecognised maps to ``Judgment.NONE``."""

    try:
        return Judgment(value)
    except ValueError:
        return Judgment.NONE
