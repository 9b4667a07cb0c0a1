"""Fixed-size similarity feature vector."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cellrecon.domain.recon.enums import Feature

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

type FeatureValue = bool | int | float | None

FEATURE_COUNT = len(Feature)


def _empty_values() -> tuple[FeatureValue, ...]:
    return (None,) * FEATURE_COUNT


@dataclass(frozen=True, slots=True)
class FeatureVector:
    """Immutable vector with one optional value per ``Feature`` slot."""

    values: tuple[FeatureValue, ...] = field(default_factory=_empty_values)

    def __post_init__(self) -> None:
        if len(self.values) != FEATURE_COUNT:
            raise ValueError(
                f"Feature vector needs exactly {FEATURE_COUNT} slots, got {len(self.values)}"
            )

    @classmethod
    def of(cls, values: Iterable[FeatureValue]) -> FeatureVector:
        """Build a vector, padding missing trailing slots with ``None``."""

        collected = tuple(values)
        if len(collected) > FEATURE_COUNT:
            raise ValueError(
                f"Feature vector has at most {FEATURE_COUNT} slots, got {len(collected)}"
            )
        return cls(collected + (None,) * (FEATURE_COUNT - len(collected)))

    @classmethod
    def from_mapping(cls, values: dict[Feature, FeatureValue]) -> FeatureVector:
        return cls(tuple(values.get(feature) for feature in Feature))

    def __getitem__(self, index: Feature | int) -> FeatureValue:
        if 0 <= index < FEATURE_COUNT:
            return self.values[index]
        return None

    def __iter__(self) -> Iterator[FeatureValue]:
        return iter(self.values)

    def __len__(self) -> int:
        return FEATURE_COUNT

    def with_value(self, feature: Feature, value: FeatureValue) -> FeatureVector:
        updated = list(self.values)
        updated[feature] = value
        return FeatureVector(tuple(updated))

    def is_empty(self) -> bool:
        return all(value is None for value in self.values)
