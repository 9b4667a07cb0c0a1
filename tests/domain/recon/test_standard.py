from __future__ import annotations

import pytest

from cellrecon.domain.ports import FeatureComputer
from cellrecon.domain.recon import (
    Feature,
    FeatureVector,
    Judgment,
    Recon,
    ReconCandidate,
    StandardReconConfig,
)
from cellrecon.domain.recon.standard import break_words, word_distance


@pytest.mark.parametrize(
    ("text", "name", "expected"),
    [
        ("Douglas Adams", "Douglas Adams", 0),
        ("douglas adams", "Douglas Adams", 0),
        ("Douglas Adam", "Douglas Adams", 1),
        ("kitten", "sitting", 3),
        ("", "Ada", 3),
    ],
)
def test_name_levenshtein_ignores_case(text: str, name: str, expected: int) -> None:
    recon = Recon(id=1, candidates=(ReconCandidate("Q1", name),))

    computed = StandardReconConfig().compute_features(recon, text)

    assert computed.features[Feature.NAME_LEVENSHTEIN] == expected


def test_break_words_drops_stop_words() -> None:
    assert break_words("The Lord of the Rings") == {"lord", "rings"}


def test_word_distance() -> None:
    assert word_distance("Lord of the Rings", "The Lord of the Rings") == 1.0
    assert word_distance("Paris France", "Paris") == 0.5
    assert word_distance("the", "of") == 0.0


def test_standard_config_is_a_feature_computer() -> None:
    assert isinstance(StandardReconConfig(), FeatureComputer)


def test_compute_features_against_best_candidate() -> None:
    config = StandardReconConfig(type_id="Q5")
    recon = Recon(candidates=(ReconCandidate("Q42", "Douglas Adams", ("Q5",), 90.0),))

    updated = config.compute_features(recon, "douglas adams")

    assert updated.features[Feature.NAME_MATCH] is True
    assert updated.features[Feature.NAME_LEVENSHTEIN] == 0
    assert updated.features[Feature.NAME_WORD_DISTANCE] == 1.0
    assert updated.features[Feature.TYPE_MATCH] is True
    assert recon.features.is_empty()


def test_compute_features_prefers_match_over_best_candidate() -> None:
    best = ReconCandidate("Q1", "Something Else", (), 50.0)
    match = ReconCandidate("Q100", "Ada Lovelace", (), 100.0)
    recon = Recon(judgment=Judgment.MATCHED, match=match, candidates=(best, match))

    updated = StandardReconConfig().compute_features(recon, "Ada Lovelace")

    assert updated.features[Feature.NAME_MATCH] is True
    assert updated.features[Feature.TYPE_MATCH] is False


def test_compute_features_without_type_never_matches_type() -> None:
    recon = Recon(candidates=(ReconCandidate("Q1", "Berlin", ("Q515",), 10.0),))

    updated = StandardReconConfig().compute_features(recon, "Berlin")

    assert updated.features[Feature.TYPE_MATCH] is False


def test_compute_features_resets_without_candidates() -> None:
    recon = Recon().with_features(FeatureVector((True, True, 1, 0.5)))

    updated = StandardReconConfig().compute_features(recon, "anything")

    assert updated.features.is_empty()


def test_compute_features_keeps_name_slots_for_nameless_candidate() -> None:
    recon = Recon(
        features=FeatureVector((None, False, 9, 0.0)),
        candidates=(ReconCandidate("Q1", "", ("Q5",), 1.0),),
    )

    updated = StandardReconConfig(type_id="Q5").compute_features(recon, "text")

    assert updated.features.values == (True, False, 9, 0.0)
