from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from cellrecon.domain.recon import (
    FEATURE_COUNT,
    FREEBASE_IDENTIFIER_SPACE,
    FREEBASE_SCHEMA_SPACE,
    WIKIDATA_IDENTIFIER_SPACE,
    WIKIDATA_SCHEMA_SPACE,
    Feature,
    FeatureVector,
    Judgment,
    Recon,
    ReconCandidate,
    make_freebase_recon,
    make_wikidata_recon,
    new_recon_id,
)

MATCH = ReconCandidate("Q42", "Douglas Adams", ("Q5",), 97.0)
OTHER = ReconCandidate("Q7", "Other", (), 12.5)


def test_new_recon_defaults() -> None:
    recon = Recon()

    assert recon.judgment is Judgment.NONE
    assert recon.match is None
    assert recon.match_rank == -1
    assert recon.candidates == ()
    assert recon.features == FeatureVector()
    assert len(recon.features) == FEATURE_COUNT
    assert recon.service == "unknown"
    assert recon.judgment_action == "unknown"
    assert recon.judgment_batch_size == 0
    assert recon.judgment_history_entry == 0
    assert recon.identifier_space == WIKIDATA_IDENTIFIER_SPACE
    assert recon.schema_space == WIKIDATA_SCHEMA_SPACE


def test_new_recon_ids_are_positive_int64() -> None:
    ids = {new_recon_id() for _ in range(50)}

    assert all(0 < value < 2**63 for value in ids)
    assert len(ids) > 1


def test_factories_set_spaces() -> None:
    wikidata = make_wikidata_recon(5)
    freebase = make_freebase_recon(6)

    assert wikidata.judgment_history_entry == 5
    assert wikidata.identifier_space == WIKIDATA_IDENTIFIER_SPACE
    assert wikidata.schema_space == WIKIDATA_SCHEMA_SPACE
    assert freebase.judgment_history_entry == 6
    assert freebase.identifier_space == FREEBASE_IDENTIFIER_SPACE
    assert freebase.schema_space == FREEBASE_SCHEMA_SPACE


@pytest.mark.parametrize(
    ("method", "attribute", "value"),
    [
        ("with_judgment", "judgment", Judgment.MATCHED),
        ("with_match", "match", MATCH),
        ("with_match_rank", "match_rank", 3),
        ("with_features", "features", FeatureVector((True, False, 4, 0.5))),
        ("with_candidates", "candidates", (MATCH, OTHER)),
        ("with_service", "service", "https://wikidata.reconci.link/en/api"),
        ("with_identifier_space", "identifier_space", "http://example.org/id/"),
        ("with_schema_space", "schema_space", "http://example.org/schema/"),
        ("with_judgment_action", "judgment_action", "mass"),
        ("with_judgment_batch_size", "judgment_batch_size", 12),
        ("with_judgment_history_entry", "judgment_history_entry", 1_700_000_000),
        ("with_id", "id", 99),
    ],
)
def test_with_updates_only_change_their_field(method: str, attribute: str, value: object) -> None:
    original = Recon(id=1, candidates=(OTHER,))
    snapshot = Recon(id=1, candidates=(OTHER,))

    updated = getattr(original, method)(value)

    assert getattr(updated, attribute) == value
    assert updated is not original
    assert original == snapshot
    for name in Recon.__dataclass_fields__:
        if name != attribute:
            assert getattr(updated, name) == getattr(original, name)


def test_with_updates_keep_identity() -> None:
    recon = Recon(id=123)

    updated = recon.with_judgment(Judgment.NEW).with_candidate(MATCH).with_service("svc")

    assert updated.id == 123


def test_with_candidate_appends_at_end() -> None:
    recon = Recon(candidates=(OTHER,))

    updated = recon.with_candidate(MATCH)

    assert updated.candidates[-1] == MATCH
    assert len(updated.candidates) == len(recon.candidates) + 1
    assert recon.candidates == (OTHER,)


def test_with_features_accepts_partial_sequence() -> None:
    recon = Recon().with_features([True, None])

    assert recon.features == FeatureVector((True, None, None, None))


def test_feature_accessor_returns_none_out_of_range() -> None:
    recon = Recon().with_features(FeatureVector((True, False, 3, 0.25)))

    assert recon.feature(Feature.NAME_LEVENSHTEIN) == 3
    assert recon.feature(FEATURE_COUNT) is None
    assert recon.feature(-1) is None


def test_best_candidate() -> None:
    assert Recon().best_candidate is None
    assert Recon(candidates=(MATCH, OTHER)).best_candidate == MATCH


def test_dup_sets_history_entry() -> None:
    recon = Recon(id=5)

    assert recon.dup(77) == recon.with_judgment_history_entry(77)


def test_records_are_frozen() -> None:
    recon = Recon()

    with pytest.raises(FrozenInstanceError):
        recon.judgment = Judgment.MATCHED  # type: ignore[misc]


def test_equality_is_structural_and_hash_uses_id() -> None:
    first = Recon(id=10, judgment=Judgment.MATCHED, match=MATCH, candidates=(MATCH,))
    second = Recon(id=10, judgment=Judgment.MATCHED, match=MATCH, candidates=(MATCH,))
    different = first.with_judgment_action("manual")

    assert first == second
    assert first != different
    assert hash(first) == hash(different) == hash(10)


def test_equality_treats_missing_matches_as_equal() -> None:
    assert Recon(id=3) == Recon(id=3)
    assert Recon(id=3) != Recon(id=3, match=MATCH)


def test_record_does_not_share_the_callers_candidate_list() -> None:
    first = ReconCandidate("Q1", "first")
    candidates = [first]
    recon = Recon(id=1, candidates=candidates)  # type: ignore[arg-type]
    copy = recon.with_judgment(Judgment.NEW)

    candidates.append(ReconCandidate("Q2", "second"))

    assert recon.candidates == (first,)
    assert copy.candidates == (first,)
    assert isinstance(recon.candidates, tuple)


def test_candidate_does_not_share_the_callers_type_list() -> None:
    types = ["Q5"]
    candidate = ReconCandidate("Q1", "first", types)  # type: ignore[arg-type]

    types.append("Q215627")

    assert candidate.types == ("Q5",)
