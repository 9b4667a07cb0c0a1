"""Reconciliation record model: judgments, candidates, features, statistics."""

from __future__ import annotations

from cellrecon.domain.recon.candidate import ReconCandidate
from cellrecon.domain.recon.enums import Feature, Judgment, judgment_to_string, string_to_judgment
from cellrecon.domain.recon.features import FEATURE_COUNT, FeatureValue, FeatureVector
from cellrecon.domain.recon.fields import FeaturesView, HasFields, field_names
from cellrecon.domain.recon.record import (
    FREEBASE_IDENTIFIER_SPACE,
    FREEBASE_SCHEMA_SPACE,
    UNKNOWN,
    WIKIDATA_IDENTIFIER_SPACE,
    WIKIDATA_SCHEMA_SPACE,
    Recon,
    make_freebase_recon,
    make_wikidata_recon,
    new_recon_id,
)
from cellrecon.domain.recon.standard import STANDARD_MODE, StandardReconConfig
from cellrecon.domain.recon.stats import ReconStats

__all__ = [
    "FEATURE_COUNT",
    "FREEBASE_IDENTIFIER_SPACE",
    "FREEBASE_SCHEMA_SPACE",
    "STANDARD_MODE",
    "UNKNOWN",
    "WIKIDATA_IDENTIFIER_SPACE",
    "WIKIDATA_SCHEMA_SPACE",
    "Feature",
    "FeatureValue",
    "FeatureVector",
    "FeaturesView",
    "HasFields",
    "Judgment",
    "Recon",
    "ReconCandidate",
    "ReconStats",
    "StandardReconConfig",
    "field_names",
    "judgment_to_string",
    "make_freebase_recon",
    "make_wikidata_recon",
    "new_recon_id",
    "string_to_judgment",
]
