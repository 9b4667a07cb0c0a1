"""Pydantic models for the stored form of reconciliation data.

Records use the compact tags of the project format (``j``, ``m``, ``f``,
``c``); cells use ``v`` for the value and ``r`` for the record.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

from cellrecon.domain.recon import Judgment  # noqa: TC001


class StoredModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CandidatePayload(StoredModel):
    id: str
    name: str = ""
    types: list[str] = Field(default_factory=list[str])
    score: float = 0.0


class ReconPayload(StoredModel):
    id: StrictInt
    judgment_history_entry: int = Field(default=0, alias="judgmentHistoryEntry")
    judgment: Judgment | None = Field(default=None, alias="j")
    match: CandidatePayload | None = Field(default=None, alias="m")
    features: list[StrictBool | StrictInt | StrictFloat | None] | None = Field(
        default=None, alias="f"
    )
    candidates: list[CandidatePayload] | None = Field(default=None, alias="c")
    service: str | None = None
    identifier_space: str | None = Field(default=None, alias="identifierSpace")
    schema_space: str | None = Field(default=None, alias="schemaSpace")
    judgment_action: str | None = Field(default=None, alias="judgmentAction")
    judgment_batch_size: int | None = Field(default=None, alias="judgmentBatchSize")
    match_rank: int | None = Field(default=None, alias="matchRank")


class ReconTypePayload(StoredModel):
    id: str
    name: str | None = None


class ReconConfigPayload(StoredModel):
    mode: str
    service: str | None = None
    identifier_space: str | None = Field(default=None, alias="identifierSpace")
    schema_space: str | None = Field(default=None, alias="schemaSpace")
    type: ReconTypePayload | None = None


class ReconStatsPayload(StoredModel):
    non_blanks: int = Field(default=0, alias="nonBlanks")
    new_topics: int = Field(default=0, alias="newTopics")
    matched_topics: int = Field(default=0, alias="matchedTopics")


class ColumnPayload(StoredModel):
    name: str
    cell_index: int = Field(alias="cellIndex")
    recon_config: ReconConfigPayload | None = Field(default=None, alias="reconConfig")
    recon_stats: ReconStatsPayload | None = Field(default=None, alias="reconStats")


class CellPayload(StoredModel):
    value: Any = Field(default=None, alias="v")
    recon: ReconPayload | None = Field(default=None, alias="r")


class RowPayload(StoredModel):
    cells: list[CellPayload | None] = Field(default_factory=list["CellPayload | None"])


class NewEntityLibraryPayload(StoredModel):
    qid_map: dict[int, str] = Field(default_factory=dict[int, str], alias="qidMap")


class ProjectPayload(StoredModel):
    columns: list[ColumnPayload] = Field(default_factory=list["ColumnPayload"])
    rows: list[RowPayload] = Field(default_factory=list["RowPayload"])
    qid_map: dict[int, str] = Field(default_factory=dict[int, str], alias="qidMap")
