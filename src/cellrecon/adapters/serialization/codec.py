"""Translate between domain objects and their stored JSON form."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from cellrecon.adapters.serialization.schema import (
    CandidatePayload,
    CellPayload,
    ColumnPayload,
    NewEntityLibraryPayload,
    ProjectPayload,
    ReconConfigPayload,
    ReconPayload,
    ReconStatsPayload,
    ReconTypePayload,
    RowPayload,
)
from cellrecon.domain.new_entities import NewEntityLibrary
from cellrecon.domain.recon import (
    STANDARD_MODE,
    UNKNOWN,
    FeatureVector,
    Judgment,
    Recon,
    ReconCandidate,
    ReconStats,
    StandardReconConfig,
)
from cellrecon.domain.table import Cell, Column, Row, Table

if TYPE_CHECKING:
    from collections.abc import Mapping


class ReconParseError(ValueError):
    """Raised when a stored reconciliation record cannot be decoded."""


class ProjectParseError(ValueError):
    """Raised when a stored project document cannot be decoded."""


def _dump(payload: BaseModel) -> dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- records ----------------------------------------------------------------


def candidate_to_payload(candidate: ReconCandidate) -> CandidatePayload:
    return CandidatePayload(
        id=candidate.id,
        name=candidate.name,
        types=list(candidate.types),
        score=candidate.score,
    )


def candidate_from_payload(payload: CandidatePayload) -> ReconCandidate:
    return ReconCandidate(payload.id, payload.name, tuple(payload.types), payload.score)


def recon_to_payload(recon: Recon) -> ReconPayload:
    return ReconPayload(
        id=recon.id,
        judgment_history_entry=recon.judgment_history_entry,
        judgment=recon.judgment,
        match=candidate_to_payload(recon.match) if recon.match is not None else None,
        features=list(recon.features),
        candidates=[candidate_to_payload(candidate) for candidate in recon.candidates],
        service=recon.service,
        identifier_space=recon.identifier_space,
        schema_space=recon.schema_space,
        judgment_action=recon.judgment_action,
        judgment_batch_size=recon.judgment_batch_size,
        match_rank=recon.match_rank,
    )


def recon_from_payload(payload: ReconPayload) -> Recon:
    try:
        features = FeatureVector.of(payload.features) if payload.features else FeatureVector()
    except ValueError as exc:
        raise ReconParseError(f"Invalid feature vector for record {payload.id}: {exc}") from exc
    return Recon(
        id=payload.id,
        judgment_history_entry=payload.judgment_history_entry,
        judgment=payload.judgment or Judgment.NONE,
        match=candidate_from_payload(payload.match) if payload.match is not None else None,
        match_rank=payload.match_rank if payload.match_rank is not None else -1,
        features=features,
        candidates=tuple(candidate_from_payload(item) for item in payload.candidates or ()),
        service=payload.service if payload.service is not None else UNKNOWN,
        identifier_space=payload.identifier_space,
        schema_space=payload.schema_space,
        judgment_action=payload.judgment_action if payload.judgment_action is not None else UNKNOWN,
        judgment_batch_size=payload.judgment_batch_size or 0,
    )


def recon_to_dict(recon: Recon) -> dict[str, Any]:
    return _dump(recon_to_payload(recon))


def recon_from_dict(data: Mapping[str, Any]) -> Recon:
    try:
        payload = ReconPayload.model_validate(data)
    except ValidationError as exc:
        raise ReconParseError(f"Invalid reconciliation record: {exc}") from exc
    return recon_from_payload(payload)


def dumps_recon(recon: Recon) -> str:
    return recon_to_payload(recon).model_dump_json(by_alias=True, exclude_none=True)


def loads_recon(text: str | bytes) -> Recon:
    """Decode one record from its compact JSON form, failing on malformed input."""

    try:
        payload = ReconPayload.model_validate_json(text)
    except ValidationError as exc:
        raise ReconParseError(f"Invalid reconciliation record: {exc}") from exc
    return recon_from_payload(payload)


# --- new entity library -----------------------------------------------------


def library_to_dict(library: NewEntityLibrary) -> dict[str, Any]:
    return _dump(NewEntityLibraryPayload(qid_map=library.as_dict()))


def library_from_dict(data: Mapping[str, Any]) -> NewEntityLibrary:
    try:
        payload = NewEntityLibraryPayload.model_validate(data)
    except ValidationError as exc:
        raise ProjectParseError(f"Invalid new entity library: {exc}") from exc
    return NewEntityLibrary(payload.qid_map)


# --- project documents ------------------------------------------------------


def recon_config_to_payload(config: object | None) -> ReconConfigPayload | None:
    if config is None:
        return None
    if isinstance(config, ReconConfigPayload):
        return config
    if isinstance(config, StandardReconConfig):
        recon_type = (
            ReconTypePayload(id=config.type_id, name=config.type_name)
            if config.type_id is not None
            else None
        )
        return ReconConfigPayload(
            mode=config.mode,
            service=config.service,
            identifier_space=config.identifier_space,
            schema_space=config.schema_space,
            type=recon_type,
        )
    raise TypeError(f"Unsupported reconciliation config: {type(config).__name__}")


def recon_config_from_payload(payload: ReconConfigPayload | None) -> object | None:
    """Return a domain config for known modes; other modes stay opaque payloads."""

    if payload is None:
        return None
    if payload.mode != STANDARD_MODE:
        return payload
    return StandardReconConfig(
        service=payload.service or UNKNOWN,
        identifier_space=payload.identifier_space,
        schema_space=payload.schema_space,
        type_id=payload.type.id if payload.type is not None else None,
        type_name=payload.type.name if payload.type is not None else None,
    )


def _stats_to_payload(stats: ReconStats | None) -> ReconStatsPayload | None:
    if stats is None:
        return None
    return ReconStatsPayload(
        non_blanks=stats.non_blanks,
        new_topics=stats.new_topics,
        matched_topics=stats.matched_topics,
    )


def _stats_from_payload(payload: ReconStatsPayload | None) -> ReconStats | None:
    if payload is None:
        return None
    return ReconStats(
        non_blanks=payload.non_blanks,
        new_topics=payload.new_topics,
        matched_topics=payload.matched_topics,
    )


def _cell_to_payload(cell: Cell | None) -> CellPayload | None:
    if cell is None:
        return None
    recon = recon_to_payload(cell.recon) if cell.recon is not None else None
    return CellPayload(value=cell.value, recon=recon)


def _cell_from_payload(payload: CellPayload | None) -> Cell | None:
    if payload is None:
        return None
    recon = recon_from_payload(payload.recon) if payload.recon is not None else None
    return Cell(payload.value, recon)


def _project_to_payload(table: Table, library: NewEntityLibrary | None) -> ProjectPayload:
    return ProjectPayload(
        columns=[
            ColumnPayload(
                name=column.name,
                cell_index=column.cell_index,
                recon_config=recon_config_to_payload(column.recon_config),
                recon_stats=_stats_to_payload(column.recon_stats),
            )
            for column in table.columns
        ],
        rows=[RowPayload(cells=[_cell_to_payload(cell) for cell in row.cells]) for row in table.rows],
        qid_map=library.as_dict() if library is not None else {},
    )


def project_to_dict(table: Table, library: NewEntityLibrary | None = None) -> dict[str, Any]:
    return _dump(_project_to_payload(table, library))


def project_from_dict(data: Mapping[str, Any]) -> tuple[Table, NewEntityLibrary]:
    try:
        payload = ProjectPayload.model_validate(data)
    except ValidationError as exc:
        raise ProjectParseError(f"Invalid project document: {exc}") from exc
    return _project_from_payload(payload)


def dumps_project(table: Table, library: NewEntityLibrary | None = None) -> str:
    return _project_to_payload(table, library).model_dump_json(
        by_alias=True, exclude_none=True, indent=2
    )


def loads_project(text: str | bytes) -> tuple[Table, NewEntityLibrary]:
    try:
        payload = ProjectPayload.model_validate_json(text)
    except ValidationError as exc:
        raise ProjectParseError(f"Invalid project document: {exc}") from exc
    return _project_from_payload(payload)


def _project_from_payload(payload: ProjectPayload) -> tuple[Table, NewEntityLibrary]:
    try:
        rows = [Row([_cell_from_payload(cell) for cell in row.cells]) for row in payload.rows]
    except ReconParseError as exc:
        raise ProjectParseError(str(exc)) from exc
    columns = [
        Column(
            name=column.name,
            cell_index=column.cell_index,
            recon_config=recon_config_from_payload(column.recon_config),
            recon_stats=_stats_from_payload(column.recon_stats),
        )
        for column in payload.columns
    ]
    return Table(columns=columns, rows=rows), NewEntityLibrary(payload.qid_map)
