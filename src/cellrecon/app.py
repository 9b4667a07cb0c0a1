"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from cellrecon.adapters.serialization import dumps_project, loads_project
from cellrecon.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from cellrecon.domain.ports.unit_of_work import NewEntityUnitOfWork
from cellrecon.domain.recon import ReconStats

if TYPE_CHECKING:
    from pathlib import Path

    from cellrecon.domain.new_entities import RewriteResult

UnitOfWorkFactory = Callable[[], NewEntityUnitOfWork]


log = getLogger(__name__)


def _resolve_unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def record_new_entity(
    *,
    project: str,
    provisional_id: int,
    permanent_id: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    """Store the permanent id the knowledge base assigned to a provisional entity."""

    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    with effective_uow() as uow:
        uow.repositories.new_entities.record(project, provisional_id, permanent_id)
        uow.commit()
    log.info("Recorded new entity %s -> %s for project %s", provisional_id, permanent_id, project)


def rewrite_project_file(
    path: Path,
    *,
    project: str,
    reverse: bool = False,
    output: Path | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> RewriteResult:
    """Rewrite the cells of a stored project against the known new entities.

    Mappings embedded in the document are merged with the stored ones (stored
    mappings win), persisted, and written back alongside the rewritten table.
    """

    table, library = loads_project(path.read_text(encoding="utf-8"))
    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    with effective_uow() as uow:
        repository = uow.repositories.new_entities
        library.update(repository.load(project))
        repository.save(project, library)
        uow.commit()

    log.info(
        "Rewriting project %s from %s: %s known new entities, reverse=%s",
        project,
        path,
        len(library),
        reverse,
    )
    result = library.rewrite(table, reverse=reverse)

    target = output or path
    target.write_text(dumps_project(table, library), encoding="utf-8")
    log.info("Wrote project to %s: rewritten=%s", target, result.rewritten_cells)
    return result


def column_stats(path: Path) -> dict[str, ReconStats]:
    """Compute reconciliation statistics for every column of a stored project."""

    table, _library = loads_project(path.read_text(encoding="utf-8"))
    return {column.name: ReconStats.create(table, column.cell_index) for column in table.columns}
