"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from cellrecon.adapters.sqlalchemy.mappings import new_entity_table
from cellrecon.domain.new_entities import NewEntityLibrary

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

log = getLogger(__name__)


class SqlAlchemyNewEntityRepository:
    """Stores provisional-to-permanent id mappings per project.

    Rows are inserted or overwritten, never deleted.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def load(self, project: str) -> NewEntityLibrary:
        stmt = select(new_entity_table.c.provisional_id, new_entity_table.c.permanent_id).where(
            new_entity_table.c.project == project
        )
        rows = self.session.execute(stmt).all()
        return NewEntityLibrary({row.provisional_id: row.permanent_id for row in rows})

    def lookup(self, project: str, provisional_id: int) -> str | None:
        stmt = select(new_entity_table.c.permanent_id).where(
            new_entity_table.c.project == project,
            new_entity_table.c.provisional_id == provisional_id,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def record(self, project: str, provisional_id: int, permanent_id: str) -> None:
        existing = self.lookup(project, provisional_id)
        if existing == permanent_id:
            return
        if existing is None:
            stmt = insert(new_entity_table).values(
                project=project,
                provisional_id=provisional_id,
                permanent_id=permanent_id,
            )
        else:
            stmt = (
                update(new_entity_table)
                .where(
                    new_entity_table.c.project == project,
                    new_entity_table.c.provisional_id == provisional_id,
                )
                .values(permanent_id=permanent_id)
            )
        self.session.execute(stmt)

    def save(self, project: str, library: NewEntityLibrary) -> int:
        """Upsert every mapping of ``library``; return how many rows changed."""

        stored = self.load(project)
        changed = 0
        for provisional_id, permanent_id in library.items():
            if stored.lookup(provisional_id) == permanent_id:
                continue
            self.record(project, provisional_id, permanent_id)
            changed += 1
        log.debug("Saved %s new entity mappings for project %s", changed, project)
        return changed
