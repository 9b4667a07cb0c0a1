"""SQLAlchemy table metadata for reconciliation state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Column, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData()

new_entity_table = Table(
    "new_entity_ids",
    metadata,
    Column("project", String(255), primary_key=True),
    Column("provisional_id", BigInteger, primary_key=True, autoincrement=False),
    Column("permanent_id", String(255), nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
