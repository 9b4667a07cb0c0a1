"""SQLAlchemy persistence adapter."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, new_entity_table
from .repositories import SqlAlchemyNewEntityRepository

__all__ = [
    "SqlAlchemyNewEntityRepository",
    "create_all_tables",
    "metadata",
    "new_entity_table",
]
