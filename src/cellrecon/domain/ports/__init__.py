"""Domain ports (interfaces) for collaborators outside the reconciliation core."""

from __future__ import annotations

from .persistence import NewEntityRepository
from .table import CellView, FeatureComputer, RowView, StatsAggregator, TableStorage
from .unit_of_work import (
    NewEntityRepositories,
    NewEntityUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CellView",
    "FeatureComputer",
    "NewEntityRepositories",
    "NewEntityRepository",
    "NewEntityUnitOfWork",
    "RepositoryCollection",
    "RowView",
    "StatsAggregator",
    "TableStorage",
    "UnitOfWork",
]
