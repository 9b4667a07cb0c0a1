"""Ports for the table collaborators the rewrite pass relies on.

The storage engine itself lives elsewhere; reconciliation only needs to walk
rows, swap a cell's record, consult a column's reconciliation config, and
install refreshed statistics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from cellrecon.domain.recon import Recon, ReconStats


class CellView(Protocol):
    @property
    def value(self) -> object: ...

    @property
    def recon(self) -> Recon | None: ...


class RowView(Protocol):
    @property
    def cells(self) -> Sequence[CellView | None]: ...

    def set_recon(self, cell_index: int, recon: Recon) -> None: ...


class TableStorage(Protocol):
    """Row-oriented table that owns reconciled cells."""

    def iter_rows(self) -> Iterable[RowView]: ...

    def has_column(self, cell_index: int) -> bool: ...

    def column_recon_config(self, cell_index: int) -> object | None: ...

    def set_column_recon_stats(self, cell_index: int, stats: ReconStats) -> None: ...


@runtime_checkable
class FeatureComputer(Protocol):
    """Reconciliation strategy able to refresh a record's similarity features."""

    def compute_features(self, recon: Recon, text: str) -> Recon: ...


class StatsAggregator(Protocol):
    def __call__(self, table: TableStorage, cell_index: int) -> ReconStats: ...
