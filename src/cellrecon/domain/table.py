"""In-memory table of reconciled cells.

Cells are immutable; replacing a cell's record swaps the whole cell in its row.
Columns map a display name to a cell index and carry the column's
reconciliation config and last computed statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cellrecon.domain.recon import Recon, ReconStats


@dataclass(frozen=True, slots=True)
class Cell:
    value: object
    recon: Recon | None = None

    def with_recon(self, recon: Recon | None) -> Cell:
        return replace(self, recon=recon)


@dataclass(slots=True)
class Row:
    cells: list[Cell | None] = field(default_factory=list["Cell | None"])

    def get_cell(self, cell_index: int) -> Cell | None:
        return self.cells[cell_index] if 0 <= cell_index < len(self.cells) else None

    def set_cell(self, cell_index: int, cell: Cell | None) -> None:
        if cell_index >= len(self.cells):
            self.cells.extend([None] * (cell_index + 1 - len(self.cells)))
        self.cells[cell_index] = cell

    def set_recon(self, cell_index: int, recon: Recon) -> None:
        cell = self.get_cell(cell_index)
        if cell is None:
            raise IndexError(f"No cell at index {cell_index} to attach a record to")
        self.cells[cell_index] = cell.with_recon(recon)


@dataclass(slots=True, kw_only=True)
class Column:
    name: str
    cell_index: int
    recon_config: object | None = None
    recon_stats: ReconStats | None = None


@dataclass(slots=True)
class Table:
    columns: list[Column] = field(default_factory=list["Column"])
    rows: list[Row] = field(default_factory=list["Row"])

    def iter_rows(self) -> Iterator[Row]:
        return iter(self.rows)

    def column_by_cell_index(self, cell_index: int) -> Column | None:
        for column in self.columns:
            if column.cell_index == cell_index:
                return column
        return None

    def column_by_name(self, name: str) -> Column | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def has_column(self, cell_index: int) -> bool:
        return self.column_by_cell_index(cell_index) is not None

    def column_recon_config(self, cell_index: int) -> object | None:
        column = self.column_by_cell_index(cell_index)
        return column.recon_config if column is not None else None

    def set_column_recon_stats(self, cell_index: int, stats: ReconStats) -> None:
        column = self.column_by_cell_index(cell_index)
        if column is None:
            raise KeyError(f"No column stores cells at index {cell_index}")
        column.recon_stats = stats

    def add_column(self, name: str, *, recon_config: object | None = None) -> Column:
        cell_index = max((column.cell_index for column in self.columns), default=-1) + 1
        column = Column(name=name, cell_index=cell_index, recon_config=recon_config)
        self.columns.append(column)
        return column

    def add_row(self, *cells: Cell | None) -> Row:
        row = Row(list(cells))
        self.rows.append(row)
        return row
