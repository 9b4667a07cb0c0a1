"""Per-column reconciliation statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cellrecon.domain.recon.enums import Judgment

if TYPE_CHECKING:
    from cellrecon.domain.ports.table import TableStorage


def is_blank(value: object) -> bool:
    return value is None or value == ""


@dataclass(frozen=True, slots=True)
class ReconStats:
    non_blanks: int = 0
    new_topics: int = 0
    matched_topics: int = 0

    @property
    def none_topics(self) -> int:
        """Non-blank cells that are still unjudged (or carry no record)."""

        return self.non_blanks - self.new_topics - self.matched_topics

    @classmethod
    def create(cls, table: TableStorage, cell_index: int) -> ReconStats:
        non_blanks = 0
        new_topics = 0
        matched_topics = 0
        for row in table.iter_rows():
            cells = row.cells
            cell = cells[cell_index] if cell_index < len(cells) else None
            if cell is None or is_blank(cell.value):
                continue
            non_blanks += 1
            if cell.recon is None:
                continue
            if cell.recon.judgment is Judgment.NEW:
                new_topics += 1
            elif cell.recon.judgment is Judgment.MATCHED:
                matched_topics += 1
        return cls(non_blanks=non_blanks, new_topics=new_topics, matched_topics=matched_topics)
