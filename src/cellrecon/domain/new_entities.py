"""Library of entities created in the external knowledge base.

Cells judged ``new`` use their record id as a provisional entity reference.
Once the knowledge base creates the entity, the assigned permanent id is
stored here, and ``rewrite_reconciled_cells`` turns every cell pointing at the
provisional id into a match on the permanent one (or back, when reverting).

Note that the pass touches every row of the table: when several cells share
one provisional entity, all of them are rewritten even if only a subset of
rows was part of the edit that created the entity.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from cellrecon.domain.ports.table import FeatureComputer
from cellrecon.domain.recon import Judgment, ReconCandidate, ReconStats

if TYPE_CHECKING:
    from collections.abc import ItemsView, Iterator, Mapping

    from cellrecon.domain.ports.table import CellView, StatsAggregator, TableStorage
    from cellrecon.domain.recon import Recon

log = getLogger(__name__)

NEW_ENTITY_SCORE: Final[float] = 100.0


@dataclass(frozen=True, slots=True)
class RewriteResult:
    """Outcome of one rewrite pass over a table."""

    affected_columns: frozenset[int]
    rewritten_cells: int

    def __bool__(self) -> bool:
        return self.rewritten_cells > 0


class NewEntityLibrary:
    """Maps provisional record ids to the permanent ids the knowledge base assigned.

    Entries are only ever added or overwritten. Writes are serialised by a lock;
    readers never block and at worst miss a mapping that is still being stored.
    """

    def __init__(self, mapping: Mapping[int, str] | None = None) -> None:
        self._map: dict[int, str] = dict(mapping or {})
        self._write_lock = threading.Lock()

    def record_mapping(self, provisional_id: int, permanent_id: str) -> None:
        with self._write_lock:
            previous = self._map.get(provisional_id)
            self._map[provisional_id] = permanent_id
        if previous is not None and previous != permanent_id:
            log.debug(
                "Provisional entity %s re-resolved from %s to %s",
                provisional_id,
                previous,
                permanent_id,
            )

    def lookup(self, provisional_id: int) -> str | None:
        return self._map.get(provisional_id)

    def update(self, other: NewEntityLibrary | Mapping[int, str]) -> None:
        with self._write_lock:
            self._map.update(other.items())

    def items(self) -> ItemsView[int, str]:
        return self._map.items()

    def as_dict(self) -> dict[int, str]:
        return dict(self._map)

    def __contains__(self, provisional_id: object) -> bool:
        return provisional_id in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[int]:
        return iter(self._map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NewEntityLibrary):
            return NotImplemented
        return self._map == other._map

    def __repr__(self) -> str:
        return f"NewEntityLibrary({self._map!r})"

    def rewrite_reconciled_cells(
        self,
        table: TableStorage,
        *,
        reverse: bool = False,
        stats_aggregator: StatsAggregator | None = None,
    ) -> set[int]:
        """Rewrite records of cells whose provisional entity has a permanent id.

        Forward, ``new`` cells become ``matched`` on the permanent id. With
        ``reverse=True`` such ``matched`` cells go back to ``new``. Statistics of
        every affected column are recomputed once, after all cells are rewritten.
        Returns the cell indices of the affected columns.
        """

        return set(
            self.rewrite(table, reverse=reverse, stats_aggregator=stats_aggregator).affected_columns
        )

    def rewrite(
        self,
        table: TableStorage,
        *,
        reverse: bool = False,
        stats_aggregator: StatsAggregator | None = None,
    ) -> RewriteResult:
        affected: set[int] = set()
        rewritten = 0
        for row in table.iter_rows():
            for cell_index, cell in enumerate(row.cells):
                if cell is None or cell.recon is None:
                    continue
                if reverse:
                    updated = self._revert(cell.recon)
                else:
                    updated = self._resolve(cell)
                if updated is None:
                    continue
                row.set_recon(cell_index, _refresh_features(table, cell_index, cell, updated))
                affected.add(cell_index)
                rewritten += 1

        aggregate = stats_aggregator or ReconStats.create
        for cell_index in sorted(affected):
            # Rows can outlive the column that stored cells at this index.
            if not table.has_column(cell_index):
                log.debug("No column stores cells at index %s; statistics skipped", cell_index)
                continue
            table.set_column_recon_stats(cell_index, aggregate(table, cell_index))

        log.info(
            "%s %s cells reconciled to new entities across columns %s",
            "Reverted" if reverse else "Resolved",
            rewritten,
            sorted(affected),
        )
        return RewriteResult(affected_columns=frozenset(affected), rewritten_cells=rewritten)

    def _resolve(self, cell: CellView) -> Recon | None:
        recon = cell.recon
        if recon is None or recon.judgment is not Judgment.NEW:
            return None
        permanent_id = self.lookup(recon.id)
        if permanent_id is None:
            return None
        name = "" if cell.value is None else str(cell.value)
        match = ReconCandidate(permanent_id, name, (), NEW_ENTITY_SCORE)
        return recon.with_judgment(Judgment.MATCHED).with_match(match).with_candidate(match)

    def _revert(self, recon: Recon) -> Recon | None:
        if recon.judgment is not Judgment.MATCHED or recon.id not in self._map:
            return None
        # Assumes the last candidate is the one appended by ``_resolve``; this holds
        # as long as nothing appends candidates to the record in between.
        candidates = recon.candidates
        if candidates and candidates[-1].id != self._map[recon.id]:
            log.warning(
                "Record %s: dropping last candidate %s, expected %s",
                recon.id,
                candidates[-1].id,
                self._map[recon.id],
            )
        return (
            recon.with_judgment(Judgment.NEW)
            .with_match(None)
            .with_candidates(candidates[:-1])
        )


def _refresh_features(table: TableStorage, cell_index: int, cell: CellView, recon: Recon) -> Recon:
    config = table.column_recon_config(cell_index)
    if isinstance(config, FeatureComputer) and isinstance(cell.value, str):
        return config.compute_features(recon, cell.value)
    return recon
