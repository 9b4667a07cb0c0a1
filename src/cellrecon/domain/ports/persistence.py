"""Persistence ports for provisional-to-permanent entity id mappings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cellrecon.domain.new_entities import NewEntityLibrary


class NewEntityRepository(Protocol):
    """Stores the ids the external knowledge base assigned to new entities."""

    def load(self, project: str) -> NewEntityLibrary: ...

    def save(self, project: str, library: NewEntityLibrary) -> int: ...

    def record(self, project: str, provisional_id: int, permanent_id: str) -> None: ...
