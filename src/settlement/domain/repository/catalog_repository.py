"""Abstract lookup of which store owns a product or service.

Defined in the domain layer so the domain never depends on
infrastructure.  One capability covers both item kinds; implementations
decide which table to consult.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from settlement.domain.model.order import ItemKind, OrderItem


class CatalogRepository(ABC):

    @abstractmethod
    def store_id_for(self, kind: ItemKind, catalog_id: str) -> str | None:
        """Return the owning store id, or None if the entry no longer exists."""

    def owning_store_id(self, item: OrderItem) -> str | None:
        return self.store_id_for(item.kind, item.catalog_id)
