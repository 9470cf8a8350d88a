"""Abstract repository for the Order aggregate (read-only for settlement)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from settlement.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    def get_many(self, order_ids: list[str]) -> dict[str, Order]:
        """Return the orders that exist among *order_ids*, keyed by id."""
        found: dict[str, Order] = {}
        for order_id in dict.fromkeys(order_ids):
            order = self.get_by_id(order_id)
            if order is not None:
                found[order_id] = order
        return found
