"""Domain service: Revenue Attribution.

An order may mix items fulfilled by several stores.  This service works
out the share of an order that belongs to one vendor-order's store.
"""

from __future__ import annotations

import logging

from settlement.domain.model.value_objects import Money
from settlement.domain.model.vendor_order import VendorOrder
from settlement.domain.repository.catalog_repository import CatalogRepository
from settlement.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class RevenueAttributor:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog_repo: CatalogRepository,
        currency: str = "USD",
    ) -> None:
        self._order_repo = order_repo
        self._catalog_repo = catalog_repo
        self._currency = currency

    def attribute(self, vendor_order: VendorOrder) -> Money:
        """Sum ``unit_price × quantity`` over the items owned by the store.

        Items whose product or service no longer resolves to a store are
        left out.  A missing order, or one without items, attributes zero.
        The result is not rounded.
        """
        order = self._order_repo.get_by_id(vendor_order.order_id)
        if order is None:
            logger.warning(
                "Order %s for vendor order %s not found; attributing zero",
                vendor_order.order_id, vendor_order.id,
            )
            return Money.zero(self._currency)

        revenue = Money.zero(self._currency)
        for item in order.items:
            store_id = self._catalog_repo.owning_store_id(item)
            if store_id is None:
                logger.debug(
                    "Order item %s (%s %s) has no owning store; skipped",
                    item.id, item.kind.value, item.catalog_id,
                )
                continue
            if store_id == vendor_order.store_id:
                revenue = revenue + item.line_total
        return revenue
