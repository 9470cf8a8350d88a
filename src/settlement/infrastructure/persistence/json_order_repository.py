"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from settlement.domain.model.order import Order, OrderItem
from settlement.domain.model.value_objects import Money, Quantity
from settlement.domain.repository.order_repository import OrderRepository
from settlement.infrastructure.persistence.json_file import JsonFileRepository


class JsonOrderRepository(JsonFileRepository, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_many(self, order_ids: list[str]) -> dict[str, Order]:
        wanted = set(order_ids)
        return {
            raw["id"]: self._to_domain(raw)
            for raw in self._load_raw()
            if raw["id"] in wanted
        }

    # --- Serialization --------------------------------------------------------

    def _to_domain(self, raw: dict) -> Order:
        currency = raw.get("currency", self._currency)
        items = [
            OrderItem(
                id=i["id"],
                product_id=i.get("product_id"),
                service_id=i.get("service_id"),
                unit_price=self._money(i["unit_price"], currency),  # type: ignore[arg-type]
                quantity=Quantity(i.get("quantity") or 1),
            )
            for i in raw.get("items", [])
        ]
        total = self._money(raw.get("total"), currency)
        created_at = self._time(raw.get("created_at"))
        return Order(
            id=raw["id"],
            order_number=raw.get("order_number"),
            items=items,
            total=total if total is not None else Money.zero(currency),
            status=raw.get("status", "pending"),
            created_at=created_at or datetime.now(timezone.utc),
        )
