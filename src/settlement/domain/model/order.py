"""Order aggregate, as seen by settlement.

Orders are created and driven to delivery elsewhere; settlement only reads
them to attribute line items to the stores that fulfilled them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from settlement.domain.exceptions import ValidationError
from settlement.domain.model.value_objects import Money, Quantity


class ItemKind(Enum):
    PRODUCT = "product"
    SERVICE = "service"


@dataclass(frozen=True)
class OrderItem:
    """One line of an order.

    References either a product or a service, never both.  ``unit_price``
    is the price captured at checkout.
    """

    id: str
    unit_price: Money
    quantity: Quantity
    product_id: str | None = None
    service_id: str | None = None

    def __post_init__(self) -> None:
        if (self.product_id is None) == (self.service_id is None):
            raise ValidationError(
                f"Order item '{self.id}' must reference exactly one of "
                f"product or service"
            )

    @property
    def kind(self) -> ItemKind:
        return ItemKind.PRODUCT if self.product_id is not None else ItemKind.SERVICE

    @property
    def catalog_id(self) -> str:
        """Id of the referenced product or service."""
        return self.product_id if self.product_id is not None else self.service_id  # type: ignore[return-value]

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    id: str
    items: list[OrderItem]
    total: Money
    order_number: str | None = None
    status: str = "pending"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_number(self) -> str:
        """Human-facing order number; falls back to a short id."""
        return self.order_number or self.id[:8]
