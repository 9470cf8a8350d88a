"""PayoutRecord: immutable receipt of a completed payout.

Kept apart from VendorOrder so the vendor's "received" history survives
changes to the originating vendor-order row.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from settlement.domain.model.value_objects import CommissionSplit, Money
from settlement.domain.model.vendor_order import VendorOrder


@dataclass(frozen=True)
class PayoutRecord:
    id: str
    vendor_order_id: str
    order_id: str
    vendor_id: str
    store_id: str
    order_total: Money
    commission_amount: Money
    vendor_amount: Money
    paid_at: datetime
    transfer_id: str | None = None

    @staticmethod
    def for_vendor_order(
        vendor_order: VendorOrder,
        split: CommissionSplit,
        paid_at: datetime,
        transfer_id: str | None = None,
    ) -> PayoutRecord:
        return PayoutRecord(
            id=str(uuid.uuid4()),
            vendor_order_id=vendor_order.id,
            order_id=vendor_order.order_id,
            vendor_id=vendor_order.vendor_id,
            store_id=vendor_order.store_id,
            order_total=split.gross,
            commission_amount=split.commission,
            vendor_amount=split.vendor,
            paid_at=paid_at,
            transfer_id=transfer_id,
        )
