"""JSON-file-backed implementation of LedgerRepository.

Vendor orders and payout records share one document
(``{"vendor_orders": [...], "payouts": [...]}``) so that the PAID
transition and its receipt land in a single file replace.

The conditional update compares the stored ``payout_status`` with the one
the caller expects right before writing.  That guards against re-running a
pass in the same process; concurrent processes writing the same file are
not coordinated beyond that.
"""

from __future__ import annotations

from datetime import datetime, timezone

from settlement.domain.exceptions import ConcurrentUpdateError
from settlement.domain.model.payout_record import PayoutRecord
from settlement.domain.model.vendor_order import FulfilmentStatus, PayoutStatus, VendorOrder
from settlement.domain.repository.ledger_repository import LedgerRepository
from settlement.infrastructure.persistence.json_file import JsonFileRepository


class JsonLedgerRepository(JsonFileRepository, LedgerRepository):

    _empty = {"vendor_orders": [], "payouts": []}

    # --- LedgerRepository interface -------------------------------------------

    def get_vendor_order(self, vendor_order_id: str) -> VendorOrder | None:
        for raw in self._load_raw()["vendor_orders"]:
            if raw["id"] == vendor_order_id:
                return self._vendor_order_to_domain(raw)
        return None

    def find_delivered(self, vendor_id: str | None = None) -> list[VendorOrder]:
        found = [
            self._vendor_order_to_domain(raw)
            for raw in self._load_raw()["vendor_orders"]
            if raw.get("status") == FulfilmentStatus.DELIVERED.value
            and raw.get("delivered_at")
            and (vendor_id is None or raw["vendor_id"] == vendor_id)
        ]
        return sorted(found, key=lambda vo: vo.delivered_at)  # type: ignore[arg-type, return-value]

    def save_vendor_order(self, vendor_order: VendorOrder, expected: PayoutStatus) -> None:
        data = self._load_raw()
        index = self._guarded_index(data, vendor_order.id, expected)
        data["vendor_orders"][index] = self._vendor_order_to_raw(vendor_order)
        self._persist_raw(data)

    def record_payout(self, vendor_order: VendorOrder, record: PayoutRecord) -> None:
        data = self._load_raw()
        index = self._guarded_index(data, vendor_order.id, PayoutStatus.PENDING)
        data["vendor_orders"][index] = self._vendor_order_to_raw(vendor_order)
        data["payouts"].append(self._record_to_raw(record))
        self._persist_raw(data)

    def list_payout_records(self, vendor_id: str | None = None) -> list[PayoutRecord]:
        records = [
            self._record_to_domain(raw)
            for raw in self._load_raw()["payouts"]
            if vendor_id is None or raw["vendor_id"] == vendor_id
        ]
        return sorted(records, key=lambda r: r.paid_at, reverse=True)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _guarded_index(data: dict, vendor_order_id: str, expected: PayoutStatus) -> int:
        for i, raw in enumerate(data["vendor_orders"]):
            if raw["id"] == vendor_order_id:
                stored = raw.get("payout_status", PayoutStatus.PENDING.value)
                if stored != expected.value:
                    raise ConcurrentUpdateError(
                        f"Vendor order {vendor_order_id} is {stored}, expected {expected.value}"
                    )
                return i
        raise ConcurrentUpdateError(f"Vendor order {vendor_order_id} no longer exists")

    # --- Serialization --------------------------------------------------------

    def _vendor_order_to_raw(self, vo: VendorOrder) -> dict:
        amount = vo.vendor_amount or vo.commission_amount
        return {
            "id": vo.id,
            "order_id": vo.order_id,
            "vendor_id": vo.vendor_id,
            "store_id": vo.store_id,
            "status": vo.status.value,
            "delivered_at": self._time_raw(vo.delivered_at),
            "payout_status": vo.payout_status.value,
            "commission_amount": self._money_raw(vo.commission_amount),
            "vendor_amount": self._money_raw(vo.vendor_amount),
            "currency": amount.currency if amount else self._currency,
            "payout_at": self._time_raw(vo.payout_at),
            "stripe_transfer_id": vo.transfer_id,
            "updated_at": self._time_raw(vo.updated_at),
        }

    def _vendor_order_to_domain(self, raw: dict) -> VendorOrder:
        currency = raw.get("currency", self._currency)
        return VendorOrder(
            id=raw["id"],
            order_id=raw["order_id"],
            vendor_id=raw["vendor_id"],
            store_id=raw["store_id"],
            status=FulfilmentStatus(raw.get("status", "pending")),
            delivered_at=self._time(raw.get("delivered_at")),
            payout_status=PayoutStatus(raw.get("payout_status", "pending")),
            commission_amount=self._money(raw.get("commission_amount"), currency),
            vendor_amount=self._money(raw.get("vendor_amount"), currency),
            payout_at=self._time(raw.get("payout_at")),
            transfer_id=raw.get("stripe_transfer_id"),
            updated_at=self._time(raw.get("updated_at")) or datetime.now(timezone.utc),
        )

    def _record_to_raw(self, record: PayoutRecord) -> dict:
        return {
            "id": record.id,
            "vendor_order_id": record.vendor_order_id,
            "order_id": record.order_id,
            "vendor_id": record.vendor_id,
            "store_id": record.store_id,
            "order_total": self._money_raw(record.order_total),
            "commission_amount": self._money_raw(record.commission_amount),
            "vendor_amount": self._money_raw(record.vendor_amount),
            "currency": record.vendor_amount.currency,
            "stripe_transfer_id": record.transfer_id,
            "paid_at": self._time_raw(record.paid_at),
        }

    def _record_to_domain(self, raw: dict) -> PayoutRecord:
        currency = raw.get("currency", self._currency)
        return PayoutRecord(
            id=raw["id"],
            vendor_order_id=raw["vendor_order_id"],
            order_id=raw["order_id"],
            vendor_id=raw["vendor_id"],
            store_id=raw["store_id"],
            order_total=self._money(raw["order_total"], currency),  # type: ignore[arg-type]
            commission_amount=self._money(raw["commission_amount"], currency),  # type: ignore[arg-type]
            vendor_amount=self._money(raw["vendor_amount"], currency),  # type: ignore[arg-type]
            paid_at=self._time(raw["paid_at"]),  # type: ignore[arg-type]
            transfer_id=raw.get("stripe_transfer_id"),
        )
