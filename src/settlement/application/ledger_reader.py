"""Read side of the settlement ledger.

Rebuilds pending and historical payout views from vendor orders, orders,
stores and vendors.  Pending rows show the locked amounts when a pass has
already computed them, and otherwise what the current rate would produce.
Pure reads; storage errors propagate to the caller.
"""

from __future__ import annotations

from datetime import datetime

from settlement.application.dto import AdminPayoutDTO, PendingPayoutDTO, ReceivedPayoutDTO
from settlement.domain.model.order import Order
from settlement.domain.model.value_objects import CommissionRate, CommissionSplit
from settlement.domain.model.vendor_order import PayoutStatus, VendorOrder
from settlement.domain.repository.ledger_repository import LedgerRepository
from settlement.domain.repository.order_repository import OrderRepository
from settlement.domain.repository.store_repository import StoreRepository, VendorRepository
from settlement.domain.service import commission_calculator
from settlement.domain.service.revenue_attributor import RevenueAttributor

_MISSING = "—"


class LedgerReader:

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        order_repo: OrderRepository,
        store_repo: StoreRepository,
        vendor_repo: VendorRepository,
        attributor: RevenueAttributor,
    ) -> None:
        self._ledger_repo = ledger_repo
        self._order_repo = order_repo
        self._store_repo = store_repo
        self._vendor_repo = vendor_repo
        self._attributor = attributor

    def pending(self, vendor_id: str, rate: CommissionRate) -> list[PendingPayoutDTO]:
        """Delivered, unpaid vendor orders of one vendor, oldest delivery first."""
        vendor_orders = [
            vo
            for vo in self._ledger_repo.find_delivered(vendor_id)
            if vo.payout_status == PayoutStatus.PENDING
        ]
        orders = self._order_repo.get_many([vo.order_id for vo in vendor_orders])

        rows: list[PendingPayoutDTO] = []
        for vo in vendor_orders:
            split = self._split(vo, rate)
            rows.append(
                PendingPayoutDTO(
                    vendor_order_id=vo.id,
                    order_id=vo.order_id,
                    order_number=_order_number(orders.get(vo.order_id), vo.order_id),
                    order_total=split.gross.to_plain(),
                    commission_amount=split.commission.to_plain(),
                    vendor_amount=split.vendor.to_plain(),
                    delivered_at=_iso(vo.delivered_at),
                )
            )
        return rows

    def received(self, vendor_id: str) -> list[ReceivedPayoutDTO]:
        """Payout receipts of one vendor, most recent first."""
        records = self._ledger_repo.list_payout_records(vendor_id)
        orders = self._order_repo.get_many([r.order_id for r in records])
        return [
            ReceivedPayoutDTO(
                id=r.id,
                vendor_order_id=r.vendor_order_id,
                order_id=r.order_id,
                order_number=_order_number(orders.get(r.order_id), r.order_id),
                order_total=r.order_total.to_plain(),
                commission_amount=r.commission_amount.to_plain(),
                vendor_amount=r.vendor_amount.to_plain(),
                paid_at=_iso(r.paid_at),
                transfer_id=r.transfer_id,
            )
            for r in records
        ]

    def all_payouts(self, rate: CommissionRate) -> list[AdminPayoutDTO]:
        """Every delivered vendor order across vendors, oldest delivery first."""
        vendor_orders = self._ledger_repo.find_delivered()
        orders = self._order_repo.get_many([vo.order_id for vo in vendor_orders])
        store_names: dict[str, str] = {}
        vendor_names: dict[str, str] = {}

        rows: list[AdminPayoutDTO] = []
        for vo in vendor_orders:
            if vo.store_id not in store_names:
                store = self._store_repo.get_by_id(vo.store_id)
                store_names[vo.store_id] = store.name if store else _MISSING
            if vo.vendor_id not in vendor_names:
                vendor = self._vendor_repo.get_by_id(vo.vendor_id)
                vendor_names[vo.vendor_id] = vendor.display_name if vendor else _MISSING

            split = self._split(vo, rate)
            rows.append(
                AdminPayoutDTO(
                    vendor_order_id=vo.id,
                    order_id=vo.order_id,
                    order_number=_order_number(orders.get(vo.order_id), vo.order_id),
                    store_id=vo.store_id,
                    store_name=store_names[vo.store_id],
                    vendor_id=vo.vendor_id,
                    vendor_name=vendor_names[vo.vendor_id],
                    payout_status=vo.payout_status.value,
                    order_total=split.gross.to_plain(),
                    commission_amount=split.commission.to_plain(),
                    vendor_amount=split.vendor.to_plain(),
                    delivered_at=_iso(vo.delivered_at),
                    payout_at=_iso(vo.payout_at) if vo.payout_at else None,
                    transfer_id=vo.transfer_id,
                )
            )
        return rows

    # --- Internal helpers -----------------------------------------------------

    def _split(self, vendor_order: VendorOrder, rate: CommissionRate) -> CommissionSplit:
        revenue = self._attributor.attribute(vendor_order)
        locked = vendor_order.locked_split()
        if locked is None:
            return commission_calculator.compute(revenue, rate)
        return CommissionSplit(
            gross=revenue.rounded(),
            commission=locked.commission,
            vendor=locked.vendor,
        )


def _order_number(order: Order | None, order_id: str) -> str:
    return order.display_number if order is not None else order_id[:8]


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""
