"""Domain service: Payout Execution.

Moves one vendor order from PENDING to PAID or FAILED.  This is the only
code path that writes ``payout_status`` during a settlement pass.

Every outcome persists the commission/vendor amounts so operators can see
computed liabilities whether or not the transfer happened.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from settlement.domain.gateway.transfer_gateway import TransferGateway, TransferRequest
from settlement.domain.model.payout_record import PayoutRecord
from settlement.domain.model.value_objects import CommissionSplit
from settlement.domain.model.vendor_order import (
    MIN_TRANSFER_MINOR_UNITS,
    PayoutStatus,
    VendorOrder,
)
from settlement.domain.repository.ledger_repository import LedgerRepository
from settlement.domain.repository.store_repository import StoreRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayoutOutcome:
    """Tagged result of one execution: paid, or failed with a reason."""

    vendor_order_id: str
    status: PayoutStatus
    reason: str | None = None
    transfer_id: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == PayoutStatus.PAID

    @staticmethod
    def paid(vendor_order_id: str, transfer_id: str | None = None) -> PayoutOutcome:
        return PayoutOutcome(vendor_order_id, PayoutStatus.PAID, transfer_id=transfer_id)

    @staticmethod
    def failed(vendor_order_id: str, reason: str) -> PayoutOutcome:
        return PayoutOutcome(vendor_order_id, PayoutStatus.FAILED, reason=reason)


class PayoutExecutor:

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        store_repo: StoreRepository,
        gateway: TransferGateway,
        min_transfer_minor_units: int = MIN_TRANSFER_MINOR_UNITS,
    ) -> None:
        self._ledger_repo = ledger_repo
        self._store_repo = store_repo
        self._gateway = gateway
        self._min_transfer = min_transfer_minor_units

    def execute(
        self,
        vendor_order: VendorOrder,
        split: CommissionSplit,
        now: datetime,
    ) -> PayoutOutcome:
        """Pay out one vendor order.

        Steps, in order:
          1. Lock and persist the amounts while the row is still PENDING, so
             a crash before the transfer reuses them on the next pass.
          2. No connected account -> FAILED (a human must reconnect it).
          3. Below the processor minimum -> PAID without a transfer.
          4. Otherwise transfer; success -> PAID, any error -> FAILED.

        Raises ConcurrentUpdateError if another pass changed the row first.
        """
        if not vendor_order.has_locked_amounts:
            vendor_order.lock_amounts(split, now)
            self._ledger_repo.save_vendor_order(vendor_order, expected=PayoutStatus.PENDING)
        split = vendor_order.locked_split()  # type: ignore[assignment]

        account_id = self._store_repo.connected_account(vendor_order.store_id)
        if account_id is None:
            reason = f"Store {vendor_order.store_id}: no connected payout account"
            return self._fail(vendor_order, now, reason)

        amount_minor = split.vendor.to_minor_units()
        if amount_minor < self._min_transfer:
            logger.info(
                "Vendor order %s: %s is below the transfer minimum; marking paid",
                vendor_order.id, split.vendor,
            )
            return self._settle(vendor_order, split, now, transfer_id=None)

        request = TransferRequest(
            amount_minor_units=amount_minor,
            currency=split.vendor.currency.lower(),
            destination_account_id=account_id,
            description=f"Payout for order {vendor_order.order_id}",
            idempotency_key=vendor_order.payout_attempt_key,
        )
        try:
            receipt = self._gateway.create_transfer(request)
        except Exception as exc:
            return self._fail(vendor_order, now, f"Vendor order {vendor_order.id}: {exc}")

        return self._settle(vendor_order, split, now, transfer_id=receipt.transfer_id)

    # --- Internal helpers -----------------------------------------------------

    def _settle(
        self,
        vendor_order: VendorOrder,
        split: CommissionSplit,
        now: datetime,
        transfer_id: str | None,
    ) -> PayoutOutcome:
        vendor_order.mark_paid(now, transfer_id)
        record = PayoutRecord.for_vendor_order(vendor_order, split, now, transfer_id)
        self._ledger_repo.record_payout(vendor_order, record)
        logger.info(
            "Vendor order %s paid %s (transfer=%s)",
            vendor_order.id, split.vendor, transfer_id or "none",
        )
        return PayoutOutcome.paid(vendor_order.id, transfer_id)

    def _fail(self, vendor_order: VendorOrder, now: datetime, reason: str) -> PayoutOutcome:
        vendor_order.mark_failed(now)
        self._ledger_repo.save_vendor_order(vendor_order, expected=PayoutStatus.PENDING)
        logger.warning("Payout failed: %s", reason)
        return PayoutOutcome.failed(vendor_order.id, reason)
