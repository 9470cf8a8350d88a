"""Application service: Process Payouts (the settlement pass).

Selects the eligible vendor orders and folds each one through revenue
attribution, commission calculation and payout execution into a single
best-effort summary.  One vendor order's failure never aborts the batch.

Safe to re-run: only PENDING rows are selected, locked amounts are reused
instead of recomputed, and every status write is conditional on the row
still being PENDING.

Known risk window: a crash after a successful transfer but before the PAID
write leaves the row PENDING.  The next pass replays the same transfer
idempotency key, which the processor collapses while it still remembers
the key; past that window the duplicate must be reconciled by hand.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from settlement.application.access import Caller, Role, require_role
from settlement.application.dto import SettlementResultDTO
from settlement.domain.model.value_objects import CommissionRate, CommissionSplit
from settlement.domain.model.vendor_order import VendorOrder
from settlement.domain.repository.ledger_repository import LedgerRepository
from settlement.domain.repository.settings_repository import SettingsRepository
from settlement.domain.service import commission_calculator
from settlement.domain.service.payout_executor import PayoutExecutor, PayoutOutcome
from settlement.domain.service.revenue_attributor import RevenueAttributor

logger = logging.getLogger(__name__)


class ProcessPayoutsHandler:

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        settings_repo: SettingsRepository,
        attributor: RevenueAttributor,
        executor: PayoutExecutor,
    ) -> None:
        self._ledger_repo = ledger_repo
        self._settings_repo = settings_repo
        self._attributor = attributor
        self._executor = executor

    def handle(
        self,
        caller: Caller,
        vendor_order_ids: list[str] | None = None,
        now: datetime | None = None,
    ) -> SettlementResultDTO:
        """Run one settlement pass.

        Args:
            caller: Must be an admin (or the scheduler acting as one).
            vendor_order_ids: If given, pay only these vendor orders and
                waive the cooldown; they must still be delivered and PENDING.
            now: Clock override, mostly for tests.
        """
        require_role(caller, Role.ADMIN)
        now = now or datetime.now(timezone.utc)

        candidates = self._select(vendor_order_ids, now)
        if not candidates:
            logger.info("Settlement pass: no payouts to process")
            return SettlementResultDTO(processed=0, message="No payouts to process")

        rate = self._settings_repo.get().commission
        logger.info(
            "Settlement pass: %d vendor order(s) eligible at commission %s",
            len(candidates), rate,
        )

        processed = 0
        errors: list[str] = []
        for vendor_order in candidates:
            outcome = self._process_one(vendor_order, rate, now)
            if outcome.succeeded:
                processed += 1
            else:
                errors.append(outcome.reason or f"Vendor order {vendor_order.id}: failed")

        logger.info("Settlement pass finished: processed=%d errors=%d", processed, len(errors))
        return SettlementResultDTO(processed=processed, errors=errors)

    # --- Internal helpers -----------------------------------------------------

    def _select(self, vendor_order_ids: list[str] | None, now: datetime) -> list[VendorOrder]:
        if vendor_order_ids:
            selected = self._ledger_repo.find_pending_by_ids(vendor_order_ids)
        else:
            selected = self._ledger_repo.find_payable(now)
        return sorted(selected, key=lambda vo: vo.delivered_at)  # type: ignore[arg-type, return-value]

    def _process_one(
        self,
        vendor_order: VendorOrder,
        rate: CommissionRate,
        now: datetime,
    ) -> PayoutOutcome:
        """Attribute, split and execute; any exception becomes a failed outcome."""
        try:
            split = self._split_for(vendor_order, rate)
            return self._executor.execute(vendor_order, split, now)
        except Exception as exc:
            logger.exception("Vendor order %s could not be processed", vendor_order.id)
            return PayoutOutcome.failed(vendor_order.id, f"Vendor order {vendor_order.id}: {exc}")

    def _split_for(self, vendor_order: VendorOrder, rate: CommissionRate) -> CommissionSplit:
        locked = vendor_order.locked_split()
        if locked is not None:
            return locked
        revenue = self._attributor.attribute(vendor_order)
        return commission_calculator.compute(revenue, rate)
