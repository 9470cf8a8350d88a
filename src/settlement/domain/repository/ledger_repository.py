"""Abstract repository for the settlement ledger.

The ledger holds VendorOrder rows (pending and failed liabilities) and
PayoutRecord rows (historical receipts).  Writes that move
``payout_status`` are conditional: they only succeed while the stored row
still has the status the caller loaded it with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from settlement.domain.model.payout_record import PayoutRecord
from settlement.domain.model.vendor_order import PayoutStatus, VendorOrder


class LedgerRepository(ABC):

    # --- Vendor orders --------------------------------------------------------

    @abstractmethod
    def get_vendor_order(self, vendor_order_id: str) -> VendorOrder | None:
        """Return a vendor order by its ID, or None if not found."""

    @abstractmethod
    def find_delivered(self, vendor_id: str | None = None) -> list[VendorOrder]:
        """Delivered vendor orders (any payout status), oldest delivery first."""

    def find_payable(self, now: datetime) -> list[VendorOrder]:
        """Delivered, pending vendor orders past the payout cooldown."""
        return [vo for vo in self.find_delivered() if vo.is_payable(now)]

    def find_pending_by_ids(self, vendor_order_ids: list[str]) -> list[VendorOrder]:
        """Delivered, pending vendor orders among the given IDs (no cooldown)."""
        wanted = set(vendor_order_ids)
        return [
            vo
            for vo in self.find_delivered()
            if vo.id in wanted and vo.payout_status == PayoutStatus.PENDING
        ]

    @abstractmethod
    def save_vendor_order(self, vendor_order: VendorOrder, expected: PayoutStatus) -> None:
        """Persist a vendor order if the stored row still has *expected* status.

        Raises ConcurrentUpdateError otherwise.
        """

    @abstractmethod
    def record_payout(self, vendor_order: VendorOrder, record: PayoutRecord) -> None:
        """Persist a PAID vendor order together with its receipt, atomically.

        The stored row must still be PENDING; raises ConcurrentUpdateError
        otherwise and writes nothing.
        """

    # --- Payout records -------------------------------------------------------

    @abstractmethod
    def list_payout_records(self, vendor_id: str | None = None) -> list[PayoutRecord]:
        """Payout receipts, most recent first."""
