"""VendorOrder aggregate: the settlement unit.

A VendorOrder is the (order, vendor, store) tuple created when an order is
fulfilled.  Its fulfilment lifecycle is driven elsewhere; settlement only
moves ``payout_status`` and locks the commission/vendor amounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from settlement.domain.exceptions import ValidationError
from settlement.domain.model.value_objects import CommissionSplit, Money


class FulfilmentStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DISPATCHED = "dispatched"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PayoutStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
PAYOUT_COOLDOWN = timedelta(days=7)
MIN_TRANSFER_MINOR_UNITS = 50


@dataclass
class VendorOrder:
    """Aggregate root for one vendor's share of a customer order.

    Invariants:
    - ``commission_amount`` and ``vendor_amount`` are set together and,
      once set, are never replaced
    - ``payout_status`` only leaves ``PENDING`` through ``mark_paid`` or
      ``mark_failed``; ``FAILED`` only returns to ``PENDING`` through
      ``reset_for_retry``
    """

    id: str
    order_id: str
    vendor_id: str
    store_id: str
    status: FulfilmentStatus = FulfilmentStatus.PENDING
    delivered_at: datetime | None = None
    payout_status: PayoutStatus = PayoutStatus.PENDING
    commission_amount: Money | None = None
    vendor_amount: Money | None = None
    payout_at: datetime | None = None
    transfer_id: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Queries --------------------------------------------------------------

    @property
    def is_delivered(self) -> bool:
        return self.status == FulfilmentStatus.DELIVERED and self.delivered_at is not None

    @property
    def has_locked_amounts(self) -> bool:
        return self.commission_amount is not None and self.vendor_amount is not None

    def is_payable(self, now: datetime, cooldown: timedelta = PAYOUT_COOLDOWN) -> bool:
        """Delivered, unpaid and past the cooldown window."""
        return (
            self.is_delivered
            and self.payout_status == PayoutStatus.PENDING
            and self.delivered_at < now - cooldown  # type: ignore[operator]
        )

    @property
    def payout_attempt_key(self) -> str:
        """Idempotency key for the transfer of the current payout attempt.

        Stable while the row stays untouched in PENDING, so a pass that
        crashed after transferring replays the same key.  A manual retry
        bumps ``updated_at`` and therefore starts a new attempt.
        """
        return f"payout-{self.id}-{self.updated_at:%Y%m%d%H%M%S%f}"

    def locked_split(self) -> CommissionSplit | None:
        if not self.has_locked_amounts:
            return None
        return CommissionSplit.of_locked(self.commission_amount, self.vendor_amount)  # type: ignore[arg-type]

    # --- State transitions ----------------------------------------------------

    def lock_amounts(self, split: CommissionSplit, now: datetime | None = None) -> None:
        """Persistable commission/vendor figures, set once.

        Re-locking with the same figures is a no-op; different figures are
        rejected so a changed platform rate can never overwrite them.
        """
        if self.has_locked_amounts:
            if (self.commission_amount, self.vendor_amount) != (split.commission, split.vendor):
                raise ValidationError(
                    f"Vendor order {self.id} already has locked amounts "
                    f"({self.commission_amount} / {self.vendor_amount})"
                )
            return
        self.commission_amount = split.commission
        self.vendor_amount = split.vendor
        self.updated_at = now or datetime.now(timezone.utc)

    def mark_paid(self, now: datetime, transfer_id: str | None = None) -> None:
        self._require_pending("mark as paid")
        self._require_amounts()
        self.payout_status = PayoutStatus.PAID
        self.payout_at = now
        self.transfer_id = transfer_id
        self.updated_at = now

    def mark_failed(self, now: datetime) -> None:
        self._require_pending("mark as failed")
        self._require_amounts()
        self.payout_status = PayoutStatus.FAILED
        self.updated_at = now

    def reset_for_retry(self, now: datetime) -> None:
        """Transition FAILED -> PENDING, keeping the locked amounts."""
        if self.payout_status != PayoutStatus.FAILED:
            raise ValidationError(
                f"Cannot retry vendor order {self.id}: payout status is "
                f"{self.payout_status.value}, expected failed"
            )
        self.payout_status = PayoutStatus.PENDING
        self.updated_at = now

    # --- Internal helpers -----------------------------------------------------

    def _require_pending(self, action: str) -> None:
        if self.payout_status != PayoutStatus.PENDING:
            raise ValidationError(
                f"Cannot {action} vendor order {self.id}: payout status is "
                f"{self.payout_status.value}"
            )

    def _require_amounts(self) -> None:
        if not self.has_locked_amounts:
            raise ValidationError(f"Vendor order {self.id} has no locked amounts")
