"""Data Transfer Objects: plain containers that cross layer boundaries.

Money is carried as a two-decimal string (e.g. ``"90.00"``) and
timestamps as ISO-8601 strings, matching the JSON shapes the payout
endpoints return.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PendingPayoutDTO:
    """A delivered vendor order still waiting for its payout."""

    vendor_order_id: str
    order_id: str
    order_number: str
    order_total: str
    commission_amount: str
    vendor_amount: str
    delivered_at: str


@dataclass(frozen=True)
class ReceivedPayoutDTO:
    """A payout receipt."""

    id: str
    vendor_order_id: str
    order_id: str
    order_number: str
    order_total: str
    commission_amount: str
    vendor_amount: str
    paid_at: str
    transfer_id: str | None = None


@dataclass(frozen=True)
class VendorPayoutsDTO:
    pending: list[PendingPayoutDTO]
    received: list[ReceivedPayoutDTO]


@dataclass(frozen=True)
class AdminPayoutDTO:
    """One row of the admin payout listing."""

    vendor_order_id: str
    order_id: str
    order_number: str
    store_id: str
    store_name: str
    vendor_id: str
    vendor_name: str
    payout_status: str
    order_total: str
    commission_amount: str
    vendor_amount: str
    delivered_at: str
    payout_at: str | None = None
    transfer_id: str | None = None


@dataclass(frozen=True)
class PayoutPageDTO:
    payouts: list[AdminPayoutDTO]
    total: int
    page: int
    per_page: int


@dataclass(frozen=True)
class SettlementResultDTO:
    """Summary of one settlement pass; never all-or-nothing."""

    processed: int
    errors: list[str] = field(default_factory=list)
    message: str | None = None
