"""Store and Vendor entities.

Each store is owned by exactly one vendor.  The connected account id is
the vendor's payment-processor account that receives transfers; it stays
empty until the vendor completes onboarding.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Store:
    id: str
    vendor_id: str
    name: str
    connected_account_id: str | None = None

    @property
    def can_receive_transfers(self) -> bool:
        return bool(self.connected_account_id and self.connected_account_id.strip())


@dataclass
class Vendor:
    id: str
    user_id: str
    vendor_name: str
    business_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.business_name or self.vendor_name
