"""Abstract repositories for stores and their vendors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from settlement.domain.model.store import Store, Vendor


class StoreRepository(ABC):

    @abstractmethod
    def get_by_id(self, store_id: str) -> Store | None:
        """Return a store by its ID, or None if not found."""

    def connected_account(self, store_id: str) -> str | None:
        """Connected payout account of a store, or None."""
        store = self.get_by_id(store_id)
        if store is None or not store.can_receive_transfers:
            return None
        return store.connected_account_id


class VendorRepository(ABC):

    @abstractmethod
    def get_by_id(self, vendor_id: str) -> Vendor | None:
        """Return a vendor by its ID, or None if not found."""

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Vendor | None:
        """Return the vendor profile owned by an authenticated user."""
