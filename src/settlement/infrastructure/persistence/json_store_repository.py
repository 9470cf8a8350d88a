"""JSON-file-backed implementations of StoreRepository and VendorRepository."""

from __future__ import annotations

from settlement.domain.model.store import Store, Vendor
from settlement.domain.repository.store_repository import StoreRepository, VendorRepository
from settlement.infrastructure.persistence.json_file import JsonFileRepository


class JsonStoreRepository(JsonFileRepository, StoreRepository):

    def get_by_id(self, store_id: str) -> Store | None:
        for raw in self._load_raw():
            if raw["id"] == store_id:
                return Store(
                    id=raw["id"],
                    vendor_id=raw["vendor_id"],
                    name=raw.get("name", ""),
                    connected_account_id=raw.get("stripe_account_id"),
                )
        return None


class JsonVendorRepository(JsonFileRepository, VendorRepository):

    def get_by_id(self, vendor_id: str) -> Vendor | None:
        return self._find("id", vendor_id)

    def get_by_user_id(self, user_id: str) -> Vendor | None:
        return self._find("user_id", user_id)

    def _find(self, key: str, value: str) -> Vendor | None:
        for raw in self._load_raw():
            if raw.get(key) == value:
                return Vendor(
                    id=raw["id"],
                    user_id=raw["user_id"],
                    vendor_name=raw.get("vendor_name", ""),
                    business_name=raw.get("business_name"),
                )
        return None
