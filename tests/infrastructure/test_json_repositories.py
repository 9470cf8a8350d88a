import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from settlement.domain.model.order import ItemKind
from settlement.domain.model.platform_settings import PlatformSettings
from settlement.domain.model.value_objects import CommissionRate, Money
from settlement.infrastructure.persistence.json_catalog_repository import JsonCatalogRepository
from settlement.infrastructure.persistence.json_order_repository import JsonOrderRepository
from settlement.infrastructure.persistence.json_settings_repository import JsonSettingsRepository
from settlement.infrastructure.persistence.json_store_repository import (
    JsonStoreRepository,
    JsonVendorRepository,
)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestOrders:

    @pytest.fixture
    def repo(self, tmp_path):
        path = _write(
            tmp_path / "orders.json",
            [
                {
                    "id": "order-abcdef123",
                    "total": "95.50",
                    "currency": "EUR",
                    "status": "completed",
                    "created_at": "2026-10-01T09:30:00+00:00",
                    "items": [
                        {"id": "i1", "product_id": "p-mug", "unit_price": "35.00", "quantity": 2},
                        {"id": "i2", "service_id": "s-wrap", "unit_price": "25.50"},
                    ],
                },
                {"id": "order-2", "order_number": "ORD-2", "items": []},
            ],
        )
        return JsonOrderRepository(path)

    def test_reads_items_and_currency(self, repo):
        order = repo.get_by_id("order-abcdef123")

        assert order.total == Money.of("95.50", "EUR")
        assert [i.kind for i in order.items] == [ItemKind.PRODUCT, ItemKind.SERVICE]
        assert order.items[0].line_total == Money.of("70.00", "EUR")
        assert order.items[1].quantity.value == 1
        assert order.created_at == datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)
        assert order.display_number == "order-ab"

    def test_missing_total_defaults_to_zero(self, repo):
        order = repo.get_by_id("order-2")
        assert order.total.is_zero
        assert order.display_number == "ORD-2"

    def test_get_many_skips_unknown_ids(self, repo):
        assert set(repo.get_many(["order-2", "nope"])) == {"order-2"}

    def test_unknown_order(self, repo):
        assert repo.get_by_id("nope") is None


def test_catalog_resolves_owning_store(tmp_path):
    path = _write(
        tmp_path / "catalog.json",
        {
            "products": [{"id": "p-mug", "store_id": "store-a"}],
            "services": [{"id": "s-wrap", "store_id": "store-b"}],
        },
    )
    repo = JsonCatalogRepository(path)

    assert repo.store_id_for(ItemKind.PRODUCT, "p-mug") == "store-a"
    assert repo.store_id_for(ItemKind.SERVICE, "s-wrap") == "store-b"
    assert repo.store_id_for(ItemKind.SERVICE, "p-mug") is None


def test_stores_and_vendors(tmp_path):
    stores = JsonStoreRepository(
        _write(
            tmp_path / "stores.json",
            [
                {"id": "store-a", "vendor_id": "vendor-a", "name": "Bloom & Co",
                 "stripe_account_id": "acct_1"},
                {"id": "store-b", "vendor_id": "vendor-b", "name": "Card Corner"},
            ],
        )
    )
    vendors = JsonVendorRepository(
        _write(
            tmp_path / "vendors.json",
            [{"id": "vendor-a", "user_id": "user-alice", "vendor_name": "Alice",
              "business_name": "Alice Florals"}],
        )
    )

    assert stores.connected_account("store-a") == "acct_1"
    assert stores.connected_account("store-b") is None
    assert stores.get_by_id("store-x") is None
    assert vendors.get_by_user_id("user-alice").display_name == "Alice Florals"
    assert vendors.get_by_id("vendor-b") is None


class TestSettings:

    def test_defaults_when_file_is_new(self, tmp_path):
        repo = JsonSettingsRepository(tmp_path / "settings.json")
        assert repo.get().commission.value == Decimal("10")

    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        repo = JsonSettingsRepository(path)
        settings = PlatformSettings()
        when = datetime(2026, 10, 17, tzinfo=timezone.utc)
        settings.update_commission(CommissionRate.of("12.5"), now=when)

        repo.save(settings)

        loaded = JsonSettingsRepository(path).get()
        assert loaded.commission.value == Decimal("12.50")
        assert loaded.updated_at == when
        assert json.loads(path.read_text(encoding="utf-8"))["commission_percent"] == "12.50"
