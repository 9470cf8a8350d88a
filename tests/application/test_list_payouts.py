"""Tests for the admin payout listing."""

import pytest

from settlement.application.access import Caller, Role
from settlement.application.ledger_reader import LedgerReader
from settlement.application.list_payouts import ListPayoutsHandler, PayoutQuery
from settlement.domain.exceptions import AuthorizationError, ValidationError
from settlement.domain.model.platform_settings import PlatformSettings
from settlement.domain.model.store import Store, Vendor
from settlement.domain.model.value_objects import CommissionRate
from settlement.domain.model.vendor_order import PayoutStatus
from settlement.domain.service.revenue_attributor import RevenueAttributor
from tests.builders import make_order, make_vendor_order, product_item
from tests.fakes import (
    FakeCatalogRepository,
    FakeLedgerRepository,
    FakeOrderRepository,
    FakeSettingsRepository,
    FakeStoreRepository,
    FakeVendorRepository,
)

ADMIN = Caller(user_id="admin-1", role=Role.ADMIN)


def _handler(vendor_orders, stores=None, vendors=None):
    orders = FakeOrderRepository(
        [make_order("order-1", [
            product_item("i1", "p-mug", "100.00"),
            product_item("i2", "p-card", "50.00"),
        ])]
    )
    catalog = FakeCatalogRepository(products={"p-mug": "store-a", "p-card": "store-b"})
    stores = stores or FakeStoreRepository(
        [
            Store(id="store-a", vendor_id="vendor-a", name="Bloom & Co"),
            Store(id="store-b", vendor_id="vendor-b", name="Card Corner"),
        ]
    )
    vendors = vendors or FakeVendorRepository(
        [
            Vendor(id="vendor-a", user_id="u-a", vendor_name="Alice", business_name="Alice Florals"),
            Vendor(id="vendor-b", user_id="u-b", vendor_name="Bob"),
        ]
    )
    ledger = FakeLedgerRepository(vendor_orders)
    settings = FakeSettingsRepository(PlatformSettings(commission=CommissionRate.of("10")))
    reader = LedgerReader(ledger, orders, stores, vendors, RevenueAttributor(orders, catalog))
    return ListPayoutsHandler(reader, settings)


@pytest.fixture
def two_vendors():
    return _handler(
        [
            make_vendor_order("vo-a", delivered_days_ago=12),
            make_vendor_order(
                "vo-b", vendor_id="vendor-b", store_id="store-b", delivered_days_ago=9,
                payout_status=PayoutStatus.FAILED, commission="5.00", vendor_amount="45.00",
            ),
            make_vendor_order("vo-c", delivered_days_ago=None),
        ]
    )


class TestListPayouts:

    def test_lists_delivered_rows_oldest_first(self, two_vendors):
        page = two_vendors.handle(ADMIN)

        assert page.total == 2
        assert [r.vendor_order_id for r in page.payouts] == ["vo-a", "vo-b"]
        first = page.payouts[0]
        assert first.store_name == "Bloom & Co"
        assert first.vendor_name == "Alice Florals"
        assert (first.order_total, first.commission_amount, first.vendor_amount) == (
            "100.00", "10.00", "90.00",
        )
        assert first.payout_at is None

    def test_search_matches_store_or_vendor_name(self, two_vendors):
        by_store = two_vendors.handle(ADMIN, PayoutQuery(search="bloom"))
        by_vendor = two_vendors.handle(ADMIN, PayoutQuery(search="BOB"))

        assert [r.vendor_order_id for r in by_store.payouts] == ["vo-a"]
        assert [r.vendor_order_id for r in by_vendor.payouts] == ["vo-b"]

    def test_store_and_vendor_filters_combine(self, two_vendors):
        page = two_vendors.handle(ADMIN, PayoutQuery(store_name="card", vendor_name="alice"))
        assert page.total == 0
        assert page.payouts == []

    def test_status_filter(self, two_vendors):
        page = two_vendors.handle(ADMIN, PayoutQuery(status="failed"))
        assert [r.vendor_order_id for r in page.payouts] == ["vo-b"]
        assert page.payouts[0].vendor_amount == "45.00"

    def test_unknown_status_rejected(self, two_vendors):
        with pytest.raises(ValidationError, match="Unknown status filter"):
            two_vendors.handle(ADMIN, PayoutQuery(status="refunded"))

    def test_missing_store_and_vendor_shown_as_placeholder(self):
        handler = _handler(
            [make_vendor_order(store_id="store-gone", vendor_id="vendor-gone")],
            stores=FakeStoreRepository([]),
            vendors=FakeVendorRepository([]),
        )
        row = handler.handle(ADMIN).payouts[0]
        assert row.store_name == "—"
        assert row.vendor_name == "—"

    def test_vendor_rejected(self, two_vendors):
        with pytest.raises(AuthorizationError):
            two_vendors.handle(Caller(user_id="u-a", role=Role.VENDOR))


class TestPagination:

    @pytest.fixture
    def many(self):
        return _handler(
            [make_vendor_order(f"vo-{i:03d}", delivered_days_ago=200 - i) for i in range(150)]
        )

    def test_default_page_size(self, many):
        page = many.handle(ADMIN)
        assert (page.page, page.per_page, page.total, len(page.payouts)) == (1, 20, 150, 20)

    def test_second_page(self, many):
        page = many.handle(ADMIN, PayoutQuery(page=2, per_page=50))
        assert page.payouts[0].vendor_order_id == "vo-050"
        assert len(page.payouts) == 50

    def test_page_size_capped(self, many):
        page = many.handle(ADMIN, PayoutQuery(per_page=500))
        assert page.per_page == 100
        assert len(page.payouts) == 100

    def test_nonsense_page_falls_back_to_first(self, many):
        page = many.handle(ADMIN, PayoutQuery(page=0, per_page=-3))
        assert (page.page, page.per_page) == (1, 20)

    def test_page_past_the_end_is_empty(self, many):
        page = many.handle(ADMIN, PayoutQuery(page=9, per_page=20))
        assert page.payouts == []
        assert page.total == 150
