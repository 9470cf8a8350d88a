"""Tests for the vendor-facing payout view."""

from datetime import timedelta

import pytest

from settlement.application.access import Caller, Role
from settlement.application.ledger_reader import LedgerReader
from settlement.application.show_vendor_payouts import ShowVendorPayoutsHandler
from settlement.domain.exceptions import AuthorizationError, EntityNotFoundError, ValidationError
from settlement.domain.model.payout_record import PayoutRecord
from settlement.domain.model.platform_settings import PlatformSettings
from settlement.domain.model.store import Store, Vendor
from settlement.domain.model.value_objects import CommissionRate, CommissionSplit, Money
from settlement.domain.model.vendor_order import PayoutStatus
from settlement.domain.service.revenue_attributor import RevenueAttributor
from tests.builders import NOW, make_order, make_vendor_order, product_item
from tests.fakes import (
    FakeCatalogRepository,
    FakeLedgerRepository,
    FakeOrderRepository,
    FakeSettingsRepository,
    FakeStoreRepository,
    FakeVendorRepository,
)

ADMIN = Caller(user_id="admin-1", role=Role.ADMIN)
ALICE = Caller(user_id="user-alice", role=Role.VENDOR)


@pytest.fixture
def ledger():
    paid = make_vendor_order(
        "vo-paid", order_id="order-2", delivered_days_ago=20,
        payout_status=PayoutStatus.PAID, commission="2.00", vendor_amount="18.00",
    )
    ledger = FakeLedgerRepository(
        [
            make_vendor_order("vo-pending", order_id="order-1", delivered_days_ago=3),
            make_vendor_order("vo-other", order_id="order-1", vendor_id="vendor-b",
                              store_id="store-b"),
            make_vendor_order("vo-undelivered", order_id="order-1", delivered_days_ago=None),
            paid,
        ]
    )
    ledger.records.append(
        PayoutRecord.for_vendor_order(
            paid,
            CommissionSplit(Money.of("20.00"), Money.of("2.00"), Money.of("18.00")),
            paid_at=NOW - timedelta(days=5),
            transfer_id="tr_old",
        )
    )
    return ledger


@pytest.fixture
def handler(ledger):
    orders = FakeOrderRepository(
        [
            make_order("order-1", [
                product_item("i1", "p-mug", "40.00"),
                product_item("i2", "p-card", "15.00"),
            ], number="ORD-1001"),
            make_order("order-2", [product_item("i3", "p-mug", "20.00")]),
        ]
    )
    catalog = FakeCatalogRepository(products={"p-mug": "store-a", "p-card": "store-b"})
    stores = FakeStoreRepository(
        [
            Store(id="store-a", vendor_id="vendor-a", name="Bloom & Co"),
            Store(id="store-b", vendor_id="vendor-b", name="Card Corner"),
        ]
    )
    vendors = FakeVendorRepository(
        [
            Vendor(id="vendor-a", user_id="user-alice", vendor_name="Alice"),
            Vendor(id="vendor-b", user_id="user-bob", vendor_name="Bob"),
        ]
    )
    settings = FakeSettingsRepository(PlatformSettings(commission=CommissionRate.of("10")))
    reader = LedgerReader(ledger, orders, stores, vendors, RevenueAttributor(orders, catalog))
    return ShowVendorPayoutsHandler(reader, vendors, settings)


class TestVendorView:

    def test_pending_shows_only_own_delivered_unpaid(self, handler):
        result = handler.handle(ALICE)

        assert [p.vendor_order_id for p in result.pending] == ["vo-pending"]
        row = result.pending[0]
        assert row.order_number == "ORD-1001"
        assert (row.order_total, row.commission_amount, row.vendor_amount) == ("40.00", "4.00", "36.00")

    def test_pending_ignores_the_cooldown(self, handler):
        # Delivered three days ago: not yet payable but still owed.
        assert handler.handle(ALICE).pending[0].delivered_at == (NOW - timedelta(days=3)).isoformat()

    def test_received_lists_receipts(self, handler):
        result = handler.handle(ALICE)

        assert len(result.received) == 1
        receipt = result.received[0]
        assert receipt.vendor_order_id == "vo-paid"
        assert receipt.vendor_amount == "18.00"
        assert receipt.transfer_id == "tr_old"
        assert receipt.order_number == "order-2"

    def test_pending_uses_locked_amounts_when_present(self, ledger, handler):
        vo = ledger.get_vendor_order("vo-pending")
        vo.commission_amount = Money.of("8.00")
        vo.vendor_amount = Money.of("32.00")
        ledger.save_vendor_order(vo, expected=PayoutStatus.PENDING)

        row = handler.handle(ALICE).pending[0]

        assert (row.order_total, row.commission_amount, row.vendor_amount) == ("40.00", "8.00", "32.00")

    def test_asking_for_another_vendor_is_forbidden(self, handler):
        with pytest.raises(AuthorizationError):
            handler.handle(ALICE, vendor_id="vendor-b")

    def test_user_without_vendor_profile(self, handler):
        with pytest.raises(EntityNotFoundError, match="Vendor profile not found"):
            handler.handle(Caller(user_id="user-nobody", role=Role.VENDOR))

    def test_customer_rejected(self, handler):
        with pytest.raises(AuthorizationError):
            handler.handle(Caller(user_id="user-alice", role=Role.CUSTOMER))


class TestAdminView:

    def test_admin_inspects_named_vendor(self, handler):
        result = handler.handle(ADMIN, vendor_id="vendor-b")
        assert [p.vendor_order_id for p in result.pending] == ["vo-other"]
        assert result.pending[0].vendor_amount == "13.50"
        assert result.received == []

    def test_admin_must_name_a_vendor(self, handler):
        with pytest.raises(ValidationError, match="vendor ID is required"):
            handler.handle(ADMIN)

    def test_unknown_vendor(self, handler):
        with pytest.raises(EntityNotFoundError, match="ghost"):
            handler.handle(ADMIN, vendor_id="ghost")
