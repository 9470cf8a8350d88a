"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from settlement.application.commission_settings import ShowCommissionHandler, UpdateCommissionHandler
from settlement.application.ledger_reader import LedgerReader
from settlement.application.list_payouts import ListPayoutsHandler
from settlement.application.process_payouts import ProcessPayoutsHandler
from settlement.application.retry_payout import RetryPayoutHandler
from settlement.application.show_vendor_payouts import ShowVendorPayoutsHandler
from settlement.domain.service.payout_executor import PayoutExecutor
from settlement.domain.service.revenue_attributor import RevenueAttributor
from settlement.infrastructure.config import SettlementConfig
from settlement.infrastructure.gateway.stripe_transfer_gateway import StripeTransferGateway
from settlement.infrastructure.persistence.json_catalog_repository import JsonCatalogRepository
from settlement.infrastructure.persistence.json_ledger_repository import JsonLedgerRepository
from settlement.infrastructure.persistence.json_order_repository import JsonOrderRepository
from settlement.infrastructure.persistence.json_settings_repository import JsonSettingsRepository
from settlement.infrastructure.persistence.json_store_repository import (
    JsonStoreRepository,
    JsonVendorRepository,
)


@dataclass(frozen=True)
class Repositories:
    ledger: JsonLedgerRepository
    orders: JsonOrderRepository
    catalog: JsonCatalogRepository
    stores: JsonStoreRepository
    vendors: JsonVendorRepository
    settings: JsonSettingsRepository


def repositories(config: SettlementConfig) -> Repositories:
    data_dir = config.data_dir
    return Repositories(
        ledger=JsonLedgerRepository(data_dir / "ledger.json", config.currency),
        orders=JsonOrderRepository(data_dir / "orders.json", config.currency),
        catalog=JsonCatalogRepository(data_dir / "catalog.json", config.currency),
        stores=JsonStoreRepository(data_dir / "stores.json", config.currency),
        vendors=JsonVendorRepository(data_dir / "vendors.json", config.currency),
        settings=JsonSettingsRepository(data_dir / "settings.json", config.currency),
    )


def _attributor(config: SettlementConfig, repos: Repositories) -> RevenueAttributor:
    return RevenueAttributor(repos.orders, repos.catalog, currency=config.currency)


def _reader(config: SettlementConfig, repos: Repositories) -> LedgerReader:
    return LedgerReader(
        ledger_repo=repos.ledger,
        order_repo=repos.orders,
        store_repo=repos.stores,
        vendor_repo=repos.vendors,
        attributor=_attributor(config, repos),
    )


def process_payouts_handler(config: SettlementConfig) -> ProcessPayoutsHandler:
    repos = repositories(config)
    gateway = StripeTransferGateway(
        secret_key=config.stripe_secret_key,
        api_base=config.stripe_api_base,
        timeout=config.transfer_timeout,
    )
    return ProcessPayoutsHandler(
        ledger_repo=repos.ledger,
        settings_repo=repos.settings,
        attributor=_attributor(config, repos),
        executor=PayoutExecutor(repos.ledger, repos.stores, gateway),
    )


def vendor_payouts_handler(config: SettlementConfig) -> ShowVendorPayoutsHandler:
    repos = repositories(config)
    return ShowVendorPayoutsHandler(_reader(config, repos), repos.vendors, repos.settings)


def list_payouts_handler(config: SettlementConfig) -> ListPayoutsHandler:
    repos = repositories(config)
    return ListPayoutsHandler(_reader(config, repos), repos.settings)


def retry_payout_handler(config: SettlementConfig) -> RetryPayoutHandler:
    return RetryPayoutHandler(repositories(config).ledger)


def show_commission_handler(config: SettlementConfig) -> ShowCommissionHandler:
    return ShowCommissionHandler(repositories(config).settings)


def update_commission_handler(config: SettlementConfig) -> UpdateCommissionHandler:
    return UpdateCommissionHandler(repositories(config).settings)
