"""Application service: Retry Payout use case.

Failed vendor orders are never re-selected automatically.  An admin resets
one to PENDING here, after fixing the cause (e.g. the vendor reconnected
their payout account); the next settlement pass then picks it up with its
locked amounts.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from settlement.application.access import Caller, Role, require_role
from settlement.domain.exceptions import EntityNotFoundError
from settlement.domain.model.vendor_order import PayoutStatus
from settlement.domain.repository.ledger_repository import LedgerRepository

logger = logging.getLogger(__name__)


class RetryPayoutHandler:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self, caller: Caller, vendor_order_id: str) -> None:
        require_role(caller, Role.ADMIN)

        vendor_order = self._ledger_repo.get_vendor_order(vendor_order_id)
        if vendor_order is None:
            raise EntityNotFoundError(f"Vendor order {vendor_order_id} not found")

        vendor_order.reset_for_retry(datetime.now(timezone.utc))
        self._ledger_repo.save_vendor_order(vendor_order, expected=PayoutStatus.FAILED)
        logger.info("Vendor order %s reset to pending by %s", vendor_order_id, caller.user_id)
