"""Application services: show and update the platform commission.

The update is the validation boundary for the commission percent; a
malformed value never reaches the settlement engine.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from settlement.application.access import Caller, Role, require_role
from settlement.domain.model.value_objects import CommissionRate
from settlement.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class ShowCommissionHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(self) -> Decimal:
        return self._settings_repo.get().commission.value


class UpdateCommissionHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(self, caller: Caller, commission_percent: str | float | int | Decimal) -> Decimal:
        """Set the rate used for future computations.

        Amounts already locked on vendor orders are not touched.
        """
        require_role(caller, Role.ADMIN)
        rate = CommissionRate.of(commission_percent)

        settings = self._settings_repo.get()
        previous = settings.commission
        settings.update_commission(rate)
        self._settings_repo.save(settings)

        logger.info("Commission changed from %s to %s by %s", previous, rate, caller.user_id)
        return rate.value
