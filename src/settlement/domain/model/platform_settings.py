"""PlatformSettings: the singleton holding the current commission rate.

The rate only applies to *new* computations.  Amounts already locked on a
vendor-order are never recomputed from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from settlement.domain.model.value_objects import CommissionRate

DEFAULT_COMMISSION = CommissionRate(Decimal("10"))


@dataclass
class PlatformSettings:
    commission: CommissionRate = DEFAULT_COMMISSION
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update_commission(self, rate: CommissionRate, now: datetime | None = None) -> None:
        self.commission = rate
        self.updated_at = now or datetime.now(timezone.utc)
