"""Domain service: Commission Calculation.

Pure functions; the commission rate is always passed in by the caller so
nothing here reads platform settings.
"""

from __future__ import annotations

from decimal import Decimal

from settlement.domain.model.value_objects import CommissionRate, CommissionSplit, Money


def compute(revenue: Money, rate: CommissionRate) -> CommissionSplit:
    """Split *revenue* into platform commission and vendor payout.

    ``commission = round(revenue × rate / 100)`` and
    ``vendor = round(revenue − commission)``, both half-up to the cent.
    The vendor amount is clamped at zero.
    """
    commission = revenue.percent(rate).rounded()
    remainder = revenue.amount - commission.amount
    vendor = Money(max(remainder, Decimal("0")), revenue.currency).rounded()
    return CommissionSplit(gross=revenue.rounded(), commission=commission, vendor=vendor)
