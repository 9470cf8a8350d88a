"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from settlement.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Arithmetic keeps full
    precision; rounding to the cent only happens through ``rounded()``.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Rounding -------------------------------------------------------------

    def percent(self, rate: CommissionRate) -> Money:
        """Return ``rate`` percent of this amount, unrounded."""
        return Money(self.amount * rate.value / Decimal("100"), self.currency)

    def rounded(self) -> Money:
        """Round half-up to the cent."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def to_minor_units(self) -> int:
        """Amount in cents, rounded half-up."""
        return int((self.amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def to_plain(self) -> str:
        """Two-decimal string without the currency symbol, e.g. ``'90.00'``."""
        return f"{self.rounded().amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that an order line cannot carry zero or
    negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CommissionRate:
    """Platform commission as a percentage in the closed range [0, 100]."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Commission rate must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite() or not (Decimal("0") <= self.value <= Decimal("100")):
            raise ValidationError("Commission must be between 0 and 100")

    def __str__(self) -> str:
        return f"{self.value.normalize():f}%"

    @staticmethod
    def of(value: str | float | int | Decimal) -> CommissionRate:
        """Parse a number or numeric string and round it to 2 decimal places."""
        if isinstance(value, bool):
            raise ValidationError(f"Invalid commission percent: {value!r}")
        try:
            parsed = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid commission percent: {value!r}") from exc
        if not parsed.is_finite() or not (Decimal("0") <= parsed <= Decimal("100")):
            raise ValidationError("Commission must be between 0 and 100")
        return CommissionRate(parsed.quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class CommissionSplit:
    """How a vendor's attributable revenue divides between platform and vendor.

    ``gross`` is the revenue rounded to the cent; ``commission + vendor``
    equals it to within one cent.
    """

    gross: Money
    commission: Money
    vendor: Money

    @staticmethod
    def of_locked(commission: Money, vendor: Money) -> CommissionSplit:
        """Rebuild a split from previously persisted amounts."""
        return CommissionSplit(gross=commission + vendor, commission=commission, vendor=vendor)
