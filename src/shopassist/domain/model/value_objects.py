"""Money, the one value object every price, line and order total is built on."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from shopassist.domain.exceptions import ValidationError

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Arithmetic keeps full precision; cents only appear through ``rounded()``
    and ``str()``, i.e. when a value leaves the domain.
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
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass; a quantity of True is a bug, not 1.
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Money can be scaled by int or Decimal only, not {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def percent(self, rate: Decimal) -> Money:
        """Unrounded share of this amount, e.g. ``percent(Decimal("0.08"))``."""
        return self * rate

    # --- Presentation ---------------------------------------------------------

    def rounded(self) -> Decimal:
        return self.amount.quantize(_CENT, rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        return f"${self.rounded():.2f}"

    # --- Construction ---------------------------------------------------------

    @classmethod
    def of(cls, amount: str | float | int | Decimal) -> Money:
        """Build from loose input (JSON numbers, CLI text); floats go through str."""
        try:
            return cls(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @classmethod
    def zero(cls, currency: str = "USD") -> Money:
        return cls(Decimal("0"), currency)

    @classmethod
    def total(cls, amounts: Iterable[Money], currency: str = "USD") -> Money:
        result = cls.zero(currency)
        for amount in amounts:
            result = result + amount
        return result
