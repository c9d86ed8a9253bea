"""
Negotiated discounts applied to low-code platform quotes.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from infra_pricing.domain.money import ZERO, HUNDRED, money, to_decimal


class DiscountType(str, Enum):
    PERCENTAGE = "Percentage"
    FIXED_AMOUNT = "FixedAmount"


class DiscountScope(str, Enum):
    """Which part of a quote a discount is taken from."""
    TOTAL = "Total"
    LICENSE_ONLY = "LicenseOnly"
    ADD_ONS_ONLY = "AddOnsOnly"
    SERVICES_ONLY = "ServicesOnly"


@dataclass(frozen=True)
class Discount:
    """
    A percentage or fixed-amount reduction over one scope of a quote.

    A fixed amount never exceeds the subtotal of its scope, so a discount
    can bring a scope down to zero but not below.
    """
    type: DiscountType
    value: Decimal
    scope: DiscountScope = DiscountScope.TOTAL
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(self, "value", to_decimal(self.value))
        if self.value < 0:
            raise ValueError(f"Discount value must not be negative (got: {self.value})")
        if self.type == DiscountType.PERCENTAGE and self.value > HUNDRED:
            raise ValueError(f"Percentage discount cannot exceed 100 (got: {self.value})")

    @classmethod
    def percentage(cls, percent, scope: DiscountScope = DiscountScope.TOTAL, notes: str = "") -> "Discount":
        return cls(DiscountType.PERCENTAGE, to_decimal(percent), scope, notes)

    @classmethod
    def fixed_amount(cls, amount, scope: DiscountScope = DiscountScope.TOTAL, notes: str = "") -> "Discount":
        return cls(DiscountType.FIXED_AMOUNT, to_decimal(amount), scope, notes)

    @property
    def percent(self) -> Decimal:
        """Percentage rate, 0 for fixed-amount discounts."""
        return self.value if self.type == DiscountType.PERCENTAGE else ZERO

    def scoped_subtotal(
        self,
        license_subtotal: Decimal,
        add_ons_subtotal: Decimal = ZERO,
        services_subtotal: Decimal = ZERO,
    ) -> Decimal:
        """The part of the quote this discount applies to."""
        if self.scope == DiscountScope.LICENSE_ONLY:
            return license_subtotal
        if self.scope == DiscountScope.ADD_ONS_ONLY:
            return add_ons_subtotal
        if self.scope == DiscountScope.SERVICES_ONLY:
            return services_subtotal
        return license_subtotal + add_ons_subtotal + services_subtotal

    def calculate(
        self,
        license_subtotal: Decimal,
        add_ons_subtotal: Decimal = ZERO,
        services_subtotal: Decimal = ZERO,
    ) -> Decimal:
        """
        Amount to take off the quote.

        Args:
            license_subtotal: Platform and user licence cost
            add_ons_subtotal: Add-on and environment cost
            services_subtotal: Success plans, training and consulting

        Returns:
            The discount amount, capped at the subtotal of the discount's scope
        """
        base = self.scoped_subtotal(license_subtotal, add_ons_subtotal, services_subtotal)
        if base <= 0:
            return ZERO
        if self.type == DiscountType.PERCENTAGE:
            return base * self.value / HUNDRED
        return min(self.value, base)

    def describe(self) -> str:
        if self.type == DiscountType.PERCENTAGE:
            text = f"{self.value.normalize():f}% discount on {self.scope.value}"
        else:
            text = f"${self.value:,.0f} discount on {self.scope.value}"
        if self.notes:
            text += f" ({self.notes})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "value": money(self.value),
            "scope": self.scope.value,
            "notes": self.notes,
        }
