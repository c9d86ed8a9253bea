"""
Tests for negotiated discounts.
"""

import pytest
from decimal import Decimal
from infra_pricing.domain.discount import Discount, DiscountScope, DiscountType


def test_percentage_of_scope():
    discount = Discount.percentage(10, DiscountScope.ADD_ONS_ONLY)
    assert discount.calculate(Decimal('50000'), Decimal('20000'), Decimal('5000')) == Decimal('2000')
    assert discount.percent == Decimal('10')


def test_fixed_amount_capped_at_scope_subtotal():
    """An amount larger than its scope only zeroes that scope."""
    discount = Discount.fixed_amount(8000, DiscountScope.SERVICES_ONLY)
    assert discount.calculate(Decimal('50000'), Decimal('20000'), Decimal('5000')) == Decimal('5000')
    assert discount.percent == 0


def test_total_scope_covers_everything():
    discount = Discount.fixed_amount(8000)
    assert discount.scope == DiscountScope.TOTAL
    assert discount.calculate(Decimal('1000'), Decimal('2000'), Decimal('3000')) == Decimal('6000')


def test_empty_scope_gives_nothing():
    assert Discount.percentage(50, DiscountScope.SERVICES_ONLY).calculate(Decimal('1000')) == 0


@pytest.mark.parametrize('discount_type, value', [
    (DiscountType.PERCENTAGE, Decimal('-1')),
    (DiscountType.PERCENTAGE, Decimal('101')),
    (DiscountType.FIXED_AMOUNT, Decimal('-5')),
])
def test_invalid_values_rejected(discount_type, value):
    with pytest.raises(ValueError):
        Discount(discount_type, value)


def test_describe():
    assert Discount.percentage(Decimal('12.5'), DiscountScope.LICENSE_ONLY).describe() == (
        '12.5% discount on LicenseOnly'
    )
    assert Discount.fixed_amount(5000, notes='Volume deal').describe() == (
        '$5,000 discount on Total (Volume deal)'
    )
