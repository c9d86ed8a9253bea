"""
Tiered and pack-based quantity pricing.
"""
from decimal import Decimal
from typing import Iterable

from infra_pricing.domain.money import ZERO
from infra_pricing.domain.tier_models import Tier


def tiered_cost(total_quantity: int, included_free: int, tiers: Iterable[Tier]) -> Decimal:
    """
    Price a quantity by summing unit prices across successive bands.

    Units up to included_free cost nothing. Each remaining unit is billed at the price of
    the band that contains it, so the total never decreases as the quantity grows.

    Args:
        total_quantity: Total units in use (including the free allowance)
        included_free: Units included at no charge
        tiers: Quantity bands, walked in ascending min order

    Returns:
        Total cost of the billable units
    """
    if total_quantity <= included_free:
        return ZERO

    first_billable = included_free + 1
    total = ZERO

    for tier in sorted(tiers, key=lambda t: t.min):
        if tier.min > total_quantity:
            break
        if not tier.is_unlimited and tier.max < first_billable:
            continue

        tier_start = max(tier.min, first_billable)
        tier_end = total_quantity if tier.is_unlimited else min(tier.max, total_quantity)
        units = tier_end - tier_start + 1
        if units > 0:
            total += units * tier.unit_price

    return total


def tiered_pack_cost(total_quantity: int, included_free: int, tiers: Iterable[Tier], pack_size: int) -> Decimal:
    """
    Price a quantity in whole packs whose price depends on the band.

    Billable units are split across bands as in tiered_cost; each band's share is
    rounded up to whole packs and billed at that band's unit_price per pack.

    Args:
        total_quantity: Total units in use (including the free allowance)
        included_free: Units included at no charge
        tiers: Quantity bands priced per pack, walked in ascending min order
        pack_size: Units per pack

    Returns:
        Total cost of the packs bought
    """
    if total_quantity <= included_free:
        return ZERO

    first_billable = included_free + 1
    total = ZERO

    for tier in sorted(tiers, key=lambda t: t.min):
        if tier.min > total_quantity:
            break
        if not tier.is_unlimited and tier.max < first_billable:
            continue

        tier_start = max(tier.min, first_billable)
        tier_end = total_quantity if tier.is_unlimited else min(tier.max, total_quantity)
        total += pack_cost(tier_end - tier_start + 1, pack_size, tier.unit_price)

    return total


def pack_count(units: int, pack_size: int) -> int:
    """Whole packs needed to cover units (0 when nothing is needed)."""
    if units <= 0:
        return 0
    if pack_size <= 0:
        raise ValueError(f"Pack size must be positive (got: {pack_size})")
    return -(-units // pack_size)


def pack_cost(units: int, pack_size: int, pack_price: Decimal) -> Decimal:
    """Cost of buying whole fixed-size packs for the given units."""
    return pack_count(units, pack_size) * pack_price
