"""
Cloud provider pricing strategies.
Each strategy turns a provider rate card into a region-specific PricingModel.
"""
import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Tuple

from infra_pricing.domain.enums import CloudProvider
from infra_pricing.domain.pricing_models import PricingModel, RegionInfo
from infra_pricing.pricing import rate_tables
from infra_pricing.pricing.rate_tables import ProviderRateCard


logger = logging.getLogger(__name__)

ONE = Decimal("1")


class CloudProviderPricing:
    """Base strategy: flat rates in every region."""

    def __init__(self, card: ProviderRateCard):
        self.card = card

    @property
    def provider(self) -> CloudProvider:
        return self.card.provider

    @property
    def default_region(self) -> str:
        return self.card.default_region

    @property
    def display_name(self) -> str:
        return self.card.display_name

    def get_regions(self) -> Tuple[RegionInfo, ...]:
        return self.card.regions

    def is_region_supported(self, region: str) -> bool:
        """Case-insensitive membership in the region catalog."""
        wanted = region.lower()
        return any(r.code.lower() == wanted for r in self.card.regions)

    def region_display_name(self, region: str) -> str:
        for info in self.card.regions:
            if info.code.lower() == region.lower():
                return info.display_name
        return region

    def regional_multiplier(self, region: str) -> Decimal:
        return ONE

    def get_pricing(self, region: Optional[str] = None, ha_control_plane: bool = False) -> PricingModel:
        """
        Build the rate card for a region.

        Args:
            region: Region code; the provider's default region when omitted
            ha_control_plane: Price the paid uptime-SLA control plane where the free tier has none

        Returns:
            PricingModel with regional multipliers applied to compute and storage
        """
        region = region or self.card.default_region
        multiplier = self.regional_multiplier(region)

        compute = self.card.compute
        if ha_control_plane and self.card.ha_control_plane_per_hour > 0:
            compute = replace(compute, managed_control_plane_per_hour=self.card.ha_control_plane_per_hour)

        return PricingModel(
            provider=self.card.provider,
            region=region,
            region_display_name=self.region_display_name(region),
            compute=compute.scaled(multiplier) if multiplier != ONE else compute,
            storage=self.card.storage.scaled(multiplier) if multiplier != ONE else self.card.storage,
            network=self.card.network,
            source=f"Default ({self.card.display_name} Public Pricing 2025)",
        )


class RegionalMultiplierPricing(CloudProviderPricing):
    """Hyperscalers: per-region price multipliers, 1.0 for unlisted regions."""

    def regional_multiplier(self, region: str) -> Decimal:
        return self.card.regional_multipliers.get(region.lower(), ONE)


class HomeMarketPricing(CloudProviderPricing):
    """Providers that charge a premium outside their home market (e.g. cn- regions)."""

    def regional_multiplier(self, region: str) -> Decimal:
        if region.lower().startswith(self.card.home_region_prefix):
            return ONE
        return self.card.off_home_multiplier


class OnPremProviderPricing(CloudProviderPricing):
    """No cloud rates: on-prem cost comes from the on-prem calculator."""

    def get_pricing(self, region: Optional[str] = None, ha_control_plane: bool = False) -> PricingModel:
        model = super().get_pricing(self.card.default_region)
        return replace(model, region_display_name=rate_tables.ON_PREM_REGION_DISPLAY_NAME)


def build_provider_strategies():
    """Instantiate one strategy per provider with its own rate card."""
    strategies = {}
    for provider, card in rate_tables.RATE_CARDS.items():
        if provider is CloudProvider.ON_PREM:
            strategy = OnPremProviderPricing(card)
        elif card.regional_multipliers:
            strategy = RegionalMultiplierPricing(card)
        elif card.home_region_prefix:
            strategy = HomeMarketPricing(card)
        else:
            strategy = CloudProviderPricing(card)
        strategies[provider] = strategy
    logger.debug("Built %d provider pricing strategies", len(strategies))
    return strategies
