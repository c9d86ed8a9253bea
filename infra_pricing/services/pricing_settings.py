"""
User-facing pricing settings and cost presentation.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union

from infra_pricing.core.config import config
from infra_pricing.domain.cost_models import CostEstimate
from infra_pricing.domain.enums import CloudProvider
from infra_pricing.domain.mendix_models import MendixPricingSettings
from infra_pricing.domain.money import to_decimal
from infra_pricing.domain.onprem_models import OnPremPricing
from infra_pricing.domain.pricing_models import PricingModel
from infra_pricing.pricing.registry import PricingRegistry

NOT_AVAILABLE = "N/A"

# Keys of CostEstimate.to_dict() (and nested dicts) that hold money amounts
MONEY_FIELDS = frozenset({
    "monthly_total", "yearly_total", "three_year_tco", "five_year_tco",
    "monthly", "yearly", "unit_price", "total", "cost_per_node",
})


@dataclass
class CloudApiConfig:
    """Credentials for one provider's live pricing API."""
    api_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: Optional[str] = None
    enabled: bool = True


@dataclass
class PricingSettings:
    """Options that change how costs are computed and shown."""
    include_pricing_in_results: bool = field(default_factory=lambda: config.INCLUDE_PRICING_IN_RESULTS)
    on_prem_defaults: OnPremPricing = field(default_factory=OnPremPricing)
    cloud_api_configs: Dict[CloudProvider, CloudApiConfig] = field(default_factory=dict)
    mendix_pricing: MendixPricingSettings = field(default_factory=MendixPricingSettings)
    cloud_pricing: Dict[CloudProvider, PricingModel] = field(default_factory=dict)

    def is_live_pricing_enabled(self, provider: CloudProvider) -> bool:
        """Live prices need the global switch and an enabled API config for the provider."""
        api_config = self.cloud_api_configs.get(provider)
        return config.LIVE_PRICING_ENABLED and api_config is not None and api_config.enabled

    def pricing_for(
        self,
        registry: PricingRegistry,
        provider: CloudProvider,
        region: Optional[str] = None,
    ) -> PricingModel:
        """A user override for the provider when it matches the region, else the registry's rate card."""
        override = self.cloud_pricing.get(provider)
        if override is not None and (region is None or override.region.lower() == region.lower()):
            return override
        return registry.get_pricing(provider, region)


def format_cost(value: Optional[Union[Decimal, int, float, str]]) -> str:
    """Whole-dollar currency string, e.g. "$4,375"; "N/A" when there is no value."""
    if value is None:
        return NOT_AVAILABLE
    amount = to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def _present(value: Any, include_pricing: bool) -> Any:
    if isinstance(value, dict):
        return {
            key: (format_cost(item) if include_pricing else NOT_AVAILABLE)
            if key in MONEY_FIELDS and not isinstance(item, (dict, list)) else _present(item, include_pricing)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_present(item, include_pricing) for item in value]
    return value


def present_estimate(estimate: CostEstimate, settings: Optional[PricingSettings] = None) -> Dict[str, Any]:
    """
    Estimate rendered for display: money as formatted strings, or "N/A" everywhere when
    pricing is excluded from results.
    """
    settings = settings or PricingSettings()
    return _present(estimate.to_dict(), settings.include_pricing_in_results)
