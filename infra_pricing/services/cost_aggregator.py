"""
Cost aggregator.
Merges category-level monthly costs into a CostEstimate with percentage breakdowns.
"""
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence, Union

from infra_pricing.domain.cluster_models import EnvironmentResources
from infra_pricing.domain.cost_models import CostBreakdown, CostEstimate, CostLineItem, EnvironmentCost
from infra_pricing.domain.enums import CloudProvider, CostCategory, EnvironmentType, PricingType
from infra_pricing.domain.money import ZERO, to_decimal


CategoryCost = Union[Decimal, int, float, str, Sequence[CostLineItem]]


def _category_breakdown(category: CostCategory, cost: CategoryCost) -> CostBreakdown:
    if isinstance(cost, (list, tuple)):
        items = list(cost)
        return CostBreakdown(
            category=category,
            monthly=sum((item.total for item in items), ZERO),
            line_items=items,
        )
    return CostBreakdown(category=category, monthly=to_decimal(cost))


def split_by_nodes(
    monthly_total: Decimal,
    environments: Mapping[EnvironmentType, EnvironmentResources],
) -> Dict[EnvironmentType, EnvironmentCost]:
    """Attribute a monthly total to environments in proportion to their node counts."""
    total_nodes = sum(env.nodes for env in environments.values())
    costs = {}
    for env_type, env in environments.items():
        share = Decimal(env.nodes) / total_nodes if total_nodes else ZERO
        costs[env_type] = EnvironmentCost(
            environment=env_type,
            monthly=monthly_total * share,
            nodes=env.nodes,
            cpu=env.total_cpu,
            ram_gb=env.total_ram_gb,
            disk_gb=env.total_disk_gb,
            name=env.name,
        )
    return costs


def aggregate_costs(
    provider: CloudProvider,
    region: str,
    category_costs: Mapping[CostCategory, CategoryCost],
    environments: Optional[Mapping[EnvironmentType, EnvironmentResources]] = None,
    pricing_type: PricingType = PricingType.ON_DEMAND,
    pricing_source: str = "",
    notes: Optional[List[str]] = None,
) -> CostEstimate:
    """
    Build a CostEstimate from monthly costs per category.

    Args:
        provider: Provider the estimate is for
        region: Region code
        category_costs: Monthly amount, or the line items making it up, per category
        environments: Optional per-environment resources to split the total across
        pricing_type: Commitment model the rates came from
        pricing_source: Human-readable origin of the rates
        notes: Assumptions to carry along

    Returns:
        CostEstimate whose monthly_total is the sum of the categories. Percentages are of
        that total, and 0 when the total is 0.
    """
    estimate = CostEstimate(
        provider=provider,
        region=region,
        pricing_type=pricing_type,
        pricing_source=pricing_source,
        notes=list(notes or []),
    )
    for category, cost in category_costs.items():
        estimate.breakdown[category] = _category_breakdown(category, cost)

    monthly_total = sum((b.monthly for b in estimate.breakdown.values()), ZERO)
    if environments:
        estimate.environment_costs = split_by_nodes(monthly_total, environments)

    estimate.calculate_totals()
    return estimate
