"""
Domain models for cost estimation.
Defines the structure of cost estimates, category breakdowns and line items.
"""
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from infra_pricing.core.config import config
from infra_pricing.domain.enums import CloudProvider, CostCategory, Currency, EnvironmentType, PricingType
from infra_pricing.domain.money import ZERO, money, percent_of


@dataclass
class CostLineItem:
    """Represents a single priced quantity inside a category."""
    description: str
    quantity: Decimal
    unit: str  # e.g., "vCPU-month", "GB-month", "node-year"
    unit_price: Decimal
    notes: Optional[str] = None

    @property
    def total(self) -> Decimal:
        return self.quantity * self.unit_price

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "description": self.description,
            "quantity": float(self.quantity),
            "unit": self.unit,
            "unit_price": float(self.unit_price),
            "total": money(self.total),
            "notes": self.notes,
        }


@dataclass
class CostBreakdown:
    """Monthly cost of one category and its share of the estimate."""
    category: CostCategory
    monthly: Decimal
    percentage: Decimal = ZERO
    line_items: List[CostLineItem] = field(default_factory=list)
    description: str = ""

    @property
    def yearly(self) -> Decimal:
        return self.monthly * config.MONTHS_PER_YEAR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "monthly": money(self.monthly),
            "yearly": money(self.yearly),
            "percentage": round(float(self.percentage), 1),
            "description": self.description,
            "line_items": [item.to_dict() for item in self.line_items],
        }


@dataclass
class EnvironmentCost:
    """Monthly cost attributed to one environment."""
    environment: EnvironmentType
    monthly: Decimal
    percentage: Decimal = ZERO
    nodes: int = 0
    cpu: int = 0
    ram_gb: int = 0
    disk_gb: int = 0
    name: str = ""

    @property
    def yearly(self) -> Decimal:
        return self.monthly * config.MONTHS_PER_YEAR

    @property
    def cost_per_node(self) -> Decimal:
        if self.nodes <= 0:
            return ZERO
        return self.monthly / self.nodes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "environment": self.environment.value,
            "name": self.name or self.environment.value,
            "monthly": money(self.monthly),
            "yearly": money(self.yearly),
            "percentage": round(float(self.percentage), 1),
            "nodes": self.nodes,
            "cpu": self.cpu,
            "ram_gb": self.ram_gb,
            "disk_gb": self.disk_gb,
            "cost_per_node": money(self.cost_per_node),
        }


@dataclass
class CostEstimate:
    """
    A complete cost estimate.

    monthly_total is the only stored total; yearly and TCO figures are derived from it.
    """
    provider: CloudProvider
    region: str
    monthly_total: Decimal = ZERO
    breakdown: Dict[CostCategory, CostBreakdown] = field(default_factory=dict)
    environment_costs: Dict[EnvironmentType, EnvironmentCost] = field(default_factory=dict)
    pricing_type: PricingType = PricingType.ON_DEMAND
    currency: Currency = Currency.USD
    pricing_source: str = ""
    notes: List[str] = field(default_factory=list)
    calculated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def yearly_total(self) -> Decimal:
        return self.monthly_total * config.MONTHS_PER_YEAR

    @property
    def three_year_tco(self) -> Decimal:
        return self.yearly_total * 3

    @property
    def five_year_tco(self) -> Decimal:
        return self.yearly_total * 5

    def category_monthly(self, category: CostCategory) -> Decimal:
        item = self.breakdown.get(category)
        return item.monthly if item else ZERO

    @property
    def compute_cost(self) -> Decimal:
        return self.category_monthly(CostCategory.COMPUTE)

    @property
    def storage_cost(self) -> Decimal:
        return self.category_monthly(CostCategory.STORAGE)

    @property
    def network_cost(self) -> Decimal:
        return self.category_monthly(CostCategory.NETWORK)

    @property
    def license_cost(self) -> Decimal:
        return self.category_monthly(CostCategory.LICENSE)

    @property
    def support_cost(self) -> Decimal:
        return self.category_monthly(CostCategory.SUPPORT)

    def calculate_totals(self) -> None:
        """Recompute monthly_total and all percentages from the breakdown."""
        self.monthly_total = sum((b.monthly for b in self.breakdown.values()), ZERO)
        for item in self.breakdown.values():
            item.percentage = percent_of(item.monthly, self.monthly_total)
        for env in self.environment_costs.values():
            env.percentage = percent_of(env.monthly, self.monthly_total)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        # Sort categories by monthly cost descending
        sorted_breakdown = sorted(self.breakdown.values(), key=lambda b: b.monthly, reverse=True)
        return {
            "provider": self.provider.value,
            "region": self.region,
            "pricing_type": self.pricing_type.value,
            "currency": self.currency.value,
            "monthly_total": money(self.monthly_total),
            "yearly_total": money(self.yearly_total),
            "three_year_tco": money(self.three_year_tco),
            "five_year_tco": money(self.five_year_tco),
            "breakdown": [b.to_dict() for b in sorted_breakdown],
            "environment_costs": [e.to_dict() for e in self.environment_costs.values()],
            "pricing_source": self.pricing_source,
            "notes": list(self.notes),
            "calculated_at": self.calculated_at.isoformat(),
        }


@dataclass
class CostComparison:
    """Side-by-side comparison of several estimates."""
    estimates: List[CostEstimate]
    insights: List[str] = field(default_factory=list)

    @property
    def cheapest(self) -> Optional[CostEstimate]:
        return min(self.estimates, key=lambda e: e.monthly_total, default=None)

    @property
    def most_expensive(self) -> Optional[CostEstimate]:
        return max(self.estimates, key=lambda e: e.monthly_total, default=None)

    @property
    def savings(self) -> Dict[str, Decimal]:
        """Monthly savings of each option against the most expensive one."""
        highest = self.most_expensive
        if highest is None:
            return {}
        return {
            f"{e.provider.value}-{e.region}": highest.monthly_total - e.monthly_total
            for e in self.estimates
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        cheapest = self.cheapest
        most_expensive = self.most_expensive
        return {
            "estimates": [e.to_dict() for e in self.estimates],
            "cheapest": f"{cheapest.provider.value}-{cheapest.region}" if cheapest else None,
            "most_expensive": (
                f"{most_expensive.provider.value}-{most_expensive.region}" if most_expensive else None
            ),
            "savings": {key: money(value) for key, value in self.savings.items()},
            "insights": list(self.insights),
        }


@dataclass
class OnPremCostBreakdown:
    """Monthly on-prem cost split; is_calculated is False when pricing is excluded."""
    hardware_monthly: Decimal = ZERO
    data_center_monthly: Decimal = ZERO
    labor_monthly: Decimal = ZERO
    license_monthly: Decimal = ZERO
    is_calculated: bool = True

    @classmethod
    def not_available(cls) -> "OnPremCostBreakdown":
        return cls(is_calculated=False)

    @property
    def monthly_total(self) -> Decimal:
        return self.hardware_monthly + self.data_center_monthly + self.labor_monthly + self.license_monthly

    @property
    def yearly_total(self) -> Decimal:
        return self.monthly_total * config.MONTHS_PER_YEAR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if not self.is_calculated:
            return {"is_calculated": False}
        return {
            "is_calculated": True,
            "hardware_monthly": money(self.hardware_monthly),
            "data_center_monthly": money(self.data_center_monthly),
            "labor_monthly": money(self.labor_monthly),
            "license_monthly": money(self.license_monthly),
            "monthly_total": money(self.monthly_total),
            "yearly_total": money(self.yearly_total),
        }
