"""
Domain models for distribution licensing.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from infra_pricing.core.config import config
from infra_pricing.domain.enums import LicensingModel, SupportTier
from infra_pricing.domain.money import ZERO, money

DEFAULT_CORES_PER_NODE = 8


@dataclass
class LicensingInput:
    """Cluster size facts a licensing strategy needs."""
    node_count: int
    total_cores: Optional[int] = None
    total_sockets: Optional[int] = None
    environment_count: int = 1
    master_nodes: int = 0
    worker_nodes: Optional[int] = None
    infra_nodes: int = 0
    support_tier: SupportTier = SupportTier.STANDARD
    contract_years: int = 1
    is_managed_service: bool = False

    @property
    def effective_cores(self) -> int:
        """Core count, assuming 8 cores per node when not supplied."""
        if self.total_cores is not None:
            return self.total_cores
        return self.node_count * DEFAULT_CORES_PER_NODE

    @property
    def effective_sockets(self) -> int:
        """Socket count, assuming 2 sockets per node when not supplied."""
        if self.total_sockets is not None:
            return self.total_sockets
        return self.node_count * 2

    @property
    def effective_worker_nodes(self) -> int:
        if self.worker_nodes is not None:
            return self.worker_nodes
        return max(self.node_count - self.master_nodes - self.infra_nodes, 0)


@dataclass
class LicensingCost:
    """Computed annual licence cost with a human-readable basis."""
    base_license_cost: Decimal = ZERO
    support_cost: Decimal = ZERO
    additional_costs: Decimal = ZERO
    per_node_per_year: Decimal = ZERO
    discount_percent: Decimal = ZERO
    licensing_model: LicensingModel = LicensingModel.OPEN_SOURCE
    basis: str = ""

    @property
    def total_per_year(self) -> Decimal:
        return self.base_license_cost + self.support_cost + self.additional_costs

    @property
    def total_per_month(self) -> Decimal:
        return self.total_per_year / config.MONTHS_PER_YEAR

    @classmethod
    def free(cls, basis: str = "Open Source - No License Required") -> "LicensingCost":
        return cls(basis=basis)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "base_license_cost": money(self.base_license_cost),
            "support_cost": money(self.support_cost),
            "additional_costs": money(self.additional_costs),
            "total_per_year": money(self.total_per_year),
            "total_per_month": money(self.total_per_month),
            "per_node_per_year": money(self.per_node_per_year),
            "discount_percent": float(self.discount_percent),
            "licensing_model": self.licensing_model.value,
            "basis": self.basis,
        }


@dataclass(frozen=True)
class SupportTierInfo:
    """One vendor support offering."""
    tier: SupportTier
    name: str
    hours: str
    response_sla: str
    cost_multiplier: Decimal = Decimal("1")
    additional_annual_cost: Decimal = ZERO
    includes_tam: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "name": self.name,
            "hours": self.hours,
            "response_sla": self.response_sla,
            "cost_multiplier": float(self.cost_multiplier),
            "additional_annual_cost": float(self.additional_annual_cost),
            "includes_tam": self.includes_tam,
        }
