"""
Cluster sizing inputs for cost estimation.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from infra_pricing.domain.enums import (
    CloudProvider,
    Distribution,
    EnvironmentType,
    PricingType,
    SupportLevel,
    SupportTier,
)


@dataclass(frozen=True)
class EnvironmentResources:
    """Node count and per-node size of one environment."""
    nodes: int
    cpu_per_node: int = 4
    ram_gb_per_node: int = 16
    disk_gb_per_node: int = 100
    instance_type: Optional[str] = None
    name: str = ""

    def __post_init__(self):
        for attr in ("nodes", "cpu_per_node", "ram_gb_per_node", "disk_gb_per_node"):
            if getattr(self, attr) < 0:
                raise ValueError(f"{attr} must not be negative (got: {getattr(self, attr)})")

    @property
    def total_cpu(self) -> int:
        return self.nodes * self.cpu_per_node

    @property
    def total_ram_gb(self) -> int:
        return self.nodes * self.ram_gb_per_node

    @property
    def total_disk_gb(self) -> int:
        return self.nodes * self.disk_gb_per_node


@dataclass
class ClusterSpec:
    """
    What to price: a distribution on a provider, sized per environment.

    Counts are totals across all clusters. A spec with provider OnPrem is priced with the
    on-prem calculator; every other provider uses its cloud rate card.
    """
    provider: CloudProvider
    distribution: Distribution
    environments: Dict[EnvironmentType, EnvironmentResources] = field(default_factory=dict)
    region: Optional[str] = None
    cluster_count: int = 1
    ha_control_plane: bool = False
    pricing_type: PricingType = PricingType.ON_DEMAND

    # Network
    load_balancers: int = 1
    nat_gateways: int = 0
    egress_gb_per_month: int = 0

    # Storage beyond node disks
    registry_storage_gb: int = 50
    backup_storage_gb: int = 0

    # Support and licensing
    support_level: SupportLevel = SupportLevel.NONE
    license_support_tier: SupportTier = SupportTier.STANDARD
    contract_years: int = 1
    master_nodes: int = 0

    @property
    def total_nodes(self) -> int:
        return sum(env.nodes for env in self.environments.values())

    @property
    def total_cpu(self) -> int:
        return sum(env.total_cpu for env in self.environments.values())

    @property
    def total_ram_gb(self) -> int:
        return sum(env.total_ram_gb for env in self.environments.values())

    @property
    def total_disk_gb(self) -> int:
        return sum(env.total_disk_gb for env in self.environments.values())

    @property
    def has_production(self) -> bool:
        return any(
            env.nodes > 0
            for env_type, env in self.environments.items()
            if env_type in (EnvironmentType.PROD, EnvironmentType.DR)
        )
