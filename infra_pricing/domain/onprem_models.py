"""
On-premises cost assumptions: hardware, data center, labour and distribution licences.
"""
from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Dict, Optional

from infra_pricing.domain.enums import Distribution
from infra_pricing.domain.licensing_models import DEFAULT_CORES_PER_NODE
from infra_pricing.domain.money import ZERO


@dataclass(frozen=True)
class HardwareCosts:
    """Capital costs of physical infrastructure."""
    server_cost: Decimal = Decimal("15000")
    per_cpu_core: Decimal = Decimal("200")
    per_gb_ram: Decimal = Decimal("15")
    per_tb_ssd: Decimal = Decimal("200")
    per_tb_hdd: Decimal = Decimal("50")
    network_switch_cost: Decimal = Decimal("5000")
    load_balancer_cost: Decimal = Decimal("10000")
    vms_per_server: int = 10
    cores_per_server: int = 64
    servers_per_switch: int = 40


@dataclass(frozen=True)
class DataCenterCosts:
    """Monthly facility costs."""
    rack_unit_per_month: Decimal = Decimal("100")
    power_per_kwh: Decimal = Decimal("0.12")
    watts_per_server: int = 500
    pue: Decimal = Decimal("1.6")
    cooling_percent: Decimal = Decimal("40")
    rack_units_per_server: int = 2


@dataclass(frozen=True)
class LaborCosts:
    """Monthly operations staffing."""
    devops_engineer_monthly: Decimal = Decimal("12000")
    nodes_per_engineer: int = 50
    sysadmin_monthly: Decimal = Decimal("8000")
    dba_monthly: Decimal = Decimal("10000")
    include_dba: bool = True


@dataclass(frozen=True)
class OnPremLicenseRates:
    """Annual self-managed licence rates; open-source distributions default to zero."""
    openshift_per_node_year: Decimal = Decimal("2500")
    tanzu_per_core_year: Decimal = Decimal("1500")
    rancher_per_node_year: Decimal = Decimal("1000")
    charmed_per_node_year: Decimal = Decimal("500")
    rke2_per_node_year: Decimal = ZERO
    k3s_per_node_year: Decimal = ZERO
    microk8s_per_node_year: Decimal = ZERO
    kubernetes_per_node_year: Decimal = ZERO

    def _per_node_rates(self) -> Dict[Distribution, Decimal]:
        return {
            Distribution.OPENSHIFT: self.openshift_per_node_year,
            Distribution.RANCHER: self.rancher_per_node_year,
            Distribution.CHARMED: self.charmed_per_node_year,
            Distribution.RKE2: self.rke2_per_node_year,
            Distribution.K3S: self.k3s_per_node_year,
            Distribution.MICROK8S: self.microk8s_per_node_year,
            Distribution.KUBERNETES: self.kubernetes_per_node_year,
        }

    def annual_cost(self, distribution: Distribution, node_count: int, core_count: int = 0) -> Decimal:
        """Annual licence cost; unknown distributions cost nothing."""
        if distribution == Distribution.TANZU:
            cores = core_count if core_count > 0 else node_count * DEFAULT_CORES_PER_NODE
            return self.tanzu_per_core_year * cores
        return self._per_node_rates().get(distribution, ZERO) * node_count

    def monthly_cost(self, distribution: Distribution, node_count: int, core_count: int = 0) -> Decimal:
        return self.annual_cost(distribution, node_count, core_count) / 12

    def has_license_cost(self, distribution: Distribution) -> bool:
        if distribution == Distribution.TANZU:
            return self.tanzu_per_core_year > 0
        if distribution in (Distribution.OPENSHIFT, Distribution.RANCHER, Distribution.CHARMED):
            return self._per_node_rates()[distribution] > 0
        return False


@dataclass(frozen=True)
class OnPremPricing:
    """Complete on-prem cost assumptions."""
    hardware: HardwareCosts = field(default_factory=HardwareCosts)
    data_center: DataCenterCosts = field(default_factory=DataCenterCosts)
    labor: LaborCosts = field(default_factory=LaborCosts)
    licensing: OnPremLicenseRates = field(default_factory=OnPremLicenseRates)
    hardware_refresh_years: int = 4
    hardware_maintenance_percent: Decimal = Decimal("10")

    def __post_init__(self):
        if self.hardware_refresh_years <= 0:
            raise ValueError(f"Hardware refresh years must be positive (got: {self.hardware_refresh_years})")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "OnPremPricing":
        """Build from nested dictionaries, keeping defaults for missing keys."""
        data = data or {}
        unknown_keys = set(data) - {f.name for f in fields(cls)}
        if unknown_keys:
            raise ValueError(f"Unknown on-prem setting(s): {', '.join(sorted(unknown_keys))}")

        def section(model, key):
            values = data.get(key) or {}
            unknown = set(values) - {f.name for f in fields(model)}
            if unknown:
                raise ValueError(f"Unknown {key} setting(s): {', '.join(sorted(unknown))}")
            return model(**{
                name: Decimal(str(value)) if isinstance(getattr(model(), name), Decimal) else value
                for name, value in values.items()
            })

        kwargs: Dict[str, Any] = {
            "hardware": section(HardwareCosts, "hardware"),
            "data_center": section(DataCenterCosts, "data_center"),
            "labor": section(LaborCosts, "labor"),
            "licensing": section(OnPremLicenseRates, "licensing"),
        }
        if "hardware_refresh_years" in data:
            kwargs["hardware_refresh_years"] = int(data["hardware_refresh_years"])
        if "hardware_maintenance_percent" in data:
            kwargs["hardware_maintenance_percent"] = Decimal(str(data["hardware_maintenance_percent"]))
        return cls(**kwargs)
