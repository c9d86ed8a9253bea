"""
On-premises cost calculator.
Hardware amortisation, data center running costs, operations labour and licences.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Union

from infra_pricing.core.config import config
from infra_pricing.domain.cost_models import CostLineItem, OnPremCostBreakdown
from infra_pricing.domain.enums import Distribution
from infra_pricing.domain.money import ZERO, HUNDRED, to_decimal
from infra_pricing.domain.onprem_models import OnPremPricing
from infra_pricing.pricing.licensing import base_distribution
from infra_pricing.pricing.tiered import pack_count


logger = logging.getLogger(__name__)

ONE = Decimal("1")
HALF = Decimal("0.5")


class OnPremCostCalculator:
    """Monthly on-prem cost from an OnPremPricing set of assumptions."""

    def __init__(self, pricing: Optional[OnPremPricing] = None):
        self.pricing = pricing or OnPremPricing()

    # Hardware

    def server_count(self, cpu_cores: int) -> int:
        """Physical servers needed to host the cores."""
        return pack_count(cpu_cores, self.pricing.hardware.cores_per_server)

    def hardware_line_items(
        self,
        cpu_cores: int,
        ram_gb: int,
        storage_tb: Union[int, Decimal],
        load_balancers: int = 0,
    ) -> List[CostLineItem]:
        """Capital cost items for the given raw capacity."""
        hw = self.pricing.hardware
        servers = self.server_count(cpu_cores)
        switches = max(1, pack_count(servers, hw.servers_per_switch))
        return [
            CostLineItem("Servers", Decimal(servers), "servers", hw.server_cost),
            CostLineItem("CPU Cores", Decimal(cpu_cores), "cores", hw.per_cpu_core),
            CostLineItem("RAM", Decimal(ram_gb), "GB", hw.per_gb_ram),
            CostLineItem("SSD Storage", to_decimal(storage_tb), "TB", hw.per_tb_ssd),
            CostLineItem("Network Switches", Decimal(switches), "switches", hw.network_switch_cost),
            CostLineItem("Load Balancers", Decimal(load_balancers), "appliances", hw.load_balancer_cost),
        ]

    def hardware_total_cost(
        self,
        cpu_cores: int,
        ram_gb: int,
        storage_tb: Union[int, Decimal],
        load_balancers: int = 0,
    ) -> Decimal:
        items = self.hardware_line_items(cpu_cores, ram_gb, storage_tb, load_balancers)
        return sum((item.total for item in items), ZERO)

    def amortized_monthly(self, total_hardware_cost: Decimal) -> Decimal:
        """Straight-line amortisation over the refresh cycle plus yearly maintenance, per month."""
        refresh_months = self.pricing.hardware_refresh_years * config.MONTHS_PER_YEAR
        amortized = total_hardware_cost / refresh_months
        maintenance = total_hardware_cost * self.pricing.hardware_maintenance_percent / HUNDRED / config.MONTHS_PER_YEAR
        return amortized + maintenance

    def monthly_hardware_cost(self, servers: int) -> Decimal:
        """Amortised monthly cost of whole servers at the per-server price."""
        return self.amortized_monthly(servers * self.pricing.hardware.server_cost)

    # Data center

    def data_center_monthly(self, servers: int) -> Decimal:
        """
        Rack space, power and cooling for the servers.

        Power is servers x watts x 730h, scaled by PUE; cooling is a percentage of power.
        """
        dc = self.pricing.data_center
        rack_cost = servers * dc.rack_units_per_server * dc.rack_unit_per_month
        monthly_kwh = Decimal(servers * dc.watts_per_server * config.HOURS_PER_MONTH) / 1000
        power_cost = monthly_kwh * dc.power_per_kwh * dc.pue
        cooling_cost = power_cost * dc.cooling_percent / HUNDRED
        return rack_cost + power_cost + cooling_cost

    # Labour

    def engineers_needed(self, nodes: int) -> Decimal:
        """Fractional DevOps headcount, at least one."""
        return max(ONE, Decimal(nodes) / self.pricing.labor.nodes_per_engineer)

    def labor_monthly(self, nodes: int, has_production: bool = True) -> Decimal:
        labor = self.pricing.labor
        engineers = self.engineers_needed(nodes)
        devops_cost = engineers * labor.devops_engineer_monthly
        sysadmin_cost = max(ONE, engineers * HALF) * labor.sysadmin_monthly
        dba_cost = labor.dba_monthly if labor.include_dba and has_production else ZERO
        return devops_cost + sysadmin_cost + dba_cost

    # Licences

    def license_monthly(self, distribution: Union[Distribution, str], nodes: int, cores: int = 0) -> Decimal:
        try:
            resolved = base_distribution(Distribution(distribution))
        except ValueError:
            logger.warning("Unknown distribution '%s', on-prem licence cost set to zero", distribution)
            return ZERO
        return self.pricing.licensing.monthly_cost(resolved, nodes, cores)

    def calculate(
        self,
        distribution: Union[Distribution, str],
        node_count: int,
        total_cores: int,
        total_ram_gb: int,
        total_storage_tb: Union[int, Decimal],
        load_balancers: int = 0,
        has_production: bool = True,
        include_pricing: bool = True,
    ) -> OnPremCostBreakdown:
        """
        Combined monthly on-prem cost for a cluster.

        Data center costs are sized by physical hosts, packing vms_per_server nodes per host.

        Returns:
            OnPremCostBreakdown, or a not-calculated breakdown when pricing is excluded
        """
        if not include_pricing:
            return OnPremCostBreakdown.not_available()

        hosts = pack_count(node_count, self.pricing.hardware.vms_per_server)
        total_hardware = self.hardware_total_cost(total_cores, total_ram_gb, total_storage_tb, load_balancers)

        return OnPremCostBreakdown(
            hardware_monthly=self.amortized_monthly(total_hardware),
            data_center_monthly=self.data_center_monthly(hosts),
            labor_monthly=self.labor_monthly(node_count, has_production),
            license_monthly=self.license_monthly(distribution, node_count, total_cores),
        )
