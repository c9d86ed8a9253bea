"""
Cost estimator service.
Turns a ClusterSpec into a monthly CostEstimate using provider rate cards, distribution
licensing and, for on-prem, the hardware/data center/labour model.
"""
from decimal import Decimal
from typing import Dict, List, Optional
import logging

from infra_pricing.core.config import config
from infra_pricing.domain.cluster_models import ClusterSpec
from infra_pricing.domain.cost_models import CostComparison, CostEstimate, CostLineItem
from infra_pricing.domain.enums import CloudProvider, CostCategory
from infra_pricing.domain.licensing_models import LicensingCost, LicensingInput
from infra_pricing.domain.money import ZERO, HUNDRED, to_decimal
from infra_pricing.domain.pricing_models import PricingModel
from infra_pricing.pricing.licensing import ManagedK8sLicensing
from infra_pricing.pricing.live_pricing import LivePricingService
from infra_pricing.pricing.rate_tables import ON_PREM_REGION_DISPLAY_NAME
from infra_pricing.pricing.registry import PricingRegistry, PricingRegistryError, get_pricing_registry
from infra_pricing.pricing.tiered import pack_count
from infra_pricing.services.cost_aggregator import CategoryCost, aggregate_costs
from infra_pricing.services.onprem_calculator import OnPremCostCalculator


logger = logging.getLogger(__name__)

GB_PER_TB = 1024
LABOR_HEAVY_SHARE = Decimal("0.5")


class CostEstimatorError(Exception):
    """Raised when cost estimation fails."""
    pass


class CostEstimationService:
    """Service for estimating Kubernetes platform costs in the cloud and on-prem."""

    def __init__(
        self,
        registry: Optional[PricingRegistry] = None,
        onprem_calculator: Optional[OnPremCostCalculator] = None,
        live_pricing: Optional[LivePricingService] = None,
    ):
        """
        Initialize cost estimator.

        Args:
            registry: Pricing registry (process default if None)
            onprem_calculator: On-prem calculator (default assumptions if None)
            live_pricing: Optional live price refresher used by estimate_async
        """
        self.registry = registry or get_pricing_registry()
        self.onprem_calculator = onprem_calculator or OnPremCostCalculator()
        self.live_pricing = live_pricing

    def estimate(self, spec: ClusterSpec, pricing: Optional[PricingModel] = None) -> CostEstimate:
        """Price a spec on-prem or in the cloud depending on its provider."""
        if spec.provider == CloudProvider.ON_PREM:
            return self.estimate_on_prem(spec)
        return self.estimate_kubernetes(spec, pricing)

    async def estimate_async(self, spec: ClusterSpec) -> CostEstimate:
        """
        Like estimate, but refreshes the rate card from live pricing APIs first.

        Live pricing never blocks an estimate: on any failure the offline rates are used.
        """
        if spec.provider == CloudProvider.ON_PREM or self.live_pricing is None:
            return self.estimate(spec)
        pricing = self._get_pricing(spec)
        refreshed = await self.live_pricing.refresh(pricing)
        return self.estimate_kubernetes(spec, refreshed)

    # Cloud

    def estimate_kubernetes(self, spec: ClusterSpec, pricing: Optional[PricingModel] = None) -> CostEstimate:
        """
        Estimate the monthly cost of running Kubernetes on a cloud provider.

        Args:
            spec: Cluster sizing
            pricing: Rate card to use (looked up from the registry if None)

        Returns:
            CostEstimate with compute, storage, network, license and support categories

        Raises:
            CostEstimatorError: If the spec is empty or its provider has no rate card
        """
        self._validate(spec)
        pricing = pricing or self._get_pricing(spec)

        compute_items = self._compute_items(spec, pricing)
        storage_items = self._storage_items(spec, pricing)
        network_items = self._network_items(spec, pricing)

        base_monthly = sum((item.total for item in compute_items + storage_items + network_items), ZERO)
        support_percent = pricing.support.percent_for(spec.support_level)

        category_costs = {
            CostCategory.COMPUTE: compute_items,
            CostCategory.STORAGE: storage_items,
            CostCategory.NETWORK: network_items,
        }

        licensing = self._licensing_cost(spec)
        if licensing is not None and licensing.total_per_year > 0:
            category_costs[CostCategory.LICENSE] = [CostLineItem(
                "Distribution licensing", to_decimal(1), "month", licensing.total_per_month,
                notes=licensing.basis,
            )]

        if support_percent > 0:
            category_costs[CostCategory.SUPPORT] = [CostLineItem(
                f"{spec.support_level.value} support ({support_percent}% of infrastructure)",
                to_decimal(1), "month", base_monthly * support_percent / HUNDRED,
            )]

        notes = [f"Based on {config.HOURS_PER_MONTH} hours per month"]
        if not pricing.is_live:
            notes.append("Offline rate card; actual prices may differ")

        estimate = aggregate_costs(
            provider=pricing.provider,
            region=pricing.region,
            category_costs=category_costs,
            environments=spec.environments,
            pricing_type=spec.pricing_type,
            pricing_source=pricing.source,
            notes=notes,
        )
        estimate.currency = pricing.currency
        logger.info(
            "Estimated %s %s in %s: %s/month",
            spec.distribution.value, pricing.provider.value, pricing.region, estimate.monthly_total,
        )
        return estimate

    def _get_pricing(self, spec: ClusterSpec) -> PricingModel:
        try:
            return self.registry.get_pricing(spec.provider, spec.region, ha_control_plane=spec.ha_control_plane)
        except PricingRegistryError as error:
            raise CostEstimatorError(str(error)) from error

    def _compute_items(self, spec: ClusterSpec, pricing: PricingModel) -> List[CostLineItem]:
        hours = config.HOURS_PER_MONTH
        items = []
        for env_type, env in spec.environments.items():
            if env.nodes == 0:
                continue
            label = env.name or env_type.value
            if env.instance_type:
                items.append(CostLineItem(
                    f"{label} nodes ({env.instance_type})", to_decimal(env.nodes), "node-month",
                    pricing.get_instance_price(env.instance_type) * hours,
                ))
            else:
                items.append(CostLineItem(
                    f"{label} nodes ({env.cpu_per_node} vCPU, {env.ram_gb_per_node} GB)",
                    to_decimal(env.nodes), "node-month",
                    pricing.calculate_compute_monthly(env.cpu_per_node, env.ram_gb_per_node),
                ))

        control_plane = pricing.compute.managed_control_plane_per_hour
        if control_plane > 0:
            items.append(CostLineItem(
                "Managed control plane", to_decimal(spec.cluster_count), "cluster-month",
                control_plane * hours,
                notes="HA uptime SLA" if spec.ha_control_plane else None,
            ))
        return items

    def _storage_items(self, spec: ClusterSpec, pricing: PricingModel) -> List[CostLineItem]:
        rates = pricing.storage
        items = [
            CostLineItem("Node SSD volumes", to_decimal(spec.total_disk_gb), "GB-month", rates.ssd_per_gb_month),
        ]
        if spec.registry_storage_gb:
            items.append(CostLineItem(
                "Container registry", to_decimal(spec.registry_storage_gb), "GB-month", rates.registry_per_gb_month,
            ))
        if spec.backup_storage_gb:
            items.append(CostLineItem(
                "Backups", to_decimal(spec.backup_storage_gb), "GB-month", rates.backup_per_gb_month,
            ))
        return items

    def _network_items(self, spec: ClusterSpec, pricing: PricingModel) -> List[CostLineItem]:
        rates = pricing.network
        hours = config.HOURS_PER_MONTH
        items = []
        if spec.load_balancers:
            items.append(CostLineItem(
                "Load balancers", to_decimal(spec.load_balancers), "LB-month", rates.load_balancer_per_hour * hours,
            ))
        if spec.nat_gateways:
            items.append(CostLineItem(
                "NAT gateways", to_decimal(spec.nat_gateways), "gateway-month", rates.nat_gateway_per_hour * hours,
            ))
        if spec.egress_gb_per_month:
            items.append(CostLineItem(
                "Data transfer out", to_decimal(spec.egress_gb_per_month), "GB", rates.egress_per_gb,
            ))
        return items

    def _licensing_cost(self, spec: ClusterSpec) -> Optional[LicensingCost]:
        licensing = self.registry.get_licensing(spec.distribution)
        if isinstance(licensing, ManagedK8sLicensing):
            # Control plane fee is already priced from the rate card
            return None
        return licensing.calculate(self._licensing_input(spec))

    @staticmethod
    def _licensing_input(spec: ClusterSpec) -> LicensingInput:
        return LicensingInput(
            node_count=spec.total_nodes,
            total_cores=spec.total_cpu,
            environment_count=len(spec.environments),
            master_nodes=spec.master_nodes,
            support_tier=spec.license_support_tier,
            contract_years=spec.contract_years,
            is_managed_service=spec.provider in (
                CloudProvider.ROSA, CloudProvider.ARO, CloudProvider.OSD, CloudProvider.ROKS,
            ),
        )

    # On-prem

    def estimate_on_prem(self, spec: ClusterSpec) -> CostEstimate:
        """
        Estimate the monthly cost of running a distribution in an owned data center.

        Hardware is amortised over the refresh cycle; storage is split out of the hardware
        cost so that each category can be compared with its cloud counterpart.
        """
        self._validate(spec)
        calc = self.onprem_calculator
        pricing = calc.pricing
        storage_tb = to_decimal(spec.total_disk_gb) / GB_PER_TB

        hardware_items = [
            item for item in calc.hardware_line_items(spec.total_cpu, spec.total_ram_gb, storage_tb, spec.load_balancers)
            if item.quantity > 0
        ]
        # Capital costs become monthly amortised line items
        compute_items = [
            CostLineItem(item.description, item.quantity, f"{item.unit} (amortised)",
                         calc.amortized_monthly(item.unit_price))
            for item in hardware_items if item.description != "SSD Storage"
        ]
        storage_items = [
            CostLineItem(item.description, item.quantity, f"{item.unit} (amortised)",
                         calc.amortized_monthly(item.unit_price))
            for item in hardware_items if item.description == "SSD Storage"
        ]

        hosts = max(1, pack_count(spec.total_nodes, pricing.hardware.vms_per_server))
        license_monthly = calc.license_monthly(spec.distribution, spec.total_nodes, spec.total_cpu)

        category_costs: Dict[CostCategory, CategoryCost] = {
            CostCategory.COMPUTE: compute_items,
            CostCategory.STORAGE: storage_items,
            CostCategory.DATA_CENTER: calc.data_center_monthly(hosts),
            CostCategory.LABOR: calc.labor_monthly(spec.total_nodes, spec.has_production),
        }
        if license_monthly > 0:
            category_costs[CostCategory.LICENSE] = license_monthly

        estimate = aggregate_costs(
            provider=CloudProvider.ON_PREM,
            region=spec.region or ON_PREM_REGION_DISPLAY_NAME,
            category_costs=category_costs,
            environments=spec.environments,
            pricing_type=spec.pricing_type,
            pricing_source="On-premises cost model",
            notes=[
                f"Hardware amortised over {pricing.hardware_refresh_years} years "
                f"with {pricing.hardware_maintenance_percent}% yearly maintenance",
                f"{hosts} physical host(s) at {pricing.hardware.vms_per_server} nodes per host",
            ],
        )
        logger.info("Estimated on-prem %s: %s/month", spec.distribution.value, estimate.monthly_total)
        return estimate

    # Comparison

    def compare(self, specs: List[ClusterSpec]) -> CostComparison:
        """
        Estimate several specs and rank them.

        Raises:
            CostEstimatorError: If no specs are given
        """
        if not specs:
            raise CostEstimatorError("Nothing to compare")
        comparison = CostComparison(estimates=[self.estimate(spec) for spec in specs])
        comparison.insights = self._comparison_insights(comparison)
        return comparison

    @staticmethod
    def _comparison_insights(comparison: CostComparison) -> List[str]:
        cheapest = comparison.cheapest
        most_expensive = comparison.most_expensive
        if cheapest is None or len(comparison.estimates) < 2:
            return []

        insights = [f"{cheapest.provider.value} ({cheapest.region}) is the lowest-cost option"]
        if most_expensive.monthly_total > 0 and most_expensive is not cheapest:
            saving = most_expensive.monthly_total - cheapest.monthly_total
            percent = saving / most_expensive.monthly_total * HUNDRED
            insights.append(
                f"Saves ${saving:,.0f}/month ({percent:.0f}%) compared with "
                f"{most_expensive.provider.value} ({most_expensive.region})"
            )
        for estimate in comparison.estimates:
            labor = estimate.category_monthly(CostCategory.LABOR)
            if labor > 0 and estimate.monthly_total > 0 and labor / estimate.monthly_total > LABOR_HEAVY_SHARE:
                insights.append("Operations labour is more than half of the on-premises cost")
                break
        return insights

    @staticmethod
    def _validate(spec: ClusterSpec) -> None:
        if not spec.environments:
            raise CostEstimatorError("Cluster spec has no environments")
        if spec.total_nodes <= 0:
            raise CostEstimatorError("Cluster spec has no nodes")
        if spec.cluster_count < 1:
            raise CostEstimatorError(f"cluster_count must be at least 1 (got: {spec.cluster_count})")
