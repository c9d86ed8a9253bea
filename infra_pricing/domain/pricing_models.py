"""
Domain models for provider rate cards.
A PricingModel is a frozen value object: one per (provider, region) query.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from infra_pricing.core.config import config
from infra_pricing.domain.enums import CloudProvider, Currency, PricingType, SupportLevel
from infra_pricing.domain.money import ZERO, HUNDRED, to_decimal


def _frozen_prices(prices: Optional[Mapping[str, Any]] = None) -> Mapping[str, Decimal]:
    return MappingProxyType({name: to_decimal(price) for name, price in (prices or {}).items()})


@dataclass(frozen=True)
class ComputePricing:
    """Hourly compute rates."""
    cpu_per_hour: Decimal = ZERO
    ram_gb_per_hour: Decimal = ZERO
    instance_type_prices: Mapping[str, Decimal] = field(default_factory=_frozen_prices)
    managed_control_plane_per_hour: Decimal = ZERO
    openshift_service_fee_per_worker_hour: Decimal = ZERO

    def hourly_cost(self, cpu_cores: Any, ram_gb: Any) -> Decimal:
        return to_decimal(cpu_cores) * self.cpu_per_hour + to_decimal(ram_gb) * self.ram_gb_per_hour

    def monthly_cost(self, cpu_cores: Any, ram_gb: Any) -> Decimal:
        return self.hourly_cost(cpu_cores, ram_gb) * config.HOURS_PER_MONTH

    def scaled(self, multiplier: Decimal) -> "ComputePricing":
        """Apply a regional multiplier to every resource rate (not to fixed service fees)."""
        return replace(
            self,
            cpu_per_hour=self.cpu_per_hour * multiplier,
            ram_gb_per_hour=self.ram_gb_per_hour * multiplier,
            instance_type_prices=_frozen_prices(
                {name: price * multiplier for name, price in self.instance_type_prices.items()}
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cpu_per_hour": float(self.cpu_per_hour),
            "ram_gb_per_hour": float(self.ram_gb_per_hour),
            "instance_type_prices": {k: float(v) for k, v in self.instance_type_prices.items()},
            "managed_control_plane_per_hour": float(self.managed_control_plane_per_hour),
            "openshift_service_fee_per_worker_hour": float(self.openshift_service_fee_per_worker_hour),
        }


@dataclass(frozen=True)
class StoragePricing:
    """Per GB-month storage rates."""
    ssd_per_gb_month: Decimal = ZERO
    hdd_per_gb_month: Decimal = ZERO
    object_storage_per_gb_month: Decimal = ZERO
    backup_per_gb_month: Decimal = ZERO
    registry_per_gb_month: Decimal = ZERO

    def scaled(self, multiplier: Decimal) -> "StoragePricing":
        return StoragePricing(
            ssd_per_gb_month=self.ssd_per_gb_month * multiplier,
            hdd_per_gb_month=self.hdd_per_gb_month * multiplier,
            object_storage_per_gb_month=self.object_storage_per_gb_month * multiplier,
            backup_per_gb_month=self.backup_per_gb_month * multiplier,
            registry_per_gb_month=self.registry_per_gb_month * multiplier,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ssd_per_gb_month": float(self.ssd_per_gb_month),
            "hdd_per_gb_month": float(self.hdd_per_gb_month),
            "object_storage_per_gb_month": float(self.object_storage_per_gb_month),
            "backup_per_gb_month": float(self.backup_per_gb_month),
            "registry_per_gb_month": float(self.registry_per_gb_month),
        }


@dataclass(frozen=True)
class NetworkPricing:
    """Network rates. Ingress is free on every supported provider."""
    egress_per_gb: Decimal = ZERO
    ingress_per_gb: Decimal = ZERO
    load_balancer_per_hour: Decimal = ZERO
    nat_gateway_per_hour: Decimal = ZERO
    vpn_per_hour: Decimal = ZERO
    public_ip_per_hour: Decimal = ZERO

    def monthly_cost(self, load_balancers: int, egress_gb: Any, public_ips: int = 0) -> Decimal:
        hours = config.HOURS_PER_MONTH
        return (
            load_balancers * self.load_balancer_per_hour * hours
            + to_decimal(egress_gb) * self.egress_per_gb
            + public_ips * self.public_ip_per_hour * hours
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "egress_per_gb": float(self.egress_per_gb),
            "ingress_per_gb": float(self.ingress_per_gb),
            "load_balancer_per_hour": float(self.load_balancer_per_hour),
            "nat_gateway_per_hour": float(self.nat_gateway_per_hour),
            "vpn_per_hour": float(self.vpn_per_hour),
            "public_ip_per_hour": float(self.public_ip_per_hour),
        }


@dataclass(frozen=True)
class LicensePricing:
    """Annual subscription rates for commercial distributions."""
    openshift_per_node_year: Decimal = Decimal("2500")
    rancher_per_node_year: Decimal = Decimal("1000")
    tanzu_per_core_year: Decimal = Decimal("1500")
    charmed_per_node_year: Decimal = Decimal("500")
    custom_licenses: Mapping[str, Decimal] = field(default_factory=_frozen_prices)

    @classmethod
    def zeroed(cls) -> "LicensePricing":
        """Rates for offerings whose licence is folded into a service fee."""
        return cls(ZERO, ZERO, ZERO, ZERO)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "openshift_per_node_year": float(self.openshift_per_node_year),
            "rancher_per_node_year": float(self.rancher_per_node_year),
            "tanzu_per_core_year": float(self.tanzu_per_core_year),
            "charmed_per_node_year": float(self.charmed_per_node_year),
            "custom_licenses": {k: float(v) for k, v in self.custom_licenses.items()},
        }


@dataclass(frozen=True)
class SupportPricing:
    """Support plan cost as a percentage of spend."""
    basic_percent: Decimal = ZERO
    developer_percent: Decimal = Decimal("3")
    business_percent: Decimal = Decimal("10")
    enterprise_percent: Decimal = Decimal("15")

    def percent_for(self, level: SupportLevel) -> Decimal:
        percents = {
            SupportLevel.BASIC: self.basic_percent,
            SupportLevel.DEVELOPER: self.developer_percent,
            SupportLevel.BUSINESS: self.business_percent,
            SupportLevel.ENTERPRISE: self.enterprise_percent,
        }
        return percents.get(level, ZERO)

    def get_support_cost(self, base_cost: Decimal, level: SupportLevel) -> Decimal:
        return base_cost * self.percent_for(level) / HUNDRED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basic_percent": float(self.basic_percent),
            "developer_percent": float(self.developer_percent),
            "business_percent": float(self.business_percent),
            "enterprise_percent": float(self.enterprise_percent),
        }


@dataclass(frozen=True)
class RegionInfo:
    """A region a provider can be priced in."""
    code: str
    display_name: str
    is_preferred: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "display_name": self.display_name, "is_preferred": self.is_preferred}


@dataclass(frozen=True)
class PricingModel:
    """Complete rate card for one provider in one region."""
    provider: CloudProvider
    region: str
    region_display_name: str
    compute: ComputePricing
    storage: StoragePricing
    network: NetworkPricing
    licenses: LicensePricing = field(default_factory=LicensePricing)
    support: SupportPricing = field(default_factory=SupportPricing)
    currency: Currency = Currency.USD
    pricing_type: PricingType = PricingType.ON_DEMAND
    source: str = ""
    is_live: bool = False
    last_updated: datetime = field(default_factory=datetime.utcnow, compare=False)

    def get_instance_price(self, instance_type: str) -> Decimal:
        """Hourly price for a named instance type, or a 4 vCPU estimate when unknown."""
        price = self.compute.instance_type_prices.get(instance_type)
        if price is not None:
            return price
        return self.compute.cpu_per_hour * 4

    def calculate_compute_monthly(self, cpu_cores: Any, ram_gb: Any) -> Decimal:
        return self.compute.monthly_cost(cpu_cores, ram_gb)

    def calculate_network_monthly(self, load_balancers: int, egress_gb: Any, public_ips: int = 0) -> Decimal:
        return self.network.monthly_cost(load_balancers, egress_gb, public_ips)

    def calculate_monthly_cost(self, cpu_cores: Any, ram_gb: Any, storage_gb: Any) -> Decimal:
        """Monthly cost of a single cluster with the given raw resources."""
        compute = self.calculate_compute_monthly(cpu_cores, ram_gb)
        storage = to_decimal(storage_gb) * self.storage.ssd_per_gb_month
        control_plane = self.compute.managed_control_plane_per_hour * config.HOURS_PER_MONTH
        return compute + storage + control_plane

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "provider": self.provider.value,
            "region": self.region,
            "region_display_name": self.region_display_name,
            "currency": self.currency.value,
            "pricing_type": self.pricing_type.value,
            "compute": self.compute.to_dict(),
            "storage": self.storage.to_dict(),
            "network": self.network.to_dict(),
            "licenses": self.licenses.to_dict(),
            "support": self.support.to_dict(),
            "source": self.source,
            "is_live": self.is_live,
            "last_updated": self.last_updated.isoformat(),
        }
