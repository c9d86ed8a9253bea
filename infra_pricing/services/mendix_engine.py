"""
Mendix pricing engine.
Turns a MendixDeploymentConfig into annual platform, user, deployment and add-on costs.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from infra_pricing.domain.mendix_models import (
    MendixCloudType,
    MendixDeploymentCategory,
    MendixDeploymentConfig,
    MendixOtherDeployment,
    MendixPricingResult,
    MendixPricingSettings,
    MendixPrivateCloudProvider,
    MendixResourcePackSpec,
    MendixResourcePackTier,
    SUPPORTED_PRIVATE_CLOUD_PROVIDERS,
)
from infra_pricing.domain.discount import Discount, DiscountScope
from infra_pricing.domain.money import to_decimal
from infra_pricing.pricing.tiered import pack_count, tiered_cost


logger = logging.getLogger(__name__)

INTERNAL_USER_BLOCK = 100
EXTERNAL_USER_BLOCK = 250_000
STORAGE_BLOCK_GB = 100


class MendixPricingError(Exception):
    """Raised when a Mendix configuration cannot be priced."""
    pass


def _blocks(quantity: Decimal, block_size: int) -> int:
    """Whole blocks covering a possibly fractional quantity."""
    whole = int(quantity)
    return pack_count(whole + (1 if quantity > whole else 0), block_size)


class MendixPricingEngine:
    """Prices Mendix Cloud, Private Cloud and other deployments."""

    def __init__(self, settings: Optional[MendixPricingSettings] = None):
        self.settings = settings or MendixPricingSettings()

    def calculate(self, config: MendixDeploymentConfig) -> MendixPricingResult:
        """
        Price a Mendix deployment for one year.

        Args:
            config: Deployment category, sizing, users and add-ons

        Returns:
            MendixPricingResult with per-component annual costs

        Raises:
            MendixPricingError: If counts are negative or a resource pack is not offered
        """
        self._validate(config)
        result = MendixPricingResult(category=config.category)

        if config.category == MendixDeploymentCategory.CLOUD:
            self._price_cloud(config, result)
        elif config.category == MendixDeploymentCategory.PRIVATE_CLOUD:
            self._price_private_cloud(config, result)
        else:
            self._price_other(config, result)

        result.user_license_cost = self.user_license_cost(config.internal_users, config.external_users)
        self._price_add_ons(config, result)

        discount = self.effective_discount(config)
        if discount is not None:
            result.discount_percent = discount.percent
            result.discount_amount = discount.calculate(
                result.license_subtotal, result.add_ons_subtotal, result.services_cost,
            )
            result.discount_description = discount.describe()

        logger.debug("Mendix %s priced at %s/year", result.deployment_type_name, result.total_per_year)
        return result

    def effective_discount(self, config: MendixDeploymentConfig) -> Optional[Discount]:
        """
        The discount a quote is priced with.

        A negotiated discount on the config wins over the volume discount, which
        is a percentage of platform and user licences.

        Args:
            config: Deployment configuration

        Returns:
            The Discount to apply, or None for list price
        """
        if config.discount is not None:
            return config.discount
        if config.apply_volume_discount:
            return Discount.percentage(
                self.settings.volume_discount_percent, DiscountScope.LICENSE_ONLY, notes="volume",
            )
        return None

    def _validate(self, config: MendixDeploymentConfig) -> None:
        counts = {
            "resource_pack_quantity": config.resource_pack_quantity,
            "number_of_environments": config.number_of_environments,
            "number_of_apps": config.number_of_apps,
            "internal_users": config.internal_users,
            "external_users": config.external_users,
        }
        for name, value in counts.items():
            if value < 0:
                raise MendixPricingError(f"{name} must not be negative (got: {value})")

    # Deployment categories

    def _price_cloud(self, config: MendixDeploymentConfig, result: MendixPricingResult) -> None:
        s = self.settings
        result.platform_license_cost = s.platform_premium_unlimited_per_year

        if config.cloud_type == MendixCloudType.DEDICATED:
            result.deployment_type_name = "Mendix Cloud Dedicated"
            result.deployment_fee_cost = s.cloud_dedicated_price_per_year
            return

        result.deployment_type_name = "Mendix Cloud (SaaS)"
        if config.resource_pack_tier is not None and config.resource_pack_size is not None:
            pack = s.get_resource_pack(config.resource_pack_tier, config.resource_pack_size)
            if pack is None:
                raise MendixPricingError(
                    f"Resource pack {config.resource_pack_size.value} is not offered "
                    f"in the {config.resource_pack_tier.value} tier"
                )
            quantity = config.resource_pack_quantity
            result.deployment_fee_cost = pack.price_per_year * quantity
            result.total_cloud_tokens = pack.cloud_tokens * quantity
            result.resource_pack_details = pack.describe(quantity)

        file_gb = to_decimal(config.additional_file_storage_gb)
        db_gb = to_decimal(config.additional_database_storage_gb)
        if file_gb > 0:
            result.storage_cost += _blocks(file_gb, STORAGE_BLOCK_GB) * s.additional_file_storage_per_100gb
        if db_gb > 0:
            result.storage_cost += _blocks(db_gb, STORAGE_BLOCK_GB) * s.additional_database_storage_per_100gb

    def _price_private_cloud(self, config: MendixDeploymentConfig, result: MendixPricingResult) -> None:
        s = self.settings
        result.platform_license_cost = s.platform_premium_unlimited_per_year
        environments = config.number_of_environments

        if config.private_cloud_provider == MendixPrivateCloudProvider.AZURE:
            result.deployment_type_name = "Mendix on Azure"
            result.deployment_fee_cost = s.azure_base_price_per_year
            included = s.azure_base_environments_included
            if environments > included:
                additional = environments - included
                result.environment_cost = additional * s.azure_additional_environment_price
                result.total_cloud_tokens = additional * s.azure_additional_environment_tokens
                result.environment_details = (
                    f"{included} included + {additional} additional @ ${s.azure_additional_environment_price}/env"
                )
            else:
                result.environment_details = f"{environments} environments (up to {included} included)"
            return

        provider = config.private_cloud_provider
        result.deployment_type_name = f"Mendix on Kubernetes ({provider.value})"
        if not self.is_supported_provider(provider):
            result.deployment_type_name += " - Manual Setup"
            result.warnings = (f"{provider.value} is not an officially supported Mendix platform",)

        result.deployment_fee_cost = s.k8s_base_price_per_year
        result.environment_cost = self.k8s_environment_cost(environments)
        result.environment_details = self.k8s_environment_details(environments)

    def _price_other(self, config: MendixDeploymentConfig, result: MendixPricingResult) -> None:
        s = self.settings
        result.platform_license_cost = s.platform_premium_unlimited_per_year

        per_app, unlimited, name = {
            MendixOtherDeployment.SERVER: (
                s.server_per_app_price_per_year, s.server_unlimited_apps_price_per_year,
                "Mendix on Server (VMs/Docker)",
            ),
            MendixOtherDeployment.STACKIT: (
                s.stackit_per_app_price_per_year, s.stackit_unlimited_apps_price_per_year, "Mendix on StackIT",
            ),
            MendixOtherDeployment.SAP_BTP: (
                s.sap_btp_per_app_price_per_year, s.sap_btp_unlimited_apps_price_per_year, "Mendix on SAP BTP",
            ),
        }[config.other_deployment]

        result.deployment_type_name = name
        if config.is_unlimited_apps:
            result.deployment_fee_cost = unlimited
            result.environment_details = "Unlimited applications"
        else:
            result.deployment_fee_cost = per_app * config.number_of_apps
            result.environment_details = f"{config.number_of_apps} application(s) @ ${per_app}/app"

    def _price_add_ons(self, config: MendixDeploymentConfig, result: MendixPricingResult) -> None:
        s = self.settings
        if config.genai_model_pack_size:
            pack = s.get_genai_pack(config.genai_model_pack_size)
            if pack is None:
                raise MendixPricingError(f"Unknown GenAI model pack size: {config.genai_model_pack_size}")
            result.genai_cost += pack.price_per_year
            result.total_cloud_tokens += pack.cloud_tokens

        if config.include_genai_knowledge_base:
            result.genai_cost += s.genai_knowledge_base_price_per_year
            result.total_cloud_tokens += s.genai_knowledge_base_tokens

        if config.include_customer_enablement:
            result.services_cost = s.customer_enablement_price

    # Building blocks

    def user_license_cost(self, internal_users: int, external_users: int) -> Decimal:
        """Internal users in blocks of 100, external users in blocks of 250K."""
        s = self.settings
        return (
            pack_count(internal_users, INTERNAL_USER_BLOCK) * s.internal_users_per_100_per_year
            + pack_count(external_users, EXTERNAL_USER_BLOCK) * s.external_users_per_250k_per_year
        )

    def k8s_environment_cost(self, total_environments: int) -> Decimal:
        """Tiered cost of Kubernetes environments beyond those included in the base package."""
        return tiered_cost(
            total_environments,
            self.settings.k8s_base_environments_included,
            self.settings.k8s_environment_tiers,
        )

    def k8s_environment_details(self, total_environments: int) -> str:
        included = self.settings.k8s_base_environments_included
        if total_environments <= included:
            return f"{total_environments} environments ({included} included in base)"

        parts: List[str] = [f"{included} included"]
        for tier in sorted(self.settings.k8s_environment_tiers, key=lambda t: t.min):
            if tier.min > total_environments:
                break
            start = max(tier.min, included + 1)
            end = total_environments if tier.is_unlimited else min(tier.max, total_environments)
            count = end - start + 1
            if count <= 0:
                continue
            if tier.unit_price > 0:
                parts.append(f"{count} @ ${tier.unit_price}/env")
            else:
                parts.append(f"{count} free")
        return " + ".join(parts)

    def recommend_resource_pack(
        self,
        tier: MendixResourcePackTier,
        required_memory_gb,
        required_vcpu,
        required_db_storage_gb,
    ) -> Optional[MendixResourcePackSpec]:
        """Cheapest pack in the tier meeting memory, vCPU and database storage needs, if any."""
        candidates = [
            pack for pack in self.settings.available_packs(tier)
            if pack.mx_memory_gb >= to_decimal(required_memory_gb)
            and pack.mx_vcpu >= to_decimal(required_vcpu)
            and pack.db_storage_gb >= to_decimal(required_db_storage_gb)
        ]
        return min(candidates, key=lambda pack: pack.price_per_year, default=None)

    @staticmethod
    def is_supported_provider(provider: MendixPrivateCloudProvider) -> bool:
        return provider in SUPPORTED_PRIVATE_CLOUD_PROVIDERS
