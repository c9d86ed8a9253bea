"""
Optional live price enrichment.
Overlays instance-type prices from provider APIs onto an offline PricingModel, and falls
back to the offline model on any failure or timeout.
"""
import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Optional

from infra_pricing.core.config import config
from infra_pricing.domain.enums import CloudProvider
from infra_pricing.domain.pricing_models import PricingModel
from infra_pricing.pricing.aws_pricing_client import AWSPricingClient, AWSPricingError
from infra_pricing.pricing.azure_pricing_client import AzurePricingClient, AzurePricingError
from infra_pricing.resilience.retry import retry_async


logger = logging.getLogger(__name__)

# Providers (and managed OpenShift on them) that have a live price source
LIVE_SOURCES = MappingProxyType({
    CloudProvider.AWS: CloudProvider.AWS,
    CloudProvider.ROSA: CloudProvider.AWS,
    CloudProvider.AZURE: CloudProvider.AZURE,
    CloudProvider.ARO: CloudProvider.AZURE,
})


class LivePricingError(Exception):
    """Raised when live prices cannot be fetched."""
    pass


class LivePricingService:
    """Fetches current instance prices and merges them into a rate card."""

    def __init__(
        self,
        aws_client: Optional[AWSPricingClient] = None,
        azure_client: Optional[AzurePricingClient] = None,
        enabled: Optional[bool] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
    ):
        self._aws_client = aws_client
        self._azure_client = azure_client
        self.enabled = config.LIVE_PRICING_ENABLED if enabled is None else enabled
        self.timeout = config.LIVE_PRICING_TIMEOUT_SECONDS if timeout is None else timeout
        self.max_retries = config.LIVE_PRICING_MAX_RETRIES if max_retries is None else max_retries
        self.backoff_factor = config.LIVE_PRICING_BACKOFF_SECONDS if backoff_factor is None else backoff_factor

    def supports(self, provider: CloudProvider) -> bool:
        """
        Check whether live prices can be fetched for a provider.

        Args:
            provider: Provider whose rate card would be refreshed

        Returns:
            True if an upstream price API exists for the provider (or for the cloud
            it runs on), False if only the offline rate card is available
        """
        return provider in LIVE_SOURCES

    def _client_for(self, provider: CloudProvider) -> Any:
        """
        Raises:
            LivePricingError: If the provider has no live source or its client cannot be built
        """
        source = LIVE_SOURCES.get(provider)
        if source is CloudProvider.AWS:
            if self._aws_client is None:
                try:
                    self._aws_client = AWSPricingClient()
                except AWSPricingError as error:
                    raise LivePricingError(str(error)) from error
            return self._aws_client
        if source is CloudProvider.AZURE:
            if self._azure_client is None:
                self._azure_client = AzurePricingClient()
            return self._azure_client
        raise LivePricingError(f"No live pricing source for provider: {provider.value}")

    async def fetch_instance_prices(self, model: PricingModel) -> Dict[str, Decimal]:
        """
        Fetch hourly prices for every instance type on the model's rate card.

        Returns:
            Instance type -> hourly price for the types the API could price

        Raises:
            LivePricingError: If the upstream fails after retries
        """
        client = self._client_for(model.provider)

        async def fetch(instance_type: str) -> Optional[Decimal]:
            return await retry_async(
                lambda: client.get_instance_price(instance_type, model.region),
                max_retries=self.max_retries,
                backoff_factor=self.backoff_factor,
                retry_on=(AWSPricingError, AzurePricingError),
                operation_name=f"{model.provider.value} price for {instance_type}",
            )

        names = list(model.compute.instance_type_prices)
        try:
            prices = await asyncio.gather(*(fetch(name) for name in names))
        except (AWSPricingError, AzurePricingError) as error:
            raise LivePricingError(f"Live pricing failed for {model.provider.value}: {error}") from error

        return {name: price for name, price in zip(names, prices) if price is not None}

    async def refresh(self, model: PricingModel) -> PricingModel:
        """
        Return the model with live instance prices, or the model unchanged on failure.

        Bounded by the configured timeout; never raises for upstream failures.
        """
        if not self.enabled or not self.supports(model.provider):
            return model

        try:
            live_prices = await asyncio.wait_for(self.fetch_instance_prices(model), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Live pricing for %s/%s timed out after %.1fs, using offline rates",
                model.provider.value,
                model.region,
                self.timeout,
            )
            return model
        except LivePricingError as error:
            logger.warning("%s, using offline rates", error)
            return model

        if not live_prices:
            logger.warning("Live pricing returned no prices for %s/%s", model.provider.value, model.region)
            return model

        merged = dict(model.compute.instance_type_prices)
        merged.update(live_prices)
        logger.info("Applied %d live prices for %s/%s", len(live_prices), model.provider.value, model.region)
        return replace(
            model,
            compute=replace(model.compute, instance_type_prices=MappingProxyType(merged)),
            is_live=True,
            source=f"Live ({LIVE_SOURCES[model.provider].value} pricing API)",
            last_updated=datetime.utcnow(),
        )
