"""
Azure Retail Prices API client.
Uses the public REST API (no authentication required).
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import httpx

from infra_pricing.core.config import config
from infra_pricing.pricing.price_cache import PriceCache
from infra_pricing.resilience.circuit_breaker import get_circuit_breaker


logger = logging.getLogger(__name__)


class AzurePricingError(Exception):
    """Raised when Azure pricing lookup fails."""
    pass


class AzurePricingClient:
    """Client for querying VM prices from the Azure Retail Prices API."""

    API_BASE_URL = "https://prices.azure.com/api/retail/prices"

    cache = PriceCache(config.PRICING_CACHE_TTL_SECONDS)

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            http_client: Shared AsyncClient; a short-lived client is opened per request when omitted
        """
        self.http_client = http_client
        self.timeout = config.LIVE_PRICING_TIMEOUT_SECONDS
        self.circuit_breaker = get_circuit_breaker("azure_pricing")

    @staticmethod
    def normalize_region(region: str) -> str:
        """
        Normalize a region to its ARM name.

        Args:
            region: Display or ARM name, e.g. "West Europe"

        Returns:
            The ARM region name, e.g. "westeurope"
        """
        return region.lower().replace(" ", "")

    def _filter(self, sku_name: str, region: str) -> str:
        return (
            f"armRegionName eq '{self.normalize_region(region)}' "
            f"and serviceName eq 'Virtual Machines' "
            f"and armSkuName eq '{sku_name}' "
            f"and priceType eq 'Consumption'"
        )

    async def _fetch(self, params: Dict[str, str]) -> Dict[str, Any]:
        if self.http_client is not None:
            response = await self.http_client.get(self.API_BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        async with httpx.AsyncClient() as client:
            response = await client.get(self.API_BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

    @staticmethod
    def select_price(items: list, os_type: str) -> Optional[Decimal]:
        """
        Pick the pay-as-you-go price for an operating system.

        Spot and Low Priority meters are skipped, as are items whose retail price
        is missing, malformed or zero.

        Args:
            items: "Items" array from a Retail Prices API response
            os_type: "Linux" or "Windows"

        Returns:
            The first matching hourly price, or None if no item qualifies
        """
        wanted_windows = os_type.lower() == "windows"
        for item in items:
            product_name = item.get("productName", "")
            meter_name = item.get("meterName", "")
            if "Spot" in meter_name or "Low Priority" in meter_name:
                continue
            if ("Windows" in product_name) != wanted_windows:
                continue
            try:
                price = Decimal(str(item.get("retailPrice", "0")))
            except InvalidOperation:
                continue
            if price > 0:
                return price
        return None

    async def get_instance_price(self, sku_name: str, region: str, os_type: str = "Linux") -> Optional[Decimal]:
        """
        Get the hourly price of an Azure VM size.

        Args:
            sku_name: ARM SKU (e.g., 'Standard_D4s_v5')
            region: Azure region (e.g., 'westeurope')
            os_type: 'Linux' or 'Windows'

        Returns:
            Hourly price in USD, or None when no meter matches

        Raises:
            AzurePricingError: If the breaker is open or the API call fails
        """
        cache_key = f"{self.normalize_region(region)}:{sku_name}:{os_type}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        if not self.circuit_breaker.allow_request():
            raise AzurePricingError("Azure pricing service temporarily unavailable (circuit breaker open)")

        try:
            data = await self._fetch({"$filter": self._filter(sku_name, region)})
            price = self.select_price(data.get("Items", []), os_type)
        except httpx.HTTPStatusError as error:
            self.circuit_breaker.record_failure()
            logger.error("Azure pricing API HTTP error: %s", error)
            raise AzurePricingError(f"Failed to query Azure pricing: {error.response.status_code}") from error
        except httpx.RequestError as error:
            self.circuit_breaker.record_failure()
            logger.error("Azure pricing API request error: %s", error)
            raise AzurePricingError(f"Failed to connect to Azure pricing API: {error}") from error
        except (ValueError, KeyError) as error:
            self.circuit_breaker.record_failure()
            logger.error("Error parsing Azure pricing response: %s", error)
            raise AzurePricingError(f"Failed to parse Azure pricing response: {error}") from error

        self.circuit_breaker.record_success()
        if price is not None:
            self.cache.put(cache_key, price)
        return price
