"""
AWS Price List API client.
Uses boto3 to look up on-demand EC2 prices for the instance types on the AWS rate card.
"""
import asyncio
import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

try:
    import boto3
    from botocore.config import Config as BotoConfig
    from botocore.exceptions import BotoCoreError, ClientError
except ImportError:
    boto3 = None
    BotoConfig = None

from infra_pricing.core.config import config
from infra_pricing.domain.enums import CloudProvider
from infra_pricing.pricing.price_cache import PriceCache
from infra_pricing.pricing.rate_tables import RATE_CARDS
from infra_pricing.resilience.circuit_breaker import get_circuit_breaker


logger = logging.getLogger(__name__)


class AWSPricingError(Exception):
    """Raised when AWS pricing lookup fails."""
    pass


def pricing_location(region: str) -> Optional[str]:
    """
    Map a region code to the Price List 'location' attribute.

    Args:
        region: AWS region code, e.g. "us-east-1" (case-insensitive)

    Returns:
        The location name, e.g. "US East (N. Virginia)", or None for an unknown region
    """
    for info in RATE_CARDS[CloudProvider.AWS].regions:
        if info.code == region.lower():
            return info.display_name
    return None


def parse_on_demand_price(price_item: str) -> Optional[Decimal]:
    """
    Extract the first on-demand USD unit price from a Price List JSON document.

    Zero-priced dimensions (free tiers, placeholders) are skipped.

    Args:
        price_item: One entry of the PriceList array returned by get_products

    Returns:
        The hourly price, or None if the document has no positive on-demand USD price

    Raises:
        ValueError: If the document is not valid JSON or a USD price is not a number
    """
    document = json.loads(price_item)
    for term in document.get("terms", {}).get("OnDemand", {}).values():
        for dimension in term.get("priceDimensions", {}).values():
            usd = dimension.get("pricePerUnit", {}).get("USD")
            if usd is None:
                continue
            try:
                price = Decimal(usd)
            except InvalidOperation as error:
                raise ValueError(f"Invalid USD price: {usd}") from error
            if price > 0:
                return price
    return None


class AWSPricingClient:
    """Client for querying EC2 on-demand prices using boto3."""

    cache = PriceCache(config.PRICING_CACHE_TTL_SECONDS)

    def __init__(self, pricing_client: Any = None):
        """
        Initialize the client.

        Args:
            pricing_client: Preconfigured boto3 'pricing' client; created when omitted

        Raises:
            AWSPricingError: If boto3 is not installed and no client was supplied
        """
        if pricing_client is None:
            if boto3 is None:
                raise AWSPricingError("boto3 is required for AWS pricing. Install with: pip install boto3")
            pricing_client = boto3.client(
                "pricing",
                region_name=config.AWS_PRICING_REGION,
                config=BotoConfig(
                    connect_timeout=config.LIVE_PRICING_TIMEOUT_SECONDS,
                    read_timeout=config.LIVE_PRICING_TIMEOUT_SECONDS,
                    retries={"max_attempts": 0},  # retried by LivePricingService
                ),
            )
        self.pricing_client = pricing_client
        self.circuit_breaker = get_circuit_breaker("aws_pricing")

    def _filters(self, instance_type: str, location: str, operating_system: str) -> list:
        return [
            {"Type": "TERM_MATCH", "Field": "instanceType", "Value": instance_type},
            {"Type": "TERM_MATCH", "Field": "location", "Value": location},
            {"Type": "TERM_MATCH", "Field": "operatingSystem", "Value": operating_system},
            {"Type": "TERM_MATCH", "Field": "tenancy", "Value": "Shared"},
            {"Type": "TERM_MATCH", "Field": "preInstalledSw", "Value": "NA"},
            {"Type": "TERM_MATCH", "Field": "capacitystatus", "Value": "Used"},
        ]

    async def get_instance_price(
        self,
        instance_type: str,
        region: str,
        operating_system: str = "Linux",
    ) -> Optional[Decimal]:
        """
        Get the hourly on-demand price of an EC2 instance type.

        Args:
            instance_type: EC2 instance type (e.g., 'm5.xlarge')
            region: AWS region code (e.g., 'eu-west-1')
            operating_system: OS filter (default: 'Linux')

        Returns:
            Hourly price in USD, or None when the API has no matching product

        Raises:
            AWSPricingError: If the breaker is open or the API call fails
        """
        location = pricing_location(region)
        if location is None:
            logger.warning("AWS region '%s' has no Price List location", region)
            return None

        cache_key = f"AmazonEC2:{instance_type}:{region}:{operating_system}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        if not self.circuit_breaker.allow_request():
            raise AWSPricingError("AWS pricing service temporarily unavailable (circuit breaker open)")

        try:
            response: Dict[str, Any] = await asyncio.to_thread(
                self.pricing_client.get_products,
                ServiceCode="AmazonEC2",
                Filters=self._filters(instance_type, location, operating_system),
                MaxResults=1,
            )
            price_list = response.get("PriceList") or []
            price = parse_on_demand_price(price_list[0]) if price_list else None
        except ClientError as error:
            self.circuit_breaker.record_failure()
            logger.error("AWS pricing API error: %s", error)
            raise AWSPricingError(f"Failed to query AWS pricing: {error}") from error
        except (BotoCoreError, ValueError, KeyError) as error:
            self.circuit_breaker.record_failure()
            logger.error("Error parsing AWS pricing response: %s", error)
            raise AWSPricingError(f"Failed to parse AWS pricing response: {error}") from error

        # No matching product is not an upstream failure
        self.circuit_breaker.record_success()
        if price is not None:
            self.cache.put(cache_key, price)
        return price
