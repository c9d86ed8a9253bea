"""
Tests for live price enrichment and its fallback to offline rates.
"""

import asyncio
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, Mock
from infra_pricing.domain.enums import CloudProvider
from infra_pricing.pricing.aws_pricing_client import AWSPricingError
from infra_pricing.pricing.azure_pricing_client import AzurePricingError
from infra_pricing.pricing.live_pricing import LivePricingService


def price_client(side_effect):
    client = Mock()
    client.get_instance_price = AsyncMock(side_effect=side_effect)
    return client


def only_m5_xlarge(instance_type, region):
    return Decimal('0.2') if instance_type == 'm5.xlarge' else None


@pytest.fixture
def aws_model(registry):
    return registry.get_pricing(CloudProvider.AWS, 'us-east-1')


@pytest.mark.asyncio
async def test_disabled_returns_offline_model(aws_model):
    client = price_client(only_m5_xlarge)
    service = LivePricingService(aws_client=client, enabled=False)

    assert await service.refresh(aws_model) is aws_model
    client.get_instance_price.assert_not_awaited()


@pytest.mark.asyncio
async def test_live_prices_merged_into_rate_card(aws_model):
    service = LivePricingService(aws_client=price_client(only_m5_xlarge), enabled=True, timeout=5)

    refreshed = await service.refresh(aws_model)

    assert refreshed.is_live
    assert refreshed.get_instance_price('m5.xlarge') == Decimal('0.2')
    # Types the API could not price keep their offline rate
    assert refreshed.get_instance_price('t3.medium') == Decimal('0.0416')
    assert 'Live' in refreshed.source
    # The offline card is untouched
    assert aws_model.get_instance_price('m5.xlarge') == Decimal('0.192')
    assert not aws_model.is_live


@pytest.mark.asyncio
async def test_rosa_uses_aws_source(registry):
    model = registry.get_pricing(CloudProvider.ROSA)
    client = price_client(only_m5_xlarge)
    service = LivePricingService(aws_client=client, enabled=True, timeout=5)

    refreshed = await service.refresh(model)

    assert refreshed.is_live
    assert refreshed.provider == CloudProvider.ROSA
    client.get_instance_price.assert_awaited()


@pytest.mark.asyncio
async def test_upstream_failure_falls_back(aws_model):
    """Errors after retries leave the offline model in place."""
    client = price_client(AWSPricingError('service unavailable'))
    service = LivePricingService(aws_client=client, enabled=True, timeout=5, max_retries=1, backoff_factor=0)

    assert await service.refresh(aws_model) is aws_model
    # Retried before giving up
    assert client.get_instance_price.await_count >= 2


@pytest.mark.asyncio
async def test_timeout_falls_back(aws_model):
    async def slow(instance_type, region):
        await asyncio.sleep(5)

    service = LivePricingService(aws_client=price_client(slow), enabled=True, timeout=0.05)

    assert await service.refresh(aws_model) is aws_model


@pytest.mark.asyncio
async def test_no_prices_returned_keeps_offline_model(registry):
    model = registry.get_pricing(CloudProvider.AZURE, 'eastus')
    service = LivePricingService(azure_client=price_client(lambda sku, region: None), enabled=True)

    assert await service.refresh(model) is model


@pytest.mark.asyncio
async def test_azure_failure_falls_back(registry):
    model = registry.get_pricing(CloudProvider.AZURE, 'eastus')
    client = price_client(AzurePricingError('HTTP 503'))
    service = LivePricingService(azure_client=client, enabled=True, max_retries=0, backoff_factor=0)

    assert await service.refresh(model) is model


@pytest.mark.asyncio
async def test_provider_without_live_source(registry):
    model = registry.get_pricing(CloudProvider.GCP)
    service = LivePricingService(enabled=True)

    assert not service.supports(CloudProvider.GCP)
    assert await service.refresh(model) is model
