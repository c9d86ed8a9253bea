"""
Shared pytest fixtures for pricing engine tests.
"""

import sys
import os
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Offline, deterministic pricing for tests
os.environ.setdefault('LIVE_PRICING_ENABLED', 'false')
os.environ.setdefault('INCLUDE_PRICING_IN_RESULTS', 'true')
os.environ.setdefault('DEFAULT_CURRENCY', 'USD')

import pytest
from fastapi.testclient import TestClient
from infra_pricing.domain.cluster_models import ClusterSpec, EnvironmentResources
from infra_pricing.domain.enums import CloudProvider, Distribution, EnvironmentType
from infra_pricing.main import app
from infra_pricing.pricing.registry import build_default_registry
from infra_pricing.resilience.circuit_breaker import reset_circuit_breakers


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def registry():
    """Freshly built pricing registry."""
    return build_default_registry()


@pytest.fixture(autouse=True)
def clean_circuit_breakers():
    """Breakers are process-wide; start every test closed."""
    reset_circuit_breakers()
    yield
    reset_circuit_breakers()


@pytest.fixture
def small_cluster():
    """A 3-node dev + 5-node prod cluster."""
    return ClusterSpec(
        provider=CloudProvider.AWS,
        distribution=Distribution.EKS,
        environments={
            EnvironmentType.DEV: EnvironmentResources(nodes=3, cpu_per_node=4, ram_gb_per_node=16),
            EnvironmentType.PROD: EnvironmentResources(nodes=5, cpu_per_node=8, ram_gb_per_node=32),
        },
        region='us-east-1',
    )
