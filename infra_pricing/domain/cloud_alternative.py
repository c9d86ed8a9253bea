"""
Managed-cloud offering that can replace an on-prem distribution.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from infra_pricing.domain.enums import CloudProvider, Distribution


@dataclass(frozen=True)
class CloudAlternative:
    """
    One managed offering. Shared catalogs hold these; tagging a generic entry with a source
    distribution produces a copy.
    """
    provider: CloudProvider
    name: str
    service_name: str
    description: str = ""
    is_distribution_specific: bool = False
    source_distribution: Optional[Distribution] = None
    is_recommended: bool = False
    documentation_url: Optional[str] = None
    features: Tuple[str, ...] = ()
    considerations: Tuple[str, ...] = ()

    def tagged(self, distribution: Distribution, *considerations: str) -> "CloudAlternative":
        """Copy annotated with the distribution it replaces, plus extra considerations."""
        return replace(
            self,
            source_distribution=distribution,
            considerations=self.considerations + considerations,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "provider": self.provider.value,
            "name": self.name,
            "service_name": self.service_name,
            "description": self.description,
            "is_distribution_specific": self.is_distribution_specific,
            "source_distribution": self.source_distribution.value if self.source_distribution else None,
            "is_recommended": self.is_recommended,
            "documentation_url": self.documentation_url,
            "features": list(self.features),
            "considerations": list(self.considerations),
        }
