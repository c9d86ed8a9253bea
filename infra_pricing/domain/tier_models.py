"""
Quantity band used by tiered pricing rules.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

UNLIMITED = -1


@dataclass(frozen=True)
class Tier:
    """Inclusive quantity band [min, max] billed at unit_price per unit. max=-1 means unbounded."""
    min: int
    max: int
    unit_price: Decimal

    def __post_init__(self):
        if self.min < 1:
            raise ValueError(f"Tier minimum must be at least 1 (got: {self.min})")
        if self.max != UNLIMITED and self.max < self.min:
            raise ValueError(f"Tier maximum {self.max} is below minimum {self.min}")

    @property
    def is_unlimited(self) -> bool:
        return self.max == UNLIMITED

    def label(self) -> str:
        if self.is_unlimited:
            return f"{self.min}+"
        return f"{self.min}-{self.max}"

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max, "unit_price": float(self.unit_price)}
