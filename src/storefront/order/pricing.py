"""Order pricing policy.

Tax and shipping rules live behind ``PricingPolicy`` so checkout does not
depend on them. ``get_pricing()`` / ``set_pricing()`` swap implementations:
- StandardPricing, configured from the environment, by default
- any other policy in tests
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_TAX_RATE = 0.02


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: float
    tax: float
    shipping: float

    @property
    def total(self) -> float:
        return round(self.subtotal + self.tax + self.shipping, 2)


class PricingPolicy(ABC):
    @abstractmethod
    def quote(self, subtotal: float) -> PriceBreakdown:
        """Price an order whose lines add up to ``subtotal``."""
        ...


class StandardPricing(PricingPolicy):
    """Percentage tax plus a flat shipping fee, waived above an optional threshold."""

    def __init__(
        self,
        tax_rate: float = DEFAULT_TAX_RATE,
        shipping_fee: float = 0.0,
        free_shipping_threshold: float | None = None,
    ) -> None:
        self.tax_rate = tax_rate
        self.shipping_fee = shipping_fee
        self.free_shipping_threshold = free_shipping_threshold

    @classmethod
    def from_env(cls) -> "StandardPricing":
        threshold = os.getenv("FREE_SHIPPING_THRESHOLD")
        return cls(
            tax_rate=float(os.getenv("TAX_RATE", DEFAULT_TAX_RATE)),
            shipping_fee=float(os.getenv("SHIPPING_FLAT", "0")),
            free_shipping_threshold=float(threshold) if threshold else None,
        )

    def quote(self, subtotal: float) -> PriceBreakdown:
        subtotal = round(subtotal, 2)
        shipping = self.shipping_fee
        if self.free_shipping_threshold is not None and subtotal >= self.free_shipping_threshold:
            shipping = 0.0
        return PriceBreakdown(
            subtotal=subtotal,
            tax=round(subtotal * self.tax_rate, 2),
            shipping=round(shipping, 2),
        )


_current_pricing: PricingPolicy | None = None


def get_pricing() -> PricingPolicy:
    global _current_pricing
    if _current_pricing is None:
        _current_pricing = StandardPricing.from_env()
    return _current_pricing


def set_pricing(policy: PricingPolicy) -> None:
    """Override the active pricing policy (useful for tests)."""
    global _current_pricing
    _current_pricing = policy


def reset_pricing() -> None:
    global _current_pricing
    _current_pricing = None
