"""Canonical pricing constants.

Every threshold and rate used by quoting and checkout lives here so the cart,
the cart panel and checkout all agree on one value.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

ENV_PREFIX = "PRINTFORGE_"


def _default_shipping_fees() -> Dict[str, float]:
    return {
        "standard": 9.99,
        "express": 19.99,
        "overnight": 39.99,
    }


@dataclass(frozen=True)
class PricingConfig:
    """Pricing and checkout configuration.

    Attributes:
        free_shipping_threshold: Discounted subtotal at which every
            shipping method becomes free
        tax_rate: Tax as a fraction of the discounted subtotal
        shipping_fees: Flat shipping fee per shipping method
        default_infill_percentage: Infill used when none is given
        default_layer_height: Layer height used when none is given (mm)
        cm3_per_print_hour: Volume printed per machine hour
        print_hours_per_day: Machine hours available per business day
        standard_lead_time_buffer_days: Days added to standard lead times
    """

    free_shipping_threshold: float = 75.0
    tax_rate: float = 0.10
    shipping_fees: Mapping[str, float] = field(default_factory=_default_shipping_fees)
    default_infill_percentage: float = 20.0
    default_layer_height: float = 0.2
    cm3_per_print_hour: float = 10.0
    print_hours_per_day: float = 24.0
    standard_lead_time_buffer_days: int = 2

    def __post_init__(self) -> None:
        """Validate rates and thresholds."""
        if self.free_shipping_threshold < 0:
            raise ValueError(
                f"free_shipping_threshold must be non-negative, got {self.free_shipping_threshold}"
            )
        if not 0 <= self.tax_rate <= 1:
            raise ValueError(f"tax_rate must be between 0 and 1, got {self.tax_rate}")
        if self.cm3_per_print_hour <= 0:
            raise ValueError(f"cm3_per_print_hour must be positive, got {self.cm3_per_print_hour}")
        if self.print_hours_per_day <= 0:
            raise ValueError(
                f"print_hours_per_day must be positive, got {self.print_hours_per_day}"
            )
        for method, fee in self.shipping_fees.items():
            if fee < 0:
                raise ValueError(f"shipping fee for {method!r} must be non-negative, got {fee}")
        object.__setattr__(self, "shipping_fees", dict(self.shipping_fees))

    def shipping_fee(self, method: str) -> float:
        """Flat fee for a shipping method.

        Raises:
            ValueError: If the method is not configured
        """
        try:
            return self.shipping_fees[method]
        except KeyError:
            raise ValueError(f"Unsupported shipping method: {method!r}") from None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PricingConfig":
        """Build a config from ``PRINTFORGE_*`` environment variables.

        Recognized variables: ``PRINTFORGE_FREE_SHIPPING_THRESHOLD``,
        ``PRINTFORGE_TAX_RATE`` and ``PRINTFORGE_SHIPPING_FEE_<METHOD>``.
        Anything unset keeps its default.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        fees = dict(defaults.shipping_fees)
        fee_prefix = f"{ENV_PREFIX}SHIPPING_FEE_"
        for key, value in env.items():
            if key.startswith(fee_prefix):
                fees[key[len(fee_prefix):].lower()] = float(value)
        return cls(
            free_shipping_threshold=float(
                env.get(f"{ENV_PREFIX}FREE_SHIPPING_THRESHOLD", defaults.free_shipping_threshold)
            ),
            tax_rate=float(env.get(f"{ENV_PREFIX}TAX_RATE", defaults.tax_rate)),
            shipping_fees=fees,
        )


DEFAULT_CONFIG = PricingConfig()
