"""Price and lead-time calculation for instant quotes.

The price model is linear: infill scales the material actually consumed and
quantity multiplies the result. Scaling a model is the one non-linear step,
since volume grows with the cube of the linear scale factor.

Example:
    >>> from printforge.profiles import MaterialType, create_material
    >>> pla = create_material(MaterialType.PLA)
    >>> result = quote(QuoteInput(volume_cm3=50.0, material=pla, infill_percentage=20))
    >>> round(result.price, 4), result.lead_time_days
    (0.5, 3)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from printforge.config import DEFAULT_CONFIG, PricingConfig
from printforge.models.material import Material

VALID_MODEL_EXTENSIONS = ("stl", "obj", "3mf", "step", "stp")


class LeadTimePriority(Enum):
    """Production priority used for lead-time estimates."""

    STANDARD = "standard"
    EXPRESS = "express"


def compute_price(
    volume_cm3: float,
    price_per_cm3: float,
    infill_percentage: float = DEFAULT_CONFIG.default_infill_percentage,
    quantity: int = 1,
) -> float:
    """Calculate the material price of printing a model.

    Inputs are trusted: out-of-range values produce a deterministic result
    (a negative volume gives a negative price) rather than an error.

    Args:
        volume_cm3: Model volume in cm³, already scaled
        price_per_cm3: Material price per cm³ of solid material
        infill_percentage: Interior fill, 0-100
        quantity: Number of copies

    Returns:
        Total price for all copies

    Examples:
        >>> compute_price(50.0, 0.05, 20, 1)
        0.5
    """
    effective_volume = volume_cm3 * (infill_percentage / 100)
    return effective_volume * price_per_cm3 * quantity


def scale_volume(volume_cm3: float, scale_percentage: float = 100.0) -> float:
    """Scale a volume by a percentage of the model's linear size.

    Examples:
        >>> scale_volume(50.0, 150)
        168.75
        >>> scale_volume(10.0, 200)
        80.0
    """
    return volume_cm3 * (scale_percentage / 100) ** 3


def compute_lead_time_days(
    volume_cm3: float,
    quantity: int = 1,
    priority: LeadTimePriority = LeadTimePriority.STANDARD,
    config: PricingConfig = DEFAULT_CONFIG,
) -> int:
    """Estimate production lead time in business days.

    Print hours are ``ceil(volume / 10) * quantity`` and are packed into
    24-hour days. Standard orders add a two-day buffer; express orders halve
    the print days and never drop below one day.

    Args:
        volume_cm3: Model volume in cm³, already scaled
        quantity: Number of copies
        priority: STANDARD or EXPRESS
        config: Pricing configuration providing the throughput constants

    Returns:
        Lead time in whole days (at least 1)

    Examples:
        >>> compute_lead_time_days(100.0, 1)
        3
        >>> compute_lead_time_days(100.0, 1, LeadTimePriority.EXPRESS)
        1
    """
    base_hours = math.ceil(volume_cm3 / config.cm3_per_print_hour) * quantity
    base_days = math.ceil(base_hours / config.print_hours_per_day)
    if priority == LeadTimePriority.EXPRESS:
        return max(1, math.ceil(base_days / 2))
    return base_days + config.standard_lead_time_buffer_days


@dataclass(frozen=True)
class QuoteInput:
    """Configuration to price.

    Attributes:
        volume_cm3: Unscaled model volume in cm³
        material: Material to print in
        infill_percentage: Interior fill, 0-100
        layer_height: Layer height in millimeters
        scale_percentage: Linear scale, 100 means original size
        quantity: Number of copies
    """

    volume_cm3: float
    material: Material
    infill_percentage: float = DEFAULT_CONFIG.default_infill_percentage
    layer_height: float = DEFAULT_CONFIG.default_layer_height
    scale_percentage: float = 100.0
    quantity: int = 1

    def __post_init__(self) -> None:
        """Validate the quote parameters."""
        if self.volume_cm3 <= 0:
            raise ValueError(f"volume_cm3 must be positive, got {self.volume_cm3}")
        if not 0 <= self.infill_percentage <= 100:
            raise ValueError(
                f"infill_percentage must be between 0 and 100, got {self.infill_percentage}"
            )
        if self.layer_height <= 0:
            raise ValueError(f"layer_height must be positive, got {self.layer_height}")
        if self.scale_percentage <= 0:
            raise ValueError(f"scale_percentage must be positive, got {self.scale_percentage}")
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")

    @property
    def scaled_volume_cm3(self) -> float:
        return scale_volume(self.volume_cm3, self.scale_percentage)


@dataclass(frozen=True)
class QuoteResult:
    """Price and lead time for one configuration."""

    price: float
    lead_time_days: int
    scaled_volume_cm3: float


def quote(
    request: QuoteInput,
    priority: LeadTimePriority = LeadTimePriority.STANDARD,
    config: PricingConfig = DEFAULT_CONFIG,
) -> QuoteResult:
    """Price a quote request.

    The scale is applied to the volume first, then the scaled volume drives
    both price and lead time. Results are never cached; call again whenever
    the request changes.
    """
    scaled = request.scaled_volume_cm3
    price = compute_price(
        scaled, request.material.price_per_cm3, request.infill_percentage, request.quantity
    )
    lead_time = compute_lead_time_days(scaled, request.quantity, priority, config)
    return QuoteResult(price=price, lead_time_days=lead_time, scaled_volume_cm3=scaled)


def quote_total(results: Iterable[QuoteResult]) -> Tuple[float, int]:
    """Combine quotes for several files.

    Returns:
        Tuple of (total price, longest lead time). Both are 0 for no quotes.
    """
    total_price = 0.0
    max_lead_time = 0
    for result in results:
        total_price += result.price
        max_lead_time = max(max_lead_time, result.lead_time_days)
    return total_price, max_lead_time


def is_valid_model_file(filename: str) -> bool:
    """Check whether a file name has a printable model extension.

    Examples:
        >>> is_valid_model_file("bracket.STL")
        True
        >>> is_valid_model_file("notes.txt")
        False
    """
    _, dot, extension = filename.rpartition(".")
    if not dot:
        return False
    return extension.lower() in VALID_MODEL_EXTENSIONS
