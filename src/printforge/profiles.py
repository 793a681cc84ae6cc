"""Material and coupon presets for the default storefront catalog."""

from enum import Enum
from typing import Tuple

from printforge.models.coupon import Coupon
from printforge.models.material import Material, MaterialColor


class MaterialType(Enum):
    """Materials offered when no catalog provider is available."""

    PLA = "pla"  # Eco-friendly, beginner-friendly
    PETG = "petg"  # Strong, water-resistant
    RESIN = "resin"  # Ultra-detailed, smooth finish


class CouponCode(Enum):
    """Demonstration coupon codes accepted at checkout."""

    WELCOME10 = "WELCOME10"  # 10% off
    FIRST20 = "FIRST20"  # 20% off


_BLACK = MaterialColor(name="Black", hex="#1a1a1a")
_WHITE = MaterialColor(name="White", hex="#ffffff")
_BLUE = MaterialColor(name="Blue", hex="#3b82f6")


def create_material(material_type: MaterialType) -> Material:
    """
    Create a Material from a predefined material type.

    Each preset matches the storefront's fallback catalog:
    - PLA: cheapest, five standard colors
    - PETG: mid-priced, includes a clear option
    - RESIN: most expensive, finest layer heights, premium clear color

    Args:
        material_type: Material type to use

    Returns:
        Material with id, price and colors for the selected type

    Examples:
        >>> pla = create_material(MaterialType.PLA)
        >>> print(f"{pla.name}: {pla.price_per_cm3}/cm³")
        PLA: 0.05/cm³

        >>> resin = create_material(MaterialType.RESIN)
        >>> resin.color_price_modifier("Clear")
        5.0
    """
    if material_type == MaterialType.PLA:
        return Material(
            id="1",
            name="PLA",
            slug="pla",
            description="Eco-friendly, beginner-friendly",
            price_per_cm3=0.05,
            colors=(
                _BLACK,
                _WHITE,
                MaterialColor(name="Red", hex="#ef4444"),
                _BLUE,
                MaterialColor(name="Green", hex="#22c55e"),
            ),
            min_layer_height=0.1,
            max_layer_height=0.3,
        )
    elif material_type == MaterialType.PETG:
        return Material(
            id="2",
            name="PETG",
            slug="petg",
            description="Strong, water-resistant",
            price_per_cm3=0.07,
            colors=(
                _BLACK,
                MaterialColor(name="Clear", hex="#e5e7eb"),
                _BLUE,
            ),
            min_layer_height=0.1,
            max_layer_height=0.3,
        )
    elif material_type == MaterialType.RESIN:
        return Material(
            id="3",
            name="Resin",
            slug="resin",
            description="Ultra-detailed, smooth finish",
            price_per_cm3=0.12,
            colors=(
                MaterialColor(name="Grey", hex="#6b7280"),
                _WHITE,
                _BLACK,
                MaterialColor(name="Clear", hex="#e5e7eb", premium=True, price_modifier=5.0),
            ),
            min_layer_height=0.025,
            max_layer_height=0.1,
        )
    else:
        raise ValueError(f"Unknown material type: {material_type}")


def create_coupon(code: CouponCode) -> Coupon:
    """
    Create a Coupon from a predefined code.

    Examples:
        >>> create_coupon(CouponCode.FIRST20).discount_percentage
        20.0
    """
    if code == CouponCode.WELCOME10:
        return Coupon(code=code.value, discount_percentage=10.0)
    elif code == CouponCode.FIRST20:
        return Coupon(code=code.value, discount_percentage=20.0)
    else:
        raise ValueError(f"Unknown coupon code: {code}")


def default_materials() -> Tuple[Material, ...]:
    """All preset materials in catalog order."""
    return tuple(create_material(material_type) for material_type in MaterialType)


def default_coupons() -> Tuple[Coupon, ...]:
    """All preset coupons."""
    return tuple(create_coupon(code) for code in CouponCode)
