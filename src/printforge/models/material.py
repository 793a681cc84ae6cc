"""Material reference data for quoting and cart pricing."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MaterialColor:
    """A color option offered for a material.

    Attributes:
        name: Color name, unique within its material (e.g., "Black")
        hex: Display color as a hex string (e.g., "#1a1a1a")
        premium: Whether the color is a premium option
        price_modifier: Flat amount added to a catalog product's unit price
    """

    name: str
    hex: str = "#000000"
    premium: bool = False
    price_modifier: float = 0.0

    def __post_init__(self) -> None:
        """Validate that price_modifier is non-negative."""
        if self.price_modifier < 0:
            raise ValueError(f"price_modifier must be non-negative, got {self.price_modifier}")


@dataclass(frozen=True)
class Material:
    """Printable material with its volumetric price and color options.

    Note:
        Materials are read-only reference data. Line items and quotes hold a
        reference to one but never modify it.

    Attributes:
        id: Catalog identifier
        name: Display name (e.g., "PLA")
        price_per_cm3: Price of one cubic centimeter of solid material
        colors: Ordered color options; names are unique within the material
        min_layer_height: Finest supported layer height in millimeters
        max_layer_height: Coarsest supported layer height in millimeters
    """

    id: str
    name: str
    price_per_cm3: float
    colors: Tuple[MaterialColor, ...] = ()
    min_layer_height: float = 0.1
    max_layer_height: float = 0.3
    slug: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        """Validate price, layer heights and color name uniqueness."""
        if self.price_per_cm3 <= 0:
            raise ValueError(f"price_per_cm3 must be positive, got {self.price_per_cm3}")
        if self.min_layer_height <= 0:
            raise ValueError(f"min_layer_height must be positive, got {self.min_layer_height}")
        if self.max_layer_height < self.min_layer_height:
            raise ValueError(
                f"max_layer_height must be >= min_layer_height, "
                f"got {self.max_layer_height} < {self.min_layer_height}"
            )
        # Accept any iterable of colors but store a tuple to stay hashable
        object.__setattr__(self, "colors", tuple(self.colors))
        names = [color.name for color in self.colors]
        if len(names) != len(set(names)):
            raise ValueError(f"color names must be unique within a material, got {names}")

    def color(self, name: str) -> Optional[MaterialColor]:
        """Return the color with the given name, or None if it is not offered."""
        for color in self.colors:
            if color.name == name:
                return color
        return None

    def color_price_modifier(self, name: str) -> float:
        """Price modifier for a color name; 0.0 for unknown or renamed colors."""
        color = self.color(name)
        return color.price_modifier if color is not None else 0.0

    def supports_layer_height(self, layer_height: float) -> bool:
        """Check whether a layer height is within this material's range."""
        return self.min_layer_height <= layer_height <= self.max_layer_height
