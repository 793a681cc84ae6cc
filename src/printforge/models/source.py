"""What a cart line item is made from: a catalog product or an uploaded model.

A line item's source is a tagged union with exactly two cases. Both cases
carry a ``kind`` tag so identity tuples and persisted payloads can tell them
apart without inspecting optional fields.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

PRODUCT_KIND = "product"
UPLOADED_MODEL_KIND = "uploaded_model"


@dataclass(frozen=True)
class Dimensions:
    """Bounding box of a model in centimeters."""

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        """Validate that all dimensions are positive."""
        for axis in ("x", "y", "z"):
            value = getattr(self, axis)
            if value <= 0:
                raise ValueError(f"{axis} must be positive, got {value}")

    def scaled(self, factor: float) -> "Dimensions":
        """Return dimensions multiplied by a linear scale factor."""
        return Dimensions(x=self.x * factor, y=self.y * factor, z=self.z * factor)

    def bounding_volume(self) -> float:
        """Volume of the bounding box in cm³."""
        return self.x * self.y * self.z


@dataclass(frozen=True)
class ProductRef:
    """Reference to a pre-made catalog product.

    Attributes:
        id: Catalog product identifier
        name: Display name
        price: Base unit price before color modifiers
        images: Image URLs, primary image first
    """

    id: str
    name: str
    price: float
    images: Tuple[str, ...] = ()
    kind: str = field(default=PRODUCT_KIND, init=False)

    def __post_init__(self) -> None:
        """Validate the base price."""
        if self.price < 0:
            raise ValueError(f"price must be non-negative, got {self.price}")
        object.__setattr__(self, "images", tuple(self.images))


@dataclass(frozen=True)
class UploadedModel:
    """A customer-uploaded model as reported by the model analyzer.

    Note:
        ``volume_cm3`` is the volume the cart prices. When a customer scales
        the model, use :meth:`scaled` before adding it to the cart so the
        scale is baked into the reported volume exactly once.

    Attributes:
        id: Uploaded model identifier
        file_name: Original file name
        volume_cm3: Solid volume of the model in cm³
        dimensions: Bounding box in centimeters
    """

    id: str
    file_name: str
    volume_cm3: float
    dimensions: Dimensions
    kind: str = field(default=UPLOADED_MODEL_KIND, init=False)

    def __post_init__(self) -> None:
        """Validate the model volume."""
        if self.volume_cm3 < 0:
            raise ValueError(f"volume_cm3 must be non-negative, got {self.volume_cm3}")

    def scaled(self, scale_percentage: float) -> "UploadedModel":
        """Return a copy scaled by a percentage of its linear size.

        Linear dimensions scale by ``s`` and volume scales by ``s³``.

        Examples:
            >>> model = UploadedModel("m1", "part.stl", 50.0, Dimensions(2.0, 5.0, 5.0))
            >>> model.scaled(150).volume_cm3
            168.75
        """
        if scale_percentage <= 0:
            raise ValueError(f"scale_percentage must be positive, got {scale_percentage}")
        factor = scale_percentage / 100
        return UploadedModel(
            id=self.id,
            file_name=self.file_name,
            volume_cm3=self.volume_cm3 * factor**3,
            dimensions=self.dimensions.scaled(factor),
        )


ItemSource = Union[ProductRef, UploadedModel]
