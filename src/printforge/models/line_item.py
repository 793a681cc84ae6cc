"""Cart line item model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from printforge.exceptions import InvalidLineItemError
from printforge.models.material import Material
from printforge.models.source import ItemSource, ProductRef, UploadedModel

# (source kind, source id, material id, color, infill %, layer height)
IdentityKey = Tuple[str, str, str, str, float, float]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def identity_key(
    source: ItemSource,
    material_id: str,
    color: str,
    infill_percentage: float,
    layer_height: float,
) -> IdentityKey:
    """Build the configuration tuple that decides whether two items merge."""
    return (source.kind, source.id, material_id, color, infill_percentage, layer_height)


@dataclass(frozen=True)
class CartLineItem:
    """One configured entry in the cart.

    A line item is made from exactly one source, either a catalog product or
    an uploaded model. Items are immutable; the cart replaces an item with an
    updated copy (same id) when its quantity or configuration changes.

    Attributes:
        id: Opaque unique identifier
        source: ProductRef or UploadedModel
        material: Material the item is printed in
        color: Color name chosen from ``material.colors``; a rehydrated item
            may carry a color the material no longer offers
        infill_percentage: Interior fill, 0-100
        layer_height: Layer height in millimeters
        quantity: Number of copies, at least 1
        created_at: When the item was first added
        session_id: Opaque guest session identifier, if any
    """

    id: str
    source: ItemSource
    material: Material
    color: str
    infill_percentage: float
    layer_height: float
    quantity: int
    created_at: datetime = field(default_factory=_utcnow)
    session_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the source union and print settings."""
        if not isinstance(self.source, (ProductRef, UploadedModel)):
            raise InvalidLineItemError(
                "source must be exactly one of ProductRef or UploadedModel, "
                f"got {type(self.source).__name__}"
            )
        if not 0 <= self.infill_percentage <= 100:
            raise ValueError(
                f"infill_percentage must be between 0 and 100, got {self.infill_percentage}"
            )
        if self.layer_height <= 0:
            raise ValueError(f"layer_height must be positive, got {self.layer_height}")
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")

    @property
    def material_id(self) -> str:
        return self.material.id

    @property
    def product(self) -> Optional[ProductRef]:
        """The catalog product, or None for uploaded models."""
        return self.source if isinstance(self.source, ProductRef) else None

    @property
    def uploaded_model(self) -> Optional[UploadedModel]:
        """The uploaded model, or None for catalog products."""
        return self.source if isinstance(self.source, UploadedModel) else None

    def identity(self) -> IdentityKey:
        return identity_key(
            self.source, self.material.id, self.color, self.infill_percentage, self.layer_height
        )
