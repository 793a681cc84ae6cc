"""Cart aggregate: the single owner of cart line items.

The cart keeps line items in insertion order and guarantees that no two
items share the same configuration (source, material, color, infill and
layer height). Adding a configuration that is already present merges the
quantities instead of creating a duplicate.

Example:
    >>> from printforge.cart import CartAggregate, CartItemInput
    >>> from printforge.models import ProductRef
    >>> from printforge.profiles import MaterialType, create_material
    >>>
    >>> pla = create_material(MaterialType.PLA)
    >>> vase = ProductRef(id="p1", name="Vase", price=25.0)
    >>> cart = CartAggregate()
    >>> _ = cart.add_item(CartItemInput(source=vase, material=pla, color="Black", quantity=2))
    >>> _ = cart.add_item(CartItemInput(source=vase, material=pla, color="Black", quantity=3))
    >>> len(cart), cart.get_item_count(), cart.get_subtotal()
    (1, 5, 125.0)
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Tuple

from printforge.catalog import MaterialCatalog
from printforge.config import DEFAULT_CONFIG
from printforge.exceptions import (
    CartPayloadError,
    ColorNotFoundError,
    InvalidLineItemError,
    MaterialNotFoundError,
)
from printforge.models.line_item import CartLineItem, identity_key
from printforge.models.material import Material
from printforge.models.source import ItemSource, ProductRef, UploadedModel
from printforge.persistence import CartStorage, decode_items, encode_items
from printforge.quote_calculator import compute_price
from printforge.session import SessionIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartItemInput:
    """
    Request to add a configured product or uploaded model to the cart.

    Attributes:
        source: ProductRef or UploadedModel, exactly one
        material: Material to print in
        color: Color name, one of ``material.colors``
        infill_percentage: Interior fill, 0-100
        layer_height: Layer height in millimeters
        quantity: Copies to add, at least 1
    """

    source: ItemSource
    material: Material
    color: str
    infill_percentage: float = DEFAULT_CONFIG.default_infill_percentage
    layer_height: float = DEFAULT_CONFIG.default_layer_height
    quantity: int = 1

    def __post_init__(self) -> None:
        """Validate the source union, color and quantity."""
        if not isinstance(self.source, (ProductRef, UploadedModel)):
            raise InvalidLineItemError(
                "source must be exactly one of ProductRef or UploadedModel, "
                f"got {type(self.source).__name__}"
            )
        if self.material.color(self.color) is None:
            raise ColorNotFoundError(self.material.id, self.color)
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")


def get_item_price(item: CartLineItem) -> float:
    """
    Price of a line item including its quantity.

    Catalog products cost ``(product.price + color modifier) * quantity``; an
    unknown color contributes no modifier. Uploaded models are priced from
    their reported volume, which already includes any scaling.
    """
    if isinstance(item.source, ProductRef):
        modifier = item.material.color_price_modifier(item.color)
        return (item.source.price + modifier) * item.quantity
    return compute_price(
        item.source.volume_cm3,
        item.material.price_per_cm3,
        item.infill_percentage,
        item.quantity,
    )


class CartAggregate:
    """
    Ordered, deduplicating collection of cart line items.

    All mutation goes through the methods below; :attr:`items` returns an
    immutable snapshot. The open/closed flag is UI state only and is never
    persisted.

    Args:
        items: Initial line items, e.g. rehydrated from storage
        session: Guest session identity stamped on new items
        id_factory: Produces ids for new line items (default: uuid4)
        clock: Produces creation timestamps for new line items
    """

    def __init__(
        self,
        items: Optional[List[CartLineItem]] = None,
        session: Optional[SessionIdentity] = None,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._items: List[CartLineItem] = []
        self._session = session
        self._id_factory = id_factory
        self._clock = clock
        self.is_open = False
        for item in items or []:
            self._insert(item)

    def _insert(self, item: CartLineItem) -> None:
        # Repeated configurations in rehydrated data collapse into the first occurrence
        if any(existing.id == item.id for existing in self._items):
            raise CartPayloadError(f"duplicate line item id: {item.id!r}")
        index = self._find_index(item.identity())
        if index is None:
            self._items.append(item)
        else:
            existing = self._items[index]
            self._items[index] = replace(existing, quantity=existing.quantity + item.quantity)

    def _find_index(self, key: Tuple) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.identity() == key:
                return index
        return None

    def _index_of(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        """Snapshot of line items in insertion order."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartLineItem]:
        return iter(tuple(self._items))

    def get(self, item_id: str) -> Optional[CartLineItem]:
        index = self._index_of(item_id)
        return None if index is None else self._items[index]

    def add_item(self, request: CartItemInput) -> CartLineItem:
        """
        Add a configuration to the cart, merging with an identical one.

        If an item with the same source, material, color, infill and layer
        height exists, its quantity grows by ``request.quantity`` and it keeps
        its id and position. Otherwise a new item is appended. Either way the
        cart is opened.

        Returns:
            The new or updated line item
        """
        key = identity_key(
            request.source,
            request.material.id,
            request.color,
            request.infill_percentage,
            request.layer_height,
        )
        index = self._find_index(key)
        self.is_open = True

        if index is not None:
            existing = self._items[index]
            merged = replace(existing, quantity=existing.quantity + request.quantity)
            self._items[index] = merged
            logger.debug(
                "Merged %d into line item %s (quantity now %d)",
                request.quantity,
                merged.id,
                merged.quantity,
            )
            return merged

        item = CartLineItem(
            id=self._id_factory(),
            source=request.source,
            material=request.material,
            color=request.color,
            infill_percentage=request.infill_percentage,
            layer_height=request.layer_height,
            quantity=request.quantity,
            created_at=self._clock(),
            session_id=self._session.session_id if self._session is not None else None,
        )
        self._items.append(item)
        logger.debug("Added line item %s for %s %s", item.id, item.source.kind, item.source.id)
        return item

    def add_from_catalog(
        self,
        catalog: MaterialCatalog,
        source: ItemSource,
        material_id: str,
        color: str,
        infill_percentage: float = DEFAULT_CONFIG.default_infill_percentage,
        layer_height: float = DEFAULT_CONFIG.default_layer_height,
        quantity: int = 1,
    ) -> Optional[CartLineItem]:
        """
        Resolve a material id and color and add the configuration to the cart.

        An unknown material id, or a color the material does not offer,
        refuses the add: nothing changes and None is returned so the caller
        can show a message.
        """
        try:
            material = catalog.get(material_id)
            catalog.get_color(material_id, color)
        except (MaterialNotFoundError, ColorNotFoundError) as exc:
            logger.warning("Refusing to add %s %s to cart: %s", source.kind, source.id, exc)
            return None
        return self.add_item(
            CartItemInput(
                source=source,
                material=material,
                color=color,
                infill_percentage=infill_percentage,
                layer_height=layer_height,
                quantity=quantity,
            )
        )

    def remove_item(self, item_id: str) -> None:
        """Remove a line item; unknown ids are ignored."""
        index = self._index_of(item_id)
        if index is None:
            return
        del self._items[index]
        logger.debug("Removed line item %s", item_id)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """
        Set a line item's quantity in place.

        A quantity below 1 removes the item, exactly like :meth:`remove_item`.
        Unknown ids are ignored.
        """
        if quantity < 1:
            self.remove_item(item_id)
            return
        index = self._index_of(item_id)
        if index is None:
            return
        self._items[index] = replace(self._items[index], quantity=quantity)

    def update_item(
        self,
        item_id: str,
        material: Optional[Material] = None,
        color: Optional[str] = None,
        infill_percentage: Optional[float] = None,
        layer_height: Optional[float] = None,
        quantity: Optional[int] = None,
    ) -> Optional[CartLineItem]:
        """
        Change a line item's configuration.

        If the new configuration matches another line item, the two are
        merged: the other item's quantity absorbs this one and this item is
        removed, keeping the earlier position. A quantity below 1 removes the
        item.

        Returns:
            The resulting line item, or None if the id is unknown or the item
            was removed

        Raises:
            ColorNotFoundError: If a new material or color leaves the item in a
                color its material does not offer
        """
        index = self._index_of(item_id)
        if index is None:
            return None
        if quantity is not None and quantity < 1:
            self.remove_item(item_id)
            return None

        current = self._items[index]
        updated = replace(
            current,
            material=material if material is not None else current.material,
            color=color if color is not None else current.color,
            infill_percentage=(
                infill_percentage if infill_percentage is not None else current.infill_percentage
            ),
            layer_height=layer_height if layer_height is not None else current.layer_height,
            quantity=quantity if quantity is not None else current.quantity,
        )
        # Stale colors on rehydrated items survive quantity-only edits
        reconfigured = material is not None or color is not None
        if reconfigured and updated.material.color(updated.color) is None:
            raise ColorNotFoundError(updated.material.id, updated.color)

        other_index = next(
            (
                i
                for i, item in enumerate(self._items)
                if i != index and item.identity() == updated.identity()
            ),
            None,
        )
        if other_index is None:
            self._items[index] = updated
            return updated

        other = self._items[other_index]
        total = updated.quantity + other.quantity
        if index < other_index:
            merged = replace(updated, quantity=total)
            self._items[index] = merged
            del self._items[other_index]
        else:
            merged = replace(other, quantity=total)
            self._items[other_index] = merged
            del self._items[index]
        logger.debug("Merged line item %s into %s after update", item_id, merged.id)
        return merged

    def clear(self) -> None:
        """Remove every line item."""
        self._items.clear()

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def get_item_price(self, item: CartLineItem) -> float:
        return get_item_price(item)

    def get_subtotal(self) -> float:
        """Sum of all line item prices."""
        return sum((get_item_price(item) for item in self._items), 0.0)

    def get_item_count(self) -> int:
        """Total number of copies across all line items."""
        return sum(item.quantity for item in self._items)

    def to_payload(self) -> dict:
        """Versioned payload of the line items (visibility is not included)."""
        return encode_items(self._items)

    @classmethod
    def from_payload(cls, payload, **kwargs) -> "CartAggregate":
        """Rebuild a cart from a persisted payload."""
        return cls(items=decode_items(payload), **kwargs)

    def save(self, storage: CartStorage) -> None:
        storage.write(self.to_payload())
        logger.debug("Saved cart with %d line items", len(self._items))

    @classmethod
    def load(cls, storage: CartStorage, **kwargs) -> "CartAggregate":
        """Rehydrate a cart from storage; an empty store gives an empty cart."""
        cart = cls.from_payload(storage.read(), **kwargs)
        logger.debug("Loaded cart with %d line items", len(cart))
        return cart

    def __repr__(self) -> str:
        return f"CartAggregate(items={len(self._items)}, count={self.get_item_count()})"
