"""Serialization of cart line items and pluggable payload storage.

Persisted payloads are versioned::

    {"version": 1, "items": [{...line item...}, ...]}

Carts written by the earlier storefront are still accepted on read, either
as the browser store's envelope ``{"state": {"items": [...]}, "version": 0}``
or as a bare list of items. Line items are stored with their full material
and source records, so a cart can be rehydrated without consulting the
material catalog.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from printforge.exceptions import CartPayloadError, UnsupportedPayloadVersion
from printforge.models.line_item import CartLineItem
from printforge.models.material import Material, MaterialColor
from printforge.models.source import (
    PRODUCT_KIND,
    UPLOADED_MODEL_KIND,
    Dimensions,
    ItemSource,
    ProductRef,
    UploadedModel,
)

logger = logging.getLogger(__name__)

PAYLOAD_VERSION = 1

# Version the earlier storefront's browser store stamps on its envelope
LEGACY_STORE_VERSION = 0

Payload = Union[Dict[str, Any], List[Dict[str, Any]]]


class CartStorage(Protocol):
    """Opaque key-value storage for one cart payload."""

    def read(self) -> Optional[Payload]:
        """Return the stored payload, or None if nothing was stored."""
        ...

    def write(self, payload: Payload) -> None:
        """Replace the stored payload."""
        ...


class InMemoryStorage:
    """Storage that keeps a JSON-encoded payload in memory."""

    def __init__(self) -> None:
        self._data: Optional[str] = None

    def read(self) -> Optional[Payload]:
        if self._data is None:
            return None
        return json.loads(self._data)

    def write(self, payload: Payload) -> None:
        self._data = json.dumps(payload)


class JsonFileStorage:
    """Storage backed by a JSON file on disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def read(self) -> Optional[Payload]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CartPayloadError(f"Corrupt cart file {self.path}: {exc}") from exc

    def write(self, payload: Payload) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug("Wrote cart payload to %s", self.path)


def material_to_dict(material: Material) -> Dict[str, Any]:
    return {
        "id": material.id,
        "name": material.name,
        "slug": material.slug,
        "description": material.description,
        "price_per_cm3": material.price_per_cm3,
        "colors": [
            {
                "name": color.name,
                "hex": color.hex,
                "premium": color.premium,
                "price_modifier": color.price_modifier,
            }
            for color in material.colors
        ],
        "min_layer_height": material.min_layer_height,
        "max_layer_height": material.max_layer_height,
    }


def material_from_dict(data: Dict[str, Any]) -> Material:
    return Material(
        id=str(data["id"]),
        name=data["name"],
        slug=data.get("slug", ""),
        description=data.get("description", ""),
        price_per_cm3=float(data["price_per_cm3"]),
        colors=tuple(
            MaterialColor(
                name=color["name"],
                hex=color.get("hex", "#000000"),
                premium=bool(color.get("premium", False)),
                price_modifier=float(color.get("price_modifier", 0.0)),
            )
            for color in data.get("colors", [])
        ),
        min_layer_height=float(data.get("min_layer_height", 0.1)),
        max_layer_height=float(data.get("max_layer_height", 0.3)),
    )


def source_to_dict(source: ItemSource) -> Dict[str, Any]:
    if isinstance(source, ProductRef):
        return {
            "kind": PRODUCT_KIND,
            "id": source.id,
            "name": source.name,
            "price": source.price,
            "images": list(source.images),
        }
    return {
        "kind": UPLOADED_MODEL_KIND,
        "id": source.id,
        "file_name": source.file_name,
        "volume_cm3": source.volume_cm3,
        "dimensions": {
            "x": source.dimensions.x,
            "y": source.dimensions.y,
            "z": source.dimensions.z,
        },
    }


def source_from_dict(data: Dict[str, Any]) -> ItemSource:
    kind = data.get("kind")
    if kind == PRODUCT_KIND:
        return ProductRef(
            id=str(data["id"]),
            name=data["name"],
            price=float(data["price"]),
            images=tuple(
                image["url"] if isinstance(image, dict) else image
                for image in data.get("images", ())
            ),
        )
    if kind == UPLOADED_MODEL_KIND:
        dims = data["dimensions"]
        return UploadedModel(
            id=str(data["id"]),
            file_name=data["file_name"],
            volume_cm3=float(data["volume_cm3"]),
            dimensions=Dimensions(x=float(dims["x"]), y=float(dims["y"]), z=float(dims["z"])),
        )
    raise CartPayloadError(f"Unknown line item source kind: {kind!r}")


def _legacy_source(data: Dict[str, Any]) -> Dict[str, Any]:
    # Unversioned items carry nullable product/uploaded_model fields
    product = data.get("product")
    model = data.get("uploaded_model")
    if (product is None) == (model is None):
        raise CartPayloadError(
            "Legacy line item must reference exactly one of product or uploaded_model"
        )
    if product is not None:
        return {**product, "kind": PRODUCT_KIND}
    return {**model, "kind": UPLOADED_MODEL_KIND}


def line_item_to_dict(item: CartLineItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "source": source_to_dict(item.source),
        "material": material_to_dict(item.material),
        "color": item.color,
        "infill_percentage": item.infill_percentage,
        "layer_height": item.layer_height,
        "quantity": item.quantity,
        "created_at": item.created_at.isoformat(),
        "session_id": item.session_id,
    }


def line_item_from_dict(data: Dict[str, Any]) -> CartLineItem:
    source_data = data["source"] if "source" in data else _legacy_source(data)
    created_at = data["created_at"].replace("Z", "+00:00")
    return CartLineItem(
        id=str(data["id"]),
        source=source_from_dict(source_data),
        material=material_from_dict(data["material"]),
        color=data["color"],
        infill_percentage=data["infill_percentage"],
        layer_height=data["layer_height"],
        quantity=int(data["quantity"]),
        created_at=datetime.fromisoformat(created_at),
        session_id=data.get("session_id"),
    )


def encode_items(items: List[CartLineItem]) -> Dict[str, Any]:
    """Encode line items as a versioned payload."""
    return {"version": PAYLOAD_VERSION, "items": [line_item_to_dict(item) for item in items]}


def decode_items(payload: Optional[Payload]) -> List[CartLineItem]:
    """
    Decode a persisted payload into line items.

    Args:
        payload: Versioned dict, legacy store envelope, legacy list, or None
            for an empty cart

    Returns:
        Line items in stored order

    Raises:
        UnsupportedPayloadVersion: If the payload version is unknown
        CartPayloadError: If the payload is malformed
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        raw_items = payload
    elif isinstance(payload, dict) and "state" in payload:
        version = payload.get("version", LEGACY_STORE_VERSION)
        if version != LEGACY_STORE_VERSION:
            raise UnsupportedPayloadVersion(version)
        state = payload["state"]
        if not isinstance(state, dict):
            raise CartPayloadError("Legacy cart state must be a dict")
        raw_items = state.get("items") or []
    elif isinstance(payload, dict):
        version = payload.get("version")
        if version != PAYLOAD_VERSION:
            raise UnsupportedPayloadVersion(version)
        raw_items = payload.get("items", [])
    else:
        raise CartPayloadError(f"Cart payload must be a dict or list, got {type(payload).__name__}")

    try:
        return [line_item_from_dict(raw) for raw in raw_items]
    except CartPayloadError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise CartPayloadError(f"Malformed cart line item: {exc}") from exc
