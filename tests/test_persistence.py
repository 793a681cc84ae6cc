"""Tests for cart serialization and storage."""

import json
from datetime import datetime, timezone

import pytest

from printforge.cart import CartAggregate, CartItemInput
from printforge.exceptions import CartPayloadError, UnsupportedPayloadVersion
from printforge.persistence import (
    PAYLOAD_VERSION,
    InMemoryStorage,
    JsonFileStorage,
    decode_items,
    encode_items,
    line_item_from_dict,
    line_item_to_dict,
)
from printforge.session import SessionIdentity

FIXED_TIME = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def filled_cart(vase, bracket, pla, resin):
    cart = CartAggregate(session=SessionIdentity("guest-1"), clock=lambda: FIXED_TIME)
    cart.add_item(CartItemInput(source=vase, material=resin, color="Clear", quantity=2))
    cart.add_item(
        CartItemInput(
            source=bracket.scaled(150), material=pla, color="Red", infill_percentage=35
        )
    )
    cart.open()
    return cart


@pytest.fixture
def legacy_item():
    """Line item as the earlier storefront persisted it."""
    return {
        "id": "legacy-1",
        "user_id": None,
        "session_id": "guest-9",
        "product_id": "p-9",
        "product": {
            "id": "p-9",
            "name": "Desk Organizer",
            "price": 18.5,
            "images": [{"url": "organizer.jpg", "alt": "", "is_primary": True}],
        },
        "uploaded_model_id": None,
        "material_id": "1",
        "material": {
            "id": "1",
            "name": "PLA",
            "price_per_cm3": 0.05,
            "colors": [{"name": "Black", "hex": "#1a1a1a", "premium": False, "price_modifier": 0}],
            "min_layer_height": 0.1,
            "max_layer_height": 0.3,
        },
        "color": "Black",
        "infill_percentage": 20,
        "layer_height": 0.2,
        "quantity": 2,
        "created_at": "2024-11-02T10:00:00.000Z",
    }


class TestLineItemRoundTrip:
    """Test encoding single line items."""

    def test_product_item(self, filled_cart):
        item = filled_cart.items[0]
        data = line_item_to_dict(item)
        assert data["source"]["kind"] == "product"
        assert data["material"]["id"] == "3"
        assert data["created_at"] == "2025-03-01T09:30:00+00:00"
        assert line_item_from_dict(data) == item

    def test_uploaded_model_item(self, filled_cart):
        item = filled_cart.items[1]
        data = line_item_to_dict(item)
        assert data["source"]["kind"] == "uploaded_model"
        assert data["source"]["volume_cm3"] == pytest.approx(168.75)
        assert line_item_from_dict(data) == item

    def test_json_serializable(self, filled_cart):
        payload = encode_items(list(filled_cart.items))
        assert json.loads(json.dumps(payload)) == payload


class TestDecodeItems:
    """Test decode_items function."""

    def test_none_is_empty(self):
        assert decode_items(None) == []

    def test_versioned_payload(self, filled_cart):
        payload = encode_items(list(filled_cart.items))
        assert payload["version"] == PAYLOAD_VERSION
        assert decode_items(payload) == list(filled_cart.items)

    def test_unknown_version_raises(self):
        with pytest.raises(UnsupportedPayloadVersion, match="version: 99"):
            decode_items({"version": 99, "items": []})

    def test_missing_version_raises(self):
        with pytest.raises(UnsupportedPayloadVersion):
            decode_items({"items": []})

    def test_wrong_type_raises(self):
        with pytest.raises(CartPayloadError, match="must be a dict or list"):
            decode_items("items")

    def test_malformed_item_raises(self):
        with pytest.raises(CartPayloadError, match="Malformed cart line item"):
            decode_items(
                {"version": PAYLOAD_VERSION, "items": [{"id": "x", "source": {"kind": "product"}}]}
            )

    def test_unknown_source_kind_raises(self, filled_cart):
        data = line_item_to_dict(filled_cart.items[0])
        data["source"]["kind"] = "gift_card"
        with pytest.raises(CartPayloadError, match="Unknown line item source kind"):
            decode_items({"version": PAYLOAD_VERSION, "items": [data]})

    def test_legacy_unversioned_list(self, legacy_item):
        (item,) = decode_items([legacy_item])
        assert item.product.name == "Desk Organizer"
        assert item.product.images == ("organizer.jpg",)
        assert item.session_id == "guest-9"
        assert item.created_at == datetime(2024, 11, 2, 10, 0, tzinfo=timezone.utc)
        assert item.quantity == 2

    def test_legacy_store_envelope(self, legacy_item):
        """The browser store wraps its items in a state envelope at version 0."""
        (item,) = decode_items({"state": {"items": [legacy_item]}, "version": 0})
        assert item.id == "legacy-1"
        assert item.product.name == "Desk Organizer"
        assert item.quantity == 2

    def test_legacy_store_envelope_without_items(self):
        assert decode_items({"state": {}, "version": 0}) == []

    def test_legacy_store_envelope_unknown_version_raises(self, legacy_item):
        with pytest.raises(UnsupportedPayloadVersion, match="version: 3"):
            decode_items({"state": {"items": [legacy_item]}, "version": 3})

    def test_legacy_store_envelope_bad_state_raises(self):
        with pytest.raises(CartPayloadError, match="Legacy cart state must be a dict"):
            decode_items({"state": ["oops"], "version": 0})

    def test_legacy_item_with_both_sources_raises(self, filled_cart):
        data = line_item_to_dict(filled_cart.items[0])
        del data["source"]
        data["product"] = {"id": "p", "name": "x", "price": 1.0}
        data["uploaded_model"] = {
            "id": "m",
            "file_name": "m.stl",
            "volume_cm3": 1.0,
            "dimensions": {"x": 1, "y": 1, "z": 1},
        }
        with pytest.raises(CartPayloadError, match="exactly one of product or uploaded_model"):
            decode_items([data])


class TestStorage:
    """Test storage providers and cart save/load."""

    def test_in_memory_empty(self):
        assert InMemoryStorage().read() is None

    def test_load_from_empty_storage(self):
        cart = CartAggregate.load(InMemoryStorage())
        assert len(cart) == 0

    def test_save_and_load_in_memory(self, filled_cart):
        storage = InMemoryStorage()
        filled_cart.save(storage)
        restored = CartAggregate.load(storage)
        assert restored.items == filled_cart.items
        assert restored.get_subtotal() == pytest.approx(filled_cart.get_subtotal())

    def test_visibility_not_persisted(self, filled_cart):
        assert filled_cart.is_open
        storage = InMemoryStorage()
        filled_cart.save(storage)
        assert CartAggregate.load(storage).is_open is False
        assert "is_open" not in json.dumps(storage.read())

    def test_json_file_storage(self, filled_cart, tmp_path):
        storage = JsonFileStorage(tmp_path / "carts" / "cart.json")
        assert storage.read() is None
        filled_cart.save(storage)
        assert storage.path.exists()
        restored = CartAggregate.load(storage)
        assert restored.items == filled_cart.items

    def test_json_file_storage_overwrites(self, filled_cart, tmp_path):
        storage = JsonFileStorage(tmp_path / "cart.json")
        filled_cart.save(storage)
        filled_cart.clear()
        filled_cart.save(storage)
        assert CartAggregate.load(storage).items == ()

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "cart.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CartPayloadError, match="Corrupt cart file"):
            JsonFileStorage(path).read()

    def test_load_envelope_from_storage(self, legacy_item):
        storage = InMemoryStorage()
        storage.write({"state": {"items": [legacy_item]}, "version": 0})
        cart = CartAggregate.load(storage)
        assert cart.get_item_count() == 2
        assert cart.get_subtotal() == pytest.approx(37.0)

    def test_duplicate_ids_in_payload_raise(self, filled_cart):
        item = line_item_to_dict(filled_cart.items[0])
        storage = InMemoryStorage()
        storage.write({"version": PAYLOAD_VERSION, "items": [item, item]})
        with pytest.raises(CartPayloadError, match="duplicate line item id"):
            CartAggregate.load(storage)

    def test_restored_cart_keeps_merging(self, filled_cart, vase, resin):
        storage = InMemoryStorage()
        filled_cart.save(storage)
        restored = CartAggregate.load(storage)
        restored.add_item(CartItemInput(source=vase, material=resin, color="Clear", quantity=1))
        assert len(restored) == 2
        assert restored.items[0].quantity == 3
