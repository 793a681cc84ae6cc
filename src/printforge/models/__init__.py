"""Core data models for quoting and cart pricing.

This package contains all model classes and their small helpers.
"""

from printforge.models.coupon import Coupon, normalize_code
from printforge.models.line_item import CartLineItem, IdentityKey, identity_key
from printforge.models.material import Material, MaterialColor
from printforge.models.source import (
    PRODUCT_KIND,
    UPLOADED_MODEL_KIND,
    Dimensions,
    ItemSource,
    ProductRef,
    UploadedModel,
)

__all__ = [
    "Material",
    "MaterialColor",
    "Dimensions",
    "ProductRef",
    "UploadedModel",
    "ItemSource",
    "PRODUCT_KIND",
    "UPLOADED_MODEL_KIND",
    "CartLineItem",
    "IdentityKey",
    "identity_key",
    "Coupon",
    "normalize_code",
]
