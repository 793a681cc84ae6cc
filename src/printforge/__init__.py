"""Pricing, quoting and cart aggregation for a 3D-printing storefront."""

import logging

from .cart import CartAggregate, CartItemInput
from .catalog import MaterialCatalog
from .checkout import CheckoutPricer, CheckoutSummary, ShippingMethod
from .config import DEFAULT_CONFIG, PricingConfig
from .models import Coupon, Dimensions, Material, MaterialColor, ProductRef, UploadedModel
from .quote_calculator import LeadTimePriority, QuoteInput, QuoteResult, quote

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CartAggregate",
    "CartItemInput",
    "CheckoutPricer",
    "CheckoutSummary",
    "ShippingMethod",
    "MaterialCatalog",
    "PricingConfig",
    "DEFAULT_CONFIG",
    "Material",
    "MaterialColor",
    "Dimensions",
    "ProductRef",
    "UploadedModel",
    "Coupon",
    "QuoteInput",
    "QuoteResult",
    "LeadTimePriority",
    "quote",
]
