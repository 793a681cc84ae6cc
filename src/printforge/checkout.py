"""Coupon, shipping and tax rules applied to a cart subtotal.

All rates and thresholds come from :class:`~printforge.config.PricingConfig`,
so the cart page, the cart panel and checkout compute the same totals.

Example:
    >>> pricer = CheckoutPricer()
    >>> pricer.apply_coupon("welcome10").accepted
    True
    >>> summary = pricer.summarize(100.0)
    >>> summary.discount, summary.shipping, round(summary.tax, 2), round(summary.total, 2)
    (10.0, 0.0, 9.0, 99.0)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

from printforge.config import DEFAULT_CONFIG, PricingConfig
from printforge.models.coupon import Coupon, normalize_code
from printforge.profiles import default_coupons

logger = logging.getLogger(__name__)

INVALID_COUPON_MESSAGE = "Invalid coupon code"


class ShippingMethod(Enum):
    """Shipping options offered at checkout."""

    STANDARD = "standard"  # 5-7 business days
    EXPRESS = "express"  # 2-3 business days
    OVERNIGHT = "overnight"  # 1 business day


class CouponBook:
    """Known coupons keyed by their normalized code."""

    def __init__(self, coupons: Iterable[Coupon]) -> None:
        self._coupons: Dict[str, Coupon] = {coupon.code: coupon for coupon in coupons}

    @classmethod
    def default(cls) -> "CouponBook":
        return cls(default_coupons())

    def lookup(self, code: str) -> Optional[Coupon]:
        """Find a coupon by code, ignoring case and surrounding whitespace."""
        return self._coupons.get(normalize_code(code))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.lookup(code) is not None

    def __len__(self) -> int:
        return len(self._coupons)


@dataclass(frozen=True)
class CouponOutcome:
    """Result of trying to apply a coupon code.

    Attributes:
        accepted: Whether the code was valid and is now active
        message: User-facing message describing the outcome
        coupon: The active coupon after the attempt (may be a previous one)
    """

    accepted: bool
    message: str
    coupon: Optional[Coupon]


@dataclass(frozen=True)
class CheckoutSummary:
    """Totals shown on the cart and checkout pages."""

    subtotal: float
    discount: float
    shipping: float
    tax: float
    total: float
    coupon_code: Optional[str]
    free_shipping_remaining: float

    @property
    def discounted_subtotal(self) -> float:
        return self.subtotal - self.discount

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0


def shipping_cost(
    discounted_subtotal: float,
    method: ShippingMethod = ShippingMethod.STANDARD,
    config: PricingConfig = DEFAULT_CONFIG,
) -> float:
    """
    Shipping fee for a discounted subtotal.

    Every method ships free once the discounted subtotal reaches the free
    shipping threshold; below it each method pays its flat fee.
    """
    if discounted_subtotal >= config.free_shipping_threshold:
        return 0.0
    return config.shipping_fee(method.value)


def tax_amount(discounted_subtotal: float, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Tax on the discounted subtotal."""
    return discounted_subtotal * config.tax_rate


class CheckoutPricer:
    """
    Holds the active coupon and turns a subtotal into checkout totals.

    Only one coupon is active at a time. A rejected code never changes the
    active coupon.

    Args:
        coupons: Accepted coupons (default: the preset demonstration codes)
        config: Pricing configuration (default: DEFAULT_CONFIG)
    """

    def __init__(
        self,
        coupons: Optional[CouponBook] = None,
        config: PricingConfig = DEFAULT_CONFIG,
    ) -> None:
        self.coupons = coupons if coupons is not None else CouponBook.default()
        self.config = config
        self._active: Optional[Coupon] = None

    @property
    def active_coupon(self) -> Optional[Coupon]:
        return self._active

    def apply_coupon(self, code: str) -> CouponOutcome:
        """
        Try to activate a coupon code.

        Returns:
            CouponOutcome; ``accepted`` is False for empty or unknown codes,
            in which case the previously active coupon stays active.
        """
        if not code or not code.strip():
            return CouponOutcome(accepted=False, message="Enter a coupon code", coupon=self._active)

        coupon = self.coupons.lookup(code)
        if coupon is None:
            logger.info("Rejected coupon code %r", code)
            return CouponOutcome(
                accepted=False, message=INVALID_COUPON_MESSAGE, coupon=self._active
            )

        self._active = coupon
        logger.debug("Applied coupon %s", coupon.code)
        return CouponOutcome(
            accepted=True,
            message=f"Coupon applied! {coupon.discount_percentage:g}% discount",
            coupon=coupon,
        )

    def remove_coupon(self) -> None:
        """Deactivate the current coupon, if any."""
        if self._active is not None:
            logger.debug("Removed coupon %s", self._active.code)
        self._active = None

    def discount(self, subtotal: float) -> float:
        """Discount the active coupon grants on a subtotal (0 without one)."""
        if self._active is None:
            return 0.0
        return self._active.discount_for(subtotal)

    def summarize(
        self,
        subtotal: float,
        method: ShippingMethod = ShippingMethod.STANDARD,
    ) -> CheckoutSummary:
        """
        Compute discount, shipping, tax and total for a subtotal.

        Args:
            subtotal: Cart subtotal before discounts
            method: Shipping method

        Returns:
            CheckoutSummary with every component of the total
        """
        discount = self.discount(subtotal)
        discounted = subtotal - discount
        shipping = shipping_cost(discounted, method, self.config)
        tax = tax_amount(discounted, self.config)
        remaining = max(0.0, self.config.free_shipping_threshold - discounted)
        return CheckoutSummary(
            subtotal=subtotal,
            discount=discount,
            shipping=shipping,
            tax=tax,
            total=discounted + shipping + tax,
            coupon_code=self._active.code if self._active is not None else None,
            free_shipping_remaining=remaining,
        )

    def __repr__(self) -> str:
        code = self._active.code if self._active is not None else None
        return f"CheckoutPricer(active_coupon={code!r})"
