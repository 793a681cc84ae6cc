"""Coupon model for checkout discounts."""

from dataclasses import dataclass
from typing import Optional


def normalize_code(code: str) -> str:
    """Canonical form of a coupon code: trimmed and upper-cased."""
    return code.strip().upper()


@dataclass(frozen=True)
class Coupon:
    """Percentage discount coupon.

    Codes compare case-insensitively; the stored code is always upper-case.

    Attributes:
        code: Coupon code (e.g., "WELCOME10")
        discount_percentage: Discount as a percentage of the subtotal, 0-100
        min_order_value: Subtotal required before the coupon discounts anything
        max_discount_amount: Upper bound on the discount amount
    """

    code: str
    discount_percentage: float
    min_order_value: Optional[float] = None
    max_discount_amount: Optional[float] = None

    def __post_init__(self) -> None:
        """Normalize the code and validate the discount."""
        code = normalize_code(self.code)
        if not code:
            raise ValueError("code must not be empty")
        object.__setattr__(self, "code", code)
        if not 0 <= self.discount_percentage <= 100:
            raise ValueError(
                f"discount_percentage must be between 0 and 100, got {self.discount_percentage}"
            )
        if self.min_order_value is not None and self.min_order_value < 0:
            raise ValueError(f"min_order_value must be non-negative, got {self.min_order_value}")
        if self.max_discount_amount is not None and self.max_discount_amount < 0:
            raise ValueError(
                f"max_discount_amount must be non-negative, got {self.max_discount_amount}"
            )

    def matches(self, code: str) -> bool:
        return normalize_code(code) == self.code

    def discount_for(self, subtotal: float) -> float:
        """Discount amount this coupon grants on a subtotal.

        Examples:
            >>> Coupon("welcome10", 10).discount_for(100.0)
            10.0
        """
        if self.min_order_value is not None and subtotal < self.min_order_value:
            return 0.0
        discount = subtotal * self.discount_percentage / 100
        if self.max_discount_amount is not None:
            discount = min(discount, self.max_discount_amount)
        return discount
