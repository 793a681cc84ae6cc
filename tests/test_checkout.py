"""Tests for coupon, shipping and tax rules."""

import pytest

from printforge.checkout import (
    INVALID_COUPON_MESSAGE,
    CheckoutPricer,
    CouponBook,
    ShippingMethod,
    shipping_cost,
    tax_amount,
)
from printforge.config import PricingConfig
from printforge.models import Coupon


class TestCouponBook:
    """Test CouponBook lookups."""

    def test_default_codes(self):
        book = CouponBook.default()
        assert len(book) == 2
        assert book.lookup("WELCOME10").discount_percentage == 10
        assert book.lookup("FIRST20").discount_percentage == 20

    def test_lookup_ignores_case_and_whitespace(self):
        book = CouponBook.default()
        assert book.lookup("  welcome10 ").code == "WELCOME10"
        assert "first20" in book

    def test_unknown_code(self):
        assert CouponBook.default().lookup("FREESTUFF") is None


class TestApplyCoupon:
    """Test CheckoutPricer.apply_coupon() and remove_coupon()."""

    def test_valid_code_accepted(self):
        pricer = CheckoutPricer()
        outcome = pricer.apply_coupon("WELCOME10")
        assert outcome.accepted
        assert outcome.coupon.code == "WELCOME10"
        assert "10% discount" in outcome.message
        assert pricer.active_coupon.code == "WELCOME10"

    def test_invalid_code_rejected_without_state_change(self):
        pricer = CheckoutPricer()
        pricer.apply_coupon("FIRST20")
        outcome = pricer.apply_coupon("BOGUS")
        assert not outcome.accepted
        assert outcome.message == INVALID_COUPON_MESSAGE
        assert outcome.coupon.code == "FIRST20"
        assert pricer.active_coupon.code == "FIRST20"

    def test_invalid_code_with_no_active_coupon(self):
        pricer = CheckoutPricer()
        outcome = pricer.apply_coupon("BOGUS")
        assert outcome.coupon is None
        assert pricer.active_coupon is None

    def test_blank_code_rejected(self):
        pricer = CheckoutPricer()
        outcome = pricer.apply_coupon("   ")
        assert not outcome.accepted
        assert pricer.active_coupon is None

    def test_valid_code_replaces_previous(self):
        """Only one coupon is active at a time."""
        pricer = CheckoutPricer()
        pricer.apply_coupon("WELCOME10")
        pricer.apply_coupon("first20")
        assert pricer.active_coupon.code == "FIRST20"
        assert pricer.discount(100.0) == pytest.approx(20.0)

    def test_remove_coupon(self):
        pricer = CheckoutPricer()
        pricer.apply_coupon("WELCOME10")
        pricer.remove_coupon()
        assert pricer.active_coupon is None
        assert pricer.discount(100.0) == 0.0

    def test_remove_without_coupon_is_noop(self):
        pricer = CheckoutPricer()
        pricer.remove_coupon()
        assert pricer.active_coupon is None

    def test_custom_coupon_book(self):
        pricer = CheckoutPricer(coupons=CouponBook([Coupon(code="HALF", discount_percentage=50)]))
        assert not pricer.apply_coupon("WELCOME10").accepted
        assert pricer.apply_coupon("half").accepted

    def test_repr(self):
        pricer = CheckoutPricer()
        pricer.apply_coupon("WELCOME10")
        assert repr(pricer) == "CheckoutPricer(active_coupon='WELCOME10')"


class TestShippingCost:
    """Test shipping_cost function."""

    def test_below_threshold_pays_standard_fee(self):
        assert shipping_cost(74.99) == pytest.approx(9.99)

    def test_at_threshold_is_free(self):
        assert shipping_cost(75.0) == 0.0

    def test_express_below_threshold_pays_fee(self):
        assert shipping_cost(74.99, ShippingMethod.EXPRESS) == pytest.approx(19.99)

    @pytest.mark.parametrize("method", list(ShippingMethod))
    def test_every_method_free_at_threshold(self, method):
        assert shipping_cost(75.0, method) == 0.0
        assert shipping_cost(500.0, method) == 0.0

    def test_overnight_fee(self):
        assert shipping_cost(10.0, ShippingMethod.OVERNIGHT) == pytest.approx(39.99)

    def test_custom_threshold(self):
        config = PricingConfig(free_shipping_threshold=100.0)
        assert shipping_cost(80.0, config=config) == pytest.approx(9.99)
        assert shipping_cost(100.0, config=config) == 0.0


class TestTaxAmount:
    """Test tax_amount function."""

    def test_default_rate(self):
        assert tax_amount(90.0) == pytest.approx(9.0)

    def test_custom_rate(self):
        assert tax_amount(100.0, PricingConfig(tax_rate=0.08)) == pytest.approx(8.0)


class TestSummarize:
    """Test CheckoutPricer.summarize()."""

    def test_coupon_then_remove(self):
        """WELCOME10 on 100 gives 10 off; removing it restores zero discount."""
        pricer = CheckoutPricer()
        pricer.apply_coupon("WELCOME10")
        with_coupon = pricer.summarize(100.0)
        assert with_coupon.discount == pytest.approx(10.0)
        assert with_coupon.coupon_code == "WELCOME10"

        pricer.remove_coupon()
        without_coupon = pricer.summarize(100.0)
        assert without_coupon.discount == 0.0
        assert without_coupon.subtotal == pytest.approx(100.0)
        assert without_coupon.coupon_code is None

    def test_totals_without_coupon(self):
        summary = CheckoutPricer().summarize(50.0)
        assert summary.shipping == pytest.approx(9.99)
        assert summary.tax == pytest.approx(5.0)
        assert summary.total == pytest.approx(50.0 + 9.99 + 5.0)
        assert summary.free_shipping_remaining == pytest.approx(25.0)
        assert not summary.free_shipping

    def test_threshold_uses_discounted_subtotal(self):
        """80 with 10% off is 72, below the 75 threshold."""
        pricer = CheckoutPricer()
        pricer.apply_coupon("WELCOME10")
        summary = pricer.summarize(80.0)
        assert summary.discounted_subtotal == pytest.approx(72.0)
        assert summary.shipping == pytest.approx(9.99)
        assert summary.free_shipping_remaining == pytest.approx(3.0)

    def test_free_shipping_total(self):
        pricer = CheckoutPricer()
        pricer.apply_coupon("WELCOME10")
        summary = pricer.summarize(100.0)
        assert summary.free_shipping
        assert summary.free_shipping_remaining == 0.0
        assert summary.tax == pytest.approx(9.0)
        assert summary.total == pytest.approx(99.0)

    def test_express_shipping_free_above_threshold(self):
        summary = CheckoutPricer().summarize(200.0, ShippingMethod.EXPRESS)
        assert summary.shipping == 0.0
        assert summary.free_shipping
        assert summary.free_shipping_remaining == 0.0
        assert summary.total == pytest.approx(200.0 + 20.0)

    def test_overnight_shipping_below_threshold(self):
        summary = CheckoutPricer().summarize(50.0, ShippingMethod.OVERNIGHT)
        assert summary.shipping == pytest.approx(39.99)
        assert summary.free_shipping_remaining == pytest.approx(25.0)
        assert summary.total == pytest.approx(50.0 + 39.99 + 5.0)

    def test_empty_subtotal(self):
        summary = CheckoutPricer().summarize(0.0)
        assert summary.discount == 0.0
        assert summary.tax == 0.0
        assert summary.total == pytest.approx(9.99)
