"""Basic usage example.

This example demonstrates:
- Quoting an uploaded model at a custom scale
- Adding catalog products and uploaded models to a cart
- Applying a coupon and summarizing checkout totals

This is the simplest way to use the pricing library.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from plot_helper import generate_example_plot

from printforge import (
    CartAggregate,
    CartItemInput,
    CheckoutPricer,
    Dimensions,
    LeadTimePriority,
    MaterialCatalog,
    ProductRef,
    QuoteInput,
    ShippingMethod,
    UploadedModel,
    quote,
)
from printforge.session import SessionIdentity


def main():
    """Basic usage example with given values."""

    print("=" * 80)
    print("BASIC PRINTFORGE USAGE")
    print("=" * 80)

    catalog = MaterialCatalog.default()
    pla = catalog.get("1")
    resin = catalog.get("3")

    # A customer uploads a 50 cm³ bracket and wants it at 150% size
    bracket = UploadedModel(
        id="upload-1",
        file_name="bracket.stl",
        volume_cm3=50.0,
        dimensions=Dimensions(x=2.0, y=5.0, z=5.0),
    )
    request = QuoteInput(
        volume_cm3=bracket.volume_cm3,
        material=pla,
        infill_percentage=20,
        scale_percentage=150,
        quantity=2,
    )

    print("\nQuote:")
    print(f"  {'Priority':<10} {'Volume':<12} {'Price':<10} {'Lead Time'}")
    print("  " + "-" * 50)
    for priority in LeadTimePriority:
        result = quote(request, priority)
        print(
            f"  {priority.value:<10} {result.scaled_volume_cm3:<12.2f} "
            f"{result.price:<10.2f} {result.lead_time_days} days"
        )

    # Scale is baked into the model before it reaches the cart
    session = SessionIdentity()
    cart = CartAggregate(session=session)
    cart.add_item(
        CartItemInput(
            source=bracket.scaled(request.scale_percentage),
            material=pla,
            color="Black",
            quantity=request.quantity,
        )
    )

    vase = ProductRef(id="prod-vase", name="Spiral Vase", price=25.0)
    cart.add_item(CartItemInput(source=vase, material=resin, color="Clear", quantity=1))
    # Same configuration again: merges into the existing line item
    cart.add_item(CartItemInput(source=vase, material=resin, color="Clear", quantity=2))

    print("\nCart:")
    print(f"  {'Item':<16} {'Material':<10} {'Color':<8} {'Qty':<5} {'Price'}")
    print("  " + "-" * 50)
    for item in cart:
        name = getattr(item.source, "name", None) or item.source.file_name
        print(
            f"  {name:<16} {item.material.name:<10} {item.color:<8} "
            f"{item.quantity:<5} {cart.get_item_price(item):.2f}"
        )
    print(f"\n  Items: {cart.get_item_count()}  Subtotal: {cart.get_subtotal():.2f}")

    pricer = CheckoutPricer()
    outcome = pricer.apply_coupon("welcome10")
    print(f"\nCoupon: {outcome.message}")

    for method in ShippingMethod:
        summary = pricer.summarize(cart.get_subtotal(), method)
        print(
            f"  {method.value:<10} discount {summary.discount:.2f}  "
            f"shipping {summary.shipping:.2f}  tax {summary.tax:.2f}  "
            f"total {summary.total:.2f}"
        )

    print("\n" + "=" * 80)
    print("GENERATING PLOT")
    print("=" * 80)
    generate_example_plot("basic_usage", cart)
    print()


if __name__ == "__main__":
    main()
