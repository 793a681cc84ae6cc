"""Helper functions for saving matplotlib plots in examples."""

import os
from typing import Optional

from printforge import CartAggregate
from printforge.visualize import plot_cart_breakdown


def save_cart_plot(cart: CartAggregate, filename: str, title: Optional[str] = None) -> None:
    """Save a cart breakdown plot to file.

    Args:
        cart: Cart to plot
        filename: Output filename (e.g., "my_plot.png")
        title: Optional custom title
    """
    if not filename.endswith((".png", ".jpg", ".pdf")):
        filename += ".png"

    plot_cart_breakdown(
        cart,
        title=title or "Cart Breakdown",
        show=False,
        save_path=filename,
    )
    print(f"  Plot saved: {filename}")


def generate_example_plot(
    name: str,
    cart: CartAggregate,
    output_dir: Optional[str] = None,
) -> None:
    """Generate and save a cart plot with automatic naming.

    Args:
        name: Base name for the plot (e.g., "basic_usage")
        cart: Cart to plot
        output_dir: Optional output directory (defaults to caller's directory)
    """
    if output_dir is None:
        import inspect

        caller_frame = inspect.stack()[1]
        caller_file = caller_frame.filename
        output_dir = os.path.dirname(os.path.abspath(caller_file))

    filename = os.path.join(output_dir, f"{name}_plot.png")
    title = f"{name.replace('_', ' ').title()}: {len(cart)} line items"

    save_cart_plot(cart, filename=filename, title=title)
