"""Visualization utilities for quotes and carts.

This module provides functions to visualize how price grows with model scale,
how lead time grows with volume, and how a cart's subtotal is made up.
"""

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from printforge.cart import CartAggregate, get_item_price
from printforge.config import DEFAULT_CONFIG
from printforge.models import Material
from printforge.models.source import ProductRef
from printforge.quote_calculator import (
    LeadTimePriority,
    compute_lead_time_days,
    compute_price,
    scale_volume,
)


def _finish(fig: plt.Figure, show: bool, save_path: Optional[str]) -> plt.Figure:
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig


def plot_price_vs_scale(
    volume_cm3: float,
    material: Material,
    infill_percentage: float = DEFAULT_CONFIG.default_infill_percentage,
    quantity: int = 1,
    scales: Optional[Sequence[float]] = None,
    title: Optional[str] = None,
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Plot quoted price against model scale.

    Creates a two-panel visualization showing:
    - Scaled volume vs scale percentage
    - Price vs scale percentage, with the 100% price marked

    Args:
        volume_cm3: Unscaled model volume in cm³
        material: Material to price with
        infill_percentage: Interior fill, 0-100
        quantity: Number of copies
        scales: Scale percentages to evaluate (default: 25% to 300%)
        title: Optional custom title (default: auto-generated)
        show: Whether to display the plot (default: True)
        save_path: Optional path to save the figure

    Returns:
        matplotlib Figure object

    Example:
        >>> from printforge.profiles import MaterialType, create_material
        >>> fig = plot_price_vs_scale(50.0, create_material(MaterialType.PLA), show=False)
    """
    if volume_cm3 <= 0:
        raise ValueError(f"volume_cm3 must be positive, got {volume_cm3}")

    scale_values = np.linspace(25, 300, 56) if scales is None else np.asarray(scales, dtype=float)
    if scale_values.size == 0:
        raise ValueError("Cannot plot empty scale list")

    volumes = np.array([scale_volume(volume_cm3, s) for s in scale_values])
    prices = np.array(
        [compute_price(v, material.price_per_cm3, infill_percentage, quantity) for v in volumes]
    )
    base_price = compute_price(volume_cm3, material.price_per_cm3, infill_percentage, quantity)

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    if title is None:
        title = (
            f"Price vs Scale\n"
            f"{volume_cm3:.1f} cm³ | {material.name} @ {material.price_per_cm3:.2f}/cm³ | "
            f"Infill {infill_percentage:.0f}% | Qty {quantity}"
        )

    fig.suptitle(title, fontsize=14, fontweight="bold")

    ax1.plot(scale_values, volumes, linewidth=2, label="Scaled Volume")
    ax1.set_ylabel("Volume (cm³)")
    ax1.set_title("Volume grows with the cube of scale")
    ax1.legend()
    ax1.grid(True, alpha=0.3)

    ax2.plot(scale_values, prices, linewidth=2, color="green", label="Price")
    ax2.axhline(
        base_price,
        color="red",
        linestyle="--",
        linewidth=1.5,
        label=f"Price at 100% ({base_price:.2f})",
    )
    ax2.set_xlabel("Scale (%)")
    ax2.set_ylabel("Price")
    ax2.set_title("Quoted Price")
    ax2.legend()
    ax2.grid(True, alpha=0.3)

    return _finish(fig, show, save_path)


def plot_lead_time(
    volumes_cm3: Sequence[float],
    quantity: int = 1,
    title: str = "Lead Time vs Volume",
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Plot standard and express lead times over a range of volumes (single panel).

    Args:
        volumes_cm3: Volumes to evaluate, in cm³
        quantity: Number of copies
        title: Plot title
        show: Whether to display the plot
        save_path: Optional path to save the figure

    Returns:
        matplotlib Figure object
    """
    if len(volumes_cm3) == 0:
        raise ValueError("Cannot plot empty volume list")

    volumes = np.sort(np.asarray(volumes_cm3, dtype=float))
    standard = np.array(
        [compute_lead_time_days(v, quantity, LeadTimePriority.STANDARD) for v in volumes]
    )
    express = np.array(
        [compute_lead_time_days(v, quantity, LeadTimePriority.EXPRESS) for v in volumes]
    )

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.step(volumes, standard, where="post", linewidth=2, label="Standard")
    ax.step(volumes, express, where="post", linewidth=2, label="Express")
    ax.set_xlabel("Volume (cm³)")
    ax.set_ylabel("Lead Time (days)")
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)

    return _finish(fig, show, save_path)


def plot_cart_breakdown(
    cart: CartAggregate,
    title: str = "Cart Breakdown",
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Plot each line item's share of the cart subtotal (single panel).

    Args:
        cart: Cart to visualize
        title: Plot title
        show: Whether to display the plot
        save_path: Optional path to save the figure

    Returns:
        matplotlib Figure object
    """
    items = cart.items
    if not items:
        raise ValueError("Cannot plot empty cart")

    labels = []
    for item in items:
        name = item.source.name if isinstance(item.source, ProductRef) else item.source.file_name
        labels.append(f"{name}\n{item.material.name} {item.color} ×{item.quantity}")
    prices = np.array([get_item_price(item) for item in items])
    positions = np.arange(len(items))

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.bar(positions, prices, color="steelblue")
    ax.axhline(
        prices.sum(),
        color="red",
        linestyle="--",
        linewidth=1.5,
        label=f"Subtotal ({prices.sum():.2f})",
    )
    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.set_ylabel("Price")
    ax.set_title(title)
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)

    return _finish(fig, show, save_path)
