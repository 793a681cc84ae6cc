"""Visualize how quotes respond to model scale and volume.

This shows:
- Scaled volume and price over a range of scales (cubic growth)
- Standard and express lead times over a range of volumes
"""

import matplotlib.pyplot as plt

from printforge.profiles import MaterialType, create_material
from printforge.visualize import plot_lead_time, plot_price_vs_scale


def main():
    petg = create_material(MaterialType.PETG)

    print("Plotting price vs scale for a 40 cm³ model in PETG...")
    plot_price_vs_scale(
        40.0,
        petg,
        infill_percentage=30,
        quantity=1,
        show=False,
        save_path="price_vs_scale.png",
    )
    print("  Plot saved: price_vs_scale.png")

    print("Plotting lead time for volumes up to 1000 cm³...")
    volumes = [10.0 * step for step in range(1, 101)]
    plot_lead_time(volumes, quantity=2, show=False, save_path="lead_time.png")
    print("  Plot saved: lead_time.png")

    plt.close("all")


if __name__ == "__main__":
    main()
