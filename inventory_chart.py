#!/usr/bin/env python3
# inventory_chart.py

"""
Stock level chart for the inventory, written to an image file.
"""

from pathlib import Path
from typing import Dict, Iterable

import matplotlib

matplotlib.use("Agg")  # render off-screen; the menu runs in a terminal
import matplotlib.pyplot as plt

from inventory import LOW_STOCK_THRESHOLD, Product

BANDS = ("Good Stock", "Medium Stock", "Low Stock")
COLORS = ("#4caf50", "#ff9800", "#f44336")


def stock_levels(products: Iterable[Product], threshold: int = LOW_STOCK_THRESHOLD) -> Dict[str, int]:
    """Count products per stock band."""
    counts = dict.fromkeys(BANDS, 0)
    for p in products:
        if p.quantity < threshold:
            counts["Low Stock"] += 1
        elif p.quantity < threshold * 2:
            counts["Medium Stock"] += 1
        else:
            counts["Good Stock"] += 1
    return counts


def save_stock_chart(products: Iterable[Product], path, threshold: int = LOW_STOCK_THRESHOLD) -> Path:
    """Draw the stock level distribution and save it to `path`."""
    products = list(products)
    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        if products:
            counts = stock_levels(products, threshold)
            bars = ax.bar(BANDS, [counts[b] for b in BANDS], color=COLORS, alpha=0.8)
            ax.set_title("Stock Level Distribution", fontsize=14, fontweight="bold")
            ax.set_ylabel("Number of Products")

            # Add count labels on bars
            for bar, band in zip(bars, BANDS):
                height = bar.get_height()
                ax.text(bar.get_x() + bar.get_width() / 2., height,
                        str(counts[band]), ha="center", va="bottom", fontweight="bold")
        else:
            ax.text(0.5, 0.5, "No products available", ha="center", va="center", transform=ax.transAxes)

        fig.tight_layout()
        out = Path(path)
        fig.savefig(out)
    finally:
        plt.close(fig)
    return out
