"""Waste and efficiency statistics for sheet layouts."""

from __future__ import annotations

from typing import Sequence

from stockcut.domain.value_objects import SheetLayout, SupplySheet, WasteStats


def calculate_waste_stats(
    layout: SheetLayout,
    sheet: SupplySheet | None = None,
) -> WasteStats:
    """Calculate detailed waste statistics for one layout.

    Args:
        layout: Sheet layout to analyze.
        sheet: Sheet the layout was cut from. Defaults to ``layout.sheet``.

    Returns:
        WasteStats with areas in square mm and percentages in 0-100.
    """
    sheet = sheet or layout.sheet
    stock_area = sheet.area
    used_area = sum(p.placed_width * p.placed_height for p in layout.placements)
    waste_area = stock_area - used_area

    return WasteStats(
        stock_area=stock_area,
        used_area=used_area,
        waste_area=waste_area,
        waste_percentage=waste_area / stock_area * 100,
        efficiency=used_area / stock_area * 100,
    )


def calculate_total_waste(layouts: Sequence[SheetLayout]) -> float:
    """Calculate total waste percentage across all used sheets.

    Waste is (total sheet area - total used area) / total sheet area.
    Only sheets that received pieces count.

    Args:
        layouts: Sheet layouts produced by one run.

    Returns:
        Waste percentage (0-100), or 0 when no sheets were used.
    """
    if not layouts:
        return 0.0

    total_stock = sum(layout.sheet.area for layout in layouts)
    total_waste = sum(layout.waste_area for layout in layouts)

    # Clamp float noise from exactly filled sheets
    return min(100.0, max(0.0, total_waste / total_stock * 100))
