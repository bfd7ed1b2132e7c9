"""Cut order for the pieces placed on one sheet.

Pieces are cut row by row from the sheet origin: placements whose y
positions lie within a tolerance band form one row, rows are taken in
ascending y and pieces within a row in ascending x. The resulting order is
a reading-order approximation of a guillotine sequence; it does not check
that the layout is actually guillotine separable.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from stockcut.domain.value_objects import Placement

# Pieces whose y positions differ by less than this (mm) share a row
DEFAULT_ROW_TOLERANCE = 10.0


def group_rows(
    placements: Sequence[Placement],
    row_tolerance: float = DEFAULT_ROW_TOLERANCE,
) -> list[list[Placement]]:
    """Group placements into rows of near-equal y.

    A row starts at its lowest placement and absorbs each following
    placement (in y order) whose y is within ``row_tolerance`` of the row
    start. Each row is sorted by x.

    Args:
        placements: Placements on a single sheet.
        row_tolerance: Maximum y difference within one row, in mm.

    Returns:
        Rows in ascending y, each sorted left to right.
    """
    if row_tolerance < 0:
        raise ValueError("Row tolerance must be non-negative")

    rows: list[list[Placement]] = []
    row_start = 0.0
    for placement in sorted(placements, key=lambda p: (p.y, p.x)):
        if rows and placement.y - row_start < row_tolerance:
            rows[-1].append(placement)
        else:
            rows.append([placement])
            row_start = placement.y

    return [sorted(row, key=lambda p: (p.x, p.y)) for row in rows]


def calculate_cut_sequence(
    placements: Sequence[Placement],
    row_tolerance: float = DEFAULT_ROW_TOLERANCE,
) -> tuple[Placement, ...]:
    """Assign 1-based cut order to the placements of one sheet.

    Args:
        placements: Placements on a single sheet, in any order.
        row_tolerance: Maximum y difference within one row, in mm.

    Returns:
        New placements in cut order with ``cut_sequence`` set.
    """
    ordered = [p for row in group_rows(placements, row_tolerance) for p in row]
    return tuple(
        replace(placement, cut_sequence=rank)
        for rank, placement in enumerate(ordered, start=1)
    )
