"""Cutting-stock optimization for sheet materials.

Assigns rectangular furniture pieces to stock sheets of matching thickness
with minimal waste, under one of several optimization policies.

Usage:
    ```python
    from stockcut import DemandPiece, PieceCategory, SupplySheet, optimize

    demand = [DemandPiece("top", "Top", 800, 500, 1, PieceCategory.TOP, 18)]
    supply = [SupplySheet("s1", 1220, 2440, 18)]
    result = optimize(demand, supply, mode="minimize-waste")
    ```
"""

from stockcut.application import (
    check_sufficiency,
    estimate_material_needed,
    optimize,
)
from stockcut.domain import (
    DemandPiece,
    OptimizationMode,
    OptimizationResult,
    PieceCategory,
    Placement,
    SheetLayout,
    SupplySheet,
)

__version__ = "0.1.0"

__all__ = [
    "DemandPiece",
    "OptimizationMode",
    "OptimizationResult",
    "PieceCategory",
    "Placement",
    "SheetLayout",
    "SupplySheet",
    "check_sufficiency",
    "estimate_material_needed",
    "optimize",
]
