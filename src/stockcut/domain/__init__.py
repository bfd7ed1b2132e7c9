"""Domain layer - value objects and errors of the cutting-stock engine."""

from .exceptions import (
    InvalidDimensionError,
    PackingInconsistencyError,
    StockcutError,
)
from .value_objects import (
    DemandPiece,
    MaterialEstimate,
    OptimizationMode,
    OptimizationResult,
    PieceCategory,
    PieceInstance,
    Placement,
    SheetLayout,
    SufficiencyReport,
    SupplySheet,
    WasteStats,
    expand_instances,
    regroup_instances,
)

__all__ = [
    # Errors
    "InvalidDimensionError",
    "PackingInconsistencyError",
    "StockcutError",
    # Value objects
    "DemandPiece",
    "MaterialEstimate",
    "OptimizationMode",
    "OptimizationResult",
    "PieceCategory",
    "PieceInstance",
    "Placement",
    "SheetLayout",
    "SufficiencyReport",
    "SupplySheet",
    "WasteStats",
    # Helpers
    "expand_instances",
    "regroup_instances",
]
