"""Infrastructure layer - packing heuristics and output formatters."""

from .bin_packing import (
    PACKERS,
    BasePacker,
    GuillotinePacker,
    MaxRectsPacker,
    PackerConfig,
    PackingResult,
)
from .cut_sequence import DEFAULT_ROW_TOLERANCE, calculate_cut_sequence, group_rows
from .formatters import (
    JsonExporter,
    OptimizationReportFormatter,
    SufficiencyReportFormatter,
)

__all__ = [
    # Bin packing
    "BasePacker",
    "GuillotinePacker",
    "MaxRectsPacker",
    "PACKERS",
    "PackerConfig",
    "PackingResult",
    # Cut sequence
    "DEFAULT_ROW_TOLERANCE",
    "calculate_cut_sequence",
    "group_rows",
    # Formatters
    "JsonExporter",
    "OptimizationReportFormatter",
    "SufficiencyReportFormatter",
]
