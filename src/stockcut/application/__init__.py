"""Application layer - policies, matching and optimization use cases."""

from .factory import ServiceFactory, get_factory
from .optimizer import (
    OptimizationOptions,
    check_sufficiency,
    estimate_material_needed,
    optimize,
    run_optimization,
)
from .statistics import calculate_total_waste, calculate_waste_stats
from .stock_matcher import StockMatcher
from .strategies import POLICIES, OptimizationPolicy, get_policy

__all__ = [
    "OptimizationOptions",
    "OptimizationPolicy",
    "POLICIES",
    "ServiceFactory",
    "StockMatcher",
    "calculate_total_waste",
    "calculate_waste_stats",
    "check_sufficiency",
    "estimate_material_needed",
    "get_factory",
    "get_policy",
    "optimize",
    "run_optimization",
]
