"""High-level interface for cut optimization.

Provides the ``optimize`` entry point used by the surrounding application,
plus the side-effect-free material estimate and sufficiency checks that can
be used without running a full optimization.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from stockcut.contracts.protocols import Packer
from stockcut.domain.value_objects import (
    DemandPiece,
    MaterialEstimate,
    OptimizationMode,
    OptimizationResult,
    SufficiencyReport,
    SupplySheet,
)
from stockcut.infrastructure.bin_packing import MaxRectsPacker
from stockcut.infrastructure.cut_sequence import DEFAULT_ROW_TOLERANCE

from .factory import DEFAULT_ALGORITHM, ServiceFactory, get_factory
from .stock_matcher import StockMatcher
from .strategies import get_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationOptions:
    """Settings of one optimization run.

    Attributes:
        mode: Optimization policy.
        allow_rotation: Caller permission to rotate; a policy that forbids
            rotation wins over True here.
        algorithm: Packing algorithm name ("maxrects" or "guillotine").
        kerf: Saw kerf in mm.
        row_tolerance: Row band for the cut sequence in mm.
    """

    mode: OptimizationMode = OptimizationMode.MINIMIZE_WASTE
    allow_rotation: bool = True
    algorithm: str = DEFAULT_ALGORITHM
    kerf: float = 0.0
    row_tolerance: float = DEFAULT_ROW_TOLERANCE


def optimize(
    demand: Sequence[DemandPiece],
    supply: Sequence[SupplySheet],
    mode: OptimizationMode | str = OptimizationMode.MINIMIZE_WASTE,
    allow_rotation: bool = True,
    packer: Packer | None = None,
    row_tolerance: float = DEFAULT_ROW_TOLERANCE,
) -> OptimizationResult:
    """Run optimization to match demand pieces to stock sheets.

    The mode's policy reorders demand and decides rotation, then a single
    StockMatcher run places the pieces.

    Args:
        demand: Pieces to cut.
        supply: Stock sheets; only available sheets are used.
        mode: Optimization policy, as enum or string. Unknown values fall
            back to minimize-waste.
        allow_rotation: Set False to forbid rotation regardless of mode.
        packer: Packer to use; defaults to a MaxRectsPacker.
        row_tolerance: Row band for the cut sequence in mm.

    Returns:
        OptimizationResult tagged with the mode that was applied.
    """
    matcher = StockMatcher(packer or MaxRectsPacker(), row_tolerance=row_tolerance)
    return _optimize_with(matcher, demand, supply, mode, allow_rotation)


def _optimize_with(
    matcher: StockMatcher,
    demand: Sequence[DemandPiece],
    supply: Sequence[SupplySheet],
    mode: OptimizationMode | str,
    allow_rotation: bool,
) -> OptimizationResult:
    """Apply the policy of ``mode`` and run one matching pass."""
    policy = get_policy(mode)

    if not demand:
        return OptimizationResult(
            layouts=(),
            unmatched_pieces=(),
            total_waste_percentage=0.0,
            mode=policy.mode,
        )

    rotation = policy.allow_rotation and allow_rotation
    logger.info(
        "Optimizing %d piece types in %s mode (rotation %s)",
        len(demand),
        policy.mode.value,
        "allowed" if rotation else "disabled",
    )

    result = matcher.match(policy.order(demand), supply, allow_rotation=rotation)
    return replace(result, mode=policy.mode)


def run_optimization(
    demand: Sequence[DemandPiece],
    supply: Sequence[SupplySheet],
    options: OptimizationOptions,
    factory: ServiceFactory | None = None,
) -> OptimizationResult:
    """Run an optimization with settings taken from OptimizationOptions.

    Args:
        demand: Pieces to cut.
        supply: Stock sheets; only available sheets are used.
        options: Mode, rotation, algorithm, kerf and row tolerance.
        factory: Factory building the matcher; defaults to the shared one.

    Raises:
        ValueError: If the algorithm name or kerf is invalid.
    """
    matcher = (factory or get_factory()).create_stock_matcher(
        algorithm=options.algorithm,
        kerf=options.kerf,
        row_tolerance=options.row_tolerance,
    )
    return _optimize_with(
        matcher, demand, supply, options.mode, options.allow_rotation
    )


def estimate_material_needed(demand: Sequence[DemandPiece]) -> MaterialEstimate:
    """Estimate material requirements of a demand list.

    Args:
        demand: Pieces to cut.

    Returns:
        MaterialEstimate with total area, instance count and the dimensions
        of the largest single piece (first one wins on equal area).
    """
    total = 0.0
    count = 0
    largest: DemandPiece | None = None

    for piece in demand:
        total += piece.total_area
        count += piece.quantity
        if largest is None or piece.area > largest.area:
            largest = piece

    return MaterialEstimate(
        total_area=total,
        piece_count=count,
        largest_piece=(largest.width, largest.height) if largest else (0.0, 0.0),
    )


def check_sufficiency(
    demand: Sequence[DemandPiece],
    supply: Sequence[SupplySheet],
) -> SufficiencyReport:
    """Check whether available stock area covers the demand area.

    This is a coarse area comparison: a sufficient report does not mean the
    pieces will pack, but an insufficient one means some will not.

    Args:
        demand: Pieces to cut.
        supply: Stock sheets; only available sheets count.

    Returns:
        SufficiencyReport with areas in square mm.
    """
    required = estimate_material_needed(demand).total_area
    available = sum(sheet.area for sheet in supply if sheet.available)
    shortfall = max(0.0, required - available)

    return SufficiencyReport(
        is_sufficient=shortfall == 0,
        available_area=available,
        required_area=required,
        shortfall=shortfall,
    )
