"""Optimization policies selectable by the caller.

Every policy is a pre-processing step in front of the same matching
algorithm: it only decides the order demand pieces are offered to the
packer and whether pieces may be rotated. The six policies form a closed
set keyed by ``OptimizationMode`` and are resolved once per run.

Example:
    ```python
    policy = get_policy("simplify-cuts")
    ordered = policy.order(demand)
    result = matcher.match(ordered, supply, allow_rotation=policy.allow_rotation)
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from stockcut.domain.value_objects import DemandPiece, OptimizationMode

logger = logging.getLogger(__name__)

SortKey = Callable[[DemandPiece], object]


def _area_descending(piece: DemandPiece) -> float:
    return -piece.area


def _perimeter_descending(piece: DemandPiece) -> float:
    return -piece.perimeter


def _category_ascending(piece: DemandPiece) -> str:
    return piece.category.value


@dataclass(frozen=True)
class OptimizationPolicy:
    """Demand ordering and rotation setting of one optimization mode.

    Attributes:
        mode: The mode this policy implements.
        allow_rotation: Whether the policy permits 90 degree rotation.
        sort_key: Key for a stable sort of demand, or None to keep input order.
        description: Short human-readable summary.
    """

    mode: OptimizationMode
    allow_rotation: bool
    sort_key: SortKey | None = None
    description: str = ""

    def order(self, demand: Sequence[DemandPiece]) -> list[DemandPiece]:
        """Return demand in the order this policy packs it.

        The sort is stable, so pieces with equal keys keep input order.
        """
        if self.sort_key is None:
            return list(demand)
        return sorted(demand, key=self.sort_key)


POLICIES: dict[OptimizationMode, OptimizationPolicy] = {
    OptimizationMode.MINIMIZE_WASTE: OptimizationPolicy(
        mode=OptimizationMode.MINIMIZE_WASTE,
        allow_rotation=True,
        description="Keep demand order, rotate pieces freely for the densest fit",
    ),
    OptimizationMode.SIMPLIFY_CUTS: OptimizationPolicy(
        mode=OptimizationMode.SIMPLIFY_CUTS,
        allow_rotation=False,
        sort_key=_area_descending,
        description="Largest pieces first, no rotation for cleaner layouts",
    ),
    OptimizationMode.GRAIN_DIRECTION: OptimizationPolicy(
        mode=OptimizationMode.GRAIN_DIRECTION,
        allow_rotation=False,
        sort_key=_category_ascending,
        description="Group pieces by category, no rotation to respect wood grain",
    ),
    OptimizationMode.MINIMIZE_SHEETS: OptimizationPolicy(
        mode=OptimizationMode.MINIMIZE_SHEETS,
        allow_rotation=True,
        sort_key=_area_descending,
        description="Largest pieces first with rotation to fill each sheet",
    ),
    OptimizationMode.LARGEST_FIRST: OptimizationPolicy(
        mode=OptimizationMode.LARGEST_FIRST,
        allow_rotation=True,
        sort_key=_area_descending,
        description="Largest pieces first, small pieces fill the gaps",
    ),
    OptimizationMode.EDGE_ALIGNMENT: OptimizationPolicy(
        mode=OptimizationMode.EDGE_ALIGNMENT,
        allow_rotation=False,
        sort_key=_perimeter_descending,
        description="Longest perimeter first, no rotation to keep edges aligned",
    ),
}


def get_policy(mode: OptimizationMode | str | None) -> OptimizationPolicy:
    """Resolve a mode (or its string value) to its policy.

    Unrecognized values fall back to minimize-waste.

    Args:
        mode: An OptimizationMode, its string value, or None.

    Returns:
        The matching OptimizationPolicy.
    """
    if isinstance(mode, OptimizationMode):
        return POLICIES[mode]

    try:
        return POLICIES[OptimizationMode(mode)]
    except ValueError:
        logger.warning(
            "Unknown optimization mode %r, falling back to %s",
            mode,
            OptimizationMode.MINIMIZE_WASTE.value,
        )
        return POLICIES[OptimizationMode.MINIMIZE_WASTE]


__all__ = [
    "OptimizationPolicy",
    "POLICIES",
    "get_policy",
]
