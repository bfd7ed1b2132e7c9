"""Matching of demand pieces to stock sheets.

The StockMatcher owns sheet selection order and thickness safety. It groups
demand and available supply by thickness, offers the remaining pieces of a
group to each sheet in turn (largest sheet first) through a Packer, and
collects the per-sheet layouts into one OptimizationResult. It never looks
at piece geometry itself.
"""

from __future__ import annotations

import logging
from typing import Sequence

from stockcut.contracts.protocols import Packer
from stockcut.domain.value_objects import (
    DemandPiece,
    OptimizationResult,
    PieceInstance,
    SheetLayout,
    SupplySheet,
    expand_instances,
    regroup_instances,
)
from stockcut.infrastructure.cut_sequence import (
    DEFAULT_ROW_TOLERANCE,
    calculate_cut_sequence,
)

from .statistics import calculate_total_waste

logger = logging.getLogger(__name__)


class StockMatcher:
    """Coordinates packing of demand across the available stock sheets.

    Pieces can only be cut from sheets of the same thickness, so demand and
    supply are partitioned into thickness groups that are matched
    independently, then combined into one result.

    Attributes:
        packer: Packer used to fill individual sheets.
        row_tolerance: Row band for the per-sheet cut sequence, in mm.
    """

    def __init__(
        self,
        packer: Packer,
        row_tolerance: float = DEFAULT_ROW_TOLERANCE,
    ) -> None:
        self.packer = packer
        self.row_tolerance = row_tolerance

    def match(
        self,
        demand: Sequence[DemandPiece],
        supply: Sequence[SupplySheet],
        allow_rotation: bool = True,
    ) -> OptimizationResult:
        """Match demand pieces to available stock sheets.

        Demand order is preserved within each thickness group; it is the
        order instances are offered to the packer.

        Args:
            demand: Pieces to cut.
            supply: Stock sheets; unavailable sheets are ignored.
            allow_rotation: Whether pieces may be turned 90 degrees.

        Returns:
            OptimizationResult with layouts, unmatched remainder and waste.
        """
        if not demand:
            return OptimizationResult(
                layouts=(),
                unmatched_pieces=(),
                total_waste_percentage=0.0,
            )

        demand_groups = self._group_demand(demand)
        supply_groups = self._group_supply(
            [sheet for sheet in supply if sheet.available]
        )

        logger.info(
            "Matching %d pieces across %d thickness groups onto %d available sheets",
            len(demand),
            len(demand_groups),
            sum(len(sheets) for sheets in supply_groups.values()),
        )

        layouts: list[SheetLayout] = []
        unmatched: list[DemandPiece] = []

        for thickness, pieces in demand_groups.items():
            sheets = supply_groups.get(thickness, [])
            if not sheets:
                logger.info(
                    "No available stock of thickness %s, %d pieces unmatched",
                    thickness,
                    len(pieces),
                )
                unmatched.extend(pieces)
                continue

            group_layouts, remaining = self._match_group(
                pieces, sheets, allow_rotation
            )
            layouts.extend(group_layouts)
            unmatched.extend(regroup_instances(remaining))

        total_waste = calculate_total_waste(layouts)

        logger.info(
            "Used %d sheets, %.1f%% waste, %d piece types unmatched",
            len(layouts),
            total_waste,
            len(unmatched),
        )

        return OptimizationResult(
            layouts=tuple(layouts),
            unmatched_pieces=tuple(unmatched),
            total_waste_percentage=total_waste,
        )

    def _match_group(
        self,
        pieces: list[DemandPiece],
        sheets: list[SupplySheet],
        allow_rotation: bool,
    ) -> tuple[list[SheetLayout], list[PieceInstance]]:
        """Pack one thickness group onto its sheets, largest sheet first.

        Returns:
            Tuple of (layouts for sheets that received pieces, instances left
            over after every sheet was tried).
        """
        remaining = expand_instances(pieces)
        layouts: list[SheetLayout] = []

        for sheet in sorted(sheets, key=lambda s: s.area, reverse=True):
            if not remaining:
                break

            result = self.packer.pack(remaining, sheet, allow_rotation)
            if not result.placed:
                continue

            layout = SheetLayout(
                sheet=sheet,
                placements=calculate_cut_sequence(result.placed, self.row_tolerance),
            )
            layouts.append(layout)
            remaining = list(result.unplaced)

            logger.debug(
                "Sheet '%s': %d pieces, %.1f%% waste",
                sheet.id,
                layout.piece_count,
                layout.waste_percentage,
            )

        return layouts, remaining

    def _group_demand(
        self,
        pieces: Sequence[DemandPiece],
    ) -> dict[float, list[DemandPiece]]:
        """Group pieces by thickness, in order of first appearance."""
        groups: dict[float, list[DemandPiece]] = {}
        for piece in pieces:
            groups.setdefault(piece.thickness, []).append(piece)
        return groups

    def _group_supply(
        self,
        sheets: Sequence[SupplySheet],
    ) -> dict[float, list[SupplySheet]]:
        """Group sheets by thickness."""
        groups: dict[float, list[SupplySheet]] = {}
        for sheet in sheets:
            groups.setdefault(sheet.thickness, []).append(sheet)
        return groups
