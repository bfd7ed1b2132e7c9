"""Bin packing algorithms for placing demand pieces onto one stock sheet.

This module provides two packers behind the ``Packer`` protocol:

- ``MaxRectsPacker``: maintains the maximal free rectangles of the sheet and
  puts each piece into the free rectangle with the best short-side fit.
  This is the default packer and gives the densest layouts.
- ``GuillotinePacker``: shelf algorithm producing layouts that can always be
  separated by edge-to-edge cuts, suitable for panel saws and table saws.

Both share ``BasePacker.pack``, which validates every layout and fails soft:
an inconsistent attempt reports nothing placed instead of returning invalid
geometry.

Result dataclasses are frozen (immutable); packers keep all working state in
local variables so one instance can be shared between concurrent runs.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from stockcut.domain.exceptions import PackingInconsistencyError
from stockcut.domain.value_objects import (
    DemandPiece,
    PieceInstance,
    Placement,
    SupplySheet,
    regroup_instances,
)

logger = logging.getLogger(__name__)

# Tolerance for floating point comparisons of lengths in mm
EPSILON = 1e-9


@dataclass(frozen=True)
class PackerConfig:
    """Configuration shared by all packers.

    Attributes:
        kerf: Saw blade kerf width in mm, left between adjacent pieces.
    """

    kerf: float = 0.0

    def __post_init__(self) -> None:
        if not 0 <= self.kerf <= 10:
            raise ValueError("Kerf must be between 0 and 10 mm")


@dataclass(frozen=True)
class PackingResult:
    """Outcome of packing instances onto a single sheet.

    Attributes:
        placed: Placements on the sheet, in placement order.
        unplaced: Instances that did not fit, in input order.
    """

    placed: tuple[Placement, ...]
    unplaced: tuple[PieceInstance, ...]

    @property
    def placed_count(self) -> int:
        return len(self.placed)

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces in square mm."""
        return sum(p.area for p in self.placed)

    @property
    def unplaced_pieces(self) -> tuple[DemandPiece, ...]:
        """Unplaced instances re-aggregated into demand pieces."""
        return regroup_instances(self.unplaced)


class BasePacker(ABC):
    """Template for single-sheet packers.

    Subclasses implement ``_place``; ``pack`` wraps it with thickness checks,
    layout verification and the fail-soft recovery.

    ``_place`` reports each placement together with the position of its
    instance in the input list. Accounting is done on those positions, so
    equal instances from duplicate demand entries are never confused.

    Attributes:
        config: Packer configuration (kerf).
    """

    name = "base"

    def __init__(self, config: PackerConfig | None = None) -> None:
        self.config = config or PackerConfig()

    def pack(
        self,
        instances: Sequence[PieceInstance],
        sheet: SupplySheet,
        allow_rotation: bool = True,
    ) -> PackingResult:
        """Place as many instances as possible onto one sheet.

        Instances are attempted in the given order; the packer never re-sorts
        them.

        Args:
            instances: Piece instances to place, all of the sheet's thickness.
            sheet: The sheet to place pieces on.
            allow_rotation: Whether instances may be turned 90 degrees.

        Returns:
            PackingResult accounting for every instance exactly once. If the
            heuristic fails, nothing is placed and every instance is returned
            as unplaced.
        """
        pending = list(instances)
        if not pending:
            return PackingResult(placed=(), unplaced=())

        try:
            self._check_thickness(pending, sheet)
            placed = self._place(pending, sheet, allow_rotation)
            self._verify(placed, pending, sheet, allow_rotation)
        except (PackingInconsistencyError, ValueError) as e:
            logger.warning(
                "%s packer failed on sheet '%s', treating as nothing packed: %s",
                self.name,
                sheet.id,
                e,
            )
            return PackingResult(placed=(), unplaced=tuple(pending))

        placed_positions = {position for position, _ in placed}
        unplaced = tuple(
            instance
            for position, instance in enumerate(pending)
            if position not in placed_positions
        )

        logger.debug(
            "Sheet '%s' (%sx%s): %d placed, %d unplaced",
            sheet.id,
            sheet.width,
            sheet.height,
            len(placed),
            len(unplaced),
        )

        return PackingResult(
            placed=tuple(placement for _, placement in placed),
            unplaced=unplaced,
        )

    @abstractmethod
    def _place(
        self,
        instances: list[PieceInstance],
        sheet: SupplySheet,
        allow_rotation: bool,
    ) -> list[tuple[int, Placement]]:
        """Run the heuristic.

        Returns:
            (position in ``instances``, placement) pairs in placement order.
        """

    def _check_thickness(
        self, instances: list[PieceInstance], sheet: SupplySheet
    ) -> None:
        for instance in instances:
            if instance.piece.thickness != sheet.thickness:
                raise PackingInconsistencyError(
                    f"Piece '{instance.piece.id}' thickness {instance.piece.thickness} "
                    f"does not match sheet '{sheet.id}' thickness {sheet.thickness}"
                )

    def _verify(
        self,
        placed: list[tuple[int, Placement]],
        instances: list[PieceInstance],
        sheet: SupplySheet,
        allow_rotation: bool,
    ) -> None:
        """Check bounds, overlap, rotation and instance accounting.

        Raises:
            PackingInconsistencyError: If any placement is invalid.
        """
        seen: set[int] = set()

        for position, placement in placed:
            if not 0 <= position < len(instances):
                raise PackingInconsistencyError(
                    f"Placement of '{placement.piece.id}' refers to unknown "
                    f"instance position {position}"
                )
            instance = instances[position]
            if (instance.piece, instance.index) != (
                placement.piece,
                placement.instance_index,
            ):
                raise PackingInconsistencyError(
                    f"Placement of '{placement.piece.id}' #{placement.instance_index} "
                    f"does not match instance '{instance.label}' at position {position}"
                )
            if position in seen:
                raise PackingInconsistencyError(
                    f"Instance '{placement.piece.id}' #{placement.instance_index} "
                    "placed twice"
                )
            seen.add(position)

            if placement.rotated and not allow_rotation:
                raise PackingInconsistencyError(
                    f"Piece '{placement.piece.id}' rotated although rotation is disabled"
                )
            if (
                placement.right_edge > sheet.width + EPSILON
                or placement.top_edge > sheet.height + EPSILON
            ):
                raise PackingInconsistencyError(
                    f"Piece '{placement.piece.id}' at ({placement.x}, {placement.y}) "
                    f"exceeds sheet '{sheet.id}' ({sheet.width}x{sheet.height})"
                )

        placements = [placement for _, placement in placed]
        for i, first in enumerate(placements):
            for second in placements[i + 1 :]:
                if _interiors_intersect(first, second):
                    raise PackingInconsistencyError(
                        f"Pieces '{first.piece.id}' and '{second.piece.id}' overlap "
                        f"on sheet '{sheet.id}'"
                    )


def _interiors_intersect(a: Placement, b: Placement) -> bool:
    return (
        a.x < b.right_edge - EPSILON
        and b.x < a.right_edge - EPSILON
        and a.y < b.top_edge - EPSILON
        and b.y < a.top_edge - EPSILON
    )


@dataclass(frozen=True)
class _FreeRect:
    """Internal free rectangle of the MaxRects algorithm."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    def contains(self, other: _FreeRect) -> bool:
        return (
            other.x >= self.x - EPSILON
            and other.y >= self.y - EPSILON
            and other.right <= self.right + EPSILON
            and other.top <= self.top + EPSILON
        )

    def intersects(self, x: float, y: float, width: float, height: float) -> bool:
        return (
            x < self.right - EPSILON
            and self.x < x + width - EPSILON
            and y < self.top - EPSILON
            and self.y < y + height - EPSILON
        )


class MaxRectsPacker(BasePacker):
    """Free-region packer using maximal rectangles.

    The free space of the sheet is kept as a list of (possibly overlapping)
    maximal empty rectangles. Each piece goes into the free rectangle that
    leaves the smallest short-side leftover ("best short side fit"), with
    ties broken by the long-side leftover. The original orientation is tried
    before the rotated one, so rotation only wins when strictly better.

    After each placement every free rectangle that intersects the piece
    (inflated by the kerf) is split into up to four maximal remainders, and
    rectangles contained in another are pruned.
    """

    name = "maxrects"

    def _place(
        self,
        instances: list[PieceInstance],
        sheet: SupplySheet,
        allow_rotation: bool,
    ) -> list[tuple[int, Placement]]:
        kerf = self.config.kerf
        free_rects = [_FreeRect(0.0, 0.0, sheet.width, sheet.height)]
        placed: list[tuple[int, Placement]] = []

        for position, instance in enumerate(instances):
            choice = self._find_best_rect(instance, free_rects, allow_rotation)
            if choice is None:
                logger.debug(
                    "Piece '%s' (%sx%s) does not fit on sheet '%s'",
                    instance.label,
                    instance.width,
                    instance.height,
                    sheet.id,
                )
                continue

            rect, rotated = choice
            placement = Placement(
                piece=instance.piece,
                instance_index=instance.index,
                x=rect.x,
                y=rect.y,
                rotated=rotated,
            )
            placed.append((position, placement))

            free_rects = self._split_free_rects(
                free_rects,
                placement.x,
                placement.y,
                placement.placed_width + kerf,
                placement.placed_height + kerf,
            )

            if rotated:
                logger.debug(
                    "Piece '%s' placed rotated at (%s, %s)",
                    instance.label,
                    placement.x,
                    placement.y,
                )

        return placed

    def _find_best_rect(
        self,
        instance: PieceInstance,
        free_rects: list[_FreeRect],
        allow_rotation: bool,
    ) -> tuple[_FreeRect, bool] | None:
        """Find the free rectangle with the best short side fit.

        Returns:
            Tuple of (rectangle, rotated), or None if the piece fits nowhere.
        """
        orientations = [(instance.width, instance.height, False)]
        if allow_rotation and instance.width != instance.height:
            orientations.append((instance.height, instance.width, True))

        best: tuple[_FreeRect, bool] | None = None
        best_score: tuple[float, float] | None = None

        for rect in free_rects:
            for width, height, rotated in orientations:
                if width > rect.width + EPSILON or height > rect.height + EPSILON:
                    continue
                leftover_x = rect.width - width
                leftover_y = rect.height - height
                score = (min(leftover_x, leftover_y), max(leftover_x, leftover_y))
                if best_score is None or score < best_score:
                    best_score = score
                    best = (rect, rotated)

        return best

    def _split_free_rects(
        self,
        free_rects: list[_FreeRect],
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> list[_FreeRect]:
        """Remove the occupied area from every free rectangle it touches."""
        result: list[_FreeRect] = []

        for rect in free_rects:
            if not rect.intersects(x, y, width, height):
                result.append(rect)
                continue

            # Left remainder
            if x > rect.x + EPSILON:
                result.append(_FreeRect(rect.x, rect.y, x - rect.x, rect.height))
            # Right remainder
            if x + width < rect.right - EPSILON:
                result.append(
                    _FreeRect(x + width, rect.y, rect.right - (x + width), rect.height)
                )
            # Bottom remainder
            if y > rect.y + EPSILON:
                result.append(_FreeRect(rect.x, rect.y, rect.width, y - rect.y))
            # Top remainder
            if y + height < rect.top - EPSILON:
                result.append(
                    _FreeRect(rect.x, y + height, rect.width, rect.top - (y + height))
                )

        return self._prune(result)

    def _prune(self, free_rects: list[_FreeRect]) -> list[_FreeRect]:
        """Drop free rectangles fully contained in another one."""
        pruned: list[_FreeRect] = []
        for i, rect in enumerate(free_rects):
            contained = False
            for j, other in enumerate(free_rects):
                if i == j or not other.contains(rect):
                    continue
                # Of two identical rectangles keep the first
                if rect.contains(other) and i < j:
                    continue
                contained = True
                break
            if not contained:
                pruned.append(rect)
        return pruned


@dataclass
class _Shelf:
    """Internal shelf representation for the guillotine packer.

    Represents a horizontal band on a sheet where pieces are placed
    left-to-right. Each shelf's height is set by the first piece placed on it.

    Attributes:
        y: Bottom Y position of shelf.
        height: Height of shelf (set by first piece placed).
        remaining_width: Width remaining for more pieces.
        pieces: List of pieces placed on this shelf.
    """

    y: float
    height: float
    remaining_width: float
    pieces: list[Placement] = field(default_factory=list)


class GuillotinePacker(BasePacker):
    """Bin packing with guillotine cut constraint using shelf algorithm.

    The shelf algorithm creates horizontal bands (shelves) across the sheet.
    Each shelf's height is determined by the first piece placed on it.
    Pieces are placed left-to-right within each shelf.

    This produces guillotine-compatible layouts where all cuts go edge-to-edge:
    rip the sheet into shelves, then crosscut each shelf into pieces.
    """

    name = "guillotine"

    def _place(
        self,
        instances: list[PieceInstance],
        sheet: SupplySheet,
        allow_rotation: bool,
    ) -> list[tuple[int, Placement]]:
        kerf = self.config.kerf

        shelves: list[_Shelf] = []
        placed: list[tuple[int, Placement]] = []
        current_y = 0.0  # Bottom of available space for new shelves

        for position, instance in enumerate(instances):
            placement = None

            # Try to fit on existing shelf (with rotation check)
            for shelf in shelves:
                fits, rotated = self._piece_fits_on_shelf(
                    instance, shelf, kerf, allow_rotation
                )
                if fits:
                    placement = self._place_on_shelf(instance, shelf, kerf, rotated)
                    break

            if placement is None:
                available_height = sheet.height - current_y
                fits, rotated = self._piece_fits_new_shelf(
                    instance, available_height, sheet.width, allow_rotation
                )

                if fits:
                    piece_height = instance.width if rotated else instance.height
                    shelf = _Shelf(
                        y=current_y,
                        height=piece_height,
                        remaining_width=sheet.width,
                    )
                    shelves.append(shelf)
                    placement = self._place_on_shelf(instance, shelf, kerf, rotated)

                    current_y += piece_height + kerf

            if placement is None:
                logger.debug(
                    "Piece '%s' (%sx%s) does not fit on sheet '%s'",
                    instance.label,
                    instance.width,
                    instance.height,
                    sheet.id,
                )
                continue

            placed.append((position, placement))

        return placed

    def _piece_fits_on_shelf(
        self,
        instance: PieceInstance,
        shelf: _Shelf,
        kerf: float,
        allow_rotation: bool,
    ) -> tuple[bool, bool]:
        """Check if piece fits on existing shelf, considering rotation.

        Returns:
            Tuple of (fits, rotated):
            - fits: True if piece fits in some orientation
            - rotated: True if piece must be rotated to fit
        """
        gap = kerf if shelf.pieces else 0.0

        if (
            instance.height <= shelf.height + EPSILON
            and instance.width + gap <= shelf.remaining_width + EPSILON
        ):
            return (True, False)

        if allow_rotation and instance.width != instance.height:
            if (
                instance.width <= shelf.height + EPSILON
                and instance.height + gap <= shelf.remaining_width + EPSILON
            ):
                logger.debug("Piece '%s' fits on shelf when rotated", instance.label)
                return (True, True)

        return (False, False)

    def _piece_fits_new_shelf(
        self,
        instance: PieceInstance,
        available_height: float,
        usable_width: float,
        allow_rotation: bool,
    ) -> tuple[bool, bool]:
        """Check if piece can start a new shelf, considering rotation.

        Returns:
            Tuple of (fits, rotated) as for ``_piece_fits_on_shelf``.
        """
        if (
            instance.height <= available_height + EPSILON
            and instance.width <= usable_width + EPSILON
        ):
            return (True, False)

        if allow_rotation and instance.width != instance.height:
            if (
                instance.width <= available_height + EPSILON
                and instance.height <= usable_width + EPSILON
            ):
                logger.debug(
                    "Piece '%s' fits on new shelf when rotated", instance.label
                )
                return (True, True)

        return (False, False)

    def _place_on_shelf(
        self,
        instance: PieceInstance,
        shelf: _Shelf,
        kerf: float,
        rotated: bool = False,
    ) -> Placement:
        """Place a piece on a shelf and update shelf state."""
        if shelf.pieces:
            x = shelf.pieces[-1].right_edge + kerf
        else:
            x = 0.0

        placement = Placement(
            piece=instance.piece,
            instance_index=instance.index,
            x=x,
            y=shelf.y,
            rotated=rotated,
        )

        shelf.pieces.append(placement)
        width_used = placement.placed_width + (kerf if len(shelf.pieces) > 1 else 0)
        shelf.remaining_width -= width_used

        return placement


PACKERS: dict[str, type[BasePacker]] = {
    MaxRectsPacker.name: MaxRectsPacker,
    GuillotinePacker.name: GuillotinePacker,
}
