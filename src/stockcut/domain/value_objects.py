"""Value objects for the stock cutting domain.

All dataclasses are frozen (immutable) so a single optimization run can
never alter its inputs, and results can be shared freely between threads.
Dimensions are in millimetres.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .exceptions import InvalidDimensionError


class PieceCategory(str, Enum):
    """Structural role of a demand piece within the furniture."""

    TOP = "top"
    BOTTOM = "bottom"
    SIDE = "side"
    BACK = "back"
    SHELF = "shelf"
    DOOR = "door"
    DIVIDER = "divider"
    OTHER = "other"


class OptimizationMode(str, Enum):
    """Externally selectable optimization policies.

    Each mode only changes demand ordering and whether pieces may be
    rotated; every mode runs the same matching algorithm.
    """

    MINIMIZE_WASTE = "minimize-waste"
    SIMPLIFY_CUTS = "simplify-cuts"
    GRAIN_DIRECTION = "grain-direction"
    MINIMIZE_SHEETS = "minimize-sheets"
    LARGEST_FIRST = "largest-first"
    EDGE_ALIGNMENT = "edge-alignment"


@dataclass(frozen=True)
class DemandPiece:
    """A distinct rectangular part type that needs to be cut.

    Attributes:
        id: Identifier, unique within one demand list.
        name: Display name ("Top", "Left Side", ...).
        width: Piece width in mm.
        height: Piece height in mm.
        quantity: Number of identical instances required.
        category: Structural role of the piece.
        thickness: Material thickness class in mm.
    """

    id: str
    name: str
    width: float
    height: float
    quantity: int
    category: PieceCategory
    thickness: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionError(
                f"Piece '{self.id}' dimensions must be positive "
                f"(got {self.width}x{self.height})"
            )
        if self.quantity < 1:
            raise InvalidDimensionError(
                f"Piece '{self.id}' quantity must be at least 1 (got {self.quantity})"
            )
        if self.thickness <= 0:
            raise InvalidDimensionError(
                f"Piece '{self.id}' thickness must be positive (got {self.thickness})"
            )

    @property
    def area(self) -> float:
        """Area of a single instance in square mm."""
        return self.width * self.height

    @property
    def total_area(self) -> float:
        """Area of all required instances in square mm."""
        return self.area * self.quantity

    @property
    def perimeter(self) -> float:
        """Perimeter of a single instance in mm."""
        return 2 * (self.width + self.height)


@dataclass(frozen=True)
class SupplySheet:
    """A raw material sheet available for cutting.

    Attributes:
        id: Identifier, unique within one supply list.
        width: Sheet width in mm.
        height: Sheet height in mm.
        thickness: Material thickness class in mm.
        available: False once the sheet is used up or marked unavailable.
    """

    id: str
    width: float
    height: float
    thickness: float
    available: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionError(
                f"Sheet '{self.id}' dimensions must be positive "
                f"(got {self.width}x{self.height})"
            )
        if self.thickness <= 0:
            raise InvalidDimensionError(
                f"Sheet '{self.id}' thickness must be positive (got {self.thickness})"
            )

    @property
    def area(self) -> float:
        """Sheet area in square mm."""
        return self.width * self.height


def instance_label(piece: DemandPiece, index: int) -> str:
    """Display label of one instance, numbered when the piece has several."""
    if piece.quantity == 1:
        return piece.name
    return f"{piece.name} #{index + 1}"


@dataclass(frozen=True)
class PieceInstance:
    """One physical instance of a demand piece.

    A DemandPiece with quantity N expands into N instances with indexes
    0..N-1, each of which is placed independently.

    Attributes:
        piece: The demand piece this instance belongs to.
        index: Which instance of the piece (0-based).
        entry: Position of the originating entry in the demand list. Two
            equal DemandPiece entries stay apart through their entry.
    """

    piece: DemandPiece
    index: int
    entry: int = 0

    def __post_init__(self) -> None:
        if self.entry < 0:
            raise ValueError("Entry position must be non-negative")
        if not 0 <= self.index < self.piece.quantity:
            raise ValueError(
                f"Instance index {self.index} out of range for piece "
                f"'{self.piece.id}' (quantity {self.piece.quantity})"
            )

    @property
    def width(self) -> float:
        return self.piece.width

    @property
    def height(self) -> float:
        return self.piece.height

    @property
    def area(self) -> float:
        return self.piece.area

    @property
    def label(self) -> str:
        """Display label, numbered when the piece has several instances."""
        return instance_label(self.piece, self.index)


def expand_instances(pieces: Iterable[DemandPiece]) -> list[PieceInstance]:
    """Expand demand pieces into individual instances, keeping demand order.

    Each instance records the position of its entry in ``pieces``.
    """
    return [
        PieceInstance(piece=piece, index=i, entry=entry)
        for entry, piece in enumerate(pieces)
        for i in range(piece.quantity)
    ]


def regroup_instances(instances: Iterable[PieceInstance]) -> tuple[DemandPiece, ...]:
    """Aggregate instances back into DemandPiece entries.

    Instances of the same originating entry collapse into one piece whose
    quantity is the instance count. Equal pieces from different entries
    are kept apart. Results keep the order in which their entry first
    appears.
    """
    counts: dict[tuple[int, DemandPiece], int] = {}
    for instance in instances:
        key = (instance.entry, instance.piece)
        counts[key] = counts.get(key, 0) + 1

    return tuple(
        DemandPiece(
            id=piece.id,
            name=piece.name,
            width=piece.width,
            height=piece.height,
            quantity=count,
            category=piece.category,
            thickness=piece.thickness,
        )
        for (_, piece), count in counts.items()
    )


@dataclass(frozen=True)
class Placement:
    """One piece instance located on a sheet.

    Coordinates are sheet-local with the origin at the sheet corner.

    Attributes:
        piece: The demand piece this instance belongs to.
        instance_index: Which instance of the piece (0-based).
        x: Horizontal position of the piece origin in mm.
        y: Vertical position of the piece origin in mm.
        rotated: True if the piece is turned 90 degrees.
        cut_sequence: 1-based cut order on the sheet, 0 until sequenced.
    """

    piece: DemandPiece
    instance_index: int
    x: float
    y: float
    rotated: bool = False
    cut_sequence: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.cut_sequence < 0:
            raise ValueError("Cut sequence must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def top_edge(self) -> float:
        return self.y + self.placed_height

    @property
    def label(self) -> str:
        return instance_label(self.piece, self.instance_index)

    @property
    def area(self) -> float:
        return self.placed_width * self.placed_height

    def overlaps(self, other: Placement) -> bool:
        """True if the interiors of the two placements intersect."""
        return (
            self.x < other.right_edge
            and other.x < self.right_edge
            and self.y < other.top_edge
            and other.y < self.top_edge
        )


@dataclass(frozen=True)
class SheetLayout:
    """All placements assigned to one supply sheet."""

    sheet: SupplySheet
    placements: tuple[Placement, ...]

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces in square mm."""
        return sum(p.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        return self.sheet.area - self.used_area

    @property
    def waste_percentage(self) -> float:
        """Percentage of the sheet area that is not covered by pieces."""
        return self.waste_area / self.sheet.area * 100

    @property
    def piece_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class OptimizationResult:
    """Complete output of one optimization run.

    Attributes:
        layouts: Sheet layouts in the order sheets were consumed.
        unmatched_pieces: Demand that could not be placed, with quantities
            reduced to the unplaced remainder.
        total_waste_percentage: Waste across all used sheets (0-100).
        mode: Policy the run was made with, if any.
    """

    layouts: tuple[SheetLayout, ...]
    unmatched_pieces: tuple[DemandPiece, ...]
    total_waste_percentage: float
    mode: OptimizationMode | None = None

    def __post_init__(self) -> None:
        if self.total_waste_percentage < 0 or self.total_waste_percentage > 100:
            raise ValueError("Waste percentage must be between 0 and 100")

    @property
    def sheets_used(self) -> int:
        return len(self.layouts)

    @property
    def total_pieces_placed(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def unmatched_count(self) -> int:
        """Number of piece instances that could not be placed."""
        return sum(piece.quantity for piece in self.unmatched_pieces)

    @property
    def is_complete(self) -> bool:
        """True when every demanded instance was placed."""
        return not self.unmatched_pieces


@dataclass(frozen=True)
class WasteStats:
    """Area statistics for a single sheet layout."""

    stock_area: float
    used_area: float
    waste_area: float
    waste_percentage: float
    efficiency: float


@dataclass(frozen=True)
class SufficiencyReport:
    """Coarse comparison of required area against available area.

    An area-sufficient report does not guarantee that the pieces will
    actually pack; geometry can still leave pieces unmatched.
    """

    is_sufficient: bool
    available_area: float
    required_area: float
    shortfall: float


@dataclass(frozen=True)
class MaterialEstimate:
    """Summary of the material a demand list requires.

    Attributes:
        total_area: Area of every instance in square mm.
        piece_count: Number of instances.
        largest_piece: (width, height) of the largest single piece by area.
    """

    total_area: float
    piece_count: int
    largest_piece: tuple[float, float]

