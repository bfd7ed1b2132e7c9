"""Tests for domain value objects.

Tests cover:
- Dimension validation of demand pieces and supply sheets
- Derived areas and perimeters
- Expansion of demand into instances and regrouping of leftovers
- Placement geometry and overlap detection
- Layout and result aggregates
"""

from __future__ import annotations

import pytest

from stockcut.domain import (
    DemandPiece,
    InvalidDimensionError,
    OptimizationMode,
    OptimizationResult,
    PieceCategory,
    PieceInstance,
    Placement,
    SheetLayout,
    StockcutError,
    SupplySheet,
    expand_instances,
    regroup_instances,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def shelf() -> DemandPiece:
    """Create a shelf piece needed three times."""
    return DemandPiece("shelf", "Shelf", 560, 300, 3, PieceCategory.SHELF, 18)


@pytest.fixture
def top() -> DemandPiece:
    """Create a single top piece."""
    return DemandPiece("top", "Top", 800, 500, 1, PieceCategory.TOP, 18)


# =============================================================================
# DemandPiece Tests
# =============================================================================


class TestDemandPiece:
    """Tests for DemandPiece dataclass."""

    def test_area_properties(self) -> None:
        """Test single and total area and perimeter."""
        piece = DemandPiece("top", "Top", 800, 500, 2, PieceCategory.TOP, 18)
        assert piece.area == 400_000
        assert piece.total_area == 800_000
        assert piece.perimeter == 2600

    @pytest.mark.parametrize("width,height", [(0, 500), (800, 0), (-1, 500)])
    def test_degenerate_dimensions_raise(self, width: float, height: float) -> None:
        """Test that non-positive width or height is rejected."""
        with pytest.raises(InvalidDimensionError, match="dimensions must be positive"):
            DemandPiece("p", "P", width, height, 1, PieceCategory.OTHER, 18)

    def test_zero_quantity_raises(self) -> None:
        """Test that quantity below one is rejected."""
        with pytest.raises(InvalidDimensionError, match="quantity must be at least 1"):
            DemandPiece("p", "P", 100, 100, 0, PieceCategory.OTHER, 18)

    def test_zero_thickness_raises(self) -> None:
        """Test that non-positive thickness is rejected."""
        with pytest.raises(InvalidDimensionError, match="thickness must be positive"):
            DemandPiece("p", "P", 100, 100, 1, PieceCategory.OTHER, 0)

    def test_invalid_dimension_is_value_error(self) -> None:
        """Test that dimension errors can be caught as ValueError or StockcutError."""
        with pytest.raises(ValueError):
            DemandPiece("p", "P", -5, 100, 1, PieceCategory.OTHER, 18)
        with pytest.raises(StockcutError):
            DemandPiece("p", "P", -5, 100, 1, PieceCategory.OTHER, 18)

    def test_is_immutable(self, top: DemandPiece) -> None:
        """Test that pieces cannot be modified."""
        with pytest.raises(AttributeError):
            top.width = 900  # type: ignore[misc]


# =============================================================================
# SupplySheet Tests
# =============================================================================


class TestSupplySheet:
    """Tests for SupplySheet dataclass."""

    def test_defaults_to_available(self) -> None:
        sheet = SupplySheet("s1", 1220, 2440, 18)
        assert sheet.available is True
        assert sheet.area == 1220 * 2440

    def test_degenerate_dimensions_raise(self) -> None:
        with pytest.raises(InvalidDimensionError, match="dimensions must be positive"):
            SupplySheet("s1", 0, 2440, 18)

    def test_zero_thickness_raises(self) -> None:
        with pytest.raises(InvalidDimensionError, match="thickness must be positive"):
            SupplySheet("s1", 1220, 2440, 0)


# =============================================================================
# PieceInstance Tests
# =============================================================================


class TestPieceInstance:
    """Tests for PieceInstance and instance expansion."""

    def test_label_numbers_multiple_instances(self, shelf: DemandPiece) -> None:
        """Test that instances of a multi-quantity piece are numbered from 1."""
        assert PieceInstance(shelf, 1).label == "Shelf #2"

    def test_label_single_instance(self, top: DemandPiece) -> None:
        assert PieceInstance(top, 0).label == "Top"

    def test_index_out_of_range_raises(self, top: DemandPiece) -> None:
        with pytest.raises(ValueError, match="out of range"):
            PieceInstance(top, 1)

    def test_expand_keeps_demand_order(
        self, shelf: DemandPiece, top: DemandPiece
    ) -> None:
        """Test that expansion yields each piece's instances in demand order."""
        instances = expand_instances([top, shelf])
        assert [(i.piece.id, i.index) for i in instances] == [
            ("top", 0),
            ("shelf", 0),
            ("shelf", 1),
            ("shelf", 2),
        ]

    def test_regroup_collapses_instances(
        self, shelf: DemandPiece, top: DemandPiece
    ) -> None:
        """Test that leftovers regroup per piece in first-appearance order."""
        instances = [
            PieceInstance(shelf, 2),
            PieceInstance(top, 0),
            PieceInstance(shelf, 0),
        ]
        regrouped = regroup_instances(instances)

        assert [(p.id, p.quantity) for p in regrouped] == [("shelf", 2), ("top", 1)]
        assert regrouped[0].width == shelf.width
        assert regrouped[0].category == PieceCategory.SHELF

    def test_expand_records_entry(self, shelf: DemandPiece, top: DemandPiece) -> None:
        instances = expand_instances([top, shelf])
        assert [i.entry for i in instances] == [0, 1, 1, 1]

    def test_regroup_keeps_equal_entries_apart(self, shelf: DemandPiece) -> None:
        """Test that the same piece listed twice regroups into two entries."""
        instances = expand_instances([shelf, shelf])

        regrouped = regroup_instances(instances[1:])

        assert [(p.id, p.quantity) for p in regrouped] == [("shelf", 2), ("shelf", 3)]

    def test_negative_entry_raises(self, top: DemandPiece) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            PieceInstance(top, 0, entry=-1)

    def test_regroup_empty(self) -> None:
        assert regroup_instances([]) == ()


# =============================================================================
# Placement Tests
# =============================================================================


class TestPlacement:
    """Tests for Placement dataclass."""

    def test_placed_dimensions_not_rotated(self, top: DemandPiece) -> None:
        placement = Placement(top, 0, x=10, y=20)
        assert placement.placed_width == 800
        assert placement.placed_height == 500
        assert placement.right_edge == 810
        assert placement.top_edge == 520

    def test_placed_dimensions_rotated(self, top: DemandPiece) -> None:
        """Test that rotation swaps the footprint but not the area."""
        placement = Placement(top, 0, x=0, y=0, rotated=True)
        assert placement.placed_width == 500
        assert placement.placed_height == 800
        assert placement.area == top.area

    def test_label_matches_instance_label(self, shelf: DemandPiece) -> None:
        """Test that placements are labelled like their instances."""
        placement = Placement(shelf, 2, x=0, y=0)
        assert placement.label == PieceInstance(shelf, 2).label == "Shelf #3"

    def test_negative_position_raises(self, top: DemandPiece) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Placement(top, 0, x=-1, y=0)

    def test_overlapping_placements(self, top: DemandPiece) -> None:
        first = Placement(top, 0, x=0, y=0)
        second = Placement(top, 0, x=799, y=499)
        assert first.overlaps(second)
        assert second.overlaps(first)

    def test_touching_edges_do_not_overlap(self, top: DemandPiece) -> None:
        """Test that pieces sharing an edge are not considered overlapping."""
        first = Placement(top, 0, x=0, y=0)
        beside = Placement(top, 0, x=800, y=0)
        above = Placement(top, 0, x=0, y=500)
        assert not first.overlaps(beside)
        assert not first.overlaps(above)


# =============================================================================
# SheetLayout and OptimizationResult Tests
# =============================================================================


class TestSheetLayout:
    """Tests for SheetLayout aggregates."""

    def test_used_and_waste_area(self, top: DemandPiece) -> None:
        sheet = SupplySheet("s1", 1000, 1000, 18)
        layout = SheetLayout(sheet, (Placement(top, 0, 0, 0),))

        assert layout.used_area == 400_000
        assert layout.waste_area == 600_000
        assert layout.waste_percentage == pytest.approx(60.0)
        assert layout.piece_count == 1


class TestOptimizationResult:
    """Tests for OptimizationResult aggregates."""

    def test_waste_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError, match="between 0 and 100"):
            OptimizationResult(layouts=(), unmatched_pieces=(), total_waste_percentage=101)

    def test_empty_result(self) -> None:
        result = OptimizationResult((), (), 0.0)
        assert result.sheets_used == 0
        assert result.total_pieces_placed == 0
        assert result.is_complete
        assert result.mode is None

    def test_counts(self, shelf: DemandPiece, top: DemandPiece) -> None:
        """Test placed and unmatched instance counts."""
        sheet = SupplySheet("s1", 1220, 2440, 18)
        layout = SheetLayout(
            sheet,
            (Placement(top, 0, 0, 0), Placement(shelf, 0, 0, 500)),
        )
        leftover = regroup_instances([PieceInstance(shelf, 1), PieceInstance(shelf, 2)])
        result = OptimizationResult(
            (layout,), leftover, 50.0, mode=OptimizationMode.LARGEST_FIRST
        )

        assert result.sheets_used == 1
        assert result.total_pieces_placed == 2
        assert result.unmatched_count == 2
        assert not result.is_complete
