"""Tests for the StockMatcher orchestrator.

Tests cover:
- Thickness partitioning and incompatible thickness handling
- Sheet availability and largest-sheet-first selection
- Overflow of demand onto further sheets
- Regrouping of unmatched instances
- Packer substitution through the Packer protocol
"""

from __future__ import annotations

from typing import Sequence

import pytest

from stockcut.application.stock_matcher import StockMatcher
from stockcut.domain import (
    DemandPiece,
    PieceCategory,
    PieceInstance,
    SupplySheet,
)
from stockcut.infrastructure.bin_packing import MaxRectsPacker, PackingResult


@pytest.fixture
def matcher() -> StockMatcher:
    """Create a StockMatcher using the default MaxRects packer."""
    return StockMatcher(MaxRectsPacker())


def _piece(
    piece_id: str,
    width: float,
    height: float,
    quantity: int = 1,
    thickness: float = 18,
) -> DemandPiece:
    return DemandPiece(
        piece_id, piece_id.title(), width, height, quantity, PieceCategory.OTHER, thickness
    )


class _NothingFitsPacker:
    """Protocol-conforming packer that never places anything."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def pack(
        self,
        instances: Sequence[PieceInstance],
        sheet: SupplySheet,
        allow_rotation: bool = True,
    ) -> PackingResult:
        self.calls.append(sheet.id)
        return PackingResult(placed=(), unplaced=tuple(instances))


class TestStockMatcher:
    """Tests for StockMatcher.match."""

    def test_empty_demand(self, matcher: StockMatcher, full_sheet: SupplySheet) -> None:
        result = matcher.match([], [full_sheet])

        assert result.layouts == ()
        assert result.unmatched_pieces == ()
        assert result.total_waste_percentage == 0.0

    def test_empty_supply(self, matcher: StockMatcher) -> None:
        """Test that demand without any supply is entirely unmatched."""
        piece = _piece("top", 800, 500, quantity=2)

        result = matcher.match([piece], [])

        assert result.layouts == ()
        assert result.unmatched_pieces == (piece,)

    def test_incompatible_thickness_unmatched(
        self, matcher: StockMatcher, full_sheet: SupplySheet
    ) -> None:
        thick = _piece("a", 800, 500)
        thin = _piece("b", 600, 400, thickness=12)

        result = matcher.match([thick, thin], [full_sheet])

        assert result.total_pieces_placed == 1
        assert result.layouts[0].placements[0].piece == thick
        assert result.unmatched_pieces == (thin,)

    def test_groups_use_own_sheets(self, matcher: StockMatcher) -> None:
        """Test that every thickness group is cut from its own stock."""
        sheets = [
            SupplySheet("s18", 1220, 2440, 18),
            SupplySheet("s12", 1220, 2440, 12),
        ]
        demand = [_piece("a", 800, 500), _piece("b", 600, 400, thickness=12)]

        result = matcher.match(demand, sheets)

        assert result.is_complete
        by_sheet = {
            layout.sheet.id: [p.piece.id for p in layout.placements]
            for layout in result.layouts
        }
        assert by_sheet == {"s18": ["a"], "s12": ["b"]}

    def test_groups_matched_in_demand_order(self, matcher: StockMatcher) -> None:
        """Test that layouts follow the first appearance of each thickness."""
        sheets = [
            SupplySheet("s18", 1220, 2440, 18),
            SupplySheet("s6", 1220, 2440, 6),
        ]
        demand = [
            _piece("back", 600, 720, thickness=6),
            _piece("side", 560, 720),
            _piece("divider", 300, 300, thickness=6),
        ]

        result = matcher.match(demand, sheets)

        assert [layout.sheet.id for layout in result.layouts] == ["s6", "s18"]

    def test_equal_entries_do_not_spoil_group(
        self, matcher: StockMatcher, full_sheet: SupplySheet
    ) -> None:
        """Test that listing a piece twice still packs its whole group."""
        shelf = _piece("shelf", 400, 300)
        demand = [_piece("top", 800, 500), shelf, _piece("shelf", 400, 300)]

        result = matcher.match(demand, [full_sheet])

        assert result.is_complete
        assert result.total_pieces_placed == 3

    def test_unavailable_sheets_ignored(self, matcher: StockMatcher) -> None:
        sheets = [
            SupplySheet("used", 1220, 2440, 18, available=False),
            SupplySheet("free", 600, 600, 18),
        ]

        result = matcher.match([_piece("a", 500, 500)], sheets)

        assert [layout.sheet.id for layout in result.layouts] == ["free"]

    def test_largest_sheet_first(self, matcher: StockMatcher) -> None:
        sheets = [
            SupplySheet("offcut", 600, 600, 18),
            SupplySheet("full", 1220, 2440, 18),
        ]

        result = matcher.match([_piece("a", 500, 500)], sheets)

        assert [layout.sheet.id for layout in result.layouts] == ["full"]

    def test_overflow_to_next_sheet(self, matcher: StockMatcher) -> None:
        """Test that pieces left over on one sheet move on to the next."""
        sheets = [SupplySheet("s1", 1220, 2440, 18), SupplySheet("s2", 1220, 2440, 18)]

        result = matcher.match([_piece("quarter", 610, 1220, quantity=5)], sheets)

        assert [layout.piece_count for layout in result.layouts] == [4, 1]
        assert result.is_complete

    def test_unused_sheets_have_no_layout(
        self, matcher: StockMatcher, full_sheet: SupplySheet
    ) -> None:
        spare = SupplySheet("spare", 1220, 2440, 18)

        result = matcher.match([_piece("a", 1000, 1000)], [full_sheet, spare])

        assert result.sheets_used == 1

    def test_unmatched_regrouped(self, matcher: StockMatcher, full_sheet: SupplySheet) -> None:
        """Test that leftovers are reported with their remaining quantity."""
        piece = _piece("panel", 1000, 2000, quantity=3)

        result = matcher.match([piece], [full_sheet])

        assert result.total_pieces_placed == 1
        assert len(result.unmatched_pieces) == 1
        assert result.unmatched_pieces[0].id == "panel"
        assert result.unmatched_pieces[0].quantity == 2

    def test_placements_are_sequenced(
        self,
        matcher: StockMatcher,
        full_sheet: SupplySheet,
        cabinet_demand: list[DemandPiece],
    ) -> None:
        result = matcher.match(cabinet_demand, [full_sheet])

        for layout in result.layouts:
            ranks = sorted(p.cut_sequence for p in layout.placements)
            assert ranks == list(range(1, layout.piece_count + 1))

    def test_rotation_passed_to_packer(
        self, matcher: StockMatcher, full_sheet: SupplySheet
    ) -> None:
        piece = _piece("long", 2400, 600)

        assert matcher.match([piece], [full_sheet], allow_rotation=True).is_complete
        assert not matcher.match([piece], [full_sheet], allow_rotation=False).is_complete

    def test_custom_packer(self, full_sheet: SupplySheet) -> None:
        """Test that any Packer implementation can drive the matcher."""
        packer = _NothingFitsPacker()
        spare = SupplySheet("spare", 600, 600, 18)
        piece = _piece("a", 100, 100, quantity=2)

        result = StockMatcher(packer).match([piece], [spare, full_sheet])

        assert packer.calls == ["sheet-1", "spare"]
        assert result.layouts == ()
        assert result.unmatched_pieces == (piece,)
