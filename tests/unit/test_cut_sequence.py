"""Tests for cut sequence generation."""

from __future__ import annotations

import pytest

from stockcut.domain import DemandPiece, PieceCategory, Placement
from stockcut.infrastructure.cut_sequence import (
    DEFAULT_ROW_TOLERANCE,
    calculate_cut_sequence,
    group_rows,
)


@pytest.fixture
def piece() -> DemandPiece:
    """Create a 100x100 test piece available in quantity."""
    return DemandPiece("p", "P", 100, 100, 10, PieceCategory.OTHER, 18)


def _at(piece: DemandPiece, index: int, x: float, y: float) -> Placement:
    return Placement(piece, index, x, y)


class TestGroupRows:
    """Tests for row grouping by y position."""

    def test_default_tolerance(self) -> None:
        assert DEFAULT_ROW_TOLERANCE == 10.0

    def test_near_equal_y_share_row(self, piece: DemandPiece) -> None:
        """Test that small y differences are absorbed into one row."""
        rows = group_rows([_at(piece, 0, 600, 5), _at(piece, 1, 0, 0)])

        assert len(rows) == 1
        assert [p.x for p in rows[0]] == [0, 600]

    def test_row_is_anchored_at_first_piece(self, piece: DemandPiece) -> None:
        """Test that a row does not chain through successive small steps."""
        placements = [_at(piece, 0, 0, 0), _at(piece, 1, 200, 8), _at(piece, 2, 400, 16)]

        rows = group_rows(placements, row_tolerance=10)

        assert [[p.instance_index for p in row] for row in rows] == [[0, 1], [2]]

    def test_zero_tolerance_separates_every_y(self, piece: DemandPiece) -> None:
        rows = group_rows([_at(piece, 0, 600, 0), _at(piece, 1, 0, 5)], row_tolerance=0)

        assert [[p.instance_index for p in row] for row in rows] == [[0], [1]]

    def test_negative_tolerance_raises(self, piece: DemandPiece) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            group_rows([_at(piece, 0, 0, 0)], row_tolerance=-1)


class TestCalculateCutSequence:
    """Tests for cut order assignment."""

    def test_empty(self) -> None:
        assert calculate_cut_sequence([]) == ()

    def test_row_major_order(self, piece: DemandPiece) -> None:
        """Test that rows are cut bottom up and left to right."""
        placements = [
            _at(piece, 0, 0, 600),
            _at(piece, 1, 600, 5),
            _at(piece, 2, 0, 0),
        ]

        sequenced = calculate_cut_sequence(placements)

        assert [(p.instance_index, p.cut_sequence) for p in sequenced] == [
            (2, 1),
            (1, 2),
            (0, 3),
        ]

    def test_ranks_are_a_permutation(self, piece: DemandPiece) -> None:
        placements = [_at(piece, i, (i % 3) * 200, (i // 3) * 200) for i in range(7)]

        sequenced = calculate_cut_sequence(placements)

        assert sorted(p.cut_sequence for p in sequenced) == list(range(1, 8))

    def test_positions_unchanged(self, piece: DemandPiece) -> None:
        """Test that sequencing only sets the rank."""
        original = _at(piece, 0, 300, 40)

        (sequenced,) = calculate_cut_sequence([original])

        assert (sequenced.x, sequenced.y) == (300, 40)
        assert sequenced.cut_sequence == 1
        assert original.cut_sequence == 0
