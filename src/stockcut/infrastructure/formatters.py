"""Output formatters and exporters for optimization results."""

from __future__ import annotations

import json
from typing import Any

from stockcut.domain.value_objects import (
    DemandPiece,
    MaterialEstimate,
    OptimizationResult,
    Placement,
    SheetLayout,
    SufficiencyReport,
)

# Square millimetres per square metre
MM2_PER_M2 = 1_000_000


class OptimizationReportFormatter:
    """Formats an optimization result as fixed-width text tables.

    One table per used sheet lists the pieces in cut order, followed by the
    unmatched pieces and the overall totals.
    """

    def format(self, result: OptimizationResult) -> str:
        """Format the complete result."""
        if not result.layouts and not result.unmatched_pieces:
            return "No pieces to cut."

        sections = [self._format_layout(i, layout) for i, layout in enumerate(result.layouts, 1)]
        if result.unmatched_pieces:
            sections.append(self._format_unmatched(result.unmatched_pieces))
        sections.append(self._format_summary(result))
        return "\n\n".join(sections)

    def _format_layout(self, number: int, layout: SheetLayout) -> str:
        sheet = layout.sheet
        lines = [
            f"SHEET {number}: {sheet.id} ({sheet.width:g} x {sheet.height:g} mm, "
            f"{sheet.thickness:g} mm)",
            "=" * 72,
            f"{'Cut':<5} {'Piece':<24} {'X':<9} {'Y':<9} {'Width':<9} {'Height':<9} Rot",
            "-" * 72,
        ]
        for placement in sorted(layout.placements, key=lambda p: p.cut_sequence):
            lines.append(self._format_placement(placement))
        lines.append("-" * 72)
        lines.append(
            f"Used {layout.used_area / MM2_PER_M2:.3f} m2 of "
            f"{sheet.area / MM2_PER_M2:.3f} m2, waste {layout.waste_percentage:.1f}%"
        )
        return "\n".join(lines)

    def _format_placement(self, placement: Placement) -> str:
        return (
            f"{placement.cut_sequence:<5} {placement.label:<24.24} {placement.x:<9g} "
            f"{placement.y:<9g} {placement.placed_width:<9g} "
            f"{placement.placed_height:<9g} {'yes' if placement.rotated else ''}"
        )

    def _format_unmatched(self, pieces: tuple[DemandPiece, ...]) -> str:
        lines = [
            "UNMATCHED PIECES",
            "=" * 72,
            f"{'Piece':<24} {'Width':<9} {'Height':<9} {'Thick':<7} Qty",
            "-" * 72,
        ]
        for piece in pieces:
            lines.append(
                f"{piece.name:<24.24} {piece.width:<9g} {piece.height:<9g} "
                f"{piece.thickness:<7g} {piece.quantity}"
            )
        return "\n".join(lines)

    def _format_summary(self, result: OptimizationResult) -> str:
        lines = ["SUMMARY", "=" * 72]
        if result.mode is not None:
            lines.append(f"Mode:           {result.mode.value}")
        lines.append(f"Sheets used:    {result.sheets_used}")
        lines.append(f"Pieces placed:  {result.total_pieces_placed}")
        lines.append(f"Unmatched:      {result.unmatched_count}")
        lines.append(f"Total waste:    {result.total_waste_percentage:.1f}%")
        return "\n".join(lines)


class SufficiencyReportFormatter:
    """Formats material estimate and sufficiency reports."""

    def format(self, estimate: MaterialEstimate, report: SufficiencyReport) -> str:
        width, height = estimate.largest_piece
        lines = [
            "MATERIAL CHECK",
            "=" * 60,
            f"Pieces:          {estimate.piece_count}",
            f"Required area:   {report.required_area / MM2_PER_M2:.3f} m2",
            f"Available area:  {report.available_area / MM2_PER_M2:.3f} m2",
            f"Largest piece:   {width:g} x {height:g} mm",
            "-" * 60,
        ]
        if report.is_sufficient:
            lines.append("Stock area is sufficient.")
        else:
            lines.append(
                f"Stock area is insufficient: short by "
                f"{report.shortfall / MM2_PER_M2:.3f} m2"
            )
        return "\n".join(lines)


class JsonExporter:
    """Exports optimization results as JSON."""

    def export(self, result: OptimizationResult) -> str:
        """Export the result as a JSON string."""
        return json.dumps(self.to_dict(result), indent=2)

    def to_dict(self, result: OptimizationResult) -> dict[str, Any]:
        """Convert the result to plain JSON-compatible data."""
        return {
            "mode": result.mode.value if result.mode is not None else None,
            "sheets_used": result.sheets_used,
            "total_pieces_placed": result.total_pieces_placed,
            "total_waste_percentage": result.total_waste_percentage,
            "layouts": [self._format_layout(layout) for layout in result.layouts],
            "unmatched_pieces": [
                self._format_piece(piece) for piece in result.unmatched_pieces
            ],
        }

    def _format_layout(self, layout: SheetLayout) -> dict[str, Any]:
        return {
            "sheet_id": layout.sheet.id,
            "sheet_width": layout.sheet.width,
            "sheet_height": layout.sheet.height,
            "thickness": layout.sheet.thickness,
            "used_area": layout.used_area,
            "waste_area": layout.waste_area,
            "waste_percentage": layout.waste_percentage,
            "placements": [self._format_placement(p) for p in layout.placements],
        }

    def _format_placement(self, placement: Placement) -> dict[str, Any]:
        return {
            "piece_id": placement.piece.id,
            "name": placement.piece.name,
            "label": placement.label,
            "instance": placement.instance_index,
            "x": placement.x,
            "y": placement.y,
            "width": placement.placed_width,
            "height": placement.placed_height,
            "rotated": placement.rotated,
            "cut_sequence": placement.cut_sequence,
        }

    def _format_piece(self, piece: DemandPiece) -> dict[str, Any]:
        return {
            "id": piece.id,
            "name": piece.name,
            "width": piece.width,
            "height": piece.height,
            "quantity": piece.quantity,
            "category": piece.category.value,
            "thickness": piece.thickness,
        }
