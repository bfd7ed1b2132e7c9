"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A piece positioned on a sheet."""

    piece_id: str = Field(..., description="Identifier of the demand piece")
    name: str = Field(..., description="Piece display name")
    label: str = Field(..., description="Display name numbered per instance")
    instance: int = Field(..., description="Zero-based instance index")
    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Bottom edge in mm")
    width: float = Field(..., description="Placed width in mm")
    height: float = Field(..., description="Placed height in mm")
    rotated: bool = Field(..., description="Whether the piece is turned 90 degrees")
    cut_sequence: int = Field(..., description="1-based cutting order on the sheet")


class SheetLayoutSchema(BaseModel):
    """Placements and waste statistics of one used sheet."""

    sheet_id: str = Field(..., description="Stock sheet identifier")
    sheet_width: float = Field(..., description="Sheet width in mm")
    sheet_height: float = Field(..., description="Sheet height in mm")
    thickness: float = Field(..., description="Sheet thickness in mm")
    used_area: float = Field(..., description="Area covered by pieces in square mm")
    waste_area: float = Field(..., description="Uncovered area in square mm")
    waste_percentage: float = Field(..., description="Waste as percentage of sheet area")
    efficiency: float = Field(..., description="Used area as percentage of sheet area")
    placements: list[PlacementSchema] = Field(
        default_factory=list, description="Pieces in cutting order"
    )


class UnmatchedPieceSchema(BaseModel):
    """Pieces that could not be placed."""

    id: str = Field(..., description="Piece identifier")
    name: str = Field(..., description="Piece display name")
    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")
    quantity: int = Field(..., description="Number of unplaced instances")
    category: str = Field(..., description="Structural role")
    thickness: float = Field(..., description="Thickness in mm")


class OptimizationResultSchema(BaseModel):
    """Response for layout optimization."""

    mode: str | None = Field(default=None, description="Policy that was applied")
    is_complete: bool = Field(..., description="Whether every piece was placed")
    sheets_used: int = Field(..., description="Number of sheets with placements")
    total_pieces_placed: int = Field(..., description="Number of placed instances")
    total_waste_percentage: float = Field(
        ..., description="Waste across used sheets as percentage"
    )
    layouts: list[SheetLayoutSchema] = Field(
        default_factory=list, description="Per-sheet layouts"
    )
    unmatched_pieces: list[UnmatchedPieceSchema] = Field(
        default_factory=list, description="Pieces that could not be placed"
    )


class SufficiencySchema(BaseModel):
    """Response for a stock sufficiency check."""

    is_sufficient: bool = Field(..., description="Whether stock area covers demand")
    available_area: float = Field(..., description="Available stock area in square mm")
    required_area: float = Field(..., description="Demand area in square mm")
    shortfall: float = Field(..., description="Missing area in square mm")


class MaterialEstimateSchema(BaseModel):
    """Response for a material estimate."""

    total_area: float = Field(..., description="Total demand area in square mm")
    piece_count: int = Field(..., description="Number of piece instances")
    largest_piece: tuple[float, float] = Field(
        ..., description="Width and height of the largest piece in mm"
    )
