"""Pydantic request schemas for the REST API.

Piece and stock entries reuse the job file models so the API and job files
accept exactly the same shapes.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from stockcut.application.config import PackingAlgorithmConfig, PieceConfig, StockConfig
from stockcut.application.config.schema import find_duplicate_ids
from stockcut.domain import OptimizationMode


class EstimateRequest(BaseModel):
    """Request for a material estimate."""

    pieces: list[PieceConfig] = Field(..., description="Pieces to cut")


class SufficiencyRequest(BaseModel):
    """Request for a stock sufficiency check."""

    pieces: list[PieceConfig] = Field(..., description="Pieces to cut")
    stock: list[StockConfig] = Field(..., description="Stock sheets on hand")


class OptimizeRequest(BaseModel):
    """Request to optimize a cutting layout from explicit parameters."""

    pieces: list[PieceConfig] = Field(..., description="Pieces to cut")
    stock: list[StockConfig] = Field(..., description="Stock sheets on hand")
    mode: OptimizationMode = Field(
        default=OptimizationMode.MINIMIZE_WASTE, description="Optimization policy"
    )
    allow_rotation: bool = Field(
        default=True, description="Allow 90 degree rotation where the policy does"
    )
    algorithm: PackingAlgorithmConfig = Field(
        default=PackingAlgorithmConfig.MAXRECTS, description="Packing algorithm"
    )
    kerf: float = Field(default=0.0, ge=0, le=10, description="Saw kerf in mm")
    row_tolerance: float = Field(
        default=10.0, gt=0, description="Cut sequence row tolerance in mm"
    )

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "OptimizeRequest":
        """Piece ids and stock ids must each be unique, as in job files."""
        for label, ids in (
            ("piece", [p.id for p in self.pieces]),
            ("stock", [s.id for s in self.stock]),
        ):
            duplicates = find_duplicate_ids(ids)
            if duplicates:
                raise ValueError(f"Duplicate {label} id(s): {', '.join(duplicates)}")
        return self


class OptimizeJobRequest(BaseModel):
    """Request to optimize a complete job file document."""

    config: dict[str, Any] = Field(..., description="Job document as in a JSON job file")
