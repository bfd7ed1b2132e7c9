"""Pydantic configuration schema models for optimization job files.

This module defines the schema of JSON job files describing the pieces to
cut, the stock on hand and the optimization settings. It uses Pydantic v2
for validation and serialization.

The PieceCategory and OptimizationMode enums are reused from the domain
layer to ensure consistency and avoid duplication.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stockcut.domain.value_objects import OptimizationMode, PieceCategory

# Supported schema versions for job files
# Version 1.0: Initial schema with pieces, stock and optimization settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


def find_duplicate_ids(ids: list[str]) -> list[str]:
    """Return the ids that occur more than once, sorted."""
    return sorted({i for i in ids if ids.count(i) > 1})


class PackingAlgorithmConfig(str, Enum):
    """Packing algorithm selection.

    - MAXRECTS: Free-rectangle packing, densest layouts
    - GUILLOTINE: Shelf packing, every layout separable by edge-to-edge cuts
    """

    MAXRECTS = "maxrects"
    GUILLOTINE = "guillotine"


class PieceConfig(BaseModel):
    """A piece to cut.

    Attributes:
        id: Identifier, unique within the job.
        name: Display name.
        width: Piece width in mm.
        height: Piece height in mm.
        quantity: Number of identical pieces.
        category: Structural role of the piece.
        thickness: Material thickness in mm.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, description="Piece identifier")
    name: str = Field(default="", description="Display name")
    width: float = Field(..., gt=0, description="Width in mm")
    height: float = Field(..., gt=0, description="Height in mm")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    category: PieceCategory = Field(
        default=PieceCategory.OTHER, description="Structural role"
    )
    thickness: float = Field(..., gt=0, description="Material thickness in mm")


class StockConfig(BaseModel):
    """A stock sheet on hand.

    Attributes:
        id: Identifier, unique within the job.
        width: Sheet width in mm.
        height: Sheet height in mm.
        thickness: Material thickness in mm.
        available: False if the sheet is used up or reserved.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, description="Sheet identifier")
    width: float = Field(..., gt=0, description="Width in mm")
    height: float = Field(..., gt=0, description="Height in mm")
    thickness: float = Field(..., gt=0, description="Material thickness in mm")
    available: bool = Field(default=True, description="Whether the sheet can be used")


class OptimizationConfig(BaseModel):
    """Optimization settings.

    Attributes:
        mode: Optimization policy.
        allow_rotation: Whether rotation is permitted (policies may forbid it).
        algorithm: Packing algorithm.
        kerf: Saw blade kerf in mm.
        row_tolerance: Row band for the cut sequence in mm.
    """

    model_config = ConfigDict(extra="forbid")

    mode: OptimizationMode = Field(
        default=OptimizationMode.MINIMIZE_WASTE, description="Optimization policy"
    )
    allow_rotation: bool = Field(default=True, description="Allow 90 degree rotation")
    algorithm: PackingAlgorithmConfig = Field(
        default=PackingAlgorithmConfig.MAXRECTS, description="Packing algorithm"
    )
    kerf: float = Field(default=0.0, ge=0, le=10, description="Saw kerf in mm")
    row_tolerance: float = Field(
        default=10.0, gt=0, description="Cut sequence row tolerance in mm"
    )


class JobConfiguration(BaseModel):
    """Root configuration model for optimization jobs.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        pieces: Pieces to cut
        stock: Stock sheets on hand
        optimization: Optimization settings

    Example:
        >>> config = JobConfiguration(
        ...     schema_version="1.0",
        ...     pieces=[PieceConfig(id="top", width=800, height=500, thickness=18)],
        ...     stock=[StockConfig(id="s1", width=1220, height=2440, thickness=18)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    pieces: list[PieceConfig] = Field(default_factory=list)
    stock: list[StockConfig] = Field(default_factory=list)
    optimization: OptimizationConfig = Field(default_factory=OptimizationConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version: {v}. "
            f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
        )

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "JobConfiguration":
        """Piece ids and stock ids must each be unique."""
        for label, ids in (
            ("piece", [p.id for p in self.pieces]),
            ("stock", [s.id for s in self.stock]),
        ):
            duplicates = find_duplicate_ids(ids)
            if duplicates:
                raise ValueError(
                    f"Duplicate {label} id(s): {', '.join(duplicates)}"
                )
        return self
