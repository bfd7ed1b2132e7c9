"""Pydantic request and response schemas for the REST API."""

from stockcut.web.schemas.requests import (
    EstimateRequest,
    OptimizeJobRequest,
    OptimizeRequest,
    SufficiencyRequest,
)
from stockcut.web.schemas.responses import (
    MaterialEstimateSchema,
    OptimizationResultSchema,
    PlacementSchema,
    SheetLayoutSchema,
    SufficiencySchema,
    UnmatchedPieceSchema,
)

__all__ = [
    # Requests
    "EstimateRequest",
    "OptimizeJobRequest",
    "OptimizeRequest",
    "SufficiencyRequest",
    # Responses
    "MaterialEstimateSchema",
    "OptimizationResultSchema",
    "PlacementSchema",
    "SheetLayoutSchema",
    "SufficiencySchema",
    "UnmatchedPieceSchema",
]
