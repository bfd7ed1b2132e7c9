"""Cut optimization endpoints.

Endpoints are synchronous so FastAPI runs the CPU-bound packing in its
threadpool.
"""

from fastapi import APIRouter

from stockcut.application import (
    OptimizationOptions,
    calculate_waste_stats,
    check_sufficiency,
    estimate_material_needed,
    run_optimization,
)
from stockcut.application.config import (
    config_to_demand,
    config_to_options,
    config_to_supply,
    load_config_from_dict,
    pieces_to_demand,
    stock_to_supply,
)
from stockcut.domain import DemandPiece, OptimizationResult, SheetLayout
from stockcut.web.dependencies import ServiceFactoryDep
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

router = APIRouter(prefix="/optimize", tags=["optimize"])


def _layout_to_schema(layout: SheetLayout) -> SheetLayoutSchema:
    stats = calculate_waste_stats(layout)
    return SheetLayoutSchema(
        sheet_id=layout.sheet.id,
        sheet_width=layout.sheet.width,
        sheet_height=layout.sheet.height,
        thickness=layout.sheet.thickness,
        used_area=stats.used_area,
        waste_area=stats.waste_area,
        waste_percentage=stats.waste_percentage,
        efficiency=stats.efficiency,
        placements=[
            PlacementSchema(
                piece_id=p.piece.id,
                name=p.piece.name,
                label=p.label,
                instance=p.instance_index,
                x=p.x,
                y=p.y,
                width=p.placed_width,
                height=p.placed_height,
                rotated=p.rotated,
                cut_sequence=p.cut_sequence,
            )
            for p in sorted(layout.placements, key=lambda p: p.cut_sequence)
        ],
    )


def _unmatched_to_schema(piece: DemandPiece) -> UnmatchedPieceSchema:
    return UnmatchedPieceSchema(
        id=piece.id,
        name=piece.name,
        width=piece.width,
        height=piece.height,
        quantity=piece.quantity,
        category=piece.category.value,
        thickness=piece.thickness,
    )


def _result_to_schema(result: OptimizationResult) -> OptimizationResultSchema:
    """Convert OptimizationResult to response schema."""
    return OptimizationResultSchema(
        mode=result.mode.value if result.mode is not None else None,
        is_complete=result.is_complete,
        sheets_used=result.sheets_used,
        total_pieces_placed=result.total_pieces_placed,
        total_waste_percentage=result.total_waste_percentage,
        layouts=[_layout_to_schema(layout) for layout in result.layouts],
        unmatched_pieces=[_unmatched_to_schema(p) for p in result.unmatched_pieces],
    )


@router.post("", response_model=OptimizationResultSchema)
def optimize_layout(
    request: OptimizeRequest,
    factory: ServiceFactoryDep,
) -> OptimizationResultSchema:
    """Optimize the cutting layout of the given pieces and stock.

    Pieces that do not fit are reported in ``unmatched_pieces``; an
    incomplete result is still a successful response.
    """
    options = OptimizationOptions(
        mode=request.mode,
        allow_rotation=request.allow_rotation,
        algorithm=request.algorithm.value,
        kerf=request.kerf,
        row_tolerance=request.row_tolerance,
    )
    result = run_optimization(
        pieces_to_demand(request.pieces),
        stock_to_supply(request.stock),
        options,
        factory=factory,
    )
    return _result_to_schema(result)


@router.post("/job", response_model=OptimizationResultSchema)
def optimize_job(
    request: OptimizeJobRequest,
    factory: ServiceFactoryDep,
) -> OptimizationResultSchema:
    """Optimize a complete job document.

    Raises:
        ConfigError: If the document fails validation (mapped to 422).
    """
    config = load_config_from_dict(request.config)
    result = run_optimization(
        config_to_demand(config),
        config_to_supply(config),
        config_to_options(config),
        factory=factory,
    )
    return _result_to_schema(result)


@router.post("/sufficiency", response_model=SufficiencySchema)
def sufficiency(request: SufficiencyRequest) -> SufficiencySchema:
    """Compare demand area with available stock area without packing."""
    report = check_sufficiency(
        pieces_to_demand(request.pieces),
        stock_to_supply(request.stock),
    )
    return SufficiencySchema(
        is_sufficient=report.is_sufficient,
        available_area=report.available_area,
        required_area=report.required_area,
        shortfall=report.shortfall,
    )


@router.post("/estimate", response_model=MaterialEstimateSchema)
def estimate(request: EstimateRequest) -> MaterialEstimateSchema:
    """Estimate the material a list of pieces requires."""
    result = estimate_material_needed(pieces_to_demand(request.pieces))
    return MaterialEstimateSchema(
        total_area=result.total_area,
        piece_count=result.piece_count,
        largest_piece=result.largest_piece,
    )
