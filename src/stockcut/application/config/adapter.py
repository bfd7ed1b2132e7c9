"""Conversion of validated job configuration into domain values."""

from __future__ import annotations

from typing import Iterable

from stockcut.application.config.schema import (
    JobConfiguration,
    OptimizationConfig,
    PieceConfig,
    StockConfig,
)
from stockcut.application.optimizer import OptimizationOptions
from stockcut.domain.value_objects import DemandPiece, SupplySheet


def pieces_to_demand(pieces: Iterable[PieceConfig]) -> list[DemandPiece]:
    """Convert piece configs to DemandPiece values.

    A piece without a name is displayed by its id.
    """
    return [
        DemandPiece(
            id=piece.id,
            name=piece.name or piece.id,
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
            category=piece.category,
            thickness=piece.thickness,
        )
        for piece in pieces
    ]


def stock_to_supply(stock: Iterable[StockConfig]) -> list[SupplySheet]:
    """Convert stock configs to SupplySheet values."""
    return [
        SupplySheet(
            id=sheet.id,
            width=sheet.width,
            height=sheet.height,
            thickness=sheet.thickness,
            available=sheet.available,
        )
        for sheet in stock
    ]


def optimization_to_options(config: OptimizationConfig) -> OptimizationOptions:
    """Convert optimization settings to OptimizationOptions."""
    return OptimizationOptions(
        mode=config.mode,
        allow_rotation=config.allow_rotation,
        algorithm=config.algorithm.value,
        kerf=config.kerf,
        row_tolerance=config.row_tolerance,
    )


def config_to_demand(config: JobConfiguration) -> list[DemandPiece]:
    return pieces_to_demand(config.pieces)


def config_to_supply(config: JobConfiguration) -> list[SupplySheet]:
    return stock_to_supply(config.stock)


def config_to_options(config: JobConfiguration) -> OptimizationOptions:
    return optimization_to_options(config.optimization)
