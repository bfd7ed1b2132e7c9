"""Pytest configuration and shared fixtures for stockcut tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from stockcut.domain import DemandPiece, PieceCategory, SupplySheet

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def jobs_dir() -> Path:
    """Directory holding the JSON job file fixtures."""
    return FIXTURES_DIR / "jobs"


@pytest.fixture
def full_sheet() -> SupplySheet:
    """Create a standard 1220x2440 sheet of 18mm board."""
    return SupplySheet(id="sheet-1", width=1220, height=2440, thickness=18)


@pytest.fixture
def cabinet_demand() -> list[DemandPiece]:
    """Create the pieces of a small 18mm base cabinet."""
    return [
        DemandPiece("side", "Side", 560, 720, 2, PieceCategory.SIDE, 18),
        DemandPiece("bottom", "Bottom", 564, 560, 1, PieceCategory.BOTTOM, 18),
        DemandPiece("top", "Top", 600, 580, 1, PieceCategory.TOP, 18),
        DemandPiece("shelf", "Shelf", 562, 500, 2, PieceCategory.SHELF, 18),
        DemandPiece("door", "Door", 597, 717, 1, PieceCategory.DOOR, 18),
    ]
