"""Service protocols for dependency injection.

This module defines the narrow capability the matching orchestrator depends
on. Packing heuristics live in the infrastructure layer and satisfy these
protocols structurally, so a different heuristic (or a third-party library
wrapper) can be swapped in without touching the orchestrator or policies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from stockcut.domain.value_objects import PieceInstance, SupplySheet
    from stockcut.infrastructure.bin_packing import PackingResult


@runtime_checkable
class Packer(Protocol):
    """Protocol for placing piece instances onto a single sheet.

    Implementations must:
    - Return every input instance exactly once, either placed or unplaced
    - Keep every placement inside the sheet and free of overlaps
    - Fail soft: on an internal inconsistency, place nothing

    Example:
        ```python
        class ShelfPacker:
            def pack(
                self,
                instances: Sequence[PieceInstance],
                sheet: SupplySheet,
                allow_rotation: bool = True,
            ) -> PackingResult:
                ...
        ```
    """

    def pack(
        self,
        instances: Sequence["PieceInstance"],
        sheet: "SupplySheet",
        allow_rotation: bool = True,
    ) -> "PackingResult":
        """Place as many instances as possible onto one sheet.

        Args:
            instances: Piece instances to place, all of the sheet's thickness,
                in the order they should be attempted.
            sheet: The sheet to place pieces on.
            allow_rotation: Whether instances may be turned 90 degrees.

        Returns:
            PackingResult with placed and unplaced instances.
        """
        ...


__all__ = [
    "Packer",
]
