"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from stockcut.contracts.protocols import Packer
from stockcut.infrastructure.bin_packing import PACKERS, PackerConfig
from stockcut.infrastructure.cut_sequence import DEFAULT_ROW_TOLERANCE

from .stock_matcher import StockMatcher

DEFAULT_ALGORITHM = "maxrects"


@dataclass
class ServiceFactory:
    """Factory for creating packers and matchers.

    Centralizes service instantiation so the CLI, the REST API and tests
    build the engine the same way from configuration values.

    Example:
        ```python
        factory = get_factory()
        matcher = factory.create_stock_matcher(algorithm="guillotine", kerf=3.0)
        result = matcher.match(demand, supply)
        ```
    """

    def available_algorithms(self) -> list[str]:
        """Names of the packing algorithms that can be created."""
        return sorted(PACKERS)

    def create_packer(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        kerf: float = 0.0,
    ) -> Packer:
        """Create a packer by algorithm name.

        Args:
            algorithm: "maxrects" or "guillotine".
            kerf: Saw kerf in mm left between adjacent pieces.

        Returns:
            A new Packer instance.

        Raises:
            ValueError: If the algorithm name is unknown or kerf is invalid.
        """
        try:
            packer_class = PACKERS[algorithm]
        except KeyError:
            raise ValueError(
                f"Unknown packing algorithm '{algorithm}'. "
                f"Available: {', '.join(self.available_algorithms())}"
            ) from None
        return packer_class(PackerConfig(kerf=kerf))

    def create_stock_matcher(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        kerf: float = 0.0,
        row_tolerance: float = DEFAULT_ROW_TOLERANCE,
    ) -> StockMatcher:
        """Create a StockMatcher backed by the named packer."""
        return StockMatcher(
            packer=self.create_packer(algorithm, kerf),
            row_tolerance=row_tolerance,
        )


@lru_cache(maxsize=1)
def get_factory() -> ServiceFactory:
    """Get the shared ServiceFactory instance."""
    return ServiceFactory()
