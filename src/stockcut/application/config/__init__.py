"""Job file configuration: schema, loading and conversion to domain values.

Example:
    ```python
    from pathlib import Path
    from stockcut.application.config import (
        config_to_demand,
        config_to_options,
        config_to_supply,
        load_config,
    )

    config = load_config(Path("kitchen.json"))
    demand = config_to_demand(config)
    supply = config_to_supply(config)
    options = config_to_options(config)
    ```
"""

from .adapter import (
    config_to_demand,
    config_to_options,
    config_to_supply,
    optimization_to_options,
    pieces_to_demand,
    stock_to_supply,
)
from .loader import ConfigError, error_location, load_config, load_config_from_dict
from .schema import (
    SUPPORTED_VERSIONS,
    JobConfiguration,
    OptimizationConfig,
    PackingAlgorithmConfig,
    PieceConfig,
    StockConfig,
)

__all__ = [
    # Schema
    "JobConfiguration",
    "OptimizationConfig",
    "PackingAlgorithmConfig",
    "PieceConfig",
    "StockConfig",
    "SUPPORTED_VERSIONS",
    # Loading
    "ConfigError",
    "error_location",
    "load_config",
    "load_config_from_dict",
    # Adapters
    "config_to_demand",
    "config_to_options",
    "config_to_supply",
    "optimization_to_options",
    "pieces_to_demand",
    "stock_to_supply",
]
