"""FastAPI dependency injection for optimization services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from stockcut.application.factory import ServiceFactory, get_factory


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


# Type alias for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
