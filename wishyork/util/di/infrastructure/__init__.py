"""Infrastructure DI providers."""

from wishyork.util.di.infrastructure.persistence import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
