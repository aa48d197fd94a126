"""Dependency injection module.

PROVIDERS lists one entry per layer. A provider class with subclasses is
a mockable component: the subclass flagged ``__is_mock__`` is used in
tests, the other one in production.
"""

from typing import Type

from wishyork.util.di.application import ProdApplicationProvider
from wishyork.util.di.base import Component, ProviderBase
from wishyork.util.di.core import ProdConfigProvider
from wishyork.util.di.domain import ProdDomainProvider
from wishyork.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from wishyork.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable: in-memory store in tests, PostgreSQL in production
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a PROVIDERS entry to the class to instantiate.

    Args:
        base: Entry from PROVIDERS
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        ``base`` itself for concrete providers, else the matching subclass

    Raises:
        DependencyInjectionError: If the component has no such implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if getattr(implementation, "__is_mock__", False) == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise DependencyInjectionError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
