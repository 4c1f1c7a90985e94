"""Dependency injection module.

Every provider in ``PROVIDERS`` is either concrete or a component base
with a production and a mock subclass. Containers pick one implementation
per component.
"""

from typing import Iterable, Type

from agora.util.di.application import ProdApplicationProvider
from agora.util.di.base import Component, ProviderBase
from agora.util.di.core import ProdConfigProvider
from agora.util.di.domain import ProdDomainProvider
from agora.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation to swap in."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of one provider.

    Concrete providers are returned as-is. Component bases are resolved to
    the subclass whose ``__is_mock__`` matches ``use_mock``; mock subclasses
    only exist once the test package defining them is imported.

    Raises:
        ValueError: If the requested implementation is not defined
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


def select_providers(mocked: Iterable[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per entry in ``PROVIDERS``.

    Args:
        mocked: Components to replace with their mock implementation

    Returns:
        Provider instances, ready for ``make_async_container``
    """
    mocked = set(mocked)
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
