"""Base class for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a swappable mock implementation
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Provider with component metadata.

    A component base sets ``__mock_component__``; its implementations
    subclass it and set ``__is_mock__``. Concrete providers leave both alone.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
