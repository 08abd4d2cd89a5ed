"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with an in-memory test double
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Common base for config, domain, application and persistence providers.

    A provider base that declares __mock_component__ has two subclasses,
    one per value of __is_mock__; get_provider picks between them.

    Attributes:
        __mock_component__: Component name, or None for concrete providers
        __is_mock__: True for the in-memory implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
