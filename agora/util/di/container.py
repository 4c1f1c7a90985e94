"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agora.util.di import select_providers


def create_container() -> AsyncContainer:
    """Build the production container.

    Settings are read from the environment when first requested.
    """
    return make_async_container(*select_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Serve ``FromDishka`` route parameters from ``container``.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
