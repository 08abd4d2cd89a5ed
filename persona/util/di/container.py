"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from persona.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Shared by the API and by maintenance scripts such as tally
    reconciliation. Settings come from the environment through the config
    provider.

    Returns:
        Container with PostgreSQL persistence
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app.

    Routes using DishkaRoute resolve FromDishka parameters from a request
    scope opened per HTTP request. Closing that scope commits or rolls back
    the request's database session.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
