"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from agora.util.di import Component, mockable_components, select_providers


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container that mocks every component not listed in ``unmock``.

    Each call gets fresh APP-scoped state, including a new in-memory
    database, so tests sharing a container share data.

    Args:
        unmock: Components to use production implementations for

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit and e2e tests - in-memory persistence
        container = build_test_container()

        # Integration tests - real persistence, assumes postgres running
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    components = mockable_components()

    unknown = unmock - components
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    # FastapiProvider lets the same container serve a TestClient app
    return make_async_container(
        *select_providers(mocked=components - unmock), FastapiProvider()
    )
