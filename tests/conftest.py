"""Pytest fixtures wiring the app to an in-memory player gateway."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

from player_stats.services.player_service import PlayerService
from tests.fakes import ROSSI, SILVA, InMemoryPlayerGateway

load_dotenv()


@pytest.fixture()
def gateway() -> InMemoryPlayerGateway:
    """Empty in-memory store."""
    return InMemoryPlayerGateway()


@pytest.fixture()
def seeded_gateway(gateway: InMemoryPlayerGateway) -> InMemoryPlayerGateway:
    """Store holding SILVA (id 1) and ROSSI (id 2)."""
    gateway.seed(SILVA, ROSSI)
    return gateway


@pytest.fixture()
def player_service(gateway: InMemoryPlayerGateway) -> PlayerService:
    return PlayerService(gateway)  # type: ignore[arg-type]


@pytest_asyncio.fixture()
async def app_client(player_service: PlayerService) -> AsyncGenerator[AsyncClient, None]:
    """Provide an HTTP client with the application wired to the in-memory service."""
    from player_stats.dependencies import get_player_service
    from player_stats.main import app

    async def _get_player_service_override() -> PlayerService:
        return player_service

    app.dependency_overrides[get_player_service] = _get_player_service_override
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_player_service, None)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Ensure HTTPX uses asyncio backend during tests."""
    return "asyncio"
