import pytest

from backend import RoomRegistry
from connection import RelayConnection
from relay import ConnectionLifecycle, SignalRouter
from tests.stubs import StubWebSocket


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def signal_router(registry):
    return SignalRouter(registry)


@pytest.fixture
def lifecycle(registry):
    return ConnectionLifecycle(registry)


@pytest.fixture
def open_connection(lifecycle):
    async def _open(room_id):
        connection = RelayConnection(StubWebSocket(), room_id)
        await connection.accept()
        await lifecycle.on_open(connection)
        return connection
    return _open
