"""
Test Configuration and Fixtures

This module provides:
- Environment setup that must happen before `src` is imported
- Domain fixtures (store, hasher, metrics, movie, showtime, users)
- A DI container with test settings, and a live server on an ephemeral port
- A small line-protocol client for integration tests

Architecture:
- Unit tests (test/**/unit/): in-process, no sockets
- Integration tests (test/**/integration/): real TCP server and client threads
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# core_setting builds the module-level `settings` at import time, and the
# logging config reads TEST_LOG_DIR at import time.
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Minimum bcrypt cost keeps registration fast
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ['SNAPSHOT_ENABLED'] = 'false'
    os.environ.setdefault('DEBUG', 'false')


_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from datetime import datetime, timedelta  # noqa: E402
import socket  # noqa: E402

from dependency_injector import providers  # noqa: E402
from pydantic import SecretStr  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.core_setting import Settings  # noqa: E402
from src.platform.config.di import Container  # noqa: E402
from src.platform.metrics.booking_metrics import BookingMetrics  # noqa: E402
from src.service.cinema.domain.entity.movie_entity import Movie  # noqa: E402
from src.service.cinema.domain.entity.showtime_entity import Showtime  # noqa: E402
from src.service.cinema.domain.entity.user_entity import User  # noqa: E402
from src.service.cinema.driven_adapter.security.bcrypt_password_hasher import (  # noqa: E402
    BcryptPasswordHasher,
)
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore  # noqa: E402


DEFAULT_PASSWORD = 'secret1'
ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin123'


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def metrics() -> BookingMetrics:
    return BookingMetrics()


@pytest.fixture
def future_time() -> datetime:
    return (datetime.now() + timedelta(days=1)).replace(second=0, microsecond=0)


@pytest.fixture
def movie() -> Movie:
    return Movie.create(title='Dune', genre='Sci-Fi', rating='PG-13', runtime_minutes=155)


@pytest.fixture
def showtime(movie: Movie, future_time: datetime) -> Showtime:
    return Showtime(
        movie=movie,
        date_time=future_time,
        rows=3,
        cols=4,
        base_price=10.0,
        auditorium_name='Hall 1',
    )


@pytest.fixture
def make_user(password_hasher: BcryptPasswordHasher) -> Callable[..., User]:
    def _make(username: str, *, is_admin: bool = False) -> User:
        return User.register(
            username=username,
            plain_password=SecretStr(DEFAULT_PASSWORD),
            email=f'{username}@example.com',
            password_hasher=password_hasher,
            is_admin=is_admin,
        )

    return _make


@pytest.fixture
def alice(make_user: Callable[..., User]) -> User:
    return make_user('alice')


@pytest.fixture
def bob(make_user: Callable[..., User]) -> User:
    return make_user('bob')


@pytest.fixture
def seeded_store(
    store: InMemoryStore, movie: Movie, showtime: Showtime, alice: User, bob: User
) -> InMemoryStore:
    """Store holding alice, bob, one movie and its showtime as ST_0"""
    store.add_user(alice)
    store.add_user(bob)
    store.add_movie(movie)
    store.add_showtime(showtime)
    return store


# =============================================================================
# Container and live server
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        SERVER_HOST='127.0.0.1',
        SERVER_PORT=0,
        SNAPSHOT_ENABLED=False,
        BCRYPT_ROUNDS=4,
        DEFAULT_ADMIN_USERNAME=ADMIN_USERNAME,
        DEFAULT_ADMIN_PASSWORD=SecretStr(ADMIN_PASSWORD),
        MAX_SEATS_PER_BOOKING=10,
    )


@pytest.fixture
def container(test_settings: Settings) -> Generator[Container, None, None]:
    test_container = Container()
    test_container.config_service.override(providers.Object(test_settings))
    yield test_container
    test_container.reset_singletons()


@pytest.fixture
def server(container: Container) -> Generator:
    container.bootstrap_store_use_case().execute()
    booking_server = container.booking_server()
    booking_server.start()
    yield booking_server
    booking_server.stop()


class LineClient:
    """Blocking client for the line protocol; reads the greeting on connect"""

    def __init__(self, address: tuple[str, int], *, timeout: float = 5.0) -> None:
        self.sock = socket.create_connection(address, timeout=timeout)
        self.reader = self.sock.makefile('r', encoding='utf-8', newline='\n')
        self.greeting = self.read_line()

    def read_line(self) -> str:
        return self.reader.readline().rstrip('\n')

    def send(self, line: str) -> None:
        self.sock.sendall(f'{line}\n'.encode('utf-8'))

    def request(self, line: str) -> str:
        self.send(line)
        return self.read_line()

    def request_block(self, line: str, *, terminator: str = 'END_LIST') -> list[str]:
        """All lines up to and including `terminator`, or just the ERROR line"""
        self.send(line)
        lines = [self.read_line()]
        if lines[0].startswith('ERROR'):
            return lines
        while lines[-1] != terminator:
            lines.append(self.read_line())
        return lines

    def login(self, username: str, password: str = DEFAULT_PASSWORD) -> str:
        return self.request(f'LOGIN|{username}|{password}')

    def close(self) -> None:
        self.reader.close()
        self.sock.close()


@pytest.fixture
def client_factory(server) -> Generator[Callable[[], LineClient], None, None]:
    clients: list[LineClient] = []

    def _connect() -> LineClient:
        client = LineClient(server.address)
        clients.append(client)
        return client

    yield _connect
    for client in clients:
        client.close()


@pytest.fixture
def admin_client(client_factory: Callable[[], LineClient]) -> LineClient:
    client = client_factory()
    assert client.login(ADMIN_USERNAME, ADMIN_PASSWORD) == 'SUCCESS|Welcome admin!|true'
    return client
