import pytest

from wordrally import create_app
from wordrally.config import TestingConfig
from wordrally.services.game_service import GameService
from wordrally.services.score_store import InMemoryScoreStore
from wordrally.services.word_source import WordSource


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_000_000):
        self.ms = start_ms

    def now(self) -> int:
        return self.ms

    def advance(self, seconds: float) -> None:
        self.ms += int(seconds * 1000)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def word_source():
    return WordSource({"de": {5: ["apfel"], 6: ["banane"]}}, seed=0)


@pytest.fixture
def score_store():
    return InMemoryScoreStore()


@pytest.fixture
def game_service(word_source, score_store, clock):
    return GameService(word_source, score_store, clock)


@pytest.fixture
def app(word_source, score_store, clock):
    app, _ = create_app(TestingConfig, word_source=word_source, score_store=score_store, clock=clock)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    client = app.socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
