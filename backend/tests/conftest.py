import os
import sys
import pytest

# Ensure the backend root (containing the `duelhub` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from duelhub import create_app, socketio
from duelhub.services.lobby import Lobby


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    MAZE_ROWS = 20
    MAZE_COLS = 25
    MAX_MAZE_DIMENSION = 100
    QUEUE_TIMEOUT_SEC = 0
    SESSION_IDLE_TIMEOUT_SEC = 0
    REAPER_INTERVAL_SEC = 5


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingEmitter:
    """Collects what the lobby would send, as (event name, payload, sid)."""

    def __init__(self):
        self.sent = []

    def __call__(self, event, payload, to):
        self.sent.append((event.value, payload, to))

    def to(self, sid):
        return [(name, payload) for name, payload, dest in self.sent if dest == sid]

    def named(self, name):
        return [(payload, dest) for n, payload, dest in self.sent if n == name]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def emitter():
    return RecordingEmitter()


@pytest.fixture()
def lobby(emitter, clock):
    seeds = iter(range(4242, 10000))
    return Lobby(emitter, clock=clock, seed_factory=lambda: next(seeds))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
