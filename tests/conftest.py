import os
import sys

import pytest

# Ensure the repository root (containing the `weapon_clash` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from weapon_clash import state  # noqa: E402
from weapon_clash.app import create_app, socketio  # noqa: E402
from weapon_clash.config import Config  # noqa: E402


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    APP_ENV = 'testing'
    IS_PRODUCTION = False
    LOG_LEVEL = 'WARNING'
    ENABLE_VERBOSE_LOGS = False
    MAX_ACTIVE_GAMES = 100


@pytest.fixture(autouse=True)
def clean_registry():
    state.reset()
    yield
    state.reset()


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

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for c in clients:
        try:
            if c.is_connected():
                c.disconnect()
        except Exception:
            pass
