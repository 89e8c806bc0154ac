import random

import pytest

from main import create_app


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def app():
    return create_app({"TESTING": True, "OPEN_BROWSER": False, "HISTORY_SIZE": 3})


@pytest.fixture
def client(app):
    return app.test_client()
