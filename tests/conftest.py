import pytest
from twapi.client import Engine
from twapi.session import BearerToken

SERVER = "https://x.test"


@pytest.fixture
def engine():
    return Engine(BearerToken("tok", SERVER))
