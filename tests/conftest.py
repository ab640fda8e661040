import pytest
from fastapi.testclient import TestClient

from hexgrid.api import create_app
from hexgrid.h3 import H3GridAdapter

SAN_FRANCISCO = (37.7749, -122.4194)
BUENOS_AIRES = (-34.6037, -58.3816)
KNOWN_CELL = "8928308280fffff"


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def adapter():
    return H3GridAdapter()
