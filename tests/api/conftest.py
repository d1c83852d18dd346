"""
API test fixtures for FastAPI TestClient.

The app is stateless, so a single client with the production app
(including its domain exception handlers) is enough.
"""
import pytest
from typing import Generator

from fastapi.testclient import TestClient

from main import app


@pytest.fixture(name="client")
def client_fixture() -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client
