"""Shared test fixtures."""

import os

# boto3 clients need a region to be constructed; no AWS call is ever made in tests
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from knowledge_relay.app import app  # noqa: E402


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)
