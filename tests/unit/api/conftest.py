"""Fixtures for API route tests."""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from duet.api.app import create_app
from duet.api.dependencies import get_engine, get_settings
from duet.config.settings import Settings
from duet.engine import DuetEngine


@pytest.fixture
def app(settings: Settings, engine: DuetEngine) -> FastAPI:
    """Application wired to the seeded in-memory engine."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_engine] = lambda: engine
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client
