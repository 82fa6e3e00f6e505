"""
Pytest configuration and fixtures for Medoid Lab.
"""

import os
import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["RANDOM_SEED"] = "42"

from medoids.config import load_config
from medoids.domain.point import Point
from medoids_api.app import app


@pytest.fixture(scope="session")
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def config():
    """Default config with a fixed random seed."""
    config = load_config()
    config.clustering.random_seed = 42
    return config


@pytest.fixture
def two_blob_points():
    """Two well separated groups: a pair near the origin and a triple near (10, 10)."""
    return [Point(0, 0), Point(0, 1), Point(10, 10), Point(10, 11), Point(10, 9)]


@pytest.fixture
def line_points():
    """Points on the x axis with one outlier at x=10."""
    return [Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0), Point(10, 0)]
