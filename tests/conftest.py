"""Pytest configuration and fixtures for text_db tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from text_db.application import TextDatabase
from text_db.infrastructure.config import Config, StorageConfig
from text_db.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with temporary paths."""
    return Config(
        storage=StorageConfig(
            database_path=temp_dir / "data" / "test.tdb",
            snapshot_dir=temp_dir / "snapshots",
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def db(test_config: Config, metrics_registry: MetricsRegistry) -> Generator[TextDatabase, None, None]:
    """Provide an empty database in the temporary directory."""
    database = TextDatabase(config=test_config, metrics=metrics_registry)
    yield database
    database.close()


@pytest.fixture
def users_db(db: TextDatabase) -> TextDatabase:
    """Database with a populated ``users`` table."""
    db.create_table("users", [("id", "Integer"), ("name", "Text"), ("active", "Boolean")])
    db.insert_data("users", ["1", "Alice", "true"])
    db.insert_data("users", ["2", "Bob", "false"])
    return db


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
