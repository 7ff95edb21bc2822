"""Shared test fixtures and configuration."""
import pytest
import os
from pathlib import Path
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("SQUARE_LOCATION_ID", "TEST_LOCATION")
os.environ.setdefault("RESTAURANT_NAME", "Test Restaurant")

from app.main import app
from app.core.dependencies import get_catalog_repository
from app.services.catalog.in_memory_catalog import InMemoryCatalogProvider
from app.services.catalog.index import CatalogIndex
from app.services.catalog.repository import CatalogRepository


@pytest.fixture
def scenario_catalog():
    """Flat catalog snapshot with one burger and no modifiers."""
    return [
        {"id": "i1", "type": "ITEM", "name": "Rebel Burger", "variations": [{"id": "v1"}]},
    ]


@pytest.fixture
def catalog_snapshot():
    """Flat catalog snapshot covering items, variations and modifiers."""
    return [
        {"id": "i1", "type": "ITEM", "name": "Rebel Burger", "variations": [{"id": "v1"}]},
        {"id": "v1", "type": "ITEM_VARIATION", "item_id": "i1", "name": "Regular", "price": 899},
        {"id": "i2", "type": "ITEM", "name": "Fries"},
        {"id": "v2", "type": "ITEM_VARIATION", "item_id": "i2", "name": "Regular", "price": 399},
        {"id": "v2b", "type": "ITEM_VARIATION", "item_id": "i2", "name": "Large", "price": 499},
        {"id": "i3", "type": "ITEM", "name": "Coke"},
        {"id": "i4", "type": "ITEM", "name": "Chicken Burger", "variations": [{"id": "v4"}]},
        {"id": "m1", "type": "MODIFIER", "name": "Bacon", "price": 200},
        {"id": "m2", "type": "MODIFIER", "name": "Extra Pickles"},
        {"id": "m3", "type": "MODIFIER", "name": "Ketchup"},
    ]


@pytest.fixture
def catalog_index(catalog_snapshot):
    """Catalog index built from the flat snapshot."""
    return CatalogIndex.build(catalog_snapshot)


@pytest.fixture
def test_catalog_path():
    """Return path to test catalog YAML file."""
    return Path(__file__).parent / "fixtures" / "test_catalog.yaml"


@pytest.fixture
def test_catalog_repository(test_catalog_path):
    """Create catalog repository with test data."""
    provider = InMemoryCatalogProvider(catalog_file=str(test_catalog_path))
    return CatalogRepository(provider)


@pytest.fixture
def override_get_catalog_repository(test_catalog_repository):
    """Override get_catalog_repository dependency with test catalog."""
    def _override_get_catalog_repository():
        return test_catalog_repository
    return _override_get_catalog_repository


@pytest.fixture
def test_client(override_get_catalog_repository):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_catalog_repository] = override_get_catalog_repository

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
