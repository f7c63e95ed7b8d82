import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.database import CatalogStore, demo_seed
from storefront.main import create_app


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore()


@pytest.fixture
def seeded_store() -> CatalogStore:
    return CatalogStore(seed=demo_seed())


@pytest.fixture
def client(seeded_store):
    app = create_app(store=seeded_store, settings=Settings(seed_demo_data=False))
    with TestClient(app) as test_client:
        yield test_client
