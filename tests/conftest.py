"""
Shoplist Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── shopping_list: Empty ShoppingListService
    ├── recipes: Empty RecipeService
    ├── app: Fresh FastAPI app (own, empty collections)
    └── test_client: HTTPX AsyncClient bound to `app`
"""

import os

# Set before shoplist.config is imported so the settings singleton picks them up
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PORT"] = "0"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shoplist.main import create_app
from shoplist.services.recipe_service import RecipeService
from shoplist.services.shopping_list_service import ShoppingListService


@pytest.fixture
def shopping_list():
    """An empty shopping-list collection."""
    return ShoppingListService()


@pytest.fixture
def recipes():
    """An empty recipe collection."""
    return RecipeService()


@pytest.fixture
def app():
    """
    A fresh app per test.

    Each create_app() call owns its own collections, so state never leaks
    between tests.
    """
    return create_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no network).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/recipes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
