# tests/conftest.py
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from app.core.config import Settings, get_settings
from app.dependencies import get_rate_limiter
from app.main import app
from app.services.rate_limiter import RateLimiter


@pytest.fixture(scope="session")
def settings():
    """Provide test settings"""
    return Settings(
        APP_NAME="Test Shipping Service",
        ENVIRONMENT="test",
        REDIS_URL="",
        SHIPPING_RATE_LIMIT=10,
        SHIPPING_RATE_LIMIT_WINDOW=60,
    )

@pytest.fixture
def mock_redis():
    """Provide a mocked async Redis client whose pipeline reports a first hit"""
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.execute = AsyncMock(return_value=[1, True])

    client = AsyncMock()
    client.pipeline = MagicMock(return_value=pipe)
    client.ping.return_value = True
    return client

@pytest.fixture
def rate_limiter(mock_redis, settings):
    """Rate limiter backed by the mocked Redis client"""
    return RateLimiter(
        mock_redis,
        limit=settings.SHIPPING_RATE_LIMIT,
        window=settings.SHIPPING_RATE_LIMIT_WINDOW
    )

@pytest.fixture
def test_client(settings, rate_limiter):
    """Provide a test client with overridden settings and rate limiter"""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

@pytest.fixture
def domestic_payload():
    """Provide a domestic shipping request body"""
    return {
        "country": "US",
        "state": "CA",
        "zipCode": "94105",
        "total": 30,
        "weight": 2
    }

@pytest.fixture
def cart_payload():
    """Provide a cart-based shipping rates body"""
    return {
        "items": [
            {"id": "sku-1", "quantity": 2, "price": 12.5, "weight": 0.5},
            {"id": "sku-2", "quantity": 1, "price": 9.99},
        ],
        "address": {
            "country": "US",
            "state": "NY",
            "postalCode": "10001",
            "city": "New York"
        }
    }
