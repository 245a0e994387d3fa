# tests/test_routes/test_shipping_routes.py
import pytest
from unittest.mock import MagicMock

from app.main import app
from app.services.shipping.service import ShippingService, get_shipping_service

STANDARD_AND_EXPRESS = [
    {"name": "Standard Shipping", "rate": 5.99, "estimatedDays": 5},
    {"name": "Express Shipping", "rate": 12.99, "estimatedDays": 2},
]
FREE = [{"name": "Free Shipping", "rate": 0, "estimatedDays": 7}]
INTERNATIONAL = [
    {"name": "International Standard", "rate": 19.99, "estimatedDays": 10},
    {"name": "International Express", "rate": 39.99, "estimatedDays": 4},
]


@pytest.fixture
def failing_shipping_service():
    """Shipping service whose calculations blow up"""
    service = MagicMock(spec=ShippingService)
    service.quote.side_effect = RuntimeError("boom")
    service.quote_with_override.side_effect = RuntimeError("boom")
    service.quote_for_items.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_shipping_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_shipping_service, None)


# --- POST /api/shipping/calculate ---

@pytest.mark.parametrize("body,expected", [
    ({"country": "US", "total": 30}, STANDARD_AND_EXPRESS),
    ({"country": "US", "total": 60}, FREE),
    ({"country": "US", "total": 50}, FREE),
    ({"country": "CA", "total": 100}, INTERNATIONAL),
    ({"country": "CA", "total": 0}, INTERNATIONAL),
])
def test_calculate_returns_options(test_client, body, expected):
    response = test_client.post("/api/shipping/calculate", json=body)
    assert response.status_code == 200
    assert response.json() == {"options": expected}

def test_calculate_accepts_full_payload(test_client, domestic_payload):
    response = test_client.post("/api/shipping/calculate", json=domestic_payload)
    assert response.status_code == 200
    assert response.json()["options"] == STANDARD_AND_EXPRESS

def test_calculate_rejects_missing_country(test_client):
    response = test_client.post("/api/shipping/calculate", json={"total": 30})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid input"
    assert data["details"][0]["field"] == "country"

def test_calculate_rejects_negative_total(test_client):
    response = test_client.post("/api/shipping/calculate", json={"country": "US", "total": -1})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "total"

@pytest.mark.parametrize("total", ["1e50000000", "30", 1e30])
def test_calculate_rejects_string_and_oversized_totals(test_client, total):
    response = test_client.post("/api/shipping/calculate", json={"country": "US", "total": total})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "total"

def test_free_shipping_rate_is_sent_as_integer_zero(test_client):
    response = test_client.post("/api/shipping/calculate", json={"country": "US", "total": 60})
    assert '"rate":0,' in response.text

def test_calculate_rejects_malformed_json(test_client):
    response = test_client.post(
        "/api/shipping/calculate",
        content="{not json",
        headers={"content-type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}

def test_calculate_rejects_non_object_body(test_client):
    response = test_client.post("/api/shipping/calculate", json=[1, 2, 3])
    assert response.status_code == 400

def test_calculate_internal_error_is_generic(test_client, failing_shipping_service):
    response = test_client.post("/api/shipping/calculate", json={"country": "US", "total": 30})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to calculate shipping options"}


# --- POST /api/calculate-shipping ---

def test_public_calculate_returns_options(test_client):
    response = test_client.post("/api/calculate-shipping", json={"country": "US", "total": 30})
    assert response.status_code == 200
    assert response.json() == {
        "message": "Shipping options calculated successfully",
        "options": STANDARD_AND_EXPRESS
    }

def test_public_calculate_applies_override(test_client):
    response = test_client.post(
        "/api/calculate-shipping",
        json={"country": "US", "total": 30, "shippingMethodOverride": "Express Shipping"}
    )
    assert response.status_code == 200
    assert response.json()["options"] == [STANDARD_AND_EXPRESS[1]]

def test_public_calculate_ignores_unknown_override(test_client):
    response = test_client.post(
        "/api/calculate-shipping",
        json={"country": "DE", "total": 30, "shippingMethodOverride": "Free Shipping"}
    )
    assert response.json()["options"] == INTERNATIONAL

def test_public_calculate_requires_json_content_type(test_client, mock_redis):
    response = test_client.post(
        "/api/calculate-shipping",
        content='{"country": "US", "total": 30}',
        headers={"content-type": "text/plain"}
    )
    assert response.status_code == 415
    assert response.json() == {"message": "Unsupported content type"}
    # Rejected before counting against the rate limit
    mock_redis.pipeline.assert_not_called()

def test_public_calculate_accepts_charset_parameter(test_client):
    response = test_client.post(
        "/api/calculate-shipping",
        content='{"country": "US", "total": 30}',
        headers={"content-type": "application/json; charset=utf-8"}
    )
    assert response.status_code == 200

def test_public_calculate_rate_limits_by_forwarded_ip(test_client, mock_redis):
    mock_redis.pipeline.return_value.execute.return_value = [11, False]
    response = test_client.post(
        "/api/calculate-shipping",
        json={"country": "US", "total": 30},
        headers={"x-forwarded-for": "203.0.113.7, 10.0.0.1"}
    )
    assert response.status_code == 429
    assert response.headers["retry-after"] == "60"
    assert response.json() == {
        "error": "Too many requests",
        "code": "RATE_LIMIT_EXCEEDED",
        "retryAfter": 60
    }
    mock_redis.pipeline.return_value.incr.assert_called_once_with("rate-limit:203.0.113.7")

def test_public_calculate_uses_peer_address_without_forwarding(test_client, mock_redis):
    test_client.post("/api/calculate-shipping", json={"country": "US", "total": 30})
    # TestClient connects as "testclient"
    mock_redis.pipeline.return_value.incr.assert_called_once_with("rate-limit:testclient")

def test_public_calculate_validation_errors(test_client):
    response = test_client.post(
        "/api/calculate-shipping",
        json={"country": "U", "total": 30, "zipCode": "abc"}
    )
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Invalid input"
    assert {error["field"] for error in data["validationErrors"]} == {"country", "zipCode"}

def test_public_calculate_rejects_oversized_total(test_client):
    response = test_client.post("/api/calculate-shipping", json={"country": "US", "total": 1000001})
    assert response.status_code == 400

def test_public_calculate_internal_error_is_generic(test_client, failing_shipping_service):
    response = test_client.post("/api/calculate-shipping", json={"country": "US", "total": 30})
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


# --- POST /api/shipping/rates ---

def test_rates_for_cart_under_threshold(test_client, cart_payload):
    # 2 * 12.5 + 9.99 = 34.99
    response = test_client.post("/api/shipping/rates", json=cart_payload)
    assert response.status_code == 200
    assert response.json() == {"shippingOptions": STANDARD_AND_EXPRESS}

def test_rates_for_cart_over_threshold(test_client, cart_payload):
    cart_payload["items"][0]["quantity"] = 4
    response = test_client.post("/api/shipping/rates", json=cart_payload)
    assert response.json() == {"shippingOptions": FREE}

def test_rates_for_international_cart(test_client, cart_payload):
    cart_payload["address"]["country"] = "GB"
    response = test_client.post("/api/shipping/rates", json=cart_payload)
    assert response.json() == {"shippingOptions": INTERNATIONAL}

def test_rates_accept_whole_float_quantity(test_client, cart_payload):
    cart_payload["items"][0]["quantity"] = 4.0
    response = test_client.post("/api/shipping/rates", json=cart_payload)
    assert response.status_code == 200
    assert response.json() == {"shippingOptions": FREE}

def test_rates_reject_invalid_items(test_client, cart_payload):
    cart_payload["items"][0]["quantity"] = 0
    response = test_client.post("/api/shipping/rates", json=cart_payload)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid request data"
    assert data["details"][0]["field"] == "items.0.quantity"

def test_rates_internal_error_is_generic(test_client, cart_payload, failing_shipping_service):
    response = test_client.post("/api/shipping/rates", json=cart_payload)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to calculate shipping rates"}
