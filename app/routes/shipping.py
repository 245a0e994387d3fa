import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.config import Settings, get_settings
from app.core.exceptions import RateLimitExceededError
from app.core.utils import is_json_request, read_json_body
from app.dependencies import get_client_ip, get_rate_limiter
from app.schemas.base import format_validation_errors
from app.schemas.shipping import (
    PublicShippingCalculateRequest,
    ShippingCalculateRequest,
    ShippingRatesRequest,
)
from app.services.rate_limiter import RateLimiter
from app.services.shipping.calculator import ShippingOption
from app.services.shipping.service import ShippingService, get_shipping_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["shipping"],
)


def serialize_options(options: List[ShippingOption]) -> List[Dict[str, Any]]:
    return [option.model_dump(mode="json", by_alias=True) for option in options]


@router.post("/shipping/calculate")
async def calculate_shipping(
    request: Request,
    shipping_service: ShippingService = Depends(get_shipping_service)
):
    """Calculate shipping options for a destination and order total."""
    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

    try:
        payload = ShippingCalculateRequest.model_validate(body)
    except ValidationError as e:
        logger.warning(f"Invalid shipping input: {e.error_count()} error(s)")
        return JSONResponse(
            {"error": "Invalid input", "details": format_validation_errors(e)},
            status_code=400
        )

    logger.debug(
        f"Processing shipping calculation for country={payload.country} "
        f"state={payload.state} zip={payload.zip_code} total={payload.total}"
    )

    try:
        options = shipping_service.quote(payload.to_shipping_request())
    except Exception as e:
        logger.exception(f"Error calculating shipping options: {e}")
        return JSONResponse({"error": "Failed to calculate shipping options"}, status_code=500)

    return {"options": serialize_options(options)}


@router.post("/calculate-shipping")
async def calculate_shipping_public(
    request: Request,
    shipping_service: ShippingService = Depends(get_shipping_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings)
):
    """
    Public shipping calculator used by the checkout page.

    Requires a JSON body, is rate limited per client IP and accepts an optional
    shippingMethodOverride narrowing the result to the chosen option.
    """
    if not is_json_request(request):
        return JSONResponse({"message": "Unsupported content type"}, status_code=415)

    client_ip = get_client_ip(request)
    if not await limiter.is_allowed(client_ip):
        raise RateLimitExceededError(retry_after=settings.SHIPPING_RATE_LIMIT_WINDOW)

    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"message": "Invalid JSON body"}, status_code=400)

    if settings.is_development and settings.LOG_REQUEST_BODIES:
        logger.info(
            f"Shipping calculation request from {client_ip} "
            f"({request.headers.get('user-agent')}): {body}"
        )

    try:
        payload = PublicShippingCalculateRequest.model_validate(body)
    except ValidationError as e:
        return JSONResponse(
            {"message": "Invalid input", "validationErrors": format_validation_errors(e)},
            status_code=400
        )

    try:
        options = shipping_service.quote_with_override(
            payload.to_shipping_request(),
            payload.shipping_method_override
        )
    except Exception as e:
        logger.exception(f"Shipping calculation error: {e}")
        return JSONResponse({"message": "Internal server error"}, status_code=500)

    return {
        "message": "Shipping options calculated successfully",
        "options": serialize_options(options)
    }


@router.post("/shipping/rates")
async def shipping_rates(
    request: Request,
    shipping_service: ShippingService = Depends(get_shipping_service)
):
    """Quote shipping for a list of cart items and a full destination address."""
    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

    try:
        payload = ShippingRatesRequest.model_validate(body)
    except ValidationError as e:
        logger.warning(f"Invalid shipping rates request: {e.error_count()} error(s)")
        return JSONResponse(
            {"error": "Invalid request data", "details": format_validation_errors(e)},
            status_code=400
        )

    try:
        options = shipping_service.quote_for_items(payload.items, payload.address)
    except Exception as e:
        logger.exception(f"Failed to calculate shipping rates: {e}")
        return JSONResponse({"error": "Failed to calculate shipping rates"}, status_code=500)

    return {"shippingOptions": serialize_options(options)}
