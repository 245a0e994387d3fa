import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.utils import read_json_body
from app.schemas.base import format_validation_errors
from app.schemas.tax import TaxCalculateRequest
from app.services.tax_calculator import (
    US_STATES,
    calculate_tax,
    get_counties_for_state,
    is_valid_us_state,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tax",
    tags=["tax"],
)


@router.post("/calculate")
async def calculate_tax_endpoint(request: Request):
    """Sales tax breakdown for a subtotal shipped to a US state."""
    body = await read_json_body(request)
    if body is None:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

    try:
        payload = TaxCalculateRequest.model_validate(body)
    except ValidationError as e:
        return JSONResponse(
            {"error": "Invalid input", "details": format_validation_errors(e)},
            status_code=400
        )

    calculation = calculate_tax(payload.subtotal, payload.state.upper(), payload.county)
    logger.info(f"Tax calculated for {payload.state.upper()}: {calculation.total_tax_amount}")
    return calculation.model_dump(mode="json", by_alias=True)


@router.get("/states")
async def list_states():
    return {"states": US_STATES}


@router.get("/states/{state}/counties")
async def list_counties(state: str):
    """Counties with a sales tax surcharge for a state."""
    state = state.upper()
    if not is_valid_us_state(state):
        raise HTTPException(status_code=404, detail=f"Unknown state: {state}")
    return {"state": state, "counties": get_counties_for_state(state)}
