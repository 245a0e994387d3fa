"""
Shipping Rate Calculator

Maps a destination and an order summary to the list of shipping options
offered at checkout.

Pricing policy:
- Domestic (country == "US"), subtotal under $50: Standard and Express
- Domestic, subtotal of $50 or more: Free Shipping
- Anything else: International Standard and International Express,
  regardless of subtotal or weight

The calculator is a pure function. Input constraints (non-empty country,
non-negative total) are enforced when the ShippingRequest is built, so
calculate_shipping_options never raises for a constructed request.
"""

from decimal import Decimal
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.core.enums import ShippingZone
from app.services.shipping.data import (
    HOME_COUNTRY,
    FREE_SHIPPING_THRESHOLD,
    DOMESTIC_PAID_RATES,
    DOMESTIC_FREE_RATES,
    INTERNATIONAL_RATES,
)


class ShippingRequest(BaseModel):
    """
    Destination and order summary for a shipping quote

    weight, state and postal_code are accepted and carried through but
    do not currently affect pricing.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    country: str = Field(min_length=1)
    state: Optional[str] = None
    postal_code: Optional[str] = Field(default=None, alias="postalCode")
    total: Decimal = Field(ge=0)
    weight: Optional[Decimal] = Field(default=None, ge=0)


class ShippingOption(BaseModel):
    """A single shipping choice: label, price and delivery estimate in days"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    rate: Decimal = Field(ge=0)
    estimated_days: int = Field(gt=0, alias="estimatedDays")

    @property
    def is_free(self) -> bool:
        return self.rate == 0

    @field_serializer("rate", when_used="json")
    def serialize_rate(self, rate: Decimal) -> Union[int, float]:
        # Whole amounts go out as integers, so the free tier renders as 0
        if rate == rate.to_integral_value():
            return int(rate)
        return float(rate)


def _build_options(table: Tuple[Tuple[str, Decimal, int], ...]) -> List[ShippingOption]:
    return [
        ShippingOption(name=name, rate=rate, estimated_days=days)
        for name, rate, days in table
    ]


def is_domestic(country: str) -> bool:
    """True when the destination is priced with the domestic table"""
    return country == HOME_COUNTRY


def get_shipping_zone(country: str) -> ShippingZone:
    return ShippingZone.DOMESTIC if is_domestic(country) else ShippingZone.INTERNATIONAL


def calculate_shipping_options(request: ShippingRequest) -> List[ShippingOption]:
    """
    Calculate the shipping options available for a request.

    Args:
        request: Validated shipping request

    Returns:
        Non-empty list of ShippingOption, cheaper/slower option first.
        A new list is returned on every call.
    """
    if get_shipping_zone(request.country) is ShippingZone.INTERNATIONAL:
        return _build_options(INTERNATIONAL_RATES)

    # Threshold is inclusive on the free side
    if request.total >= FREE_SHIPPING_THRESHOLD:
        return _build_options(DOMESTIC_FREE_RATES)

    return _build_options(DOMESTIC_PAID_RATES)
