"""
Schemas for the shipping calculation endpoints.

Request bodies use the storefront's camelCase keys (zipCode, postalCode,
shippingMethodOverride); snake_case names are accepted as well.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.schemas.base import BaseSchema, AmountValidationMixin
from app.services.shipping.calculator import ShippingRequest

# Handlers substitute this when the client omits a weight
DEFAULT_WEIGHT = Decimal("1")


class ShippingCalculateRequest(BaseSchema, AmountValidationMixin):
    """Body of POST /api/shipping/calculate"""
    country: str = Field(min_length=1)
    state: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zipCode")
    total: Decimal = Field(ge=0, le=1_000_000)
    weight: Optional[Decimal] = Field(default=None, ge=0, le=1000)

    def to_shipping_request(self) -> ShippingRequest:
        return ShippingRequest(
            country=self.country,
            state=self.state,
            postal_code=self.zip_code,
            total=self.total,
            weight=self.weight if self.weight else DEFAULT_WEIGHT
        )


class PublicShippingCalculateRequest(BaseSchema, AmountValidationMixin):
    """Body of POST /api/calculate-shipping (public, stricter limits)"""
    country: str = Field(min_length=2)
    state: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zipCode", pattern=r"^\d{4,10}$")
    total: Decimal = Field(ge=0, le=1_000_000)
    weight: Decimal = Field(default=DEFAULT_WEIGHT, ge=0, le=1000)
    shipping_method_override: Optional[str] = Field(default=None, alias="shippingMethodOverride")

    def to_shipping_request(self) -> ShippingRequest:
        return ShippingRequest(
            country=self.country,
            state=self.state,
            postal_code=self.zip_code,
            total=self.total,
            weight=self.weight
        )


class Dimensions(BaseSchema):
    length: Decimal = Field(gt=0)
    width: Decimal = Field(gt=0)
    height: Decimal = Field(gt=0)


class CartItem(BaseSchema, AmountValidationMixin):
    """A cart line as sent by the checkout page"""
    id: str
    quantity: int = Field(gt=0)
    price: Decimal = Field(gt=0)
    weight: Optional[Decimal] = Field(default=None, gt=0)
    dimensions: Optional[Dimensions] = None


class ShippingAddress(BaseSchema):
    country: str = Field(min_length=1)
    state: str
    postal_code: str = Field(alias="postalCode")
    city: str


class ShippingRatesRequest(BaseSchema):
    """Body of POST /api/shipping/rates"""
    items: List[CartItem]
    address: ShippingAddress
