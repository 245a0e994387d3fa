"""
Schemas for the sales tax endpoints.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema, AmountValidationMixin


class TaxCalculateRequest(BaseSchema, AmountValidationMixin):
    """Body of POST /api/tax/calculate"""
    subtotal: Decimal = Field(ge=0, le=1_000_000)
    state: str = Field(min_length=2, max_length=2)
    county: Optional[str] = None
