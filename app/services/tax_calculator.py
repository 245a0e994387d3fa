"""
US sales tax calculation for checkout totals.

State rates are the 2024 base state rates; county surcharges are only
tracked for a handful of high-volume counties. Unknown states and counties
are taxed at 0.
"""

import logging
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.services.shipping.data import HOME_COUNTRY

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

STATE_TAX_RATES: Dict[str, Decimal] = {
    'AL': Decimal('0.04'),
    'AK': Decimal('0.00'),  # no state sales tax
    'AZ': Decimal('0.056'),
    'AR': Decimal('0.065'),
    'CA': Decimal('0.0725'),
    'CO': Decimal('0.029'),
    'CT': Decimal('0.0635'),
    'DE': Decimal('0.00'),  # no state sales tax
    'FL': Decimal('0.06'),
    'GA': Decimal('0.04'),
    'HI': Decimal('0.04'),
    'ID': Decimal('0.06'),
    'IL': Decimal('0.0625'),
    'IN': Decimal('0.07'),
    'IA': Decimal('0.06'),
    'KS': Decimal('0.065'),
    'KY': Decimal('0.06'),
    'LA': Decimal('0.0445'),
    'ME': Decimal('0.055'),
    'MD': Decimal('0.06'),
    'MA': Decimal('0.0625'),
    'MI': Decimal('0.06'),
    'MN': Decimal('0.06875'),
    'MS': Decimal('0.07'),
    'MO': Decimal('0.04225'),
    'MT': Decimal('0.00'),  # no state sales tax
    'NE': Decimal('0.055'),
    'NV': Decimal('0.0685'),
    'NH': Decimal('0.00'),  # no state sales tax
    'NJ': Decimal('0.06625'),
    'NM': Decimal('0.05125'),
    'NY': Decimal('0.04'),
    'NC': Decimal('0.0475'),
    'ND': Decimal('0.05'),
    'OH': Decimal('0.0575'),
    'OK': Decimal('0.045'),
    'OR': Decimal('0.00'),  # no state sales tax
    'PA': Decimal('0.06'),
    'RI': Decimal('0.07'),
    'SC': Decimal('0.06'),
    'SD': Decimal('0.045'),
    'TN': Decimal('0.07'),
    'TX': Decimal('0.0625'),
    'UT': Decimal('0.061'),
    'VT': Decimal('0.06'),
    'VA': Decimal('0.053'),
    'WA': Decimal('0.065'),
    'WV': Decimal('0.06'),
    'WI': Decimal('0.05'),
    'WY': Decimal('0.04'),
    'DC': Decimal('0.06'),
}

COUNTY_TAX_RATES: Dict[str, Dict[str, Decimal]] = {
    'CA': {
        'Los Angeles': Decimal('0.01'),
        'San Diego': Decimal('0.008'),
        'Orange': Decimal('0.0075'),
    },
    'NY': {
        'New York': Decimal('0.00475'),
        'Kings': Decimal('0.00475'),
        'Queens': Decimal('0.00475'),
    },
    'TX': {
        'Harris': Decimal('0.01'),
        'Dallas': Decimal('0.01'),
        'Tarrant': Decimal('0.01'),
    },
}

US_STATES: List[str] = list(STATE_TAX_RATES.keys())

US_POSTAL_CODE = re.compile(r"^\d{5}(-\d{4})?$")


class TaxCalculation(BaseModel):
    """Breakdown of the sales tax applied to a subtotal"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subtotal: Decimal
    state_tax_rate: Decimal = Field(alias="stateTaxRate")
    county_tax_rate: Decimal = Field(alias="countyTaxRate")
    state_tax_amount: Decimal = Field(alias="stateTaxAmount")
    county_tax_amount: Decimal = Field(alias="countyTaxAmount")
    total_tax_amount: Decimal = Field(alias="totalTaxAmount")
    total: Decimal

    @field_serializer(
        "subtotal", "state_tax_rate", "county_tax_rate", "state_tax_amount",
        "county_tax_amount", "total_tax_amount", "total",
        when_used="json"
    )
    def serialize_amount(self, value: Decimal) -> float:
        return float(value)


def is_valid_us_state(state: str) -> bool:
    return state in STATE_TAX_RATES


def is_valid_us_address(country: str, state: str, postal_code: str) -> bool:
    """True for a home-country address with a known state and a ZIP or ZIP+4"""
    return (
        country == HOME_COUNTRY
        and is_valid_us_state(state)
        and US_POSTAL_CODE.match(postal_code) is not None
    )


def get_counties_for_state(state: str) -> List[str]:
    """Counties with a tracked surcharge for the given state"""
    return list(COUNTY_TAX_RATES.get(state, {}).keys())


def _to_cents(amount: Decimal) -> Decimal:
    with localcontext() as ctx:
        # quantize fails when the result needs more digits than the context holds
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_tax(subtotal: Decimal, state: str, county: Optional[str] = None) -> TaxCalculation:
    """
    Calculate state and county sales tax for a subtotal.

    Args:
        subtotal: Order subtotal before tax
        state: Two letter state code
        county: Optional county name for states with county surcharges

    Returns:
        TaxCalculation with each amount rounded half-up to cents
    """
    subtotal = Decimal(subtotal)
    state_tax_rate = STATE_TAX_RATES.get(state, Decimal("0"))
    county_tax_rate = COUNTY_TAX_RATES.get(state, {}).get(county, Decimal("0")) if county else Decimal("0")

    if state not in STATE_TAX_RATES:
        logger.debug(f"No sales tax rate for state '{state}', charging 0")

    state_tax_amount = _to_cents(subtotal * state_tax_rate)
    county_tax_amount = _to_cents(subtotal * county_tax_rate)
    total_tax_amount = state_tax_amount + county_tax_amount

    return TaxCalculation(
        subtotal=subtotal,
        state_tax_rate=state_tax_rate,
        county_tax_rate=county_tax_rate,
        state_tax_amount=state_tax_amount,
        county_tax_amount=county_tax_amount,
        total_tax_amount=total_tax_amount,
        total=subtotal + total_tax_amount
    )
