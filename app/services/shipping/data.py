"""
Shipping rate tables used by the checkout calculator
"""
from decimal import Decimal

# The single destination priced as domestic. Compared by exact match.
HOME_COUNTRY = "US"

# Domestic orders at or above this subtotal ship free
FREE_SHIPPING_THRESHOLD = Decimal("50")

# (name, rate, estimated days) in display order: cheaper/slower first
DOMESTIC_PAID_RATES = (
    ("Standard Shipping", Decimal("5.99"), 5),
    ("Express Shipping", Decimal("12.99"), 2),
)

DOMESTIC_FREE_RATES = (
    ("Free Shipping", Decimal("0"), 7),
)

INTERNATIONAL_RATES = (
    ("International Standard", Decimal("19.99"), 10),
    ("International Express", Decimal("39.99"), 4),
)
