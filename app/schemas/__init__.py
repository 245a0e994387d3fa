"""
Schema exports for the application.
"""

# Base schemas
from .base import BaseSchema, AmountValidationMixin, format_validation_errors

# Shipping schemas
from .shipping import (
    ShippingCalculateRequest,
    PublicShippingCalculateRequest,
    ShippingRatesRequest,
    CartItem,
    Dimensions,
    ShippingAddress
)

# Tax schemas
from .tax import TaxCalculateRequest
