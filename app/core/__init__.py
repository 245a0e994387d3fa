"""
Core module exports.
"""
from .enums import (
    ShippingZone
)

from .exceptions import (
    BaseServiceError,
    ShippingServiceError,
    ShippingCalculationError,
    RateLimitExceededError
)
