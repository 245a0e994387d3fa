"""
Shared enums and constants used across the application.
"""

from enum import Enum


class ShippingZone(str, Enum):
    """Pricing bucket a destination falls into"""
    DOMESTIC = "DOMESTIC"
    INTERNATIONAL = "INTERNATIONAL"
