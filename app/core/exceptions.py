class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class ShippingServiceError(BaseServiceError):
    """Base exception for shipping service errors."""
    pass

class ShippingCalculationError(ShippingServiceError):
    """Raised when shipping options cannot be produced for a request."""
    pass

class RateLimitExceededError(BaseServiceError):
    """Raised when a client exceeds its request allowance."""

    def __init__(self, retry_after: int, message: str = "Too many requests"):
        super().__init__(message)
        self.retry_after = retry_after
