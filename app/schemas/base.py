"""
Base schemas with common functionality.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class BaseSchema(BaseModel):
    """Base schema with common functionality for all request schemas"""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True
    )


class AmountValidationMixin(BaseModel):
    """
    --- Mixin class for shared numeric validation ---
    Amounts must arrive as JSON numbers. Lax mode would otherwise coerce
    true/false to 1/0 and parse numeric strings of any size.
    """

    @field_validator('total', 'weight', 'price', 'subtotal', 'quantity', mode='before', check_fields=False)
    @classmethod
    def require_numbers(cls, v):
        if isinstance(v, (bool, str)):
            raise ValueError('Must be a number')
        return v


def format_validation_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    """
    Flatten pydantic errors into JSON-safe diagnostics for 400 responses.

    Each entry carries the dotted field path, the message and the error type.
    """
    errors = []
    for error in exc.errors(include_url=False):
        errors.append({
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        })
    return errors
