"""
Shipping Service - Main Facade

Entry point used by the HTTP routes. Wraps the rate calculator with the
checkout-specific behaviour around it:
- Summarising cart items into an order total and weight
- Honouring a customer-selected shipping method
- Logging each quote

Usage:
    shipping_service = ShippingService()
    options = shipping_service.quote(ShippingRequest(country="US", total=30))
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from app.core.exceptions import ShippingCalculationError
from app.schemas.shipping import CartItem, ShippingAddress
from app.services.shipping.calculator import (
    ShippingOption,
    ShippingRequest,
    calculate_shipping_options,
)

logger = logging.getLogger(__name__)

# Items without a weight count as one unit each
DEFAULT_ITEM_WEIGHT = Decimal("1")


class ShippingService:
    """Quotes shipping options for checkout requests"""

    def quote(self, request: ShippingRequest) -> List[ShippingOption]:
        options = calculate_shipping_options(request)
        logger.info(
            f"Shipping calculation successful: country={request.country} "
            f"total={request.total} options={len(options)}"
        )
        return options

    def quote_with_override(
        self,
        request: ShippingRequest,
        method_name: Optional[str] = None
    ) -> List[ShippingOption]:
        """
        Quote a request, narrowing to a single option if the customer already
        picked one by name. Unknown names fall back to the full list.
        """
        options = self.quote(request)
        if not method_name:
            return options

        for option in options:
            if option.name == method_name:
                return [option]

        logger.debug(f"Shipping method override '{method_name}' not offered for {request.country}")
        return options

    @staticmethod
    def summarize_items(items: Iterable[CartItem]) -> Tuple[Decimal, Decimal]:
        """
        Work out the order subtotal and total weight for a set of cart lines

        Returns:
            (total, weight) where total = sum(price * quantity) and
            weight = sum((weight or 1) * quantity)
        """
        total = Decimal("0")
        weight = Decimal("0")
        for item in items:
            total += item.price * item.quantity
            weight += (item.weight if item.weight is not None else DEFAULT_ITEM_WEIGHT) * item.quantity
        return total, weight

    def quote_for_items(
        self,
        items: Iterable[CartItem],
        address: ShippingAddress
    ) -> List[ShippingOption]:
        total, weight = self.summarize_items(items)
        try:
            request = ShippingRequest(
                country=address.country,
                state=address.state,
                postal_code=address.postal_code,
                total=total,
                weight=weight
            )
        except ValidationError as e:
            # Only reachable if schema bounds drift from ShippingRequest
            raise ShippingCalculationError(f"Could not build shipping request: {e}") from e
        return self.quote(request)


def get_shipping_service() -> ShippingService:
    return ShippingService()
