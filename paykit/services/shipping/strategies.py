"""Shipping cost strategies.

Cost is a pure function of weight and order value; strategies that do not need
one of them simply ignore it.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from paykit.common.errors import InvalidInputError, UnsupportedOperationError
from paykit.common.money import require_non_negative, to_cents
from paykit.services.shipping.carrier import CarrierClient


class ShippingStrategy(ABC):
    name: str

    def calculate(self, weight, order_value) -> Decimal:
        weight = require_non_negative(weight, "weight", InvalidInputError)
        order_value = require_non_negative(order_value, "order value", InvalidInputError)
        return to_cents(self._cost(weight, order_value))

    @abstractmethod
    def _cost(self, weight: Decimal, order_value: Decimal) -> Decimal:
        ...


class StandardShipping(ShippingStrategy):
    name = "Standard"

    def _cost(self, weight: Decimal, order_value: Decimal) -> Decimal:
        return Decimal("5")


class ExpressShipping(ShippingStrategy):
    """Priced from the carrier's live express rate."""

    name = "Express"

    def __init__(self, carrier: CarrierClient) -> None:
        if carrier is None:
            raise ValueError("carrier client is required")
        self.carrier = carrier

    def _cost(self, weight: Decimal, order_value: Decimal) -> Decimal:
        rate = self.carrier.get_express_rate(weight)
        return rate.base_cost + rate.per_kg_cost * weight


class InternationalShipping(ShippingStrategy):
    name = "International"

    def _cost(self, weight: Decimal, order_value: Decimal) -> Decimal:
        return Decimal("30") + Decimal("5") * weight + order_value * Decimal("0.1")


class WeightCappedShipping(ShippingStrategy):
    """Flat price, refused at or above `max_weight`."""

    flat_cost: Decimal
    max_weight: Decimal

    def _cost(self, weight: Decimal, order_value: Decimal) -> Decimal:
        if weight >= self.max_weight:
            raise UnsupportedOperationError(
                f"{self.name} shipping is not available for orders {self.max_weight}kg or heavier"
            )
        return self.flat_cost


class SameDayShipping(WeightCappedShipping):
    name = "Same-day"
    flat_cost = Decimal("25")
    max_weight = Decimal("10")


class OvernightShipping(WeightCappedShipping):
    name = "Overnight"
    flat_cost = Decimal("20")
    max_weight = Decimal("5")
