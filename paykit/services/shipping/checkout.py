"""Shipping strategy selection and the checkout boundary that prints quotes."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from paykit.common.errors import (
    CarrierRateError,
    InvalidInputError,
    UnknownProviderError,
    UnsupportedOperationError,
)
from paykit.common.logging import logger
from paykit.common.metrics import shipping_quotes_total
from paykit.services.shipping.carrier import CarrierClient
from paykit.services.shipping.strategies import (
    ExpressShipping,
    InternationalShipping,
    OvernightShipping,
    SameDayShipping,
    ShippingStrategy,
    StandardShipping,
)


class ShippingQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    shipping_type: str
    weight: Decimal
    order_value: Decimal
    cost: Decimal


class ShippingStrategyFactory:
    """Builds every strategy once and hands out the shared instances."""

    def __init__(self, carrier: CarrierClient) -> None:
        if carrier is None:
            raise ValueError("carrier client is required")
        self._strategies: dict[str, ShippingStrategy] = {
            "standard": StandardShipping(),
            "express": ExpressShipping(carrier),
            "international": InternationalShipping(),
            "sameday": SameDayShipping(),
            "overnight": OvernightShipping(),
        }

    def get(self, shipping_type: str) -> ShippingStrategy:
        strategy = self._strategies.get((shipping_type or "").strip().casefold())
        if strategy is None:
            raise UnknownProviderError(f"Invalid shipping type: {shipping_type}")
        return strategy

    def shipping_types(self) -> list[str]:
        return ["Standard", "Express", "International", "SameDay", "Overnight"]


class CheckoutProcessor:
    def __init__(self, factory: ShippingStrategyFactory) -> None:
        self.factory = factory

    def quote(self, shipping_type: str, weight, order_value) -> ShippingQuote:
        strategy = self.factory.get(shipping_type)
        try:
            cost = strategy.calculate(weight, order_value)
        except Exception:
            shipping_quotes_total.labels(strategy=strategy.name, outcome="rejected").inc()
            raise
        shipping_quotes_total.labels(strategy=strategy.name, outcome="quoted").inc()
        return ShippingQuote(
            shipping_type=strategy.name,
            weight=Decimal(str(weight)),
            order_value=Decimal(str(order_value)),
            cost=cost,
        )

    def execute(self, shipping_type: str, weight, order_value) -> list[str]:
        """Quote and render as text; known failures become an `Error:` line."""

        try:
            quote = self.quote(shipping_type, weight, order_value)
        except (
            UnknownProviderError,
            UnsupportedOperationError,
            InvalidInputError,
            CarrierRateError,
        ) as exc:
            logger.warning("shipping quote rejected shipping_type=%s error=%s", shipping_type, exc)
            return [f"Error: {exc}"]
        return [f"Shipping Cost: ${quote.cost:.2f}"]
