"""Print the shipping cost for one order.

Uses the HTTP carrier when CARRIER_API_URL is set, the simulated one otherwise.
"""

import argparse
from decimal import Decimal, InvalidOperation

from paykit.common.config import settings
from paykit.common.logging import configure_logging
from paykit.common.startup import log_startup_config
from paykit.services.shipping.carrier import carrier_client_from_settings
from paykit.services.shipping.checkout import CheckoutProcessor, ShippingStrategyFactory


def _non_negative(label: str, raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise SystemExit(f"Invalid {label}")
    if not value.is_finite() or value < 0:
        raise SystemExit(f"Invalid {label}")
    return value


def main() -> None:
    """CLI entrypoint for one shipping quote."""

    parser = argparse.ArgumentParser(description="Quote shipping for an order.")
    parser.add_argument(
        "--shipping-type",
        required=True,
        help="Standard, Express, International, SameDay or Overnight",
    )
    parser.add_argument("--weight", required=True, help="Weight in kg")
    parser.add_argument("--order-value", required=True)
    args = parser.parse_args()

    configure_logging()
    log_startup_config(
        settings,
        ["carrier_api_url", "carrier_api_key", "carrier_timeout_seconds", "carrier_simulated_delay_seconds"],
    )

    weight = _non_negative("weight", args.weight)
    order_value = _non_negative("order value", args.order_value)
    processor = CheckoutProcessor(ShippingStrategyFactory(carrier_client_from_settings()))
    for line in processor.execute(args.shipping_type, weight, order_value):
        print(line)


if __name__ == "__main__":
    main()
