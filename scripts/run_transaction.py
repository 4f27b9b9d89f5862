"""Run one payment through a provider family and print the transaction report.

Useful for eyeballing receipt formats and refund fees per provider.
"""

import argparse
from decimal import Decimal, InvalidOperation

from paykit.common.config import settings
from paykit.common.errors import PaykitError
from paykit.common.logging import configure_logging
from paykit.common.startup import log_startup_config
from paykit.services.payments.coordinator import TransactionCoordinator
from paykit.services.payments.models import PaymentDetails
from paykit.services.payments.registry import build_default_registry


def main() -> None:
    """Parse CLI args, run the transaction, optionally refund it."""

    registry = build_default_registry()
    parser = argparse.ArgumentParser(description="Process a payment through one provider family.")
    parser.add_argument("--provider", required=True, help=f"One of {registry.providers()}")
    parser.add_argument("--amount", required=True)
    parser.add_argument("--customer-id", default="cust-1")
    parser.add_argument("--email", default="john.doe@example.com")
    parser.add_argument("--name", default=None)
    parser.add_argument("--refund", action="store_true", help="Refund the full amount afterwards")
    args = parser.parse_args()

    configure_logging()
    log_startup_config(settings, ["service_name", "log_level"])

    try:
        amount = Decimal(args.amount)
    except InvalidOperation:
        raise SystemExit(f"Invalid amount: {args.amount}")

    details = PaymentDetails(
        customer_id=args.customer_id,
        customer_email=args.email,
        customer_name=args.name,
    )
    coordinator = TransactionCoordinator(registry)
    try:
        transaction = coordinator.run_transaction(args.provider, amount, details)
        if args.refund and transaction.receipt is not None:
            transaction.refund()
    except PaykitError as exc:
        raise SystemExit(f"Error: {exc}")

    print("\n".join(transaction.summary_lines()))


if __name__ == "__main__":
    main()
