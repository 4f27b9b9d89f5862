"""Charge a payment through a region's factory or the plain method catalogue."""

import argparse
from decimal import Decimal, InvalidOperation

from paykit.common.errors import PaykitError
from paykit.common.logging import configure_logging
from paykit.services.payments.methods import CheckoutService, PaymentMethodCatalog
from paykit.services.payments.models import PaymentDetails
from paykit.services.payments.regions import RegionSelector


def main() -> None:
    """CLI entrypoint; without --region the method catalogue is used."""

    parser = argparse.ArgumentParser(description="Process a payment by method, optionally per region.")
    parser.add_argument("--method", required=True)
    parser.add_argument("--amount", required=True)
    parser.add_argument("--region", default=None, help="US, EU, Asia or Canada")
    parser.add_argument("--customer-id", default="cust-1")
    parser.add_argument("--email", default="customer@example.com")
    args = parser.parse_args()

    configure_logging()
    try:
        amount = Decimal(args.amount)
    except InvalidOperation:
        raise SystemExit(f"Invalid amount: {args.amount}")
    details = PaymentDetails(customer_id=args.customer_id, customer_email=args.email)

    if args.region is None:
        for line in CheckoutService(PaymentMethodCatalog()).checkout(args.method, amount, details):
            print(line)
        return

    try:
        factory = RegionSelector().get(args.region)
        print(f"Supported: {', '.join(factory.supported_methods())}")
        result = factory.process_payment(args.method, amount, details)
    except PaykitError as exc:
        raise SystemExit(f"Error: {exc}")
    if result.success:
        print(f" {result.message}")
        print(f"  Transaction ID: {result.transaction_id}")
        print(f"  Fee: ${result.fee:.2f}")
    else:
        print(f" Payment failed: {result.message}")


if __name__ == "__main__":
    main()
