"""Standalone payment-method processors and the name -> processor catalogue."""

from decimal import Decimal

from paykit.common.errors import PaykitError, UnknownProviderError
from paykit.common.ids import IdGenerator, random_id
from paykit.common.logging import logger
from paykit.services.payments.models import PaymentDetails
from paykit.services.payments.providers import FeeScheduleProcessor, PaymentProcessor, RateCard

CREDIT_CARD = RateCard(provider="CreditCard", id_prefix="CC", percent_rate=Decimal("0.03"))
BKASH = RateCard(provider="BKash", id_prefix="BK")
BANK_TRANSFER = RateCard(
    provider="BankTransfer",
    id_prefix="BT",
    flat_fee=Decimal("2.50"),
    supports_refunds=False,
)
STRIPE_CARD = RateCard(
    provider="Stripe",
    id_prefix="stripe",
    percent_rate=Decimal("0.029"),
    flat_fee=Decimal("0.30"),
)
PAYPAL = RateCard(
    provider="PayPal",
    id_prefix="paypal",
    percent_rate=Decimal("0.034"),
    flat_fee=Decimal("0.30"),
)
VENMO = RateCard(provider="Venmo", id_prefix="venmo")
SOFORT = RateCard(provider="Sofort", id_prefix="sofort", percent_rate=Decimal("0.014"))
ALIPAY = RateCard(provider="Alipay", id_prefix="alipay", percent_rate=Decimal("0.006"))
INTERAC = RateCard(provider="Interac", id_prefix="interac", flat_fee=Decimal("1.00"))

DEFAULT_METHODS: dict[str, RateCard] = {
    "CreditCard": CREDIT_CARD,
    "BKash": BKASH,
    "BankTransfer": BANK_TRANSFER,
}


class PaymentMethodCatalog:
    """Maps a payment method name to its processor, ignoring case."""

    def __init__(self, methods: dict[str, RateCard] | None = None, ids: IdGenerator = random_id) -> None:
        cards = DEFAULT_METHODS if methods is None else methods
        self._names = list(cards)
        self._processors: dict[str, PaymentProcessor] = {
            name.casefold(): FeeScheduleProcessor(card, ids) for name, card in cards.items()
        }

    def get(self, method: str) -> PaymentProcessor:
        processor = self._processors.get((method or "").strip().casefold())
        if processor is None:
            raise UnknownProviderError(f"Invalid payment type: {method}")
        return processor

    def methods(self) -> list[str]:
        return list(self._names)


class CheckoutService:
    """Turns a checkout request into printable lines."""

    def __init__(self, catalog: PaymentMethodCatalog) -> None:
        self.catalog = catalog

    def checkout(self, method: str, amount, details: PaymentDetails) -> list[str]:
        try:
            processor = self.catalog.get(method)
            result = processor.process(amount, details)
        except PaykitError as exc:
            logger.warning("checkout rejected method=%s error=%s", method, exc)
            return [f"Error: {exc}"]

        if not result.success:
            return [f"Payment failed: {result.message}"]
        lines = [f"Payment Successful! Transaction ID: {result.transaction_id}, Fee: {result.fee:.2f}"]
        if not processor.supports_refunds:
            lines.append(f"Note: {processor.provider} payments cannot be refunded.")
        return lines
