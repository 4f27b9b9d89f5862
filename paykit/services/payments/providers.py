"""Provider families: processors, receipt generators and refund handlers.

Each provider ships three components that only work with each other. A
`ProviderFamily` bundles them and refuses to be built from mixed providers, so
whoever holds a family can never combine, say, a Stripe payment with a PayPal
receipt.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from pydantic import BaseModel, ConfigDict

from paykit.common.errors import FamilyMismatchError, InvalidAmountError, UnsupportedOperationError
from paykit.common.ids import IdGenerator, random_id
from paykit.common.logging import logger
from paykit.common.money import require_positive, to_cents
from paykit.services.payments.models import (
    PaymentDetails,
    PaymentResult,
    Provider,
    Receipt,
    ReceiptFormat,
    RefundResult,
)

FORCE_DECLINE_PREFIX = "force-decline"


class RateCard(BaseModel):
    """Fee schedule of one processor: `amount * percent_rate + flat_fee`."""

    model_config = ConfigDict(frozen=True)

    provider: str
    id_prefix: str
    percent_rate: Decimal = Decimal("0")
    flat_fee: Decimal = Decimal("0")
    supports_refunds: bool = True
    success_message: str = ""


class PaymentProcessor(ABC):
    """Charges an amount and reports the fee and transaction id."""

    provider: str
    supports_refunds: bool

    @abstractmethod
    def process(self, amount, details: PaymentDetails) -> PaymentResult:
        ...


class FeeScheduleProcessor(PaymentProcessor):
    """Processor whose only behavior is its rate card.

    Customer ids starting with `force-decline` are declined so failure paths can be
    exercised without a real gateway.
    """

    def __init__(self, card: RateCard, ids: IdGenerator = random_id) -> None:
        self.card = card
        self.ids = ids

    @property
    def provider(self) -> str:
        return self.card.provider

    @property
    def supports_refunds(self) -> bool:
        return self.card.supports_refunds

    def fee_for(self, amount: Decimal) -> Decimal:
        return to_cents(amount * self.card.percent_rate + self.card.flat_fee)

    def process(self, amount, details: PaymentDetails) -> PaymentResult:
        amount = to_cents(require_positive(amount))
        transaction_id = self.ids(self.card.id_prefix)
        logger.info(
            "processing payment provider=%s transaction_id=%s amount=%s customer=%s",
            self.provider,
            transaction_id,
            amount,
            details.customer_email or details.customer_id,
        )

        if details.customer_id.lower().startswith(FORCE_DECLINE_PREFIX):
            logger.warning("payment declined provider=%s transaction_id=%s", self.provider, transaction_id)
            return PaymentResult(
                success=False,
                provider=self.provider,
                transaction_id=transaction_id,
                amount=amount,
                fee=Decimal("0.00"),
                message=f"Payment declined by {self.provider}",
            )

        return PaymentResult(
            success=True,
            provider=self.provider,
            transaction_id=transaction_id,
            amount=amount,
            fee=self.fee_for(amount),
            message=self.card.success_message or f"Payment processed via {self.provider}",
        )


class ReceiptGenerator(ABC):
    """Renders a successful `PaymentResult` in the provider's own format."""

    provider: str
    format: ReceiptFormat
    id_prefix: str

    def __init__(self, ids: IdGenerator = random_id) -> None:
        self.ids = ids

    @abstractmethod
    def render(self, result: PaymentResult) -> str:
        ...

    def generate(self, result: PaymentResult) -> Receipt:
        if result.provider != self.provider:
            raise FamilyMismatchError(
                f"{self.provider} cannot issue a receipt for a {result.provider} payment"
            )
        if not result.success:
            raise UnsupportedOperationError(
                f"no receipt for failed transaction {result.transaction_id}"
            )
        logger.info(
            "generating receipt provider=%s transaction_id=%s format=%s",
            self.provider,
            result.transaction_id,
            self.format.value,
        )
        return Receipt(
            receipt_id=self.ids(self.id_prefix),
            provider=self.provider,
            transaction_id=result.transaction_id,
            format=self.format,
            content=self.render(result),
        )


class StripeReceiptGenerator(ReceiptGenerator):
    provider = Provider.STRIPE.value
    format = ReceiptFormat.PLAIN_TEXT
    id_prefix = "stripe_rcpt"

    def render(self, result: PaymentResult) -> str:
        return (
            f"Stripe Receipt for Transaction {result.transaction_id}, "
            f"Amount: ${result.amount:.2f}, Fee: ${result.fee:.2f}"
        )


class PayPalReceiptGenerator(ReceiptGenerator):
    provider = Provider.PAYPAL.value
    format = ReceiptFormat.STRUCTURED_MARKUP
    id_prefix = "paypal_rcpt"

    def render(self, result: PaymentResult) -> str:
        # Amounts stay strings so the document never loses decimal precision.
        return json.dumps(
            {
                "provider": self.provider,
                "transactionId": result.transaction_id,
                "amount": f"{result.amount:.2f}",
                "fee": f"{result.fee:.2f}",
                "status": result.message,
            },
            indent=2,
        )


class BankTransferReceiptGenerator(ReceiptGenerator):
    provider = Provider.BANK_TRANSFER.value
    format = ReceiptFormat.TAGGED_DATA
    id_prefix = "bank_rcpt"

    def render(self, result: PaymentResult) -> str:
        rule = "=" * 33
        lines = [
            rule,
            "BANK TRANSFER RECEIPT",
            rule,
            f"Provider: {self.provider}",
            f"Transaction ID: {result.transaction_id}",
            f"Amount: ${result.amount:.2f}",
            f"Processing Fee: ${result.fee:.2f}",
            f"Total Charged: ${result.amount + result.fee:.2f}",
            f"Status: {result.message}",
            "Expected Completion: 2-3 business days",
            rule,
        ]
        return "\n".join(lines)


class RefundHandler(ABC):
    """Returns money for a transaction, minus the provider's refund fee.

    There is no real gateway behind a handler. Passing `failure_reason` makes every
    refund report failure with that message.
    """

    provider: str
    id_prefix: str
    refund_fee: Decimal = Decimal("0.00")

    def __init__(self, ids: IdGenerator = random_id, failure_reason: str | None = None) -> None:
        self.ids = ids
        self.failure_reason = failure_reason

    @abstractmethod
    def success_message(self) -> str:
        ...

    def refund(self, transaction_id: str, amount) -> RefundResult:
        amount = to_cents(require_positive(amount))
        if amount <= self.refund_fee:
            raise InvalidAmountError(
                f"refund of {amount} does not cover the {self.provider} refund fee of {self.refund_fee}"
            )
        refund_id = self.ids(self.id_prefix)
        logger.info(
            "handling refund provider=%s transaction_id=%s refund_id=%s amount=%s",
            self.provider,
            transaction_id,
            refund_id,
            amount,
        )

        if self.failure_reason is not None:
            logger.warning(
                "refund rejected provider=%s transaction_id=%s reason=%s",
                self.provider,
                transaction_id,
                self.failure_reason,
            )
            return RefundResult(
                success=False,
                provider=self.provider,
                refund_id=refund_id,
                transaction_id=transaction_id,
                refunded_amount=Decimal("0.00"),
                message=self.failure_reason,
            )

        return RefundResult(
            success=True,
            provider=self.provider,
            refund_id=refund_id,
            transaction_id=transaction_id,
            refunded_amount=amount - self.refund_fee,
            message=self.success_message(),
        )


class StripeRefundHandler(RefundHandler):
    provider = Provider.STRIPE.value
    id_prefix = "stripe_refund"

    def success_message(self) -> str:
        return "Refund processed successfully via Stripe."


class PayPalRefundHandler(RefundHandler):
    provider = Provider.PAYPAL.value
    id_prefix = "paypal_refund"
    refund_fee = Decimal("0.30")

    def success_message(self) -> str:
        return f"Refund processed (${self.refund_fee:.2f} fee applied)"


class BankTransferRefundHandler(RefundHandler):
    provider = Provider.BANK_TRANSFER.value
    id_prefix = "bank_refund"

    def success_message(self) -> str:
        return "Refund will be processed in 5-7 business days"


@dataclass(frozen=True)
class ProviderFamily:
    """Processor, receipt generator and refund handler of one provider."""

    name: str
    processor: PaymentProcessor
    generator: ReceiptGenerator
    handler: RefundHandler

    def __post_init__(self) -> None:
        members = {
            "processor": self.processor.provider,
            "generator": self.generator.provider,
            "handler": self.handler.provider,
        }
        mismatched = {role: provider for role, provider in members.items() if provider != self.name}
        if mismatched:
            raise FamilyMismatchError(f"{self.name} family cannot include components from {mismatched}")


STRIPE_RATE_CARD = RateCard(
    provider=Provider.STRIPE.value,
    id_prefix="stripe",
    percent_rate=Decimal("0.02"),
    flat_fee=Decimal("0.30"),
    success_message="Payment processed successfully via Stripe.",
)
PAYPAL_RATE_CARD = RateCard(
    provider=Provider.PAYPAL.value,
    id_prefix="paypal",
    percent_rate=Decimal("0.034"),
    flat_fee=Decimal("0.30"),
    success_message="Payment successful via PayPal",
)
BANK_TRANSFER_RATE_CARD = RateCard(
    provider=Provider.BANK_TRANSFER.value,
    id_prefix="bank",
    flat_fee=Decimal("5.00"),
    success_message="Bank transfer initiated (2-3 business days)",
)


def stripe_family(ids: IdGenerator = random_id, refund_failure: str | None = None) -> ProviderFamily:
    return ProviderFamily(
        name=Provider.STRIPE.value,
        processor=FeeScheduleProcessor(STRIPE_RATE_CARD, ids),
        generator=StripeReceiptGenerator(ids),
        handler=StripeRefundHandler(ids, refund_failure),
    )


def paypal_family(ids: IdGenerator = random_id, refund_failure: str | None = None) -> ProviderFamily:
    return ProviderFamily(
        name=Provider.PAYPAL.value,
        processor=FeeScheduleProcessor(PAYPAL_RATE_CARD, ids),
        generator=PayPalReceiptGenerator(ids),
        handler=PayPalRefundHandler(ids, refund_failure),
    )


def bank_transfer_family(ids: IdGenerator = random_id, refund_failure: str | None = None) -> ProviderFamily:
    return ProviderFamily(
        name=Provider.BANK_TRANSFER.value,
        processor=FeeScheduleProcessor(BANK_TRANSFER_RATE_CARD, ids),
        generator=BankTransferReceiptGenerator(ids),
        handler=BankTransferRefundHandler(ids, refund_failure),
    )


FAMILY_FACTORIES: dict[Provider, Callable[..., ProviderFamily]] = {
    Provider.STRIPE: stripe_family,
    Provider.PAYPAL: paypal_family,
    Provider.BANK_TRANSFER: bank_transfer_family,
}
