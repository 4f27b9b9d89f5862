"""Transaction coordination over a single provider family.

Drives process -> receipt -> optional refund, validates every state change
against the state machine and keeps a timeline of transitions.
"""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from paykit.common.errors import InvalidAmountError, PaykitError
from paykit.common.logging import logger, provider_ctx, transaction_id_ctx
from paykit.common.metrics import payment_fees_total, refunds_total, transactions_total
from paykit.common.money import require_positive, to_cents
from paykit.common.state_machine import TransactionState, validate_transition
from paykit.services.payments.models import (
    PaymentDetails,
    PaymentResult,
    Provider,
    Receipt,
    RefundResult,
)
from paykit.services.payments.providers import ProviderFamily
from paykit.services.payments.registry import ProviderRegistry


class TransitionRecord(BaseModel):
    """One entry of a transaction timeline."""

    model_config = ConfigDict(frozen=True)

    from_state: TransactionState
    to_state: TransactionState
    reason: str
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Transaction:
    """One payment run against exactly one `ProviderFamily`.

    The family is fixed at construction; receipt generation and refunds always go
    through that family's own components.
    """

    def __init__(self, family: ProviderFamily, amount: Decimal, details: PaymentDetails) -> None:
        self._family = family
        self.amount = to_cents(require_positive(amount))
        self.details = details
        self.state = TransactionState.IDLE
        self.timeline: list[TransitionRecord] = []
        self.payment: PaymentResult | None = None
        self.receipt: Receipt | None = None
        self.refund_result: RefundResult | None = None

    @property
    def provider(self) -> str:
        return self._family.name

    @property
    def transaction_id(self) -> str | None:
        return self.payment.transaction_id if self.payment else None

    def _transition(self, new_state: TransactionState, reason: str) -> None:
        validate_transition(self.state, new_state)
        self.timeline.append(TransitionRecord(from_state=self.state, to_state=new_state, reason=reason))
        logger.info(
            "transaction transition provider=%s from=%s to=%s reason=%s",
            self.provider,
            self.state.value,
            new_state.value,
            reason,
        )
        self.state = new_state

    def _fail(self, reason: str) -> None:
        self._transition(TransactionState.FAILED, reason)
        transactions_total.labels(provider=self.provider, outcome="failed").inc()

    def run(self) -> "Transaction":
        """Process the payment and, when it succeeds, issue the receipt.

        A component error moves the transaction to FAILED before it propagates.
        """

        self._transition(TransactionState.PROCESSING, "run_requested")
        provider_token = provider_ctx.set(self.provider)
        transaction_token = None
        try:
            self.payment = self._family.processor.process(self.amount, self.details)
            transaction_token = transaction_id_ctx.set(self.payment.transaction_id)
            if not self.payment.success:
                self._fail("payment_declined")
                return self
            self.receipt = self._family.generator.generate(self.payment)
            self._transition(TransactionState.RECEIPT_GENERATED, "receipt_generated")
            transactions_total.labels(provider=self.provider, outcome="succeeded").inc()
            payment_fees_total.labels(provider=self.provider).inc(float(self.payment.fee))
            return self
        except PaykitError as exc:
            if self.state is TransactionState.PROCESSING:
                logger.error("transaction processing failed provider=%s error=%s", self.provider, exc)
                self._fail("processing_error")
            raise
        finally:
            if transaction_token is not None:
                transaction_id_ctx.reset(transaction_token)
            provider_ctx.reset(provider_token)

    def refund(self, amount=None) -> RefundResult:
        """Refund part or all of the paid amount through the same family.

        A declined refund leaves the transaction in RECEIPT_GENERATED so the caller
        may try again.
        """

        validate_transition(self.state, TransactionState.REFUNDED)
        requested = self.payment.amount if amount is None else to_cents(require_positive(amount))
        if requested > self.payment.amount:
            raise InvalidAmountError(
                f"refund of {requested} exceeds the paid amount of {self.payment.amount}"
            )

        provider_token = provider_ctx.set(self.provider)
        transaction_token = transaction_id_ctx.set(self.payment.transaction_id)
        try:
            result = self._family.handler.refund(self.payment.transaction_id, requested)
            self.refund_result = result
            if not result.success:
                refunds_total.labels(provider=self.provider, outcome="failed").inc()
                logger.warning(
                    "refund declined provider=%s transaction_id=%s message=%s",
                    self.provider,
                    self.payment.transaction_id,
                    result.message,
                )
                return result
            self._transition(TransactionState.REFUNDED, "refund_completed")
            refunds_total.labels(provider=self.provider, outcome="succeeded").inc()
            return result
        finally:
            transaction_id_ctx.reset(transaction_token)
            provider_ctx.reset(provider_token)

    def summary_lines(self) -> list[str]:
        """Human-readable report of everything that happened so far."""

        lines = [f"========== {self.provider} Transaction =========="]
        if self.payment is None:
            lines.append("  Not processed")
        elif not self.payment.success:
            lines.append(f"  {self.payment.message}")
            lines.append(f"  Transaction ID: {self.payment.transaction_id}")
        else:
            lines += [
                f"  {self.payment.message}",
                f"  Transaction ID: {self.payment.transaction_id}",
                f"  Amount: ${self.payment.amount:.2f}",
                f"  Fee: ${self.payment.fee:.2f}",
            ]
        if self.receipt is not None:
            lines += [
                f"  Receipt generated ({self.receipt.format.value} format)",
                f"  Receipt ID: {self.receipt.receipt_id}",
                f"  Generated: {self.receipt.generated_at:%Y-%m-%d %H:%M:%S} UTC",
                self.receipt.content,
            ]
        if self.refund_result is not None:
            lines.append(f"  {self.refund_result.message}")
            if self.refund_result.success:
                lines.append(f"  Refund ID: {self.refund_result.refund_id}")
                lines.append(f"  Refunded Amount: ${self.refund_result.refunded_amount:.2f}")
        lines.append(f"  State: {self.state.value}")
        lines.append(f"========== End {self.provider} Transaction ==========")
        return lines


class TransactionCoordinator:
    """Resolves one family per transaction and hands it to a `Transaction`."""

    def __init__(self, registry: ProviderRegistry) -> None:
        self.registry = registry

    def run_transaction(self, provider_name: str | Provider, amount, details: PaymentDetails) -> Transaction:
        family = self.registry.resolve(provider_name)
        return Transaction(family, amount, details).run()
