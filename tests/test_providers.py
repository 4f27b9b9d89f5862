"""Processor fees, receipt rendering and refund handling per provider family."""

import json
import re
from decimal import Decimal

import pytest

from paykit.common.errors import FamilyMismatchError, InvalidAmountError, UnsupportedOperationError
from paykit.services.payments.models import ReceiptFormat
from paykit.services.payments.providers import (
    PayPalRefundHandler,
    StripeReceiptGenerator,
    bank_transfer_family,
    paypal_family,
    stripe_family,
)


def test_stripe_fee_scenario(ids, details):
    """100.00 through Stripe costs 100 * 2% + 0.30 = 2.30."""

    result = stripe_family(ids).processor.process(Decimal("100.00"), details)
    assert result.success
    assert result.fee == Decimal("2.30")
    assert result.amount == Decimal("100.00")
    assert result.transaction_id == "stripe_0001"
    assert result.provider == "Stripe"


@pytest.mark.parametrize(
    "family, amount, fee",
    [
        (stripe_family, "33.33", "0.97"),
        (paypal_family, "150.00", "5.40"),
        (paypal_family, "10", "0.64"),
        (bank_transfer_family, "250.00", "5.00"),
        (bank_transfer_family, "0.01", "5.00"),
    ],
)
def test_fee_formulas(ids, details, family, amount, fee):
    """Fees follow each provider's formula, rounded to cents."""

    result = family(ids).processor.process(Decimal(amount), details)
    assert result.fee == Decimal(fee)


def test_fee_is_reproducible(details):
    """Same amount, same fee; only the transaction id changes."""

    processor = paypal_family().processor
    first = processor.process(Decimal("87.65"), details)
    second = processor.process(Decimal("87.65"), details)
    assert first.fee == second.fee
    assert first.transaction_id != second.transaction_id


def test_default_transaction_id_shape(details):
    """Without an injected generator ids are `<prefix>_<32 hex>`."""

    result = bank_transfer_family().processor.process(Decimal("10"), details)
    assert re.fullmatch(r"bank_[0-9a-f]{32}", result.transaction_id)


@pytest.mark.parametrize("amount", [0, -5, "abc", float("nan"), None])
def test_processor_rejects_invalid_amount(ids, details, amount):
    """Amounts must be positive numbers."""

    with pytest.raises(InvalidAmountError):
        stripe_family(ids).processor.process(amount, details)


def test_forced_decline(ids, declined_details):
    """Customer ids starting with force-decline are declined with no fee."""

    result = paypal_family(ids).processor.process(Decimal("20"), declined_details)
    assert not result.success
    assert result.fee == Decimal("0.00")
    assert "declined" in result.message


@pytest.mark.parametrize(
    "family, receipt_format",
    [
        (stripe_family, ReceiptFormat.PLAIN_TEXT),
        (paypal_family, ReceiptFormat.STRUCTURED_MARKUP),
        (bank_transfer_family, ReceiptFormat.TAGGED_DATA),
    ],
)
def test_receipt_contains_payment_facts(ids, details, family, receipt_format):
    """Every receipt names provider, transaction id, amount and fee."""

    fam = family(ids)
    result = fam.processor.process(Decimal("123.45"), details)
    receipt = fam.generator.generate(result)

    assert receipt.format is receipt_format
    assert receipt.transaction_id == result.transaction_id
    assert result.transaction_id in receipt.content
    assert "123.45" in receipt.content
    assert f"{result.fee:.2f}" in receipt.content
    assert fam.name in receipt.content
    assert receipt.receipt_id != result.transaction_id


def test_paypal_receipt_is_json(ids, details):
    """PayPal receipts parse as a JSON document."""

    fam = paypal_family(ids)
    result = fam.processor.process(Decimal("150"), details)
    document = json.loads(fam.generator.generate(result).content)
    assert document == {
        "provider": "PayPal",
        "transactionId": "paypal_0001",
        "amount": "150.00",
        "fee": "5.40",
        "status": "Payment successful via PayPal",
    }


def test_bank_receipt_shows_total_charged(ids, details):
    """Bank transfer receipts add the flat fee to the total."""

    fam = bank_transfer_family(ids)
    receipt = fam.generator.generate(fam.processor.process(Decimal("250"), details))
    assert "Total Charged: $255.00" in receipt.content
    assert "Expected Completion: 2-3 business days" in receipt.content


def test_receipt_refuses_other_provider(ids, details):
    """A Stripe generator cannot render a PayPal payment."""

    result = paypal_family(ids).processor.process(Decimal("10"), details)
    with pytest.raises(FamilyMismatchError):
        StripeReceiptGenerator(ids).generate(result)


def test_receipt_refuses_failed_payment(ids, declined_details):
    """No receipt for a declined payment."""

    fam = stripe_family(ids)
    result = fam.processor.process(Decimal("10"), declined_details)
    with pytest.raises(UnsupportedOperationError):
        fam.generator.generate(result)


@pytest.mark.parametrize(
    "family, refunded",
    [(stripe_family, "150.00"), (paypal_family, "149.70"), (bank_transfer_family, "150.00")],
)
def test_refund_amounts(ids, family, refunded):
    """PayPal keeps a 0.30 refund fee, the others refund in full."""

    result = family(ids).handler.refund("txn_1", Decimal("150.00"))
    assert result.success
    assert result.refunded_amount == Decimal(refunded)
    assert result.transaction_id == "txn_1"


def test_refund_rejects_non_positive_amount(ids):
    """Refund amount must be positive."""

    with pytest.raises(InvalidAmountError):
        stripe_family(ids).handler.refund("txn_1", Decimal("0"))


def test_refund_must_cover_fee(ids):
    """A PayPal refund no larger than its fee is rejected."""

    with pytest.raises(InvalidAmountError):
        PayPalRefundHandler(ids).refund("txn_1", Decimal("0.30"))


def test_injected_refund_failure(ids):
    """A handler built with a failure reason reports that failure."""

    handler = paypal_family(ids, refund_failure="gateway unavailable").handler
    result = handler.refund("txn_1", Decimal("10"))
    assert not result.success
    assert result.message == "gateway unavailable"
    assert result.refunded_amount == Decimal("0.00")
